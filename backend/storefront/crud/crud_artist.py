from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func, update

from storefront.models.artist import Artist as ArtistModel
from storefront.models.artwork import Artwork as ArtworkModel
from storefront.schemas.artist import ArtistCreate, ArtistUpdate


async def get_artist(db: AsyncSession, artist_id: int) -> ArtistModel | None:
    result = await db.execute(select(ArtistModel).filter(ArtistModel.id == artist_id))
    return result.scalars().first()


async def get_artist_by_name(db: AsyncSession, *, name: str) -> ArtistModel | None:
    result = await db.execute(select(ArtistModel).filter(ArtistModel.name == name))
    return result.scalars().first()


async def get_artists_with_counts(db: AsyncSession) -> list[tuple[ArtistModel, int]]:
    """
    Artists newest first, each paired with its artwork count.
    """
    query = (
        select(ArtistModel, func.count(ArtworkModel.id).label("artwork_count"))
        .outerjoin(ArtworkModel, ArtworkModel.artist_id == ArtistModel.id)
        .group_by(ArtistModel.id)
        .order_by(ArtistModel.created_at.desc(), ArtistModel.id.desc())
    )
    result = await db.execute(query)
    return [(artist, count) for artist, count in result.all()]


async def create_artist(
    db: AsyncSession, *, obj_in: ArtistCreate, profile_image_url: str | None = None
) -> ArtistModel:
    db_obj = ArtistModel(**obj_in.model_dump(), profile_image_url=profile_image_url)
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def update_artist(
    db: AsyncSession, *, db_obj: ArtistModel, obj_in: ArtistUpdate, profile_image_url: str | None = None
) -> ArtistModel:
    """
    Partial update. Only fields present in the request are written;
    'profile_image_url' replaces the stored image when given.
    """
    update_data = obj_in.model_dump(exclude_unset=True)
    if update_data.get("name") is None:
        update_data.pop("name", None)  # name is NOT NULL
    for field, value in update_data.items():
        setattr(db_obj, field, value)
    if profile_image_url:
        db_obj.profile_image_url = profile_image_url

    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def delete_artist(db: AsyncSession, *, db_obj: ArtistModel) -> ArtistModel:
    """
    Detach the artist's artworks (artist_id -> NULL) and delete the artist in one transaction.
    """
    await db.execute(
        update(ArtworkModel)
        .where(ArtworkModel.artist_id == db_obj.id)
        .values(artist_id=None)
        .execution_options(synchronize_session=False)
    )
    await db.delete(db_obj)
    await db.commit()
    return db_obj
