from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import update
from typing import Any, Optional

from storefront.models.artwork import Artwork as ArtworkModel
from storefront.models.category import Category as CategoryModel
from storefront.models.order import Order as OrderModel


async def get_artwork(db: AsyncSession, artwork_id: int) -> ArtworkModel | None:
    """
    Get a single artwork by ID. Category and artist are joined eagerly.
    """
    result = await db.execute(select(ArtworkModel).filter(ArtworkModel.id == artwork_id))
    return result.scalars().first()


async def get_artworks(
    db: AsyncSession,
    *,
    category: Optional[str] = None,
    artist_id: Optional[int] = None,
) -> list[ArtworkModel]:
    """
    Artworks newest first, optionally filtered by category name and/or artist.
    """
    query = select(ArtworkModel)
    if category:
        query = query.join(CategoryModel, ArtworkModel.category_id == CategoryModel.id).filter(
            CategoryModel.name == category
        )
    if artist_id is not None:
        query = query.filter(ArtworkModel.artist_id == artist_id)
    query = query.order_by(ArtworkModel.created_at.desc(), ArtworkModel.id.desc())
    result = await db.execute(query)
    return result.scalars().all()


async def create_artwork(
    db: AsyncSession, *, data: dict[str, Any], category_id: int, photos: list[dict]
) -> ArtworkModel:
    """
    Insert an artwork. 'photos' is the ordered list of {url, label, public_id} already uploaded.
    """
    db_obj = ArtworkModel(**data, category_id=category_id, photos=photos)
    db.add(db_obj)
    await db.commit()
    db.expunge(db_obj)
    # Re-fetch so category and artist come back joined
    return await get_artwork(db, db_obj.id)


async def update_artwork(db: AsyncSession, *, db_obj: ArtworkModel, update_data: dict[str, Any]) -> ArtworkModel:
    for field, value in update_data.items():
        setattr(db_obj, field, value)
    db.add(db_obj)
    await db.commit()
    db.expunge(db_obj)
    return await get_artwork(db, db_obj.id)


async def delete_artwork(db: AsyncSession, *, db_obj: ArtworkModel) -> ArtworkModel:
    # Orders keep their row; their artwork reference is cleared
    await db.execute(
        update(OrderModel)
        .where(OrderModel.artwork_id == db_obj.id)
        .values(artwork_id=None)
        .execution_options(synchronize_session=False)
    )
    await db.delete(db_obj)
    await db.commit()
    return db_obj
