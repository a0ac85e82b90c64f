from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func

from storefront.models.category import Category as CategoryModel
from storefront.models.artwork import Artwork as ArtworkModel
from storefront.schemas.category import CategoryCreate, CategoryUpdate

DEFAULT_CATEGORIES = ["Paintings", "Bookmarks", "Handbands", "Badges", "Clay Work"]


async def get_category(db: AsyncSession, category_id: int) -> CategoryModel | None:
    result = await db.execute(select(CategoryModel).filter(CategoryModel.id == category_id))
    return result.scalars().first()


async def get_category_by_name(db: AsyncSession, *, name: str) -> CategoryModel | None:
    result = await db.execute(select(CategoryModel).filter(CategoryModel.name == name))
    return result.scalars().first()


async def get_categories_with_counts(db: AsyncSession) -> list[dict]:
    """
    All categories ordered by name, each with the number of artworks filed under it.
    """
    query = (
        select(CategoryModel, func.count(ArtworkModel.id).label("artwork_count"))
        .outerjoin(ArtworkModel, ArtworkModel.category_id == CategoryModel.id)
        .group_by(CategoryModel.id)
        .order_by(CategoryModel.name)
    )
    result = await db.execute(query)
    return [
        {"id": c.id, "name": c.name, "created_at": c.created_at, "artwork_count": count}
        for c, count in result.all()
    ]


async def count_artworks(db: AsyncSession, *, category_id: int) -> int:
    result = await db.execute(
        select(func.count(ArtworkModel.id)).filter(ArtworkModel.category_id == category_id)
    )
    return result.scalar_one() or 0


async def create_category(db: AsyncSession, *, obj_in: CategoryCreate) -> CategoryModel:
    db_obj = CategoryModel(name=obj_in.name)
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def update_category(db: AsyncSession, *, db_obj: CategoryModel, obj_in: CategoryUpdate) -> CategoryModel:
    db_obj.name = obj_in.name
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def delete_category(db: AsyncSession, *, db_obj: CategoryModel) -> CategoryModel:
    await db.delete(db_obj)
    await db.commit()
    return db_obj


async def seed_default_categories(db: AsyncSession) -> int:
    """
    Insert the default categories when the table is empty. Returns how many were added.
    """
    existing = await db.execute(select(func.count(CategoryModel.id)))
    if existing.scalar_one():
        return 0
    for name in DEFAULT_CATEGORIES:
        db.add(CategoryModel(name=name))
    await db.commit()
    return len(DEFAULT_CATEGORIES)
