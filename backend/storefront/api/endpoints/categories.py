from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, List
import logging

from storefront import crud, schemas
from storefront.db.session import get_db
from storefront.api import deps

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[schemas.CategoryWithCount])
async def read_categories(db: AsyncSession = Depends(get_db)) -> Any:
    """
    All categories ordered by name, with artwork counts.
    """
    return await crud.category.get_categories_with_counts(db)


@router.get("/{category_id}", response_model=schemas.Category)
async def read_category(category_id: int, db: AsyncSession = Depends(get_db)) -> Any:
    category = await crud.category.get_category(db, category_id=category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    return category


@router.get("/{category_id}/stats", response_model=schemas.CategoryWithCount)
async def read_category_stats(category_id: int, db: AsyncSession = Depends(get_db)) -> Any:
    category = await crud.category.get_category(db, category_id=category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    count = await crud.category.count_artworks(db, category_id=category_id)
    return schemas.CategoryWithCount(id=category.id, name=category.name, created_at=category.created_at, artwork_count=count)


@router.post("/", response_model=schemas.Category, status_code=status.HTTP_201_CREATED)
async def create_category(
    *,
    db: AsyncSession = Depends(get_db),
    category_in: schemas.CategoryCreate,
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    existing = await crud.category.get_category_by_name(db, name=category_in.name)
    if existing:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category already exists")
    category = await crud.category.create_category(db=db, obj_in=category_in)
    logger.info(f"Category '{category.name}' created by admin {current_admin.sub}")
    return category


@router.put("/{category_id}", response_model=schemas.Category)
async def update_category(
    category_id: int,
    *,
    db: AsyncSession = Depends(get_db),
    category_in: schemas.CategoryUpdate,
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    category = await crud.category.get_category(db, category_id=category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    existing = await crud.category.get_category_by_name(db, name=category_in.name)
    if existing and existing.id != category_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Category name already exists")
    return await crud.category.update_category(db=db, db_obj=category, obj_in=category_in)


@router.delete("/{category_id}", response_model=schemas.MessageResponse)
async def delete_category(
    category_id: int,
    *,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    category = await crud.category.get_category(db, category_id=category_id)
    if not category:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Category not found")
    count = await crud.category.count_artworks(db, category_id=category_id)
    if count > 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot delete category. {count} artwork(s) are using this category.",
        )
    await crud.category.delete_category(db=db, db_obj=category)
    logger.info(f"Category {category_id} deleted by admin {current_admin.sub}")
    return {"message": "Category deleted successfully"}
