from pydantic import BaseModel, constr
from typing import Optional
from datetime import datetime


class CategoryBase(BaseModel):
    name: constr(strip_whitespace=True, min_length=2, max_length=100)


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(CategoryBase):
    pass


class Category(CategoryBase):
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CategoryWithCount(Category):
    artwork_count: int = 0
