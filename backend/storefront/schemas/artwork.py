from pydantic import BaseModel, Field, constr
from typing import Optional, List
from datetime import datetime


class Photo(BaseModel):
    url: str
    label: Optional[str] = None
    public_id: Optional[str] = None


class ArtworkBase(BaseModel):
    title: constr(strip_whitespace=True, min_length=1, max_length=255)
    description: Optional[str] = None
    medium: Optional[constr(max_length=100)] = None
    dimensions: Optional[constr(max_length=100)] = None
    year: Optional[constr(max_length=10)] = None
    price: constr(strip_whitespace=True, min_length=1, max_length=50)  # Display string, e.g. "₹1,200"


# Scalar fields of a multipart create; photos travel separately as files
class ArtworkCreate(ArtworkBase):
    category: constr(strip_whitespace=True, min_length=1, max_length=100)  # Category name
    artist_id: Optional[int] = None


class ArtworkUpdate(BaseModel):  # All fields optional for update
    title: Optional[constr(strip_whitespace=True, min_length=1, max_length=255)] = None
    description: Optional[str] = None
    medium: Optional[constr(max_length=100)] = None
    dimensions: Optional[constr(max_length=100)] = None
    year: Optional[constr(max_length=10)] = None
    price: Optional[constr(strip_whitespace=True, min_length=1, max_length=50)] = None
    category: Optional[constr(strip_whitespace=True, min_length=1, max_length=100)] = None
    artist_id: Optional[int] = None


class Artwork(ArtworkBase):
    id: int
    photos: List[Photo] = Field(default_factory=list)
    category_id: Optional[int] = None
    category: Optional[str] = None  # Category name
    artist_id: Optional[int] = None
    artist_name: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_orm_artwork(cls, artwork) -> "Artwork":
        """Flattens the joined category and artist rows into display names."""
        return cls(
            id=artwork.id,
            title=artwork.title,
            description=artwork.description,
            medium=artwork.medium,
            dimensions=artwork.dimensions,
            year=artwork.year,
            price=artwork.price,
            photos=artwork.photos or [],
            category_id=artwork.category_id,
            category=artwork.category.name if artwork.category else None,
            artist_id=artwork.artist_id,
            artist_name=artwork.artist.name if artwork.artist else None,
            created_at=artwork.created_at,
        )
