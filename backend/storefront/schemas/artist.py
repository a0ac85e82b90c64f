from pydantic import BaseModel, EmailStr, constr, field_validator
from typing import Optional, List
from datetime import datetime

from .artwork import Artwork


def _blank_to_none(v):
    # Multipart forms send "" for untouched inputs
    if isinstance(v, str) and not v.strip():
        return None
    return v


class ArtistBase(BaseModel):
    name: constr(strip_whitespace=True, min_length=2, max_length=255)
    location: Optional[constr(strip_whitespace=True, max_length=255)] = None
    style: Optional[constr(strip_whitespace=True, max_length=255)] = None
    bio: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[constr(strip_whitespace=True, max_length=50)] = None
    instagram: Optional[constr(strip_whitespace=True, max_length=255)] = None
    facebook: Optional[constr(strip_whitespace=True, max_length=255)] = None
    website: Optional[constr(strip_whitespace=True, max_length=255)] = None

    @field_validator("location", "style", "bio", "email", "phone", "instagram", "facebook", "website", mode="before")
    @classmethod
    def empty_strings_are_none(cls, v):
        return _blank_to_none(v)


class ArtistCreate(ArtistBase):
    pass


class ArtistUpdate(BaseModel):  # All fields optional for update
    name: Optional[constr(strip_whitespace=True, min_length=2, max_length=255)] = None
    location: Optional[constr(strip_whitespace=True, max_length=255)] = None
    style: Optional[constr(strip_whitespace=True, max_length=255)] = None
    bio: Optional[str] = None
    email: Optional[EmailStr] = None
    phone: Optional[constr(strip_whitespace=True, max_length=50)] = None
    instagram: Optional[constr(strip_whitespace=True, max_length=255)] = None
    facebook: Optional[constr(strip_whitespace=True, max_length=255)] = None
    website: Optional[constr(strip_whitespace=True, max_length=255)] = None

    @field_validator("name", "location", "style", "bio", "email", "phone", "instagram", "facebook", "website", mode="before")
    @classmethod
    def empty_strings_are_none(cls, v):
        return _blank_to_none(v)


class Artist(ArtistBase):
    id: int
    profile_image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ArtistWithCount(Artist):
    artwork_count: int = 0


class ArtistDetail(BaseModel):
    artist: Artist
    artworks: List[Artwork]
