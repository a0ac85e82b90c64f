from fastapi import APIRouter, Depends, HTTPException, status, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import ValidationError
from fastapi.exceptions import RequestValidationError
from typing import Any, List, Optional
import logging

from storefront import crud, schemas
from storefront.db.session import get_db
from storefront.api import deps
from storefront.services import image_storage

router = APIRouter()
logger = logging.getLogger(__name__)


async def _upload_profile_image(profile_image: Optional[UploadFile]) -> Optional[str]:
    if not profile_image or not profile_image.filename:
        return None
    content = await image_storage.read_image_upload(profile_image)
    try:
        result = await image_storage.upload_image(content, folder=image_storage.ARTISTS_FOLDER)
    except image_storage.ImageStorageError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Image upload failed: {e}")
    return result["url"]


@router.get("/", response_model=List[schemas.ArtistWithCount])
async def read_artists(db: AsyncSession = Depends(get_db)) -> Any:
    """
    Artists newest first, with artwork counts.
    """
    rows = await crud.artist.get_artists_with_counts(db)
    return [
        schemas.ArtistWithCount(**schemas.Artist.model_validate(artist).model_dump(), artwork_count=count)
        for artist, count in rows
    ]


@router.get("/{artist_id}", response_model=schemas.ArtistDetail)
async def read_artist(artist_id: int, db: AsyncSession = Depends(get_db)) -> Any:
    artist = await crud.artist.get_artist(db, artist_id=artist_id)
    if not artist:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Artist not found")
    artworks = await crud.artwork.get_artworks(db, artist_id=artist_id)
    return schemas.ArtistDetail(
        artist=schemas.Artist.model_validate(artist),
        artworks=[schemas.Artwork.from_orm_artwork(a) for a in artworks],
    )


@router.post("/", response_model=schemas.Artist, status_code=status.HTTP_201_CREATED)
async def create_artist(
    *,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
    name: str = Form(...),
    location: Optional[str] = Form(None),
    style: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    instagram: Optional[str] = Form(None),
    facebook: Optional[str] = Form(None),
    website: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None),
) -> Any:
    try:
        artist_in = schemas.ArtistCreate(
            name=name, location=location, style=style, bio=bio, email=email,
            phone=phone, instagram=instagram, facebook=facebook, website=website,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    if await crud.artist.get_artist_by_name(db, name=artist_in.name):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Artist with this name already exists")

    profile_image_url = await _upload_profile_image(profile_image)
    artist = await crud.artist.create_artist(db=db, obj_in=artist_in, profile_image_url=profile_image_url)
    logger.info(f"Artist {artist.id} '{artist.name}' created by admin {current_admin.sub}")
    return artist


@router.put("/{artist_id}", response_model=schemas.Artist)
async def update_artist(
    artist_id: int,
    *,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
    name: Optional[str] = Form(None),
    location: Optional[str] = Form(None),
    style: Optional[str] = Form(None),
    bio: Optional[str] = Form(None),
    email: Optional[str] = Form(None),
    phone: Optional[str] = Form(None),
    instagram: Optional[str] = Form(None),
    facebook: Optional[str] = Form(None),
    website: Optional[str] = Form(None),
    profile_image: Optional[UploadFile] = File(None),
) -> Any:
    """
    Partial update from a multipart form. Only the fields sent are changed;
    a new profile_image replaces the old one.
    """
    artist = await crud.artist.get_artist(db, artist_id=artist_id)
    if not artist:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Artist not found")

    sent = {
        k: v for k, v in dict(
            name=name, location=location, style=style, bio=bio, email=email,
            phone=phone, instagram=instagram, facebook=facebook, website=website,
        ).items() if v is not None
    }
    try:
        artist_in = schemas.ArtistUpdate(**sent)
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    if artist_in.name and artist_in.name != artist.name:
        existing = await crud.artist.get_artist_by_name(db, name=artist_in.name)
        if existing and existing.id != artist_id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Artist with this name already exists")

    old_image_url = artist.profile_image_url
    new_image_url = await _upload_profile_image(profile_image)
    artist = await crud.artist.update_artist(db=db, db_obj=artist, obj_in=artist_in, profile_image_url=new_image_url)

    if new_image_url and old_image_url:
        await image_storage.delete_image_quietly(image_storage.public_id_from_url(old_image_url))
    return artist


@router.delete("/{artist_id}", response_model=schemas.MessageResponse)
async def delete_artist(
    artist_id: int,
    *,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    """
    Delete an artist. Their artworks stay in the catalog without an artist.
    """
    artist = await crud.artist.get_artist(db, artist_id=artist_id)
    if not artist:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Artist not found")
    image_url = artist.profile_image_url

    await crud.artist.delete_artist(db=db, db_obj=artist)
    await image_storage.delete_image_quietly(image_storage.public_id_from_url(image_url))
    logger.info(f"Artist {artist_id} deleted by admin {current_admin.sub}")
    return {"message": "Artist deleted successfully"}
