from fastapi import APIRouter, Depends, HTTPException, status, File, Form, UploadFile, Query
from sqlalchemy.ext.asyncio import AsyncSession
from pydantic import ValidationError
from fastapi.exceptions import RequestValidationError
from typing import Any, List, Optional
import asyncio
import logging

from storefront import crud, schemas
from storefront.db.session import get_db
from storefront.api import deps
from storefront.services import image_storage

router = APIRouter()
logger = logging.getLogger(__name__)


async def _resolve_category_id(db: AsyncSession, name: str) -> int:
    category = await crud.category.get_category_by_name(db, name=name)
    if not category:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid category: {name}")
    return category.id


async def _check_artist(db: AsyncSession, artist_id: Optional[int]) -> None:
    if artist_id is not None and not await crud.artist.get_artist(db, artist_id=artist_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Artist {artist_id} not found")


@router.get("/", response_model=List[schemas.Artwork])
async def read_artworks(
    db: AsyncSession = Depends(get_db),
    category: Optional[str] = Query(None, description="Filter by category name"),
    artist_id: Optional[int] = Query(None, description="Filter by artist ID"),
) -> Any:
    """
    Artworks newest first, with category and artist names.
    """
    artworks = await crud.artwork.get_artworks(db, category=category, artist_id=artist_id)
    return [schemas.Artwork.from_orm_artwork(a) for a in artworks]


@router.get("/{artwork_id}", response_model=schemas.Artwork)
async def read_artwork(artwork_id: int, db: AsyncSession = Depends(get_db)) -> Any:
    artwork = await crud.artwork.get_artwork(db, artwork_id=artwork_id)
    if not artwork:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Artwork not found")
    return schemas.Artwork.from_orm_artwork(artwork)


@router.post("/", response_model=schemas.Artwork, status_code=status.HTTP_201_CREATED)
async def create_artwork(
    *,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
    title: str = Form(...),
    category: str = Form(...),
    price: str = Form(...),
    description: Optional[str] = Form(None),
    medium: Optional[str] = Form(None),
    dimensions: Optional[str] = Form(None),
    year: Optional[str] = Form(None),
    artist_id: Optional[int] = Form(None),
    photos: List[UploadFile] = File(...),
    labels: Optional[List[str]] = Form(None),
) -> Any:
    """
    Create an artwork from a multipart form.
    Photos are uploaded to Cloudinary concurrently and stored in request order;
    'labels' is parallel to 'photos' (missing labels default to "Photo N").
    """
    try:
        artwork_in = schemas.ArtworkCreate(
            title=title, category=category, price=price, description=description or None,
            medium=medium or None, dimensions=dimensions or None, year=year or None, artist_id=artist_id,
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())

    photos = [p for p in photos if p.filename]
    if not photos:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="At least one photo is required")
    if len(photos) > image_storage.MAX_PHOTOS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {image_storage.MAX_PHOTOS} photos can be uploaded per artwork",
        )

    category_id = await _resolve_category_id(db, artwork_in.category)
    await _check_artist(db, artwork_in.artist_id)

    contents = [await image_storage.read_image_upload(p) for p in photos]
    try:
        uploaded = await asyncio.gather(*(image_storage.upload_image(c) for c in contents))
    except image_storage.ImageStorageError as e:
        # Uploads that already succeeded are left in Cloudinary
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=f"Image upload failed: {e}")

    labels = labels or []
    photo_records = [
        {
            "url": result["url"],
            "label": labels[i] if i < len(labels) and labels[i] else f"Photo {i + 1}",
            "public_id": result["public_id"],
        }
        for i, result in enumerate(uploaded)
    ]

    data = artwork_in.model_dump(exclude={"category"})
    artwork = await crud.artwork.create_artwork(db=db, data=data, category_id=category_id, photos=photo_records)
    logger.info(f"Artwork {artwork.id} '{artwork.title}' created with {len(photo_records)} photo(s)")
    return schemas.Artwork.from_orm_artwork(artwork)


@router.put("/{artwork_id}", response_model=schemas.Artwork)
async def update_artwork(
    artwork_id: int,
    *,
    db: AsyncSession = Depends(get_db),
    artwork_in: schemas.ArtworkUpdate,
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    artwork = await crud.artwork.get_artwork(db, artwork_id=artwork_id)
    if not artwork:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Artwork not found")

    update_data = artwork_in.model_dump(exclude_unset=True)
    for required in ("title", "price"):
        if required in update_data and update_data[required] is None:
            del update_data[required]
    if update_data.get("category") is not None:
        update_data["category_id"] = await _resolve_category_id(db, update_data["category"])
    update_data.pop("category", None)
    if "artist_id" in update_data:
        await _check_artist(db, update_data["artist_id"])

    artwork = await crud.artwork.update_artwork(db=db, db_obj=artwork, update_data=update_data)
    return schemas.Artwork.from_orm_artwork(artwork)


@router.delete("/{artwork_id}", response_model=schemas.MessageResponse)
async def delete_artwork(
    artwork_id: int,
    *,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    artwork = await crud.artwork.get_artwork(db, artwork_id=artwork_id)
    if not artwork:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Artwork not found")

    for photo in artwork.photos or []:
        await image_storage.delete_image_quietly(photo.get("public_id"))

    await crud.artwork.delete_artwork(db=db, db_obj=artwork)
    logger.info(f"Artwork {artwork_id} deleted by admin {current_admin.sub}")
    return {"message": "Artwork deleted successfully"}
