# backend/storefront/services/image_storage.py
import asyncio
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from typing import Optional
from urllib.parse import urlparse

import cloudinary
import cloudinary.uploader
from fastapi import HTTPException, UploadFile, status

from storefront.core.config import settings

logger = logging.getLogger(__name__)

MAX_IMAGE_BYTES = 10 * 1024 * 1024  # 10 MB
MAX_PHOTOS = 10  # per artwork upload
ARTWORKS_FOLDER = f"{settings.CLOUDINARY_FOLDER}/artworks"
ARTISTS_FOLDER = f"{settings.CLOUDINARY_FOLDER}/artists"

_executor = ThreadPoolExecutor(max_workers=4, thread_name_prefix="cloudinary")

if settings.CLOUDINARY_CLOUD_NAME:
    cloudinary.config(
        cloud_name=settings.CLOUDINARY_CLOUD_NAME,
        api_key=settings.CLOUDINARY_API_KEY,
        api_secret=settings.CLOUDINARY_API_SECRET,
        secure=True,
    )
else:
    logger.warning("CLOUDINARY_CLOUD_NAME not set. Image uploads will fail.")


class ImageStorageError(Exception):
    pass


async def read_image_upload(file: UploadFile) -> bytes:
    """
    Reads an uploaded file after checking it is an image of at most 10 MB.
    Raises HTTPException(400) otherwise.
    """
    if not file.content_type or not file.content_type.startswith("image/"):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Only image files are allowed ({file.filename or 'upload'} is {file.content_type or 'unknown'})",
        )
    content = await file.read()
    if len(content) > MAX_IMAGE_BYTES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{file.filename or 'Image'} exceeds the 10 MB limit",
        )
    if not content:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"{file.filename or 'Image'} is empty")
    return content


def _upload_sync(content: bytes, folder: str) -> dict:
    result = cloudinary.uploader.upload(
        content,
        folder=folder,
        resource_type="image",
        transformation=[{"width": 1200, "height": 1200, "crop": "limit"}, {"quality": "auto:good"}],
    )
    return {"url": result["secure_url"], "public_id": result["public_id"]}


async def upload_image(content: bytes, folder: str = ARTWORKS_FOLDER) -> dict:
    """
    Uploads image bytes to Cloudinary and returns {"url", "public_id"}.
    Raises ImageStorageError when the upload fails.
    """
    loop = asyncio.get_running_loop()
    try:
        return await loop.run_in_executor(_executor, _upload_sync, content, folder)
    except Exception as e:
        logger.error(f"Cloudinary upload to '{folder}' failed: {e}")
        raise ImageStorageError(str(e)) from e


async def delete_image(public_id: str) -> None:
    """
    Deletes an image from Cloudinary. Raises ImageStorageError on failure;
    callers treat deletion as best-effort.
    """
    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(_executor, lambda: cloudinary.uploader.destroy(public_id))
    except Exception as e:
        raise ImageStorageError(str(e)) from e
    if result and result.get("result") not in ("ok", "not found"):
        raise ImageStorageError(f"Unexpected Cloudinary response for {public_id}: {result}")


async def delete_image_quietly(public_id: Optional[str]) -> None:
    if not public_id:
        return
    try:
        await delete_image(public_id)
    except ImageStorageError as e:
        logger.warning(f"Could not delete image {public_id} from Cloudinary: {e}")


def public_id_from_url(url: Optional[str]) -> Optional[str]:
    """
    Recovers a Cloudinary public_id from a delivery URL, e.g.
    https://res.cloudinary.com/demo/image/upload/v1712/chitravaani/artists/abc.jpg
    -> chitravaani/artists/abc
    """
    if not url:
        return None
    path = urlparse(url).path
    marker = "/upload/"
    if marker not in path:
        return None
    parts = path.split(marker, 1)[1].split("/")
    # Everything after the version segment (v1712...) is the public_id plus extension
    for i, part in enumerate(parts):
        if re.fullmatch(r"v\d+", part):
            parts = parts[i + 1:]
            break
    if not parts:
        return None
    tail = "/".join(parts)
    return tail.rsplit(".", 1)[0] if "." in parts[-1] else tail
