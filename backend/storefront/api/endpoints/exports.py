from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
from concurrent.futures import ThreadPoolExecutor
from typing import Callable
import asyncio
import logging

from storefront import crud, schemas
from storefront.db.session import get_db
from storefront.api import deps
from storefront.services import excel_export

router = APIRouter()
logger = logging.getLogger(__name__)

_executor = ThreadPoolExecutor(max_workers=2, thread_name_prefix="xlsx")


async def _workbook_response(kind: str, build: Callable[[], bytes]) -> Response:
    loop = asyncio.get_running_loop()
    try:
        content = await loop.run_in_executor(_executor, build)
    except Exception as e:
        logger.exception(f"Failed to build {kind} export")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=f"Failed to export {kind}: {e}")

    filename = excel_export.export_filename(kind)
    logger.info(f"Exported {kind} as {filename}")
    return Response(
        content=content,
        media_type=excel_export.XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


def _nothing_to_export(kind: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No {kind} found to export")


@router.get("/orders")
async def export_orders(
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Response:
    rows = await crud.order.get_orders(db)
    if not rows:
        raise _nothing_to_export("orders")
    data = [schemas.Order.from_orm_order(order, artwork_title=title).model_dump() for order, title in rows]
    return await _workbook_response("orders", lambda: excel_export.build_orders_workbook(data))


@router.get("/artworks")
async def export_artworks(
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Response:
    artworks = await crud.artwork.get_artworks(db)
    if not artworks:
        raise _nothing_to_export("artworks")
    data = [schemas.Artwork.from_orm_artwork(a).model_dump() for a in artworks]
    return await _workbook_response("artworks", lambda: excel_export.build_artworks_workbook(data))


@router.get("/artists")
async def export_artists(
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Response:
    rows = await crud.artist.get_artists_with_counts(db)
    if not rows:
        raise _nothing_to_export("artists")
    data = [{**schemas.Artist.model_validate(a).model_dump(), "artwork_count": count} for a, count in rows]
    return await _workbook_response("artists", lambda: excel_export.build_artists_workbook(data))


@router.get("/feedback")
async def export_feedback(
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Response:
    feedback = await crud.feedback.get_feedback_list(db)
    if not feedback:
        raise _nothing_to_export("feedback")
    data = [schemas.Feedback.model_validate(f).model_dump() for f in feedback]
    summary = await crud.feedback.get_feedback_stats(db)
    return await _workbook_response("feedback", lambda: excel_export.build_feedback_workbook(data, summary))
