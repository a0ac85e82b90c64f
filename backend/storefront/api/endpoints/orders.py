from fastapi import APIRouter, BackgroundTasks, Body, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Annotated, Any, List, Optional
import logging

from storefront import crud, schemas
from storefront.core.config import settings
from storefront.core.rate_limit import limiter
from storefront.db.session import get_db
from storefront.api import deps
from storefront.services import email_service
from storefront.services.whatsapp import build_whatsapp_url

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=schemas.OrderCreated, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_ORDERS)
async def create_order(
    request: Request,
    background_tasks: BackgroundTasks,
    order_in: Annotated[schemas.OrderCreate, Body(discriminator="order_type")],
    db: AsyncSession = Depends(get_db),
) -> Any:
    """
    Public order intake for regular, custom and bulk orders.
    The customer gets a confirmation email and the admin a new-order alert once the response is sent.
    """
    artwork = None
    if order_in.artwork_id is not None:
        artwork = await crud.artwork.get_artwork(db, artwork_id=order_in.artwork_id)
        if not artwork:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Artwork not found")

    if isinstance(order_in, schemas.RegularOrderCreate):
        # Snapshot what the customer saw, in case the artwork changes later
        details = order_in.order_details
        details.artwork = details.artwork or artwork.title
        details.category = details.category or (artwork.category.name if artwork.category else None)
        details.price = details.price or artwork.price

    order = await crud.order.create_order(db=db, obj_in=order_in)
    order_out = schemas.Order.from_orm_order(order, artwork_title=artwork.title if artwork else None)
    logger.info(f"Order {order.id} ({order_out.order_type.value}) received from {order.customer_email}")

    background_tasks.add_task(email_service.send_order_confirmation, order_out)
    background_tasks.add_task(email_service.notify_admin_new_order, order_out)

    return {
        "message": "Order placed successfully",
        "order_id": order.id,
        "whatsapp_url": build_whatsapp_url(order_out),
    }


@router.get("/", response_model=List[schemas.Order])
async def read_orders(
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
    order_status: Optional[schemas.OrderStatusEnum] = Query(None, alias="status"),
    order_type: Optional[schemas.OrderTypeEnum] = Query(None, alias="type"),
) -> Any:
    rows = await crud.order.get_orders(db, status=order_status, order_type=order_type)
    return [schemas.Order.from_orm_order(order, artwork_title=title) for order, title in rows]


@router.get("/stats/summary", response_model=schemas.OrderStats)
async def read_order_stats(
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    return await crud.order.get_order_stats(db)


@router.get("/{order_id}", response_model=schemas.Order)
async def read_order(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    row = await crud.order.get_order_with_artwork_title(db, order_id=order_id)
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    order, title = row
    return schemas.Order.from_orm_order(order, artwork_title=title)


@router.patch("/{order_id}/status", response_model=schemas.Order)
async def update_order_status(
    order_id: int,
    status_in: schemas.OrderStatusUpdate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    row = await crud.order.get_order_with_artwork_title(db, order_id=order_id)
    if not row:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    order, title = row
    order = await crud.order.update_order_status(db=db, db_obj=order, status=status_in.status)
    order_out = schemas.Order.from_orm_order(order, artwork_title=title)
    logger.info(f"Order {order_id} set to {status_in.status.value} by admin {current_admin.sub}")

    background_tasks.add_task(email_service.send_order_status_update, order_out)
    return order_out


@router.delete("/{order_id}", response_model=schemas.MessageResponse)
async def delete_order(
    order_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    order = await crud.order.get_order(db, order_id=order_id)
    if not order:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Order not found")
    await crud.order.delete_order(db=db, db_obj=order)
    logger.info(f"Order {order_id} deleted by admin {current_admin.sub}")
    return {"message": "Order deleted successfully"}
