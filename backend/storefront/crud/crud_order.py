from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func, case
from typing import Optional

from storefront.models.order import Order as OrderModel
from storefront.models.artwork import Artwork as ArtworkModel
from storefront.schemas.order import OrderStatusEnum, OrderTypeEnum


def _with_artwork_title():
    return select(OrderModel, ArtworkModel.title.label("artwork_title")).outerjoin(
        ArtworkModel, OrderModel.artwork_id == ArtworkModel.id
    )


async def get_order(db: AsyncSession, order_id: int) -> OrderModel | None:
    result = await db.execute(select(OrderModel).filter(OrderModel.id == order_id))
    return result.scalars().first()


async def get_order_with_artwork_title(db: AsyncSession, order_id: int) -> tuple[OrderModel, Optional[str]] | None:
    result = await db.execute(_with_artwork_title().filter(OrderModel.id == order_id))
    row = result.first()
    if not row:
        return None
    return row[0], row[1]


async def get_orders(
    db: AsyncSession,
    *,
    status: Optional[OrderStatusEnum] = None,
    order_type: Optional[OrderTypeEnum] = None,
    limit: Optional[int] = None,
) -> list[tuple[OrderModel, Optional[str]]]:
    """
    Orders newest first, each paired with the referenced artwork's title (or None).
    """
    query = _with_artwork_title()
    if status:
        query = query.filter(OrderModel.status == status)
    if order_type:
        query = query.filter(OrderModel.order_type == order_type)
    query = query.order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
    if limit:
        query = query.limit(limit)
    result = await db.execute(query)
    return [(order, title) for order, title in result.all()]


async def create_order(db: AsyncSession, *, obj_in) -> OrderModel:
    """
    Persist a validated Regular/Custom/BulkOrderCreate. Status always starts at Pending.
    """
    db_obj = OrderModel(
        order_type=OrderTypeEnum(obj_in.order_type),
        artwork_id=obj_in.artwork_id,
        customer_name=obj_in.customer_name,
        customer_email=obj_in.customer_email,
        customer_phone=obj_in.customer_phone,
        delivery_address=obj_in.delivery_address,
        order_details=obj_in.order_details.model_dump(exclude_none=True),
        status=OrderStatusEnum.PENDING,
    )
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def update_order_status(db: AsyncSession, *, db_obj: OrderModel, status: OrderStatusEnum) -> OrderModel:
    # Any status may follow any other
    db_obj.status = status
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def delete_order(db: AsyncSession, *, db_obj: OrderModel) -> OrderModel:
    await db.delete(db_obj)
    await db.commit()
    return db_obj


async def get_order_stats(db: AsyncSession) -> dict:
    """
    Totals by type and by status in a single aggregate query.
    """
    def count_where(condition):
        return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)

    query = select(
        func.count(OrderModel.id).label("total_orders"),
        count_where(OrderModel.order_type == OrderTypeEnum.REGULAR).label("regular_orders"),
        count_where(OrderModel.order_type == OrderTypeEnum.CUSTOM).label("custom_orders"),
        count_where(OrderModel.order_type == OrderTypeEnum.BULK).label("bulk_orders"),
        count_where(OrderModel.status == OrderStatusEnum.PENDING).label("pending_orders"),
        count_where(OrderModel.status == OrderStatusEnum.COMPLETED).label("completed_orders"),
        count_where(OrderModel.status == OrderStatusEnum.CANCELLED).label("cancelled_orders"),
    )
    result = await db.execute(query)
    return {key: int(value or 0) for key, value in result.mappings().one().items()}
