from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func

from storefront.models.artwork import Artwork as ArtworkModel
from storefront.models.artist import Artist as ArtistModel
from storefront.models.category import Category as CategoryModel
from storefront.models.feedback import Feedback as FeedbackModel
from storefront.models.order import Order as OrderModel
from storefront.schemas.order import OrderStatusEnum
from storefront.crud.crud_order import get_orders

RECENT_ORDERS_LIMIT = 5


async def _count(db: AsyncSession, column, *filters) -> int:
    result = await db.execute(select(func.count(column)).filter(*filters))
    return result.scalar_one_or_none() or 0


async def get_dashboard_stats(db: AsyncSession) -> dict:
    # Returns a dictionary that can be validated by the DashboardStats schema
    recent = await get_orders(db, limit=RECENT_ORDERS_LIMIT)
    return {
        "total_artworks": await _count(db, ArtworkModel.id),
        "total_orders": await _count(db, OrderModel.id),
        "pending_orders": await _count(db, OrderModel.id, OrderModel.status == OrderStatusEnum.PENDING),
        "total_categories": await _count(db, CategoryModel.id),
        "total_artists": await _count(db, ArtistModel.id),
        "total_feedback": await _count(db, FeedbackModel.id),
        "recent_orders": recent,
    }
