from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import func
from typing import Optional

from storefront.models.feedback import Feedback as FeedbackModel
from storefront.schemas.feedback import FeedbackCreate, FeedbackStatusEnum, FeedbackTypeEnum


async def get_feedback(db: AsyncSession, feedback_id: int) -> FeedbackModel | None:
    result = await db.execute(select(FeedbackModel).filter(FeedbackModel.id == feedback_id))
    return result.scalars().first()


async def get_feedback_list(
    db: AsyncSession,
    *,
    status: Optional[FeedbackStatusEnum] = None,
    feedback_type: Optional[FeedbackTypeEnum] = None,
) -> list[FeedbackModel]:
    query = select(FeedbackModel)
    if status:
        query = query.filter(FeedbackModel.status == status)
    if feedback_type:
        query = query.filter(FeedbackModel.feedback_type == feedback_type)
    query = query.order_by(FeedbackModel.created_at.desc(), FeedbackModel.id.desc())
    result = await db.execute(query)
    return result.scalars().all()


async def create_feedback(db: AsyncSession, *, obj_in: FeedbackCreate) -> FeedbackModel:
    db_obj = FeedbackModel(**obj_in.model_dump(), status=FeedbackStatusEnum.PENDING)
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def update_feedback_status(
    db: AsyncSession, *, db_obj: FeedbackModel, status: FeedbackStatusEnum
) -> FeedbackModel:
    db_obj.status = status
    db.add(db_obj)
    await db.commit()
    await db.refresh(db_obj)
    return db_obj


async def delete_feedback(db: AsyncSession, *, db_obj: FeedbackModel) -> FeedbackModel:
    await db.delete(db_obj)
    await db.commit()
    return db_obj


async def get_feedback_stats(db: AsyncSession) -> dict:
    query = select(
        func.count(FeedbackModel.id),
        func.avg(FeedbackModel.rating),
    )
    total, average = (await db.execute(query)).one()

    status_rows = await db.execute(
        select(FeedbackModel.status, func.count(FeedbackModel.id)).group_by(FeedbackModel.status)
    )
    rating_rows = await db.execute(
        select(FeedbackModel.rating, func.count(FeedbackModel.id)).group_by(FeedbackModel.rating)
    )
    type_rows = await db.execute(
        select(FeedbackModel.feedback_type, func.count(FeedbackModel.id)).group_by(FeedbackModel.feedback_type)
    )

    by_status = {s.value: 0 for s in FeedbackStatusEnum}
    for status, count in status_rows.all():
        by_status[FeedbackStatusEnum(status).value] = count
    by_rating = {str(r): 0 for r in range(5, 0, -1)}
    for rating, count in rating_rows.all():
        by_rating[str(rating)] = count
    by_type = {FeedbackTypeEnum(t): count for t, count in type_rows.all()}

    return {
        "total_feedback": total or 0,
        "average_rating": round(float(average), 2) if average is not None else 0.0,
        "appreciation_feedback": by_type.get(FeedbackTypeEnum.APPRECIATION, 0),
        "complaints": by_type.get(FeedbackTypeEnum.COMPLAINT, 0),
        "by_status": by_status,
        "by_rating": by_rating,
    }
