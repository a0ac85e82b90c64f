from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Any, List, Optional
import logging

from storefront import crud, schemas
from storefront.core.config import settings
from storefront.core.rate_limit import limiter
from storefront.db.session import get_db
from storefront.api import deps
from storefront.services import email_service

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/", response_model=schemas.FeedbackCreated, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.RATE_LIMIT_FEEDBACK)
async def submit_feedback(
    request: Request,
    feedback_in: schemas.FeedbackCreate,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> Any:
    feedback = await crud.feedback.create_feedback(db=db, obj_in=feedback_in)
    logger.info(f"Feedback {feedback.id} ({feedback.rating}/5) received from {feedback.customer_email}")
    background_tasks.add_task(email_service.send_feedback_thank_you, schemas.Feedback.model_validate(feedback))
    return {"message": "Thank you for your feedback!", "feedback_id": feedback.id}


@router.get("/", response_model=List[schemas.Feedback])
async def read_feedback_list(
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
    feedback_status: Optional[schemas.FeedbackStatusEnum] = Query(None, alias="status"),
    feedback_type: Optional[schemas.FeedbackTypeEnum] = Query(None),
) -> Any:
    return await crud.feedback.get_feedback_list(db, status=feedback_status, feedback_type=feedback_type)


@router.get("/stats/summary", response_model=schemas.FeedbackStats)
async def read_feedback_stats(
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    return await crud.feedback.get_feedback_stats(db)


@router.get("/{feedback_id}", response_model=schemas.Feedback)
async def read_feedback(
    feedback_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    feedback = await crud.feedback.get_feedback(db, feedback_id=feedback_id)
    if not feedback:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feedback not found")
    return feedback


@router.patch("/{feedback_id}/status", response_model=schemas.Feedback)
async def update_feedback_status(
    feedback_id: int,
    status_in: schemas.FeedbackStatusUpdate,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    feedback = await crud.feedback.get_feedback(db, feedback_id=feedback_id)
    if not feedback:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feedback not found")
    return await crud.feedback.update_feedback_status(db=db, db_obj=feedback, status=status_in.status)


@router.delete("/{feedback_id}", response_model=schemas.MessageResponse)
async def delete_feedback(
    feedback_id: int,
    db: AsyncSession = Depends(get_db),
    current_admin: schemas.TokenPayload = Depends(deps.get_current_admin),
) -> Any:
    feedback = await crud.feedback.get_feedback(db, feedback_id=feedback_id)
    if not feedback:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Feedback not found")
    await crud.feedback.delete_feedback(db=db, db_obj=feedback)
    return {"message": "Feedback deleted successfully"}
