from sqlalchemy import Column, Integer, String, Text, DateTime, CheckConstraint, Enum as DBEnum
from sqlalchemy.sql import func

from storefront.db.base_class import Base
from storefront.schemas.feedback import FeedbackStatusEnum, FeedbackTypeEnum


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Feedback(Base):
    __tablename__ = "feedback"
    __table_args__ = (
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_feedback_rating_range"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(20), nullable=True)

    feedback_type = Column(DBEnum(FeedbackTypeEnum, name="feedback_type_enum", values_callable=_enum_values),
                           nullable=False, default=FeedbackTypeEnum.OTHER)
    subject = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)

    status = Column(DBEnum(FeedbackStatusEnum, name="feedback_status_enum", values_callable=_enum_values),
                    nullable=False, default=FeedbackStatusEnum.PENDING, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Feedback(id={self.id}, rating={self.rating}, status='{self.status}')>"
