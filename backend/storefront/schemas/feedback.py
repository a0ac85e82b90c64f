from pydantic import BaseModel, EmailStr, Field, constr, field_validator, model_validator
from typing import Optional, Dict
from datetime import datetime
from enum import Enum

from .order import validate_gmail, normalize_phone

class FeedbackTypeEnum(str, Enum):
    ARTWORK_QUALITY = "artwork_quality"
    CUSTOMER_SERVICE = "customer_service"
    WEBSITE_EXPERIENCE = "website_experience"
    DELIVERY = "delivery"
    PRICING = "pricing"
    SUGGESTION = "suggestion"
    COMPLAINT = "complaint"
    APPRECIATION = "appreciation"
    OTHER = "other"

class FeedbackStatusEnum(str, Enum):
    PENDING = "Pending"
    REVIEWED = "Reviewed"
    RESOLVED = "Resolved"


def default_subject(feedback_type: FeedbackTypeEnum) -> str:
    # "website_experience" -> "Website Experience Feedback"
    return feedback_type.value.replace("_", " ").title() + " Feedback"


class FeedbackCreate(BaseModel):
    customer_name: constr(strip_whitespace=True, min_length=2, max_length=100)
    customer_email: EmailStr
    customer_phone: Optional[str] = None
    feedback_type: FeedbackTypeEnum = FeedbackTypeEnum.OTHER
    subject: Optional[constr(strip_whitespace=True, max_length=200)] = None
    message: constr(strip_whitespace=True, min_length=10, max_length=1000)
    rating: int = Field(..., ge=1, le=5)

    @field_validator("customer_email")
    @classmethod
    def gmail_only(cls, v: str) -> str:
        return validate_gmail(v)

    @field_validator("customer_phone")
    @classmethod
    def optional_phone(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return normalize_phone(v)

    @model_validator(mode="after")
    def fill_subject(self):
        if not self.subject:
            self.subject = default_subject(self.feedback_type)
        return self


class FeedbackStatusUpdate(BaseModel):
    status: FeedbackStatusEnum


class FeedbackCreated(BaseModel):
    message: str
    feedback_id: int


class Feedback(BaseModel):  # Response model
    id: int
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    feedback_type: FeedbackTypeEnum
    subject: str
    message: str
    rating: int
    status: FeedbackStatusEnum
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class FeedbackStats(BaseModel):
    total_feedback: int = 0
    average_rating: float = 0.0
    appreciation_feedback: int = 0
    complaints: int = 0
    by_status: Dict[str, int] = Field(default_factory=dict)
    by_rating: Dict[str, int] = Field(default_factory=dict)
