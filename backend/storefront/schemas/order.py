import re
from pydantic import BaseModel, Field, constr, field_validator, EmailStr
from typing import Optional, Union, Literal
from datetime import datetime
from enum import Enum

# --- Enums for Order ---
class OrderTypeEnum(str, Enum):
    REGULAR = "regular"
    CUSTOM = "custom"
    BULK = "bulk"

class OrderStatusEnum(str, Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


GMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@gmail\.com$", re.IGNORECASE)


def validate_gmail(v: str) -> str:
    v = v.strip().lower()
    if not GMAIL_PATTERN.match(v):
        raise ValueError("Please provide a valid Gmail address (example@gmail.com)")
    return v


def normalize_phone(v: str) -> str:
    digits = re.sub(r"\D", "", v or "")
    if len(digits) != 10:
        raise ValueError("Phone number must be exactly 10 digits")
    return digits


# --- Per-type order details ---
class RegularOrderDetails(BaseModel):
    artwork: Optional[str] = None  # Artwork title as shown to the customer
    category: Optional[str] = None
    price: Optional[str] = None
    size: Optional[str] = None
    notes: Optional[constr(max_length=1000)] = None


class CustomOrderDetails(BaseModel):
    idea: constr(strip_whitespace=True, min_length=1, max_length=2000)
    medium: Optional[constr(max_length=100)] = None


class BulkOrderDetails(BaseModel):
    orgName: constr(strip_whitespace=True, min_length=1, max_length=255)
    itemType: constr(strip_whitespace=True, min_length=1, max_length=100)
    quantity: Union[int, constr(strip_whitespace=True, min_length=1, max_length=50)]
    projectDetails: Optional[constr(max_length=2000)] = None
    deadline: Optional[str] = None
    budget: Optional[str] = None


# --- Order intake: tagged union on order_type ---
class OrderCreateBase(BaseModel):
    customer_name: constr(strip_whitespace=True, min_length=2, max_length=255)
    customer_email: EmailStr
    customer_phone: str
    delivery_address: Optional[constr(max_length=1000)] = None

    @field_validator("customer_email")
    @classmethod
    def gmail_only(cls, v: str) -> str:
        return validate_gmail(v)

    @field_validator("customer_phone")
    @classmethod
    def ten_digit_phone(cls, v: str) -> str:
        return normalize_phone(v)


class RegularOrderCreate(OrderCreateBase):
    order_type: Literal["regular"]
    artwork_id: int
    order_details: RegularOrderDetails = Field(default_factory=RegularOrderDetails)


class CustomOrderCreate(OrderCreateBase):
    order_type: Literal["custom"]
    artwork_id: Optional[int] = None  # Optional reference artwork
    order_details: CustomOrderDetails


class BulkOrderCreate(OrderCreateBase):
    order_type: Literal["bulk"]
    artwork_id: Optional[int] = None
    order_details: BulkOrderDetails


# Tagged on order_type; endpoints pass discriminator="order_type" when accepting it
OrderCreate = Union[RegularOrderCreate, CustomOrderCreate, BulkOrderCreate]


class OrderStatusUpdate(BaseModel):
    status: OrderStatusEnum


class OrderCreated(BaseModel):
    message: str
    order_id: int
    whatsapp_url: Optional[str] = None


class Order(BaseModel):  # Response model
    id: int
    order_type: OrderTypeEnum
    artwork_id: Optional[int] = None
    artwork_title: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    delivery_address: Optional[str] = None
    order_details: dict = Field(default_factory=dict)
    status: OrderStatusEnum
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_orm_order(cls, order, artwork_title: Optional[str] = None) -> "Order":
        return cls(
            id=order.id,
            order_type=order.order_type,
            artwork_id=order.artwork_id,
            artwork_title=artwork_title,
            customer_name=order.customer_name,
            customer_email=order.customer_email,
            customer_phone=order.customer_phone,
            delivery_address=order.delivery_address,
            order_details=order.order_details or {},
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
        )


class OrderStats(BaseModel):
    total_orders: int = 0
    regular_orders: int = 0
    custom_orders: int = 0
    bulk_orders: int = 0
    pending_orders: int = 0
    completed_orders: int = 0
    cancelled_orders: int = 0
