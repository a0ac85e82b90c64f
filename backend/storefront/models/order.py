from sqlalchemy import Column, Integer, String, Text, ForeignKey, DateTime, JSON, Enum as DBEnum
from sqlalchemy.sql import func

from storefront.db.base_class import Base
from storefront.schemas.order import OrderTypeEnum, OrderStatusEnum  # Import enums for DB


def _enum_values(enum_cls):
    # Store "Pending", not "PENDING"
    return [member.value for member in enum_cls]


class Order(Base):
    # __tablename__ will be 'orders'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_type = Column(DBEnum(OrderTypeEnum, name="order_type_enum", values_callable=_enum_values),
                        nullable=False, index=True)
    artwork_id = Column(Integer, ForeignKey("artworks.id", ondelete="SET NULL"), nullable=True, index=True)

    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(20), nullable=True)
    delivery_address = Column(Text, nullable=True)

    # Shape depends on order_type; validated at the API boundary
    order_details = Column(JSON, nullable=False)

    status = Column(DBEnum(OrderStatusEnum, name="order_status_enum", values_callable=_enum_values),
                    nullable=False, default=OrderStatusEnum.PENDING, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Order(id={self.id}, type='{self.order_type}', status='{self.status}')>"
