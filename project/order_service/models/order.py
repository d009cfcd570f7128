# order_service/models/order.py

import enum
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum, ForeignKey
from order_service.utils.database import Base, utcnow


class OrderStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


class Order(Base):
    __tablename__ = "order"

    id = Column(Integer, primary_key=True, index=True)  # автоинкремент

    customer_id  = Column(Integer, ForeignKey("customer.id"), nullable=False, index=True)
    sku          = Column(String(255), nullable=False)
    quantity     = Column(Integer, nullable=False)
    price        = Column(Numeric(10, 2), nullable=False)               # цена за единицу
    total_amount = Column(Numeric(10, 2), nullable=False)               # итог, передаёт клиент
    status       = Column(
        Enum(OrderStatus, name="order_status"),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True)     # soft delete
