# order_service/models/customer.py

from sqlalchemy import Column, Integer, String, DateTime
from order_service.utils.database import Base, utcnow

class Customer(Base):
    __tablename__ = "customer"

    id = Column(Integer, primary_key=True, index=True)  # автоинкремент

    name    = Column(String(255), nullable=False)
    email   = Column(String(255), nullable=False)
    phone   = Column(String(255), nullable=True)
    address = Column(String(255), nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    deleted_at = Column(DateTime(timezone=True), nullable=True)     # soft delete
