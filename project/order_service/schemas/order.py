# order_service/schemas/order.py

from decimal import Decimal
from datetime import datetime
from typing import Annotated, Optional, List
from pydantic import AfterValidator, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from order_service.models.order import OrderStatus

# JSON API в camelCase, внутри Python snake_case
CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
)

Money = Annotated[Decimal, Field(ge=0, max_digits=10, decimal_places=2)]

# верхняя граница колонки Integer
INT_MAX = 2**31 - 1

# в ответе суммы всегда с двумя знаками: 20 -> "20.00"
Amount = Annotated[Decimal, AfterValidator(lambda v: v.quantize(Decimal("0.01")))]

# ────────────── Схема для CREATE ──────────────
class OrderCreate(BaseModel):
    model_config = CAMEL_CONFIG

    customer_id: int = Field(..., gt=0, le=INT_MAX)
    sku: str = Field(..., min_length=1, max_length=255)
    quantity: int = Field(..., gt=0, le=INT_MAX)
    price: Money
    total_amount: Money

# ────────────── Схема для UPDATE (частичное обновление) ──────────────
class OrderUpdate(BaseModel):
    """
    Все поля необязательные: в хранилище попадают только переданные
    (model_dump(exclude_unset=True)).
    """
    model_config = CAMEL_CONFIG

    customer_id: Optional[int] = Field(None, gt=0, le=INT_MAX)
    sku: Optional[str] = Field(None, min_length=1, max_length=255)
    quantity: Optional[int] = Field(None, gt=0, le=INT_MAX)
    price: Optional[Money] = None
    total_amount: Optional[Money] = None
    status: Optional[OrderStatus] = None

# ────────────── Схема для RESPONSE ──────────────
class Order(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: int
    customer_id: int
    sku: str
    quantity: int
    price: Amount
    total_amount: Amount
    status: OrderStatus
    created_at: datetime
    updated_at: datetime
    deleted_at: Optional[datetime] = None

class OrderPage(BaseModel):
    model_config = CAMEL_CONFIG

    data: List[Order]
    total: int
    page: int
    limit: int
    total_pages: int

class OrderCreatedResponse(BaseModel):
    message: str
    data: Order

class OrderDeletedResponse(BaseModel):
    message: str
