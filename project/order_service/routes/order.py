# order_service/routes/order.py

from typing import Annotated, Optional
from fastapi import APIRouter, Depends, HTTPException, Path, Query, Request, status

from order_service.config import settings
from order_service.models.order import OrderStatus
from order_service.repositories.customer import CustomerRepository
from order_service.repositories.order import OrderRepository
from order_service.schemas.order import (
    Order,
    OrderCreate,
    OrderUpdate,
    OrderPage,
    OrderCreatedResponse,
    OrderDeletedResponse,
    INT_MAX,
)
from order_service.services.order import OrderService

router = APIRouter()


def get_order_service(request: Request) -> OrderService:
    """Собирает OrderService на сессии текущего запроса."""
    db = request.state.db
    return OrderService(
        order_repository=OrderRepository(db),
        customer_repository=CustomerRepository(db),
        validator=request.app.state.validator,
        log=request.app.state.log,
    )


# ────────────── CREATE ──────────────
@router.post(
    "",
    response_model=OrderCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать заказ",
    response_description="Заказ после внешней валидации (CONFIRMED или CANCELLED)",
    responses={
        201: {"description": "Заказ успешно создан"},
        404: {"description": "Покупатель не найден"},
        422: {"description": "Неверные данные запроса"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def create_order(
    request: Request,
    order: OrderCreate,
    service: OrderService = Depends(get_order_service),
):
    try:
        return await service.create_order(order)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при создании заказа: {str(e)}")
        raise


# ────────────── READ ALL ──────────────
@router.get(
    "",
    response_model=OrderPage,
    status_code=status.HTTP_200_OK,
    summary="Получить список заказов",
    response_description="Страница заказов, сначала новые",
    responses={
        200: {"description": "Список заказов успешно получен"},
        400: {"description": "Переданы одновременно customerId и status"},
        422: {"description": "Неверные параметры пагинации"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def read_orders(
    request: Request,
    page: int = Query(1, ge=1, le=INT_MAX),
    limit: int = Query(10, ge=1, le=settings.MAX_LIMIT),
    customer_id: Optional[int] = Query(None, alias="customerId", ge=1, le=INT_MAX),
    order_status: Optional[OrderStatus] = Query(None, alias="status"),
    service: OrderService = Depends(get_order_service),
):
    if customer_id is not None and order_status is not None:
        await request.app.state.log.log_warning("order", "Переданы оба фильтра customerId и status")
        raise HTTPException(status_code=400, detail="Use either customerId or status filter, not both")

    try:
        if customer_id is not None:
            return await service.get_orders_by_customer(customer_id, page, limit)
        if order_status is not None:
            return await service.get_orders_by_status(order_status, page, limit)
        return await service.get_all_orders(page, limit)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении списка заказов: {str(e)}")
        raise


# ────────────── READ ONE ──────────────
@router.get(
    "/{id}",
    response_model=Order,
    status_code=status.HTTP_200_OK,
    summary="Получить заказ по ID",
    response_description="Возвращает данные конкретного заказа",
    responses={
        200: {"description": "Заказ найден и возвращён"},
        404: {"description": "Заказ не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def read_order(
    id: Annotated[int, Path(le=INT_MAX)],
    request: Request,
    service: OrderService = Depends(get_order_service),
):
    try:
        return await service.get_order_by_id(id)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при получении заказа: {str(e)}", {"id": id})
        raise


# ────────────── UPDATE ──────────────
@router.put(
    "/{id}",
    response_model=Order,
    status_code=status.HTTP_200_OK,
    summary="Обновить заказ",
    response_description="Заказ после обновления",
    responses={
        200: {"description": "Заказ успешно обновлён"},
        404: {"description": "Заказ не найден"},
        422: {"description": "Неверные данные запроса"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def update_order(
    id: Annotated[int, Path(le=INT_MAX)],
    order_update: OrderUpdate,
    request: Request,
    service: OrderService = Depends(get_order_service),
):
    try:
        return await service.update(id, order_update)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при обновлении заказа: {str(e)}", {"id": id})
        raise


# ────────────── DELETE ──────────────
@router.delete(
    "/{id}",
    response_model=OrderDeletedResponse,
    status_code=status.HTTP_200_OK,
    summary="Удалить заказ",
    response_description="Заказ помечен удалённым (soft delete)",
    responses={
        200: {"description": "Заказ успешно удалён"},
        404: {"description": "Заказ не найден"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
async def delete_order(
    id: Annotated[int, Path(le=INT_MAX)],
    request: Request,
    service: OrderService = Depends(get_order_service),
):
    try:
        return await service.delete(id)
    except Exception as e:
        await request.app.state.log.log_error("order", f"Ошибка при удалении заказа: {str(e)}", {"id": id})
        raise
