"""Тесты сценариев заказа: создание, внешняя валидация, обработка отсутствующих записей."""
from unittest.mock import AsyncMock

import pytest

from order_service.exceptions import CustomerNotFoundError, OrderNotFoundError
from order_service.models.customer import Customer
from order_service.models.order import OrderStatus
from order_service.repositories.order import OrderRepository
from order_service.schemas.order import OrderCreate, OrderUpdate
from order_service.services.order import OrderService
from order_service.services.validation import ExternalValidationService


async def test_create_order_confirmed(make_service, confirmed_validator, session_factory, order_fields):
    service = make_service(confirmed_validator)

    result = await service.create_order(OrderCreate(**order_fields))

    assert result["message"] == "Order created successfully"
    assert result["data"].status == OrderStatus.CONFIRMED
    assert result["data"].customer_id == 1
    assert confirmed_validator.calls == 1

    async with session_factory() as other:
        stored = await OrderRepository(other).find_one(result["data"].id)
    assert stored.status == OrderStatus.CONFIRMED


async def test_create_order_cancelled(make_service, cancelled_validator, order_fields):
    service = make_service(cancelled_validator)

    result = await service.create_order(OrderCreate(**order_fields))

    assert result["data"].status == OrderStatus.CANCELLED


async def test_create_order_never_returns_pending(make_service, order_fields):
    draws = iter([0.0, 0.3, 0.31, 0.99])
    service = make_service(ExternalValidationService(delay=0, random_source=lambda: next(draws)))

    statuses = [(await service.create_order(OrderCreate(**order_fields)))["data"].status for _ in range(4)]

    assert statuses == [
        OrderStatus.CANCELLED,
        OrderStatus.CANCELLED,
        OrderStatus.CONFIRMED,
        OrderStatus.CONFIRMED,
    ]


async def test_create_order_unknown_customer_persists_nothing(
    make_service, order_repository, confirmed_validator, order_fields
):
    order_repository.create = AsyncMock()
    service = make_service(confirmed_validator)

    with pytest.raises(CustomerNotFoundError) as exc_info:
        await service.create_order(OrderCreate(**{**order_fields, "customer_id": 999}))

    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Customer not found"
    order_repository.create.assert_not_called()
    assert confirmed_validator.calls == 0


async def test_create_order_soft_deleted_customer(make_service, session, confirmed_validator, order_fields):
    customer = await session.get(Customer, 2)
    customer.deleted_at = customer.created_at
    await session.commit()
    service = make_service(confirmed_validator)

    with pytest.raises(CustomerNotFoundError):
        await service.create_order(OrderCreate(**{**order_fields, "customer_id": 2}))


async def test_validator_failure_leaves_order_pending(
    make_service, order_repository, failing_validator, order_fields
):
    service = make_service(failing_validator)

    with pytest.raises(RuntimeError, match="validation service unavailable"):
        await service.create_order(OrderCreate(**order_fields))

    # строка осталась в PENDING, компенсации нет
    result = await order_repository.find_all()
    assert result["total"] == 1
    assert result["data"][0].status == OrderStatus.PENDING


async def test_validator_failure_skips_status_patch(
    make_service, order_repository, failing_validator, order_fields
):
    order_repository.update = AsyncMock()
    service = make_service(failing_validator)

    with pytest.raises(RuntimeError):
        await service.create_order(OrderCreate(**order_fields))

    order_repository.update.assert_not_called()


async def test_get_order_by_id(make_service, confirmed_validator, order_fields):
    service = make_service(confirmed_validator)
    created = (await service.create_order(OrderCreate(**order_fields)))["data"]

    order = await service.get_order_by_id(created.id)

    assert order.id == created.id


async def test_get_order_by_id_missing(make_service, confirmed_validator):
    service = make_service(confirmed_validator)

    with pytest.raises(OrderNotFoundError) as exc_info:
        await service.get_order_by_id(999)

    assert exc_info.value.detail == "Order not found"


async def test_get_order_by_id_soft_deleted(make_service, order_repository, confirmed_validator, order_fields):
    service = make_service(confirmed_validator)
    order = await order_repository.create(order_fields)
    await order_repository.delete(order.id)

    with pytest.raises(OrderNotFoundError):
        await service.get_order_by_id(order.id)


async def test_get_all_orders_defaults(make_service, order_repository, confirmed_validator, order_fields):
    service = make_service(confirmed_validator)
    for _ in range(3):
        await order_repository.create(order_fields)

    result = await service.get_all_orders()

    assert result["page"] == 1
    assert result["limit"] == 10
    assert result["total"] == 3
    assert result["total_pages"] == 1


async def test_get_orders_by_customer_and_status(make_service, order_repository, confirmed_validator, order_fields):
    service = make_service(confirmed_validator)
    await order_repository.create(order_fields)
    await service.create_order(OrderCreate(**{**order_fields, "customer_id": 2}))

    by_customer = await service.get_orders_by_customer(2)
    by_status = await service.get_orders_by_status(OrderStatus.PENDING)

    assert by_customer["total"] == 1
    assert by_customer["data"][0].status == OrderStatus.CONFIRMED
    assert by_status["total"] == 1
    assert by_status["data"][0].customer_id == 1


async def test_update(make_service, order_repository, confirmed_validator, order_fields):
    service = make_service(confirmed_validator)
    order = await order_repository.create(order_fields)

    updated = await service.update(order.id, OrderUpdate(status=OrderStatus.CANCELLED))

    assert updated.status == OrderStatus.CANCELLED
    assert updated.sku == "X"


async def test_update_empty_patch(make_service, order_repository, confirmed_validator, order_fields):
    service = make_service(confirmed_validator)
    order = await order_repository.create(order_fields)

    updated = await service.update(order.id, OrderUpdate())

    assert (updated.sku, updated.quantity, updated.status) == ("X", 2, OrderStatus.PENDING)


async def test_update_explicit_null_is_ignored(make_service, order_repository, confirmed_validator, order_fields):
    service = make_service(confirmed_validator)
    order = await order_repository.create(order_fields)

    updated = await service.update(order.id, OrderUpdate(sku=None, quantity=7))

    assert updated.sku == "X"
    assert updated.quantity == 7


async def test_update_missing_order(make_service, confirmed_validator):
    service = make_service(confirmed_validator)

    with pytest.raises(OrderNotFoundError):
        await service.update(999, OrderUpdate(quantity=1))


async def test_delete(make_service, order_repository, confirmed_validator, order_fields):
    service = make_service(confirmed_validator)
    order = await order_repository.create(order_fields)

    result = await service.delete(order.id)

    assert result == {"message": "Order deleted successfully"}
    assert await order_repository.find_one(order.id) is None
    with pytest.raises(OrderNotFoundError):
        await service.delete(order.id)


async def test_delete_missing_order(make_service, order_repository, confirmed_validator):
    order_repository.delete = AsyncMock()
    service = make_service(confirmed_validator)

    with pytest.raises(OrderNotFoundError):
        await service.delete(999)

    order_repository.delete.assert_not_called()


async def test_delete_race_with_concurrent_delete(make_service, order_repository, confirmed_validator, order_fields):
    order = await order_repository.create(order_fields)
    # заказ найден, но soft delete уже выполнен другим запросом
    order_repository.delete = AsyncMock(return_value=False)
    service = make_service(confirmed_validator)

    with pytest.raises(OrderNotFoundError):
        await service.delete(order.id)

    order_repository.delete.assert_awaited_once_with(order.id)


async def test_service_without_log(make_service, confirmed_validator, order_fields):
    service = make_service(confirmed_validator, with_log=False)

    result = await service.create_order(OrderCreate(**order_fields))

    assert result["data"].status == OrderStatus.CONFIRMED
    with pytest.raises(OrderNotFoundError):
        await service.get_order_by_id(999)


async def test_workflow_is_logged(make_service, log, confirmed_validator, order_fields, tmp_path):
    service = make_service(confirmed_validator)

    await service.create_order(OrderCreate(**order_fields))
    await log.shutdown()

    content = "".join(p.read_text(encoding="utf-8") for p in (tmp_path / "log" / "order").rglob("*.log"))
    assert "Заказ создан" in content
    assert "Внешняя валидация завершена" in content
    assert "CONFIRMED" in content


def test_service_accepts_any_validator():
    service = OrderService(
        order_repository=AsyncMock(),
        customer_repository=AsyncMock(),
        validator=ExternalValidationService(delay=0),
    )

    assert service.log is None
