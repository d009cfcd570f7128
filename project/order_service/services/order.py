# order_service/services/order.py

from typing import Any, Dict, Optional

from order_service.exceptions import CustomerNotFoundError, OrderNotFoundError
from order_service.models.order import Order as OrderModel, OrderStatus
from order_service.repositories.customer import CustomerRepository
from order_service.repositories.order import OrderRepository
from order_service.schemas.order import OrderCreate, OrderUpdate
from order_service.services.validation import OrderValidator
from order_service.utils.log import Log

ORDER_CREATED_MESSAGE = "Order created successfully"
ORDER_DELETED_MESSAGE = "Order deleted successfully"


class OrderService:
    """
    Сценарии работы с заказами поверх репозиториев и внешней валидации.
    Состояния между вызовами не хранит: один экземпляр на запрос.
    Ошибки репозиториев и валидатора пробрасываются без изменений,
    отсутствующая запись превращается в NotFoundError.
    """

    def __init__(
        self,
        order_repository: OrderRepository,
        customer_repository: CustomerRepository,
        validator: OrderValidator,
        log: Optional[Log] = None,
    ):
        self.order_repository = order_repository
        self.customer_repository = customer_repository
        self.validator = validator
        self.log = log

    async def get_order_by_id(self, id: int) -> OrderModel:
        """
        Чтение заказа по ID.
        """
        order = await self.order_repository.find_one(id)
        if order is None:
            if self.log:
                await self.log.log_error("order", "Заказ не найден", {"id": id})
            raise OrderNotFoundError(id)

        if self.log:
            await self.log.log_info("order", "Заказ загружен", {"id": id})
        return order

    async def get_all_orders(self, page: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        """
        Список заказов постранично (по умолчанию page=1, limit=10).
        """
        result = await self.order_repository.find_all(page, limit)
        if self.log:
            await self.log.log_info("order", f"{len(result['data'])} заказов загружено", {
                "page": result["page"], "limit": result["limit"], "total": result["total"],
            })
        return result

    async def get_orders_by_customer(
        self, customer_id: int, page: Optional[int] = None, limit: Optional[int] = None
    ) -> Dict[str, Any]:
        result = await self.order_repository.find_by_customer_id(customer_id, page, limit)
        if self.log:
            await self.log.log_info("order", "Заказы покупателя загружены", {
                "customer_id": customer_id, "total": result["total"],
            })
        return result

    async def get_orders_by_status(
        self, status: OrderStatus, page: Optional[int] = None, limit: Optional[int] = None
    ) -> Dict[str, Any]:
        result = await self.order_repository.find_by_status(status, page, limit)
        if self.log:
            await self.log.log_info("order", "Заказы по статусу загружены", {
                "status": status, "total": result["total"],
            })
        return result

    async def create_order(self, order: OrderCreate) -> Dict[str, Any]:
        """
        Создание заказа:
          1. покупатель должен существовать, иначе CustomerNotFoundError и ничего не сохраняется;
          2. заказ сохраняется в статусе PENDING;
          3. внешний сервис возвращает CONFIRMED или CANCELLED
             (если он падает, заказ остаётся PENDING, ошибка уходит вызывающему);
          4. статус заказа обновляется вердиктом.
        """
        customer = await self.customer_repository.get_one(order.customer_id)
        if customer is None:
            if self.log:
                await self.log.log_error("order", "Покупатель не найден", {"customer_id": order.customer_id})
            raise CustomerNotFoundError(order.customer_id)

        db_order = await self.order_repository.create(order.model_dump())
        if self.log:
            await self.log.log_info("order", "Заказ создан", {"id": db_order.id, "status": db_order.status})

        verdict = await self.validator.validate_order()
        if self.log:
            await self.log.log_info("order", "Внешняя валидация завершена", {"id": db_order.id, "status": verdict})

        db_order = await self.order_repository.update(db_order.id, {"status": verdict})
        return {"message": ORDER_CREATED_MESSAGE, "data": db_order}

    async def update(self, id: int, order_update: OrderUpdate) -> OrderModel:
        """
        Обновление заказа по ID, изменяются только переданные поля.
        """
        # все обновляемые колонки NOT NULL, явный null равен "не передано"
        fields = order_update.model_dump(exclude_unset=True, exclude_none=True)
        db_order = await self.order_repository.update(id, fields)
        if db_order is None:
            if self.log:
                await self.log.log_error("order", "Заказ не найден для обновления", {"id": id})
            raise OrderNotFoundError(id)

        if self.log:
            await self.log.log_info("order", "Заказ обновлён", {"id": id, "fields": fields})
        return db_order

    async def delete(self, id: int) -> Dict[str, str]:
        """
        Удаление заказа по ID (soft delete).
        """
        if await self.order_repository.find_one(id) is None:
            if self.log:
                await self.log.log_error("order", "Заказ не найден для удаления", {"id": id})
            raise OrderNotFoundError(id)

        # строку могли удалить между чтением и soft delete
        if not await self.order_repository.delete(id):
            if self.log:
                await self.log.log_error("order", "Заказ удалён параллельным запросом", {"id": id})
            raise OrderNotFoundError(id)

        if self.log:
            await self.log.log_info("order", "Заказ удалён", {"id": id})
        return {"message": ORDER_DELETED_MESSAGE}
