# order_service/repositories/order.py

from typing import Any, Dict, Optional
from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from order_service.models.order import Order as OrderModel, OrderStatus
from order_service.utils.database import utcnow
from order_service.utils.pagination import resolve_pagination, total_pages


class OrderRepository:
    """
    Доступ к таблице order.
    Все чтения пропускают заказы, удалённые через soft delete (deleted_at IS NOT NULL).
    Каждая запись завершается commit.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    # ────────────── CREATE ──────────────
    async def create(self, fields: Dict[str, Any]) -> OrderModel:
        """Создаёт заказ в статусе PENDING (статус из fields игнорируется)."""
        data = {key: value for key, value in fields.items() if key != "status"}
        order = OrderModel(**data, status=OrderStatus.PENDING)
        self.session.add(order)
        await self.session.commit()
        await self.session.refresh(order)
        return order

    # ────────────── READ ──────────────
    async def find_one(self, id: int) -> Optional[OrderModel]:
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.id == id, OrderModel.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()

    async def find_all(self, page: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        """Все заказы, сначала новые."""
        return await self._paginate(page, limit)

    async def find_by_customer_id(
        self, customer_id: int, page: Optional[int] = None, limit: Optional[int] = None
    ) -> Dict[str, Any]:
        return await self._paginate(page, limit, OrderModel.customer_id == customer_id)

    async def find_by_status(
        self, status: OrderStatus, page: Optional[int] = None, limit: Optional[int] = None
    ) -> Dict[str, Any]:
        return await self._paginate(page, limit, OrderModel.status == status)

    async def _paginate(self, page: Optional[int], limit: Optional[int], *criteria) -> Dict[str, Any]:
        page, limit, offset = resolve_pagination(page, limit)
        where = [OrderModel.deleted_at.is_(None), *criteria]

        total = await self.session.scalar(
            select(func.count()).select_from(OrderModel).where(*where)
        )
        result = await self.session.execute(
            select(OrderModel)
            .where(*where)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .offset(offset)
            .limit(limit)
        )
        return {
            "data": list(result.scalars().all()),
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": total_pages(total, limit),
        }

    # ────────────── UPDATE ──────────────
    async def update(self, id: int, fields: Dict[str, Any]) -> Optional[OrderModel]:
        """
        Частичное обновление: читаем заказ, переносим переданные поля, сохраняем.
        Чтение и запись не атомарны, при параллельных обновлениях побеждает последний commit.
        """
        order = await self.find_one(id)
        if order is None:
            return None

        for key, value in fields.items():
            setattr(order, key, value)

        self.session.add(order)
        await self.session.commit()
        return order

    # ────────────── DELETE ──────────────
    async def delete(self, id: int) -> bool:
        """Soft delete: проставляет deleted_at."""
        now = utcnow()
        result = await self.session.execute(
            update(OrderModel)
            .where(OrderModel.id == id, OrderModel.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now)
        )
        await self.session.commit()
        return result.rowcount > 0

    async def hard_delete(self, id: int) -> bool:
        result = await self.session.execute(delete(OrderModel).where(OrderModel.id == id))
        await self.session.commit()
        return result.rowcount > 0

    async def restore(self, id: int) -> bool:
        """Снимает soft delete."""
        result = await self.session.execute(
            update(OrderModel)
            .where(OrderModel.id == id, OrderModel.deleted_at.is_not(None))
            .values(deleted_at=None, updated_at=utcnow())
        )
        await self.session.commit()
        return result.rowcount > 0
