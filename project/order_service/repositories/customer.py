# order_service/repositories/customer.py

from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from order_service.models.customer import Customer as CustomerModel


class CustomerRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_one(self, id: int) -> Optional[CustomerModel]:
        """Поиск покупателя по ID (удалённые через soft delete не возвращаются)."""
        result = await self.session.execute(
            select(CustomerModel).where(CustomerModel.id == id, CustomerModel.deleted_at.is_(None))
        )
        return result.scalar_one_or_none()
