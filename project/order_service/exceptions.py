# order_service/exceptions.py

"""
Ошибки предметной области.

NotFoundError наследует HTTPException, поэтому сервисный слой поднимает его
напрямую, а FastAPI сам отвечает 404 без отдельного обработчика.
"""

from fastapi import HTTPException, status


class NotFoundError(HTTPException):
    entity = "Resource"

    def __init__(self, id: int):
        self.id = id
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"{self.entity} not found")


class OrderNotFoundError(NotFoundError):
    entity = "Order"


class CustomerNotFoundError(NotFoundError):
    entity = "Customer"
