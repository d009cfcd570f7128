# order_service/services/validation.py

import asyncio
import random
from typing import Callable, Optional, Protocol

from order_service.config import settings
from order_service.models.order import OrderStatus


class OrderValidator(Protocol):
    async def validate_order(self) -> OrderStatus: ...


class ExternalValidationService:
    """
    Имитация внешнего сервиса подтверждения заказа.
    Ждёт фиксированную задержку (сетевая латентность), затем
    подтверждает заказ примерно в 70% случаев:
    random() > threshold -> CONFIRMED, иначе CANCELLED.
    """

    def __init__(
        self,
        delay: Optional[float] = None,
        threshold: Optional[float] = None,
        random_source: Callable[[], float] = random.random,
    ):
        self.delay = settings.VALIDATION_DELAY if delay is None else delay
        self.threshold = settings.VALIDATION_THRESHOLD if threshold is None else threshold
        self.random_source = random_source

    async def validate_order(self) -> OrderStatus:
        await asyncio.sleep(self.delay)
        if self.random_source() > self.threshold:
            return OrderStatus.CONFIRMED
        return OrderStatus.CANCELLED
