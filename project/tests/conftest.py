"""Фикстуры pytest: временная база SQLite, репозитории, валидаторы, логгер."""

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from order_service.config import Settings
from order_service.main import create_app
from order_service.models.order import OrderStatus
from order_service.repositories.customer import CustomerRepository
from order_service.repositories.order import OrderRepository
from order_service.services.order import OrderService
from order_service.utils.database import build_engine, build_session_factory, init_db
from order_service.utils.log import Log


class FixedValidator:
    """Заглушка валидатора, всегда возвращает один и тот же вердикт."""

    def __init__(self, verdict: OrderStatus):
        self.verdict = verdict
        self.calls = 0

    async def validate_order(self) -> OrderStatus:
        self.calls += 1
        return self.verdict


class FailingValidator:
    def __init__(self):
        self.calls = 0

    async def validate_order(self) -> OrderStatus:
        self.calls += 1
        raise RuntimeError("validation service unavailable")


@pytest.fixture
def order_fields() -> dict:
    return {
        "customer_id": 1,
        "sku": "X",
        "quantity": 2,
        "price": Decimal("10.00"),
        "total_amount": Decimal("20.00"),
    }


@pytest.fixture
async def log(tmp_path):
    log = Log(str(tmp_path / "log"), log_print=False)
    yield log
    await log.shutdown()


@pytest.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'orders.db'}")
    factory = build_session_factory(engine)
    await init_db(engine, factory)  # клиенты 1 и 2
    yield factory
    await engine.dispose()


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def order_repository(session) -> OrderRepository:
    return OrderRepository(session)


@pytest.fixture
def customer_repository(session) -> CustomerRepository:
    return CustomerRepository(session)


@pytest.fixture
def confirmed_validator() -> FixedValidator:
    return FixedValidator(OrderStatus.CONFIRMED)


@pytest.fixture
def cancelled_validator() -> FixedValidator:
    return FixedValidator(OrderStatus.CANCELLED)


@pytest.fixture
def failing_validator() -> FailingValidator:
    return FailingValidator()


@pytest.fixture
def make_service(order_repository, customer_repository, log):
    def _make(validator, with_log: bool = True) -> OrderService:
        return OrderService(
            order_repository=order_repository,
            customer_repository=customer_repository,
            validator=validator,
            log=log if with_log else None,
        )
    return _make


@pytest.fixture
def app_settings(tmp_path) -> Settings:
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'api.db'}",
        LOG_DIR=str(tmp_path / "log"),
        LOG_PRINT="0",
        VALIDATION_DELAY=0,
    )


@pytest.fixture
def app(app_settings):
    return create_app(app_settings)


@pytest.fixture
def client(app, confirmed_validator):
    with TestClient(app, raise_server_exceptions=False) as client:
        # lifespan уже выполнен, подменяем внешний сервис
        app.state.validator = confirmed_validator
        yield client
