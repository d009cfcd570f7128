# order_service/utils/database.py

from datetime import datetime, timezone
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy import select, func

# ────────────── Base для моделей ──────────────
Base = declarative_base()  # базовый класс для всех моделей SQLAlchemy


def utcnow() -> datetime:
    """Текущее время в UTC, используется для created_at / updated_at / deleted_at."""
    return datetime.now(timezone.utc)


# ────────────── Демонстрационные покупатели ──────────────
SAMPLE_CUSTOMERS = [
    {"name": "John Doe", "email": "john.doe@example.com", "phone": "123-456-7890", "address": "123 Main St"},
    {"name": "Jane Smith", "email": "jane.smith@example.com", "phone": "987-654-3210", "address": "456 Elm St"},
]


# ────────────── Асинхронный движок ──────────────
def build_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(
        database_url,
        echo=False  # True можно включить для отладки SQL
    )


# ────────────── Асинхронная сессия ──────────────
def build_session_factory(engine: AsyncEngine) -> sessionmaker:
    # объекты остаются доступными после commit, без ленивой подгрузки
    return sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


# ────────────── Инициализация базы данных ──────────────
async def init_db(engine: AsyncEngine, session_factory: sessionmaker) -> int:
    """
    Создаёт все таблицы в базе данных (если ещё не созданы).
    Если таблица customer пуста, добавляет двух демонстрационных покупателей.
    Возвращает количество добавленных покупателей.
    """
    # модели должны быть зарегистрированы в Base.metadata до create_all
    from order_service.models.customer import Customer
    from order_service.models.order import Order  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as session:
        count = await session.scalar(select(func.count()).select_from(Customer))
        if count:
            return 0

        session.add_all([Customer(**data) for data in SAMPLE_CUSTOMERS])
        await session.commit()
        return len(SAMPLE_CUSTOMERS)
