# order_service/main.py

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import uvicorn
from dotenv import load_dotenv
from contextlib import asynccontextmanager

# --- загрузка переменных окружения (до чтения настроек) ---
load_dotenv()

from order_service.config import Settings, settings as default_settings
from order_service.utils.log import Log
from order_service.utils.database import build_engine, build_session_factory, init_db
from order_service.services.validation import ExternalValidationService
from order_service.middleware.db_middleware import DBSessionMiddleware
from order_service.routes import order


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings

    # --- sync логгер для старта/остановки ---
    boot_log = Log(settings.LOG_DIR, settings.LOG_PRINT)

    # ────────────── Lifespan ──────────────
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        boot_log.log_info_sync(target="startup", message="lifespan: startup начат")

        # Инициализация БД
        engine = build_engine(settings.DATABASE_URL)
        app.state.engine = engine
        app.state.session_factory = build_session_factory(engine)
        seeded = await init_db(engine, app.state.session_factory)
        boot_log.log_info_sync(target="startup", message="База инициализирована", data={"seeded_customers": seeded})

        app.state.validator = ExternalValidationService(
            delay=settings.VALIDATION_DELAY,
            threshold=settings.VALIDATION_THRESHOLD,
        )

        app.state.log = Log(settings.LOG_DIR, settings.LOG_PRINT)
        await app.state.log.log_info(target="startup", message="Async Log инициализирован")

        yield

        # shutdown
        await app.state.log.log_info(target="shutdown", message="Остановка приложения")
        await app.state.log.shutdown()
        await engine.dispose()
        boot_log.log_info_sync(target="shutdown", message="Log и БД корректно завершены")

    # ────────────── Создаём FastAPI приложение ──────────────
    app = FastAPI(title=settings.APP_TITLE, lifespan=lifespan)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # DB middleware для request.state.db
    app.add_middleware(DBSessionMiddleware)

    # Необработанные ошибки зависимостей (БД, внешняя валидация) -> 500
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        await request.app.state.log.log_error(
            "error", f"Необработанная ошибка: {exc!r}", {"path": request.url.path, "method": request.method}
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error"},
        )

    @app.get("/")
    def read_root():
        return {"message": settings.APP_TITLE}

    # ────────────── Подключение роутов ──────────────
    app.include_router(order.router, prefix=f"{settings.API_PREFIX}/orders", tags=["orders"])

    return app


app = create_app()

# ────────────── Запуск uvicorn ──────────────
if __name__ == "__main__":
    uvicorn.run(
        "order_service.main:app",
        host=default_settings.APP_HOST,
        port=default_settings.APP_PORT,
        log_level="info",
        reload=True
    )
