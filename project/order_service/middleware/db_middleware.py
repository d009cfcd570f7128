# order_service/middleware/db_middleware.py

from starlette.types import ASGIApp, Receive, Scope, Send


class DBSessionMiddleware:
    """
    Открывает AsyncSession на время HTTP-запроса и кладёт её в request.state.db.
    Фабрика сессий берётся из app.state.session_factory (создаётся в lifespan).
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        session_factory = scope["app"].state.session_factory

        # убедимся, что state есть
        state = scope.setdefault("state", {})
        state["db"] = session_factory()
        try:
            await self.app(scope, receive, send)
        finally:
            # закрываем сессию только после завершения запроса
            await state["db"].close()
