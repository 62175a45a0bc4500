# shopcart/main.py
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from . import __version__, auth, cart
from .config import Settings, load_settings
from .database import Database
from .errors import register_exception_handlers
from .log import configure_logging, get_logger
from .security import PasswordHasher

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    settings: Settings = app.state.settings
    db = Database(settings.sqlalchemy_url, echo=settings.db_echo)
    app.state.db = db
    try:
        # users must exist for the account routes; cart is created on demand
        await db.create_users_table()
        logger.info("Connected to store")
        yield
    finally:
        await db.dispose()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="Shopping Cart API",
        description="Account registration/login and shopping cart CRUD with checkout",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.hasher = PasswordHasher(rounds=settings.bcrypt_rounds)

    # ✅ CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # ✅ Routers
    app.include_router(auth.router)
    app.include_router(cart.router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return "Shopping cart API is running"

    @app.get("/create-cart-table", response_class=PlainTextResponse)
    async def create_cart_table(request: Request):
        try:
            await request.app.state.db.create_cart_table()
        except SQLAlchemyError:
            logger.exception("Cart table creation failed")
            return PlainTextResponse("Error creating cart table", status_code=500)
        return "Cart table created!"

    return app


app = create_app()


def run() -> None:
    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
