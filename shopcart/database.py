# shopcart/database.py
from typing import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .log import get_logger

logger = get_logger(__name__)

# Base declarative
Base = declarative_base()


class Database:
    """Store handle: one async engine plus its session factory.

    Built by the application lifespan and kept on ``app.state.db`` until
    shutdown, when :meth:`dispose` closes the pooled connections.
    """

    def __init__(self, url, echo: bool = False):
        self.engine = create_async_engine(url, echo=echo, future=True)
        self.session_maker = sessionmaker(self.engine, expire_on_commit=False, class_=AsyncSession)

    async def create_users_table(self) -> None:
        from .models import User

        async with self.engine.begin() as conn:
            await conn.run_sync(User.__table__.create, checkfirst=True)

    async def create_cart_table(self) -> None:
        from .models import CartItem

        async with self.engine.begin() as conn:
            await conn.run_sync(CartItem.__table__.create, checkfirst=True)

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Store connections closed")


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    async with request.app.state.db.session_maker() as session:
        yield session
