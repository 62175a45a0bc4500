from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_session
from .errors import server_error
from .log import get_logger
from .models import User
from .schemas import Credentials, MessageOut
from .security import is_valid_email

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def check_credentials(payload: Credentials) -> None:
    if not is_valid_email(payload.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid email format")
    if not payload.password or not isinstance(payload.password, str):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Password cannot be empty")


async def find_user(session: AsyncSession, email: str):
    try:
        result = await session.execute(select(User).where(User.email == email))
    except SQLAlchemyError:
        logger.exception("User lookup failed")
        raise server_error("Server error")
    return result.scalar_one_or_none()


# ✅ Registration
@router.post("/register", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
async def register_user(payload: Credentials, request: Request, session: AsyncSession = Depends(get_session)):
    check_credentials(payload)

    if await find_user(session, payload.email):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")

    try:
        password_hash = await request.app.state.hasher.hash(payload.password)
    except Exception:
        logger.exception("Password hashing failed")
        raise server_error("Error hashing password")

    session.add(User(email=payload.email, password=password_hash))
    try:
        await session.commit()
    except IntegrityError:
        # lost a race with a concurrent registration for the same email
        await session.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User already exists")
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("User insert failed")
        raise server_error("Database error")

    logger.debug("Registered a new user")
    return {"message": "User registered successfully"}


# ✅ Login
@router.post("/login", response_model=MessageOut)
async def login_user(payload: Credentials, request: Request, session: AsyncSession = Depends(get_session)):
    """Check an email/password pair. No session or token is issued."""
    check_credentials(payload)

    user = await find_user(session, payload.email)
    if user is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="User not found")

    try:
        is_match = await request.app.state.hasher.verify(payload.password, user.password)
    except Exception:
        logger.exception("Password comparison failed")
        raise server_error("Error comparing passwords")

    if not is_match:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid credentials")
    return {"message": "Login successful"}
