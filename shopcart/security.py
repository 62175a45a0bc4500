# shopcart/security.py
from email_validator import EmailNotValidError, validate_email
from passlib.context import CryptContext
from starlette.concurrency import run_in_threadpool


class PasswordHasher:
    """bcrypt hashing with a configurable work factor.

    passlib's bcrypt backend is CPU bound, so both operations are pushed to
    the threadpool and the event loop keeps serving other requests.
    """

    def __init__(self, rounds: int = 10):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    async def hash(self, password: str) -> str:
        return await run_in_threadpool(self.context.hash, password)

    async def verify(self, password: str, hashed_password: str) -> bool:
        # An unreadable stored hash raises (UnknownHashError / ValueError)
        # instead of returning False; callers turn that into a 500.
        return await run_in_threadpool(self.context.verify, password, hashed_password)


def is_valid_email(email) -> bool:
    if not email or not isinstance(email, str):
        return False
    try:
        # syntax only; .test domains allowed, other special-use names (.local) are not
        validate_email(email, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return False
    return True
