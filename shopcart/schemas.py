# shopcart/schemas.py
from decimal import Decimal
from typing import Any, List, Literal

from pydantic import BaseModel, Field, TypeAdapter, field_validator

from .models import INT_MAX


# 👤 Account
class Credentials(BaseModel):
    # Untyped: the routes report bad values as "Invalid email format" /
    # "Password cannot be empty" instead of a validation error.
    email: Any = None
    password: Any = None


class MessageOut(BaseModel):
    message: str


# 🛒 Cart line
class CartItemIn(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    quantity: int = Field(ge=1, le=INT_MAX, strict=True)
    image: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)

    @field_validator("name", "image", "description")
    @classmethod
    def not_blank(cls, value: str) -> str:
        # stored exactly as sent; whitespace-only is treated as empty
        if not value.strip():
            raise ValueError("must not be blank")
        return value


CartBatch = TypeAdapter(List[CartItemIn])


class CartItemOut(BaseModel):
    id: int
    name: str
    price: float
    quantity: int
    image: str
    description: str

    class Config:
        from_attributes = True


class CartAddOut(MessageOut):
    inserted: int


class CartDeleteOut(MessageOut):
    id: int


class QuantityUpdate(BaseModel):
    id: int = Field(ge=1, strict=True)
    action: Literal["increment", "decrement"]


class QuantityOut(MessageOut):
    id: int
    quantity: int


# 🧾 Checkout
class CheckoutOut(MessageOut):
    items: List[CartItemOut]
    total: float
