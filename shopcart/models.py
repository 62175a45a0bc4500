from sqlalchemy import CheckConstraint, Column, Integer, Numeric, String, Text

from .database import Base

# upper bound of the 32-bit INTEGER columns (ids, quantity)
INT_MAX = 2**31 - 1


# 👤 Account
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash, never the raw value


# 🛒 Cart line
class CartItem(Base):
    __tablename__ = "cart"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    quantity = Column(Integer, nullable=False)
    image = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_cart_price_nonneg"),
        CheckConstraint("quantity >= 1", name="ck_cart_quantity_pos"),
    )
