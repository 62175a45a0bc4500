# shopcart/cart.py
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from pydantic import ValidationError
from sqlalchemy import case, delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from .database import get_session
from .errors import server_error
from .log import get_logger
from .models import INT_MAX, CartItem
from .schemas import (
    CartAddOut,
    CartBatch,
    CartDeleteOut,
    CartItemOut,
    CheckoutOut,
    QuantityOut,
    QuantityUpdate,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/api", tags=["cart"])

CENT = Decimal("0.01")


def cart_total(items: Iterable[CartItem]) -> Decimal:
    total = sum((Decimal(item.price) * item.quantity for item in items), Decimal("0.00"))
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Item not found")


@router.get("/cart", response_model=List[CartItemOut])
async def list_cart(session: AsyncSession = Depends(get_session)):
    try:
        result = await session.execute(select(CartItem).order_by(CartItem.id))
    except SQLAlchemyError:
        logger.exception("Cart fetch failed")
        raise server_error("Error fetching cart")
    return result.scalars().all()


@router.post("/cart", response_model=CartAddOut, status_code=status.HTTP_201_CREATED)
async def add_items(payload: Any = Body(None), session: AsyncSession = Depends(get_session)):
    if not isinstance(payload, list) or not payload:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cart payload must be a non-empty list")

    # One bad item rejects the whole batch before anything is written
    try:
        items = CartBatch.validate_python(payload)
    except ValidationError as exc:
        logger.info("Rejected cart batch of %d item(s): %d error(s)", len(payload), exc.error_count())
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="All fields are required")

    session.add_all([CartItem(**item.model_dump()) for item in items])
    try:
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Cart insert failed")
        raise server_error("Error inserting into cart")

    logger.info("Added %d item(s) to cart", len(items))
    return {"message": "Items added successfully", "inserted": len(items)}


@router.put("/cart/update-quantity", response_model=QuantityOut)
async def update_quantity(payload: Any = Body(None), session: AsyncSession = Depends(get_session)):
    try:
        change = QuantityUpdate.model_validate(payload)
    except ValidationError as exc:
        bad_fields = {err["loc"][0] for err in exc.errors() if err["loc"]}
        if "id" in bad_fields or not bad_fields:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid item id")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid action")

    if change.id > INT_MAX:
        # no row can carry an id past the column range
        raise not_found()

    if change.action == "increment":
        # capped at the column maximum
        new_quantity = case((CartItem.quantity < INT_MAX, CartItem.quantity + 1), else_=CartItem.quantity)
    else:
        # floor of 1
        new_quantity = case((CartItem.quantity > 1, CartItem.quantity - 1), else_=CartItem.quantity)

    # Single UPDATE ... RETURNING, so concurrent calls cannot lose an update
    stmt = (
        update(CartItem)
        .where(CartItem.id == change.id)
        .values(quantity=new_quantity)
        .returning(CartItem.quantity)
        .execution_options(synchronize_session=False)
    )
    try:
        result = await session.execute(stmt)
        quantity = result.scalar_one_or_none()
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Quantity update failed for item %s", change.id)
        raise server_error("Error updating quantity")

    if quantity is None:
        raise not_found()
    return {"message": "Quantity updated", "id": change.id, "quantity": quantity}


@router.delete("/cart/{item_id}", response_model=CartDeleteOut)
async def remove_item(item_id: int, session: AsyncSession = Depends(get_session)):
    if not 1 <= item_id <= INT_MAX:
        raise not_found()

    stmt = delete(CartItem).where(CartItem.id == item_id).execution_options(synchronize_session=False)
    try:
        result = await session.execute(stmt)
        await session.commit()
    except SQLAlchemyError:
        await session.rollback()
        logger.exception("Delete failed for item %s", item_id)
        raise server_error("Error deleting item")

    if result.rowcount == 0:
        raise not_found()
    return {"message": "Item removed from cart", "id": item_id}


# 🧾 Checkout: total the cart and clear it in one transaction
@router.post("/checkout", response_model=CheckoutOut)
async def checkout(session: AsyncSession = Depends(get_session)):
    try:
        async with session.begin():
            result = await session.execute(select(CartItem).order_by(CartItem.id).with_for_update())
            items = result.scalars().all()
            total = cart_total(items)
            if items:
                # only the rows that were totalled; later additions stay in the cart
                await session.execute(
                    delete(CartItem)
                    .where(CartItem.id.in_([item.id for item in items]))
                    .execution_options(synchronize_session=False)
                )
    except SQLAlchemyError:
        logger.exception("Checkout failed")
        raise server_error("Error during checkout")

    logger.info("Checked out %d item(s), total %s", len(items), total)
    return {"message": "Checkout complete", "items": items, "total": total}
