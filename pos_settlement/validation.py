"""Validation helpers for ledger and session precondition checks.

Each helper raises the taxonomy error for its concern so call sites stay
one line long.
"""

from collections.abc import Sized

from .errors import (
    EmptyLedgerError,
    InvalidDiscountError,
    InvalidPriceError,
    InvalidQuantityError,
    errmsg,
)


def require_positive_quantity(quantity: int, error_msg: str = errmsg.QUANTITY_POSITIVE) -> None:
    """Require that a quantity is greater than zero."""
    if quantity <= 0:
        raise InvalidQuantityError(error_msg)


def require_non_negative_price(price: int, error_msg: str = errmsg.PRICE_NON_NEGATIVE) -> None:
    """Require that a unit price is zero or greater."""
    if price < 0:
        raise InvalidPriceError(error_msg)


def require_non_negative_discount(discount: int, error_msg: str = errmsg.DISCOUNT_NON_NEGATIVE) -> None:
    """Require that a discount is zero or greater."""
    if discount < 0:
        raise InvalidDiscountError(error_msg)


def require_not_empty(items: Sized, error_msg: str = errmsg.LEDGER_EMPTY) -> None:
    """Require that a collection has at least one element."""
    if not len(items):
        raise EmptyLedgerError(error_msg)
