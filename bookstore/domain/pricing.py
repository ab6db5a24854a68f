# bookstore/domain/pricing.py
from decimal import Decimal


def line_price(unit_price: Decimal, quantity: int) -> Decimal:
    """Cena pozycji: cena jednostkowa * ilosc, bez zaokraglania."""
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValueError(f"Quantity must be a positive integer, got: {quantity!r}")
    return Decimal(unit_price) * quantity
