from __future__ import annotations

from typing import Iterable

from chefkit.store.cart_models import CartLineItem, CartSummary
from chefkit.store.cart_store import CartStore

TAX_RATE = 0.10
DELIVERY_FEE = 5.99


class PricingCalculator:
    """Order summary from a cart snapshot.

    Values keep full precision; use ``CartSummary.rounded()`` for display.
    """

    def __init__(self, tax_rate: float = TAX_RATE, delivery_fee: float = DELIVERY_FEE) -> None:
        self.tax_rate = tax_rate
        self.delivery_fee = delivery_fee

    def compute_summary(self, cart: CartStore | Iterable[CartLineItem]) -> CartSummary:
        items = cart.items() if isinstance(cart, CartStore) else tuple(cart)

        subtotal = sum((item.price * item.quantity for item in items), 0.0)
        tax = subtotal * self.tax_rate
        delivery_fee = self.delivery_fee if items else 0.0
        return CartSummary(
            subtotal=subtotal,
            tax=tax,
            delivery_fee=delivery_fee,
            grand_total=subtotal + tax + delivery_fee,
        )


def compute_summary(cart: CartStore | Iterable[CartLineItem]) -> CartSummary:
    return PricingCalculator().compute_summary(cart)
