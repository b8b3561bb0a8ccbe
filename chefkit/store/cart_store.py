from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from dataclasses import replace
from typing import Any, Callable, Iterator, List, Tuple

from pydantic import ValidationError

from chefkit.errors import CartNotLoadedError, InvalidProductError, StorageError
from chefkit.store.cart_models import (
    CartEvent,
    CartEventKind,
    CartLineItem,
    ProductId,
    dump_cart,
    parse_cart,
)
from chefkit.store.cart_storage import CartStorage

logger = logging.getLogger(__name__)

DEFAULT_CART_KEY = "chefkit_cart"

CartListener = Callable[[CartEvent], None]


def _field(product: Any, *names: str, default: Any = None) -> Any:
    for name in names:
        if isinstance(product, Mapping):
            if product.get(name) is not None:
                return product[name]
        elif getattr(product, name, None) is not None:
            return getattr(product, name)
    return default


def snapshot_product(product: Any, quantity: int) -> CartLineItem:
    """Freeze the display and pricing fields of a catalog product into a line item."""
    product_id = _field(product, "id")
    if product_id is None:
        raise InvalidProductError("product has no id")

    price = _field(product, "price")
    try:
        price = float(price)
    except (TypeError, ValueError):
        raise InvalidProductError(f"product {product_id!r} has no valid price") from None
    if not math.isfinite(price) or price < 0:
        raise InvalidProductError(f"product {product_id!r} has invalid price {price}")

    servings = _field(product, "servings")
    return CartLineItem(
        id=product_id,
        title=str(_field(product, "title", default="")),
        short_description=str(_field(product, "short_description", "shortDescription", default="")),
        image=str(_field(product, "image", default="")),
        cuisine=str(_field(product, "cuisine", default="")),
        servings=int(servings) if servings is not None else None,
        price=price,
        quantity=quantity,
    )


class CartStore:
    """Shopping cart of one client session.

    Line items are kept in insertion order, one per product id. Every
    effective mutation is written through to ``storage`` under ``key``;
    storage failures are logged and the in-memory cart stays authoritative.

    Mutations return a :class:`CartEvent` describing what happened, the
    notification text to show and the resulting snapshot. The same event is
    handed to ``on_event`` when one is given.
    """

    def __init__(
        self,
        storage: CartStorage,
        key: str = DEFAULT_CART_KEY,
        on_event: CartListener | None = None,
    ) -> None:
        self.storage = storage
        self.key = key
        self.on_event = on_event
        self._items: List[CartLineItem] | None = None

    @property
    def loaded(self) -> bool:
        return self._items is not None

    def load(self) -> Tuple[CartLineItem, ...]:
        try:
            blob = self.storage.load(self.key)
        except StorageError:
            logger.exception("Error loading cart %s, starting empty", self.key)
            blob = None

        items: List[CartLineItem] = []
        if blob:
            try:
                items = parse_cart(blob)
            except ValidationError as e:
                logger.error("Error loading cart %s, starting empty: %s", self.key, e)
                items = []
            else:
                items = self._dedupe(items)

        self._items = items
        logger.info("Cart %s hydrated with %d line items", self.key, len(items))
        return self.items()

    @staticmethod
    def _dedupe(items: List[CartLineItem]) -> List[CartLineItem]:
        merged: dict[ProductId, CartLineItem] = {}
        for item in items:
            if item.id in merged:
                merged[item.id].quantity += item.quantity
            else:
                merged[item.id] = item
        return list(merged.values())

    @property
    def _lines(self) -> List[CartLineItem]:
        if self._items is None:
            raise CartNotLoadedError("CartStore.load() must be called before using the cart")
        return self._items

    def _find(self, id: ProductId) -> CartLineItem | None:
        for item in self._lines:
            if item.id == id:
                return item
        return None

    def _persist(self) -> None:
        try:
            self.storage.save(self.key, dump_cart(self._lines))
        except StorageError:
            logger.exception("Error saving cart %s, keeping in-memory state", self.key)

    def _emit(self, kind: CartEventKind, message: str | None = None) -> CartEvent:
        if kind is not CartEventKind.UNCHANGED:
            self._persist()
        event = CartEvent(kind=kind, message=message, items=self.items())
        if self.on_event is not None:
            try:
                self.on_event(event)
            except Exception:
                logger.exception("Cart listener failed on %s", kind.value)
        return event

    # queries
    def items(self) -> Tuple[CartLineItem, ...]:
        return tuple(replace(item) for item in self._lines)

    def get(self, id: ProductId) -> CartLineItem | None:
        item = self._find(id)
        return replace(item) if item is not None else None

    def total_price(self) -> float:
        return sum((item.price * item.quantity for item in self._lines), 0.0)

    def item_count(self) -> int:
        return sum(item.quantity for item in self._lines)

    def line_count(self) -> int:
        return len(self._lines)

    def __len__(self) -> int:
        return self.line_count()

    def __contains__(self, id: object) -> bool:
        return any(item.id == id for item in self._lines)

    def __iter__(self) -> Iterator[CartLineItem]:
        return iter(self.items())

    # mutations
    def add_item(self, product: Any, quantity: int = 1) -> CartEvent:
        if quantity is None or quantity < 1:
            logger.warning("Non-positive quantity %r for add_item, using 1", quantity)
            quantity = 1

        snapshot = snapshot_product(product, int(quantity))
        existing = self._find(snapshot.id)
        if existing is not None:
            existing.quantity += snapshot.quantity
            return self._emit(
                CartEventKind.QUANTITY_UPDATED,
                f"Updated {snapshot.title} quantity in cart!",
            )

        self._lines.append(snapshot)
        return self._emit(CartEventKind.ADDED, f"Added {snapshot.title} to cart!")

    def remove_item(self, id: ProductId) -> CartEvent:
        existing = self._find(id)
        if existing is None:
            return self._emit(CartEventKind.UNCHANGED)
        self._lines.remove(existing)
        return self._emit(CartEventKind.REMOVED, "Item removed from cart")

    def set_quantity(self, id: ProductId, quantity: int) -> CartEvent:
        quantity = int(quantity)
        if quantity <= 0:
            return self.remove_item(id)
        existing = self._find(id)
        if existing is None:
            return self._emit(CartEventKind.UNCHANGED)
        existing.quantity = quantity
        return self._emit(CartEventKind.QUANTITY_SET)

    def clear(self) -> CartEvent:
        self._lines.clear()
        return self._emit(CartEventKind.CLEARED, "Cart cleared")
