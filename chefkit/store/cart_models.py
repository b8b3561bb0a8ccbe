from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import List, Tuple

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, PositiveInt, TypeAdapter

ProductId = int | str


@dataclass(slots=True)
class CartLineItem:
    id: ProductId
    title: str
    short_description: str
    image: str
    cuisine: str
    servings: int | None
    price: float
    quantity: int

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class CartEventKind(str, Enum):
    ADDED = "added"
    QUANTITY_UPDATED = "quantity_updated"
    QUANTITY_SET = "quantity_set"
    REMOVED = "removed"
    CLEARED = "cleared"
    UNCHANGED = "unchanged"


@dataclass(slots=True, frozen=True)
class CartEvent:
    kind: CartEventKind
    message: str | None
    items: Tuple[CartLineItem, ...]

    @property
    def changed(self) -> bool:
        return self.kind is not CartEventKind.UNCHANGED


def _to_cents(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


@dataclass(slots=True, frozen=True)
class CartSummary:
    subtotal: float
    tax: float
    delivery_fee: float
    grand_total: float

    def rounded(self) -> CartSummary:
        """Display view, values rounded half-up to cents."""
        return CartSummary(
            subtotal=_to_cents(self.subtotal),
            tax=_to_cents(self.tax),
            delivery_fee=_to_cents(self.delivery_fee),
            grand_total=_to_cents(self.grand_total),
        )


# persisted blob format
class CartLineItemRecord(BaseModel):
    id: ProductId
    title: str = ""
    short_description: str = Field("", alias="shortDescription")
    image: str = ""
    cuisine: str = ""
    servings: int | None = None
    price: NonNegativeFloat
    quantity: PositiveInt

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @staticmethod
    def from_line_item(item: CartLineItem) -> CartLineItemRecord:
        return CartLineItemRecord(
            id=item.id,
            title=item.title,
            short_description=item.short_description,
            image=item.image,
            cuisine=item.cuisine,
            servings=item.servings,
            price=item.price,
            quantity=item.quantity,
        )

    def as_line_item(self) -> CartLineItem:
        return CartLineItem(
            id=self.id,
            title=self.title,
            short_description=self.short_description,
            image=self.image,
            cuisine=self.cuisine,
            servings=self.servings,
            price=self.price,
            quantity=self.quantity,
        )


cart_records_adapter = TypeAdapter(List[CartLineItemRecord])


def dump_cart(items: List[CartLineItem] | Tuple[CartLineItem, ...]) -> str:
    records = [CartLineItemRecord.from_line_item(item) for item in items]
    return cart_records_adapter.dump_json(records, by_alias=True).decode("utf-8")


def parse_cart(blob: str | bytes) -> List[CartLineItem]:
    return [record.as_line_item() for record in cart_records_adapter.validate_json(blob)]
