from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict

from chefkit.store.cart_models import CartEvent, CartLineItem, CartSummary, ProductId


class CartItemResponse(BaseModel):
    id: ProductId
    title: str
    short_description: str
    image: str
    cuisine: str
    servings: int | None
    price: float
    quantity: int
    line_total: float

    @staticmethod
    def from_line_item(item: CartLineItem) -> CartItemResponse:
        return CartItemResponse(
            id=item.id,
            title=item.title,
            short_description=item.short_description,
            image=item.image,
            cuisine=item.cuisine,
            servings=item.servings,
            price=item.price,
            quantity=item.quantity,
            line_total=item.line_total,
        )


class CartResponse(BaseModel):
    items: List[CartItemResponse]
    item_count: int
    total_price: float

    @staticmethod
    def from_items(items: tuple[CartLineItem, ...]) -> CartResponse:
        return CartResponse(
            items=[CartItemResponse.from_line_item(item) for item in items],
            item_count=sum(item.quantity for item in items),
            total_price=sum((item.line_total for item in items), 0.0),
        )


class CartMutationResponse(BaseModel):
    cart: CartResponse
    event: str
    notification: str | None

    @staticmethod
    def from_event(event: CartEvent) -> CartMutationResponse:
        return CartMutationResponse(
            cart=CartResponse.from_items(event.items),
            event=event.kind.value,
            notification=event.message,
        )


class CartSummaryResponse(BaseModel):
    subtotal: float
    tax: float
    delivery_fee: float
    grand_total: float

    @staticmethod
    def from_summary(summary: CartSummary) -> CartSummaryResponse:
        rounded = summary.rounded()
        return CartSummaryResponse(
            subtotal=rounded.subtotal,
            tax=rounded.tax,
            delivery_fee=rounded.delivery_fee,
            grand_total=rounded.grand_total,
        )


class SetQuantityRequest(BaseModel):
    quantity: int

    model_config = ConfigDict(extra="forbid")
