from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import PositiveInt

from chefkit.api.dependencies import get_cart_store, get_meal_kit_client, get_pricing
from chefkit.clients.meal_kit_client import MealKitClient
from chefkit.errors import CollaboratorError, InvalidProductError, MealKitNotFoundError
from chefkit.store.cart_models import ProductId
from chefkit.store.cart_store import CartStore
from chefkit.store.pricing import PricingCalculator

from .cart_contracts import (
    CartMutationResponse,
    CartResponse,
    CartSummaryResponse,
    SetQuantityRequest,
)

cart_router = APIRouter(prefix="/cart")

Store = Annotated[CartStore, Depends(get_cart_store)]


def _line_id(store: CartStore, id: str) -> ProductId:
    # path params arrive as text while catalog ids may be integers
    for item in store.items():
        if str(item.id) == id:
            return item.id
    return id


@cart_router.get("/")
async def get_cart(store: Store) -> CartResponse:
    return CartResponse.from_items(store.items())


@cart_router.get("/summary")
async def get_cart_summary(
    store: Store,
    pricing: Annotated[PricingCalculator, Depends(get_pricing)],
) -> CartSummaryResponse:
    return CartSummaryResponse.from_summary(pricing.compute_summary(store))


@cart_router.post(
    "/add/{meal_kit_id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully added meal kit to cart",
        },
        HTTPStatus.NOT_FOUND: {
            "description": "Failed to add meal kit as one was not found",
        },
        HTTPStatus.BAD_GATEWAY: {
            "description": "Failed to fetch meal kit from the catalog",
        },
    },
)
async def add_to_cart(
    meal_kit_id: str,
    store: Store,
    catalog: Annotated[MealKitClient, Depends(get_meal_kit_client)],
    quantity: Annotated[PositiveInt, Query()] = 1,
) -> CartMutationResponse:
    try:
        meal_kit = await catalog.get_meal_kit(meal_kit_id)
    except MealKitNotFoundError:
        raise HTTPException(
            HTTPStatus.NOT_FOUND,
            f"Requested resource /meal-kits/{meal_kit_id} was not found",
        )
    except CollaboratorError:
        raise HTTPException(
            HTTPStatus.BAD_GATEWAY,
            "Failed to add meal kit to cart. Please try again.",
        )

    try:
        event = store.add_item(meal_kit, quantity)
    except InvalidProductError as e:
        raise HTTPException(HTTPStatus.UNPROCESSABLE_ENTITY, str(e))

    return CartMutationResponse.from_event(event)


@cart_router.patch("/{id}")
async def set_cart_item_quantity(
    id: str,
    info: SetQuantityRequest,
    store: Store,
) -> CartMutationResponse:
    event = store.set_quantity(_line_id(store, id), info.quantity)
    return CartMutationResponse.from_event(event)


@cart_router.delete("/{id}")
async def remove_cart_item(id: str, store: Store) -> CartMutationResponse:
    event = store.remove_item(_line_id(store, id))
    return CartMutationResponse.from_event(event)


@cart_router.delete("/")
async def clear_cart(store: Store) -> CartMutationResponse:
    return CartMutationResponse.from_event(store.clear())
