from fastapi import Request

from chefkit.clients.meal_kit_client import MealKitClient
from chefkit.clients.review_client import ReviewClient
from chefkit.store.cart_store import CartStore
from chefkit.store.pricing import PricingCalculator


def get_cart_store(request: Request) -> CartStore:
    return request.app.state.cart_store


def get_pricing(request: Request) -> PricingCalculator:
    return request.app.state.pricing


def get_meal_kit_client(request: Request) -> MealKitClient:
    return request.app.state.meal_kit_client


def get_review_client(request: Request) -> ReviewClient:
    return request.app.state.review_client
