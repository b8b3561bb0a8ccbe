from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat

from chefkit.clients.client_models import MealKit, MealKitDraft
from chefkit.store.cart_models import ProductId

DIFFICULTY_LEVELS = ("Easy", "Medium", "Hard")


class MealKitResponse(BaseModel):
    id: ProductId
    title: str
    short_description: str
    full_description: str
    price: float | None
    prep_time: str | None
    servings: int | None
    difficulty: str | None
    cuisine: str
    dietary_tags: List[str]
    chef: str | None
    image: str
    ingredients: List[str]
    user_email: str | None
    created_at: str | None

    @staticmethod
    def from_meal_kit(meal_kit: MealKit) -> MealKitResponse:
        return MealKitResponse(
            id=meal_kit.id,
            title=meal_kit.title,
            short_description=meal_kit.short_description,
            full_description=meal_kit.full_description,
            price=meal_kit.price,
            prep_time=meal_kit.prep_time,
            servings=meal_kit.servings,
            difficulty=meal_kit.difficulty,
            cuisine=meal_kit.cuisine,
            dietary_tags=list(meal_kit.dietary_tags),
            chef=meal_kit.chef,
            image=meal_kit.image,
            ingredients=list(meal_kit.ingredients),
            user_email=meal_kit.user_email,
            created_at=meal_kit.created_at,
        )


def split_ingredients(ingredients: str | List[str]) -> List[str]:
    parts = ingredients.split(",") if isinstance(ingredients, str) else ingredients
    return [part.strip() for part in parts if part.strip()]


class MealKitRequest(BaseModel):
    title: Annotated[str, Field(min_length=1)]
    short_description: Annotated[str, Field(min_length=1, max_length=150)]
    full_description: str = ""
    price: NonNegativeFloat
    prep_time: str = ""
    servings: int | None = None
    difficulty: str = "Easy"
    cuisine: str = ""
    dietary_tags: List[str] = Field(default_factory=list)
    chef: str | None = None
    image: str = ""
    ingredients: str | List[str] = ""
    user_email: str | None = None

    model_config = ConfigDict(extra="forbid")

    def as_meal_kit_draft(self) -> MealKitDraft:
        return MealKitDraft(
            title=self.title,
            short_description=self.short_description,
            full_description=self.full_description,
            price=self.price,
            prep_time=self.prep_time,
            servings=self.servings if self.servings and self.servings > 0 else 2,
            difficulty=self.difficulty if self.difficulty in DIFFICULTY_LEVELS else "Easy",
            cuisine=self.cuisine,
            dietary_tags=self.dietary_tags,
            chef=self.chef or "Anonymous Chef",
            image=self.image,
            ingredients=split_ingredients(self.ingredients),
            user_email=self.user_email or "anonymous@chefkit.com",
            created_at=datetime.now(timezone.utc).isoformat(),
        )
