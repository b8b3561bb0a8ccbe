from __future__ import annotations

from typing import Annotated, List

from pydantic import BaseModel, ConfigDict, Field, NonNegativeFloat, PositiveInt

from chefkit.store.cart_models import ProductId


class MealKit(BaseModel):
    id: ProductId
    title: str = ""
    short_description: str = Field("", alias="shortDescription")
    full_description: str = Field("", alias="fullDescription")
    price: float | None = None
    prep_time: str | None = Field(None, alias="prepTime")
    servings: int | None = None
    difficulty: str | None = None
    cuisine: str = ""
    dietary_tags: List[str] = Field(default_factory=list, alias="dietaryTags")
    chef: str | None = None
    image: str = ""
    ingredients: List[str] = Field(default_factory=list)
    user_email: str | None = Field(None, alias="userEmail")
    created_at: str | None = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class MealKitDraft(BaseModel):
    title: str
    short_description: str = Field(alias="shortDescription", max_length=150)
    full_description: str = Field("", alias="fullDescription")
    price: NonNegativeFloat
    prep_time: str = Field("", alias="prepTime")
    servings: PositiveInt = 2
    difficulty: str = "Easy"
    cuisine: str = ""
    dietary_tags: List[str] = Field(default_factory=list, alias="dietaryTags")
    chef: str = "Anonymous Chef"
    image: str = ""
    ingredients: List[str] = Field(default_factory=list)
    user_email: str = Field("anonymous@chefkit.com", alias="userEmail")
    created_at: str | None = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    def as_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


class Review(BaseModel):
    id: ProductId
    meal_kit_id: ProductId | None = Field(None, alias="mealKitId")
    user_name: str | None = Field(None, alias="userName")
    user_email: str | None = Field(None, alias="userEmail")
    rating: int | None = None
    comment: str = ""
    created_at: str | None = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ReviewDraft(BaseModel):
    meal_kit_id: ProductId = Field(alias="mealKitId")
    user_name: str = Field("Anonymous", alias="userName")
    user_email: str = Field("anonymous@chefkit.com", alias="userEmail")
    rating: Annotated[int, Field(ge=1, le=5)]
    comment: str = ""
    created_at: str | None = Field(None, alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    def as_payload(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
