from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from chefkit.clients.client_models import Review, ReviewDraft
from chefkit.store.cart_models import ProductId


class ReviewResponse(BaseModel):
    id: ProductId
    meal_kit_id: ProductId | None
    user_name: str | None
    user_email: str | None
    rating: int | None
    comment: str
    created_at: str | None

    @staticmethod
    def from_review(review: Review) -> ReviewResponse:
        return ReviewResponse(
            id=review.id,
            meal_kit_id=review.meal_kit_id,
            user_name=review.user_name,
            user_email=review.user_email,
            rating=review.rating,
            comment=review.comment,
            created_at=review.created_at,
        )


class ReviewRequest(BaseModel):
    meal_kit_id: ProductId
    rating: Annotated[int, Field(ge=1, le=5)]
    comment: str = ""
    user_name: str | None = None
    user_email: str | None = None

    model_config = ConfigDict(extra="forbid")

    def as_review_draft(self, created_at: str) -> ReviewDraft:
        return ReviewDraft(
            meal_kit_id=self.meal_kit_id,
            rating=self.rating,
            comment=self.comment.strip(),
            user_name=self.user_name or "Anonymous",
            user_email=self.user_email or "anonymous@chefkit.com",
            created_at=created_at,
        )
