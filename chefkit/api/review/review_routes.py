from datetime import datetime, timezone
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response

from chefkit.api.dependencies import get_review_client
from chefkit.clients.review_client import ReviewClient
from chefkit.errors import CollaboratorError

from .review_contracts import ReviewRequest, ReviewResponse

review_router = APIRouter(prefix="/reviews")

Reviews = Annotated[ReviewClient, Depends(get_review_client)]


@review_router.get("/{meal_kit_id}")
async def get_review_list(meal_kit_id: str, reviews: Reviews) -> list[ReviewResponse]:
    try:
        found = await reviews.list_reviews(meal_kit_id)
    except CollaboratorError:
        raise HTTPException(HTTPStatus.BAD_GATEWAY, "Failed to load reviews")
    return [ReviewResponse.from_review(review) for review in found]


@review_router.post(
    "/",
    status_code=HTTPStatus.CREATED,
)
async def post_review(info: ReviewRequest, reviews: Reviews) -> ReviewResponse:
    draft = info.as_review_draft(created_at=datetime.now(timezone.utc).isoformat())
    try:
        review = await reviews.create_review(draft)
    except CollaboratorError:
        raise HTTPException(
            HTTPStatus.BAD_GATEWAY,
            "Failed to submit review. Please try again.",
        )
    return ReviewResponse.from_review(review)


@review_router.delete("/{id}")
async def delete_review(id: str, reviews: Reviews) -> Response:
    try:
        await reviews.delete_review(id)
    except CollaboratorError:
        raise HTTPException(HTTPStatus.BAD_GATEWAY, "Failed to delete review")
    return Response("")
