from __future__ import annotations

from typing import Any, List

from pydantic import ValidationError

from chefkit.clients.client_models import Review, ReviewDraft
from chefkit.clients.rest_client import RestClient
from chefkit.errors import CollaboratorError
from chefkit.store.cart_models import ProductId


def _as_review(data: Any) -> Review:
    try:
        return Review.model_validate(data)
    except ValidationError as e:
        raise CollaboratorError(f"Unexpected review payload: {e}") from e


class ReviewClient(RestClient):
    async def list_reviews(self, meal_kit_id: ProductId) -> List[Review]:
        data = await self._json("GET", f"/reviews/{meal_kit_id}")
        try:
            return [Review.model_validate(review) for review in data or []]
        except (ValidationError, TypeError) as e:
            raise CollaboratorError(f"Unexpected review list payload: {e}") from e

    async def create_review(self, draft: ReviewDraft) -> Review:
        data = await self._json("POST", "/reviews", json=draft.as_payload())
        if isinstance(data, dict) and data.get("id") is not None:
            return _as_review(data)
        if isinstance(data, dict) and data.get("insertedId") is not None:
            return _as_review({**draft.as_payload(), "id": data["insertedId"]})
        raise CollaboratorError("Backend did not return the saved review")

    async def delete_review(self, id: ProductId) -> None:
        await self._request("DELETE", f"/reviews/{id}")
