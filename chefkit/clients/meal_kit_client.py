from __future__ import annotations

from typing import Any, List

from pydantic import ValidationError

from chefkit.clients.client_models import MealKit, MealKitDraft
from chefkit.clients.rest_client import RestClient
from chefkit.errors import CollaboratorError, MealKitNotFoundError
from chefkit.store.cart_models import ProductId


def _as_meal_kit(data: Any) -> MealKit:
    try:
        return MealKit.model_validate(data)
    except ValidationError as e:
        raise CollaboratorError(f"Unexpected meal kit payload: {e}") from e


def _as_meal_kits(data: Any) -> List[MealKit]:
    try:
        return [MealKit.model_validate(kit) for kit in data or []]
    except (ValidationError, TypeError) as e:
        raise CollaboratorError(f"Unexpected meal kit list payload: {e}") from e


def _saved_meal_kit(data: Any, draft: MealKitDraft, id: ProductId | None = None) -> MealKit:
    # the backend answers either with the stored document or with an insert/update ack
    if isinstance(data, dict) and data.get("id") is not None:
        return _as_meal_kit(data)
    if isinstance(data, dict) and data.get("insertedId") is not None:
        id = data["insertedId"]
    if id is None:
        raise CollaboratorError("Backend did not return the saved meal kit")
    return _as_meal_kit({**draft.as_payload(), "id": id})


def filter_meal_kits(
    meal_kits: List[MealKit],
    cuisine: str | None = None,
    search: str | None = None,
) -> List[MealKit]:
    """Title/chef substring search and exact cuisine match, case-insensitive search."""
    term = (search or "").lower()
    return [
        kit
        for kit in meal_kits
        if (not term or term in kit.title.lower() or term in (kit.chef or "").lower())
        and (not cuisine or cuisine == "All" or kit.cuisine == cuisine)
    ]


class MealKitClient(RestClient):
    async def list_meal_kits(
        self,
        cuisine: str | None = None,
        search: str | None = None,
        sort: str | None = None,
    ) -> List[MealKit]:
        params: dict[str, str] = {}
        if cuisine and cuisine != "All":
            params["cuisine"] = cuisine
        if search:
            params["search"] = search
        if sort:
            params["sort"] = sort
        meal_kits = _as_meal_kits(await self._json("GET", "/meal-kits", params=params))
        # the backend may ignore the filters
        return filter_meal_kits(meal_kits, cuisine=cuisine, search=search)

    async def get_meal_kit(self, id: ProductId) -> MealKit:
        try:
            data = await self._json("GET", f"/meal-kits/{id}")
        except CollaboratorError as e:
            if e.status_code == 404:
                raise MealKitNotFoundError(f"Meal kit {id} not found", status_code=404) from e
            raise
        if not isinstance(data, dict) or data.get("id") is None:
            raise MealKitNotFoundError(f"Meal kit {id} not found", status_code=404)
        return _as_meal_kit(data)

    async def create_meal_kit(self, draft: MealKitDraft) -> MealKit:
        data = await self._json("POST", "/meal-kits", json=draft.as_payload())
        return _saved_meal_kit(data, draft)

    async def update_meal_kit(self, id: ProductId, draft: MealKitDraft) -> MealKit:
        data = await self._json("PUT", f"/meal-kits/{id}", json=draft.as_payload())
        return _saved_meal_kit(data, draft, id)

    async def delete_meal_kit(self, id: ProductId) -> None:
        await self._request("DELETE", f"/meal-kits/{id}")

    async def list_user_meal_kits(self, email: str) -> List[MealKit]:
        return _as_meal_kits(await self._json("GET", f"/my-meal-kits/{email}"))
