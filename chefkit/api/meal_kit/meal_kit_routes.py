from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from chefkit.api.dependencies import get_meal_kit_client
from chefkit.clients.meal_kit_client import MealKitClient
from chefkit.errors import CollaboratorError, MealKitNotFoundError

from .meal_kit_contracts import MealKitRequest, MealKitResponse

meal_kit_router = APIRouter(prefix="/meal-kits")

Catalog = Annotated[MealKitClient, Depends(get_meal_kit_client)]


@meal_kit_router.get("/")
async def get_meal_kit_list(
    catalog: Catalog,
    cuisine: Annotated[str | None, Query()] = None,
    search: Annotated[str | None, Query()] = None,
    sort: Annotated[str | None, Query()] = None,
) -> list[MealKitResponse]:
    try:
        meal_kits = await catalog.list_meal_kits(cuisine=cuisine, search=search, sort=sort)
    except CollaboratorError:
        raise HTTPException(HTTPStatus.BAD_GATEWAY, "Failed to load meal kits")
    return [MealKitResponse.from_meal_kit(kit) for kit in meal_kits]


@meal_kit_router.get("/mine/{email}")
async def get_my_meal_kits(email: str, catalog: Catalog) -> list[MealKitResponse]:
    try:
        meal_kits = await catalog.list_user_meal_kits(email)
    except CollaboratorError:
        raise HTTPException(HTTPStatus.BAD_GATEWAY, "Failed to load meal kits")
    return [MealKitResponse.from_meal_kit(kit) for kit in meal_kits]


@meal_kit_router.get(
    "/{id}",
    responses={
        HTTPStatus.OK: {
            "description": "Successfully returned requested meal kit",
        },
        HTTPStatus.NOT_FOUND: {
            "description": "Failed to return requested meal kit as one was not found",
        },
    },
)
async def get_meal_kit_by_id(id: str, catalog: Catalog) -> MealKitResponse:
    try:
        meal_kit = await catalog.get_meal_kit(id)
    except MealKitNotFoundError:
        raise HTTPException(
            HTTPStatus.NOT_FOUND,
            f"Request resource /meal-kits/{id} was not found",
        )
    except CollaboratorError:
        raise HTTPException(HTTPStatus.BAD_GATEWAY, "Failed to load meal kit")

    return MealKitResponse.from_meal_kit(meal_kit)


@meal_kit_router.post(
    "/",
    status_code=HTTPStatus.CREATED,
)
async def post_meal_kit(info: MealKitRequest, response: Response, catalog: Catalog) -> MealKitResponse:
    try:
        meal_kit = await catalog.create_meal_kit(info.as_meal_kit_draft())
    except CollaboratorError:
        raise HTTPException(
            HTTPStatus.BAD_GATEWAY,
            "Failed to add meal kit. Please try again.",
        )

    response.headers["location"] = f"/meal-kits/{meal_kit.id}"
    return MealKitResponse.from_meal_kit(meal_kit)


@meal_kit_router.put("/{id}")
async def put_meal_kit(id: str, info: MealKitRequest, catalog: Catalog) -> MealKitResponse:
    try:
        meal_kit = await catalog.update_meal_kit(id, info.as_meal_kit_draft())
    except CollaboratorError as e:
        if e.status_code == HTTPStatus.NOT_FOUND:
            raise HTTPException(
                HTTPStatus.NOT_FOUND,
                f"Requested resource /meal-kits/{id} was not found",
            )
        raise HTTPException(HTTPStatus.BAD_GATEWAY, "Failed to update meal kit")

    return MealKitResponse.from_meal_kit(meal_kit)


@meal_kit_router.delete("/{id}")
async def delete_meal_kit(id: str, catalog: Catalog) -> Response:
    try:
        await catalog.delete_meal_kit(id)
    except CollaboratorError:
        raise HTTPException(HTTPStatus.BAD_GATEWAY, "Failed to delete meal kit")
    return Response("")
