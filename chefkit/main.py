import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from chefkit.api.cart.cart_routes import cart_router
from chefkit.api.meal_kit.meal_kit_routes import meal_kit_router
from chefkit.api.review.review_routes import review_router
from chefkit.clients.meal_kit_client import MealKitClient
from chefkit.clients.rest_client import make_http_client
from chefkit.clients.review_client import ReviewClient
from chefkit.config import Settings, load_settings
from chefkit.errors import StorageError
from chefkit.store.cart_models import CartEvent
from chefkit.store.cart_storage import CartStorage, SqlCartStorage
from chefkit.store.cart_store import CartStore
from chefkit.store.pricing import PricingCalculator

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _log_cart_event(event: CartEvent) -> None:
    if event.changed:
        logger.info("Cart %s: %s", event.kind.value, event.message or f"{len(event.items)} line items")


def create_app(
    settings: Settings | None = None,
    storage: CartStorage | None = None,
    http: httpx.AsyncClient | None = None,
) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    if storage is None:
        storage = SqlCartStorage(settings.database_url)
    if http is None:
        http = make_http_client(settings.api_url, settings.http_timeout)

    cart_store = CartStore(storage, key=settings.cart_storage_key, on_event=_log_cart_event)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        try:
            storage.init_db()
        except StorageError:
            logger.exception("Cart storage unavailable, cart will not survive restarts")
        cart_store.load()
        yield
        await http.aclose()

    app = FastAPI(title="ChefKit API", lifespan=lifespan)
    app.state.settings = settings
    app.state.cart_store = cart_store
    app.state.pricing = PricingCalculator(settings.tax_rate, settings.delivery_fee)
    app.state.meal_kit_client = MealKitClient(http)
    app.state.review_client = ReviewClient(http)

    app.include_router(cart_router)
    app.include_router(meal_kit_router)
    app.include_router(review_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("chefkit.main:app", host="0.0.0.0", port=8000, reload=True)
