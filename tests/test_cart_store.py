from __future__ import annotations

import json

import pytest

from chefkit.clients.client_models import MealKit
from chefkit.errors import CartNotLoadedError, InvalidProductError, StorageError
from chefkit.store.cart_models import CartEvent, CartEventKind
from chefkit.store.cart_storage import MemoryCartStorage
from chefkit.store.cart_store import DEFAULT_CART_KEY, CartStore

PASTA = {
    "id": 1,
    "title": "Pasta Carbonara",
    "shortDescription": "Creamy Roman classic",
    "image": "https://example.com/pasta.jpg",
    "cuisine": "Italian",
    "servings": 2,
    "price": 10.0,
}
CURRY = {
    "id": "thai-curry",
    "title": "Green Curry",
    "shortDescription": "Coconut and basil",
    "image": "https://example.com/curry.jpg",
    "cuisine": "Thai",
    "servings": 4,
    "price": 5.0,
}


class FailingStorage(MemoryCartStorage):
    def save(self, key: str, blob: str) -> None:
        raise StorageError("disk full")


def make_store(storage: MemoryCartStorage | None = None) -> CartStore:
    store = CartStore(storage if storage is not None else MemoryCartStorage())
    store.load()
    return store


def test_add_new_item_appends_line() -> None:
    store = make_store()

    event = store.add_item(PASTA)

    assert event.kind is CartEventKind.ADDED
    assert event.message == "Added Pasta Carbonara to cart!"
    assert len(event.items) == 1
    item = event.items[0]
    assert item.id == 1
    assert item.short_description == "Creamy Roman classic"
    assert item.quantity == 1


def test_add_same_item_accumulates_quantity() -> None:
    store = make_store()

    store.add_item(PASTA, 2)
    event = store.add_item(PASTA, 3)

    assert event.kind is CartEventKind.QUANTITY_UPDATED
    assert event.message == "Updated Pasta Carbonara quantity in cart!"
    assert len(store) == 1
    assert store.get(1).quantity == 5


def test_one_line_per_product_id() -> None:
    store = make_store()

    for product in (PASTA, CURRY, PASTA, CURRY, PASTA):
        store.add_item(product)

    ids = [item.id for item in store.items()]
    assert ids == [1, "thai-curry"]
    assert store.item_count() == 5


def test_price_is_frozen_at_add_time() -> None:
    store = make_store()
    store.add_item(PASTA)

    store.add_item({**PASTA, "price": 99.0, "title": "Renamed"}, 1)

    item = store.get(1)
    assert item.price == 10.0
    assert item.title == "Pasta Carbonara"
    assert item.quantity == 2


def test_non_positive_add_quantity_is_clamped() -> None:
    store = make_store()

    store.add_item(PASTA, 0)
    store.add_item(CURRY, -4)

    assert store.get(1).quantity == 1
    assert store.get("thai-curry").quantity == 1


@pytest.mark.parametrize(
    "product",
    [
        {"title": "No id", "price": 1.0},
        {"id": 7, "title": "No price"},
        {"id": 7, "title": "Bad price", "price": "free"},
        {"id": 7, "title": "Negative", "price": -1.0},
        {"id": 7, "title": "NaN", "price": float("nan")},
        {"id": 7, "title": "Infinite", "price": float("inf")},
    ],
)
def test_invalid_product_snapshot_is_rejected(product: dict) -> None:
    store = make_store()

    with pytest.raises(InvalidProductError):
        store.add_item(product)

    assert len(store) == 0


def test_add_accepts_catalog_model() -> None:
    store = make_store()
    meal_kit = MealKit.model_validate({**CURRY, "chef": "Somchai"})

    store.add_item(meal_kit, 2)

    item = store.get("thai-curry")
    assert item.short_description == "Coconut and basil"
    assert item.servings == 4
    assert item.quantity == 2


def test_remove_missing_item_is_noop() -> None:
    storage = MemoryCartStorage()
    store = make_store(storage)
    store.add_item(PASTA)
    before = store.items()
    saved = storage.data[DEFAULT_CART_KEY]
    storage.data[DEFAULT_CART_KEY] = "untouched"

    event = store.remove_item(12345)

    assert event.kind is CartEventKind.UNCHANGED
    assert event.message is None
    assert store.items() == before
    assert storage.data[DEFAULT_CART_KEY] == "untouched"
    assert saved != "untouched"


def test_remove_item() -> None:
    store = make_store()
    store.add_item(PASTA)
    store.add_item(CURRY)

    event = store.remove_item(1)

    assert event.kind is CartEventKind.REMOVED
    assert event.message == "Item removed from cart"
    assert 1 not in store
    assert "thai-curry" in store


@pytest.mark.parametrize("quantity", [0, -1])
def test_set_non_positive_quantity_removes_item(quantity: int) -> None:
    store = make_store()
    store.add_item(PASTA, 3)

    event = store.set_quantity(1, quantity)

    assert event.kind is CartEventKind.REMOVED
    assert 1 not in store
    assert store.item_count() == 0


def test_set_quantity() -> None:
    store = make_store()
    store.add_item(PASTA, 3)

    event = store.set_quantity(1, 7)

    assert event.kind is CartEventKind.QUANTITY_SET
    assert event.message is None
    assert store.get(1).quantity == 7
    assert store.set_quantity("missing", 2).kind is CartEventKind.UNCHANGED


def test_fractional_quantity_below_one_removes_item() -> None:
    store = make_store()
    store.add_item(PASTA, 3)

    event = store.set_quantity(1, 0.5)

    assert event.kind is CartEventKind.REMOVED
    assert 1 not in store


def test_invalid_price_keeps_persisted_cart_intact() -> None:
    storage = MemoryCartStorage()
    store = make_store(storage)
    store.add_item(PASTA, 2)

    with pytest.raises(InvalidProductError):
        store.add_item({**CURRY, "price": float("inf")})

    reloaded = make_store(storage)
    assert reloaded.items() == store.items()
    assert len(reloaded) == 1


def test_totals() -> None:
    store = make_store()
    store.add_item(PASTA, 2)
    store.add_item(CURRY, 3)

    assert store.total_price() == pytest.approx(35.0)
    assert store.item_count() == 5
    assert store.line_count() == 2


def test_clear() -> None:
    store = make_store()
    store.add_item(PASTA, 2)
    store.add_item(CURRY, 3)

    event = store.clear()

    assert event.kind is CartEventKind.CLEARED
    assert event.message == "Cart cleared"
    assert store.item_count() == 0
    assert store.total_price() == 0
    assert store.items() == ()


def test_snapshots_do_not_leak_internal_state() -> None:
    store = make_store()
    store.add_item(PASTA)

    store.items()[0].quantity = 50
    store.get(1).quantity = 60

    assert store.get(1).quantity == 1


def test_use_before_load_is_programmer_error() -> None:
    store = CartStore(MemoryCartStorage())

    with pytest.raises(CartNotLoadedError):
        store.total_price()
    with pytest.raises(CartNotLoadedError):
        store.add_item(PASTA)


def test_round_trip_through_storage() -> None:
    storage = MemoryCartStorage()
    store = make_store(storage)
    store.add_item(CURRY, 3)
    store.add_item(PASTA, 2)

    reloaded = make_store(storage)

    assert reloaded.items() == store.items()
    assert [item.id for item in reloaded.items()] == ["thai-curry", 1]


def test_persisted_blob_uses_camel_case_keys() -> None:
    storage = MemoryCartStorage()
    store = make_store(storage)
    store.add_item(PASTA, 2)

    records = json.loads(storage.data[DEFAULT_CART_KEY])

    assert records == [
        {
            "id": 1,
            "title": "Pasta Carbonara",
            "shortDescription": "Creamy Roman classic",
            "image": "https://example.com/pasta.jpg",
            "cuisine": "Italian",
            "servings": 2,
            "price": 10.0,
            "quantity": 2,
        }
    ]


def test_corrupt_blob_hydrates_empty_cart() -> None:
    storage = MemoryCartStorage({DEFAULT_CART_KEY: "{not json"})

    store = make_store(storage)

    assert store.items() == ()


def test_blob_with_invalid_quantity_hydrates_empty_cart() -> None:
    blob = json.dumps([{"id": 1, "price": 2.0, "quantity": 0}])

    store = make_store(MemoryCartStorage({DEFAULT_CART_KEY: blob}))

    assert len(store) == 0


def test_duplicate_ids_in_blob_are_merged() -> None:
    blob = json.dumps(
        [
            {"id": 1, "title": "A", "price": 2.0, "quantity": 1},
            {"id": 1, "title": "A", "price": 2.0, "quantity": 2},
        ]
    )

    store = make_store(MemoryCartStorage({DEFAULT_CART_KEY: blob}))

    assert len(store) == 1
    assert store.get(1).quantity == 3


def test_storage_failure_keeps_in_memory_state() -> None:
    store = make_store(FailingStorage())

    event = store.add_item(PASTA, 2)

    assert event.kind is CartEventKind.ADDED
    assert store.item_count() == 2


def test_listener_receives_events_and_failures_are_contained() -> None:
    seen: list[CartEvent] = []

    def listener(event: CartEvent) -> None:
        seen.append(event)
        raise RuntimeError("toast renderer crashed")

    store = CartStore(MemoryCartStorage(), on_event=listener)
    store.load()

    store.add_item(PASTA)
    store.clear()

    assert [e.kind for e in seen] == [CartEventKind.ADDED, CartEventKind.CLEARED]
    assert store.item_count() == 0
