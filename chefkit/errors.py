class ChefKitError(Exception):
    pass


class CartNotLoadedError(ChefKitError):
    """Cart was used before ``CartStore.load()`` hydrated it."""


class InvalidProductError(ChefKitError, ValueError):
    pass


class StorageError(ChefKitError):
    pass


class CollaboratorError(ChefKitError):
    """Request to the meal kit / review backend failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MealKitNotFoundError(CollaboratorError):
    pass
