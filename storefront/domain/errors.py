# storefront/domain/errors.py
"""
Bledy domenowe.

Kazdy rodzaj bledu dziedziczy tez po wbudowanym wyjatku (ValueError,
PermissionError, ...) zeby stary kod lapiacy wbudowane typy dalej dzialal.
"""


class StorefrontError(Exception):
    """Base for all errors raised by the services."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFound(StorefrontError, LookupError):
    pass


class PermissionDenied(StorefrontError, PermissionError):
    pass


class InvalidInput(StorefrontError, ValueError):
    pass


class Conflict(StorefrontError):
    pass


class StorageFailure(StorefrontError, RuntimeError):
    pass


class CartEmpty(InvalidInput):
    def __init__(self):
        super().__init__("Cart is empty")


class UnknownVariant(InvalidInput):
    def __init__(self, variant_id: int):
        super().__init__(f"Variant with ID {variant_id} not found")
        self.variant_id = variant_id


class StorageNotConfigured(InvalidInput):
    def __init__(self):
        super().__init__(
            "Storage is not configured. Please set SUPABASE_URL and SUPABASE_ANON_KEY "
            "environment variables."
        )


class BlobStoreError(StorefrontError):
    pass
