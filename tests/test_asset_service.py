import logging

import pytest
import requests

from storefront.data.models.asset import AssetModel
from storefront.domain.errors import InvalidInput, PermissionDenied, StorageNotConfigured
from storefront.services.asset_service import AssetService
from storefront.services.cart_service import CartService
from storefront.services.checkout_service import CheckoutService


class RecordingStorage:
    """Blob store w pamieci, opcjonalnie z bledem przy usuwaniu."""

    def __init__(self, fail_delete=None):
        self.fail_delete = fail_delete
        self.uploaded = []
        self.deleted = []

    def upload(self, data, mime_type, folder, file_name="file"):
        url = f"https://blob.example/storage/v1/object/public/bucket/{folder}/{len(self.uploaded)}-{file_name}"
        self.uploaded.append((url, data, mime_type))
        return url

    def delete(self, url):
        if self.fail_delete:
            raise self.fail_delete
        self.deleted.append(url)


def test_upload_creates_asset(db, alice):
    storage = RecordingStorage()

    asset = AssetService(db, storage).upload(alice.id, b"\x89PNG", "image/png", "front.png")

    assert asset.user_id == alice.id
    assert asset.url == storage.uploaded[0][0]


def test_upload_rejects_other_mime_types(db, alice):
    with pytest.raises(InvalidInput):
        AssetService(db, RecordingStorage()).upload(alice.id, b"GIF89a", "image/gif", "x.gif")


def test_foreign_asset_is_denied(db, alice, bob):
    service = AssetService(db, RecordingStorage())
    asset = service.upload(alice.id, b"data", "image/jpeg", "a.jpg")

    with pytest.raises(PermissionDenied):
        service.get_asset(asset.id, bob.id)
    with pytest.raises(PermissionDenied):
        service.remove(asset.id, bob.id)


def test_usage_counts_substring_matches(db, alice, make_variant):
    service = AssetService(db, RecordingStorage())
    asset = service.upload(alice.id, b"data", "image/png", "p.png")
    variant = make_variant(100)
    carts = CartService(db)
    carts.add_item(alice.id, variant.id, 1, front_preview_url=asset.url)
    CheckoutService(db).convert_cart_to_order(alice.id, {"customer_name": "A", "customer_phone": "1"})
    carts.add_item(alice.id, variant.id, 1, back_preview_url=asset.url + "?v=2")

    assert service.check_usage(asset.url) == {"cart_items": 1, "order_items": 1}


def test_remove_warns_when_in_use_and_still_deletes(db, alice, make_variant, caplog):
    storage = RecordingStorage()
    service = AssetService(db, storage)
    asset = service.upload(alice.id, b"data", "image/png", "p.png")
    asset_id, url = asset.id, asset.url
    CartService(db).add_item(alice.id, make_variant(100).id, 1, front_preview_url=url)

    with caplog.at_level(logging.WARNING, logger="storefront"):
        service.remove(asset_id, alice.id)

    assert "currently used in 1 cart items" in caplog.text
    assert storage.deleted == [url]
    assert db.get(AssetModel, asset_id) is None


@pytest.mark.parametrize(
    "error",
    [requests.ConnectionError("blob store down"), StorageNotConfigured()],
)
def test_blob_delete_failure_does_not_block_row_delete(db, alice, error, caplog):
    service = AssetService(db, RecordingStorage(fail_delete=error))
    asset = service.upload(alice.id, b"data", "image/png", "p.png")
    asset_id = asset.id

    with caplog.at_level(logging.ERROR, logger="storefront"):
        result = service.remove(asset_id, alice.id)

    assert result == {"message": f"Asset with ID {asset_id} has been deleted"}
    assert "Error deleting file from blob store" in caplog.text
    assert db.get(AssetModel, asset_id) is None
