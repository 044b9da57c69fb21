# storefront/services/asset_service.py
from typing import Dict, List

from requests import RequestException
from sqlalchemy.orm import Session

from storefront.data.database import transaction
from storefront.data.models.asset import AssetModel
from storefront.domain.errors import BlobStoreError, InvalidInput, NotFound, StorageNotConfigured
from storefront.repos.asset_repo import AssetRepo
from storefront.services.security_service import assert_ownership
from storefront.services.storage_client import StorageClient
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ALLOWED_MIME_TYPES = ("image/jpeg", "image/jpg", "image/png")
ASSET_FOLDER = "assets"


class AssetService:
    """
    Pliki uzytkownika w blob store + wiersz w bazie.

    Usuwanie NIE jest atomowe: blad usuniecia pliku jest logowany,
    a wiersz w bazie i tak jest usuwany.
    """

    def __init__(self, db: Session, storage: StorageClient | None = None):
        self.db = db
        self.repo = AssetRepo(db)
        self.storage = storage or StorageClient()

    def upload(self, user_id: int, data: bytes, mime_type: str, file_name: str) -> AssetModel:
        if mime_type not in ALLOWED_MIME_TYPES:
            raise InvalidInput(
                f"File type {mime_type} is not allowed. Allowed types: {', '.join(ALLOWED_MIME_TYPES)}"
            )

        try:
            url = self.storage.upload(data, mime_type, ASSET_FOLDER, file_name)
        except (RequestException, BlobStoreError) as e:
            raise InvalidInput(f"File upload failed: {e}") from e

        with transaction(self.db):
            asset = self.repo.create_asset(AssetModel(url=url, user_id=user_id))

        logger.info(f"Asset {asset.id} uploaded by user {user_id}: {url}")
        return asset

    def list_assets(self, user_id: int) -> List[AssetModel]:
        return self.repo.list_for_user(user_id)

    def get_asset(self, asset_id: int, user_id: int) -> AssetModel:
        asset = self.repo.get_asset(asset_id)
        if not asset:
            raise NotFound(f"Asset with ID {asset_id} not found")
        assert_ownership(user_id, asset.user_id, "asset")
        return asset

    def check_usage(self, url: str) -> Dict[str, int]:
        """Ile pozycji koszyka/zamowien wskazuje na ten plik (dopasowanie po podciagu)."""
        cart_items, order_items = self.repo.count_preview_usage(url)
        return {"cart_items": cart_items, "order_items": order_items}

    def remove(self, asset_id: int, user_id: int) -> Dict[str, str]:
        asset = self.get_asset(asset_id, user_id)

        usage = self.check_usage(asset.url)
        if usage["cart_items"] or usage["order_items"]:
            # tylko ostrzezenie, usuwamy dalej
            logger.warning(
                f"Asset with ID {asset_id} is currently used in {usage['cart_items']} cart items "
                f"and {usage['order_items']} order items. Proceeding with deletion..."
            )

        try:
            self.storage.delete(asset.url)
        except (RequestException, BlobStoreError, StorageNotConfigured) as e:
            logger.error(f"Error deleting file from blob store: {e}")

        with transaction(self.db):
            self.repo.delete_asset(asset)

        logger.info(f"Asset {asset_id} deleted")
        return {"message": f"Asset with ID {asset_id} has been deleted"}
