from typing import List

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.orm import Session

from storefront.api.deps import Identity, get_identity
from storefront.data.database import get_db
from storefront.domain.schemas import AssetOut, MessageOut
from storefront.services.asset_service import AssetService
from storefront.services.storage_client import StorageClient

router = APIRouter(prefix="/assets", tags=["assets"])


def get_storage() -> StorageClient:
    return StorageClient()


def get_service(db: Session = Depends(get_db), storage: StorageClient = Depends(get_storage)):
    return AssetService(db, storage)


@router.post("/upload", response_model=AssetOut, status_code=201)
def upload_asset(
    file: UploadFile = File(...),
    identity: Identity = Depends(get_identity),
    svc: AssetService = Depends(get_service),
):
    data = file.file.read()
    return svc.upload(identity.user_id, data, file.content_type, file.filename or "file")


@router.get("", response_model=List[AssetOut])
def list_assets(identity: Identity = Depends(get_identity), svc: AssetService = Depends(get_service)):
    return svc.list_assets(identity.user_id)


@router.get("/{asset_id}", response_model=AssetOut)
def get_asset(asset_id: int, identity: Identity = Depends(get_identity), svc: AssetService = Depends(get_service)):
    return svc.get_asset(asset_id, identity.user_id)


@router.delete("/{asset_id}", response_model=MessageOut)
def delete_asset(asset_id: int, identity: Identity = Depends(get_identity), svc: AssetService = Depends(get_service)):
    return svc.remove(asset_id, identity.user_id)
