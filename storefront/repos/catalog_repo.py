# storefront/repos/catalog_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.catalog import ProductModel, VariantModel


class CatalogRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_variant(self, variant_id: int) -> VariantModel | None:
        #zawsze swiezy wiersz z bazy, nie z identity map sesji
        stmt = (
            select(VariantModel)
            .where(VariantModel.id == variant_id)
            .options(selectinload(VariantModel.product))
            .execution_options(populate_existing=True)
        )
        return self.db.execute(stmt).scalar_one_or_none()

    def add_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    def has_products(self) -> bool:
        return self.db.execute(select(ProductModel.id).limit(1)).first() is not None
