# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal, init_db, transaction
from storefront.data.models.catalog import ProductModel, VariantModel
from storefront.repos.catalog_repo import CatalogRepo
from storefront.services.user_service import UserService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_CATALOG = [
    ("T-shirt", "Cotton t-shirt with custom print", [("M", "white", "89000.00"), ("L", "black", "95000.00")]),
    ("Hoodie", "Fleece hoodie with front and back print", [("M", "grey", "189000.00")]),
    ("Mug", "Ceramic mug", [(None, "white", "45000.00")]),
]


def seed():
    init_db()
    db = SessionLocal()
    try:
        UserService(db).ensure_super_admin()

        catalog = CatalogRepo(db)
        # not forcing: only seed if empty
        if catalog.has_products():
            return

        with transaction(db):
            for name, description, variants in DEMO_CATALOG:
                catalog.add_product(
                    ProductModel(
                        name=name,
                        description=description,
                        variants=[
                            VariantModel(size=size, color=color, price=Decimal(price))
                            for size, color, price in variants
                        ],
                    )
                )
        logger.info(f"Seeded {len(DEMO_CATALOG)} demo products")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
