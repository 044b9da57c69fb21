from sqlalchemy import Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)

    variants = relationship("VariantModel", back_populates="product", cascade="all, delete-orphan")


class VariantModel(Base):
    __tablename__ = "product_variants"

    id = Column(Integer, primary_key=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)

    size = Column(String, nullable=True)
    color = Column(String, nullable=True)
    price = Column(Numeric(12, 2), nullable=False)

    product = relationship("ProductModel", back_populates="variants")
