from sqlalchemy import JSON, CheckConstraint, Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"
    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_cart_items_quantity"),)

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    variant_id = Column(Integer, ForeignKey("product_variants.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    # brak ceny - liczona z wariantu przy odczycie i przy checkout
    front_design = Column(JSON, nullable=True)
    back_design = Column(JSON, nullable=True)
    front_preview_url = Column(String, nullable=True)
    back_preview_url = Column(String, nullable=True)

    cart = relationship("CartModel", back_populates="items")
    variant = relationship("VariantModel")
