from sqlalchemy import JSON, CheckConstraint, Column, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from storefront.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "order_items"
    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_order_items_quantity"),)

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    variant_id = Column(Integer, ForeignKey("product_variants.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    # cena zamrozona przy tworzeniu zamowienia, nigdy nie przeliczana z katalogu
    price = Column(Numeric(12, 2), nullable=False)
    front_design = Column(JSON, nullable=True)
    back_design = Column(JSON, nullable=True)
    front_preview_url = Column(String, nullable=True)
    back_preview_url = Column(String, nullable=True)

    order = relationship("OrderModel", back_populates="items")
    variant = relationship("VariantModel")
