# storefront/repos/order_repo.py
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import delete, func, or_, select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.catalog import VariantModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel


def _with_details(stmt):
    return stmt.options(
        selectinload(OrderModel.user),
        selectinload(OrderModel.items)
        .selectinload(OrderItemModel.variant)
        .selectinload(VariantModel.product)
    )


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        stmt = _with_details(select(OrderModel).where(OrderModel.id == order_id))
        return self.db.execute(stmt.execution_options(populate_existing=True)).scalar_one_or_none()

    def list_orders(
        self,
        filters: Dict[str, Any],
        search: Optional[str],
        sort_column,
        descending: bool,
        offset: int,
        limit: int,
    ) -> Tuple[List[OrderModel], int]:
        conditions = [getattr(OrderModel, name) == value for name, value in filters.items()]
        if search:
            # % i _ z wejscia to zwykle znaki
            conditions.append(
                or_(
                    OrderModel.customer_phone.icontains(search, autoescape=True),
                    OrderModel.customer_name.icontains(search, autoescape=True),
                    OrderModel.region.icontains(search, autoescape=True),
                    OrderModel.address.icontains(search, autoescape=True),
                )
            )

        order_by = sort_column.desc() if descending else sort_column.asc()
        stmt = (
            _with_details(select(OrderModel).where(*conditions))
            .order_by(order_by, OrderModel.id.desc() if descending else OrderModel.id.asc())
            .offset(offset)
            .limit(limit)
        )
        orders = list(self.db.execute(stmt).scalars().all())
        total = self.db.execute(
            select(func.count(OrderModel.id)).where(*conditions)
        ).scalar_one()
        return orders, total

    def list_user_orders(self, user_id: int) -> List[OrderModel]:
        stmt = _with_details(
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        return list(self.db.execute(stmt).scalars().all())

    def replace_items(self, order: OrderModel, items: List[OrderItemModel]) -> None:
        #najpierw usun wszystkie, potem utworz od nowa (bez diffa)
        self.db.execute(
            delete(OrderItemModel)
            .where(OrderItemModel.order_id == order.id)
        )
        self.db.expire(order, ["items"])
        for item in items:
            item.order_id = order.id
            self.db.add(item)
        self.db.flush()

    def delete_order(self, order: OrderModel) -> None:
        self.db.delete(order)
        self.db.flush()
