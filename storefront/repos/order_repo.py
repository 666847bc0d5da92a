# storefront/repos/order_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        # flush zeby dostac id, commit robi serwis checkoutu
        self.db.add(order)
        self.db.flush()
        return order

    def add_item(self, item: OrderItemModel) -> OrderItemModel:
        self.db.add(item)
        return item

    def list_for_user(self, user_id: int) -> list[OrderModel]:
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        ).scalars().all()

    def get_for_user(self, order_id: int, user_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items).joinedload(OrderItemModel.product))
            .where(OrderModel.id == order_id, OrderModel.user_id == user_id)
        ).scalar_one_or_none()
