# storefront/repos/cart_repo.py
from sqlalchemy import select, delete
from sqlalchemy.orm import Session, joinedload

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.product import ProductModel


class CartRepo:
    """
    Dostep do pozycji koszyka - jeden wiersz na pare (user, product).
    Commit/rollback wola serwis, repo tylko przygotowuje zmiany w sesji.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_items(self, user_id: int) -> list[CartItemModel]:
        return self.db.execute(
            select(CartItemModel)
            .options(joinedload(CartItemModel.product))
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        ).scalars().all()

    def get_lines(self, user_id: int):
        """
        Pozycje koszyka zlaczone z aktualna cena i stanem produktu.
        Zwraca krotki (cart_item_id, product_id, quantity, price, stock) w kolejnosci dodania.
        """
        return self.db.execute(
            select(
                CartItemModel.id.label("cart_item_id"),
                CartItemModel.product_id,
                CartItemModel.quantity,
                ProductModel.price,
                ProductModel.stock,
            )
            .join(ProductModel, CartItemModel.product_id == ProductModel.id)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
        ).all()

    def get_item(self, user_id: int, cart_item_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == cart_item_id,
                CartItemModel.user_id == user_id,
            )
        ).scalar_one_or_none()

    def get_item_by_product(self, user_id: int, product_id: int) -> CartItemModel | None:
        return self.db.execute(
            select(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        return item

    def delete_item(self, user_id: int, cart_item_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.id == cart_item_id,
                CartItemModel.user_id == user_id,
            )
        )
        return result.rowcount

    def clear(self, user_id: int) -> int:
        result = self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount

    def delete_items(self, user_id: int, cart_item_ids: list[int]) -> int:
        """Usuwa tylko wskazane pozycje - linie dodane w miedzyczasie zostaja w koszyku."""
        if not cart_item_ids:
            return 0
        result = self.db.execute(
            delete(CartItemModel).where(
                CartItemModel.user_id == user_id,
                CartItemModel.id.in_(cart_item_ids),
            )
        )
        return result.rowcount

    def commit(self):
        self.db.commit()
