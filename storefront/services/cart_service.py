# storefront/services/cart_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.cart_item import CartItemModel
from storefront.domain.errors import InsufficientStock, InvalidRequest, NotFound
from storefront.repos.cart_repo import CartRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y koszyka uzytkownika.
    query (get) tylko odczyt, commands (add, update, remove, clear) modyfikuja stan
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.product_repo = ProductRepo(db)

    #query
    def get_cart(self, user_id: int) -> dict:
        items = self.repo.get_items(user_id)

        lines = [
            {
                "cart_item_id": i.id,
                "product_id": i.product_id,
                "name": i.product.name,
                "price": i.product.price,
                "quantity": i.quantity,
                "stock": i.product.stock,
                "image_url": i.product.image_url,
                "subtotal": i.product.price * i.quantity,
            }
            for i in items
        ]
        total = sum((line["subtotal"] for line in lines), Decimal("0.00"))

        return {"items": lines, "total": total, "item_count": len(lines)}

    #commands
    def add_item(self, user_id: int, product_id: int, quantity: int) -> tuple[bool, int]:
        """
        Dodaje produkt albo zwieksza ilosc istniejacej pozycji.
        Zwraca (created, quantity).
        """
        if quantity < 1:
            raise InvalidRequest("Invalid request")

        product = self.product_repo.get_active(product_id)
        if not product:
            raise NotFound("Product not found")

        if product.stock < quantity:
            raise InsufficientStock(product_id)

        existing = self.repo.get_item_by_product(user_id, product_id)

        if existing:
            existing.quantity += quantity
            self.repo.commit()
            logger.info(f"Cart item {existing.id} for user {user_id} updated to quantity {existing.quantity}")
            return False, existing.quantity

        self.repo.add_item(
            CartItemModel(user_id=user_id, product_id=product_id, quantity=quantity)
        )
        self.repo.commit()
        logger.info(f"Product {product_id} added to cart of user {user_id}")
        return True, quantity

    def update_item(self, user_id: int, cart_item_id: int, quantity: int) -> None:
        if quantity < 1:
            raise InvalidRequest("Invalid quantity")

        item = self.repo.get_item(user_id, cart_item_id)
        if not item:
            raise NotFound("Cart item not found")

        item.quantity = quantity
        self.repo.commit()

    def remove_item(self, user_id: int, cart_item_id: int) -> None:
        self.repo.delete_item(user_id, cart_item_id)
        self.repo.commit()

    def clear(self, user_id: int) -> None:
        removed = self.repo.clear(user_id)
        self.repo.commit()
        logger.info(f"Cart of user {user_id} cleared ({removed} items)")
