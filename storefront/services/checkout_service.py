# storefront/services/checkout_service.py
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel, OrderStatus
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.errors import (
    DataAccessFailure,
    EmptyCart,
    InsufficientStock,
    InvalidRequest,
    Unauthorized,
)
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.services.notification_service import NotificationService
from storefront.services.product_service import ProductService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CENT = Decimal("0.01")
# dlugosc kolumny orders.shipping_address
MAX_ADDRESS_LENGTH = OrderModel.__table__.c.shipping_address.type.length


def to_money(value) -> Decimal:
    return Decimal(str(value)).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class CartLine:
    product_id: int
    quantity: int
    unit_price: Decimal
    available_stock: int
    cart_item_id: int | None = None


@dataclass(frozen=True)
class PlacedOrder:
    order_id: int
    total_amount: Decimal


def compute_total(lines: list[CartLine]) -> Decimal:
    return to_money(sum((line.unit_price * line.quantity for line in lines), Decimal("0.00")))


class CheckoutService:
    """
    Use Case: zamiana koszyka w zamowienie.

    Odczyt koszyka, walidacja stanow, zapis zamowienia, zmniejszenie stanow
    i wyczyszczenie koszyka ida w jednej transakcji na wstrzyknietej sesji.
    Albo wszystko, albo nic - przy bledzie rollback i wyjatek idzie wyzej,
    bez ponawiania.
    """

    def __init__(
        self,
        db: Session,
        product_service: ProductService | None = None,
        notification_service: NotificationService | None = None,
    ):
        self.db = db
        self.cart_repo = CartRepo(db)
        self.order_repo = OrderRepo(db)
        self.product_repo = ProductRepo(db)
        self.product_service = product_service
        self.notification_service = notification_service

    # =====================================================
    # CART READER
    # =====================================================
    def read_cart(self, user_id: int) -> list[CartLine]:
        """
        Pozycje koszyka z aktualna cena i stanem produktu, w kolejnosci dodania.
        Pusty koszyk to pusta lista, nie blad.
        """
        try:
            rows = self.cart_repo.get_lines(user_id)
            # blokada wierszy produktow do konca transakcji, potem swiezy odczyt stanu
            self.product_repo.lock_products(sorted({r.product_id for r in rows}))
            if rows:
                rows = self.cart_repo.get_lines(user_id)
        except SQLAlchemyError as e:
            raise DataAccessFailure() from e

        return [
            CartLine(
                product_id=r.product_id,
                quantity=r.quantity,
                unit_price=to_money(r.price),
                available_stock=r.stock,
                cart_item_id=r.cart_item_id,
            )
            for r in rows
        ]

    # =====================================================
    # ORDER WRITER
    # =====================================================
    def place_order(self, user_id: int, lines: list[CartLine], shipping_address: str) -> PlacedOrder:
        """
        Tworzy zamowienie ze snapshotu koszyka. Nie commituje -
        granice transakcji trzyma `checkout` (albo wywolujacy).
        """
        if not lines:
            raise EmptyCart()

        # pierwszy produkt bez wystarczajacego stanu przerywa calosc
        for line in lines:
            if line.quantity > line.available_stock:
                raise InsufficientStock(line.product_id)

        total = compute_total(lines)

        try:
            order = self.order_repo.add_order(
                OrderModel(
                    user_id=user_id,
                    total_amount=total,
                    status=OrderStatus.PENDING,
                    shipping_address=shipping_address,
                )
            )

            for line in lines:
                self.order_repo.add_item(
                    OrderItemModel(
                        order_id=order.id,
                        product_id=line.product_id,
                        quantity=line.quantity,
                        price=line.unit_price,
                    )
                )
                # stan mogl sie zmienic od odczytu jesli baza nie blokuje wierszy
                if self.product_repo.decrement_stock(line.product_id, line.quantity) == 0:
                    raise InsufficientStock(line.product_id)

            # tylko linie ze snapshotu - pozycja dodana rownolegle nie znika bez zamowienia
            self.cart_repo.delete_items(
                user_id, [line.cart_item_id for line in lines if line.cart_item_id is not None]
            )
            self.db.flush()
        except SQLAlchemyError as e:
            raise DataAccessFailure() from e

        return PlacedOrder(order_id=order.id, total_amount=total)

    # =====================================================
    # ORCHESTRATOR
    # =====================================================
    def checkout(self, user_id: int | None, shipping_address: str | None) -> PlacedOrder:
        if user_id is None:
            raise Unauthorized()

        if not shipping_address or not shipping_address.strip():
            raise InvalidRequest("Shipping address required")

        shipping_address = shipping_address.strip()
        if len(shipping_address) > MAX_ADDRESS_LENGTH:
            raise InvalidRequest(f"Shipping address must be at most {MAX_ADDRESS_LENGTH} characters")

        try:
            lines = self.read_cart(user_id)
            placed = self.place_order(user_id, lines, shipping_address)
            self.db.commit()
        except EmptyCart:
            self.db.rollback()
            logger.info(f"Checkout rejected for user {user_id}: cart is empty")
            raise
        except InsufficientStock as e:
            self.db.rollback()
            logger.info(f"Checkout rejected for user {user_id}: insufficient stock for product {e.product_id}")
            raise
        except DataAccessFailure:
            self.db.rollback()
            logger.exception(f"Checkout failed for user {user_id}")
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Checkout failed for user {user_id}")
            raise DataAccessFailure() from e
        except BaseException:
            # takze anulowanie zadania - nic nie moze zostac w polowie
            self.db.rollback()
            raise

        logger.info(f"Order created: {placed.order_id} for user: {user_id}")

        # po commicie - stany sie zmienily, lista w cache jest nieaktualna
        if self.product_service is not None:
            self.product_service.invalidate()
        if self.notification_service is not None:
            self.notification_service.send_order_notification(user_id, placed.order_id)

        return placed
