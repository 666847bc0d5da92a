# storefront/api/routers/orders.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import get_checkout_payload, get_current_user_id, get_checkout_service, require_user
from storefront.data.database import get_db
from storefront.domain.errors import EmptyCart, InsufficientStock, InvalidRequest, Unauthorized
from storefront.domain.schemas import CheckoutIn, CheckoutOut, OrderOut, OrderDetailOut, OrderItemOut
from storefront.repos.order_repo import OrderRepo
from storefront.services.checkout_service import CheckoutService
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


def _to_order_out(order) -> OrderOut:
    return OrderOut(
        order_id=order.id,
        total_amount=order.total_amount,
        status=order.status.value,
        shipping_address=order.shipping_address,
        created_at=order.created_at,
    )


@router.get("", response_model=List[OrderOut])
def list_orders(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    return [_to_order_out(o) for o in OrderRepo(db).list_for_user(user_id)]


@router.get("/{order_id}", response_model=OrderDetailOut)
def get_order(order_id: int, user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    order = OrderRepo(db).get_for_user(order_id, user_id)
    if not order:
        raise HTTPException(status_code=404, detail="Order not found")

    return OrderDetailOut(
        **_to_order_out(order).model_dump(),
        items=[
            OrderItemOut(
                order_item_id=i.id,
                product_id=i.product_id,
                name=i.product.name,
                quantity=i.quantity,
                price=i.price,
                image_url=i.product.image_url,
            )
            for i in order.items
        ],
    )


@router.post("", response_model=CheckoutOut, status_code=201)
def checkout(
    payload: CheckoutIn = Depends(get_checkout_payload),
    user_id: int | None = Depends(get_current_user_id),
    svc: CheckoutService = Depends(get_checkout_service),
):
    """
    Checkout: koszyk -> zamowienie w jednej transakcji.
    Bledy biznesowe to 400/401, reszta 500 bez szczegolow.
    """
    try:
        placed = svc.checkout(user_id, payload.shipping_address)
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))
    except (InvalidRequest, EmptyCart, InsufficientStock) as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception:
        logger.exception("Error creating order")
        raise HTTPException(status_code=500, detail="Failed to create order")

    return CheckoutOut(order_id=placed.order_id, total_amount=placed.total_amount)
