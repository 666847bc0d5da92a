# storefront/api/routers/cart.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from storefront.api.deps import require_user
from storefront.data.database import get_db
from storefront.domain.errors import InsufficientStock, InvalidRequest, NotFound
from storefront.domain.schemas import CartOut, CartItemIn, CartItemUpdateIn
from storefront.services.cart_service import CartService

router = APIRouter(prefix="/api/cart", tags=["cart"])


@router.get("", response_model=CartOut)
def get_cart(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    return CartService(db).get_cart(user_id)


@router.post("/items")
def add_item(
    payload: CartItemIn,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        created, quantity = svc.add_item(user_id, payload.product_id, payload.quantity)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InsufficientStock:
        raise HTTPException(status_code=400, detail="Insufficient stock")
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))

    if created:
        return JSONResponse(status_code=201, content={"message": "Item added to cart"})
    return {"message": "Cart updated", "quantity": quantity}


@router.put("/items/{cart_item_id}")
def update_item(
    cart_item_id: int,
    payload: CartItemUpdateIn,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    svc = CartService(db)
    try:
        svc.update_item(user_id, cart_item_id, payload.quantity)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidRequest as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {"message": "Cart item updated"}


@router.delete("/items/{cart_item_id}")
def remove_item(
    cart_item_id: int,
    user_id: int = Depends(require_user),
    db: Session = Depends(get_db),
):
    CartService(db).remove_item(user_id, cart_item_id)
    return {"message": "Item removed from cart"}


@router.delete("")
def clear_cart(user_id: int = Depends(require_user), db: Session = Depends(get_db)):
    CartService(db).clear(user_id)
    return {"message": "Cart cleared"}
