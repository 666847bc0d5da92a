# storefront/api/deps.py
from fastapi import Depends, HTTPException, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import CheckoutIn
from storefront.services.cache_service import ProductCache, get_cache
from storefront.services.checkout_service import CheckoutService
from storefront.services.notification_service import NotificationService
from storefront.services.product_service import ProductService


def get_session_user(request: Request) -> dict | None:
    return request.session.get("user")


def get_current_user_id(request: Request) -> int | None:
    user = get_session_user(request)
    return user["userId"] if user else None


def require_user(request: Request) -> int:
    user_id = get_current_user_id(request)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Authentication required")
    return user_id


def get_product_service(
    db: Session = Depends(get_db),
    cache: ProductCache | None = Depends(get_cache),
) -> ProductService:
    return ProductService(db, cache)


def get_checkout_service(
    db: Session = Depends(get_db),
    product_service: ProductService = Depends(get_product_service),
) -> CheckoutService:
    return CheckoutService(
        db=db,
        product_service=product_service,
        notification_service=NotificationService(),
    )


async def get_checkout_payload(
    request: Request,
    user_id: int | None = Depends(get_current_user_id),
) -> CheckoutIn:
    """
    Body checkoutu czytane dopiero po sprawdzeniu sesji - anonim dostaje 401
    niezaleznie od tego co wyslal. Pusty body to brak adresu.
    """
    if user_id is None:
        return CheckoutIn()

    raw = await request.body()
    try:
        return CheckoutIn.model_validate_json(raw or b"{}")
    except ValidationError as e:
        errors = e.errors()
        raise HTTPException(status_code=400, detail=errors[0]["msg"] if errors else "Invalid request")
