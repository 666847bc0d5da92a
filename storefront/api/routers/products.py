# storefront/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from storefront.api.deps import get_product_service
from storefront.domain.errors import NotFound
from storefront.domain.schemas import ProductOut
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(svc: ProductService = Depends(get_product_service)):
    return svc.list_products()


@router.get("/search/{query}", response_model=List[ProductOut])
def search_products(query: str, svc: ProductService = Depends(get_product_service)):
    return svc.search(query)


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, svc: ProductService = Depends(get_product_service)):
    try:
        return svc.get_product(product_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
