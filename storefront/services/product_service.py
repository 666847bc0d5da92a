# storefront/services/product_service.py
from sqlalchemy.orm import Session

from storefront.domain.errors import NotFound
from storefront.domain.schemas import ProductOut
from storefront.repos.product_repo import ProductRepo
from storefront.services.cache_service import ProductCache
from storefront.utils.settings import PRODUCTS_CACHE_TTL
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PRODUCTS_CACHE_KEY = "products:all"


class ProductService:
    """
    Katalog produktow (tylko odczyt).
    Lista aktywnych produktow czytana przez cache-aside z TTL.
    """

    def __init__(self, db: Session, cache: ProductCache | None = None):
        self.repo = ProductRepo(db)
        self.cache = cache

    def list_products(self) -> list[ProductOut]:
        if self.cache is not None:
            cached = self.cache.get_json(PRODUCTS_CACHE_KEY)
            if cached is not None:
                logger.info("Products retrieved from cache")
                return [ProductOut.model_validate(p) for p in cached]

        products = [ProductOut.model_validate(p) for p in self.repo.list_active()]

        if self.cache is not None:
            self.cache.set_json(
                PRODUCTS_CACHE_KEY,
                [p.model_dump(mode="json") for p in products],
                ttl=PRODUCTS_CACHE_TTL,
            )

        logger.info(f"Retrieved {len(products)} products from database")
        return products

    def get_product(self, product_id: int) -> ProductOut:
        product = self.repo.get_active(product_id)
        if not product:
            raise NotFound("Product not found")
        return ProductOut.model_validate(product)

    def search(self, query: str) -> list[ProductOut]:
        return [ProductOut.model_validate(p) for p in self.repo.search(query)]

    def invalidate(self):
        if self.cache is not None:
            self.cache.delete(PRODUCTS_CACHE_KEY)
