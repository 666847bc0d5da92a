# storefront/data/seed.py
from decimal import Decimal

from storefront.data.database import SessionLocal, init_db
from storefront.data.models.product import ProductModel
from storefront.repos.product_repo import ProductRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

DEMO_PRODUCTS = [
    ("Laptop Pro 15", "High-performance laptop with 16GB RAM and 512GB SSD", "1299.99", 50, "Electronics"),
    ("Wireless Mouse", "Ergonomic wireless mouse with precision tracking", "29.99", 200, "Accessories"),
    ("Mechanical Keyboard", "RGB mechanical keyboard with blue switches", "89.99", 100, "Accessories"),
    ('4K Monitor 27"', "Ultra HD 4K monitor with HDR support", "399.99", 75, "Electronics"),
    ("USB-C Hub", "7-in-1 USB-C hub with HDMI and USB 3.0 ports", "49.99", 150, "Accessories"),
]


def seed(db=None) -> int:
    """Wstawia demo katalog, tylko jesli tabela produktow jest pusta."""
    own_session = db is None
    db = db or SessionLocal()
    try:
        repo = ProductRepo(db)
        if repo.count():
            logger.info("Products already exist, skipping seed")
            return 0

        for name, description, price, stock, category in DEMO_PRODUCTS:
            repo.add(
                ProductModel(
                    name=name,
                    description=description,
                    price=Decimal(price),
                    stock=stock,
                    category=category,
                    image_url=f"https://via.placeholder.com/300x200?text={name.split()[0]}",
                )
            )
        db.commit()
        logger.info(f"Seeded {len(DEMO_PRODUCTS)} products")
        return len(DEMO_PRODUCTS)
    finally:
        if own_session:
            db.close()


if __name__ == "__main__":
    init_db()
    seed()
