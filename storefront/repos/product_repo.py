# storefront/repos/product_repo.py
from sqlalchemy import select, update, or_, func
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_active(self) -> list[ProductModel]:
        return self.db.execute(
            select(ProductModel)
            .where(ProductModel.is_active.is_(True))
            .order_by(ProductModel.created_at.desc(), ProductModel.id.desc())
        ).scalars().all()

    def get_active(self, product_id: int) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(
                ProductModel.id == product_id,
                ProductModel.is_active.is_(True),
            )
        ).scalar_one_or_none()

    def search(self, query: str) -> list[ProductModel]:
        # parametr bindowany, zadnej interpolacji w SQL
        pattern = f"%{query}%"
        return self.db.execute(
            select(ProductModel)
            .where(
                ProductModel.is_active.is_(True),
                or_(ProductModel.name.like(pattern), ProductModel.description.like(pattern)),
            )
            .order_by(ProductModel.name)
        ).scalars().all()

    def lock_products(self, product_ids: list[int]) -> None:
        """
        SELECT ... FOR UPDATE na wierszach produktow, zawsze w kolejnosci id
        (dwie rownolegle transakcje nie zakleszcza sie na tych samych wierszach).
        Na SQLite FOR UPDATE jest pomijane - tam chroni blokada calej bazy.
        """
        if not product_ids:
            return
        self.db.execute(
            select(ProductModel.id)
            .where(ProductModel.id.in_(product_ids))
            .order_by(ProductModel.id)
            .with_for_update()
        ).all()

    def decrement_stock(self, product_id: int, quantity: int) -> int:
        """
        Compare-and-swap na stanie magazynowym.
        Zwraca rowcount - 0 oznacza ze stan spadl ponizej quantity.
        """
        result = self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.stock >= quantity)
            .values(stock=ProductModel.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def add(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        return product

    def count(self) -> int:
        return self.db.scalar(select(func.count(ProductModel.id)))
