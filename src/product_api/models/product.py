from sqlalchemy import CheckConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from product_api.database.base import Base, SoftDeleteMixin, TimestampMixin


class Product(TimestampMixin, SoftDeleteMixin, Base):
    """
    SQLAlchemy model for Product.

    A sellable item identified by an integer id. `code` and `price` are the only
    client-writable columns; ids and timestamps are owned by the database.
    Deleting a product sets `deleted_at` instead of removing the row, so an id
    is never reused.
    """
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="price_non_negative"),
    )

    # Auto-incrementing primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    code: Mapped[str] = mapped_column(String(255), nullable=False)

    # Smallest currency unit (e.g. cents)
    price: Mapped[int] = mapped_column(Integer, nullable=False)

    def __repr__(self) -> str:
        return f"<Product(id={self.id!r}, code={self.code!r}, price={self.price!r})>"
