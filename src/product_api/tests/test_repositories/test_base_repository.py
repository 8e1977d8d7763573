import pytest
from sqlalchemy.exc import IntegrityError

from product_api.exceptions.base import InvalidFieldError, NotFoundError, RepositoryError
from product_api.exceptions.integrity_classifier import ConstraintKind, classify_integrity_error
from product_api.exceptions.mapper import map_integrity_error
from product_api.models.product import Product
from product_api.validators.model_validators import missing_required_fields, unknown_fields


@pytest.mark.asyncio
class TestBaseRepositoryCreate:

    async def test_create_success(self, base_repo, sample_product_data):
        """
        Behavior:
            - Call BaseRepository.create(...) with valid data.
            - Assert the returned entity has expected fields and a generated id.

        Fixtures:
            - base_repo: BaseRepository[Product] on the per-test database.
            - sample_product_data: dict used to populate required fields.
        """
        product = await base_repo.create(**sample_product_data)

        assert isinstance(product.id, int)
        assert product.code == sample_product_data["code"]
        assert product.price == sample_product_data["price"]

    async def test_create_unknown_field_raises_invalid_field(self, base_repo):
        with pytest.raises(InvalidFieldError) as exc_info:
            await base_repo.create(code="X", price=1, colour="red")

        assert exc_info.value.fields == ["colour"]
        assert exc_info.value.error_code == "invalid_field"

    async def test_create_missing_required_field(self, base_repo):
        """
        Behavior:
            - Omitting a NOT NULL column without a default is caught before the INSERT.
        """
        with pytest.raises(RepositoryError) as exc_info:
            await base_repo.create(code="X")

        assert exc_info.value.fields == ["price"]
        assert not isinstance(exc_info.value, NotFoundError)

    async def test_check_constraint_violation_is_wrapped(self, base_repo):
        """
        Behavior:
            - A negative price passes the Python-side checks but hits the CHECK
              constraint; the repository raises a RepositoryError chained to the
              IntegrityError and the session is usable afterwards.
        """
        with pytest.raises(RepositoryError) as exc_info:
            await base_repo.create(code="NEG", price=-1)

        assert isinstance(exc_info.value.__cause__, IntegrityError)
        assert "check constraint" in exc_info.value.message.lower()
        assert "CHECK constraint failed" in exc_info.value.raw_detail

        # rollback happened; the session still works
        assert await base_repo.count() == 0


@pytest.mark.asyncio
class TestBaseRepositoryRead:

    async def test_get_by_id_returns_none_when_missing(self, base_repo):
        assert await base_repo.get_by_id(123) is None

    async def test_get_by_id_or_raise(self, base_repo, created_product):
        found = await base_repo.get_by_id_or_raise(created_product.id)
        assert found.id == created_product.id

        with pytest.raises(NotFoundError):
            await base_repo.get_by_id_or_raise(created_product.id + 1000)

    async def test_get_all_orders_by_id(self, base_repo, multiple_products):
        rows = await base_repo.get_all(offset=0, limit=10)
        assert [r.id for r in rows] == sorted(p.id for p in multiple_products)

    async def test_count_ignores_soft_deleted(self, base_repo, multiple_products):
        await base_repo.soft_delete(multiple_products[0].id)
        assert await base_repo.count() == 2


@pytest.mark.asyncio
class TestBaseRepositoryUpdate:

    async def test_update_rejects_unknown_fields(self, base_repo, created_product):
        with pytest.raises(InvalidFieldError):
            await base_repo.update(created_product.id, colour="red")


class TestIntegrityMapping:

    def test_not_null_message_is_sanitized(self):
        """
        Behavior:
            - map_integrity_error() returns a generic message and the column name,
              never the raw driver text.
        """
        exc = IntegrityError(
            "INSERT INTO products ...", {}, Exception("NOT NULL constraint failed: products.code")
        )

        mapped = map_integrity_error(exc, Product.__name__)

        assert mapped.message == "Missing required field for Product"
        assert mapped.fields == ["code"]
        assert "products.code" not in mapped.message

    def test_postgres_sqlstate_wins_over_message(self):
        class AsyncpgLikeError(Exception):
            sqlstate = "23514"

        exc = IntegrityError("UPDATE products ...", {}, AsyncpgLikeError("duplicate wording, but a check"))

        violation = classify_integrity_error(exc)

        assert violation.kind is ConstraintKind.CHECK

    def test_unrecognised_message_is_unknown(self):
        exc = IntegrityError("INSERT ...", {}, Exception("something odd"))

        assert classify_integrity_error(exc).kind is ConstraintKind.UNKNOWN
        assert map_integrity_error(exc, "Product").message == "Product database integrity error."


class TestModelValidators:

    def test_unknown_fields_keep_caller_order(self):
        assert unknown_fields(Product, {"zeta": 1, "code": "x", "alpha": 2}) == ["zeta", "alpha"]

    def test_missing_required_fields_ignores_generated_columns(self):
        assert missing_required_fields(Product, {}) == ["code", "price"]
        assert missing_required_fields(Product, {"code": "x", "price": None}) == ["price"]
