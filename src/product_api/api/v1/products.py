"""
Product routes.

    GET    /products            paginated listing (page, per_page)
    GET    /product/latest      first live product by id
    GET    /product/{id}        single product
    POST   /product             create
    PUT    /product/{id}        replace code and price
    DELETE /product/{id}        soft delete

Input problems are raised as catalog exceptions before the repository is
touched; repository exceptions are left to the handlers in error_handlers.py.
Write routes commit the request's session once the repository call succeeds.
"""

import logging
import math

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from product_api.api.responses import respond_success
from product_api.database.session import get_async_session
from product_api.exceptions.catalog import BadRequestError, ErrorCode
from product_api.repositories.product_repository import ProductRepository
from product_api.schemas.envelope import ErrorEnvelope, MessageData, PaginationMeta, SuccessEnvelope
from product_api.schemas.product import ProductPayload, ProductRead
from product_api.validators.config_validators import parse_int, positive_int_or_default

logger = logging.getLogger(__name__)

router = APIRouter(tags=["products"])

DEFAULT_PAGE = 1
DEFAULT_PER_PAGE = 20

# OpenAPI only: handlers return JSONResponse, so response models are not re-validated
ERROR_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorEnvelope},
    status.HTTP_404_NOT_FOUND: {"model": ErrorEnvelope},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorEnvelope},
}


def get_product_repository(db: AsyncSession = Depends(get_async_session)) -> ProductRepository:
    return ProductRepository(db)


def parse_product_id(raw: str) -> int:
    """
    Parse a path id for write routes.

    Raises:
        BadRequestError: INVALID_ID when `raw` is not a non-negative integer.
    """
    product_id = parse_int(raw)
    if product_id is None or product_id < 0:
        raise BadRequestError(ErrorCode.INVALID_ID)
    return product_id


def build_pagination_meta(page: int, per_page: int, total: int) -> PaginationMeta:
    total_pages = math.ceil(total / per_page) if total > 0 else 0
    return PaginationMeta(page=page, per_page=per_page, total=total, total_pages=total_pages)


@router.get("/products", response_model=SuccessEnvelope[list[ProductRead]], responses=ERROR_RESPONSES)
async def list_products(
    request: Request,
    page: str | None = None,
    per_page: str | None = None,
    repo: ProductRepository = Depends(get_product_repository),
):
    page_number = positive_int_or_default(page, DEFAULT_PAGE)
    page_size = positive_int_or_default(per_page, DEFAULT_PER_PAGE)

    max_per_page = request.app.state.settings.MAX_PER_PAGE
    if page_size > max_per_page:
        raise BadRequestError(
            ErrorCode.PER_PAGE_TOO_LARGE,
            {"requested": page_size, "max_per_page": max_per_page},
        )

    products, total = await repo.get_all(page_number, page_size)
    meta = build_pagination_meta(page_number, page_size, total)
    return respond_success(
        status.HTTP_200_OK,
        [ProductRead.dump(p) for p in products],
        meta.model_dump(),
    )


# Registered before /product/{product_id} so "latest" is not read as an id
@router.get("/product/latest", response_model=SuccessEnvelope[ProductRead], responses=ERROR_RESPONSES)
async def get_latest_product(repo: ProductRepository = Depends(get_product_repository)):
    product = await repo.get_latest()
    return respond_success(status.HTTP_200_OK, ProductRead.dump(product))


@router.get("/product/{product_id}", response_model=SuccessEnvelope[ProductRead], responses=ERROR_RESPONSES)
async def get_product(product_id: str, repo: ProductRepository = Depends(get_product_repository)):
    # Not validated: numeric ids are bound as integers, anything else goes to the database as-is
    lookup = parse_int(product_id)
    product = await repo.get_by_id(lookup if lookup is not None else product_id)
    return respond_success(status.HTTP_200_OK, ProductRead.dump(product))


@router.post(
    "/product",
    status_code=status.HTTP_201_CREATED,
    response_model=SuccessEnvelope[ProductRead],
    responses=ERROR_RESPONSES,
)
async def create_product(payload: ProductPayload, repo: ProductRepository = Depends(get_product_repository)):
    product = await repo.create(payload.code, payload.price)
    await repo.db.commit()

    logger.info("product.created", extra={"product_id": product.id})
    return respond_success(
        status.HTTP_201_CREATED,
        ProductRead.dump(product),
        headers={"Location": f"/product/{product.id}"},
    )


@router.put("/product/{product_id}", response_model=SuccessEnvelope[ProductRead], responses=ERROR_RESPONSES)
async def update_product(
    product_id: str,
    payload: ProductPayload,
    repo: ProductRepository = Depends(get_product_repository),
):
    # The body has already been validated at this point, so a bad body wins over a bad id
    pid = parse_product_id(product_id)
    product = await repo.update(pid, payload.code, payload.price)
    await repo.db.commit()

    logger.info("product.updated", extra={"product_id": pid})
    return respond_success(status.HTTP_200_OK, ProductRead.dump(product))


@router.delete("/product/{product_id}", response_model=SuccessEnvelope[MessageData], responses=ERROR_RESPONSES)
async def delete_product(product_id: str, repo: ProductRepository = Depends(get_product_repository)):
    pid = parse_product_id(product_id)
    await repo.delete(pid)
    await repo.db.commit()

    logger.info("product.deleted", extra={"product_id": pid})
    return respond_success(status.HTTP_200_OK, {"message": "product deleted"})
