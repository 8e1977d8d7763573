import pytest

from product_api.exceptions.catalog import (
    ERROR_MESSAGES,
    APIException,
    BadRequestError,
    ErrorCode,
    NotFoundAPIError,
    bad_request,
    build_error,
    internal_error,
    not_found,
)


def test_every_code_has_a_message():
    assert set(ERROR_MESSAGES) == set(ErrorCode)
    assert all(ERROR_MESSAGES[code] for code in ErrorCode)


@pytest.mark.parametrize(
    "code, message",
    [
        (ErrorCode.INTERNAL_ERROR, "internal server error"),
        (ErrorCode.PRODUCT_NOT_FOUND, "product not found"),
        (ErrorCode.PRODUCTS_NOT_FOUND, "products not found"),
        (ErrorCode.INVALID_REQUEST, "invalid request"),
        (ErrorCode.INVALID_ID, "invalid product id"),
        (ErrorCode.PER_PAGE_TOO_LARGE, "per_page exceeds maximum allowed"),
    ],
)
def test_default_messages(code, message):
    assert build_error(code).message == message


def test_build_error_keeps_details():
    error = build_error(ErrorCode.PER_PAGE_TOO_LARGE, {"requested": 500, "max_per_page": 100})

    assert error.code == "PER_PAGE_TOO_LARGE"
    assert error.details == {"requested": 500, "max_per_page": 100}


def test_build_error_accepts_string_code_and_message_override():
    error = build_error("INVALID_ID", message="id must be numeric")

    assert error.code == "INVALID_ID"
    assert error.message == "id must be numeric"


def test_unknown_code_is_rejected():
    with pytest.raises(ValueError):
        build_error("NOT_A_CODE")


def test_status_constructors():
    error, status = bad_request(ErrorCode.INVALID_REQUEST, "price: missing")
    assert status == 400
    assert error.details == "price: missing"

    assert not_found(ErrorCode.PRODUCT_NOT_FOUND)[1] == 404
    assert internal_error(ErrorCode.INTERNAL_ERROR)[1] == 500


def test_exception_form_carries_status_and_payload():
    exc = BadRequestError(ErrorCode.INVALID_ID)

    assert isinstance(exc, APIException)
    assert exc.http_status() == 400
    assert exc.to_payload() == {"code": "INVALID_ID", "message": "invalid product id"}
    assert NotFoundAPIError(ErrorCode.PRODUCT_NOT_FOUND).http_status() == 404
