
# product_api/
# │
# ├── exceptions/
# │   ├── __init__.py
# │   ├── base.py                    # Repository-level errors (RepositoryError, NotFoundError, ...)
# │   ├── catalog.py                 # API error codes, default messages, status-class constructors
# │   ├── integrity_classifier.py    # SQL-level / DB-specific constraint classification
# │   └── mapper.py                  # db_error_handler: DB errors -> repository errors

from .base import RepositoryError, NotFoundError, InvalidFieldError
from .catalog import (
    ErrorCode,
    ERROR_MESSAGES,
    APIException,
    BadRequestError,
    NotFoundAPIError,
    InternalAPIError,
    build_error,
)

__all__ = [
    "RepositoryError",
    "NotFoundError",
    "InvalidFieldError",
    "ErrorCode",
    "ERROR_MESSAGES",
    "APIException",
    "BadRequestError",
    "NotFoundAPIError",
    "InternalAPIError",
    "build_error",
]
