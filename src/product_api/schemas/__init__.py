from .envelope import APIError, MessageData, PaginationMeta, SuccessEnvelope, ErrorEnvelope
from .product import ProductPayload, ProductRead

__all__ = [
    "APIError",
    "MessageData",
    "PaginationMeta",
    "SuccessEnvelope",
    "ErrorEnvelope",
    "ProductPayload",
    "ProductRead",
]
