from .generator import (
    generate_frontend_types,
    render_error_codes,
    render_api_types,
    product_fields,
    constant_name,
    render_interface,
)

__all__ = [
    "generate_frontend_types",
    "render_error_codes",
    "render_api_types",
    "product_fields",
    "constant_name",
    "render_interface",
]
