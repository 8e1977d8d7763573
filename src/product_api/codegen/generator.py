"""
Frontend type generator.

Renders two TypeScript modules for the web client from the backend's own
definitions, imported in-process:

    errorCodes.ts  one constant per ErrorCode + the code -> message table
    apiTypes.ts    envelope interfaces and the Product interface

The envelope interfaces are rendered from the models in schemas/envelope.py.
The Product interface comes from the JSON schema of `ProductRead` (wire
aliases, so camelCase), laid over a baseline field set. The baseline is what
gets emitted when the schema yields nothing usable.
"""

import json
import logging
from pathlib import Path
from typing import Any, Iterable

from pydantic import BaseModel

from product_api.exceptions.catalog import ERROR_MESSAGES, ErrorCode
from product_api.schemas.envelope import APIError, ErrorEnvelope, SuccessEnvelope
from product_api.schemas.product import ProductRead

logger = logging.getLogger(__name__)

ERROR_CODES_FILENAME = "errorCodes.ts"
API_TYPES_FILENAME = "apiTypes.ts"

# Kept upper-case when building constant names (INVALID_ID -> CodeInvalidID)
ACRONYMS = frozenset({"ID", "API", "URL", "HTTP"})

BASELINE_PRODUCT_FIELDS: dict[str, str] = {
    "id": "number",
    "code": "string",
    "price": "number",
    "createdAt": "string",
    "updatedAt": "string",
    "deletedAt": "string | null",
}

_JSON_TO_TS = {
    "integer": "number",
    "number": "number",
    "string": "string",
    "boolean": "boolean",
    "null": "null",
    "object": "Record<string, any>",
}


def constant_name(code: ErrorCode) -> str:
    """PER_PAGE_TOO_LARGE -> CodePerPageTooLarge."""
    parts = []
    for word in code.name.split("_"):
        parts.append(word if word in ACRONYMS else word.capitalize())
    return "Code" + "".join(parts)


def _ts_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def render_error_codes(codes: Iterable[ErrorCode] = ErrorCode, messages: dict[ErrorCode, str] = ERROR_MESSAGES) -> str:
    codes = list(codes)
    names = [constant_name(code) for code in codes]

    lines = [
        "// GENERATED FROM product_api.exceptions.catalog",
        "// Keep in sync with backend; used by frontend for error-code checks and messages.",
        "",
    ]
    lines += [f"export const {name} = {_ts_string(code.value)};" for name, code in zip(names, codes)]

    lines += ["", "export const ErrorMessages: Record<string, string> = {"]
    for name, code in zip(names, codes):
        message = messages.get(code)
        if message:
            lines.append(f"  [{name}]: {_ts_string(message)},")
    lines += ["};", "", "export default {"]
    lines += [f"  {name}," for name in names]
    lines += ["  ErrorMessages,", "};"]
    return "\n".join(lines) + "\n"


def json_schema_to_ts(prop: dict[str, Any]) -> str | None:
    """
    TypeScript type for one JSON-schema property, or None when it cannot be mapped.

    Handles constants (Literal fields), `$ref` to another model, `anyOf` unions
    (Optional fields) and arrays. A property without any type is `any`.
    """
    if "const" in prop:
        return json.dumps(prop["const"])
    if "$ref" in prop:
        return prop["$ref"].rsplit("/", 1)[-1]
    if "anyOf" in prop:
        members = [json_schema_to_ts(option) for option in prop["anyOf"]]
        if any(m is None for m in members):
            return None
        return " | ".join(dict.fromkeys(members))

    kind = prop.get("type")
    if kind is None:
        return "any"
    if kind == "array":
        item = json_schema_to_ts(prop.get("items", {}))
        return f"{item}[]" if item else "any[]"
    return _JSON_TO_TS.get(kind)


def _drop_null(prop: dict[str, Any]) -> dict[str, Any]:
    options = [option for option in prop.get("anyOf", ()) if option.get("type") != "null"]
    if not options:
        return prop
    return options[0] if len(options) == 1 else {"anyOf": options}


def render_interface(name: str, model: type[BaseModel], overrides: dict[str, str] | None = None) -> str:
    """
    `export interface <name>` for a pydantic model, read from its JSON schema.

    Fields that default to None are optional (`?`) and lose their `null`
    member, because the envelope codec omits them instead of sending null.

    Args:
        name: Interface name, type parameters included (e.g. "SuccessEnvelope<T>").
        model: The pydantic model to describe.
        overrides: TypeScript types to use for specific fields, e.g. {"data": "T"}.
    """
    overrides = overrides or {}
    schema = model.model_json_schema(by_alias=True)
    required = set(schema.get("required", ()))

    lines = [f"export interface {name} {{"]
    for field, prop in schema.get("properties", {}).items():
        optional = field not in required and "default" in prop and prop["default"] is None
        ts_type = overrides.get(field) or json_schema_to_ts(_drop_null(prop) if optional else prop)
        if ts_type is None:
            logger.warning("codegen.unmapped_field", extra={"model": model.__name__, "field": field})
            ts_type = "any"
        lines.append(f"  {field}{'?' if optional else ''}: {ts_type};")
    lines.append("}")
    return "\n".join(lines) + "\n"


def detect_product_fields(schema: dict[str, Any] | None = None) -> dict[str, str]:
    if schema is None:
        schema = ProductRead.model_json_schema(by_alias=True)

    fields: dict[str, str] = {}
    for name, prop in schema.get("properties", {}).items():
        ts_type = json_schema_to_ts(prop)
        if ts_type is None:
            logger.warning("codegen.unmapped_field", extra={"field": name})
            continue
        fields[name] = ts_type
    return fields


def product_fields(schema: dict[str, Any] | None = None) -> dict[str, str]:
    """Baseline fields, overridden and extended by whatever the schema declares."""
    fields = dict(BASELINE_PRODUCT_FIELDS)
    fields.update(detect_product_fields(schema))
    return fields


def render_api_types(fields: dict[str, str] | None = None) -> str:
    if fields is None:
        fields = product_fields()

    parts = [
        "// GENERATED: API response types for frontend\n\n",
        render_interface("APIError", APIError) + "\n",
        render_interface("ErrorEnvelope", ErrorEnvelope) + "\n",
        render_interface("SuccessEnvelope<T>", SuccessEnvelope, {"data": "T"}) + "\n",
        "export interface Product {\n",
    ]
    parts += [f"  {name}: {ts_type};\n" for name, ts_type in fields.items()]
    parts += [
        "}\n\n",
        "export type ProductListResponse = SuccessEnvelope<Product[]>;\n",
        "export type ProductResponse = SuccessEnvelope<Product>;\n",
        "export type APIFailure = ErrorEnvelope;\n",
    ]
    return "".join(parts)


def generate_frontend_types(out_dir: str | Path) -> list[Path]:
    """
    Write errorCodes.ts and apiTypes.ts into `out_dir` (created if missing).

    Returns:
        The paths written.

    Raises:
        OSError: If the directory or files cannot be written.
    """
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    written = []
    for filename, content in (
        (ERROR_CODES_FILENAME, render_error_codes()),
        (API_TYPES_FILENAME, render_api_types()),
    ):
        path = out / filename
        path.write_text(content, encoding="utf-8")
        written.append(path)

    logger.info("codegen.written", extra={"out_dir": str(out), "files": [p.name for p in written]})
    return written
