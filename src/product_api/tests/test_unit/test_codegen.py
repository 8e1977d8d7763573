from pathlib import Path

import pytest

from product_api.codegen import __main__ as codegen_cli
from product_api.codegen.generator import (
    API_TYPES_FILENAME,
    BASELINE_PRODUCT_FIELDS,
    ERROR_CODES_FILENAME,
    constant_name,
    detect_product_fields,
    generate_frontend_types,
    json_schema_to_ts,
    product_fields,
    render_api_types,
    render_error_codes,
    render_interface,
)
from product_api.exceptions.catalog import ErrorCode
from product_api.schemas.envelope import APIError, ErrorEnvelope, SuccessEnvelope
from product_api.tests.conftest import make_test_settings

EXPECTED_ERROR_CODES = '''\
// GENERATED FROM product_api.exceptions.catalog
// Keep in sync with backend; used by frontend for error-code checks and messages.

export const CodeInternalError = "INTERNAL_ERROR";
export const CodeProductNotFound = "PRODUCT_NOT_FOUND";
export const CodeProductsNotFound = "PRODUCTS_NOT_FOUND";
export const CodeInvalidRequest = "INVALID_REQUEST";
export const CodeInvalidID = "INVALID_ID";
export const CodePerPageTooLarge = "PER_PAGE_TOO_LARGE";

export const ErrorMessages: Record<string, string> = {
  [CodeInternalError]: "internal server error",
  [CodeProductNotFound]: "product not found",
  [CodeProductsNotFound]: "products not found",
  [CodeInvalidRequest]: "invalid request",
  [CodeInvalidID]: "invalid product id",
  [CodePerPageTooLarge]: "per_page exceeds maximum allowed",
};

export default {
  CodeInternalError,
  CodeProductNotFound,
  CodeProductsNotFound,
  CodeInvalidRequest,
  CodeInvalidID,
  CodePerPageTooLarge,
  ErrorMessages,
};
'''


@pytest.mark.parametrize(
    "code, name",
    [
        (ErrorCode.INVALID_ID, "CodeInvalidID"),
        (ErrorCode.PER_PAGE_TOO_LARGE, "CodePerPageTooLarge"),
        (ErrorCode.PRODUCT_NOT_FOUND, "CodeProductNotFound"),
    ],
)
def test_constant_name(code, name):
    assert constant_name(code) == name


def test_render_error_codes():
    assert render_error_codes() == EXPECTED_ERROR_CODES


def test_product_fields_follow_the_read_schema():
    fields = product_fields()

    assert fields == BASELINE_PRODUCT_FIELDS
    assert list(fields) == ["id", "code", "price", "createdAt", "updatedAt", "deletedAt"]


def test_schema_fields_extend_the_baseline():
    schema = {"properties": {"sku": {"type": "string"}, "price": {"type": "number"}}}

    fields = product_fields(schema)

    assert fields["sku"] == "string"
    assert fields["price"] == "number"
    assert fields["createdAt"] == "string"


def test_unmappable_properties_are_skipped():
    schema = {"properties": {"blob": {"type": "binary"}, "tags": {"type": "array", "items": {"type": "string"}}}}

    assert detect_product_fields(schema) == {"tags": "string[]"}


def test_json_schema_to_ts_refs_and_constants():
    assert json_schema_to_ts({"$ref": "#/$defs/APIError"}) == "APIError"
    assert json_schema_to_ts({"const": False, "type": "boolean"}) == "false"
    assert json_schema_to_ts({"title": "Details"}) == "any"


def test_json_schema_to_ts_union():
    assert json_schema_to_ts({"anyOf": [{"type": "integer"}, {"type": "null"}]}) == "number | null"


def test_render_api_types_contains_interfaces():
    out = render_api_types()

    assert out.startswith("// GENERATED: API response types for frontend\n")
    assert "export interface SuccessEnvelope<T> {" in out
    assert "  meta?: Record<string, any>;\n" in out
    assert "  deletedAt: string | null;\n" in out
    assert "export type ProductListResponse = SuccessEnvelope<Product[]>;\n" in out


def test_generate_frontend_types_writes_both_files(tmp_path):
    out_dir = tmp_path / "frontend" / "src"

    written = generate_frontend_types(out_dir)

    assert [p.name for p in written] == [ERROR_CODES_FILENAME, API_TYPES_FILENAME]
    assert (out_dir / ERROR_CODES_FILENAME).read_text(encoding="utf-8") == EXPECTED_ERROR_CODES
    assert "export interface Product {" in (out_dir / API_TYPES_FILENAME).read_text(encoding="utf-8")


def test_cli_writes_to_out_dir(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr(codegen_cli, "get_settings", make_test_settings)
    monkeypatch.setattr(codegen_cli, "setup_logging", lambda settings: None)

    exit_code = codegen_cli.main(["--out", str(tmp_path)])

    assert exit_code == 0
    printed = capsys.readouterr().out.splitlines()
    assert str(tmp_path / ERROR_CODES_FILENAME) in printed
    assert (tmp_path / API_TYPES_FILENAME).exists()


def test_cli_reports_write_failure(tmp_path, monkeypatch):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setattr(codegen_cli, "get_settings", make_test_settings)
    monkeypatch.setattr(codegen_cli, "setup_logging", lambda settings: None)

    assert codegen_cli.main(["--out", str(Path(blocker) / "src")]) == 1


class TestEnvelopeInterfaces:
    """
    The envelope interfaces in apiTypes.ts are read from the pydantic envelope
    models, so a field added there shows up in the frontend types.
    """

    def test_api_error(self):
        assert render_interface("APIError", APIError) == (
            "export interface APIError {\n"
            "  code: string;\n"
            "  message: string;\n"
            "  details?: any;\n"
            "}\n"
        )

    def test_error_envelope(self):
        assert render_interface("ErrorEnvelope", ErrorEnvelope) == (
            "export interface ErrorEnvelope {\n"
            "  success: false;\n"
            "  status: number;\n"
            "  error: APIError;\n"
            "}\n"
        )

    def test_success_envelope(self):
        assert render_interface("SuccessEnvelope<T>", SuccessEnvelope, {"data": "T"}) == (
            "export interface SuccessEnvelope<T> {\n"
            "  success: true;\n"
            "  status: number;\n"
            "  data: T;\n"
            "  meta?: Record<string, any>;\n"
            "}\n"
        )

    def test_api_types_follow_the_models(self, monkeypatch):
        class TracedAPIError(APIError):
            trace_id: str

        monkeypatch.setattr("product_api.codegen.generator.APIError", TracedAPIError)

        assert "  trace_id: string;\n" in render_api_types()
