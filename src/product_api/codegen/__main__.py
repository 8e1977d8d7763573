"""
Command line entry point for the frontend type generator.

    python -m product_api.codegen --out ../frontend/src
    product-api-codegen --out ../frontend/src
"""

import argparse
import logging
from pathlib import Path

from product_api.config.settings import get_settings
from product_api.core.logging import setup_logging

from .generator import generate_frontend_types

logger = logging.getLogger("product_api.codegen")


def build_parser(default_out: Path) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="product-api-codegen",
        description="Generate TypeScript error codes and API types for the frontend.",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=default_out,
        help=f"output directory (default: {default_out})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    setup_logging(settings)

    args = build_parser(settings.FRONTEND_OUT_DIR).parse_args(argv)
    try:
        written = generate_frontend_types(args.out)
    except OSError:
        logger.exception("codegen.failed", extra={"out_dir": str(args.out)})
        return 1

    for path in written:
        print(path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
