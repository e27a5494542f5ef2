"""Command-line entry point: filter the sample catalogue with a specification."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TYPE_CHECKING, TextIO

from .config import CliConfig, OutputFormat, SyntaxKind
from .exceptions import SpecificationError
from .filter import ProductFilter
from .operators_memory import build_default_registry
from .parser import FilterParser
from .sample_data import SAMPLE_PRODUCTS

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .domain.product import Product

logger = logging.getLogger("specfilter.cli")

EXIT_OK = 0
EXIT_INVALID_SPECIFICATION = 2


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="specfilter",
        description="Filter the sample product catalogue with a specification.",
        epilog='Example: specfilter "color=white AND size=huge"',
    )
    parser.add_argument(
        "expression",
        nargs="?",
        help="specification, e.g. 'color=green OR (size in large, huge)'",
    )
    parser.add_argument(
        "--syntax",
        choices=[s.value for s in SyntaxKind],
        default=SyntaxKind.EXPRESSION.value,
        help="how the specification is written (default: %(default)s)",
    )
    parser.add_argument(
        "--format",
        choices=[f.value for f in OutputFormat],
        default=OutputFormat.NAMES.value,
        help="output format (default: %(default)s)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="print the whole catalogue and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increase log verbosity (-v info, -vv debug)",
    )
    return parser


def _write_products(
    products: Sequence[Product], output_format: OutputFormat, out: TextIO
) -> None:
    if output_format is OutputFormat.JSON:
        out.write(json.dumps([p.model_dump(mode="json") for p in products]) + "\n")
        return
    for product in products:
        out.write(product.name + "\n")


def run(config: CliConfig, out: TextIO, err: TextIO) -> int:
    """Execute one run; returns the process exit code."""
    if config.list_only:
        _write_products(SAMPLE_PRODUCTS, config.output_format, out)
        return EXIT_OK

    parser = FilterParser(build_default_registry(), syntax=config.make_syntax())
    try:
        spec = parser.parse(config.expression)
    except SpecificationError as exc:
        logger.info("Rejected specification %r: %s", config.expression, exc)
        err.write(f"specfilter: error: {exc}\n")
        return EXIT_INVALID_SPECIFICATION

    if logger.isEnabledFor(logging.INFO):
        logger.info(
            "Filtering %d product(s) with %s", len(SAMPLE_PRODUCTS), spec.to_dict()
        )
    matched = ProductFilter().filter(SAMPLE_PRODUCTS, spec)
    _write_products(matched, config.output_format, out)
    return EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    arg_parser = build_arg_parser()
    args = arg_parser.parse_args(argv)
    if args.expression is None and not args.list:
        arg_parser.error("an expression is required unless --list is given")

    config = CliConfig.from_namespace(args)
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return run(config, sys.stdout, sys.stderr)
