"""Command-line configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .syntax import ExpressionSyntax, FilterSyntax, JsonFilterSyntax

if TYPE_CHECKING:
    import argparse


class SyntaxKind(str, Enum):
    EXPRESSION = "expression"
    JSON = "json"


class OutputFormat(str, Enum):
    NAMES = "names"
    JSON = "json"


_LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


@dataclass(frozen=True)
class CliConfig:
    """
    Immutable settings for one command-line run.

    Attributes:
        expression: Specification text, or ``None`` when only listing.
        syntax: Which text syntax the expression is written in.
        output_format: ``names`` prints one name per line, ``json`` a JSON list.
        verbosity: Number of ``-v`` flags given.
        list_only: Print the catalogue instead of filtering it.
    """

    expression: str | None = None
    syntax: SyntaxKind = SyntaxKind.EXPRESSION
    output_format: OutputFormat = OutputFormat.NAMES
    verbosity: int = 0
    list_only: bool = False

    @property
    def log_level(self) -> int:
        return _LOG_LEVELS[min(self.verbosity, len(_LOG_LEVELS) - 1)]

    def make_syntax(self) -> FilterSyntax:
        if self.syntax is SyntaxKind.JSON:
            return JsonFilterSyntax()
        return ExpressionSyntax()

    @classmethod
    def from_namespace(cls, args: argparse.Namespace) -> CliConfig:
        return cls(
            expression=args.expression,
            syntax=SyntaxKind(args.syntax),
            output_format=OutputFormat(args.format),
            verbosity=args.verbose,
            list_only=args.list,
        )
