"""Tests for the command-line entry point."""

from __future__ import annotations

import io
import json
import logging

import pytest

from specfilter import AttributeSpecification
from specfilter.cli import EXIT_INVALID_SPECIFICATION, EXIT_OK, main, run
from specfilter.config import CliConfig, OutputFormat, SyntaxKind
from specfilter.syntax import ExpressionSyntax, JsonFilterSyntax


def test_main_prints_matching_names(capsys):
    assert main(["color=white AND size=huge"]) == EXIT_OK
    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["House", "Truck"]


def test_main_single_color(capsys):
    assert main(["color=green"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["Apple", "Tree"]


def test_main_no_matches_prints_nothing(capsys):
    assert main(["color=red"]) == EXIT_OK
    assert capsys.readouterr().out == ""


def test_main_invalid_expression_exits_non_zero(capsys):
    assert main(["color=green AND"]) == EXIT_INVALID_SPECIFICATION
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "specfilter: error:" in captured.err


def test_main_unknown_field(capsys):
    assert main(["colour=green"]) == EXIT_INVALID_SPECIFICATION
    assert "Did you mean" in capsys.readouterr().err


def test_main_json_output(capsys):
    assert main(["--format", "json", "size=small"]) == EXIT_OK
    assert json.loads(capsys.readouterr().out) == [
        {"name": "Apple", "color": "green", "size": "small"}
    ]


def test_main_json_syntax(capsys):
    expression = '{"op": "in", "attr": "size", "val": ["large", "huge"]}'
    assert main(["--syntax", "json", expression]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["Tree", "House", "Truck"]


@pytest.mark.parametrize("op", ["in", "not_in"])
def test_main_json_membership_with_scalar_value_is_rejected(capsys, op):
    expression = f'{{"op": "{op}", "attr": "name", "val": 5}}'
    assert main(["--syntax", "json", expression]) == EXIT_INVALID_SPECIFICATION
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "needs a list of values" in captured.err


@pytest.mark.parametrize(
    "expression",
    [
        " OR ".join(["color=green"] * 2000),
        "NOT " * 2000 + "color=green",
        "(" * 2000 + "color=green" + ")" * 2000,
    ],
    ids=["or-chain", "not-chain", "parentheses"],
)
def test_main_rejects_deeply_nested_expression(capsys, expression):
    assert main([expression]) == EXIT_INVALID_SPECIFICATION
    assert "nested more than 100 levels" in capsys.readouterr().err


def test_main_list(capsys):
    assert main(["--list"]) == EXIT_OK
    assert capsys.readouterr().out.splitlines() == ["Apple", "Tree", "House", "Truck"]


def test_main_requires_expression(capsys):
    with pytest.raises(SystemExit) as exc_info:
        main([])
    assert exc_info.value.code == 2
    assert "expression is required" in capsys.readouterr().err


def test_run_with_explicit_streams():
    out, err = io.StringIO(), io.StringIO()
    code = run(CliConfig(expression="NOT size=huge"), out, err)
    assert code == EXIT_OK
    assert out.getvalue() == "Apple\nTree\n"
    assert err.getvalue() == ""


def test_run_logs_rejected_specification(caplog):
    out, err = io.StringIO(), io.StringIO()
    with caplog.at_level(logging.INFO, logger="specfilter.cli"):
        code = run(CliConfig(expression="color=purple"), out, err)
    assert code == EXIT_INVALID_SPECIFICATION
    assert "Rejected specification 'color=purple'" in caplog.text


def test_run_logs_specification_at_info(caplog):
    out, err = io.StringIO(), io.StringIO()
    with caplog.at_level(logging.INFO, logger="specfilter.cli"):
        code = run(CliConfig(expression="size=small"), out, err)
    assert code == EXIT_OK
    assert "Filtering 4 product(s) with {'op': '=', 'attr': 'size'" in caplog.text


def test_run_skips_serialising_specification_below_info(caplog, monkeypatch):
    def fail_to_dict(self):
        raise AssertionError("to_dict called with INFO disabled")

    monkeypatch.setattr(AttributeSpecification, "to_dict", fail_to_dict)
    out, err = io.StringIO(), io.StringIO()
    with caplog.at_level(logging.WARNING, logger="specfilter.cli"):
        code = run(CliConfig(expression="size=small"), out, err)
    assert code == EXIT_OK
    assert out.getvalue() == "Apple\n"


# -- config ------------------------------------------------------------------


@pytest.mark.parametrize(
    ("verbosity", "level"),
    [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
)
def test_config_log_level(verbosity, level):
    assert CliConfig(verbosity=verbosity).log_level == level


def test_config_make_syntax():
    assert isinstance(CliConfig().make_syntax(), ExpressionSyntax)
    assert isinstance(CliConfig(syntax=SyntaxKind.JSON).make_syntax(), JsonFilterSyntax)


def test_config_is_frozen():
    config = CliConfig(output_format=OutputFormat.JSON)
    with pytest.raises(AttributeError):
        config.verbosity = 3  # type: ignore[misc]
