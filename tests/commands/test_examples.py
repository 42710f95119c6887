"""Tests for --examples flag on CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner

from tokenctl.cli import cli

# (CLI args, expected keywords in output)
EXAMPLES_COMMANDS: list[tuple[list[str], list[str]]] = [
    (["resolve", "--examples"], ["tokenctl resolve tokens.json", "--flatten-aliases"]),
    (["check", "--examples"], ["tokenctl check tokens.json", "--skip-validation"]),
]


def _examples_id(item: tuple[list[str], list[str]]) -> str:
    args, _ = item
    return "_".join(a for a in args if a != "--examples")


@pytest.mark.usefixtures("_isolated_project")
@pytest.mark.parametrize(
    "args,keywords",
    EXAMPLES_COMMANDS,
    ids=[_examples_id(item) for item in EXAMPLES_COMMANDS],
)
def test_examples(cli_runner: CliRunner, args: list[str], keywords: list[str]) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0, result.output
    assert "Examples for" in result.output
    for keyword in keywords:
        assert keyword in result.output


@pytest.mark.usefixtures("_isolated_project")
def test_examples_does_not_need_token_file(cli_runner: CliRunner) -> None:
    """--examples is eager: it exits before the TOKEN_FILE argument is checked."""
    result = cli_runner.invoke(cli, ["resolve", "--examples"])
    assert result.exit_code == 0
    assert "Missing argument" not in result.output
