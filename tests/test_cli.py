"""CLI behavior smoke tests."""

from __future__ import annotations

import json

import pytest
from pytest import CaptureFixture

from azmcp import cli
from azmcp.executor import CommandRunner
from azmcp.registry import CommandRegistry


@pytest.fixture()
def factory(registry: CommandRegistry):
    """Serve the fixture registry instead of building a fresh one."""
    return lambda: (registry, CommandRunner())


def test_cli_runs_command_words(
    factory, subscription: str, capsys: CaptureFixture[str]
) -> None:
    """Literal command words resolve to a leaf and print its envelope."""
    # Arrange
    argv = [
        "storage",
        "table",
        "list",
        "--subscription",
        subscription,
        "--account-name",
        "contosodata",
    ]

    # Act
    exit_code = cli.main(argv, factory=factory)

    # Assert
    assert exit_code == 0
    envelope = json.loads(capsys.readouterr().out)
    assert envelope["status"] == 200
    assert envelope["results"] == {"tables": ["audit", "sessions"]}


def test_cli_keeps_shell_arguments_literal(
    factory, subscription: str, capsys: CaptureFixture[str]
) -> None:
    """Arguments already split by the shell are not re-tokenized."""
    argv = [
        "cosmos",
        "database",
        "container",
        "item",
        "query",
        "--subscription",
        subscription,
        "--account-name",
        "contoso-cosmos",
        "--database-name",
        "inventory",
        "--container-name",
        "products",
        "--query",
        "SELECT * FROM c WHERE c.name = 'Gadget'",
    ]

    exit_code = cli.main(argv, factory=factory)

    assert exit_code == 0
    items = json.loads(capsys.readouterr().out)["results"]["items"]
    assert [item["id"] for item in items] == ["2"]


def test_cli_reports_failures_with_exit_code(
    factory, capsys: CaptureFixture[str]
) -> None:
    """A failing envelope is still printed, with a non-zero exit code."""
    exit_code = cli.main(["storage", "account", "list"], factory=factory)

    assert exit_code == 1
    envelope = json.loads(capsys.readouterr().out)
    assert envelope["status"] == 400
    assert envelope["message"] == "Missing Required options: --subscription"


def test_cli_unknown_command(factory, capsys: CaptureFixture[str]) -> None:
    exit_code = cli.main(["compute", "vm", "list"], factory=factory)

    assert exit_code == 1
    envelope = json.loads(capsys.readouterr().out)
    assert envelope["status"] == 404
    assert envelope["message"] == "Could not find command: compute vm list"


def test_cli_catalog_flag(factory, capsys: CaptureFixture[str]) -> None:
    """Catalog flag should print tool discovery metadata."""
    # Arrange
    argv: list[str] = ["--catalog"]

    # Act
    exit_code = cli.main(argv, factory=factory)

    # Assert
    assert exit_code == 0
    catalog = json.loads(capsys.readouterr().out)
    assert "azmcp_subscription_list" in catalog
    assert "azmcp_tools_list" not in catalog
    assert catalog["azmcp_subscription_list"]["description"]
