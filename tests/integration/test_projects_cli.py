"""Integration tests for the db and projects CLI commands."""

from __future__ import annotations

import pytest
from click.testing import CliRunner
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from catalog_service.cli.main import cli

pytestmark = pytest.mark.integration


@pytest.fixture
def cli_database(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point the CLI's engine and session factory at a temporary SQLite file."""
    import catalog_service.infra.database as database
    from catalog_service.infra.database import session as session_module

    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}", poolclass=NullPool)
    session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )
    monkeypatch.setattr(session_module, "engine", engine)
    monkeypatch.setattr(session_module, "AsyncSessionLocal", session_maker)
    monkeypatch.setattr(database, "engine", engine)
    return engine


@pytest.fixture
def runner(cli_database) -> CliRunner:
    runner = CliRunner()
    result = runner.invoke(cli, ["db", "init"])
    assert result.exit_code == 0, result.output
    return runner


def test_db_init_reports_ready(runner: CliRunner):
    result = runner.invoke(cli, ["db", "init"])

    assert result.exit_code == 0
    assert "Database ready" in result.output


def test_seed_is_idempotent(runner: CliRunner):
    first = runner.invoke(cli, ["projects", "seed"])
    second = runner.invoke(cli, ["projects", "seed"])

    assert "Seeded 10 project(s)" in first.output
    assert "Seeded 0 project(s)" in second.output
    assert "afrika-korps already exists" in second.output


def test_list_by_title_and_follow_next(runner: CliRunner):
    runner.invoke(cli, ["projects", "seed"])

    first = runner.invoke(cli, ["projects", "list", "--sort", "t", "--limit", "5"])

    assert first.exit_code == 0
    assert "5 of 10 project(s)" in first.output
    listed = [line.split()[0] for line in first.output.splitlines() if line.startswith("  ")]
    assert listed == [
        "a-la-baionnette",
        "afrika-korps",
        "army-at-dawn",
        "battle-for-moscow",
        "combat-commander",
    ]
    next_line = next(line for line in first.output.splitlines() if "next: ?seek=" in line)
    token = next_line.split("?seek=", 1)[1].strip()

    second = runner.invoke(cli, ["projects", "list", "--seek", token, "--limit", "5"])

    assert second.exit_code == 0
    assert "empires-in-arms" in second.output
    assert "a-la-baionnette" not in second.output


def test_list_rejects_conflicting_options(runner: CliRunner):
    result = runner.invoke(cli, ["projects", "list", "--seek", "cCxhLHMsLCw", "--sort", "t"])

    assert result.exit_code == 1


def test_add_and_duplicate(runner: CliRunner):
    added = runner.invoke(cli, ["projects", "add", "longest-day", "--title", "The Longest Day"])
    duplicate = runner.invoke(cli, ["projects", "add", "longest-day", "--title", "The Longest Day"])

    assert added.exit_code == 0
    assert "Longest Day, The" in added.output
    assert duplicate.exit_code == 1


def test_add_rejects_bad_name(runner: CliRunner):
    result = runner.invoke(cli, ["projects", "add", "bad name", "--title", "X"])

    assert result.exit_code == 1


def test_drop(runner: CliRunner):
    result = runner.invoke(cli, ["db", "drop", "--yes"])

    assert result.exit_code == 0
    assert "Tables dropped" in result.output
