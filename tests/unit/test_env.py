"""Tests for env("VAR") resolution providers."""

from pathlib import Path

import pytest

from pyrisma.core.env import (
    DotenvFileProvider,
    EnvResolver,
    MappingEnvProvider,
    PlaceholderProvider,
    ProcessEnvProvider,
)


@pytest.fixture
def dotenv_file(tmp_path: Path) -> Path:
    path = tmp_path / ".env"
    path.write_text(
        "# local settings\n"
        'DATABASE_URL="postgresql://dotenv/db"\n'
        "SHADOW_URL=postgresql://shadow/db\n",
        encoding="utf-8",
    )
    return path


class TestProviders:
    def test_mapping(self):
        provider = MappingEnvProvider({"A": "1"})
        assert provider.lookup("A") == "1"
        assert provider.lookup("B") is None

    def test_process_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("PYRISMA_TEST_VAR", "from-process")
        assert ProcessEnvProvider().lookup("PYRISMA_TEST_VAR") == "from-process"

    def test_dotenv_strips_quotes_and_comments(self, dotenv_file: Path):
        provider = DotenvFileProvider(dotenv_file)
        assert provider.lookup("DATABASE_URL") == "postgresql://dotenv/db"
        assert provider.lookup("SHADOW_URL") == "postgresql://shadow/db"
        assert provider.lookup("# local settings") is None

    def test_missing_dotenv_file(self, tmp_path: Path):
        assert DotenvFileProvider(tmp_path / "missing.env").lookup("ANY") is None

    def test_placeholder(self):
        assert PlaceholderProvider().lookup("DATABASE_URL") == "env(DATABASE_URL)"


class TestEnvResolver:
    def test_first_provider_wins(self, dotenv_file: Path):
        resolver = EnvResolver(
            [MappingEnvProvider({"DATABASE_URL": "mapped"}), DotenvFileProvider(dotenv_file)]
        )
        assert resolver.resolve("DATABASE_URL") == "mapped"

    def test_falls_through_to_later_provider(self, dotenv_file: Path):
        resolver = EnvResolver([MappingEnvProvider({}), DotenvFileProvider(dotenv_file)])
        assert resolver.resolve("SHADOW_URL") == "postgresql://shadow/db"

    def test_placeholder_when_nothing_matches(self):
        assert EnvResolver([]).resolve("NOPE") == "env(NOPE)"

    def test_default_prefers_process_env(self, monkeypatch: pytest.MonkeyPatch, dotenv_file: Path):
        monkeypatch.setenv("DATABASE_URL", "postgresql://process/db")
        assert EnvResolver.default(dotenv_file).resolve("DATABASE_URL") == "postgresql://process/db"

    def test_default_reads_dotenv(self, monkeypatch: pytest.MonkeyPatch, dotenv_file: Path):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        assert EnvResolver.default(dotenv_file).resolve("DATABASE_URL") == "postgresql://dotenv/db"

    def test_default_placeholder_logs_warning(
        self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ):
        monkeypatch.delenv("PYRISMA_UNSET_VAR", raising=False)
        resolver = EnvResolver.default(tmp_path / ".env")
        with caplog.at_level("WARNING", logger="pyrisma.core.env"):
            assert resolver.resolve("PYRISMA_UNSET_VAR") == "env(PYRISMA_UNSET_VAR)"
        assert "PYRISMA_UNSET_VAR" in caplog.text
