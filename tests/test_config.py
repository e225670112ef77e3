from pathlib import Path

import pytest

pytest.importorskip("pydantic")

from pydantic import ValidationError

from carbon14.config import DEFAULT_USER_AGENT, AnalyzerConfig


def test_round_trip(tmp_path: Path) -> None:
    config_path = tmp_path / "analyzer.json"
    config = AnalyzerConfig(user_agent="carbon14-test", timeout=5, page_timeout=20)
    config.dump(config_path)

    loaded = AnalyzerConfig.from_file(config_path)
    assert loaded.user_agent == "carbon14-test"
    assert loaded.timeout == 5
    assert loaded.page_timeout == 20


def test_defaults() -> None:
    config = AnalyzerConfig()

    assert config.user_agent == DEFAULT_USER_AGENT
    assert config.request_headers == {"User-Agent": DEFAULT_USER_AGENT}
    assert config.timeout > 0 and config.page_timeout > 0


def test_rejects_non_positive_timeouts() -> None:
    with pytest.raises(ValidationError):
        AnalyzerConfig(timeout=0)


def test_from_file_reports_missing_and_invalid_files(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        AnalyzerConfig.from_file(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError, match="Invalid JSON"):
        AnalyzerConfig.from_file(broken)

    invalid = tmp_path / "invalid.json"
    invalid.write_text('{"timeout": -1}', encoding="utf-8")
    with pytest.raises(ValueError, match="invalid"):
        AnalyzerConfig.from_file(invalid)


def test_environment_overrides() -> None:
    config = AnalyzerConfig().with_env(
        {"CARBON14_TIMEOUT": "2.5", "CARBON14_USER_AGENT": "env-agent", "UNRELATED": "x"}
    )

    assert config.timeout == 2.5
    assert config.user_agent == "env-agent"
    assert config.page_timeout == AnalyzerConfig().page_timeout

    with pytest.raises(ValueError, match="CARBON14_"):
        AnalyzerConfig().with_env({"CARBON14_PAGE_TIMEOUT": "soon"})


def test_load_applies_environment_to_explicit_file(tmp_path: Path, monkeypatch) -> None:
    config_path = tmp_path / "analyzer.json"
    AnalyzerConfig(timeout=7).dump(config_path)
    monkeypatch.setenv("CARBON14_PAGE_TIMEOUT", "9")

    config = AnalyzerConfig.load(config_path)

    assert config.timeout == 7
    assert config.page_timeout == 9
