"""Configuration model and helpers for the Carbon14 analyzer."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Mapping

from pydantic import BaseModel, Field, ValidationError

__all__ = ["AnalyzerConfig", "DEFAULT_CONFIG_PATH", "DEFAULT_USER_AGENT", "ENV_PREFIX"]

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "data" / "analyzer.json"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10.13; rv:57.0) "
    "Gecko/20100101 Firefox/57.0"
)
ENV_PREFIX = "CARBON14_"


class AnalyzerConfig(BaseModel):
    """Settings controlling how pages and images are requested."""

    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        min_length=1,
        description="User-Agent header sent with every request",
    )
    timeout: float = Field(
        default=15.0,
        gt=0,
        description="Timeout in seconds for each image metadata request",
    )
    page_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for fetching the analysed page",
    )

    @property
    def request_headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent}

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> "AnalyzerConfig":
        """Load configuration data from a JSON file."""

        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        try:
            data = json.loads(config_path.read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise FileNotFoundError(f"Configuration file not found: {config_path}") from exc
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON in configuration file: {config_path}") from exc

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ValueError(f"Configuration file is invalid: {config_path}\n{exc}") from exc

    @classmethod
    def load(cls, path: Path | str | None = None) -> "AnalyzerConfig":
        """Return the configuration from ``path``, the default file or defaults.

        An explicit ``path`` must exist. Environment overrides are applied on
        top in every case.
        """

        if path is not None:
            config = cls.from_file(path)
        elif DEFAULT_CONFIG_PATH.exists():
            config = cls.from_file(DEFAULT_CONFIG_PATH)
        else:
            config = cls()
        return config.with_env()

    def with_env(self, environ: Mapping[str, str] | None = None) -> "AnalyzerConfig":
        """Return a copy overridden by ``CARBON14_*`` environment variables."""

        env = os.environ if environ is None else environ
        overrides = {}
        for field in ("user_agent", "timeout", "page_timeout"):
            value = env.get(f"{ENV_PREFIX}{field.upper()}")
            if value:
                overrides[field] = value

        if not overrides:
            return self

        try:
            return type(self).model_validate({**self.model_dump(), **overrides})
        except ValidationError as exc:
            raise ValueError(f"Invalid {ENV_PREFIX}* environment override\n{exc}") from exc

    def dump(self, path: Path | str | None = None) -> None:
        """Persist the configuration to disk as JSON."""

        config_path = Path(path) if path else DEFAULT_CONFIG_PATH
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(self.model_dump_json(indent=2), encoding="utf-8")
