"""Runtime settings read from ``STOREFRONT_*`` environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# Resolve data directory relative to the project root.
# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"
DEFAULT_LOOKUP_TIMEOUT = 5.0
DEFAULT_LOOKUP_WORKERS = 8
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(ValueError):
    """An environment variable holds a value that cannot be used."""


@dataclass(frozen=True)
class Settings:

    data_dir: Path = DEFAULT_DATA_DIR
    products_url: str | None = None
    lookup_timeout: float = DEFAULT_LOOKUP_TIMEOUT
    lookup_workers: int = DEFAULT_LOOKUP_WORKERS
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        data_dir = env.get("STOREFRONT_DATA_DIR")
        products_url = (env.get("STOREFRONT_PRODUCTS_URL") or "").strip() or None

        timeout = _parse(env, "STOREFRONT_LOOKUP_TIMEOUT", float, DEFAULT_LOOKUP_TIMEOUT)
        if timeout <= 0:
            raise ConfigError("STOREFRONT_LOOKUP_TIMEOUT must be greater than zero")

        workers = _parse(env, "STOREFRONT_LOOKUP_WORKERS", int, DEFAULT_LOOKUP_WORKERS)
        if workers < 1:
            raise ConfigError("STOREFRONT_LOOKUP_WORKERS must be at least 1")

        log_level = env.get("STOREFRONT_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigError(
                f"STOREFRONT_LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}"
            )

        return cls(
            data_dir=Path(data_dir) if data_dir else DEFAULT_DATA_DIR,
            products_url=products_url,
            lookup_timeout=timeout,
            lookup_workers=workers,
            log_level=log_level,
        )


def _parse(env: Mapping[str, str], name: str, convert, default):
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return convert(raw.strip())
    except ValueError as exc:
        raise ConfigError(f"{name} has an invalid value: {raw!r}") from exc
