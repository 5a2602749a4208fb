"""``[tool.circuitdiff]`` configuration.

Example ``pyproject.toml`` section::

    [tool.circuitdiff]
    summary_quantile = 0.9
    header = "# Changes to circuit sizes"
    repository = "noir-lang/noir"
    color = false
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any

from circuitdiff.errors import ConfigError
from circuitdiff.format.common import DEFAULT_SUMMARY_QUANTILE

logger = logging.getLogger("circuitdiff")

DEFAULT_HEADER = "# Changes to circuit sizes"


@dataclass(frozen=True)
class DiffConfig:
    """Report defaults; CLI flags and API arguments override them."""

    summary_quantile: float = DEFAULT_SUMMARY_QUANTILE
    header: str = DEFAULT_HEADER
    repository: str = ""
    color: bool = True

    def __post_init__(self) -> None:
        quantile = self.summary_quantile
        if isinstance(quantile, bool) or not isinstance(quantile, (int, float)) or not 0 <= quantile <= 1:
            raise ConfigError(
                f"summary_quantile must be a number within [0, 1], got {self.summary_quantile!r}"
            )
        for name in ("header", "repository"):
            value = getattr(self, name)
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")
        if not isinstance(self.color, bool):
            raise ConfigError(f"color must be a boolean, got {self.color!r}")

    def override(self, **values: Any) -> DiffConfig:
        """Return a copy with every non-``None`` value in *values* applied."""
        return replace(self, **{k: v for k, v in values.items() if v is not None})


def load_config(path: str | Path | None = None) -> DiffConfig:
    """Read ``[tool.circuitdiff]`` from *path* (default: ``./pyproject.toml``).

    A missing default file or a missing section yields ``DiffConfig()``.

    Raises:
        ConfigError: On unreadable TOML, unknown keys, or invalid values.
    """
    explicit = path is not None
    pyproject = Path(path) if explicit else Path.cwd() / "pyproject.toml"
    if not pyproject.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {pyproject}")
        return DiffConfig()

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in {pyproject}: {exc}") from exc

    section = data.get("tool", {}).get("circuitdiff", {})
    known = {f.name for f in fields(DiffConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ConfigError(f"Unknown [tool.circuitdiff] keys in {pyproject}: {', '.join(unknown)}")

    logger.debug("Loaded [tool.circuitdiff] from %s: %s", pyproject, section)
    return DiffConfig(**section)
