"""Configuration loading and management for Release Heatmap.

Configuration sources are merged in priority order:
    1. Defaults (defined in HeatmapConfig)
    2. Global config (~/.release-heatmap.toml)
    3. Project config (./release-heatmap.toml)
    4. Explicit config file
    5. Environment variables (RELEASE_HEATMAP_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(heatmap_scheme="green", default_quarter=2)
    >>> config.heatmap_scheme
    'green'
    >>> config.date_range.start
    datetime.date(2022, 1, 1)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from datetime import date
from pathlib import Path
from typing import Any, Literal, Optional, get_type_hints

from .exceptions import ConfigurationError, InvalidConfigError
from .records.models import DateRange

Verbosity = Literal["quiet", "normal", "verbose"]
HeatmapScheme = Literal["blue", "green", "purple", "rainbow"]

ENV_PREFIX = "RELEASE_HEATMAP_"
HEATMAP_SCHEMES = ("blue", "green", "purple", "rainbow")


@dataclass(frozen=True)
class HeatmapConfig:
    """Settings for ingestion, aggregation and rendering.

    Attributes:
        Date range:
            range_start: First release date kept by ingestion (ISO format)
            range_end: Last release date kept by ingestion, inclusive

        Calendar view:
            default_year: Year shown first (None = earliest year in the data)
            default_quarter: Quarter shown first, 0-based (0 = Q1)
            heatmap_scheme: Day-cell colour scheme
            hue: Shade day cells on this hue (0-359) instead of the scheme

        Treemap:
            treemap_width: Abstract width of each day's mosaic
            treemap_height: Abstract height of each day's mosaic
            min_extent: Fraction of each mosaic side below which layout stops

        Data:
            data_file: Spreadsheet or CSV to load (None = sample data)
            sample_seed: Seed for sample data and random enrichment
            output_path: Where the HTML report is written

        Output control:
            verbosity: Logging verbosity level
            log_file: Also append log messages to this file
    """

    range_start: str = "2022-01-01"
    range_end: str = "2024-01-31"

    default_year: Optional[int] = None
    default_quarter: int = 0
    heatmap_scheme: HeatmapScheme = "blue"
    hue: Optional[int] = None

    treemap_width: float = 100.0
    treemap_height: float = 100.0
    min_extent: float = 1e-9

    data_file: Optional[str] = None
    sample_seed: Optional[int] = None
    output_path: str = "release-heatmap.html"

    verbosity: Verbosity = "normal"
    log_file: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        for key in ("range_start", "range_end"):
            value = getattr(self, key)
            try:
                date.fromisoformat(value)
            except (TypeError, ValueError):
                raise InvalidConfigError(key, value, "expected an ISO date (YYYY-MM-DD)")
        if date.fromisoformat(self.range_end) < date.fromisoformat(self.range_start):
            raise InvalidConfigError("range_end", self.range_end, "must not precede range_start")

        if not 0 <= self.default_quarter <= 3:
            raise InvalidConfigError("default_quarter", self.default_quarter, "must be 0-3")
        if self.default_year is not None and self.default_year < 1:
            raise InvalidConfigError("default_year", self.default_year, "must be positive")
        if self.heatmap_scheme not in HEATMAP_SCHEMES:
            raise InvalidConfigError(
                "heatmap_scheme", self.heatmap_scheme, f"expected one of {HEATMAP_SCHEMES}"
            )
        if self.hue is not None and not 0 <= self.hue <= 359:
            raise InvalidConfigError("hue", self.hue, "must be 0-359")

        if self.treemap_width <= 0 or self.treemap_height <= 0:
            raise InvalidConfigError(
                "treemap_width/treemap_height",
                (self.treemap_width, self.treemap_height),
                "must be positive",
            )
        if not 0 <= self.min_extent < 1:
            raise InvalidConfigError("min_extent", self.min_extent, "must be in [0, 1)")

    @property
    def date_range(self) -> DateRange:
        """Inclusive ingestion range as real dates."""
        return DateRange(date.fromisoformat(self.range_start), date.fromisoformat(self.range_end))


def load_config(config_file: Optional[Path] = None, **overrides) -> HeatmapConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags). ``None``
            values are ignored so unset CLI options do not mask files.

    Returns:
        Validated HeatmapConfig instance

    Raises:
        ConfigurationError: If a config file or value is invalid
    """
    merged: dict = {}

    global_config = Path.home() / ".release-heatmap.toml"
    if global_config.exists():
        try:
            merged.update(_load_toml_file(global_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid global config '{global_config}': {e}")

    project_config = Path.cwd() / "release-heatmap.toml"
    if project_config.exists():
        try:
            merged.update(_load_toml_file(project_config))
        except Exception as e:
            raise ConfigurationError(f"Invalid project config '{project_config}': {e}")

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        try:
            merged.update(_load_toml_file(config_file))
        except Exception as e:
            raise ConfigurationError(f"Invalid config file '{config_file}': {e}")

    merged.update(_load_env_vars())

    if "verbose" in overrides:
        if overrides["verbose"]:
            overrides["verbosity"] = "verbose"
        del overrides["verbose"]
    if "quiet" in overrides:
        if overrides["quiet"]:
            overrides["verbosity"] = "quiet"
        del overrides["quiet"]

    merged.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return HeatmapConfig(**merged)
    except TypeError as e:
        # Unknown field in config
        raise ConfigurationError(f"Invalid configuration: {e}")


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from RELEASE_HEATMAP_* environment variables.

    Every HeatmapConfig field can be set, e.g. ``RELEASE_HEATMAP_DEFAULT_QUARTER=2``
    or ``RELEASE_HEATMAP_DATA_FILE=data/releases.xlsx``.
    """
    type_hints = get_type_hints(HeatmapConfig)

    result: dict[str, Any] = {}

    for field_name in HeatmapConfig.__dataclass_fields__:
        env_key = f"{ENV_PREFIX}{field_name.upper()}"
        env_value = os.environ.get(env_key)

        if env_value is None:
            continue

        type_hint = type_hints.get(field_name)
        if type_hint is None:
            continue

        try:
            parsed = _parse_env_value(env_value, type_hint)
            if parsed is not None:
                result[field_name] = parsed
        except ValueError as e:
            raise ConfigurationError(f"Invalid {env_key}: {e}")

    return result


def _parse_env_value(value: str, type_hint: Any) -> Any:
    """Parse environment variable string to the field's type.

    Raises:
        ValueError: If value can't be parsed to expected type
    """
    origin = getattr(type_hint, "__origin__", None)

    # Optional[X] is Union[X, None]
    args = getattr(type_hint, "__args__", ())
    if type(None) in args:
        non_none_types = [t for t in args if t is not type(None)]
        if non_none_types:
            type_hint = non_none_types[0]
            origin = getattr(type_hint, "__origin__", None)

    if type_hint is bool:
        lower = value.lower()
        if lower in ("true", "1", "yes", "on"):
            return True
        elif lower in ("false", "0", "no", "off"):
            return False
        else:
            raise ValueError(f"expected true/false, got '{value}'")

    if type_hint is int:
        return int(value)

    if type_hint is float:
        return float(value)

    if type_hint is str or origin is Literal:
        return value

    return None


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict."""
    try:
        # Python 3.11+ has tomllib in stdlib
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    with open(path, "rb") as f:
        return tomllib.load(f)
