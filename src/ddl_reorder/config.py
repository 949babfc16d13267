"""Configuration for the DDL reorder pipeline."""

import codecs
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import ConfigError
from .sorter import RootOrder

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
BOOL_FIELDS = (
    "keep_preamble",
    "inline_references",
    "allow_self_references",
    "allow_external_references",
)


@dataclass
class ReorderConfig:
    """Options for one reorder run."""
    output_path: str = "output.sql"
    encoding: str = "utf-8"

    # Write comments/SET statements found before the first CREATE TABLE
    keep_preamble: bool = False

    # Treat `col INT REFERENCES parent(id)` as a foreign key too
    inline_references: bool = False

    # Let a table reference itself without failing as a cycle
    allow_self_references: bool = False

    # Warn and skip, instead of fail, when a foreign key names an undeclared table
    allow_external_references: bool = False

    root_order: RootOrder = RootOrder.APPEARANCE
    log_level: str = "WARNING"

    def __post_init__(self):
        for name in BOOL_FIELDS:
            value = getattr(self, name)
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")

        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError) as exc:
            raise ConfigError(f"Unknown encoding: {self.encoding!r}") from exc

        try:
            self.root_order = RootOrder(self.root_order)
        except ValueError as exc:
            choices = ", ".join(o.value for o in RootOrder)
            raise ConfigError(
                f"root_order must be one of {choices}, got {self.root_order!r}"
            ) from exc

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(f"Unknown log_level: {self.log_level}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReorderConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    def merged(self, **overrides: Any) -> "ReorderConfig":
        """Copy with every override that is not None applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes)


def load_config(path: Optional[str] = None) -> ReorderConfig:
    """
    Load a ReorderConfig from a YAML file.

    File format:
    ```yaml
    output_path: build/schema.sql
    keep_preamble: true
    root_order: name
    ```

    With no path, the defaults are returned.
    """
    if path is None:
        return ReorderConfig()

    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"Could not read config file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in config file {path}: {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    logger.debug("Loaded config from %s: %s", path, data)
    return ReorderConfig.from_dict(data)
