"""esotape configuration — project-level .esotaperc.yml support.

Loads configuration from .esotaperc.yml (or .esotaperc.yaml, .esotaperc.json)
found in the working directory or any parent. Lets a project pin:
  - The default dialect
  - Tape size and what happens at its edges
  - How loop markers are matched
  - How results are printed

Example .esotaperc.yml:
    dialect: ook
    tape_size: 30000
    bounds: strict          # or wrap
    loop_matching: linear   # or nested
    format: pretty          # pretty, raw, json
    show_tokens: false
    echo_program: false

Command-line flags override whatever the file says.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from esotape.dialects import DEFAULT_DIALECT, Dialect
from esotape.engine import LoopMatching
from esotape.errors import ConfigError, config_error
from esotape.tape import MEMORY_SIZE, BoundsPolicy

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("pretty", "raw", "json")


@dataclass
class EsotapeConfig:
    """Interpreter configuration."""
    dialect: Dialect = DEFAULT_DIALECT
    tape_size: int = MEMORY_SIZE
    bounds: BoundsPolicy = BoundsPolicy.STRICT
    loop_matching: LoopMatching = LoopMatching.LINEAR
    # Output
    format: str = "pretty"
    show_tokens: bool = False
    echo_program: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dialect": self.dialect.value,
            "tape_size": self.tape_size,
            "bounds": self.bounds.value,
            "loop_matching": self.loop_matching.value,
            "format": self.format,
            "show_tokens": self.show_tokens,
            "echo_program": self.echo_program,
        }


# ---------------------------------------------------------------------------
# Config file names (in priority order)
# ---------------------------------------------------------------------------

_CONFIG_FILES = [
    ".esotaperc.yml",
    ".esotaperc.yaml",
    ".esotaperc.json",
    "esotape.config.yml",
    "esotape.config.json",
]


def find_config(start_dir: str = ".") -> Optional[str]:
    """Find the nearest config file by walking up from start_dir."""
    current = os.path.abspath(start_dir)
    while True:
        for name in _CONFIG_FILES:
            path = os.path.join(current, name)
            if os.path.isfile(path):
                return path
        parent = os.path.dirname(current)
        if parent == current:
            break
        current = parent
    return None


def load_config(path: Optional[str] = None, start_dir: str = ".") -> EsotapeConfig:
    """Load configuration from a file.

    If no path is given, searches for a config file starting from start_dir.
    If no config file is found, or it cannot be read or parsed, returns
    defaults. Values of the wrong shape raise ConfigError.
    """
    if path is None:
        path = find_config(start_dir)

    if path is None:
        return EsotapeConfig()

    try:
        with open(path, "r") as f:
            content = f.read()
    except OSError as e:
        logger.warning("could not read %s: %s", path, e)
        return EsotapeConfig()

    try:
        if path.endswith(".json"):
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        logger.warning("ignoring malformed config %s: %s", path, e)
        return EsotapeConfig()

    if not isinstance(data, dict):
        data = {}
    logger.debug("loaded config from %s", path)
    return dict_to_config(data)


def _choice(data: Dict[str, Any], key: str, enum_cls: Any) -> Any:
    value = data[key]
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(e.value for e in enum_cls)
        raise ConfigError(config_error(key, value, allowed)) from None


def _flag(data: Dict[str, Any], key: str) -> bool:
    value = data[key]
    if not isinstance(value, bool):
        raise ConfigError(config_error(key, value, "true or false"))
    return value


def dict_to_config(data: Dict[str, Any]) -> EsotapeConfig:
    """Convert a parsed dict to EsotapeConfig."""
    config = EsotapeConfig()

    if "dialect" in data:
        config.dialect = _choice(data, "dialect", Dialect)
    if "tape_size" in data:
        size = data["tape_size"]
        if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
            raise ConfigError(config_error("tape_size", size, "a positive integer"))
        config.tape_size = size
    if "bounds" in data:
        config.bounds = _choice(data, "bounds", BoundsPolicy)
    if "loop_matching" in data:
        config.loop_matching = _choice(data, "loop_matching", LoopMatching)
    if "format" in data:
        fmt = str(data["format"])
        if fmt not in OUTPUT_FORMATS:
            raise ConfigError(config_error("format", fmt, ", ".join(OUTPUT_FORMATS)))
        config.format = fmt
    if "show_tokens" in data:
        config.show_tokens = _flag(data, "show_tokens")
    if "echo_program" in data:
        config.echo_program = _flag(data, "echo_program")

    return config
