#!/usr/bin/env python3
"""
Run configuration.

Values come from three layers, later ones winning: built-in defaults (with
``CC``/``CXX`` from the environment), an optional TOML file and the command
line. Example file::

    [compilers]
    c = ["ccache", "gcc"]
    "c++" = "g++-13"

    [standards]
    c = "c11"
    "c++" = "c++20"

    [probe]
    flags = ["-Werror"]
    timeout = 30
    trust_options = false
    trust_features = false
    scratch = "build/probe"
    keep_scratch = false

    [output]
    header = "include/toolchain.h"
    fragment = "toolchain.mk"
    name = "toolchain"
    width = 80
"""

import logging
import os
import shlex
import tomllib
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping, Optional, Union, get_type_hints

from typeguard import TypeCheckError, check_type, typechecked

from ccprobe.catalogue import Language
from ccprobe.errors import ConfigError
from ccprobe.naming import sanitize
from ccprobe.render.packing import DEFAULT_WIDTH


logger = logging.getLogger(__name__)

DEFAULT_STANDARDS = {Language.C: "c17", Language.CXX: "c++17"}
COMPILER_ENVIRONMENT = {Language.C: "CC", Language.CXX: "CXX"}
DEFAULT_TIMEOUT = 60.0

# Scalar keys of the [probe] and [output] tables and their expected types.
SCALAR_KEYS: dict[str, dict[str, Any]] = {
    "probe": {
        "flags": list[str],
        "timeout": Union[int, float],
        "trust_options": bool,
        "trust_features": bool,
        "scratch": str,
        "keep_scratch": bool,
    },
    "output": {
        "header": str,
        "fragment": str,
        "name": str,
        "width": int,
    },
}


def default_compilers(
    environ: Optional[Mapping[str, str]] = None,
) -> dict[Language, list[str]]:
    """Compiler command per language, honouring ``CC`` and ``CXX``."""
    environ = os.environ if environ is None else environ
    compilers: dict[Language, list[str]] = {}
    for language in Language:
        value = environ.get(COMPILER_ENVIRONMENT[language], "").strip()
        if value:
            compilers[language] = shlex.split(value)
        else:
            compilers[language] = [language.default_compiler]
    return compilers


@typechecked
@dataclass
class ProbeConfig:
    """Type-safe run configuration"""

    compilers: dict[Language, list[str]] = field(default_factory=default_compilers)
    standards: dict[Language, str] = field(
        default_factory=lambda: dict(DEFAULT_STANDARDS)
    )
    flags: list[str] = field(default_factory=list)
    timeout: Optional[float] = DEFAULT_TIMEOUT  # None disables the timeout
    trust_options: bool = False
    trust_features: bool = False
    scratch: Optional[Path] = None  # None creates a fresh temporary directory
    keep_scratch: bool = False
    header: Path = Path("ccprobe-config.h")
    fragment: Path = Path("ccprobe-config.mk")
    name: str = "ccprobe"
    width: int = DEFAULT_WIDTH

    def __post_init__(self):
        # @typechecked does not reach the generated __init__
        hints = get_type_hints(type(self))
        for item in fields(self):
            try:
                check_type(getattr(self, item.name), hints[item.name])
            except TypeCheckError as e:
                raise ConfigError(f"{item.name}: {e}") from e
        for language, command in self.compilers.items():
            if not command:
                raise ConfigError(f"Empty compiler command for {language.label}")
        if self.timeout is not None and self.timeout <= 0:
            raise ConfigError(f"Timeout must be positive, got {self.timeout}")
        if self.width < 10:
            raise ConfigError(f"Line width too small: {self.width}")
        if not sanitize(self.name):
            raise ConfigError(f"Project name has no usable characters: {self.name!r}")


def _typed(table: Mapping[str, Any], key: str, expected: Any, where: str) -> Any:
    value = table[key]
    try:
        return check_type(value, expected)
    except TypeCheckError as e:
        raise ConfigError(f"{where}.{key}: {e}") from e


def _command(value: Union[str, list[str]]) -> list[str]:
    return shlex.split(value) if isinstance(value, str) else list(value)


def _per_language(table: Mapping[str, Any], where: str) -> dict[Language, Any]:
    result: dict[Language, Any] = {}
    for key, value in table.items():
        try:
            result[Language.from_label(key)] = value
        except ValueError as e:
            raise ConfigError(f"[{where}]: {e}") from e
    return result


def parse_config(
    data: Mapping[str, Any], base: Optional[ProbeConfig] = None
) -> ProbeConfig:
    """
    Apply already decoded TOML ``data`` on top of ``base``.

    Raises:
        ConfigError: Unknown table/key or a value of the wrong type
    """
    config = base if base is not None else ProbeConfig()
    changes: dict[str, Any] = {}

    unknown = set(data) - {"compilers", "standards", "probe", "output"}
    if unknown:
        tables = ", ".join(sorted(unknown))
        raise ConfigError(f"Unknown configuration table(s): {tables}")

    if "compilers" in data:
        table = _typed(data, "compilers", dict[str, Union[str, list[str]]], "config")
        compilers = dict(config.compilers)
        for language, value in _per_language(table, "compilers").items():
            compilers[language] = _command(value)
        changes["compilers"] = compilers

    if "standards" in data:
        table = _typed(data, "standards", dict[str, str], "config")
        standards = dict(config.standards)
        standards.update(_per_language(table, "standards"))
        changes["standards"] = standards

    for where, keys in SCALAR_KEYS.items():
        if where not in data:
            continue
        table = _typed(data, where, dict[str, Any], "config")
        for key in table:
            if key not in keys:
                raise ConfigError(f"Unknown key {where}.{key}")
            value = _typed(table, key, keys[key], where)
            if key in ("scratch", "header", "fragment"):
                value = Path(value)
            elif key == "timeout":
                value = float(value) if value else None  # 0 disables the timeout
            changes[key] = value

    if not changes:
        return config
    return replace(config, **changes)


def load_config(path: Path, base: Optional[ProbeConfig] = None) -> ProbeConfig:
    """Read a TOML configuration file; any failure is a ConfigError."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        raise ConfigError(f"Configuration file not found: {path}")
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to parse {path}: {e}") from e
    logger.info("Loaded configuration from %s", path)
    return parse_config(data, base)
