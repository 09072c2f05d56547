"""
Parser configuration for the Monkey front end.

Classes:
    - ParserConfig: Immutable settings read by `Parser`.
    - ConfigError: Raised when a configuration source is unreadable or invalid.

Sources, later ones overriding earlier ones in the CLI:
    - defaults (`ParserConfig()`)
    - a JSON file named by the `MONKEY_CONFIG` environment variable
    - a JSON file passed explicitly (`--config`)
    - individual CLI flags (`--max-depth`, `--strict`)

Example JSON:
    {
        "max_depth": 64,
        "require_semicolons": true
    }
"""

import json
import os
import sys
from dataclasses import asdict, dataclass, fields
from typing import Any

CONFIG_ENV_VAR = "MONKEY_CONFIG"
DEFAULT_MAX_DEPTH = 100

# Python frames one nesting level can cost: a nested `if` or `function` body
# goes parse_expression -> rule -> parse_block_statement -> parse_statement
# -> statement rule before reaching parse_expression again.
FRAMES_PER_LEVEL = 5
# Frames left for the caller's own stack (test runner, REPL, CLI).
RECURSION_HEADROOM = 250


def max_depth_ceiling() -> int:
    """Largest `max_depth` the current recursion limit can carry."""
    return max(1, (sys.getrecursionlimit() - RECURSION_HEADROOM) // FRAMES_PER_LEVEL)


def check_values(max_depth: Any, require_semicolons: Any) -> list[str]:
    problems: list[str] = []
    # bool is a subclass of int
    if not isinstance(max_depth, int) or isinstance(max_depth, bool):
        problems.append(f"max_depth must be an integer, got {max_depth!r}")
    elif max_depth < 1:
        problems.append(f"max_depth must be >= 1, got {max_depth}")
    elif max_depth > max_depth_ceiling():
        problems.append(f"max_depth must be <= {max_depth_ceiling()}, got {max_depth}")

    if not isinstance(require_semicolons, bool):
        problems.append(
            f"require_semicolons must be a boolean, got {require_semicolons!r}"
        )
    return problems


class ConfigError(Exception):
    """Raised when a parser configuration cannot be loaded.

    Attributes:
        problems (list[str]): One entry per rejected key or value.

    Example:
        raise ConfigError("Invalid parser configuration", ["max_depth must be >= 1"])
    """

    def __init__(self, message: str, problems: list[str] | None = None):
        super().__init__(message)
        self.problems = problems or []

    def __str__(self) -> str:
        if not self.problems:
            return super().__str__()
        return f"{super().__str__()}: " + "; ".join(self.problems)


@dataclass(frozen=True)
class ParserConfig:
    """Settings that change how strictly source is accepted.

    Attributes:
        max_depth (int): Deepest expression nesting the parser descends into
            before recording a diagnostic instead of recursing further. At most
            `max_depth_ceiling()`.
        require_semicolons (bool): When True, a statement not followed by `;`
            is reported. Off by default so single-line input parses cleanly.

    Raises:
        ConfigError: If a field is out of range or of the wrong type.
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    require_semicolons: bool = False

    def __post_init__(self) -> None:
        problems = check_values(self.max_depth, self.require_semicolons)
        if problems:
            raise ConfigError("Invalid parser configuration", problems)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ParserConfig":
        """Builds a config from a mapping, collecting every problem before raising.

        Raises:
            ConfigError: On unknown keys, wrong value types, or a max_depth
                outside 1..max_depth_ceiling().
        """
        if not isinstance(data, dict):
            raise ConfigError("Configuration must be a JSON object")

        known = {f.name for f in fields(cls)}
        problems: list[str] = []
        for key in data:
            if key not in known:
                problems.append(f"unknown key '{key}'")

        max_depth = data.get("max_depth", DEFAULT_MAX_DEPTH)
        require_semicolons = data.get("require_semicolons", False)
        problems.extend(check_values(max_depth, require_semicolons))

        if problems:
            raise ConfigError("Invalid parser configuration", problems)
        return cls(max_depth=max_depth, require_semicolons=require_semicolons)

    @classmethod
    def load_from_json(cls, path: str) -> "ParserConfig":
        """Reads a JSON object from `path` and validates it with `from_dict`.

        Raises:
            ConfigError: If the file is missing, not valid JSON, or invalid.
        """
        try:
            with open(path, encoding="utf-8") as f:
                raw_cfg = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to load config file {path}: {e}") from e
        return cls.from_dict(raw_cfg)

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Loads the file named by MONKEY_CONFIG, or returns defaults when unset."""
        path = os.getenv(CONFIG_ENV_VAR)
        if not path:
            return cls()
        return cls.load_from_json(path)

    def override(self, **changes: Any) -> "ParserConfig":
        """Returns a copy with every non-None keyword applied."""
        applied = {k: v for k, v in changes.items() if v is not None}
        if not applied:
            return self
        return ParserConfig.from_dict({**asdict(self), **applied})


__all__ = [
    "CONFIG_ENV_VAR",
    "DEFAULT_MAX_DEPTH",
    "ConfigError",
    "ParserConfig",
    "max_depth_ceiling",
]
