import json
import sys
from pathlib import Path
from typing import Any

import pytest

from monkey.monkey_config import (
    CONFIG_ENV_VAR,
    DEFAULT_MAX_DEPTH,
    ConfigError,
    ParserConfig,
    max_depth_ceiling,
)


def test_defaults() -> None:
    config = ParserConfig()
    assert config.max_depth == DEFAULT_MAX_DEPTH
    assert config.require_semicolons is False


def test_from_dict_basic() -> None:
    config = ParserConfig.from_dict({"max_depth": 12, "require_semicolons": True})
    assert config == ParserConfig(max_depth=12, require_semicolons=True)


def test_from_dict_partial_keeps_defaults() -> None:
    assert ParserConfig.from_dict({"require_semicolons": True}).max_depth == 100


def test_from_dict_collects_every_problem() -> None:
    with pytest.raises(ConfigError) as e:
        ParserConfig.from_dict(
            {"max_depth": 0, "require_semicolons": "yes", "colour": "blue"}
        )
    assert e.value.problems == [
        "unknown key 'colour'",
        "max_depth must be >= 1, got 0",
        "require_semicolons must be a boolean, got 'yes'",
    ]
    assert "Invalid parser configuration: unknown key 'colour'" in str(e.value)


@pytest.mark.parametrize("bad", [True, "10", 2.5, None])  # type: ignore[misc]
def test_max_depth_must_be_an_integer(bad: object) -> None:
    with pytest.raises(ConfigError, match="max_depth must be an integer"):
        ParserConfig.from_dict({"max_depth": bad})


def test_from_dict_rejects_non_mapping() -> None:
    with pytest.raises(ConfigError, match="must be a JSON object"):
        ParserConfig.from_dict([1, 2])  # type: ignore[arg-type]


def test_load_from_json(tmp_path: Path) -> None:
    path = tmp_path / "monkey.json"
    path.write_text(json.dumps({"max_depth": 7}))
    assert ParserConfig.load_from_json(str(path)).max_depth == 7


def test_load_from_json_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Failed to load config file"):
        ParserConfig.load_from_json(str(tmp_path / "missing.json"))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigError, match="Failed to load config file"):
        ParserConfig.load_from_json(str(broken))


def test_from_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert ParserConfig.from_env() == ParserConfig()

    path = tmp_path / "env.json"
    path.write_text(json.dumps({"require_semicolons": True}))
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    assert ParserConfig.from_env().require_semicolons is True


def test_override() -> None:
    base = ParserConfig(max_depth=10)
    assert base.override(max_depth=None) is base
    assert base.override(require_semicolons=True) == ParserConfig(10, True)
    with pytest.raises(ConfigError):
        base.override(max_depth=-1)


def test_config_is_immutable() -> None:
    with pytest.raises(AttributeError):
        ParserConfig().max_depth = 3  # type: ignore[misc]


def test_max_depth_ceiling_follows_recursion_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    assert max_depth_ceiling() >= DEFAULT_MAX_DEPTH
    monkeypatch.setattr(sys, "getrecursionlimit", lambda: 2250)
    assert max_depth_ceiling() == 400


def test_max_depth_above_ceiling_is_rejected() -> None:
    ceiling = max_depth_ceiling()
    assert ParserConfig.from_dict({"max_depth": ceiling}).max_depth == ceiling
    with pytest.raises(ConfigError) as e:
        ParserConfig.from_dict({"max_depth": ceiling + 1})
    assert e.value.problems == [f"max_depth must be <= {ceiling}, got {ceiling + 1}"]

    with pytest.raises(ConfigError, match="max_depth must be <="):
        ParserConfig().override(max_depth=ceiling + 1)


@pytest.mark.parametrize(
    "kwargs,problem",
    [
        ({"max_depth": 0}, "max_depth must be >= 1, got 0"),
        ({"max_depth": -3}, "max_depth must be >= 1, got -3"),
        ({"max_depth": 10**9}, "max_depth must be <="),
        ({"max_depth": "5"}, "max_depth must be an integer"),
        ({"require_semicolons": 1}, "require_semicolons must be a boolean"),
    ],
)  # type: ignore[misc]
def test_direct_construction_is_validated(kwargs: dict[str, Any], problem: str) -> None:
    with pytest.raises(ConfigError) as e:
        ParserConfig(**kwargs)
    assert len(e.value.problems) == 1
    assert e.value.problems[0].startswith(problem)
