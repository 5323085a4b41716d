import json
import os

import pytest

from passgen.config import (
    DEFAULTS,
    OWASP_SAFESET,
    PASSGEN_SAFESET,
    check_policy,
    config_from_dict,
    config_to_dict,
    default_config,
    load_config,
    require_policy,
    save_config,
)
from passgen.errors import PolicyViolation
from passgen.generator import generate_password
from passgen.rules import GenerationConfig


def test_defaults_are_valid_and_generate():
    config = default_config()
    assert config.length == 40
    assert config.symbols == (6, 10)
    assert config.symbol_charset == PASSGEN_SAFESET
    assert check_policy(config) is None
    assert len(generate_password(config)) == 40


def test_safeset_is_subset_of_owasp():
    assert all(c in OWASP_SAFESET for c in PASSGEN_SAFESET)


def test_dict_round_trip_keeps_null_max():
    config = config_from_dict({"length": 20, "upper": [1, None], "symbols": [2, 3]})
    data = config_to_dict(config)
    assert data["upper"] == [1, None]
    assert data["symbols"] == [2, 3]
    assert data["lower"] == DEFAULTS["lower"]
    assert config_from_dict(data) == config


@pytest.mark.parametrize("data", [
    {"length": "40"},
    {"length": True},
    {"upper": [1]},
    {"upper": "1,2"},
    {"digits": [1, "x"]},
    {"symbol_charset": 5},
    ["not", "a", "dict"],
])
def test_malformed_settings_rejected(data):
    with pytest.raises(PolicyViolation):
        config_from_dict(data)


@pytest.mark.parametrize("changes, fragment", [
    ({"length": 9}, "below 10"),
    ({"length": 65}, "above 64"),
    ({"upper": (-1, None)}, "negative"),
    ({"length": 20, "upper": (10, None), "lower": (10, None), "digits": (1, None), "symbols": (0, None)}, "exceed"),
    ({"symbols": (6, 2)}, "symbol max"),
    ({"symbol_charset": ""}, "empty"),
    ({"symbol_charset": "!@é"}, "invalid glyph"),
])
def test_policy_problems(changes, fragment):
    base = config_to_dict(default_config())
    base.update(changes)
    config = GenerationConfig(
        length=base["length"],
        upper=tuple(base["upper"]),
        lower=tuple(base["lower"]),
        digits=tuple(base["digits"]),
        symbols=tuple(base["symbols"]),
        symbol_charset=base["symbol_charset"],
    )
    problem = check_policy(config)
    assert problem and fragment in problem
    with pytest.raises(PolicyViolation):
        require_policy(config)


def test_save_and_load(tmp_path):
    path = str(tmp_path / "nested" / "config.json")
    config = config_from_dict({"length": 24, "symbols": [1, 2], "symbol_charset": "#%"})
    save_config(config, path)
    assert os.path.exists(path)
    assert not os.path.exists(path + ".tmp")
    with open(path, encoding="utf-8") as f:
        assert json.load(f)["symbol_charset"] == "#%"
    assert load_config(path) == config


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / "absent.json")) == default_config()


def test_corrupt_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with caplog.at_level("WARNING", logger="passgen.config"):
        assert load_config(str(path)) == default_config()
    assert "ignoring unreadable settings" in caplog.text


def test_env_override(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    monkeypatch.setenv("PASSGEN_CONFIG", str(path))
    save_config(config_from_dict({"length": 30}))
    assert path.exists()
    assert load_config().length == 30
