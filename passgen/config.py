# passgen/config.py
"""
Settings persistence and user-facing policy for passgen.
Settings saved as JSON in %APPDATA%/PassGen/config.json (Windows) or ~/.passgen/config.json (fallback)
"""

import logging
import os
from typing import Any, Dict, Optional

from .errors import PolicyViolation
from .rules import GenerationConfig
from .storage import atomic_read_bytes, atomic_write_bytes, default_config_path, dump_json_bytes, read_json_bytes

logger = logging.getLogger(__name__)

PASSGEN_SAFESET = "!@#$%&_.,{}[]/"
# OWASP list of password special characters
OWASP_SAFESET = "!\"#$%&'()*+,-./:;<=>?@[\\]^_`{|}~"

MIN_LENGTH = 10
MAX_LENGTH = 64

CATEGORY_KEYS = ("upper", "lower", "digits", "symbols")

DEFAULTS: Dict[str, Any] = {
    "length": 40,
    "upper": [8, None],
    "lower": [8, None],
    "digits": [6, None],
    "symbols": [6, 10],
    "symbol_charset": PASSGEN_SAFESET,
}


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def config_from_dict(data: Dict[str, Any]) -> GenerationConfig:
    """
    Build a GenerationConfig from the JSON shape. Missing keys take DEFAULTS;
    wrongly typed values raise PolicyViolation.
    """
    if data is not None and not isinstance(data, dict):
        raise PolicyViolation(f"settings must be a JSON object, got {type(data).__name__}")
    merged = DEFAULTS.copy()
    merged.update(data or {})

    length = merged["length"]
    if not _is_int(length):
        raise PolicyViolation(f"length must be an integer, got {length!r}")

    limits = {}
    for key in CATEGORY_KEYS:
        pair = merged[key]
        if not isinstance(pair, (list, tuple)) or len(pair) != 2:
            raise PolicyViolation(f"{key} must be a [min, max] pair, got {pair!r}")
        lo, hi = pair
        if not _is_int(lo) or not (hi is None or _is_int(hi)):
            raise PolicyViolation(f"{key} must hold integers (max may be null), got {pair!r}")
        limits[key] = (lo, hi)

    charset = merged["symbol_charset"]
    if not isinstance(charset, str):
        raise PolicyViolation(f"symbol_charset must be a string, got {charset!r}")

    return GenerationConfig(length=length, symbol_charset=charset, **limits)


def config_to_dict(config: GenerationConfig) -> Dict[str, Any]:
    return {
        "length": config.length,
        "upper": list(config.upper),
        "lower": list(config.lower),
        "digits": list(config.digits),
        "symbols": list(config.symbols),
        "symbol_charset": config.symbol_charset,
    }


def default_config() -> GenerationConfig:
    return config_from_dict({})


def check_policy(config: GenerationConfig) -> Optional[str]:
    """
    Return the first policy problem with `config` as a message, or None.
    Stricter than the generator's own validation: it also bounds length and
    restricts symbols to the OWASP list.
    """
    if config.length < MIN_LENGTH:
        return f"length {config.length} is below {MIN_LENGTH}"
    if config.length > MAX_LENGTH:
        return f"length {config.length} is above {MAX_LENGTH}"
    mins = [lo for _, (lo, _hi) in config.limits()]
    if any(m < 0 for m in mins):
        return "negative value detected"
    if sum(mins) > config.length:
        return f"minimum characters ({sum(mins)}) exceed length ({config.length})"
    for category, (lo, hi) in config.limits():
        if hi is not None and hi < lo:
            return f"{category.value.lower()} max ({hi}) is below min ({lo})"
    if not config.symbol_charset:
        return "symbol charset is empty"
    for ch in config.symbol_charset:
        if ch not in OWASP_SAFESET:
            return f"invalid glyph {ch!r} in symbol charset"
    return None


def require_policy(config: GenerationConfig) -> GenerationConfig:
    problem = check_policy(config)
    if problem:
        raise PolicyViolation(problem)
    return config


def config_path() -> str:
    return default_config_path()


def load_config(path: Optional[str] = None) -> GenerationConfig:
    p = path or config_path()
    if not os.path.exists(p):
        return default_config()
    try:
        return config_from_dict(read_json_bytes(atomic_read_bytes(p)))
    except (OSError, ValueError) as e:
        logger.warning("ignoring unreadable settings at %s: %s", p, e)
        return default_config()


def save_config(config: GenerationConfig, path: Optional[str] = None) -> str:
    p = path or config_path()
    atomic_write_bytes(p, dump_json_bytes(config_to_dict(config)))
    logger.debug("saved settings to %s", p)
    return p
