"""
passgen.generator
Rule-constrained password generator using Python's secrets module.

Every draw (character, remainder category, shuffle swap) goes through
secrets.randbelow, which rejects out-of-range values instead of reducing
modulo the charset size, so picks are exactly uniform.
"""

import logging
from secrets import randbelow
from typing import List, Sequence, TypeVar

from .errors import (
    EmptyCharset,
    InsufficientLength,
    MaxBelowMin,
    NegativeMinimum,
    UnsatisfiableFirstCharacter,
    UnsatisfiableRemainder,
)
from .rules import Bounded, Category, CharacterRule, GenerationConfig, build_rules

logger = logging.getLogger(__name__)

# Safety cap on rejection sampling. validate() already rejects configs where
# no non-symbol character can lead, so reaching this means p(symbol first)
# is so close to 1 that the config is useless anyway.
MAX_ATTEMPTS = 1000

T = TypeVar("T")


def random_index(n: int) -> int:
    """Uniform integer in [0, n) from the OS CSPRNG."""
    if n <= 0:
        raise ValueError("n must be > 0")
    return randbelow(n)


def random_char(charset: Sequence[T]) -> T:
    if not charset:
        raise ValueError("charset must not be empty")
    return charset[random_index(len(charset))]


def shuffle(items: List[T]) -> None:
    """In-place Fisher-Yates shuffle."""
    for i in range(len(items) - 1, 0, -1):
        j = random_index(i + 1)
        items[i], items[j] = items[j], items[i]


def _can_lead(rule: CharacterRule, symbols: str, length: int, spare: bool) -> bool:
    # spare: minimums leave room for remainder draws
    draws = rule.min_count > 0 or (spare and rule.max_count.capacity(length) > rule.min_count)
    if not draws:
        return False
    return any(c not in symbols for c in rule.charset)


def validate(rules: List[CharacterRule], length: int) -> None:
    """
    Raise the first failing check for `rules` at `length`; return None if the
    rules can produce a password. Consumes no randomness.
    """
    total_min = sum(r.min_count for r in rules)
    if total_min > length:
        raise InsufficientLength(
            f"minimum requirements ({total_min}) exceed password length ({length})"
        )
    for r in rules:
        if r.min_count < 0:
            raise NegativeMinimum(f"{r.category.value} minimum is negative ({r.min_count})")
    for r in rules:
        if isinstance(r.max_count, Bounded) and r.max_count.limit < r.min_count:
            raise MaxBelowMin(
                f"{r.category.value} maximum ({r.max_count.limit}) is below its minimum ({r.min_count})"
            )
    for r in rules:
        # a category capped at zero never draws, so its charset may be empty
        if not r.charset and r.max_count.capacity(length) > 0:
            raise EmptyCharset(f"{r.category.value} charset is empty")

    capacity = sum(r.max_count.capacity(length) for r in rules)
    if capacity < length:
        raise UnsatisfiableRemainder(
            f"category maximums allow only {capacity} characters, need {length}"
        )

    symbols = "".join(r.charset for r in rules if r.category is Category.SYMBOL)
    symbol_min = sum(r.min_count for r in rules if r.category is Category.SYMBOL)
    spare = total_min < length
    leaders = [
        r for r in rules
        if r.category is not Category.SYMBOL and _can_lead(r, symbols, length, spare)
    ]
    if symbol_min >= length or not leaders:
        raise UnsatisfiableFirstCharacter(
            "no non-symbol character can occupy the first position"
        )


def generate_unconstrained(config: GenerationConfig) -> str:
    """
    One password meeting every category min/max and `config.length`, in
    uniformly shuffled order. The first character may be a symbol.
    """
    rules = build_rules(config)
    validate(rules, config.length)

    password_chars: List[str] = []
    for rule in rules:
        for _ in range(rule.min_count):
            password_chars.append(random_char(rule.charset))
            rule.produced_count += 1

    available = [r for r in rules if r.available()]
    while len(password_chars) < config.length:
        if not available:
            raise UnsatisfiableRemainder(
                f"ran out of categories after {len(password_chars)} of {config.length} characters"
            )
        rule = random_char(available)
        password_chars.append(random_char(rule.charset))
        rule.produced_count += 1
        if not rule.available():
            available.remove(rule)

    shuffle(password_chars)
    return "".join(password_chars)


def generate_password(config: GenerationConfig, max_attempts: int = MAX_ATTEMPTS) -> str:
    """
    Generate a password whose first character is not in the symbol charset.

    Regenerates the whole password until the first character is acceptable,
    which keeps every position uniformly distributed. Expected attempts are
    about 1 / (1 - symbols/length).
    """
    validate(build_rules(config), config.length)

    for attempt in range(1, max_attempts + 1):
        password = generate_unconstrained(config)
        if password[0] not in config.symbol_charset:
            logger.debug("generated %d-char password after %d attempt(s)", config.length, attempt)
            return password

    logger.warning("gave up after %d attempts; every password led with a symbol", max_attempts)
    raise UnsatisfiableFirstCharacter(
        f"first character was a symbol in all {max_attempts} attempts"
    )
