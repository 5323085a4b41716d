"""
passgen.rules
Character categories, per-category rules and the generation config.
"""

import string
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple, Union


class Category(Enum):
    UPPER = "Upper"
    LOWER = "Lower"
    DIGIT = "Digit"
    SYMBOL = "Symbol"


FIXED_CHARSETS = {
    Category.UPPER: string.ascii_uppercase,
    Category.LOWER: string.ascii_lowercase,
    Category.DIGIT: string.digits,
}


@dataclass(frozen=True)
class Bounded:
    limit: int

    def admits(self, count: int) -> bool:
        return count < self.limit

    def capacity(self, length: int) -> int:
        return self.limit

    def __str__(self) -> str:
        return str(self.limit)


@dataclass(frozen=True)
class Unbounded:
    def admits(self, count: int) -> bool:
        return True

    def capacity(self, length: int) -> int:
        return length

    def __str__(self) -> str:
        return "none"


Bound = Union[Bounded, Unbounded]
UNBOUNDED = Unbounded()


def to_bound(value: Optional[int]) -> Bound:
    """Map the external `None`-means-unlimited shape onto a Bound."""
    if value is None:
        return UNBOUNDED
    return Bounded(value)


# (min, max) as it appears in settings files and requests; max None = unbounded
Limits = Tuple[int, Optional[int]]


@dataclass(frozen=True)
class GenerationConfig:
    length: int
    upper: Limits = (0, None)
    lower: Limits = (0, None)
    digits: Limits = (0, None)
    symbols: Limits = (0, None)
    symbol_charset: str = ""

    def limits(self) -> List[Tuple[Category, Limits]]:
        return [
            (Category.UPPER, self.upper),
            (Category.LOWER, self.lower),
            (Category.DIGIT, self.digits),
            (Category.SYMBOL, self.symbols),
        ]


@dataclass
class CharacterRule:
    category: Category
    min_count: int
    max_count: Bound
    charset: str
    produced_count: int = field(default=0)

    def available(self) -> bool:
        return self.max_count.admits(self.produced_count)


def build_rules(config: GenerationConfig) -> List[CharacterRule]:
    """
    Fresh rules for one generation attempt, in Upper, Lower, Digit, Symbol order.
    """
    rules = []
    for category, (lo, hi) in config.limits():
        charset = FIXED_CHARSETS.get(category, config.symbol_charset)
        rules.append(CharacterRule(category, lo, to_bound(hi), charset))
    return rules
