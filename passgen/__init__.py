"""passgen: rule-constrained password generation."""

from .generator import generate_password, generate_unconstrained, validate
from .rules import GenerationConfig

__all__ = ["GenerationConfig", "generate_password", "generate_unconstrained", "validate"]
