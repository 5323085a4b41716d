"""
passgen.errors
Exceptions raised for configurations that cannot produce a password.
"""


class PasswordConfigError(ValueError):
    """Base class. `kind` names the failed check."""

    kind = "PasswordConfigError"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InsufficientLength(PasswordConfigError):
    kind = "InsufficientLength"


class NegativeMinimum(PasswordConfigError):
    kind = "NegativeMinimum"


class MaxBelowMin(PasswordConfigError):
    kind = "MaxBelowMin"


class EmptyCharset(PasswordConfigError):
    kind = "EmptyCharset"


class UnsatisfiableRemainder(PasswordConfigError):
    kind = "UnsatisfiableRemainder"


class UnsatisfiableFirstCharacter(PasswordConfigError):
    kind = "UnsatisfiableFirstCharacter"


class PolicyViolation(PasswordConfigError):
    """Settings rejected by the user-facing policy (length range, glyph allow-list)."""

    kind = "PolicyViolation"
