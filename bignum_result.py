from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorKind(Enum):
    INVALID_INPUT = "invalid_input"
    DIVISION_BY_ZERO = "division_by_zero"


class BigNumError(ArithmeticError):
    """Base class for every error raised by the big number engine."""


class InvalidInput(BigNumError, ValueError):
    pass


class DivisionByZero(BigNumError, ZeroDivisionError):
    pass


class PreconditionViolation(BigNumError, AssertionError):
    """
    Raised when a caller breaks the contract of an operation, e.g. subtracting
    a larger number from a smaller one or writing a block out of bounds.
    These are programming errors and are never returned as a Result.
    """


_EXCEPTIONS = {
    ErrorKind.INVALID_INPUT: InvalidInput,
    ErrorKind.DIVISION_BY_ZERO: DivisionByZero,
}


@dataclass(frozen=True)
class Result:
    """
    Outcome of an operation that can fail for a known, recoverable reason.

    Exactly one of `value` and `error` is meaningful: a successful result has
    `error is None`, a failed one carries the ErrorKind and a message.
    """
    value: Any = None
    error: Optional[ErrorKind] = None
    message: str = ""

    @classmethod
    def success(cls, value):
        return cls(value=value)

    @classmethod
    def failure(cls, error, message=""):
        return cls(error=error, message=message or error.value)

    @property
    def ok(self):
        return self.error is None

    def unwrap(self):
        """
        Return the value, or raise the exception that matches the error kind.
        """
        if self.error is not None:
            raise _EXCEPTIONS[self.error](self.message)
        return self.value
