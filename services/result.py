"""
Result type for reporting team generation outcomes to callers.

Services return a Result instead of raising for caller mistakes, so the
route layer can turn a failed request into a response without try/except.

Usage:
    return Result.ok(generation_result)
    return Result.fail("Not enough players: need 15, have 8", code="insufficient_players")

    if result.success:
        teams = result.value.teams
    else:
        print(f"Error ({result.error_code}): {result.error}")
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a service call.

    Attributes:
        success: Whether the operation succeeded
        value: The return value if successful
        error: Error message if failed
        error_code: Stable code from services.error_codes if failed
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        """Create a successful result with an optional value."""
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        """Create a failed result with an error message and optional error code."""
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """
        Get the value, raising ValueError if the result is a failure.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore

    def unwrap_or(self, default: T) -> T:
        """Get the value or a default if the result is a failure."""
        return self.value if self.success else default  # type: ignore
