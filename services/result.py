"""
Result type for game service return values.

Expected game conditions (spinning while a spin is in flight, starting with
too few players, editing the roster mid-match) are reported as failed Results
rather than exceptions, so the command layer can answer the user directly.

Usage:
    return Result.ok(player)
    return Result.fail("A spin is already in progress", code=SPIN_IN_PROGRESS)

    result = service.start_match()
    if not result:
        await interaction.response.send_message(result.error, ephemeral=True)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success/failure wrapper for service operations.

    Attributes:
        success: Whether the operation succeeded
        value: The return value if successful
        error: Human-readable reason if failed
        error_code: Code from services.error_codes for programmatic handling
    """

    success: bool
    value: T | None = None
    error: str | None = None
    error_code: str | None = None

    @classmethod
    def ok(cls, value: T | None = None) -> "Result[T]":
        return cls(success=True, value=value)

    @classmethod
    def fail(cls, error: str, code: str | None = None) -> "Result[T]":
        return cls(success=False, error=error, error_code=code)

    def __bool__(self) -> bool:
        return self.success

    def unwrap(self) -> T:
        """
        Get the value of a successful result.

        Raises:
            ValueError: If the result is a failure
        """
        if not self.success:
            raise ValueError(f"Cannot unwrap failed result: {self.error}")
        return self.value  # type: ignore

    def unwrap_or(self, default: T) -> T:
        return self.value if self.success else default  # type: ignore

    def map(self, fn: Callable[[T], "Result"]) -> "Result":
        """Chain another operation onto a successful result; failures pass through."""
        if not self.success:
            return self
        return fn(self.value)
