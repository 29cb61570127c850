"""
Result object for error handling in Hero Tracker.

Operations that read outside input (curve files, roster documents) return a
Result object instead of raising exceptions. The calculation engine itself
never fails on bad numbers; it clamps them instead.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class ErrorCode(Enum):
    """
    Machine-readable reasons a curve or roster could not be used.

    The CLI prints the message; callers embedding the library can branch on
    the code.
    """

    # Reading files
    FILE_NOT_FOUND = "file_not_found"
    FILE_READ_ERROR = "file_read_error"
    INVALID_JSON = "invalid_json"

    # Document contents
    SCHEMA_VALIDATION_FAILED = "schema_validation_failed"
    INVALID_INPUT = "invalid_input"

    # Curves
    CURVE_NOT_FOUND = "curve_not_found"
    INVALID_CURVE = "invalid_curve"

    # Rosters
    HERO_NOT_FOUND = "hero_not_found"

    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.value


@dataclass
class Result:
    """
    Outcome of loading a curve or reading a roster.

    Attributes:
        success: True when data is usable
        data: Loaded value (ProgressionTable, List[Hero], Hero, ...)
        error: Message explaining the failure
        error_code: ErrorCode value string for the failure

    Examples:
        >>> result = load_curve('legacy')
        >>> if result:
        ...     table = result.data

        >>> result = read_roster('missing.json')
        >>> result.error_code
        'file_not_found'
    """
    success: bool
    data: Any = None
    error: Optional[str] = None
    error_code: Optional[str] = None

    @staticmethod
    def ok(data: Any = None) -> 'Result':
        """Wrap a loaded value."""
        return Result(success=True, data=data)

    @staticmethod
    def fail(error: str, code: Optional[str | ErrorCode] = None) -> 'Result':
        """
        Build a failed result.

        Args:
            error: Message shown to the user
            code: ErrorCode member, or a plain string for codes outside the enum

        Returns:
            Result with success=False and no data

        Examples:
            >>> Result.fail("Unknown curve 'epic'", ErrorCode.CURVE_NOT_FOUND).error_code
            'curve_not_found'
        """
        code_value = code.value if isinstance(code, ErrorCode) else code
        return Result(success=False, error=error, error_code=code_value)

    def __bool__(self) -> bool:
        """A Result is truthy when it succeeded."""
        return self.success
