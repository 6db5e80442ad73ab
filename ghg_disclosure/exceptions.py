"""GHG Disclosure Engine Exception Hierarchy.

Every exception in this module is a *contract violation*: upstream
data the caller was expected to have validated is malformed or missing.
None of them are retried internally; they propagate unchanged to the
caller, which decides whether to surface a 4xx-style message or alert on a
defect.

Business-data incompleteness (a missing company metric, a missing scope, a
target that is not actually a reduction) is NOT represented here. Those gaps
are reported as null values, 0% figures or compliance findings.

Exception Hierarchy:
    DisclosureEngineError (base)
    ├── InputContractError
    │   ├── UnsupportedUnitError
    │   ├── UnknownActivityCategoryError
    │   ├── UnknownFuelTypeError
    │   ├── EmptyInputError
    │   ├── InvalidTargetRangeError
    │   └── Scope2MethodUnavailableError
    └── DataIntegrityError
        ├── ScopeCategoryMismatchError
        ├── MixedReportingPeriodError
        └── DuplicateOffsetError

None of these subclass ``ValueError``: raised from inside a pydantic
validator they escape unchanged instead of being folded into a
``pydantic.ValidationError``.

Example:
    >>> from ghg_disclosure.exceptions import UnsupportedUnitError
    >>> raise UnsupportedUnitError(
    ...     "Unsupported energy unit: therm",
    ...     unit="therm",
    ...     supported=["kwh", "mwh", "mmbtu", "gj", "mj"],
    ... )
"""

from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Optional


# ==============================================================================
# Base Exception
# ==============================================================================

class DisclosureEngineError(Exception):
    """Base exception for all disclosure engine errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier (e.g., "GLD_EMPTY_INPUT_ERROR")
        context: Dictionary with error-specific details
        timestamp: When the error occurred (UTC)
    """

    ERROR_PREFIX = "GLD"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize the exception with rich context.

        Args:
            message: Human-readable error message
            error_code: Unique error identifier (auto-generated if not provided)
            context: Dictionary with error-specific details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = datetime.now(timezone.utc)

    def _generate_error_code(self) -> str:
        """Generate an error code from the class name.

        Returns:
            Error code like "GLD_EMPTY_INPUT_ERROR"
        """
        error_type = re.sub(r"(?<!^)(?=[A-Z])", "_", self.__class__.__name__).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization.

        Returns:
            Dictionary with all error details
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        return f"[{self.error_code}] - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# Input contract violations
# ==============================================================================

class InputContractError(DisclosureEngineError):
    """Upstream input is malformed, unsupported or missing."""


class UnsupportedUnitError(InputContractError):
    """A physical unit is not in the converter's fixed tables.

    Example:
        >>> raise UnsupportedUnitError("Unsupported energy unit: therm", unit="therm")
    """

    def __init__(
        self,
        message: str,
        unit: Optional[str] = None,
        supported: Optional[Iterable[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if unit is not None:
            context["unit"] = unit
        if supported is not None:
            context["supported_units"] = sorted(supported)
        super().__init__(message, context=context)
        self.unit = unit


class UnknownActivityCategoryError(InputContractError):
    """An activity category is not in the closed scope table."""

    def __init__(
        self,
        message: str,
        activity_category: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if activity_category is not None:
            context["activity_category"] = activity_category
        super().__init__(message, context=context)
        self.activity_category = activity_category


class UnknownFuelTypeError(InputContractError):
    """A fuel type has no renewable/non-renewable classification."""

    def __init__(
        self,
        message: str,
        fuel_type: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if fuel_type is not None:
            context["fuel_type"] = fuel_type
        super().__init__(message, context=context)
        self.fuel_type = fuel_type


class EmptyInputError(InputContractError):
    """Zero records were supplied where at least one is required.

    Distinct from a period with genuinely zero emissions, which is signalled
    by zero-valued records or an explicit no-activity marker.
    """

    def __init__(
        self,
        message: str,
        reporting_period_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if reporting_period_id is not None:
            context["reporting_period_id"] = reporting_period_id
        super().__init__(message, context=context)
        self.reporting_period_id = reporting_period_id


class InvalidTargetRangeError(InputContractError):
    """A climate target's target year does not come after its base year."""

    def __init__(
        self,
        message: str,
        base_year: Optional[int] = None,
        target_year: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if base_year is not None:
            context["base_year"] = base_year
        if target_year is not None:
            context["target_year"] = target_year
        super().__init__(message, context=context)
        self.base_year = base_year
        self.target_year = target_year


class Scope2MethodUnavailableError(InputContractError):
    """The requested Scope 2 method has no values to total."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        missing_records: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if method is not None:
            context["method"] = method
        if missing_records is not None:
            context["missing_records"] = missing_records
        super().__init__(message, context=context)
        self.method = method


# ==============================================================================
# Data integrity violations
# ==============================================================================

class DataIntegrityError(DisclosureEngineError):
    """Input records contradict each other or the static taxonomy."""


class ScopeCategoryMismatchError(DataIntegrityError):
    """A record's scope disagrees with the scope of its activity category."""

    def __init__(
        self,
        message: str,
        activity_category: Optional[str] = None,
        declared_scope: Optional[str] = None,
        expected_scope: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if activity_category is not None:
            context["activity_category"] = activity_category
        if declared_scope is not None:
            context["declared_scope"] = declared_scope
        if expected_scope is not None:
            context["expected_scope"] = expected_scope
        super().__init__(message, context=context)


class MixedReportingPeriodError(DataIntegrityError):
    """Records from more than one reporting period were aggregated together."""

    def __init__(
        self,
        message: str,
        reporting_period_ids: Optional[Iterable[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if reporting_period_ids is not None:
            context["reporting_period_ids"] = sorted(set(reporting_period_ids))
        super().__init__(message, context=context)


class DuplicateOffsetError(DataIntegrityError):
    """The same carbon credit appears more than once in one claim."""

    def __init__(
        self,
        message: str,
        offset_ids: Optional[Iterable[str]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        context = context or {}
        if offset_ids is not None:
            context["offset_ids"] = sorted(set(offset_ids))
        super().__init__(message, context=context)


# ==============================================================================
# Utilities
# ==============================================================================

def format_exception_chain(exc: BaseException) -> str:
    """Format an exception chain for logging.

    Args:
        exc: Exception to format

    Returns:
        Formatted string with the full ``__cause__`` chain
    """
    lines = []
    current: Optional[BaseException] = exc

    while current is not None:
        if isinstance(current, DisclosureEngineError):
            lines.append(str(current))
            lines.append(f"  Context: {current.context}")
        else:
            lines.append(f"{type(current).__name__}: {current}")
        current = current.__cause__

    return "\n".join(lines)


__all__ = [
    "DisclosureEngineError",
    "InputContractError",
    "UnsupportedUnitError",
    "UnknownActivityCategoryError",
    "UnknownFuelTypeError",
    "EmptyInputError",
    "InvalidTargetRangeError",
    "Scope2MethodUnavailableError",
    "DataIntegrityError",
    "ScopeCategoryMismatchError",
    "MixedReportingPeriodError",
    "DuplicateOffsetError",
    "format_exception_chain",
]
