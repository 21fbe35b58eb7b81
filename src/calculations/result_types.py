"""
Result wrapper for whole-system LEV recalculations

A recalculation runs in ordered steps (flow, pressure, main duct, validation).
A failed run still hands back the values computed before the failing step,
so a caller can keep showing the flow and losses while the error is fixed.
"""

from typing import Generic, TypeVar, Optional, List, Any
from dataclasses import dataclass
from enum import Enum

T = TypeVar('T')

FAILED_STEP_KEY = 'failed_step'


class ResultStatus(Enum):
    """Enumeration of possible result statuses"""
    SUCCESS = "success"
    ERROR = "error"


@dataclass
class CalculationResult(Generic[T]):
    """
    Outcome of a recalculation

    Design warnings travel with a successful result. An error result keeps
    the partially filled data and names the step that failed.
    """
    status: ResultStatus
    data: Optional[T] = None
    error_message: Optional[str] = None
    warnings: List[str] = None
    metadata: Optional[dict] = None

    def __post_init__(self):
        if self.warnings is None:
            self.warnings = []
        if self.metadata is None:
            self.metadata = {}

    @property
    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    @property
    def is_error(self) -> bool:
        return self.status == ResultStatus.ERROR

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def failed_step(self) -> Optional[str]:
        """Recalculation step that raised, None on success"""
        return self.metadata.get(FAILED_STEP_KEY)

    def set_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def unwrap(self) -> T:
        """
        Return the data of a successful result.

        Raises:
            RuntimeError: If the result is an error, with the step and message
        """
        if self.is_error:
            raise RuntimeError(f"Recalculation failed at step '{self.failed_step}': {self.error_message}")
        return self.data

    @classmethod
    def success(cls, data: T, warnings: List[str] = None, metadata: dict = None) -> 'CalculationResult[T]':
        return cls(
            status=ResultStatus.SUCCESS,
            data=data,
            warnings=list(warnings or []),
            metadata=metadata or {}
        )

    @classmethod
    def error(cls, error_message: str, partial: Optional[T] = None, failed_step: Optional[str] = None,
              metadata: dict = None) -> 'CalculationResult[T]':
        """
        Create an error result

        Args:
            error_message: Human-readable failure
            partial: Data filled in by the steps that completed
            failed_step: Name of the step that raised
        """
        metadata = dict(metadata or {})
        if failed_step is not None:
            metadata[FAILED_STEP_KEY] = failed_step
        return cls(
            status=ResultStatus.ERROR,
            data=partial,
            error_message=error_message,
            metadata=metadata
        )
