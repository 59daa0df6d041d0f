from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class FileStatus(str, Enum):
    """
    Outcome for one file. str Enum so it serializes cleanly to JSON.
    """
    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNKNOWN = "unknown"
    ERROR = "error"


class FileVerificationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    path: str
    status: FileStatus
    declared_type: Optional[str] = None
    detected_type: Optional[str] = None
    matched_length: Optional[int] = Field(default=None, ge=0)
    error_message: Optional[str] = None


class VerificationReport(BaseModel):
    total: int = Field(ge=0)
    correct: int = Field(ge=0)
    incorrect: int = Field(ge=0)
    unknown: int = Field(ge=0)
    errors: int = Field(ge=0)
    results: list[FileVerificationResponse]

    @classmethod
    def from_results(
        cls,
        results: list[FileVerificationResponse],
    ) -> "VerificationReport":
        def count(status: FileStatus) -> int:
            return sum(1 for r in results if r.status == status)

        return cls(
            total=len(results),
            correct=count(FileStatus.CORRECT),
            incorrect=count(FileStatus.INCORRECT),
            unknown=count(FileStatus.UNKNOWN),
            errors=count(FileStatus.ERROR),
            results=results,
        )

    def with_status(self, status: FileStatus) -> list[FileVerificationResponse]:
        return [r for r in self.results if r.status == status]

    @property
    def exit_code(self) -> int:
        """1 if any file is mislabeled, 2 if any file could not be checked, else 0."""
        if self.incorrect:
            return 1
        if self.errors:
            return 2
        return 0
