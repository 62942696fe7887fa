from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class BatchFailure(BaseModel):
    """A single item that failed inside a batch operation."""

    key: str = Field(..., description="Identifier of the failed item (file name or resource ID)")
    error: str = Field(..., description="Error message for this item")


class BatchResult(BaseModel, Generic[T]):
    """Outcome of a batch where each item succeeds or fails on its own."""

    succeeded: list[T] = Field(default_factory=list, description="Results of the items that succeeded")
    failed: list[BatchFailure] = Field(default_factory=list, description="Items that failed, with their errors")

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @property
    def ok(self) -> bool:
        """Whether every item succeeded."""
        return not self.failed

    def add_failure(self, key: str, error: Exception | str) -> None:
        self.failed.append(BatchFailure(key=key, error=str(error)))
