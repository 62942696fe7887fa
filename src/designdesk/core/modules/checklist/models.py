from datetime import datetime

from pydantic import BaseModel, Field

from designdesk.core.models import ApiModel


class ChecklistItem(ApiModel):
    """Single to-do entry of a design section checklist."""

    id: str
    text: str
    completed: bool = False
    order: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None


class Checklist(BaseModel):
    """In-memory checklist of one section, the target of optimistic commands."""

    section_id: str
    items: list[ChecklistItem] = Field(default_factory=list)

    @property
    def sorted_items(self) -> list[ChecklistItem]:
        return sorted(self.items, key=lambda item: item.order)

    @property
    def completed_count(self) -> int:
        return sum(1 for item in self.items if item.completed)

    @property
    def completion_percentage(self) -> float:
        if not self.items:
            return 0.0
        return self.completed_count / len(self.items) * 100

    def get_item(self, item_id: str) -> ChecklistItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None
