"""Optimistic checklist changes with atomic rollback.

A command captures the checklist's items before touching them, applies its
change locally, then persists it. If persisting fails the captured items are
put back in one assignment and the error is re-raised.
"""

from abc import ABC, abstractmethod

import structlog

from designdesk.core.client import ApiClient
from designdesk.core.modules.checklist.models import Checklist, ChecklistItem
from designdesk.errors import NotFoundError

logger = structlog.get_logger(__name__)

CHECKLIST_PATH = "/api/design/checklist"


class ChecklistCommand(ABC):
    """Base class for a speculative change to a checklist."""

    def __init__(self, checklist: Checklist) -> None:
        self.checklist = checklist
        self._snapshot: list[ChecklistItem] | None = None

    @abstractmethod
    def apply(self, items: list[ChecklistItem]) -> list[ChecklistItem]:
        """Return the new item list; must not mutate the given items."""

    @abstractmethod
    async def persist(self, client: ApiClient) -> None:
        """Send the change to the API."""

    async def execute(self, client: ApiClient) -> None:
        self._snapshot = list(self.checklist.items)
        self.checklist.items = self.apply(list(self._snapshot))
        try:
            await self.persist(client)
        except Exception:
            self.rollback()
            raise

    def rollback(self) -> None:
        if self._snapshot is None:
            return
        self.checklist.items = self._snapshot
        self._snapshot = None
        logger.info("checklist_change_reverted", section_id=self.checklist.section_id, command=type(self).__name__)


class ToggleCompletionCommand(ChecklistCommand):
    def __init__(self, checklist: Checklist, item_id: str) -> None:
        super().__init__(checklist)
        item = checklist.get_item(item_id)
        if item is None:
            raise NotFoundError(f"Checklist item '{item_id}' not found")
        self.item_id = item_id
        self.completed = not item.completed

    def apply(self, items: list[ChecklistItem]) -> list[ChecklistItem]:
        return [item.model_copy(update={"completed": self.completed}) if item.id == self.item_id else item for item in items]

    async def persist(self, client: ApiClient) -> None:
        await client.put(CHECKLIST_PATH, json={"itemId": self.item_id, "completed": self.completed})


class ReorderCommand(ChecklistCommand):
    """Move an item to the position of another item and renumber every order."""

    def __init__(self, checklist: Checklist, item_id: str, target_item_id: str) -> None:
        super().__init__(checklist)
        ordered = [item.id for item in checklist.sorted_items]
        if item_id not in ordered:
            raise NotFoundError(f"Checklist item '{item_id}' not found")
        if target_item_id not in ordered:
            raise NotFoundError(f"Checklist item '{target_item_id}' not found")
        self.item_id = item_id
        self.target_index = ordered.index(target_item_id)

    def apply(self, items: list[ChecklistItem]) -> list[ChecklistItem]:
        ordered = sorted(items, key=lambda item: item.order)
        dragged = next(item for item in ordered if item.id == self.item_id)
        ordered.remove(dragged)
        ordered.insert(self.target_index, dragged)
        return [item.model_copy(update={"order": index}) for index, item in enumerate(ordered)]

    async def persist(self, client: ApiClient) -> None:
        await client.put(CHECKLIST_PATH, json={"itemId": self.item_id, "order": self.target_index})
