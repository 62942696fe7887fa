from typing import Any

import structlog

from designdesk.core.client import unwrap
from designdesk.core.core import Service
from designdesk.core.modules.checklist.commands import (
    CHECKLIST_PATH,
    ChecklistCommand,
    ReorderCommand,
    ToggleCompletionCommand,
)
from designdesk.core.modules.checklist.models import Checklist, ChecklistItem
from designdesk.errors import ValidationError

logger = structlog.get_logger(__name__)


class ChecklistService(Service):
    """Checklist CRUD plus optimistic toggle and reorder."""

    async def add_item(self, checklist: Checklist, text: str, order: int | None = None) -> ChecklistItem:
        """Create an item and append it to the local checklist."""
        text = text.strip()
        if not text:
            raise ValidationError("Checklist item text is required")

        payload: dict[str, Any] = {"sectionId": checklist.section_id, "text": text}
        if order is not None:
            payload["order"] = order

        data = await self.client.post(CHECKLIST_PATH, json=payload)
        item = ChecklistItem.model_validate(unwrap(data, "item"))
        checklist.items = [*checklist.items, item]
        return item

    async def update_text(self, checklist: Checklist, item_id: str, text: str) -> ChecklistItem:
        text = text.strip()
        if not text:
            raise ValidationError("Checklist item text is required")

        data = await self.client.put(CHECKLIST_PATH, json={"itemId": item_id, "text": text})
        item = ChecklistItem.model_validate(unwrap(data, "item"))
        checklist.items = [item if existing.id == item_id else existing for existing in checklist.items]
        return item

    async def delete_item(self, checklist: Checklist, item_id: str) -> None:
        data = await self.client.delete(CHECKLIST_PATH, json={"itemId": item_id})
        unwrap(data)
        checklist.items = [item for item in checklist.items if item.id != item_id]

    async def toggle_completion(self, checklist: Checklist, item_id: str) -> bool:
        """Flip an item's completion locally, persist it, revert on failure. Returns the new state."""
        command = ToggleCompletionCommand(checklist, item_id)
        await self._execute(command)
        return command.completed

    async def reorder(self, checklist: Checklist, item_id: str, target_item_id: str) -> None:
        """Move item_id to target_item_id's position, revert on failure."""
        if item_id == target_item_id:
            return
        await self._execute(ReorderCommand(checklist, item_id, target_item_id))

    async def _execute(self, command: ChecklistCommand) -> None:
        await command.execute(self.client)
        logger.debug("checklist_change_saved", section_id=command.checklist.section_id, command=type(command).__name__)
