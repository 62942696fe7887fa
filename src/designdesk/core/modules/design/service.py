from collections.abc import Awaitable, Callable

import structlog

from designdesk.core.client import unwrap
from designdesk.core.core import Service
from designdesk.core.modules.checklist.models import Checklist
from designdesk.core.modules.design.models import DesignSection, SectionStatus, SectionType, Workspace
from designdesk.core.poller import Poller
from designdesk.errors import NotFoundError

logger = structlog.get_logger(__name__)


class DesignService(Service):
    """Design concept workspaces and their sections."""

    async def get_workspace(self, stage_id: str) -> Workspace:
        """Fetch the stage with all sections, comments, assets and checklist items."""
        data = await self.client.get(f"/api/stages/{stage_id}/design-sections")
        return Workspace.model_validate(unwrap(data))

    async def list_sections(self, stage_id: str) -> list[DesignSection]:
        data = await self.client.get("/api/design/sections", params={"stageId": stage_id})
        return [DesignSection.model_validate(section) for section in unwrap(data, "sections") or []]

    async def get_or_create_section(self, stage_id: str, section_type: SectionType) -> DesignSection:
        """Return the stage's section of this type, creating it on first use."""
        data = await self.client.post("/api/design/sections", json={"stageId": stage_id, "type": section_type.value})
        section = DesignSection.model_validate(unwrap(data, "section"))
        logger.debug("section_resolved", stage_id=stage_id, section_type=section_type, section_id=section.id)
        return section

    async def update_notes(self, section_id: str, content: str) -> DesignSection:
        data = await self.client.patch(f"/api/design/sections/{section_id}", json={"content": content})
        return DesignSection.model_validate(unwrap(data, "section"))

    async def update_status(self, section_id: str, status: SectionStatus) -> DesignSection:
        data = await self.client.patch(f"/api/design/sections/{section_id}", json={"status": status.value})
        return DesignSection.model_validate(unwrap(data, "section"))

    async def set_completed(self, section_id: str, completed: bool = True) -> DesignSection:
        """Mark a section complete (or reopen it)."""
        data = await self.client.patch(f"/api/design/sections/{section_id}/complete", json={"completed": completed})
        section = DesignSection.model_validate(unwrap(data, "section"))
        logger.info("section_completion_changed", section_id=section_id, completed=completed)
        return section

    async def get_checklist(self, stage_id: str, section_type: SectionType) -> Checklist:
        """Build the local checklist of one section from a fresh workspace."""
        workspace = await self.get_workspace(stage_id)
        section = workspace.get_section(section_type)
        if section is None:
            raise NotFoundError(f"Section '{section_type}' not found in stage '{stage_id}'")
        return Checklist(section_id=section.id, items=section.checklist_items)

    def create_workspace_poller(
        self, stage_id: str, on_update: Callable[[Workspace], Awaitable[None]], interval: float | None = None
    ) -> Poller:
        """Poller that refetches the workspace and hands each snapshot to on_update."""

        async def tick() -> None:
            await on_update(await self.get_workspace(stage_id))

        return Poller(f"workspace:{stage_id}", interval or self.core.config.workspace_poll_interval, tick)
