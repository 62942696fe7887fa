"""Design workspace models: stages and their design sections."""

from datetime import datetime
from enum import StrEnum

from pydantic import Field

from designdesk.core.models import ApiModel
from designdesk.core.modules.asset.models import Asset
from designdesk.core.modules.checklist.models import ChecklistItem
from designdesk.core.modules.comment.models import Comment


class SectionType(StrEnum):
    """Fixed subsections of a room's design workspace."""

    GENERAL = "GENERAL"
    WALL_COVERING = "WALL_COVERING"
    CEILING = "CEILING"
    FLOOR = "FLOOR"


class SectionStatus(StrEnum):
    DRAFT = "DRAFT"
    IN_REVIEW = "IN_REVIEW"
    FINALIZED = "FINALIZED"


class DesignSection(ApiModel):
    """Independently completable part of a design workspace."""

    id: str
    type: SectionType
    title: str | None = None
    description: str | None = None
    content: str | None = None  # Free-form section notes
    status: SectionStatus = SectionStatus.DRAFT
    completed: bool = False
    assets: list[Asset] = Field(default_factory=list)
    comments: list[Comment] = Field(default_factory=list)
    checklist_items: list[ChecklistItem] = Field(default_factory=list)
    updated_at: datetime | None = None


class Stage(ApiModel):
    """Phase of a project, e.g. the design concept."""

    id: str
    type: str | None = None
    status: str | None = None
    room_id: str | None = None
    project_id: str | None = None


class CompletionStatus(ApiModel):
    completed: int = 0
    total: int = 0
    percentage: float = 0


class Workspace(ApiModel):
    """Everything the design workspace view renders for one stage."""

    stage: Stage | None = None
    sections: list[DesignSection] = Field(default_factory=list)
    completion_status: CompletionStatus | None = None

    def get_section(self, section_type: SectionType) -> DesignSection | None:
        """Get section by type."""
        for section in self.sections:
            if section.type == section_type:
                return section
        return None

    def all_comments(self) -> list[Comment]:
        """Comments of every section, each tagged with its section type."""
        return [
            comment.model_copy(update={"section_type": section.type.value})
            for section in self.sections
            for comment in section.comments
        ]
