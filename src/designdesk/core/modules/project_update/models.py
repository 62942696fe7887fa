from datetime import datetime
from enum import StrEnum
from typing import Any

from pydantic import AliasChoices, Field, field_validator

from designdesk.core.models import ApiModel


class UpdateType(StrEnum):
    GENERAL = "GENERAL"
    PHOTO = "PHOTO"
    TASK = "TASK"
    DOCUMENT = "DOCUMENT"
    COMMUNICATION = "COMMUNICATION"
    MILESTONE = "MILESTONE"
    INSPECTION = "INSPECTION"
    ISSUE = "ISSUE"


class UpdatePriority(StrEnum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class ProjectUpdate(ApiModel):
    """Entry of a project's update feed."""

    id: str
    type: UpdateType = UpdateType.GENERAL
    priority: UpdatePriority = UpdatePriority.MEDIUM
    title: str | None = None
    description: str | None = None
    room_id: str | None = None
    created_at: datetime | None = None


class ProjectUpdateDraft(ApiModel):
    """Fields for creating or editing an update; blank optional fields are omitted."""

    type: UpdateType = UpdateType.GENERAL
    priority: UpdatePriority = UpdatePriority.MEDIUM
    title: str | None = None
    description: str | None = None
    room_id: str | None = None

    @field_validator("title", "description", "room_id", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        return None if value == "" else value


class BlobUploadTicket(ApiModel):
    """Server-issued permission to upload one file straight to blob storage."""

    url: str  # Public URL once uploaded
    upload_url: str
    token: str | None = None


class UpdatePhoto(ApiModel):
    id: str
    url: str = Field(..., validation_alias=AliasChoices("url", "blobUrl"))
    caption: str | None = None
