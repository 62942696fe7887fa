import json
from datetime import datetime
from typing import Any, Self

from pydantic import Field, field_validator, model_validator

from designdesk.core.models import ApiModel


class CommentAuthor(ApiModel):
    id: str
    name: str = ""
    email: str | None = None
    role: str | None = None


class CommentTag(ApiModel):
    id: str
    name: str
    color: str | None = None


class Comment(ApiModel):
    """Comment on a design section, optionally a reply to another comment."""

    id: str
    content: str
    author_id: str | None = None
    author: CommentAuthor | None = None
    created_at: datetime
    updated_at: datetime | None = None
    parent_id: str | None = None
    is_pinned: bool = False
    likes: int = 0
    mentions: list[str] = Field(default_factory=list)  # Resolved user IDs
    tags: list[CommentTag] = Field(default_factory=list)
    section_type: str | None = None  # Set when flattening a workspace

    @model_validator(mode="before")
    @classmethod
    def normalize_stored_shape(cls, data: Any) -> Any:
        """Accept the stored shape: commentPin / commentLikes / commentTags relations."""
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if "isPinned" not in data and "is_pinned" not in data and "commentPin" in data:
            data["isPinned"] = bool(data["commentPin"])
        if "likes" not in data and isinstance(data.get("commentLikes"), list):
            data["likes"] = len(data["commentLikes"])
        if "tags" not in data and isinstance(data.get("commentTags"), list):
            data["tags"] = [ct["tag"] for ct in data["commentTags"] if isinstance(ct, dict) and "tag" in ct]
        return data

    @field_validator("mentions", mode="before")
    @classmethod
    def parse_mentions(cls, value: Any) -> Any:
        # Stored as a JSON-encoded string by the API
        if value is None:
            return []
        if isinstance(value, str):
            return json.loads(value) if value else []
        return value

    @model_validator(mode="after")
    def fill_author_id(self) -> Self:
        if self.author_id is None and self.author is not None:
            self.author_id = self.author.id
        return self

    @property
    def author_name(self) -> str:
        return self.author.name if self.author else ""


class CommentNode(Comment):
    """Comment with its replies attached, ready for rendering."""

    replies: list["CommentNode"] = Field(default_factory=list)

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentNode":
        """Shallow copy of a comment with an empty replies list."""
        return cls.model_validate({**dict(comment), "replies": []})
