import structlog

from designdesk.core.client import unwrap
from designdesk.core.core import Service
from designdesk.core.modules.comment.models import Comment
from designdesk.errors import ValidationError

logger = structlog.get_logger(__name__)


class CommentService(Service):
    """Creates and mutates design section comments."""

    async def create_comment(
        self, section_id: str, content: str, mentions: list[str] | None = None, parent_id: str | None = None
    ) -> Comment:
        """Post a comment (or a reply when parent_id is set) with already-resolved mention IDs."""
        content = content.strip()
        if not content:
            raise ValidationError("Comment content is required")

        payload = {"sectionId": section_id, "content": content, "mentions": mentions or []}
        if parent_id is not None:
            payload["parentId"] = parent_id

        data = await self.client.post("/api/design/comments", json=payload)
        comment = Comment.model_validate(unwrap(data, "comment"))
        logger.info(
            "comment_created", comment_id=comment.id, section_id=section_id, parent_id=parent_id, mention_count=len(mentions or [])
        )
        return comment

    async def update_comment(self, comment_id: str, content: str) -> Comment:
        """Replace the text of a comment."""
        content = content.strip()
        if not content:
            raise ValidationError("Comment content is required")
        data = await self.client.patch(f"/api/comments/{comment_id}", json={"content": content})
        return Comment.model_validate(unwrap(data, "comment"))

    async def delete_comment(self, comment_id: str) -> None:
        await self.client.delete(f"/api/comments/{comment_id}")
        logger.info("comment_deleted", comment_id=comment_id)

    async def like_comment(self, comment_id: str) -> None:
        await self.client.post(f"/api/comments/{comment_id}/like")

    async def set_pinned(self, comment_id: str, is_pinned: bool) -> None:
        """Pin or unpin a comment."""
        await self.client.post(f"/api/comments/{comment_id}/pin", json={"isPinned": is_pinned})
        logger.debug("comment_pin_changed", comment_id=comment_id, is_pinned=is_pinned)
