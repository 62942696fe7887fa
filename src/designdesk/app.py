from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from datetime import date

import httpx

from designdesk.config import Config
from designdesk.core.batch import BatchResult
from designdesk.core.core import Core
from designdesk.core.modules.asset.models import Asset, UploadFile
from designdesk.core.modules.checklist.models import Checklist, ChecklistItem
from designdesk.core.modules.comment.models import Comment, CommentNode
from designdesk.core.modules.comment.tree import build_comment_tree, filter_comments
from designdesk.core.modules.delivery.models import Delivery, DeliveryUpdate
from designdesk.core.modules.design.models import DesignSection, SectionStatus, SectionType, Workspace
from designdesk.core.modules.notification.models import DesignNotification, unread_badge
from designdesk.core.modules.project_update.models import ProjectUpdate, ProjectUpdateDraft, UpdatePhoto
from designdesk.core.modules.rfq.models import QuotePreview, QuoteSendResult
from designdesk.core.modules.user.models import TeamMember
from designdesk.core.poller import Poller


class App:
    """Facade for all client operations, composes services the way the workspace views do."""

    def __init__(self, config: Config, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._core = Core(config, transport=transport)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Team ===
    async def get_team_members(self, refresh: bool = False) -> list[TeamMember]:
        return await self._core.services.mention.get_team_members(refresh)

    # === Workspace and sections ===
    async def get_workspace(self, stage_id: str) -> Workspace:
        return await self._core.services.design.get_workspace(stage_id)

    async def list_sections(self, stage_id: str) -> list[DesignSection]:
        return await self._core.services.design.list_sections(stage_id)

    async def get_or_create_section(self, stage_id: str, section_type: SectionType) -> DesignSection:
        return await self._core.services.design.get_or_create_section(stage_id, section_type)

    async def update_section_notes(self, section_id: str, content: str) -> DesignSection:
        return await self._core.services.design.update_notes(section_id, content)

    async def update_section_status(self, section_id: str, status: SectionStatus) -> DesignSection:
        return await self._core.services.design.update_status(section_id, status)

    async def complete_section(self, section_id: str, completed: bool = True) -> DesignSection:
        return await self._core.services.design.set_completed(section_id, completed)

    def watch_workspace(
        self, stage_id: str, on_update: Callable[[Workspace], Awaitable[None]], interval: float | None = None
    ) -> Poller:
        """Create (not start) a poller refetching the workspace."""
        return self._core.services.design.create_workspace_poller(stage_id, on_update, interval)

    # === Comments ===
    async def get_comment_thread(
        self,
        stage_id: str,
        section_type: SectionType | None = None,
        search: str | None = None,
        pinned_only: bool = False,
    ) -> list[CommentNode]:
        """Comments of every section in the stage, filtered and threaded."""
        workspace = await self._core.services.design.get_workspace(stage_id)
        comments = filter_comments(
            workspace.all_comments(),
            section_type=section_type.value if section_type else None,
            search=search,
            pinned_only=pinned_only,
        )
        return build_comment_tree(comments)

    async def post_comment(
        self, section_id: str, content: str, mentions: list[str] | None = None, parent_id: str | None = None
    ) -> Comment:
        """Post a comment, resolving @mention tokens to member IDs first.

        When mentions is None, tokens are extracted from the content.
        """
        mention_service = self._core.services.mention
        if mentions is None:
            mention_ids = await mention_service.resolve_content(content)
        else:
            mention_ids = await mention_service.resolve(mentions)
        return await self._core.services.comment.create_comment(section_id, content, mention_ids, parent_id)

    async def edit_comment(self, comment_id: str, content: str) -> Comment:
        return await self._core.services.comment.update_comment(comment_id, content)

    async def delete_comment(self, comment_id: str) -> None:
        await self._core.services.comment.delete_comment(comment_id)

    async def like_comment(self, comment_id: str) -> None:
        await self._core.services.comment.like_comment(comment_id)

    async def toggle_comment_pin(self, comment: Comment) -> bool:
        """Flip the pin of a comment; returns the new pin state."""
        await self._core.services.comment.set_pinned(comment.id, not comment.is_pinned)
        return not comment.is_pinned

    # === Assets ===
    async def upload_files(self, section_id: str, files: list[UploadFile], description: str | None = None) -> BatchResult[Asset]:
        return await self._core.services.asset.upload_files(section_id, files, description)

    async def update_asset_caption(self, asset_id: str, caption: str) -> Asset:
        return await self._core.services.asset.update_caption(asset_id, caption)

    async def delete_assets(self, asset_ids: list[str]) -> BatchResult[str]:
        return await self._core.services.asset.delete_assets(asset_ids)

    # === Checklist ===
    async def get_checklist(self, stage_id: str, section_type: SectionType) -> Checklist:
        return await self._core.services.design.get_checklist(stage_id, section_type)

    async def add_checklist_item(self, checklist: Checklist, text: str, order: int | None = None) -> ChecklistItem:
        return await self._core.services.checklist.add_item(checklist, text, order)

    async def rename_checklist_item(self, checklist: Checklist, item_id: str, text: str) -> ChecklistItem:
        return await self._core.services.checklist.update_text(checklist, item_id, text)

    async def delete_checklist_item(self, checklist: Checklist, item_id: str) -> None:
        await self._core.services.checklist.delete_item(checklist, item_id)

    async def toggle_checklist_item(self, checklist: Checklist, item_id: str) -> bool:
        return await self._core.services.checklist.toggle_completion(checklist, item_id)

    async def reorder_checklist(self, checklist: Checklist, item_id: str, target_item_id: str) -> None:
        await self._core.services.checklist.reorder(checklist, item_id, target_item_id)

    # === Notifications ===
    async def get_notifications(self, stage_id: str) -> list[DesignNotification]:
        return await self._core.services.notification.list_notifications(stage_id)

    async def get_notification_badge(self, stage_id: str) -> str | None:
        """Unread badge text for the stage, None when everything is read."""
        return unread_badge(await self.get_notifications(stage_id))

    async def mark_notification_read(self, notification_id: str) -> None:
        await self._core.services.notification.mark_read(notification_id)

    async def mark_all_notifications_read(self, stage_id: str) -> None:
        await self._core.services.notification.mark_all_read(stage_id)

    def watch_notifications(
        self, stage_id: str, on_new: Callable[[DesignNotification], Awaitable[None]], interval: float | None = None
    ) -> Poller:
        """Create (not start) a poller reporting each new unread notification once."""
        return self._core.services.notification.create_poller(stage_id, on_new, interval)

    # === Deliveries ===
    async def get_deliveries(self, order_id: str) -> list[Delivery]:
        return await self._core.services.delivery.list_deliveries(order_id)

    async def create_delivery(self, order_id: str, details: DeliveryUpdate | None = None) -> Delivery:
        return await self._core.services.delivery.create_delivery(order_id, details)

    async def update_delivery(self, delivery_id: str, update: DeliveryUpdate) -> Delivery:
        return await self._core.services.delivery.update_delivery(delivery_id, update)

    # === Supplier quotes ===
    async def preview_quote_request(self, project_id: str, item_ids: list[str]) -> QuotePreview:
        return await self._core.services.rfq.get_quote_preview(project_id, item_ids)

    async def send_quote_requests(
        self,
        project_id: str,
        preview: QuotePreview,
        supplier_overrides: dict[str, str] | None = None,
        resend_item_ids: set[str] | None = None,
        message: str | None = None,
        response_deadline: date | None = None,
    ) -> QuoteSendResult:
        return await self._core.services.rfq.send_quote_requests(
            project_id, preview, supplier_overrides, resend_item_ids or set(), message, response_deadline
        )

    # === Project updates ===
    async def get_project_updates(self, project_id: str) -> list[ProjectUpdate]:
        return await self._core.services.project_update.list_updates(project_id)

    async def create_project_update(
        self, project_id: str, draft: ProjectUpdateDraft, photos: list[UploadFile] | None = None
    ) -> tuple[ProjectUpdate, BatchResult[UpdatePhoto]]:
        """Create an update, then attach photos; photo failures do not undo the update."""
        service = self._core.services.project_update
        update = await service.create_update(project_id, draft)
        photo_result = await service.upload_photos(
            project_id, update.id, photos or [], caption=draft.title, notes=draft.description, room_id=draft.room_id
        )
        return update, photo_result

    async def edit_project_update(self, project_id: str, update_id: str, draft: ProjectUpdateDraft) -> ProjectUpdate:
        return await self._core.services.project_update.edit_update(project_id, update_id, draft)

    async def delete_project_update(self, project_id: str, update_id: str) -> None:
        await self._core.services.project_update.delete_update(project_id, update_id)
