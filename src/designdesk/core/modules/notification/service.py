from collections.abc import Awaitable, Callable

import structlog

from designdesk.core.client import unwrap
from designdesk.core.core import Service
from designdesk.core.modules.notification.models import DesignNotification
from designdesk.core.poller import Poller

logger = structlog.get_logger(__name__)


class NotificationService(Service):
    """Design stage notifications."""

    async def list_notifications(self, stage_id: str) -> list[DesignNotification]:
        data = await self.client.get("/api/design/notifications", params={"stageId": stage_id})
        return [DesignNotification.model_validate(item) for item in unwrap(data, "notifications") or []]

    async def mark_read(self, notification_id: str) -> None:
        await self.client.patch(f"/api/design/notifications/{notification_id}/read")

    async def mark_all_read(self, stage_id: str) -> None:
        await self.client.patch("/api/design/notifications/read-all", json={"stageId": stage_id})
        logger.debug("notifications_marked_read", stage_id=stage_id)

    def create_poller(
        self,
        stage_id: str,
        on_new: Callable[[DesignNotification], Awaitable[None]],
        interval: float | None = None,
    ) -> Poller:
        """Poller that calls on_new once for every unread notification it has not seen yet."""
        seen: set[str] = set()

        async def tick() -> None:
            notifications = await self.list_notifications(stage_id)
            for notification in notifications:
                if notification.read or notification.id in seen:
                    continue
                seen.add(notification.id)
                await on_new(notification)

        return Poller(f"notifications:{stage_id}", interval or self.core.config.notification_poll_interval, tick)
