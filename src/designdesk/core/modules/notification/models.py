from collections.abc import Sequence
from datetime import datetime

from designdesk.core.models import ApiModel


class DesignNotification(ApiModel):
    """Notification about activity in a design stage (mention, comment, upload)."""

    id: str
    type: str | None = None
    title: str = ""
    message: str = ""
    read: bool = False
    created_at: datetime | None = None
    related_id: str | None = None


def unread_count(notifications: Sequence[DesignNotification]) -> int:
    return sum(1 for notification in notifications if not notification.read)


def unread_badge(notifications: Sequence[DesignNotification]) -> str | None:
    """Badge text for the indicator: None, "1".."9", or "9+"."""
    count = unread_count(notifications)
    if count == 0:
        return None
    return "9+" if count > 9 else str(count)
