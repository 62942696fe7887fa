"""Tests for notification badge helpers."""

from designdesk.core.modules.notification.models import DesignNotification, unread_badge, unread_count


def notifications(unread: int, read: int = 0) -> list[DesignNotification]:
    items = [DesignNotification(id=f"u{i}", read=False) for i in range(unread)]
    items += [DesignNotification(id=f"r{i}", read=True) for i in range(read)]
    return items


class TestUnreadBadge:
    """Tests for unread_badge function."""

    def test_no_unread(self):
        assert unread_badge(notifications(0, read=3)) is None
        assert unread_badge([]) is None

    def test_count_shown(self):
        assert unread_badge(notifications(1, read=2)) == "1"
        assert unread_badge(notifications(9)) == "9"

    def test_capped(self):
        """Test that more than nine unread notifications show 9+."""
        assert unread_badge(notifications(10)) == "9+"

    def test_unread_count(self):
        assert unread_count(notifications(4, read=5)) == 4
