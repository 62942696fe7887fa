"""Entry point: watch a design stage's notifications."""

import asyncio
import contextlib

import structlog

from designdesk.app import App
from designdesk.config import Config
from designdesk.core.modules.notification.models import DesignNotification
from designdesk.logging import setup_logging

logger = structlog.get_logger(__name__)


async def watch_stage(app: App, stage_id: str) -> None:
    """Log every new unread notification of the stage until cancelled."""

    async def on_new(notification: DesignNotification) -> None:
        logger.info(
            "notification_received",
            stage_id=stage_id,
            notification_id=notification.id,
            type=notification.type,
            title=notification.title,
        )

    async with app.lifespan(), app.watch_notifications(stage_id, on_new):
        await asyncio.Event().wait()


def main() -> None:
    config = Config()
    setup_logging(config.debug, api_url=config.api_url)
    if not config.watch_stage_id:
        raise SystemExit("DESIGNDESK_WATCH_STAGE_ID is required")

    app = App(config)
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(watch_stage(app, config.watch_stage_id))


if __name__ == "__main__":
    main()
