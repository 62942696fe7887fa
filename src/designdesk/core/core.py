from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import cast

import httpx

from designdesk.config import Config
from designdesk.core.client import ApiClient


class Service:
    """Base class for services that talk to the design API."""

    def __init__(self, client: ApiClient) -> None:
        self.client = client
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from designdesk.core.modules.asset.service import AssetService  # noqa: PLC0415
    from designdesk.core.modules.checklist.service import ChecklistService  # noqa: PLC0415
    from designdesk.core.modules.comment.service import CommentService  # noqa: PLC0415
    from designdesk.core.modules.delivery.service import DeliveryService  # noqa: PLC0415
    from designdesk.core.modules.design.service import DesignService  # noqa: PLC0415
    from designdesk.core.modules.mention.service import MentionService  # noqa: PLC0415
    from designdesk.core.modules.notification.service import NotificationService  # noqa: PLC0415
    from designdesk.core.modules.project_update.service import ProjectUpdateService  # noqa: PLC0415
    from designdesk.core.modules.rfq.service import RfqService  # noqa: PLC0415

    mention: MentionService
    design: DesignService
    comment: CommentService
    asset: AssetService
    checklist: ChecklistService
    notification: NotificationService
    delivery: DeliveryService
    rfq: RfqService
    project_update: ProjectUpdateService

    def __init__(self, client: ApiClient) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._client = client

        # Service configuration: (attribute_name, module_path, class_name)
        service_configs = [
            ("mention", "designdesk.core.modules.mention.service", "MentionService"),
            ("design", "designdesk.core.modules.design.service", "DesignService"),
            ("comment", "designdesk.core.modules.comment.service", "CommentService"),
            ("asset", "designdesk.core.modules.asset.service", "AssetService"),
            ("checklist", "designdesk.core.modules.checklist.service", "ChecklistService"),
            ("notification", "designdesk.core.modules.notification.service", "NotificationService"),
            ("delivery", "designdesk.core.modules.delivery.service", "DeliveryService"),
            ("rfq", "designdesk.core.modules.rfq.service", "RfqService"),
            ("project_update", "designdesk.core.modules.project_update.service", "ProjectUpdateService"),
        ]

        # Dynamically import and instantiate services
        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(client)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, API client, and all service instances."""

    config: Config
    client: ApiClient
    services: Services

    def __init__(self, config: Config, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize core with config, HTTP client, and auto-register services."""
        self.config = config
        self.client = ApiClient(config.api_url, timeout=config.request_timeout, token=config.api_token, transport=transport)
        self.services = Services(self.client)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Stop services and close the HTTP client."""
        await self.services.stop_all()
        await self.client.aclose()
