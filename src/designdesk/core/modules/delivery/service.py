import structlog

from designdesk.core.client import unwrap
from designdesk.core.core import Service
from designdesk.core.modules.delivery.models import Delivery, DeliveryUpdate
from designdesk.errors import ValidationError

logger = structlog.get_logger(__name__)


class DeliveryService(Service):
    """Deliveries of purchase orders."""

    async def list_deliveries(self, order_id: str) -> list[Delivery]:
        data = await self.client.get("/api/deliveries", params={"orderId": order_id})
        return [Delivery.model_validate(item) for item in unwrap(data, "deliveries") or []]

    async def create_delivery(self, order_id: str, details: DeliveryUpdate | None = None) -> Delivery:
        payload = {"orderId": order_id, **(details.to_api() if details else {})}
        data = await self.client.post("/api/deliveries", json=payload)
        delivery = Delivery.model_validate(unwrap(data, "delivery"))
        logger.info("delivery_created", delivery_id=delivery.id, order_id=order_id)
        return delivery

    async def update_delivery(self, delivery_id: str, update: DeliveryUpdate) -> Delivery:
        """Send only the fields that are set."""
        payload = update.to_api()
        if not payload:
            raise ValidationError("Nothing to update")
        data = await self.client.patch(f"/api/deliveries/{delivery_id}", json=payload)
        delivery = Delivery.model_validate(unwrap(data, "delivery"))
        logger.info("delivery_updated", delivery_id=delivery_id, fields=sorted(payload))
        return delivery
