from collections.abc import Collection, Mapping
from datetime import date

import structlog

from designdesk.core.client import unwrap
from designdesk.core.core import Service
from designdesk.core.modules.rfq.builder import build_quote_items
from designdesk.core.modules.rfq.models import QuotePreview, QuoteRequest, QuoteSendResult
from designdesk.errors import ValidationError

logger = structlog.get_logger(__name__)

SUPPLIER_QUOTE_PATH = "/api/rfq/supplier-quote"


class RfqService(Service):
    """Bulk supplier quote requests."""

    async def get_quote_preview(self, project_id: str, item_ids: list[str]) -> QuotePreview:
        """Group the selected items by supplier and flag the ones already sent."""
        if not item_ids:
            raise ValidationError("Select at least one item")
        data = await self.client.get(SUPPLIER_QUOTE_PATH, params={"projectId": project_id, "itemIds": ",".join(item_ids)})
        return QuotePreview.model_validate(unwrap(data))

    async def send_quote_requests(
        self,
        project_id: str,
        preview: QuotePreview,
        supplier_overrides: Mapping[str, str] | None = None,
        resend_item_ids: Collection[str] = (),
        message: str | None = None,
        response_deadline: date | None = None,
    ) -> QuoteSendResult:
        """Send quote requests for every unsent (or resend-marked) item in the preview."""
        items = build_quote_items(preview, supplier_overrides, resend_item_ids)
        if not items:
            raise ValidationError("No items to send. All items have already been sent.")

        request = QuoteRequest(project_id=project_id, items=items, message=message or None, response_deadline=response_deadline)
        data = await self.client.post(SUPPLIER_QUOTE_PATH, json=request.to_api())

        if isinstance(data, dict) and data.get("needsConfirmation"):
            raise ValidationError("All items have already been sent. Enable resend to send again.")

        result = QuoteSendResult.model_validate(unwrap(data))
        logger.info("quote_requests_sent", project_id=project_id, item_count=len(items), supplier_count=result.sent)
        return result
