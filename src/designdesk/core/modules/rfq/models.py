"""Supplier quote request (RFQ) models."""

from datetime import date

from pydantic import Field

from designdesk.core.models import ApiModel


class QuoteSupplier(ApiModel):
    id: str
    name: str
    email: str | None = None


class QuoteItem(ApiModel):
    """Project item that can be sent out for quoting."""

    id: str
    name: str = ""
    supplier_name: str | None = None
    quantity: int | None = None


class QuoteGroupEntry(ApiModel):
    item: QuoteItem
    already_sent: bool = False


class SupplierGroup(ApiModel):
    """Items grouped under the supplier they would be sent to."""

    key: str
    supplier: QuoteSupplier | None = None
    items: list[QuoteGroupEntry] = Field(default_factory=list)


class QuotePreview(ApiModel):
    supplier_groups: list[SupplierGroup] = Field(default_factory=list)


class QuoteRequestItem(ApiModel):
    """Line of the send request: one item and the supplier it goes to."""

    id: str
    supplier_id: str | None = None
    supplier_name: str | None = None
    override_supplier: bool = False  # Resend even if already sent


class QuoteRequest(ApiModel):
    project_id: str
    items: list[QuoteRequestItem]
    message: str | None = None
    response_deadline: date | None = None


class QuoteSendResult(ApiModel):
    sent: int = 0  # Number of suppliers contacted
