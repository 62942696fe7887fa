"""Delivery tracking for purchase orders."""

from datetime import date, datetime
from enum import StrEnum
from typing import Any
from urllib.parse import quote

from pydantic import Field, field_validator

from designdesk.core.models import ApiModel


class DeliveryStatus(StrEnum):
    """Delivery states; any status may be set to any other."""

    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    IN_TRANSIT = "IN_TRANSIT"
    OUT_FOR_DELIVERY = "OUT_FOR_DELIVERY"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


CARRIERS = ("UPS", "FedEx", "USPS", "DHL", "Amazon", "Local Delivery", "Freight", "Other")

TRACKING_URLS = {
    "UPS": "https://www.ups.com/track?tracknum={}",
    "FedEx": "https://www.fedex.com/fedextrack/?trknbr={}",
    "USPS": "https://tools.usps.com/go/TrackConfirmAction?tLabels={}",
    "DHL": "https://www.dhl.com/en/express/tracking.html?AWB={}",
}


def tracking_url(carrier: str | None, tracking_number: str | None) -> str | None:
    """Carrier tracking page URL, or None for carriers without one."""
    if not carrier or not tracking_number:
        return None
    template = TRACKING_URLS.get(carrier)
    return template.format(quote(tracking_number, safe="")) if template else None


class Supplier(ApiModel):
    id: str
    name: str
    phone: str | None = None
    email: str | None = None


class DeliveryOrder(ApiModel):
    id: str
    order_number: str
    supplier: Supplier | None = None


class Delivery(ApiModel):
    id: str
    status: DeliveryStatus = DeliveryStatus.PENDING
    scheduled_date: datetime | None = None
    actual_date: datetime | None = None
    carrier: str | None = None
    tracking_number: str | None = None
    notes: str | None = None
    received_by: str | None = None
    signature_url: str | None = None
    photo_urls: list[str] = Field(default_factory=list)
    created_at: datetime | None = None
    order: DeliveryOrder | None = None

    @property
    def tracking_url(self) -> str | None:
        return tracking_url(self.carrier, self.tracking_number)


class DeliveryUpdate(ApiModel):
    """Partial delivery change; unset fields are not sent."""

    status: DeliveryStatus | None = None
    scheduled_date: date | None = None
    actual_date: date | None = None
    carrier: str | None = None
    tracking_number: str | None = None
    notes: str | None = None
    received_by: str | None = None

    @field_validator("scheduled_date", "actual_date", "carrier", "tracking_number", "notes", "received_by", mode="before")
    @classmethod
    def blank_to_none(cls, value: Any) -> Any:
        # Empty form inputs mean "not provided"
        return None if value == "" else value
