from collections.abc import Collection, Mapping

from designdesk.core.modules.rfq.models import QuotePreview, QuoteRequestItem


def build_quote_items(
    preview: QuotePreview,
    supplier_overrides: Mapping[str, str] | None = None,
    resend_item_ids: Collection[str] = (),
) -> list[QuoteRequestItem]:
    """Turn a preview into request lines.

    Items already sent are skipped unless listed in resend_item_ids. A supplier
    override for an item replaces the supplier of its group.
    """
    overrides = supplier_overrides or {}
    items = []
    for group in preview.supplier_groups:
        for entry in group.items:
            resend = entry.item.id in resend_item_ids
            if entry.already_sent and not resend:
                continue
            items.append(
                QuoteRequestItem(
                    id=entry.item.id,
                    supplier_id=overrides.get(entry.item.id) or (group.supplier.id if group.supplier else None),
                    supplier_name=entry.item.supplier_name,
                    override_supplier=resend,
                )
            )
    return items
