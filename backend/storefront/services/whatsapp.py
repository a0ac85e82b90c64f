from typing import Optional
from urllib.parse import quote

from storefront.core.config import settings
from storefront import schemas


def _summary_lines(order: schemas.Order) -> list[str]:
    details = order.order_details or {}
    lines = [
        f"Hello ChitraVaani! I just placed order #{order.id}.",
        f"Type: {order.order_type.value.upper()}",
        f"Name: {order.customer_name}",
    ]
    if order.order_type == schemas.OrderTypeEnum.REGULAR:
        artwork = details.get("artwork") or order.artwork_title
        if artwork:
            lines.append(f"Artwork: {artwork}")
        if details.get("price"):
            lines.append(f"Price: {details['price']}")
    elif order.order_type == schemas.OrderTypeEnum.CUSTOM:
        lines.append(f"Idea: {details.get('idea', '')}")
        if details.get("medium"):
            lines.append(f"Medium: {details['medium']}")
    else:
        lines.append(f"Organization: {details.get('orgName', '')}")
        lines.append(f"Item: {details.get('itemType', '')} x {details.get('quantity', '')}")
    return lines


def build_whatsapp_url(order: schemas.Order) -> Optional[str]:
    """
    wa.me link with a prefilled message summarising the order.
    None when WHATSAPP_NUMBER is not configured.
    """
    if not settings.WHATSAPP_NUMBER:
        return None
    number = "".join(ch for ch in settings.WHATSAPP_NUMBER if ch.isdigit())
    text = "\n".join(_summary_lines(order))
    return f"https://wa.me/{number}?text={quote(text)}"
