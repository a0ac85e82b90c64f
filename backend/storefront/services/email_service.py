# backend/storefront/services/email_service.py
import logging
from email.message import EmailMessage
from pathlib import Path
from typing import Optional

import aiosmtplib
from jinja2 import Environment, FileSystemLoader, select_autoescape

from storefront.core.config import settings
from storefront import schemas

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
jinja_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(['html', 'xml'])
)

STATUS_MESSAGES = {
    schemas.OrderStatusEnum.PENDING: ("Your order is pending and will be processed soon.", "#8b7355"),
    schemas.OrderStatusEnum.COMPLETED: ("Your order has been completed and is ready!", "#4caf50"),
    schemas.OrderStatusEnum.CANCELLED: ("Your order has been cancelled. Please contact us for more information.", "#f44336"),
}


def email_enabled() -> bool:
    return bool(settings.EMAIL_USER and settings.EMAIL_APP_PASSWORD)


def render_email(template_name: str, **context) -> str:
    template = jinja_env.get_template(f"email/{template_name}")
    return template.render(store_email=settings.EMAIL_USER, contact_url=settings.STORE_CONTACT_URL, **context)


async def send_email(to: str, subject: str, html: str, sender_name: str = "ChitraVaani") -> bool:
    """
    Sends one HTML email through Gmail SMTP.
    Returns False (and logs) on any failure; never raises.
    """
    if not email_enabled():
        logger.info(f"Email not configured, skipping '{subject}' to {to}")
        return False

    message = EmailMessage()
    message["From"] = f'"{sender_name}" <{settings.EMAIL_USER}>'
    message["To"] = to
    message["Subject"] = subject
    message.set_content("This message requires an HTML-capable email client.")
    message.add_alternative(html, subtype="html")

    try:
        await aiosmtplib.send(
            message,
            hostname=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.EMAIL_USER,
            password=settings.EMAIL_APP_PASSWORD,
            use_tls=settings.SMTP_PORT == 465,
            start_tls=settings.SMTP_PORT == 587,
        )
    except (aiosmtplib.SMTPException, OSError) as e:
        logger.error(f"Failed to send '{subject}' to {to}: {e}")
        return False
    logger.info(f"Sent '{subject}' to {to}")
    return True


async def send_order_confirmation(order: schemas.Order) -> bool:
    html = render_email(
        "order_confirmation.html",
        order=order,
        order_type=order.order_type.value,
        details=order.order_details,
        artwork_title=order.artwork_title,
    )
    return await send_email(order.customer_email, f"Order Confirmation - ChitraVaani #{order.id}", html)


async def notify_admin_new_order(order: schemas.Order) -> bool:
    recipient: Optional[str] = settings.ADMIN_NOTIFY_EMAIL or settings.EMAIL_USER
    if not recipient:
        logger.info("No admin notification address configured, skipping new order alert")
        return False
    html = render_email(
        "admin_new_order.html",
        order=order,
        order_type=order.order_type.value,
        details=order.order_details,
        artwork_title=order.artwork_title,
    )
    subject = f"New {order.order_type.value.upper()} Order #{order.id}"
    return await send_email(recipient, subject, html, sender_name="ChitraVaani Orders")


async def send_order_status_update(order: schemas.Order) -> bool:
    status_message, color = STATUS_MESSAGES[order.status]
    html = render_email(
        "order_status_update.html",
        order=order,
        status=order.status.value,
        status_message=status_message,
        header_color=color,
    )
    return await send_email(order.customer_email, f"Order #{order.id} Status Update - {order.status.value}", html)


async def send_feedback_thank_you(feedback: schemas.Feedback) -> bool:
    html = render_email("feedback_thank_you.html", feedback=feedback)
    return await send_email(feedback.customer_email, "Thank You for Your Feedback - ChitraVaani", html)
