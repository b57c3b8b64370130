"""Email delivery for notifications.

Bodies are rendered from templates; when the notification concerns a
ticket the QR code travels as an inline ``cid:qrcode`` image, since most
mail clients block ``data:`` URIs.
"""

from email.mime.image import MIMEImage

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string

from eventful.conf import get_setting
from notifications.domain import NotificationType, PendingDelivery
from tickets import qr

TEMPLATES = {
    NotificationType.TICKET_CONFIRMATION: "notifications/email/ticket_confirmation",
    NotificationType.PAYMENT_CONFIRMATION: "notifications/email/ticket_confirmation",
}
DEFAULT_TEMPLATE = "notifications/email/notification"


def build_message(delivery: PendingDelivery) -> EmailMultiAlternatives:
    context = {
        "title": delivery.title,
        "message": delivery.message,
        "recipient_name": delivery.recipient_name,
        "event_title": delivery.event_title,
        "event_starts_at": delivery.event_starts_at,
        "event_venue": delivery.event_venue,
        "ticket_number": delivery.ticket_number,
        "has_qr": bool(delivery.qr_code_data),
        "frontend_url": get_setting("FRONTEND_URL"),
    }
    template = TEMPLATES.get(delivery.type, DEFAULT_TEMPLATE)
    message = EmailMultiAlternatives(
        subject=delivery.title,
        body=render_to_string(f"{template}.txt", context),
        from_email=settings.DEFAULT_FROM_EMAIL,
        to=[delivery.recipient_email],
    )
    message.attach_alternative(render_to_string(f"{template}.html", context), "text/html")
    if delivery.qr_code_data:
        message.mixed_subtype = "related"
        image = MIMEImage(qr.render_png(delivery.qr_code_data), _subtype="png")
        image.add_header("Content-ID", "<qrcode>")
        image.add_header("Content-Disposition", "inline", filename=f"{delivery.ticket_number}.png")
        message.attach(image)
    return message


def send_email(delivery: PendingDelivery) -> None:
    build_message(delivery).send(fail_silently=False)
