"""QR payloads printed on tickets and the PNG images that carry them.

The payload is a small JSON document with camelCase keys so that any
scanner app can read it without knowing the API's field names.
"""

import base64
import io
import json
from dataclasses import dataclass

import qrcode
from qrcode.constants import ERROR_CORRECT_H

from eventful.conf import get_setting
from tickets.domain.errors import InvalidQRCodeError


@dataclass(frozen=True)
class QRPayload:
    ticket_number: str
    event_id: str
    user_id: str
    event_title: str


def build_payload(ticket_number: str, event_id: str, user_id: str, event_title: str) -> str:
    return json.dumps(
        {
            "ticketNumber": ticket_number,
            "eventId": event_id,
            "userId": user_id,
            "eventTitle": event_title,
        }
    )


def parse_payload(raw: str) -> QRPayload:
    """Read a scanned payload.

    Raises:
        InvalidQRCodeError: If the payload is not JSON or lacks the ticket fields.
    """
    try:
        data = json.loads(raw)
        return QRPayload(
            ticket_number=str(data["ticketNumber"]),
            event_id=str(data["eventId"]),
            user_id=str(data.get("userId", "")),
            event_title=str(data.get("eventTitle", "")),
        )
    except (TypeError, ValueError, KeyError):
        raise InvalidQRCodeError()


def render_png(data: str) -> bytes:
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_H,
        box_size=get_setting("QR_CODE_BOX_SIZE"),
        border=2,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    return buf.getvalue()


def data_uri(data: str) -> str:
    """Return the QR image for ``data`` as a ``data:image/png`` URI."""
    return "data:image/png;base64," + base64.b64encode(render_png(data)).decode("ascii")
