from events.stores import DjangoEventStore
from notifications.services import build_notification_service
from payments.gateways import PaymentGateway, get_gateway
from payments.services.payment_service import PaymentService, generate_transaction_id
from payments.stores import DjangoPaymentStore
from tickets.services import build_issuance_service
from tickets.stores import DjangoTicketStore


def build_payment_service(gateway: PaymentGateway | None = None) -> PaymentService:
    events = DjangoEventStore()
    return PaymentService(
        DjangoPaymentStore(),
        gateway or get_gateway(),
        build_issuance_service(),
        DjangoTicketStore(events),
        events,
        build_notification_service(),
    )


__all__ = ["PaymentService", "build_payment_service", "generate_transaction_id"]
