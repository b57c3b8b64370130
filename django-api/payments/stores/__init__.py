from payments.stores.django_store import DjangoPaymentStore
from payments.stores.interfaces import PaymentStore

__all__ = ["DjangoPaymentStore", "PaymentStore"]
