from tickets.stores.django_store import DjangoTicketStore
from tickets.stores.interfaces import TicketStore

__all__ = ["DjangoTicketStore", "TicketStore"]
