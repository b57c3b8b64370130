from analytics.stores.django_store import DjangoAnalyticsStore
from analytics.stores.interfaces import AnalyticsStore

__all__ = ["AnalyticsStore", "DjangoAnalyticsStore"]
