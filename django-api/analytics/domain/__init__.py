from analytics.domain.models import CreatorSummary, EventAnalytics

__all__ = ["CreatorSummary", "EventAnalytics"]
