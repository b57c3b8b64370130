from payments.domain.models import NewPayment, Payment, PaymentId, PaymentStats, PaymentStatus

__all__ = ["NewPayment", "Payment", "PaymentId", "PaymentStats", "PaymentStatus"]
