import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ("events", "0001_initial"),
        ("tickets", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=10)),
                ("currency", models.CharField(default="NGN", max_length=3)),
                (
                    "payment_method",
                    models.CharField(
                        choices=[("paystack", "Paystack"), ("card", "Card"), ("bank_transfer", "Bank transfer")],
                        default="paystack",
                        max_length=20,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("completed", "Completed"),
                            ("failed", "Failed"),
                            ("refunded", "Refunded"),
                        ],
                        default="pending",
                        max_length=10,
                    ),
                ),
                ("transaction_id", models.CharField(max_length=20, unique=True)),
                ("gateway_reference", models.CharField(blank=True, max_length=100)),
                ("authorization_url", models.URLField(blank=True, max_length=500)),
                ("access_code", models.CharField(blank=True, max_length=100)),
                ("description", models.CharField(max_length=255)),
                (
                    "reminder",
                    models.CharField(
                        blank=True,
                        choices=[
                            ("1_hour", "1 Hour Before"),
                            ("1_day", "1 Day Before"),
                            ("3_days", "3 Days Before"),
                            ("1_week", "1 Week Before"),
                            ("2_weeks", "2 Weeks Before"),
                        ],
                        max_length=10,
                        null=True,
                    ),
                ),
                ("paid_at", models.DateTimeField(blank=True, null=True)),
                ("refunded_at", models.DateTimeField(blank=True, null=True)),
                ("refund_reason", models.CharField(blank=True, max_length=500)),
                ("failure_reason", models.CharField(blank=True, max_length=500)),
                ("metadata", models.JSONField(blank=True, default=dict)),
                ("gateway_response", models.JSONField(blank=True, default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="events.event",
                    ),
                ),
                (
                    "payer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "ticket",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="tickets.ticket",
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["payer", "-created_at"], name="payments_payer_created_idx"),
                    models.Index(fields=["event", "status"], name="payments_event_status_idx"),
                ],
            },
        ),
    ]
