import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

REMINDER_CHOICES = [
    ("1_hour", "1 Hour Before"),
    ("1_day", "1 Day Before"),
    ("3_days", "3 Days Before"),
    ("1_week", "1 Week Before"),
    ("2_weeks", "2 Weeks Before"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Event",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("title", models.CharField(max_length=150)),
                ("description", models.TextField(max_length=5000)),
                (
                    "event_type",
                    models.CharField(
                        choices=[
                            ("concert", "Concert"),
                            ("theater", "Theater"),
                            ("sports", "Sports"),
                            ("conference", "Conference"),
                            ("meetup", "Meetup"),
                            ("workshop", "Workshop"),
                            ("festival", "Festival"),
                            ("other", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("music", "Music"),
                            ("sports", "Sports"),
                            ("entertainment", "Entertainment"),
                            ("education", "Education"),
                            ("business", "Business"),
                            ("other", "Other"),
                        ],
                        max_length=20,
                    ),
                ),
                ("starts_at", models.DateTimeField()),
                ("ends_at", models.DateTimeField()),
                ("venue", models.CharField(blank=True, max_length=255)),
                ("address", models.CharField(max_length=255)),
                ("city", models.CharField(max_length=100)),
                ("state", models.CharField(max_length=100)),
                ("zip_code", models.CharField(max_length=20)),
                ("country", models.CharField(max_length=100)),
                ("latitude", models.FloatField(blank=True, null=True)),
                ("longitude", models.FloatField(blank=True, null=True)),
                ("capacity", models.PositiveIntegerField()),
                ("tickets_available", models.PositiveIntegerField()),
                ("ticket_price", models.DecimalField(decimal_places=2, default=0, max_digits=10)),
                ("currency", models.CharField(default="NGN", max_length=3)),
                ("tags", models.JSONField(blank=True, default=list)),
                ("image_url", models.URLField(blank=True, max_length=500, null=True)),
                ("banner_url", models.URLField(blank=True, max_length=500, null=True)),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("draft", "Draft"),
                            ("published", "Published"),
                            ("ongoing", "Ongoing"),
                            ("completed", "Completed"),
                            ("cancelled", "Cancelled"),
                        ],
                        default="draft",
                        max_length=10,
                    ),
                ),
                ("is_featured", models.BooleanField(default=False)),
                ("default_reminder", models.CharField(choices=REMINDER_CHOICES, default="1_day", max_length=10)),
                ("attendee_count", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "creator",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="events",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["-created_at"], name="events_created_idx"),
                    models.Index(fields=["status", "starts_at"], name="events_status_start_idx"),
                    models.Index(fields=["creator"], name="events_creator_idx"),
                    models.Index(fields=["category"], name="events_category_idx"),
                    models.Index(fields=["city"], name="events_city_idx"),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("tickets_available__lte", models.F("capacity"))),
                        name="events_available_within_capacity",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(("ends_at__gt", models.F("starts_at"))),
                        name="events_ends_after_start",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="EventReminder",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "channel",
                    models.CharField(
                        choices=[("email", "Email"), ("sms", "SMS")],
                        default="email",
                        max_length=10,
                    ),
                ),
                ("hours_before", models.PositiveIntegerField()),
                ("sent", models.BooleanField(default=False)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "event",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reminders",
                        to="events.event",
                    ),
                ),
            ],
            options={
                "ordering": ["-hours_before"],
                "indexes": [models.Index(fields=["sent"], name="events_reminder_sent_idx")],
            },
        ),
    ]
