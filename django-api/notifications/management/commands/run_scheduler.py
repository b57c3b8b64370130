"""Run the notification scheduler loop.

    python manage.py run_scheduler            # every SCHEDULER_INTERVAL_SECONDS
    python manage.py run_scheduler --once     # a single pass, for cron
"""

import logging
import time

from django.core.management.base import BaseCommand

from eventful.conf import get_setting
from notifications.services import build_scheduler

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Deliver due notifications, fire creator reminders and advance event statuses."

    def add_arguments(self, parser):
        parser.add_argument("--once", action="store_true", help="Run a single pass and exit.")
        parser.add_argument(
            "--interval",
            type=int,
            default=None,
            help="Seconds between passes (defaults to SCHEDULER_INTERVAL_SECONDS).",
        )

    def handle(self, *args, **options):
        scheduler = build_scheduler()
        if options["once"]:
            run = scheduler.run_once()
            self.stdout.write(
                f"sent={run.sent} failed={run.failed} "
                f"creator_reminders={run.creator_reminders} lifecycle_changes={run.lifecycle_changes}"
            )
            return

        interval = options["interval"] or get_setting("SCHEDULER_INTERVAL_SECONDS")
        logger.info("Scheduler started, running every %ss", interval)
        try:
            while True:
                try:
                    scheduler.run_once()
                except Exception:
                    logger.exception("Scheduler pass failed")
                time.sleep(interval)
        except KeyboardInterrupt:
            logger.info("Scheduler stopped")
