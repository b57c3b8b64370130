"""ASGI config for the Eventful API."""

import os

from django.core.asgi import get_asgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "eventful.settings")

application = get_asgi_application()
