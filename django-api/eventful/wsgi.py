"""WSGI config for the Eventful API."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "eventful.settings")

application = get_wsgi_application()
