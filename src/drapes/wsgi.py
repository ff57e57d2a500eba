"""WSGI config for the Elegant Drapes storefront."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "drapes.settings.prod")

application = get_wsgi_application()
