"""WSGI config for the peer review project."""

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "peerreview.settings")

application = get_wsgi_application()
