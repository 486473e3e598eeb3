"""
WSGI config for the weather widget.

It exposes the WSGI callable as a module-level variable named
``application``. `manage.py weather_serve` loads it through
``settings.WSGI_APPLICATION``.
"""

from __future__ import annotations

import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

application = get_wsgi_application()
