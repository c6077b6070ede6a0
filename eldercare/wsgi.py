"""
WSGI config for the eldercare project.

It exposes the WSGI callable as a module-level variable named
``application``.  When ``DB_CHECK_ON_BOOT`` is on the database is pinged
once before the application is handed to the server, and the process
exits non-zero if it cannot be reached.
"""
import os

from django.core.wsgi import get_wsgi_application

os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'eldercare.settings')

application = get_wsgi_application()

from django.conf import settings  # noqa: E402

if settings.DB_CHECK_ON_BOOT:
    from care.services.database import Database  # noqa: E402
    Database().ensure_ready()
