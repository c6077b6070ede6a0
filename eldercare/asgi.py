"""
ASGI config for the eldercare project.

HTTP only; configure Django before importing anything that touches
models.
"""
import os

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "eldercare.settings")

from django.core.asgi import get_asgi_application  # noqa: E402

application = get_asgi_application()

from django.conf import settings  # noqa: E402

if settings.DB_CHECK_ON_BOOT:
    from care.services.database import Database  # noqa: E402
    Database().ensure_ready()
