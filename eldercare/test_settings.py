"""Settings for the test suite.

Defaults ``DATABASE_URL`` to an in-memory SQLite database before the
production settings are imported, and swaps in a fast password hasher.
"""
import os

os.environ.setdefault("DATABASE_URL", "sqlite://:memory:")
os.environ.setdefault("DB_CHECK_ON_BOOT", "0")

from .settings import *  # noqa: E402,F401,F403

PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
    "care.hashers.CareBCryptHasher",
]

REST_FRAMEWORK = {
    **REST_FRAMEWORK,  # noqa: F405
    "DEFAULT_THROTTLE_CLASSES": (),
}

STORAGES = {
    "default": {"BACKEND": "django.core.files.storage.FileSystemStorage"},
    "staticfiles": {"BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage"},
}

ENFORCE_PATIENT_ACCESS = True
