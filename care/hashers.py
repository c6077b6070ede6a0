"""Password hashers used by the credential store."""
from django.contrib.auth.hashers import BCryptSHA256PasswordHasher


class CareBCryptHasher(BCryptSHA256PasswordHasher):
    """bcrypt (pre-hashed with SHA-256) at cost factor 10.

    The algorithm name is inherited so hashes stay verifiable by Django's
    stock ``BCryptSHA256PasswordHasher`` and vice versa.
    """

    rounds = 10
