"""
Database reachability checks used by the readiness probe and at boot.

Django owns the connection pool itself (see ``DATABASES`` in settings);
this object only wraps one connection alias so callers can probe it and
release it without touching ``django.db.connections`` directly.
"""
from __future__ import annotations

import logging

from django.db import DatabaseError, connections

logger = logging.getLogger(__name__)


class Database:
    def __init__(self, alias: str = 'default'):
        self.alias = alias

    def ping(self) -> bool:
        try:
            with connections[self.alias].cursor() as c:
                c.execute('SELECT 1')
                row = c.fetchone()
        except DatabaseError as e:
            logger.warning('database %s not reachable: %s', self.alias, e)
            return False
        return bool(row and row[0] == 1)

    def ensure_ready(self) -> None:
        """Exit the process when the database cannot be reached at boot."""
        if not self.ping():
            logger.critical('fatal boot error: database %s unreachable', self.alias)
            raise SystemExit(1)
        logger.info('database %s connected', self.alias)
