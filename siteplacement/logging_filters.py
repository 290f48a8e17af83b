# siteplacement/logging_filters.py
from __future__ import annotations

import logging

from django.core.exceptions import DisallowedHost


class IgnorerHoteNonAutorise(logging.Filter):
    """Écarte les enregistrements portant une exception `DisallowedHost` (sondes, scanners)."""

    def filter(self, record: logging.LogRecord) -> bool:
        exc = record.exc_info
        return not (exc and isinstance(exc[1], DisallowedHost))
