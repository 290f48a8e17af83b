import logging
import sys

from django.core.exceptions import DisallowedHost

from siteplacement.logging_filters import IgnorerHoteNonAutorise


def _record(exc):
    try:
        raise exc
    except Exception:
        exc_info = sys.exc_info()
    return logging.LogRecord("django.security", logging.ERROR, __file__, 1, "msg", None, exc_info)


def test_hote_non_autorise_ecarte():
    assert IgnorerHoteNonAutorise().filter(_record(DisallowedHost("evil.example"))) is False


def test_autres_erreurs_conservees():
    f = IgnorerHoteNonAutorise()
    assert f.filter(_record(ValueError("x"))) is True
    assert f.filter(logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)) is True
