from pathlib import Path
import os


def _level(env_name: str, default: str = "INFO") -> str:
    val = os.getenv(env_name, default).upper()
    return val if val in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"} else default


BASE_DIR = Path(__file__).resolve().parent.parent.parent

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-change-me")
DEBUG = False  # override in dev

ALLOWED_HOSTS = os.getenv("DJANGO_ALLOWED_HOSTS", "").split(",") if os.getenv("DJANGO_ALLOWED_HOSTS") else []

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "placement",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "siteplacement.urls"

WSGI_APPLICATION = "siteplacement.wsgi.application"

# Pas de modèle persistant : la base ne sert qu'aux applications contrib
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

# locales
LANGUAGE_CODE = "fr-fr"
TIME_ZONE = "Europe/Paris"
USE_I18N = True
USE_TZ = True
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# LOGS
# comments in English
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "ignorer_hote_non_autorise": {"()": "siteplacement.logging_filters.IgnorerHoteNonAutorise"},
    },
    "formatters": {
        "console": {
            "format": "%(asctime)s %(levelname)s %(name)s: %(message)s",
            "datefmt": "%Y-%m-%dT%H:%M:%S%z",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "console",
            "filters": ["ignorer_hote_non_autorise"],
        },
    },
    "root": {
        "handlers": ["console"],
        "level": _level("DJANGO_LOG_LEVEL", "INFO"),
    },
    "loggers": {
        "django.server": {
            "handlers": ["console"],
            "level": _level("DJANGO_SERVER_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "django.request": {
            "handlers": ["console"],
            "level": "ERROR",
            "propagate": False,
        },
        "django.security": {
            "handlers": ["console"],
            "level": "ERROR",
            "propagate": False,
        },
        # engine: per-attempt details at DEBUG, summaries at INFO
        "placement": {
            "handlers": ["console"],
            "level": _level("PLACEMENT_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

# --- Redis / Celery ---
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://localhost:6379/1")
CELERY_TASK_SERIALIZER = "json"
CELERY_ACCEPT_CONTENT = ["json"]
CELERY_RESULT_EXPIRES = 3600  # 1h
CELERY_TASK_TIME_LIMIT = 120  # 2 min (ajuste)
CELERY_TASK_SOFT_TIME_LIMIT = 110

# Cache sur Redis (dernier brouillon par jeton, pas de DB)
CACHES = {
    "default": {
        "BACKEND": "django_redis.cache.RedisCache",
        "LOCATION": os.getenv("REDIS_CACHE_URL", "redis://localhost:6379/2"),
        "OPTIONS": {"CLIENT_CLASS": "django_redis.client.DefaultClient"},
        "TIMEOUT": 3600,  # 1h
    }
}

# --- Moteur de placement ---
# clés : voir placement.parametres.ParametresHeuristiques
PLACEMENT_HEURISTIQUES = {
    "tentatives_max": int(os.getenv("PLACEMENT_TENTATIVES_MAX", "40")),
    "essais_max": int(os.getenv("PLACEMENT_ESSAIS_MAX", "200000")),
    "poids_rang": 1000,
    "bonus_paire_voisine": 60,
    "penalite_isolement": 250,
    "longueur_prefixe_paires": 6,
    "paliers_variation": 4,
}
