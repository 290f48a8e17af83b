from .base import *
from .base import _level
from pathlib import Path
from dotenv import load_dotenv

# Load .env.dev into process env for local development only.
load_dotenv(Path(BASE_DIR) / ".env.dev")

DEBUG = True
ALLOWED_HOSTS = []

LOGGING["loggers"]["placement"]["level"] = _level("PLACEMENT_LOG_LEVEL", "DEBUG")
