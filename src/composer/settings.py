"""Global configuration and constants for the composer runtime."""

from __future__ import annotations

import os
from typing import Final

LOG_LEVEL: Final = os.environ.get("COMPOSER_LOG_LEVEL", "WARNING").upper()

# Placeholders rendered by the demo builders when a key is unset
MISSING_TEXT: Final = "<Missing text>"
DEFAULT_NAME: Final = "World"
DEFAULT_TITLE: Final = "No title"

APP_TITLE: Final = os.environ.get("COMPOSER_APP_TITLE", "Composer Demo Home Page")

# Listener failures kept for inspection per notifier
NOTIFIER_ERROR_CAPACITY: Final = int(os.environ.get("COMPOSER_NOTIFIER_ERRORS", "50"))
