"""Root conftest — shared test configuration."""

import os

# Runs stream without real pauses unless a test injects its own sleep
os.environ.setdefault("STEP_DELAY_MS", "0")
os.environ.setdefault("LOG_FORMAT", "text")
