import logging
import os

# Verbose logging by default in unit tests
logging.basicConfig(level=logging.DEBUG)
logging.captureWarnings(True)

# Paint into offscreen surfaces; never pop up windows
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Keep QT_API env var (used by our qt.py module) in sync with Qt binding used by pytest-qt
if os.environ.get("PYTEST_QT_API") and os.environ.get("QT_API"):
    # PYTEST_QT_API takes precedence over QT_API
    os.environ["QT_API"] = os.environ["PYTEST_QT_API"]
elif os.environ.get("QT_API"):
    os.environ["PYTEST_QT_API"] = os.environ["QT_API"]

from gitlanes.qt import *  # noqa: E402 - intentionally importing Qt at this specific point
