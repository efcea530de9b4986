# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

# GitLanes's preferred Qt binding is PyQt6, but you can use PySide6 instead
# via the QT_API environment variable. Values recognized by QT_API:
#       pyqt6
#       pyside6
#
# If you're running unit tests, use the PYTEST_QT_API environment variable instead.

import logging as _logging
import os as _os
import sys as _sys

_logger = _logging.getLogger(__name__)

_qtBindingOrder = ["pyqt6", "pyside6"]

QT6 = False
PYSIDE6 = False
PYQT6 = False

_qtBindingBootPref = _os.environ.get("QT_API", "").lower()

if _qtBindingBootPref:
    if _qtBindingBootPref not in _qtBindingOrder:
        # Don't touch default binding order if user passed in an unsupported binding name.
        _logger.warning(f"Unrecognized Qt binding name: '{_qtBindingBootPref}'")
    else:
        # Move preferred binding to front of list
        _qtBindingOrder.remove(_qtBindingBootPref)
        _qtBindingOrder.insert(0, _qtBindingBootPref)

_logger.debug(f"Qt binding order is: {_qtBindingOrder}")

QT_BINDING = ""
QT_BINDING_VERSION = ""

for _tentative in _qtBindingOrder:
    assert _tentative.islower()

    try:
        if _tentative == "pyside6":
            from PySide6.QtCore import *
            from PySide6.QtGui import *
            from PySide6 import __version__ as QT_BINDING_VERSION
            QT_BINDING = "PySide6"
            QT6 = PYSIDE6 = True

        elif _tentative == "pyqt6":
            from PyQt6.QtCore import *
            from PyQt6.QtGui import *
            QT_BINDING_VERSION = PYQT_VERSION_STR
            QT_BINDING = "PyQt6"
            QT6 = PYQT6 = True

        else:
            _logger.warning(f"Unsupported Qt binding {_tentative}")
            continue

        break

    except ImportError:
        continue

if not QT_BINDING:
    _sys.stderr.write("No Qt binding found. Please install either PyQt6 or PySide6.\n")
    _sys.exit(1)

# -----------------------------------------------------------------------------
# Patch some holes and incompatibilities in Qt bindings

# Match PyQt signal/slot names with PySide6
if PYQT6:
    Signal = pyqtSignal
    SignalInstance = pyqtBoundSignal
    Slot = pyqtSlot


def qTempDir():
    """ Temporary directory for this process (test-mode prefs live here). """
    return _os.path.join(QDir.tempPath(), f"gitlanes-{_os.getpid()}")
