# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import logging
import sys

from gitlanes.prefsfile import PrefsFile
from gitlanes.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL

logger = logging.getLogger(__name__)

TEST_MODE = "pytest" in sys.modules
"""
Unit testing mode (don't touch real user prefs, etc.).
Can be forced with command-line switch "--test-mode".
"""

DEVDEBUG = TEST_MODE
"""
Enable expensive assertions and debugging features.
Can be forced with command-line switch "--debug".
"""


class GraphPalette(enum.StrEnum):
    RAINBOW_BRIGHT = "rainbowBright"
    RAINBOW = "rainbow"
    PASTEL = "pastel"


class LoggingLevel(enum.IntEnum):
    BENCHMARK = BENCHMARK_LOGGING_LEVEL
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING


@dataclasses.dataclass
class Prefs(PrefsFile):
    _filename = "prefs.json"

    _category_log               : int                   = 0
    pageSize                    : int                   = 30
    loadMoreMargin              : int                   = 5
    allRefs                     : bool                  = True
    chronologicalOrder          : bool                  = True

    _category_graph             : int                   = 0
    laneWidth                   : int                   = 16
    graphPalette                : GraphPalette          = GraphPalette.RAINBOW_BRIGHT

    _category_advanced          : int                   = 0
    verbosity                   : LoggingLevel          = LoggingLevel.INFO

    def validate(self, key, value):
        if key in ("pageSize", "laneWidth") and value < 1:
            raise ValueError(f"must be at least 1, got {value}")
        if key == "loadMoreMargin" and value < 0:
            raise ValueError(f"must not be negative, got {value}")


# Initialize default prefs.
# The app should load the user's prefs with prefs.load().
prefs = Prefs()
