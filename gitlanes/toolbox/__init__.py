# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Utilities that aren't specifically tied to commit graph layout.
"""

from .benchmark import Benchmark, BENCHMARK_LOGGING_LEVEL
from .qtutils import onAppThread
