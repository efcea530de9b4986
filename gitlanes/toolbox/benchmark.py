# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os
import time

logger = logging.getLogger(__name__)
BENCHMARK_LOGGING_LEVEL = 5

try:
    import psutil
except ModuleNotFoundError:
    logger.info("psutil isn't available. Benchmarks won't report memory usage.")
    psutil = None


def getRSS():
    if psutil:
        return psutil.Process(os.getpid()).memory_info().rss
    else:
        return 0


class Benchmark:
    """
    Context manager that logs how long a piece of code takes to run
    (at BENCHMARK_LOGGING_LEVEL, below DEBUG).

    Nested benchmarks are reported with their full path, e.g. "Load page/Layout".
    """

    nesting: list[str] = []

    def __init__(self, name: str):
        self.name = name
        self.startTime = 0.0
        self.startBytes = 0

    def __enter__(self):
        Benchmark.nesting.append(self.name)
        self.startBytes = getRSS()
        self.startTime = time.perf_counter()
        return self

    def __exit__(self, exc_type=None, exc_value=None, traceback=None):
        elapsedMs = 1000 * (time.perf_counter() - self.startTime)
        kb = (getRSS() - self.startBytes) // 1024

        if logger.isEnabledFor(BENCHMARK_LOGGING_LEVEL):
            description = "/".join(Benchmark.nesting)
            status = "" if exc_type is None else f" [{exc_type.__name__}]"
            logger.log(BENCHMARK_LOGGING_LEVEL, f"{elapsedMs:8.2f} ms {kb:6,d}K {description}{status}")

        Benchmark.nesting.pop()

