# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
from typing import Callable

from gitlanes import settings
from gitlanes.qt import *
from gitlanes.toolbox import onAppThread

logger = logging.getLogger(__name__)

ResultCallback = Callable[[object], None]
ErrorCallback = Callable[[BaseException], None]


class JobSignals(QObject):
    succeeded = Signal(object)
    failed = Signal(object)


class Job(QRunnable):
    """
    Runs a callable on a pool thread while holding the queue's mutex,
    then reports the outcome through `signals`.
    """

    def __init__(self, fn: Callable[[], object], mutex: QMutex):
        super().__init__()
        self.fn = fn
        self.mutex = mutex
        self.signals = JobSignals()

    def run(self):
        with QMutexLocker(self.mutex):
            try:
                result = self.fn()
            except Exception as exc:
                self.signals.failed.emit(exc)
            else:
                self.signals.succeeded.emit(result)


class WorkQueue:
    """
    Runs work away from the GUI thread, one piece at a time, and delivers
    its outcome back on the GUI thread.

    Each put() is stamped with a ticket. cancel(), or a newer put(), retires
    every earlier ticket; the outcome of retired work is logged and dropped.

    With `forceSerial` (the default in test mode), work runs synchronously
    inside put().
    """

    def __init__(self, parent: QObject | None = None, forceSerial: bool | None = None):
        self.threadpool = QThreadPool(parent)
        self.threadpool.setMaxThreadCount(1)
        self.mutex = QMutex()
        self.ticket = 0
        self.forceSerial = settings.TEST_MODE if forceSerial is None else forceSerial

    def isCurrent(self, ticket: int) -> bool:
        return ticket == self.ticket

    def cancel(self):
        """
        Retire pending and running work. Work that has already started runs
        to completion, but its callbacks won't be invoked.
        """
        self.ticket += 1
        self.threadpool.clear()

    def put(
            self,
            work: Callable[[], object],
            then: ResultCallback | None = None,
            caption: str = "Unnamed task",
            errorCallback: ErrorCallback | None = None,
    ):
        """
        Run `work` in the background, superseding anything still pending.

        `then` receives the return value of `work` on the GUI thread.
        `errorCallback` receives the exception if `work` raises; if omitted,
        the exception is logged.
        """

        self.cancel()
        ticket = self.ticket

        def deliver(result: object):
            if not self.isCurrent(ticket):
                logger.debug(f"Dropping result of cancelled work: {caption}")
            elif then is not None:
                then(result)

        def fail(exc: BaseException):
            if not self.isCurrent(ticket):
                logger.debug(f"Dropping error from cancelled work: {caption}: {exc}")
            elif errorCallback is not None:
                errorCallback(exc)
            else:
                logger.error(f"Operation failed: {caption}", exc_info=exc)

        if self.forceSerial:
            try:
                result = work()
            except Exception as exc:
                fail(exc)
            else:
                deliver(result)
            return

        def guardedWork():
            assert not onAppThread()
            if not self.isCurrent(ticket):
                return None  # Retired before a pool thread picked it up
            return work()

        job = Job(guardedWork, self.mutex)
        job.signals.succeeded.connect(deliver)
        job.signals.failed.connect(fail)

        logger.debug(f"{caption}...")
        self.threadpool.start(job)

    def waitForDone(self, msecs: int = -1) -> bool:
        return self.threadpool.waitForDone(msecs)
