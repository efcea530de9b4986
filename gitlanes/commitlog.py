# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from typing import Callable

from gitlanes import commitsource
from gitlanes import settings
from gitlanes.graph import CommitHash, CommitRecord, Lane, computeLayout, maxColumns
from gitlanes.qt import *
from gitlanes.toolbox import Benchmark
from gitlanes.workqueue import WorkQueue

logger = logging.getLogger(__name__)

GetLogFunc = Callable[[str, int, int], list[CommitRecord]]


class CommitLogPager(QObject):
    """
    Accumulates pages of the commit log and keeps the graph layout in sync.

    Every new page is appended to the commit sequence as-is, then the layout
    is recomputed from scratch over the whole sequence. A lane opened near
    the end of a page may only be resolved by a commit in a later page, so
    the previous layout is never patched incrementally.
    """

    layoutChanged = Signal()
    loadFailed = Signal(str)
    loadingChanged = Signal(bool)

    commits: list[CommitRecord]
    layout: dict[CommitHash, Lane]
    maxColumns: int
    hasMore: bool
    isLoading: bool
    lastError: str

    def __init__(
            self,
            repositoryPath: str,
            getLog: GetLogFunc = commitsource.getLog,
            pageSize: int = 0,
            workQueue: WorkQueue | None = None,
            parent: QObject | None = None,
    ):
        super().__init__(parent)
        self.repositoryPath = repositoryPath
        self.getLog = getLog
        self.pageSize = pageSize or settings.prefs.pageSize
        if self.pageSize < 1:
            raise ValueError(f"page size must be at least 1, got {self.pageSize}")
        self.workQueue = workQueue or WorkQueue(self)
        self.isDead = False
        self.clear()

    def clear(self):
        self.commits = []
        self.layout = {}
        self.maxColumns = 1
        self.hasMore = True
        self.isLoading = False
        self.lastError = ""

    def setLoading(self, loading: bool):
        if self.isLoading != loading:
            self.isLoading = loading
            self.loadingChanged.emit(loading)

    # -------------------------------------------------------------------------
    # Loading

    def loadFirstPage(self):
        assert not self.isDead, "pager was torn down"
        self.cancel()
        self.clear()
        self._requestPage()

    def loadMore(self) -> bool:
        """
        Fetch the next page. Returns False if there's nothing to fetch,
        or if a fetch is already in progress.
        """
        if self.isDead or self.isLoading or not self.hasMore:
            return False
        self._requestPage()
        return True

    def ensureRowLoaded(self, row: int, margin: int = -1) -> bool:
        """ Load more commits if the consumer is about to scroll near the end of the list. """
        if margin < 0:
            margin = settings.prefs.loadMoreMargin
        if row >= len(self.commits) - margin:
            return self.loadMore()
        return False

    def _requestPage(self):
        path = self.repositoryPath
        limit = self.pageSize
        skip = len(self.commits)

        def work():
            return self.getLog(path, limit, skip)

        def then(page: list[CommitRecord]):
            self._onPageLoaded(skip, page)

        self.setLoading(True)
        self.workQueue.put(work, then, caption=f"Load commits {skip}-{skip + limit}", errorCallback=self._onPageFailed)

    def _onPageLoaded(self, skip: int, page: list[CommitRecord]):
        if skip != len(self.commits):
            # The sequence changed under our feet (e.g. reloaded); this page doesn't belong here.
            logger.warning(f"Discarding page at {skip}, expected {len(self.commits)}")
            self.setLoading(False)
            return

        self.lastError = ""
        self.hasMore = len(page) >= self.pageSize

        if page:
            self.commits.extend(page)
            self.recomputeLayout()

        self.setLoading(False)

        if page:
            self.layoutChanged.emit()

    def _onPageFailed(self, exc: BaseException):
        # Keep whatever we've loaded so far
        message = str(exc) or type(exc).__name__
        logger.warning(f"Couldn't load commits: {message}")
        self.lastError = message
        self.setLoading(False)
        self.loadFailed.emit(message)

    def recomputeLayout(self):
        with Benchmark(f"Layout {len(self.commits)} commits"):
            self.layout = computeLayout(self.commits)
            self.maxColumns = maxColumns(self.layout)

    # -------------------------------------------------------------------------
    # Cancellation

    def cancel(self):
        """ Abandon the fetch in progress, if any. Its result will be ignored. """
        self.workQueue.cancel()
        self.setLoading(False)

    def teardown(self):
        """ The consumer is going away. No more loads will be accepted. """
        self.cancel()
        self.isDead = True

    # -------------------------------------------------------------------------
    # Queries

    def lane(self, hash: CommitHash) -> Lane:
        return self.layout[hash]

    def row(self, i: int) -> tuple[CommitRecord, Lane]:
        commit = self.commits[i]
        return commit, self.layout[commit.hash]
