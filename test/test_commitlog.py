import threading

import pytest

from gitlanes import settings
from gitlanes.commitlog import CommitLogPager
from gitlanes.commitsource import CommitSourceError
from gitlanes.graph import computeLayout, maxColumns
from gitlanes.workqueue import WorkQueue
from .util import *

HISTORY = " ".join([
    "m1:m2,f1",
    "f1:f2",
    "m2:m3",
    "f2:m4",
    "m3:m4",
    "m4:m5",
    "m5:m6",
    "m6:m7",
    "m7",
])


class FakeLog:
    """ Serves pages of a predetermined commit sequence, like getLog would. """

    def __init__(self, definition=HISTORY):
        self.sequence = parseSequence(definition)
        self.calls = []
        self.failOnCall = -1
        self.duringCall = None

    def __call__(self, path, limit, skip):
        callNo = len(self.calls)
        self.calls.append((path, limit, skip))
        if self.duringCall:
            self.duringCall()
        if callNo == self.failOnCall:
            raise CommitSourceError(path, "simulated failure")
        return self.sequence[skip: skip + limit]


class SignalSpy:
    def __init__(self, signal):
        self.emissions = []
        signal.connect(lambda *args: self.emissions.append(args))

    def __len__(self):
        return len(self.emissions)


@pytest.fixture
def fakeLog():
    return FakeLog()


@pytest.fixture
def pager(qtbot, fakeLog):
    pager = CommitLogPager("/fake/repo", getLog=fakeLog, pageSize=3)
    yield pager
    pager.teardown()


def testDefaultPageSizeComesFromPrefs(qtbot, fakeLog):
    pager = CommitLogPager("/fake/repo", getLog=fakeLog)
    assert pager.pageSize == 30
    pager.loadFirstPage()
    assert fakeLog.calls == [("/fake/repo", 30, 0)]
    assert len(pager.commits) == 9
    assert not pager.hasMore


def testFirstPage(pager, fakeLog):
    layoutSpy = SignalSpy(pager.layoutChanged)
    loadingSpy = SignalSpy(pager.loadingChanged)

    pager.loadFirstPage()

    assert fakeLog.calls == [("/fake/repo", 3, 0)]
    assert [c.hash for c in pager.commits] == ["m1", "f1", "m2"]
    assert pager.hasMore
    assert not pager.isLoading
    assert len(layoutSpy) == 1
    assert loadingSpy.emissions == [(True,), (False,)]

    assert pager.layout == computeLayout(pager.commits)
    assert pager.maxColumns == 2
    commit, lane = pager.row(1)
    assert commit.hash == "f1"
    assert lane.column == 1
    assert pager.lane("m1").column == 0


def testLoadMoreRecomputesWholeLayout(pager, fakeLog):
    pager.loadFirstPage()
    assert pager.loadMore()
    assert fakeLog.calls[-1] == ("/fake/repo", 3, 3)
    assert len(pager.commits) == 6

    # Same layout as if everything had been fetched at once
    assert pager.layout == computeLayout(fakeLog.sequence[:6])

    assert pager.loadMore()
    assert len(pager.commits) == 9
    assert pager.layout == computeLayout(fakeLog.sequence)
    assert pager.maxColumns == maxColumns(computeLayout(fakeLog.sequence))
    # A full page came back, so we don't know yet that we've reached the end
    assert pager.hasMore


def testEmptyPageEndsTheLog(pager, fakeLog):
    layoutSpy = SignalSpy(pager.layoutChanged)

    pager.loadFirstPage()
    pager.loadMore()
    pager.loadMore()
    assert len(layoutSpy) == 3

    layoutBefore = pager.layout
    assert pager.loadMore()
    assert fakeLog.calls[-1] == ("/fake/repo", 3, 9)
    assert not pager.hasMore
    assert pager.layout is layoutBefore
    assert len(layoutSpy) == 3

    # Nothing left to fetch
    assert not pager.loadMore()
    assert len(fakeLog.calls) == 4


def testShortPageEndsTheLog(qtbot, fakeLog):
    pager = CommitLogPager("/fake/repo", getLog=fakeLog, pageSize=4)
    pager.loadFirstPage()
    pager.loadMore()
    assert pager.hasMore
    pager.loadMore()
    assert len(pager.commits) == 9
    assert not pager.hasMore
    assert not pager.loadMore()


def testLaneOpenedOnFirstPageResolvesLater(pager, fakeLog):
    pager.loadFirstPage()
    # f1 is waiting for f2, which hasn't been fetched yet
    assert pager.maxColumns == 2
    f1 = pager.lane("f1")
    assert f1.outgoingConnections()

    pager.loadMore()
    f2 = pager.lane("f2")
    assert f2.column == f1.column


def testFailureKeepsLoadedCommits(pager, fakeLog):
    failSpy = SignalSpy(pager.loadFailed)
    layoutSpy = SignalSpy(pager.layoutChanged)

    pager.loadFirstPage()
    commitsBefore = list(pager.commits)
    layoutBefore = dict(pager.layout)

    fakeLog.failOnCall = 1
    assert pager.loadMore()

    assert len(failSpy) == 1
    assert "simulated failure" in failSpy.emissions[0][0]
    assert "simulated failure" in pager.lastError
    assert len(layoutSpy) == 1
    assert pager.commits == commitsBefore
    assert pager.layout == layoutBefore
    assert not pager.isLoading
    assert pager.hasMore

    # Retrying picks up where we left off
    assert pager.loadMore()
    assert fakeLog.calls[-1] == ("/fake/repo", 3, 3)
    assert len(pager.commits) == 6
    assert pager.lastError == ""


def testFailureOnFirstPage(pager, fakeLog):
    failSpy = SignalSpy(pager.loadFailed)
    fakeLog.failOnCall = 0
    pager.loadFirstPage()
    assert len(failSpy) == 1
    assert pager.commits == []
    assert pager.layout == {}
    assert pager.maxColumns == 1


def testCancelDuringFetchDropsResult(pager, fakeLog):
    layoutSpy = SignalSpy(pager.layoutChanged)
    pager.loadFirstPage()

    fakeLog.duringCall = pager.cancel
    assert pager.loadMore()
    assert len(fakeLog.calls) == 2
    assert len(pager.commits) == 3
    assert len(layoutSpy) == 1
    assert not pager.isLoading

    # Not torn down: can still load
    fakeLog.duringCall = None
    assert pager.loadMore()
    assert len(pager.commits) == 6


def testTeardownDuringFetchDropsResult(pager, fakeLog):
    layoutSpy = SignalSpy(pager.layoutChanged)
    fakeLog.duringCall = pager.teardown
    pager.loadFirstPage()

    assert pager.commits == []
    assert len(layoutSpy) == 0
    assert pager.isDead
    assert not pager.loadMore()
    assert len(fakeLog.calls) == 1


def testLoadFirstPageStartsOver(pager, fakeLog):
    pager.loadFirstPage()
    pager.loadMore()
    assert len(pager.commits) == 6

    pager.loadFirstPage()
    assert fakeLog.calls[-1] == ("/fake/repo", 3, 0)
    assert len(pager.commits) == 3


def testStalePageIsDiscarded(pager, fakeLog):
    pager.loadFirstPage()
    pager._onPageLoaded(7, fakeLog.sequence[7:])
    assert len(pager.commits) == 3


def testEnsureRowLoaded(pager, fakeLog):
    pager.loadFirstPage()

    assert not pager.ensureRowLoaded(0, margin=1)
    assert len(fakeLog.calls) == 1

    assert pager.ensureRowLoaded(2, margin=1)
    assert len(pager.commits) == 6

    # Default margin comes from the prefs (5 rows)
    assert pager.ensureRowLoaded(1)
    assert len(pager.commits) == 9


def testPagerOnRealRepository(qtbot, tempRepoDir):
    rb = RepoBuilder(tempRepoDir)
    rb.commit("root")
    rb.commit("a1", "root")
    rb.commit("b1", "root", branch="topic")
    rb.commit("a2", "a1")
    rb.commit("merge", "a2", "b1", branch="main")

    pager = CommitLogPager(tempRepoDir, pageSize=2)
    pager.loadFirstPage()
    while pager.loadMore():
        pass
    pager.teardown()

    assert [rb.nameOf(c.hash) for c in pager.commits][0] == "merge"
    assert len(pager.commits) == 5
    assert not pager.hasMore
    assert pager.maxColumns == 2
    assert pager.lane(rb.hexOf("root")).connections == ()


def testPagerWithBackgroundThread(qtbot, fakeLog):
    workQueue = WorkQueue(forceSerial=False)
    pager = CommitLogPager("/fake/repo", getLog=fakeLog, pageSize=3, workQueue=workQueue)

    with qtbot.waitSignal(pager.layoutChanged, timeout=5000):
        pager.loadFirstPage()
    assert len(pager.commits) == 3

    with qtbot.waitSignal(pager.layoutChanged, timeout=5000):
        assert pager.loadMore()
    assert len(pager.commits) == 6
    assert pager.layout == computeLayout(fakeLog.sequence[:6])

    pager.teardown()
    workQueue.waitForDone()


def testPageSizeMustBePositive(qtbot, fakeLog):
    with pytest.raises(ValueError):
        CommitLogPager("/fake/repo", getLog=fakeLog, pageSize=-1)

    settings.prefs.pageSize = 0
    with pytest.raises(ValueError):
        CommitLogPager("/fake/repo", getLog=fakeLog)


def makeBlockedPager(fakeLog):
    """ Pager whose fetches run on a pool thread and block until the returned event is set. """
    gate = threading.Event()
    fakeLog.duringCall = lambda: gate.wait(5)
    workQueue = WorkQueue(forceSerial=False)
    pager = CommitLogPager("/fake/repo", getLog=fakeLog, pageSize=3, workQueue=workQueue)
    return pager, workQueue, gate


def testTeardownDuringBackgroundFetch(qtbot, fakeLog):
    pager, workQueue, gate = makeBlockedPager(fakeLog)
    layoutSpy = SignalSpy(pager.layoutChanged)

    pager.loadFirstPage()
    qtbot.waitUntil(lambda: len(fakeLog.calls) == 1)
    pager.teardown()
    gate.set()
    workQueue.waitForDone()
    qtbot.wait(50)  # Flush any completion queued for the GUI thread

    assert pager.commits == []
    assert pager.layout == {}
    assert len(layoutSpy) == 0
    assert not pager.isLoading


def testCancelFailingBackgroundFetch(qtbot, fakeLog):
    pager, workQueue, gate = makeBlockedPager(fakeLog)
    failSpy = SignalSpy(pager.loadFailed)
    fakeLog.failOnCall = 0

    pager.loadFirstPage()
    qtbot.waitUntil(lambda: len(fakeLog.calls) == 1)
    pager.cancel()
    gate.set()
    workQueue.waitForDone()
    qtbot.wait(50)

    assert len(failSpy) == 0
    assert pager.lastError == ""
    assert pager.commits == []

    # The pager wasn't torn down, so it can start over
    fakeLog.duringCall = None
    with qtbot.waitSignal(pager.layoutChanged, timeout=5000):
        pager.loadFirstPage()
    assert len(pager.commits) == 3

    pager.teardown()
    workQueue.waitForDone()
