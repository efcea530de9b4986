from gitlanes.graph import CommitHash, LaneTable, layLane, ConnectionType


def h(s):
    return CommitHash(s)


def testAllocateAppendsWhenNoGaps():
    table = LaneTable()
    assert table.allocate(h("a")) == 0
    assert table.allocate(h("b")) == 1
    assert table.slots == ["a", "b"]
    assert table.find(h("b")) == 1
    assert table.find(h("zzz")) == -1
    table.checkConsistency()


def testAllocatePrefersLowestGap():
    table = LaneTable()
    for x in "abcd":
        table.allocate(h(x))
    table.release(2)
    table.release(0)
    assert table.freeSlots == [0, 2]

    assert table.allocate(h("e")) == 0
    assert table.allocate(h("f")) == 2
    assert table.allocate(h("g")) == 4
    assert table.slots == ["e", "b", "f", "d", "g"]
    table.checkConsistency()


def testOccupyTakesSlotOffFreeList():
    table = LaneTable()
    table.allocate(h("a"))
    table.allocate(h("b"))
    table.release(0)
    table.occupy(0, h("c"))
    assert table.slots == ["c", "b"]
    assert table.freeSlots == []
    assert table.find(h("c")) == 0
    assert table.find(h("a")) == -1
    table.checkConsistency()


def testReleaseEmptySlotIsNoOp():
    table = LaneTable()
    table.allocate(h("a"))
    table.release(0)
    table.release(0)
    assert table.freeSlots == [0]
    table.checkConsistency()


def testTrimOnlyReclaimsTrailingSlots():
    table = LaneTable()
    for x in "abcd":
        table.allocate(h(x))
    table.release(1)
    table.release(2)
    table.release(3)
    table.trim()
    assert table.slots == ["a"]
    assert table.freeSlots == []

    table.allocate(h("b"))
    table.allocate(h("c"))
    table.release(1)
    table.trim()
    assert table.slots == ["a", None, "c"]
    assert table.freeSlots == [1]
    table.checkConsistency()


def testPeakSlotCount():
    table = LaneTable()
    for x in "abc":
        table.allocate(h(x))
    for slot in range(3):
        table.release(slot)
    table.trim()
    assert len(table) == 0
    assert table.peakSlotCount == 3


def testLayLaneThreadsTableExplicitly():
    table = LaneTable()

    lane = layLane(table, h("m"), [h("a"), h("b")])
    assert lane.column == 0
    assert [c.type for c in lane.connections] == [ConnectionType.STRAIGHT, ConnectionType.BRANCH_OUT]
    assert table.slots == ["a", "b"]

    # Start over with a fresh table: no state is carried over between layouts
    other = LaneTable()
    lane = layLane(other, h("a"), [])
    assert lane.column == 0
    assert lane.connections == ()
    assert other.slots == []


def testDuplicateParentsDontBreakInvariants():
    table = LaneTable()
    lane = layLane(table, h("m"), [h("a"), h("a")])
    assert [(c.fromColumn, c.toColumn, c.type) for c in lane.connections] == [
        (0, 0, ConnectionType.STRAIGHT),
        (0, 0, ConnectionType.MERGE_IN),
    ]
    assert table.slots == ["a"]
    table.checkConsistency()
