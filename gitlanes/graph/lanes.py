# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Commit graph layout.

Turns a sequence of commits, where every commit appears before all of its
parents, into one Lane per commit: the column where the commit's bullet point
sits, and the connections to draw across the commit's row.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import Protocol

from gitlanes.graph.commitrecord import CommitHash
from gitlanes.graph.lanetable import LaneTable
from gitlanes.settings import DEVDEBUG

logger = logging.getLogger(__name__)


class ConnectionType(enum.Enum):
    STRAIGHT = "straight"
    "The commit's own lane continues down to its first parent"

    PASS = "pass"
    "An unrelated lane passes through this row untouched"

    MERGE_IN = "mergeIn"
    "The commit's lineage joins a lane that already awaits the same parent"

    BRANCH_OUT = "branchOut"
    "A new lane opens to track an additional parent of a merge commit"


@dataclasses.dataclass(frozen=True)
class Connection:
    fromColumn: int
    toColumn: int
    type: ConnectionType

    def __repr__(self):
        return f"{self.type.value}({self.fromColumn}→{self.toColumn})"


@dataclasses.dataclass(frozen=True)
class Lane:
    column: int
    connections: tuple[Connection, ...] = ()

    def outgoingConnections(self) -> tuple[Connection, ...]:
        """ Connections leaving the commit toward its parents (i.e. not pass-throughs). """
        return tuple(c for c in self.connections if c.type != ConnectionType.PASS)


class CommitLike(Protocol):
    hash: CommitHash
    parentHashes: Sequence[CommitHash]


def layLane(table: LaneTable, hash: CommitHash, parentHashes: Sequence[CommitHash]) -> Lane:
    """
    Lay out a single commit row, updating the lane table in place.

    The table must have been fed every commit above this one, in order.
    """

    connections = []

    # Resolve my column: either a child reserved a slot for me,
    # or nobody expects me and I'm the tip of a new branch.
    column = table.find(hash)
    if column < 0:
        column = table.allocate(hash)

    # Keep unrelated lanes flowing through my row
    for slot, _ in table.occupiedSlots():
        if slot != column:
            connections.append(Connection(slot, slot, ConnectionType.PASS))

    # Whoever was waiting for me is now satisfied
    table.release(column)

    for i, parent in enumerate(parentHashes):
        parentSlot = table.find(parent)

        if parentSlot >= 0:
            # Another path already converges on this parent
            connections.append(Connection(column, parentSlot, ConnectionType.MERGE_IN))
        elif i == 0:
            # First parent inherits my column
            table.occupy(column, parent)
            connections.append(Connection(column, column, ConnectionType.STRAIGHT))
        else:
            newSlot = table.allocate(parent)
            connections.append(Connection(column, newSlot, ConnectionType.BRANCH_OUT))

    table.trim()

    if DEVDEBUG:
        table.checkConsistency()

    return Lane(column, tuple(connections))


def computeLayout(commits: Iterable[CommitLike]) -> dict[CommitHash, Lane]:
    """
    Compute the lane of every commit in the sequence.

    Never raises on inconsistent input: a parent that never shows up keeps
    its lane open until the end of the sequence, and a commit delivered
    before one of its children is simply treated as the tip of a new branch.
    """

    table = LaneTable()
    layout = {}

    for commit in commits:
        layout[commit.hash] = layLane(table, commit.hash, commit.parentHashes)

    logger.debug(f"Laid out {len(layout)} commits, peak lane count: {table.peakSlotCount}, "
                 f"dangling: {len(table.lookup)}")
    return layout


def danglingHashes(commits: Iterable[CommitLike]) -> set[CommitHash]:
    """
    Return the parent hashes that are still awaited once the whole sequence
    has been laid out (e.g. history truncated by pagination or a shallow clone).
    """

    table = LaneTable()
    for commit in commits:
        layLane(table, commit.hash, commit.parentHashes)
    return table.awaitedHashes()


def maxColumns(layout: Mapping[CommitHash, Lane]) -> int:
    """
    Number of columns needed to draw the layout.
    Always at least 1, even for an empty layout.
    """

    maxColumn = 0
    for lane in layout.values():
        maxColumn = max(maxColumn, lane.column)
        for connection in lane.connections:
            maxColumn = max(maxColumn, connection.fromColumn, connection.toColumn)
    return maxColumn + 1
