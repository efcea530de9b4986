# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from gitlanes.graph.commitrecord import (
    CommitHash,
    CommitRecord,
)
from gitlanes.graph.lanetable import LaneTable
from gitlanes.graph.lanes import (
    Connection,
    ConnectionType,
    Lane,
    computeLayout,
    danglingHashes,
    layLane,
    maxColumns,
)
from gitlanes.graph.graphdiagram import GraphDiagram
