# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
from typing import NewType

CommitHash = NewType("CommitHash", str)
"""
Full hex hash of a commit.

Kept distinct from plain strings so that branch and tag names, which flow
through the same records, can't be passed where a commit identity is expected.
"""


@dataclasses.dataclass(frozen=True)
class CommitRecord:
    """
    A commit as retrieved from the commit source.

    Only `hash` and `parentHashes` matter to the layout engine.
    The rest is descriptive metadata for the commit list.
    """

    hash: CommitHash
    parentHashes: tuple[CommitHash, ...] = ()

    shortHash: str = ""
    subject: str = ""
    authorName: str = ""
    authorEmail: str = ""
    timestamp: int = 0
    "Author time, in seconds since the epoch"

    branchRefs: tuple[str, ...] = ()
    tagRefs: tuple[str, ...] = ()
    isHead: bool = False

    @property
    def isMerge(self) -> bool:
        return len(self.parentHashes) > 1

    @property
    def isRoot(self) -> bool:
        return not self.parentHashes

    @staticmethod
    def mock(hash: str, *parents: str) -> CommitRecord:
        """ Make a bare record with no metadata (for diagrams and unit tests). """
        return CommitRecord(
            hash=CommitHash(hash),
            parentHashes=tuple(CommitHash(p) for p in parents),
            shortHash=hash[:7])
