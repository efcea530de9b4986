# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import bisect
from collections.abc import Iterator

from gitlanes.graph.commitrecord import CommitHash


class LaneTable:
    """
    Scratch state for a single layout pass.

    Each slot is either empty (None) or holds the hash of a parent commit
    that some earlier row is waiting to encounter.
    """

    slots: list[CommitHash | None]
    lookup: dict[CommitHash, int]
    "Awaited hash -> slot holding it"
    freeSlots: list[int]
    "Sorted indices of the empty slots"
    peakSlotCount: int

    def __init__(self):
        self.slots = []
        self.lookup = {}
        self.freeSlots = []
        self.peakSlotCount = 0

    def __len__(self):
        return len(self.slots)

    def find(self, hash: CommitHash) -> int:
        """ Return the slot awaiting this hash, or -1 if nobody expects it. """
        return self.lookup.get(hash, -1)

    def allocate(self, hash: CommitHash) -> int:
        """ Put a hash in the leftmost empty slot (or a new slot on the right). """
        assert hash not in self.lookup, f"{hash} is already awaited in slot {self.lookup[hash]}"

        if self.freeSlots:
            slot = self.freeSlots.pop(0)
            assert self.slots[slot] is None
            self.slots[slot] = hash
        else:
            slot = len(self.slots)
            self.slots.append(hash)
            self.peakSlotCount = max(self.peakSlotCount, len(self.slots))

        self.lookup[hash] = slot
        return slot

    def occupy(self, slot: int, hash: CommitHash):
        """ Put a hash in a specific empty slot. """
        assert self.slots[slot] is None, f"slot {slot} isn't empty"
        assert hash not in self.lookup, f"{hash} is already awaited in slot {self.lookup[hash]}"

        i = bisect.bisect_left(self.freeSlots, slot)
        assert self.freeSlots[i] == slot
        del self.freeSlots[i]

        self.slots[slot] = hash
        self.lookup[hash] = slot

    def release(self, slot: int):
        hash = self.slots[slot]
        if hash is None:
            return
        del self.lookup[hash]
        self.slots[slot] = None
        bisect.insort(self.freeSlots, slot)

    def trim(self):
        """ Drop empty slots at the right. Interior gaps are kept for reuse. """
        while self.slots and self.slots[-1] is None:
            self.slots.pop()
            # The trailing slot is necessarily the largest free index
            lastFree = self.freeSlots.pop()
            assert lastFree == len(self.slots)

    def occupiedSlots(self) -> Iterator[tuple[int, CommitHash]]:
        for slot, hash in enumerate(self.slots):
            if hash is not None:
                yield slot, hash

    def awaitedHashes(self) -> set[CommitHash]:
        return set(self.lookup)

    def checkConsistency(self):
        """ Expensive sanity checks (DEVDEBUG only). """
        occupied = dict((hash, slot) for slot, hash in self.occupiedSlots())
        assert len(occupied) == sum(1 for _ in self.occupiedSlots()), "same hash in several slots"
        assert occupied == self.lookup, "lookup index out of sync with slots"
        assert self.freeSlots == [i for i, h in enumerate(self.slots) if h is None], "free list out of sync"
