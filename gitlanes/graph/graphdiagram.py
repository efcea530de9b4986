# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence

from gitlanes.graph.commitrecord import CommitHash, CommitRecord
from gitlanes.graph.lanes import ConnectionType, Lane, computeLayout

PADDING = 2
COMMIT_GLYPH = "*"
MERGE_GLYPH = "M"
SLANT_GLYPHS = "/\\_"


def padx(column):
    assert column >= 0
    return column * PADDING


class GraphDiagram:
    """
    Plain-text rendition of a commit graph layout, mostly for debugging and unit tests.

        M    c3
        |\\
        * |  c2
        | *  c1b
        |/
        *    c1
    """

    @staticmethod
    def parse(text: str) -> tuple[list[CommitRecord], dict[CommitHash, Lane]]:
        sequence, _ = GraphDiagram.parseDefinition(text)
        return sequence, computeLayout(sequence)

    @staticmethod
    def parseDefinition(text: str) -> tuple[list[CommitRecord], set[CommitHash]]:
        """
        Parse a one-liner graph definition into a commit sequence.

        Whitespace separates chains. A chain is a dash-separated run of commits
        (each commit's parent is the next one in the chain); the last commit of
        the chain may be followed by a colon and a comma-separated parent list.

        For example, "m:a,b a:z b:z z" defines merge commit m with parents
        a and b, which both descend from root commit z.
        """

        sequence = []
        seen = set()
        defined = set()
        heads = set()

        for line in re.split(r"\s+", text):
            line = line.strip()
            if not line:
                continue

            split = line.split(":")
            assert 1 <= len(split) <= 2, f"too many colons in {line}"

            chainStr = split[0]
            assert chainStr
            assert "," not in chainStr

            try:
                assert "-" not in split[1]
                rootParents = [p for p in split[1].split(",") if p]
            except IndexError:
                rootParents = []

            chain = chainStr.split("-")
            parents = [[c] for c in chain[1:]] + [rootParents]

            for commit, commitParents in zip(chain, parents):
                assert commit not in defined, f"Commit hash appears twice in sequence! {commit}"
                defined.add(commit)
                sequence.append(CommitRecord.mock(commit, *commitParents))
                if commit not in seen:
                    heads.add(CommitHash(commit))
                seen.update(commitParents)

        return sequence, heads

    @staticmethod
    def diagram(
            sequence: Sequence[CommitRecord],
            layout: Mapping[CommitHash, Lane] | None = None,
            row0: int = 0,
            maxRows: int = -1,
            labeler: Callable[[CommitRecord], str] | None = None,
            verbose: bool = False,
    ) -> str:
        if layout is None:
            layout = computeLayout(sequence)

        if labeler is None:
            def labeler(c: CommitRecord):
                return c.hash

        rows = sequence[row0:]
        if maxRows >= 0:
            rows = rows[:maxRows]

        diagram = GraphDiagram()
        for commit in rows:
            lane = layout[commit.hash]
            diagram.newRow(lane, commit.isMerge)
            diagram.addMarginText(labeler(commit))
            if verbose:
                diagram.addMarginText(f"[{lane.column}] {list(lane.connections)}")

        return diagram.bake()

    # -----------------------------------------------------------------

    def __init__(self):
        self.scanlines: list[list[str]] = []
        self.margins: list[list[str]] = []
        self.commitScanline = -1

    def reserve(self, x, y, fill=" "):
        assert len(fill) == 1
        for _ in range(len(self.scanlines), y + 1):
            self.scanlines.append([])
            self.margins.append([])
        scanline = self.scanlines[y]
        for _ in range(len(scanline), x + 1):
            scanline.append(fill)
        return scanline

    def plot(self, x, y, c):
        assert len(c) == 1
        scanline = self.reserve(x, y)
        scanline[x] = c

    def hfill(self, x1, y, x2, fill="_"):
        """ Fill blanks from x1 to x2 (inclusive) without overwriting other glyphs. """
        if x1 > x2:
            return
        scanline = self.reserve(x2, y)
        for i in range(x1, x2 + 1):
            if scanline[i] == " ":
                scanline[i] = fill

    def slant(self, fromColumn, toColumn, y):
        fx = padx(fromColumn)
        tx = padx(toColumn)
        if toColumn > fromColumn:
            self.plot(fx + 1, y, "\\")
            self.hfill(fx + 2, y, tx - 1)
        elif toColumn < fromColumn:
            self.plot(fx - 1, y, "/")
            self.hfill(tx + 1, y, fx - 2)
        else:
            self.plot(fx, y, "|")

    def addMarginText(self, text):
        assert self.commitScanline >= 0, "no row to annotate yet"
        self.margins[self.commitScanline].append(text)

    def newRow(self, lane: Lane, isMerge: bool):
        upper = len(self.scanlines)
        lower = upper + 1
        self.commitScanline = upper

        for connection in lane.connections:
            match connection.type:
                case ConnectionType.PASS:
                    x = padx(connection.fromColumn)
                    self.plot(x, upper, "|")
                    self.plot(x, lower, "|")
                case ConnectionType.STRAIGHT:
                    self.plot(padx(connection.fromColumn), lower, "|")
                case ConnectionType.MERGE_IN | ConnectionType.BRANCH_OUT:
                    self.slant(connection.fromColumn, connection.toColumn, lower)
                case _:  # pragma: no cover
                    raise NotImplementedError(f"unsupported connection type {connection.type}")

        self.plot(padx(lane.column), upper, MERGE_GLYPH if isMerge else COMMIT_GLYPH)

        # Vertical lines in the connector row are implied by the next row; only keep slants
        self.reserve(0, lower)
        if not any(c in SLANT_GLYPHS for c in self.scanlines[lower]):
            self.scanlines.pop()
            self.margins.pop()

    def bake(self):
        lines = ["".join(scanline).rstrip() for scanline in self.scanlines]
        width = max((len(line) for line in lines), default=0)

        text = []
        for line, margins in zip(lines, self.margins):
            if margins:
                line = line.ljust(width) + "  " + " ".join(margins)
            text.append(line.rstrip())
        return "\n".join(text)
