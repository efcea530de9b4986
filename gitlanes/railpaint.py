# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Turns a commit's Lane into draw instructions, and paints them with QPainter.
"""

from __future__ import annotations

import dataclasses
import enum
import logging

from gitlanes import colors
from gitlanes import settings
from gitlanes.graph import ConnectionType, Lane
from gitlanes.qt import *

logger = logging.getLogger(__name__)

LANE_THICKNESS = 2
DOT_RADIUS = 5
RAIL_PADDING = 4


class NodeShape(enum.Enum):
    CIRCLE = 0
    DIAMOND = 1


@dataclasses.dataclass(frozen=True)
class VerticalSegment:
    x: float
    y1: float
    y2: float
    colorColumn: int


@dataclasses.dataclass(frozen=True)
class CurveSegment:
    """ Cubic curve leaving (x1, y1) vertically and arriving at (x2, y2) vertically. """
    x1: float
    y1: float
    x2: float
    y2: float
    colorColumn: int

    def controlPoints(self) -> tuple[tuple[float, float], tuple[float, float]]:
        cy = self.y1 + (self.y2 - self.y1) * 0.5
        return (self.x1, cy), (self.x2, cy)


@dataclasses.dataclass(frozen=True)
class NodeMarker:
    x: float
    y: float
    radius: float
    shape: NodeShape
    colorColumn: int


DrawInstruction = VerticalSegment | CurveSegment | NodeMarker


def _laneWidth(laneWidth: int) -> int:
    return laneWidth if laneWidth > 0 else settings.prefs.laneWidth


def columnX(column: int, laneWidth: int = -1) -> float:
    laneWidth = _laneWidth(laneWidth)
    return column * laneWidth + laneWidth // 2


def railWidth(maxColumns: int, laneWidth: int = -1) -> int:
    return max(maxColumns, 1) * _laneWidth(laneWidth) + RAIL_PADDING


def railInstructions(lane: Lane, isMerge: bool, rowHeight: float, laneWidth: int = -1) -> list[DrawInstruction]:
    """
    Draw instructions for one row of the graph, in painting order.
    The commit's node marker always comes last so it sits on top of the lines.
    """

    laneWidth = _laneWidth(laneWidth)
    middle = rowHeight / 2
    instructions: list[DrawInstruction] = []

    for connection in lane.connections:
        fromX = columnX(connection.fromColumn, laneWidth)
        toX = columnX(connection.toColumn, laneWidth)

        match connection.type:
            case ConnectionType.STRAIGHT | ConnectionType.PASS:
                instructions.append(VerticalSegment(fromX, 0, rowHeight, connection.fromColumn))
            case ConnectionType.MERGE_IN:
                # Colored like the lineage that's merging in
                instructions.append(CurveSegment(fromX, middle, toX, rowHeight, connection.fromColumn))
            case ConnectionType.BRANCH_OUT:
                # Colored like the new lane
                instructions.append(CurveSegment(fromX, middle, toX, rowHeight, connection.toColumn))
            case _:  # pragma: no cover
                raise NotImplementedError(f"unsupported connection type {connection.type}")

    shape = NodeShape.DIAMOND if isMerge else NodeShape.CIRCLE
    instructions.append(NodeMarker(columnX(lane.column, laneWidth), middle, DOT_RADIUS, shape, lane.column))

    return instructions


def paintRail(
        painter: QPainter,
        rect: QRect,
        lane: Lane,
        isMerge: bool,
        highlight: bool = False,
        palette: list[QColor] | None = None,
        outlineColor: QColor | None = None,
        laneWidth: int = -1,
):
    """
    Paint one row of the graph within `rect`.

    `highlight` outlines the node (for HEAD or the selected commit).
    """

    if palette is None:
        palette = colors.palette()
    if outlineColor is None:
        outlineColor = colors.white

    painter.save()
    painter.setClipRect(rect)
    painter.translate(rect.topLeft())

    path = QPainterPath()

    def submitPath(column):
        pen = QPen(colors.laneColor(column, palette), LANE_THICKNESS,
                   Qt.PenStyle.SolidLine, Qt.PenCapStyle.SquareCap, Qt.PenJoinStyle.BevelJoin)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)
        path.clear()

    for instruction in railInstructions(lane, isMerge, rect.height(), laneWidth):
        match instruction:
            case VerticalSegment(x=x, y1=y1, y2=y2, colorColumn=column):
                path.moveTo(x, y1)
                path.lineTo(x, y2)
                submitPath(column)

            case CurveSegment(x1=x1, y1=y1, x2=x2, y2=y2, colorColumn=column):
                (c1x, c1y), (c2x, c2y) = instruction.controlPoints()
                path.moveTo(x1, y1)
                path.cubicTo(c1x, c1y, c2x, c2y, x2, y2)
                submitPath(column)

            case NodeMarker(x=x, y=y, radius=r, shape=shape, colorColumn=column):
                painter.setBrush(colors.laneColor(column, palette))
                if highlight:
                    painter.setPen(QPen(outlineColor, 2, Qt.PenStyle.SolidLine))
                else:
                    painter.setPen(Qt.PenStyle.NoPen)

                if shape == NodeShape.DIAMOND:
                    size = r * 1.5
                    diamond = QPolygonF([
                        QPointF(x, y - size),
                        QPointF(x + size, y),
                        QPointF(x, y + size),
                        QPointF(x - size, y),
                    ])
                    painter.drawPolygon(diamond)
                else:
                    painter.drawEllipse(QPointF(x, y), r, r)

            case _:  # pragma: no cover
                raise NotImplementedError(f"unsupported draw instruction {instruction}")

    painter.restore()
