# -----------------------------------------------------------------------------
# Copyright (C) 2024 Iliyas Jorio.
# This file is part of GitLanes, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

# Color scheme based on https://clrs.cc/

from gitlanes.qt import *

navy    = QColor(0x001F3F)
blue    = QColor(0x0074D9)
aqua    = QColor(0x7FDBFF)
teal    = QColor(0x39CCCC)
olive   = QColor(0x3D9970)
green   = QColor(0x2ECC40)
lime    = QColor(0x00EE66)
yellow  = QColor(0xFFBB00)
orange  = QColor(0xFF851B)
red     = QColor(0xFF4136)
fuchsia = QColor(0xF012BE)
purple  = QColor(0xB10DC9)
maroon  = QColor(0x85144B)
white   = QColor(0xFFFFFF)
gray    = QColor(0xAAAAAA)

rainbow = [
    navy, blue, aqua, teal, olive, green, lime, yellow, orange, red, maroon, fuchsia, purple
]

rainbowBright = [
    orange, yellow, lime, teal, blue, purple, fuchsia, red
]

pastel = [
    QColor(0x8FB8ED), QColor(0x9BD5A0), QColor(0xF6C28B), QColor(0xC5A3E0),
    QColor(0xF19CBB), QColor(0x86D4DA), QColor(0xB8E0A8), QColor(0xA7A8E8),
    QColor(0x8DD9C6), QColor(0xF2E08C),
]


def palette(name: str = "") -> list[QColor]:
    """ Look up a palette by name, falling back to the one in the prefs. """
    if not name:
        from gitlanes import settings
        name = settings.prefs.graphPalette
    return {
        "rainbowBright": rainbowBright,
        "rainbow": rainbow,
        "pastel": pastel,
    }[str(name)]


def laneColor(column: int, colors: list[QColor] | None = None) -> QColor:
    """
    Color of a lane. Purely positional: a branch may change colors when its
    column gets reassigned after more commits are loaded.
    """
    if colors is None:
        colors = palette()
    return colors[column % len(colors)]
