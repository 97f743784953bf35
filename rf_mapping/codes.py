"""Stimulus color and eye codes.

Numeric values are a messaging convention shared with the Spike2
post-processing scripts, so they must not be renumbered.
"""
from __future__ import annotations

from enum import IntEnum
from typing import Tuple


class StimColor(IntEnum):
    """Color of a single stimulus element."""

    RED = 0
    BLUE = 1
    PURPLE = 2
    RAND_RED_BLUE = 3


class Eye(IntEnum):
    """Eye being mapped.  ``RIGHT`` sorts before ``LEFT``."""

    RIGHT = 0
    LEFT = 1

    @property
    def natural_color(self) -> StimColor:
        """Color passed by this eye's dichroic filter (right=red, left=blue)."""

        return StimColor.RED if self is Eye.RIGHT else StimColor.BLUE


class ColorCode(IntEnum):
    """Center/peripheral color combination for a trial."""

    CENTER_RED_PERIPH_RED = 0
    CENTER_RED_PERIPH_BLUE = 1
    CENTER_BLUE_PERIPH_RED = 2
    CENTER_BLUE_PERIPH_BLUE = 3
    CENTER_RED_PERIPH_PURPLE = 4
    CENTER_BLUE_PERIPH_PURPLE = 5
    CENTER_PURPLE_PERIPH_RED = 6
    CENTER_PURPLE_PERIPH_BLUE = 7
    CENTER_PURPLE_PERIPH_PURPLE = 8

    @property
    def center(self) -> StimColor:
        return _COMPONENTS[self][0]

    @property
    def periphery(self) -> StimColor:
        return _COMPONENTS[self][1]

    def is_center_red(self) -> bool:
        return self.center is StimColor.RED

    def is_center_blue(self) -> bool:
        return self.center is StimColor.BLUE

    def is_periph_red(self) -> bool:
        return self.periphery is StimColor.RED

    def is_periph_blue(self) -> bool:
        return self.periphery is StimColor.BLUE


_COMPONENTS = {
    ColorCode.CENTER_RED_PERIPH_RED: (StimColor.RED, StimColor.RED),
    ColorCode.CENTER_RED_PERIPH_BLUE: (StimColor.RED, StimColor.BLUE),
    ColorCode.CENTER_BLUE_PERIPH_RED: (StimColor.BLUE, StimColor.RED),
    ColorCode.CENTER_BLUE_PERIPH_BLUE: (StimColor.BLUE, StimColor.BLUE),
    ColorCode.CENTER_RED_PERIPH_PURPLE: (StimColor.RED, StimColor.PURPLE),
    ColorCode.CENTER_BLUE_PERIPH_PURPLE: (StimColor.BLUE, StimColor.PURPLE),
    ColorCode.CENTER_PURPLE_PERIPH_RED: (StimColor.PURPLE, StimColor.RED),
    ColorCode.CENTER_PURPLE_PERIPH_BLUE: (StimColor.PURPLE, StimColor.BLUE),
    ColorCode.CENTER_PURPLE_PERIPH_PURPLE: (StimColor.PURPLE, StimColor.PURPLE),
}

# Codes swept by the generator, in sweep order.
PLAIN_CODES: Tuple[ColorCode, ...] = (
    ColorCode.CENTER_RED_PERIPH_RED,
    ColorCode.CENTER_RED_PERIPH_BLUE,
    ColorCode.CENTER_BLUE_PERIPH_RED,
    ColorCode.CENTER_BLUE_PERIPH_BLUE,
)

_CODE_LABELS = {
    ColorCode.CENTER_RED_PERIPH_RED: "Red  Red",
    ColorCode.CENTER_RED_PERIPH_BLUE: "Red  Blue",
    ColorCode.CENTER_BLUE_PERIPH_RED: "Blue Red",
    ColorCode.CENTER_BLUE_PERIPH_BLUE: "Blue Blue",
    ColorCode.CENTER_RED_PERIPH_PURPLE: "Red  Prpl",
    ColorCode.CENTER_BLUE_PERIPH_PURPLE: "Blue Prpl",
    ColorCode.CENTER_PURPLE_PERIPH_RED: "Prpl Red",
    ColorCode.CENTER_PURPLE_PERIPH_BLUE: "Prpl Blue",
    ColorCode.CENTER_PURPLE_PERIPH_PURPLE: "Prpl Prpl",
}


def stim_code_to_string(code: object) -> str:
    """Return a short label such as ``"Red  Blue"`` or ``"Prpl Prpl"``."""

    try:
        return _CODE_LABELS[ColorCode(code)]
    except (ValueError, KeyError):
        return "unknown"


__all__ = [
    "StimColor",
    "Eye",
    "ColorCode",
    "PLAIN_CODES",
    "stim_code_to_string",
]
