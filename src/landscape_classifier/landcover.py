"""
Land cover classes, satellite sensors and the class color palette.
"""

from enum import Enum, IntEnum
from typing import Optional, Tuple

import numpy as np

from landscape_classifier.cste import ClassInfo


class LandcoverType(IntEnum):
    """
    Closed set of classes a pixel can be assigned.

    ! The value is the output neuron index of the classifier, so the
    ! enumeration must not change between training and inference
    ! UNKNOWN is the default label for unparseable class names
    """
    UNKNOWN = 0
    WATER = 1
    FOREST = 2
    GRASS = 3
    AGRICULTURE = 4
    URBAN = 5
    ROCK = 6
    SNOW = 7

    @property
    def label(self) -> str:
        """Name used in training set files, e.g. 'Water'."""
        return self.name.title()


NUM_CLASSES: int = len(LandcoverType)


class SatelliteType(Enum):
    """Sensor that produced a band layer."""
    NONE = "None"
    LANDSAT8 = "Landsat8"
    SENTINEL2 = "Sentinel2"


def parse_landcover_type(text: str) -> Optional[LandcoverType]:
    """Case-insensitive lookup of a class name, None if it matches no class."""
    try:
        return LandcoverType[text.strip().upper()]
    except KeyError:
        return None


class LandCoverPalette:
    """Maps land cover classes to display colors."""

    @staticmethod
    def color_for(landcover_type: LandcoverType) -> Tuple[int, int, int, int]:
        """RGBA color of a class."""
        return ClassInfo.CLASS_COLORS[int(landcover_type)]

    @staticmethod
    def bgra_lookup_table() -> np.ndarray:
        """(NUM_CLASSES, 4) uint8 table of B, G, R, A rows indexed by class value."""
        table = np.zeros((NUM_CLASSES, 4), dtype=np.uint8)
        for landcover_type in LandcoverType:
            r, g, b, a = LandCoverPalette.color_for(landcover_type)
            table[int(landcover_type)] = (b, g, r, a)
        return table
