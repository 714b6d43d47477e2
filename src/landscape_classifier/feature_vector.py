"""
Per-pixel feature vectors, labelled training samples and band layer metadata.
"""

from dataclasses import dataclass, field
from pathlib import PureWindowsPath
from typing import NamedTuple, Tuple

import numpy as np

from landscape_classifier.cste import ClassifierConfig
from landscape_classifier.landcover import LandcoverType, SatelliteType

UINT16_MAX: int = 65535

# Rec. 709 luma weights
LUMINANCE_WEIGHTS = np.array([0.2126, 0.7152, 0.0722], dtype=np.float32)


class RGB(NamedTuple):
    """8-bit color triple."""
    r: int = 0
    g: int = 0
    b: int = 0


def luminance(color: RGB) -> np.float32:
    """
    Perceptual luminance of a color in [0, 1].

    ! Evaluated in float32 so that the same color always yields
    ! the same bits, whichever code path builds the feature row
    """
    channels = np.asarray(color, dtype=np.float32) / np.float32(255.0)
    return np.float32(np.dot(channels, LUMINANCE_WEIGHTS))


@dataclass(frozen=True)
class FeatureVector:
    """
    Features of one pixel.

    Only altitude, the two luminances, aspect and slope feed the classifier.
    band_intensities holds the raw uint16 band samples and is only used by
    the training set file format.
    """
    altitude: float = 0.0
    color: RGB = RGB()
    average_neighbourhood_color: RGB = RGB()
    aspect: float = 0.0
    slope: float = 0.0
    band_intensities: Tuple[int, ...] = field(default_factory=tuple)

    def __post_init__(self):
        intensities = tuple(int(i) for i in self.band_intensities)
        for intensity in intensities:
            if not 0 <= intensity <= UINT16_MAX:
                raise ValueError(f"Band intensity out of uint16 range: {intensity}")
        object.__setattr__(self, "band_intensities", intensities)
        object.__setattr__(self, "color", RGB(*self.color))
        object.__setattr__(
            self, "average_neighbourhood_color", RGB(*self.average_neighbourhood_color)
        )

    def features(self) -> np.ndarray:
        """
        Classifier input row, shape (5,), float32.

        Order: altitude, luminance(color), luminance(neighbourhood color),
        aspect, slope.
        """
        row = np.empty(ClassifierConfig.FEATURES_PER_VECTOR, dtype=np.float32)
        row[0] = self.altitude
        row[1] = luminance(self.color)
        row[2] = luminance(self.average_neighbourhood_color)
        row[3] = self.aspect
        row[4] = self.slope
        return row


@dataclass(frozen=True)
class ClassifiedFeatureVector:
    """A feature vector labelled with its ground truth class."""
    type: LandcoverType
    feature_vector: FeatureVector


@dataclass(frozen=True)
class LayerDescriptor:
    """Provenance of a band layer that contributes features."""
    path: str
    contrast_enhanced: bool = False
    satellite_type: SatelliteType = SatelliteType.NONE
    is_red: bool = False
    is_green: bool = False
    is_blue: bool = False
    min_cut_percentage: float = 0.0
    max_cut_percentage: float = 100.0

    @property
    def name(self) -> str:
        """Layer name, the file name of its path without extension."""
        # PureWindowsPath splits on both separators
        return PureWindowsPath(self.path).stem
