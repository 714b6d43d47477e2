"""Pytest configuration and shared fixtures."""

from typing import List

import numpy as np
import pytest

from landscape_classifier.class_models import NeuralNetworkClassifier
from landscape_classifier.feature_vector import (
    RGB,
    ClassifiedFeatureVector,
    FeatureVector,
    LayerDescriptor,
)
from landscape_classifier.landcover import LandcoverType, SatelliteType


WATER_FEATURE = FeatureVector(
    altitude=120.0, color=RGB(20, 40, 140), average_neighbourhood_color=RGB(25, 45, 130),
    aspect=10.0, slope=1.0,
)
FOREST_FEATURE = FeatureVector(
    altitude=850.0, color=RGB(30, 110, 35), average_neighbourhood_color=RGB(35, 100, 40),
    aspect=200.0, slope=25.0,
)


def jittered(feature: FeatureVector, rng: np.random.Generator) -> FeatureVector:
    """Copy of a feature vector with small noise on the scalar features."""
    return FeatureVector(
        altitude=feature.altitude + float(rng.normal(0.0, 5.0)),
        color=feature.color,
        average_neighbourhood_color=feature.average_neighbourhood_color,
        aspect=feature.aspect + float(rng.normal(0.0, 2.0)),
        slope=feature.slope + float(rng.normal(0.0, 0.5)),
    )


@pytest.fixture(scope="session")
def water_forest_samples() -> List[ClassifiedFeatureVector]:
    """Two well separated classes, 20 samples each, interleaved."""
    rng = np.random.default_rng(42)
    samples = []
    for _ in range(20):
        samples.append(ClassifiedFeatureVector(LandcoverType.WATER, jittered(WATER_FEATURE, rng)))
        samples.append(ClassifiedFeatureVector(LandcoverType.FOREST, jittered(FOREST_FEATURE, rng)))
    return samples


@pytest.fixture(scope="session")
def trained_classifier(water_forest_samples) -> NeuralNetworkClassifier:
    classifier = NeuralNetworkClassifier()
    classifier.train(water_forest_samples)
    return classifier


@pytest.fixture
def layers() -> List[LayerDescriptor]:
    return [
        LayerDescriptor(
            path="/data/scene/LC08_B4.TIF", contrast_enhanced=True,
            satellite_type=SatelliteType.LANDSAT8, is_red=True,
            min_cut_percentage=2.5, max_cut_percentage=97.5,
        ),
        LayerDescriptor(
            path="/data/scene/LC08_B2.TIF", contrast_enhanced=False,
            satellite_type=SatelliteType.LANDSAT8, is_blue=True,
            min_cut_percentage=0.0, max_cut_percentage=100.0,
        ),
        LayerDescriptor(
            path=r"C:\scenes\S2_B3.jp2", contrast_enhanced=True,
            satellite_type=SatelliteType.SENTINEL2, is_green=True,
            min_cut_percentage=1.0, max_cut_percentage=99.0,
        ),
    ]


@pytest.fixture
def labelled_intensities() -> List[ClassifiedFeatureVector]:
    return [
        ClassifiedFeatureVector(LandcoverType.WATER, FeatureVector(band_intensities=(120, 4300, 0))),
        ClassifiedFeatureVector(LandcoverType.FOREST, FeatureVector(band_intensities=(8000, 650, 65535))),
        ClassifiedFeatureVector(LandcoverType.WATER, FeatureVector(band_intensities=(130, 4100, 12))),
        ClassifiedFeatureVector(LandcoverType.URBAN, FeatureVector(band_intensities=(20000, 21000, 19000))),
    ]
