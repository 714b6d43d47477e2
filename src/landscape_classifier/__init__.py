"""
Land cover classification of satellite rasters from per-pixel features.
"""

from .class_models import ClassifierType, NeuralNetworkClassifier
from .errors import (
    EmptyTrainingSetError,
    FormatError,
    LandCoverError,
    UnknownLabelWarning,
    UntrainedModelError,
)
from .feature_vector import RGB, ClassifiedFeatureVector, FeatureVector, LayerDescriptor, luminance
from .io_utils import ClassificationImage
from .landcover import LandCoverPalette, LandcoverType, SatelliteType
from .training_set import TrainingSet, export_training_set, find_missing_layers, import_training_set

__version__ = "0.1.0"

__all__ = [
    'ClassificationImage',
    'ClassifiedFeatureVector',
    'ClassifierType',
    'EmptyTrainingSetError',
    'FeatureVector',
    'FormatError',
    'LandCoverError',
    'LandCoverPalette',
    'LandcoverType',
    'LayerDescriptor',
    'NeuralNetworkClassifier',
    'RGB',
    'SatelliteType',
    'TrainingSet',
    'UnknownLabelWarning',
    'UntrainedModelError',
    'export_training_set',
    'find_missing_layers',
    'import_training_set',
    'luminance',
]
