"""
Land cover classifier implementations.

Every classifier derives from BaseLandCoverClassifier and is selected
through ClassifierType.
"""

# ! TO ADD A NEW CLASSIFIER !
# 1. create a <name>_model.py file in this module deriving from BaseLandCoverClassifier
# 2. add a member to ClassifierType and map it in create_classifier
# 3. add the class name to the __all__ list below

from enum import Enum

from .base_model import BaseLandCoverClassifier
from .neural_network_model import NeuralNetworkClassifier, fix_activation_bounds


class ClassifierType(Enum):
    """Available classification algorithms."""
    NEURAL_NETWORK = "NeuralNetwork"

    def create_classifier(self) -> BaseLandCoverClassifier:
        """New, untrained classifier of this type."""
        if self is ClassifierType.NEURAL_NETWORK:
            return NeuralNetworkClassifier()
        raise ValueError(f"No classifier registered for {self}")


# Defines what gets exported when someone does from class_models import *
__all__ = [
    'BaseLandCoverClassifier',
    'ClassifierType',
    'NeuralNetworkClassifier',
    'fix_activation_bounds',
]
