"""Abstract base class for all land cover classifiers."""

from abc import ABC, abstractmethod
from typing import Dict, Any, Sequence
import json
from pathlib import Path

from landscape_classifier.cste import ClassifierConfig
from landscape_classifier.feature_vector import ClassifiedFeatureVector, FeatureVector
from landscape_classifier.io_utils import ClassificationImage
from landscape_classifier.landcover import LandcoverType
from landscape_classifier.logger import get_logger

log = get_logger("model_base")


class BaseLandCoverClassifier(ABC):
    """Abstract base class for land cover classifiers."""

    def __init__(self, num_classes: int, model_name: str):
        """
        Initialize base classifier.

        Args:
            num_classes: Number of land cover classes
            model_name: Name identifier for the model
        """
        self.num_classes = num_classes
        self.model_name = model_name
        self.model = None
        self.config: Dict[str, Any] = {}

    @property
    def is_trained(self) -> bool:
        """Whether a successful train() produced a model."""
        return self.model is not None

    @abstractmethod
    def train(self, samples: Sequence[ClassifiedFeatureVector]) -> None:
        """
        Train the classifier.

        Args:
            samples: Labelled feature vectors, at least one
        """
        pass

    @abstractmethod
    def predict(self, feature: FeatureVector) -> LandcoverType:
        """
        Classify a single pixel.

        Args:
            feature: Feature vector of the pixel

        Returns:
            Predicted land cover class
        """
        pass

    @abstractmethod
    def predict_grid(self, features, show_progress: bool = True) -> ClassificationImage:
        """
        Classify a 2-D grid of pixels into a color coded image.

        Args:
            features: Rectangular (H, W) grid of feature vectors
            show_progress: Display a progress bar while building features

        Returns:
            Classification image of width W and height H
        """
        pass

    @abstractmethod
    def save(self, save_dir: str) -> None:
        """
        Save model and configuration.

        Args:
            save_dir: Directory to save model artifacts
        """
        pass

    @abstractmethod
    def load(self, save_dir: str) -> None:
        """
        Load model and configuration.

        Args:
            save_dir: Directory containing model artifacts
        """
        pass

    def _write_hyperparameters(self, save_dir: str) -> None:
        """
        Write the hyper-parameters and training sample count beside the network file.

        ! Values come from self.config, so they describe the network that train() built
        """
        save_path = Path(save_dir)
        save_path.mkdir(parents=True, exist_ok=True)

        params_path = save_path / ClassifierConfig.CONFIG_FILENAME
        with open(params_path, 'w', encoding='utf-8') as f:
            json.dump(self.config, f, indent=2, sort_keys=True)

        log.info(f"Wrote {self.model_name} hyper-parameters to {params_path}")

    def _read_hyperparameters(self, save_dir: str) -> Dict[str, Any]:
        """
        Hyper-parameters stored by _write_hyperparameters.

        Raises:
            FileNotFoundError: If the directory holds no hyper-parameter file
        """
        params_path = Path(save_dir) / ClassifierConfig.CONFIG_FILENAME
        if not params_path.exists():
            raise FileNotFoundError(f"{self.model_name} hyper-parameters not found: {params_path}")

        with open(params_path, 'r', encoding='utf-8') as f:
            params = json.load(f)

        log.debug(f"Read {self.model_name} hyper-parameters {params.get('layer_sizes')} from {params_path}")
        return params
