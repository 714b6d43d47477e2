"""Multi-layer perceptron classifier for pixel-wise land cover classification."""

import re
import tempfile
from pathlib import Path
from typing import Sequence

import cv2
import numpy as np

from landscape_classifier.class_models.base_model import BaseLandCoverClassifier
from landscape_classifier.cste import ClassifierConfig
from landscape_classifier.data_utils import (
    argmax_class,
    build_design_matrix,
    build_grid_design_matrix,
    labels_to_onehot,
)
from landscape_classifier.errors import EmptyTrainingSetError, UntrainedModelError
from landscape_classifier.feature_vector import ClassifiedFeatureVector, FeatureVector
from landscape_classifier.io_utils import ClassificationImage
from landscape_classifier.landcover import NUM_CLASSES, LandcoverType
from landscape_classifier.logger import get_logger

log = get_logger("neural_network_model")

# <min_val>, <max_val>, <min_val1>, <max_val1> elements of a serialized ANN_MLP
_BOUND_PATTERN = re.compile(r"<(min_val1?|max_val1?)>([^<]*)</\1>")


def fix_activation_bounds(serialized: str) -> str:
    """
    Force the activation normalization bounds of a serialized ANN_MLP to [0, 1].

    OpenCV initializes these bounds for the symmetric sigmoid to values that
    break training with one-hot targets (older encoders write them as "0.95"
    and "0.98"). Every min_val/min_val1 becomes 0 and every max_val/max_val1
    becomes 1.

    Args:
        serialized: XML text written by ANN_MLP.save()

    Returns:
        The same text with corrected bounds
    """
    def _replace(match: re.Match) -> str:
        tag = match.group(1)
        value = "0" if tag.startswith("min") else "1"
        return f"<{tag}>{value}</{tag}>"

    return _BOUND_PATTERN.sub(_replace, serialized)


class NeuralNetworkClassifier(BaseLandCoverClassifier):
    """
    Neural network land cover classifier.

    Topology [5, 10, 5, NUM_CLASSES] with symmetric sigmoid activation,
    trained by backpropagation on one-hot class targets.
    The predicted class is the output neuron with the highest activation.
    """

    def __init__(self, num_classes: int = NUM_CLASSES):
        """
        Initialize the neural network classifier.

        Args:
            num_classes: Number of output neurons, one per LandcoverType
        """
        super().__init__(num_classes, 'NeuralNetwork')

        self.layer_sizes = [
            ClassifierConfig.FEATURES_PER_VECTOR,
            *ClassifierConfig.HIDDEN_LAYER_SIZES,
            num_classes,
        ]

        #! Store configuration
        self.config = {
            'num_classes': num_classes,
            'layer_sizes': self.layer_sizes,
            'activation_alpha': ClassifierConfig.ACTIVATION_ALPHA,
            'activation_beta': ClassifierConfig.ACTIVATION_BETA,
            'max_iterations': ClassifierConfig.MAX_ITERATIONS,
            'epsilon': ClassifierConfig.EPSILON,
            'learning_rate': ClassifierConfig.LEARNING_RATE,
            'momentum': ClassifierConfig.MOMENTUM,
        }

    def _create_network(self) -> cv2.ml.ANN_MLP:
        """Untrained network configured with the classifier hyper-parameters."""
        mlp = cv2.ml.ANN_MLP_create()
        mlp.setLayerSizes(np.array(self.layer_sizes, dtype=np.int32))
        mlp.setActivationFunction(
            cv2.ml.ANN_MLP_SIGMOID_SYM,
            ClassifierConfig.ACTIVATION_ALPHA,
            ClassifierConfig.ACTIVATION_BETA,
        )
        mlp.setTermCriteria((
            cv2.TERM_CRITERIA_MAX_ITER | cv2.TERM_CRITERIA_EPS,
            ClassifierConfig.MAX_ITERATIONS,
            ClassifierConfig.EPSILON,
        ))
        mlp.setTrainMethod(
            cv2.ml.ANN_MLP_BACKPROP,
            ClassifierConfig.LEARNING_RATE,
            ClassifierConfig.MOMENTUM,
        )
        return mlp

    @staticmethod
    def _activation_hard_fix(mlp: cv2.ml.ANN_MLP) -> None:
        """
        Rewrite the min/max activation bounds of an untrained network in place.

        ! The network is saved, its text corrected, then read back
        """
        with tempfile.TemporaryDirectory() as tmp_dir:
            tmp_file = Path(tmp_dir) / "ann_mlp.xml"
            mlp.save(str(tmp_file))

            config_content = tmp_file.read_text(encoding="utf-8")
            tmp_file.write_text(fix_activation_bounds(config_content), encoding="utf-8")

            fs = cv2.FileStorage(str(tmp_file), cv2.FILE_STORAGE_READ)
            try:
                mlp.read(fs.getFirstTopLevelNode())
            finally:
                fs.release()

    def train(self, samples: Sequence[ClassifiedFeatureVector]) -> None:
        """
        Train the network on labelled feature vectors.

        Args:
            samples: Labelled samples, at least one

        Raises:
            EmptyTrainingSetError: If samples is empty
        """
        samples = list(samples)
        if not samples:
            raise EmptyTrainingSetError("Cannot train a classifier without samples.")

        log.info(f"Training {self.model_name} {self.layer_sizes} on {len(samples)} samples")

        #! Design matrix (N, 5) and one-hot targets (N, num_classes)
        train_data = build_design_matrix([sample.feature_vector for sample in samples])
        train_classes = labels_to_onehot(samples, self.num_classes)

        mlp = self._create_network()
        data = cv2.ml.TrainData_create(train_data, cv2.ml.ROW_SAMPLE, train_classes)

        self._activation_hard_fix(mlp)

        if not mlp.train(data):
            raise RuntimeError(f"{self.model_name} training did not converge to a model.")
        self.model = mlp

        #! Training accuracy
        predictions = argmax_class(self._forward(train_data))
        labels = np.argmax(train_classes, axis=1)
        train_acc = float(np.mean(predictions == labels))
        log.info(f"Training accuracy: {train_acc:.4f}")

        self.config['n_samples'] = len(samples)

    def _forward(self, matrix: np.ndarray) -> np.ndarray:
        """Output activations (N, num_classes) of an (N, 5) design matrix."""
        if self.model is None:
            raise UntrainedModelError(f"{self.model_name} classifier is not trained.")
        _, responses = self.model.predict(matrix)
        return responses

    def layer_sizes_of_model(self) -> list:
        """Layer widths of the trained network, input first."""
        if self.model is None:
            raise UntrainedModelError(f"{self.model_name} classifier is not trained.")
        return [int(size) for size in self.model.getLayerSizes().flatten()]

    def predict(self, feature: FeatureVector) -> LandcoverType:
        """
        Classify a single pixel.

        Args:
            feature: Feature vector of the pixel

        Returns:
            Class of the strongest output neuron

        Raises:
            UntrainedModelError: If train() has not succeeded yet
        """
        sample_mat = build_design_matrix([feature])
        responses = self._forward(sample_mat)
        return LandcoverType(argmax_class(responses[0]))

    def predict_grid(self, features, show_progress: bool = True) -> ClassificationImage:
        """
        Classify every cell of a (H, W) grid into a color coded image.

        ! Each output pixel only depends on its own cell's features: all rows
        ! go through one batched forward pass, evaluated row by row

        Args:
            features: Rectangular (H, W) grid of feature vectors
            show_progress: Display a progress bar while building features

        Returns:
            ClassificationImage of width W and height H, BGRA, 96 DPI

        Raises:
            UntrainedModelError: If train() has not succeeded yet
            ValueError: If the grid is empty or not rectangular
        """
        if self.model is None:
            raise UntrainedModelError(f"{self.model_name} classifier is not trained.")

        sample_mat, height, width = build_grid_design_matrix(features, show_progress=show_progress)

        log.info(f"Predicting {height}x{width} grid...")
        responses = self._forward(sample_mat)
        classes = argmax_class(responses).reshape(height, width)

        return ClassificationImage.from_classes(classes)

    def save(self, save_dir: str) -> None:
        """
        Save network and configuration.

        Args:
            save_dir: Directory to save model artifacts
        """
        if self.model is None:
            raise UntrainedModelError(f"Cannot save an untrained {self.model_name} classifier.")

        save_path = Path(save_dir)
        save_path.mkdir(parents=True, exist_ok=True)

        #! Save network in OpenCV storage format
        model_path = save_path / ClassifierConfig.MODEL_FILENAME
        self.model.save(str(model_path))
        log.info(f"Saved model to {model_path}")

        #! Save hyper-parameters
        self._write_hyperparameters(save_dir)

    def load(self, save_dir: str) -> None:
        """
        Load network and configuration.

        Args:
            save_dir: Directory containing model artifacts

        Raises:
            FileNotFoundError: If the network file is missing
            ValueError: If the stored network does not match this classifier's class count
        """
        model_path = Path(save_dir) / ClassifierConfig.MODEL_FILENAME
        if not model_path.exists():
            raise FileNotFoundError(f"Model not found: {model_path}")

        #! Load hyper-parameters
        config = self._read_hyperparameters(save_dir)
        if config.get('num_classes') != self.num_classes:
            raise ValueError(
                f"Stored model has {config.get('num_classes')} classes, expected {self.num_classes}."
            )

        #! Load network
        self.model = cv2.ml.ANN_MLP_load(str(model_path))
        self.config = config
        log.info(f"Loaded model from {model_path}")
