import numpy as np
from typing import Sequence, Tuple
from tqdm import tqdm

from landscape_classifier.cste import ClassifierConfig
from landscape_classifier.feature_vector import ClassifiedFeatureVector, FeatureVector
from landscape_classifier.logger import get_logger


log = get_logger("data_utils")


def build_design_matrix(features: Sequence[FeatureVector]) -> np.ndarray:
    """
    Stack the classifier input rows of several feature vectors.

    Parameters:
        features: Feature vectors, one per row.

    Returns:
        np.ndarray: float32 array of shape (N, 5).
    """
    matrix = np.zeros((len(features), ClassifierConfig.FEATURES_PER_VECTOR), dtype=np.float32)
    for index, feature in enumerate(features):
        matrix[index] = feature.features()
    return matrix


def grid_shape(features) -> Tuple[int, int]:
    """
    Height and width of a rectangular 2-D grid of feature vectors.

    Raises:
        ValueError: If the grid is empty or ragged.
    """
    height = len(features)
    if height == 0:
        raise ValueError("Feature grid is empty.")
    width = len(features[0])
    if width == 0:
        raise ValueError("Feature grid has empty rows.")
    for y in range(height):
        if len(features[y]) != width:
            raise ValueError(
                f"Feature grid is not rectangular: row {y} has {len(features[y])} cells, expected {width}."
            )
    return height, width


def build_grid_design_matrix(features, show_progress: bool = True) -> Tuple[np.ndarray, int, int]:
    """
    Flatten a (H, W) grid of feature vectors row-major into a design matrix.

    ! Row y * W + x holds the features of cell (y, x), computed exactly
    ! like build_design_matrix does for a single vector

    Parameters:
        features: List of lists or 2-D object array of FeatureVector.
        show_progress: Display a tqdm progress bar over the grid rows.

    Returns:
        Tuple (matrix of shape (H*W, 5) float32, H, W).
    """
    height, width = grid_shape(features)
    matrix = np.zeros((height * width, ClassifierConfig.FEATURES_PER_VECTOR), dtype=np.float32)

    for y in tqdm(range(height), desc="Building features", disable=not show_progress):
        row = features[y]
        for x in range(width):
            matrix[y * width + x] = row[x].features()

    log.debug(f"Built design matrix {matrix.shape} for a {height}x{width} grid")
    return matrix, height, width


def labels_to_onehot(samples: Sequence[ClassifiedFeatureVector], num_classes: int) -> np.ndarray:
    """
    Convert the class labels of training samples into one-hot encoding.

    Parameters:
        samples: Labelled samples.
        num_classes (int): Total number of classes (n).

    Returns:
        np.ndarray: float32 array of shape (N, num_classes), a single 1 per row.
    """
    labels = np.array([int(sample.type) for sample in samples], dtype=np.int64)

    # Ensure labels are in the valid range
    if labels.size and (labels.min() < 0 or labels.max() >= num_classes):
        raise ValueError("Samples contain invalid class indices for the specified num_classes.")

    return np.eye(num_classes, dtype=np.float32)[labels]


def argmax_class(responses: np.ndarray):
    """
    Index of the strongest activation.

    ! Ties resolve to the lowest index (first maximum scanning left to right)

    Parameters:
        responses: Activations of shape (num_classes,) or (N, num_classes).

    Returns:
        Scalar index for 1-D input, array of N indices for 2-D input.
    """
    responses = np.asarray(responses)
    if responses.ndim == 1:
        return int(np.argmax(responses))
    return np.argmax(responses, axis=1)
