"""
Constants and configuration for the land cover classification engine.
"""

from typing import Dict, Tuple

# ============================================================================
# PATH CONFIGURATION
# ============================================================================

class GeneralPath:
    """General project paths."""
    LOG_PATH: str = r".logs/"
    MODEL_DIR: str = r"data/models/"

# ============================================================================
# CLASSIFIER PARAMETERS
# ============================================================================

class ClassifierConfig:
    """Hyper-parameters of the neural network land cover classifier."""

    # Altitude, luminance, neighbourhood luminance, aspect, slope
    FEATURES_PER_VECTOR: int = 5
    HIDDEN_LAYER_SIZES: Tuple[int, ...] = (10, 5)

    # Symmetric sigmoid f(x) = beta * (1 - exp(-alpha x)) / (1 + exp(-alpha x))
    ACTIVATION_ALPHA: float = 1.0
    ACTIVATION_BETA: float = 1.0

    # Stop after MAX_ITERATIONS or when the error changes less than EPSILON
    MAX_ITERATIONS: int = 50
    EPSILON: float = 1e-6

    # Backpropagation
    LEARNING_RATE: float = 0.1
    MOMENTUM: float = 0.1

    MODEL_FILENAME: str = "neural_network.xml"
    CONFIG_FILENAME: str = "config.json"

class ImageConfig:
    """Classification image layout."""
    DPI: float = 96.0
    BYTES_PER_PIXEL: int = 4  # B, G, R, A

# ============================================================================
# CLASS DEFINITIONS
# ============================================================================

class ClassInfo:
    """Display metadata for the land cover classes."""

    # Mapping from LandcoverType value to RGBA color for visualization
    CLASS_COLORS: Dict[int, Tuple[int, int, int, int]] = {
        0: (0, 0, 0, 0),          # Unknown, transparent
        1: (0, 0, 255, 255),      # Water, blue
        2: (0, 100, 0, 255),      # Forest, dark green
        3: (124, 252, 0, 255),    # Grass, lawn green
        4: (240, 230, 140, 255),  # Agriculture, khaki
        5: (255, 0, 0, 255),      # Urban, red
        6: (128, 128, 128, 255),  # Rock, gray
        7: (255, 250, 250, 255),  # Snow, snow white
    }
