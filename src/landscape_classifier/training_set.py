"""
Training set collection and its flat text interchange format.

File layout (UTF-8, one value per line):
    N                       number of feature layers
    N blocks of 8 lines     path, contrast enhanced, satellite type,
                            is red, is green, is blue,
                            min cut percentage, max cut percentage
    one line per sample     ClassName;intensity_1;...;intensity_N
"""

import os
import warnings
from collections import Counter
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from landscape_classifier.errors import FormatError, UnknownLabelWarning
from landscape_classifier.feature_vector import (
    UINT16_MAX,
    ClassifiedFeatureVector,
    FeatureVector,
    LayerDescriptor,
)
from landscape_classifier.landcover import LandcoverType, SatelliteType, parse_landcover_type
from landscape_classifier.logger import get_logger

log = get_logger("training_set")

LINES_PER_LAYER: int = 8
FIELD_SEPARATOR: str = ";"


# ============================================================================
# TRAINING SET COLLECTION
# ============================================================================

class TrainingSet:
    """Ordered collection of labelled samples owned by the caller's session."""

    def __init__(self, samples: Iterable[ClassifiedFeatureVector] = ()):
        self._samples: List[ClassifiedFeatureVector] = list(samples)

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[ClassifiedFeatureVector]:
        return iter(self._samples)

    @property
    def samples(self) -> List[ClassifiedFeatureVector]:
        """Copy of the samples, in insertion order."""
        return list(self._samples)

    def has_features(self) -> bool:
        return bool(self._samples)

    def add(self, sample: ClassifiedFeatureVector) -> None:
        self._samples.append(sample)

    def remove(self, sample: ClassifiedFeatureVector) -> None:
        """Remove the first occurrence of a sample, ValueError if absent."""
        self._samples.remove(sample)

    def clear(self) -> None:
        self._samples.clear()

    def class_counts(self) -> Dict[LandcoverType, int]:
        """Number of samples per land cover class present in the set."""
        return dict(Counter(sample.type for sample in self._samples))

    def export_to(self, path: str, layers: Sequence[LayerDescriptor]) -> None:
        export_training_set(path, layers, self._samples)

    def import_from(self, path: str) -> List[LayerDescriptor]:
        """
        Replace the samples with the content of a training set file.

        ! The current samples are kept untouched if the file is malformed

        Returns:
            Layers declared by the file
        """
        layers, samples = import_training_set(path)
        self._samples = samples
        return layers


def find_missing_layers(
    layers: Sequence[LayerDescriptor], available_paths: Iterable[str]
) -> List[LayerDescriptor]:
    """
    Layers of an imported training set that are not currently loaded.

    Args:
        layers: Layers declared by a training set file
        available_paths: Paths of the layers already loaded

    Returns:
        Layers whose path is not among available_paths, in file order
    """
    available = set(available_paths)
    return [layer for layer in layers if layer.path not in available]


# ============================================================================
# EXPORT
# ============================================================================

def export_training_set(
    path: str,
    layers: Sequence[LayerDescriptor],
    samples: Sequence[ClassifiedFeatureVector],
) -> None:
    """
    Write layers and samples to a training set file, overwriting it.

    Args:
        path: Output file path
        layers: Layers contributing features, written ordered by name
        samples: Labelled samples, intensities in the same order as layers

    Raises:
        ValueError: If a sample does not carry one intensity per layer

    ! Intensities are permuted with the layers so each column stays
    ! under its own layer block
    """
    order = sorted(range(len(layers)), key=lambda i: layers[i].name)
    ordered_layers = [layers[i] for i in order]

    for sample in samples:
        count = len(sample.feature_vector.band_intensities)
        if count != len(ordered_layers):
            raise ValueError(
                f"Sample labelled {sample.type.label} has {count} band intensities, "
                f"expected {len(ordered_layers)}."
            )

    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(path, "w", encoding="utf-8", newline="\n") as f:
        f.write(f"{len(ordered_layers)}\n")
        for layer in ordered_layers:
            for value in _layer_lines(layer):
                f.write(f"{value}\n")

        for sample in samples:
            intensities = sample.feature_vector.band_intensities
            fields = [sample.type.label]
            fields.extend(str(intensities[i]) for i in order)
            f.write(FIELD_SEPARATOR.join(fields) + "\n")

    log.info(f"Exported {len(ordered_layers)} layers and {len(samples)} samples to {path}")


def _layer_lines(layer: LayerDescriptor) -> List[str]:
    return [
        layer.path,
        str(layer.contrast_enhanced),
        layer.satellite_type.value,
        str(layer.is_red),
        str(layer.is_green),
        str(layer.is_blue),
        repr(float(layer.min_cut_percentage)),
        repr(float(layer.max_cut_percentage)),
    ]


# ============================================================================
# IMPORT
# ============================================================================

def import_training_set(path: str) -> Tuple[List[LayerDescriptor], List[ClassifiedFeatureVector]]:
    """
    Read layers and samples from a training set file.

    Structure is strict, labels are lenient: an unknown class name becomes
    LandcoverType.UNKNOWN and raises an UnknownLabelWarning.

    Args:
        path: Training set file path

    Returns:
        Tuple (layers in file order, samples in file order)

    Raises:
        FileNotFoundError: If the file does not exist
        FormatError: If the layer block count, a metadata value or a
            sample line is malformed
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Training set not found: {path}")

    with open(path, "r", encoding="utf-8-sig") as f:
        lines = f.read().splitlines()

    if not lines:
        raise FormatError("Training set file is empty.", 1)

    num_layers = _parse_int(lines[0], 1)
    if num_layers < 0:
        raise FormatError(f"Negative layer count: {num_layers}", 1)

    metadata_end = 1 + num_layers * LINES_PER_LAYER
    if len(lines) < metadata_end:
        raise FormatError(
            f"Declared {num_layers} layers but the file ends after "
            f"{(len(lines) - 1) // LINES_PER_LAYER} complete layer blocks.",
            len(lines),
        )

    layers = []
    for index in range(num_layers):
        start = 1 + index * LINES_PER_LAYER
        layers.append(_parse_layer(lines[start:start + LINES_PER_LAYER], start + 1))

    if _is_layer_block(lines[metadata_end:metadata_end + LINES_PER_LAYER]):
        raise FormatError(
            f"Declared {num_layers} layers but more layer blocks follow.", metadata_end + 1
        )

    samples = []
    for offset, line in enumerate(lines[metadata_end:]):
        if not line.strip():
            continue
        samples.append(_parse_sample(line, num_layers, metadata_end + offset + 1))

    log.info(f"Imported {len(layers)} layers and {len(samples)} samples from {path}")
    return layers, samples


def _parse_layer(block: List[str], first_line: int) -> LayerDescriptor:
    return LayerDescriptor(
        path=block[0],
        contrast_enhanced=_parse_bool(block[1], first_line + 1),
        satellite_type=_parse_satellite_type(block[2], first_line + 2),
        is_red=_parse_bool(block[3], first_line + 3),
        is_green=_parse_bool(block[4], first_line + 4),
        is_blue=_parse_bool(block[5], first_line + 5),
        min_cut_percentage=_parse_float(block[6], first_line + 6),
        max_cut_percentage=_parse_float(block[7], first_line + 7),
    )


def _is_layer_block(block: List[str]) -> bool:
    """Whether 8 lines parse as layer metadata (sample lines never do)."""
    if len(block) < LINES_PER_LAYER:
        return False
    try:
        _parse_layer(block, 0)
    except FormatError:
        return False
    return True


def _parse_sample(line: str, num_layers: int, line_number: int) -> ClassifiedFeatureVector:
    fields = line.split(FIELD_SEPARATOR)
    if len(fields) != num_layers + 1:
        raise FormatError(
            f"Expected a class name and {num_layers} intensities, got {len(fields)} fields.",
            line_number,
        )

    landcover_type = parse_landcover_type(fields[0])
    if landcover_type is None:
        message = f"Unknown land cover class {fields[0]!r} on line {line_number}, using {LandcoverType.UNKNOWN.label}"
        log.warning(message)
        warnings.warn(message, UnknownLabelWarning, stacklevel=3)
        landcover_type = LandcoverType.UNKNOWN

    intensities = tuple(_parse_intensity(value, line_number) for value in fields[1:])
    return ClassifiedFeatureVector(landcover_type, FeatureVector(band_intensities=intensities))


def _parse_int(text: str, line_number: int) -> int:
    try:
        return int(text.strip())
    except ValueError:
        raise FormatError(f"Not an integer: {text!r}", line_number) from None


def _parse_float(text: str, line_number: int) -> float:
    try:
        return float(text.strip())
    except ValueError:
        raise FormatError(f"Not a decimal number: {text!r}", line_number) from None


def _parse_bool(text: str, line_number: int) -> bool:
    value = text.strip().lower()
    if value == "true":
        return True
    if value == "false":
        return False
    raise FormatError(f"Not a boolean: {text!r}", line_number)


def _parse_satellite_type(text: str, line_number: int) -> SatelliteType:
    try:
        return SatelliteType(text.strip())
    except ValueError:
        raise FormatError(f"Unknown satellite type: {text!r}", line_number) from None


def _parse_intensity(text: str, line_number: int) -> int:
    intensity = _parse_int(text, line_number)
    if not 0 <= intensity <= UINT16_MAX:
        raise FormatError(f"Band intensity out of uint16 range: {intensity}", line_number)
    return intensity
