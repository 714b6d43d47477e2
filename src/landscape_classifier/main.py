"""
Command line entry point.

    landscape-classifier info data/training_set.txt
    landscape-classifier train data/training_set.txt --model-dir data/models/
"""

import argparse
import sys
from typing import List, Optional

from landscape_classifier.class_models import ClassifierType
from landscape_classifier.cste import GeneralPath
from landscape_classifier.errors import LandCoverError
from landscape_classifier.logger import get_logger
from landscape_classifier.training_set import TrainingSet, find_missing_layers

log = get_logger("main")


# ============================================================================
# COMMANDS
# ============================================================================

def info_command(args: argparse.Namespace) -> int:
    """Print the layers and the class histogram of a training set."""
    training_set = TrainingSet()
    layers = training_set.import_from(args.training_set)

    print(f"{len(layers)} layers")
    for layer in layers:
        channels = "".join(
            flag for flag, enabled in (("R", layer.is_red), ("G", layer.is_green), ("B", layer.is_blue))
            if enabled
        )
        print(
            f"  {layer.name:<24} {layer.satellite_type.value:<10} {channels or '-':<3} "
            f"cut=[{layer.min_cut_percentage}, {layer.max_cut_percentage}] {layer.path}"
        )

    print(f"{len(training_set)} samples")
    for landcover_type, count in sorted(training_set.class_counts().items()):
        print(f"  {landcover_type.label:<12} {count}")

    if args.available:
        missing = find_missing_layers(layers, args.available)
        for layer in missing:
            print(f"missing layer: {layer.path}")
    return 0


def train_command(args: argparse.Namespace) -> int:
    """Train a classifier on a training set file and save it."""
    training_set = TrainingSet()
    training_set.import_from(args.training_set)

    for landcover_type, count in sorted(training_set.class_counts().items()):
        log.info(f"{landcover_type.label}: {count} samples")

    classifier = ClassifierType(args.classifier).create_classifier()
    classifier.train(training_set.samples)
    classifier.save(args.model_dir)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="landscape-classifier",
        description="Land cover classification of satellite rasters.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    info_parser = subparsers.add_parser("info", help="Describe a training set file")
    info_parser.add_argument("training_set", help="Training set text file")
    info_parser.add_argument(
        "--available", nargs="*", default=[],
        help="Paths of the loaded layers, to report layers missing from them",
    )
    info_parser.set_defaults(func=info_command)

    train_parser = subparsers.add_parser("train", help="Train a classifier on a training set file")
    train_parser.add_argument("training_set", help="Training set text file")
    train_parser.add_argument("--model-dir", default=GeneralPath.MODEL_DIR, help="Output directory")
    train_parser.add_argument(
        "--classifier", default=ClassifierType.NEURAL_NETWORK.value,
        choices=[classifier_type.value for classifier_type in ClassifierType],
    )
    train_parser.set_defaults(func=train_command)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (LandCoverError, FileNotFoundError) as e:
        log.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
