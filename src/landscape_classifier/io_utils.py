"""
Input/Output utilities for classification images.
"""

import os
from dataclasses import dataclass

import numpy as np
from PIL import Image

from landscape_classifier.cste import ImageConfig
from landscape_classifier.landcover import LandCoverPalette
from landscape_classifier.logger import get_logger

log = get_logger("io_utils")


@dataclass(frozen=True)
class ClassificationImage:
    """
    Color coded classification result.

    pixels is a packed buffer of 4 bytes per pixel in B, G, R, A order,
    row-major, with `stride` bytes per row.
    """
    width: int
    height: int
    stride: int
    dpi: float
    pixels: bytes

    @classmethod
    def from_classes(cls, classes: np.ndarray, dpi: float = ImageConfig.DPI) -> "ClassificationImage":
        """
        Color a (H, W) array of class values with the land cover palette.

        Args:
            classes: Integer class values, shape (H, W)
            dpi: Logical resolution stored with the image

        Returns:
            ClassificationImage of the same width and height
        """
        height, width = classes.shape
        lookup = LandCoverPalette.bgra_lookup_table()
        pixel_data = lookup[classes.astype(np.intp)]  # (H, W, 4)
        return cls(
            width=width,
            height=height,
            stride=width * ImageConfig.BYTES_PER_PIXEL,
            dpi=dpi,
            pixels=pixel_data.tobytes(),
        )

    def to_array(self) -> np.ndarray:
        """Pixel buffer as a (H, W, 4) uint8 array in B, G, R, A order."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(
            self.height, self.width, ImageConfig.BYTES_PER_PIXEL
        )

    def to_pil(self) -> Image.Image:
        """RGBA PIL image carrying the dpi metadata."""
        img = Image.frombuffer(
            "RGBA", (self.width, self.height), self.pixels, "raw", "BGRA", self.stride, 1
        )
        img.info["dpi"] = (self.dpi, self.dpi)
        return img

    def save(self, save_path: str) -> None:
        """
        Save the image to disk, format chosen from the file extension.

        Args:
            save_path: Output file path
        """
        directory = os.path.dirname(save_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self.to_pil().save(save_path, dpi=(self.dpi, self.dpi))
        log.info(f"Saved {self.width}x{self.height} classification image to {save_path}")
