import numpy as np
import pytest

from landscape_classifier.landcover import (
    NUM_CLASSES,
    LandCoverPalette,
    LandcoverType,
    SatelliteType,
    parse_landcover_type,
)


def test_unknown_is_the_default_label():
    assert LandcoverType(0) is LandcoverType.UNKNOWN


def test_num_classes_matches_enum():
    assert NUM_CLASSES == len(LandcoverType)


@pytest.mark.parametrize("text, expected", [
    ("Water", LandcoverType.WATER),
    ("water", LandcoverType.WATER),
    ("FOREST", LandcoverType.FOREST),
    (" Urban ", LandcoverType.URBAN),
])
def test_parse_is_case_insensitive(text, expected):
    assert parse_landcover_type(text) is expected


@pytest.mark.parametrize("text", ["Lava", "", "1"])
def test_parse_unknown_name(text):
    assert parse_landcover_type(text) is None


def test_label_round_trips():
    for landcover_type in LandcoverType:
        assert parse_landcover_type(landcover_type.label) is landcover_type


def test_palette_covers_every_class():
    for landcover_type in LandcoverType:
        color = LandCoverPalette.color_for(landcover_type)
        assert len(color) == 4
        assert all(0 <= channel <= 255 for channel in color)


def test_palette_colors_are_distinct():
    colors = {LandCoverPalette.color_for(landcover_type) for landcover_type in LandcoverType}
    assert len(colors) == NUM_CLASSES


def test_bgra_lookup_table_swaps_channels():
    table = LandCoverPalette.bgra_lookup_table()
    r, g, b, a = LandCoverPalette.color_for(LandcoverType.AGRICULTURE)

    assert table.shape == (NUM_CLASSES, 4)
    assert table.dtype == np.uint8
    assert tuple(table[LandcoverType.AGRICULTURE]) == (b, g, r, a)


def test_satellite_type_values():
    assert SatelliteType("Landsat8") is SatelliteType.LANDSAT8
    assert SatelliteType("Sentinel2") is SatelliteType.SENTINEL2
