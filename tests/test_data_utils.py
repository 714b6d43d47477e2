import numpy as np
import pytest

from landscape_classifier.data_utils import (
    argmax_class,
    build_design_matrix,
    build_grid_design_matrix,
    grid_shape,
    labels_to_onehot,
)
from landscape_classifier.feature_vector import RGB, ClassifiedFeatureVector, FeatureVector
from landscape_classifier.landcover import NUM_CLASSES, LandcoverType


def make_grid(height, width):
    return [
        [
            FeatureVector(
                altitude=100.0 * y + x, color=RGB(y * 10, x * 10, 5),
                average_neighbourhood_color=RGB(1, 2, 3), aspect=float(x), slope=float(y),
            )
            for x in range(width)
        ]
        for y in range(height)
    ]


class TestDesignMatrix:

    def test_rows_match_features(self):
        features = [FeatureVector(altitude=1.0), FeatureVector(altitude=2.0, slope=3.0)]
        matrix = build_design_matrix(features)

        assert matrix.shape == (2, 5)
        assert matrix.dtype == np.float32
        np.testing.assert_array_equal(matrix[1], features[1].features())

    def test_grid_is_row_major(self):
        grid = make_grid(3, 4)
        matrix, height, width = build_grid_design_matrix(grid, show_progress=False)

        assert (height, width) == (3, 4)
        assert matrix.shape == (12, 5)
        assert matrix[1 * 4 + 2, 0] == np.float32(102.0)

    def test_grid_rows_are_bit_identical_to_single_rows(self):
        grid = make_grid(2, 3)
        matrix, _, width = build_grid_design_matrix(grid, show_progress=False)

        for y, row in enumerate(grid):
            for x, feature in enumerate(row):
                single = build_design_matrix([feature])[0]
                assert matrix[y * width + x].tobytes() == single.tobytes()

    def test_accepts_object_array(self):
        grid = np.empty((2, 2), dtype=object)
        for y in range(2):
            for x in range(2):
                grid[y, x] = FeatureVector(altitude=float(y * 2 + x))
        matrix, height, width = build_grid_design_matrix(grid, show_progress=False)

        assert (height, width) == (2, 2)
        np.testing.assert_array_equal(matrix[:, 0], [0.0, 1.0, 2.0, 3.0])

    @pytest.mark.parametrize("grid", [[], [[]], [[FeatureVector()], []]])
    def test_rejects_empty_or_ragged_grid(self, grid):
        with pytest.raises(ValueError):
            grid_shape(grid)

    def test_rejects_ragged_grid(self):
        grid = [[FeatureVector(), FeatureVector()], [FeatureVector()]]
        with pytest.raises(ValueError, match="not rectangular"):
            build_grid_design_matrix(grid, show_progress=False)


class TestOneHot:

    def test_single_one_per_row(self):
        samples = [
            ClassifiedFeatureVector(LandcoverType.WATER, FeatureVector()),
            ClassifiedFeatureVector(LandcoverType.SNOW, FeatureVector()),
            ClassifiedFeatureVector(LandcoverType.WATER, FeatureVector()),
        ]
        targets = labels_to_onehot(samples, NUM_CLASSES)

        assert targets.shape == (3, NUM_CLASSES)
        assert targets.dtype == np.float32
        np.testing.assert_array_equal(targets.sum(axis=1), [1, 1, 1])
        assert targets[0, LandcoverType.WATER] == 1
        assert targets[1, LandcoverType.SNOW] == 1

    def test_rejects_class_outside_output_layer(self):
        samples = [ClassifiedFeatureVector(LandcoverType.SNOW, FeatureVector())]
        with pytest.raises(ValueError):
            labels_to_onehot(samples, 3)


class TestArgmax:

    def test_tie_picks_lowest_index(self):
        assert argmax_class(np.array([0.1, 0.9, 0.9, 0.2], dtype=np.float32)) == 1

    def test_all_equal_picks_first(self):
        assert argmax_class(np.zeros(NUM_CLASSES)) == 0

    def test_row_wise(self):
        responses = np.array([
            [0.0, 0.5, 0.5],
            [0.7, 0.1, 0.7],
            [-1.0, -0.5, -0.9],
        ])
        np.testing.assert_array_equal(argmax_class(responses), [1, 0, 1])
