"""
Shared fixtures: small synthetic RGB-D frames and scripted features.
No dataset files required.
"""

import sys
from pathlib import Path

import numpy as np
import pytest

# Allow running from the repo root without installing the package
sys.path.insert(0, str(Path(__file__).parent.parent))

from data_io import Data
from decision_tree import LabeledSample
from settings import Settings


class ColumnFeature:
    """Routes a sample by its pixel column; columns in ``trash_cols`` are invalid."""

    def __init__(self, threshold, trash_cols=()):
        self.threshold = threshold
        self.trash_cols = set(trash_cols)

    @classmethod
    def create_random(cls, random, image_width, image_height):
        return cls(random.next_int(0, image_width))

    def get_response(self, data, sample):
        col = sample.pixel[1]
        return float(col), col not in self.trash_cols

    def get_threshold(self):
        return self.threshold


def scripted_feature_class(features):
    """Feature class whose ``create_random`` hands out ``features`` in order."""

    queue = list(features)

    class Scripted:
        @classmethod
        def create_random(cls, random, image_width, image_height):
            return queue.pop(0)

    return Scripted


class IdentityClusterer:
    """Clustering oracle that leaves every point where it is and records calls."""

    def __init__(self):
        self.calls = []

    def cluster(self, points, kernel_bandwidth):
        points = np.asarray(points, np.float64)
        self.calls.append((points.copy(), kernel_bandwidth))
        return points


@pytest.fixture
def settings() -> Settings:
    """30x20 frames, depth limit 4."""
    return Settings(image_width=30, image_height=20, max_tree_depth=4)


@pytest.fixture
def rgbd_data() -> Data:
    """Two 20x30 frames with random colours at 1 m, frame 1 has a hole of missing depth."""
    rng = np.random.RandomState(0)
    rgb = [rng.randint(0, 256, size=(20, 30, 3)).astype(np.uint8) for _ in range(2)]
    depth = [np.full((20, 30), 5000, np.uint16) for _ in range(2)]
    depth[1][5:10, 5:10] = 0
    return Data(rgb, depth, depth_factor=5000)


@pytest.fixture
def labeled_data():
    """Pixels of frame 0 labelled with two well separated scene regions."""
    samples = []
    for row in range(0, 20, 4):
        for col in range(0, 30, 3):
            label = (1.0, 2.0, 3.0) if col < 15 else (-1.0, 0.5, 2.0)
            label = tuple(x + 0.001 * (row % 3) for x in label)
            samples.append(LabeledSample(0, (row, col), label))
    return samples
