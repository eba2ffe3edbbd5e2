"""
Unit tests for data_io: the RGB-D data context and file readers.
"""

import cv2
import numpy as np
import pytest

from data_io import Data, readDepthMap, readPoses, readRGBImage, readText2D, saveText2D


def _frame(rows=4, cols=5, depth=1000):
    rgb = np.zeros((rows, cols, 3), np.uint8)
    return rgb, np.full((rows, cols), depth, np.uint16)


class TestData:

    def test_depth_in_meters(self):
        rgb, depth = _frame(depth=2500)
        data = Data([rgb], [depth], depth_factor=1000)
        assert data.get_depth(0, 1, 1) == pytest.approx(2.5)

    def test_out_of_bounds_depth_is_missing(self):
        rgb, depth = _frame()
        data = Data([rgb], [depth])
        assert data.get_depth(0, -1, 0) == 0.0
        assert data.get_depth(0, 0, 5) == 0.0

    def test_shape_and_frames(self):
        frames = [_frame() for _ in range(3)]
        data = Data([f[0] for f in frames], [f[1] for f in frames])
        assert data.n_frames == 3
        assert data.shape == (4, 5)
        assert data.in_bounds(3, 4)
        assert not data.in_bounds(4, 0)

    def test_unknown_frame_raises(self):
        rgb, depth = _frame()
        data = Data([rgb], [depth])
        with pytest.raises(IndexError):
            data.get_depth(1, 0, 0)

    @pytest.mark.parametrize('frame', [-1, -2])
    def test_negative_frame_raises(self, frame):
        frames = [_frame(depth=1000), _frame(depth=2000)]
        data = Data([f[0] for f in frames], [f[1] for f in frames])
        with pytest.raises(IndexError):
            data.get_depth(frame, 0, 0)
        with pytest.raises(IndexError):
            data.get_rgb_image(frame)
        with pytest.raises(IndexError):
            data.get_depth_image(frame)

    def test_mismatched_frame_counts_raise(self):
        rgb, depth = _frame()
        with pytest.raises(ValueError):
            Data([rgb, rgb], [depth])

    def test_mismatched_shapes_raise(self):
        rgb, _ = _frame()
        _, depth = _frame(rows=6)
        with pytest.raises(ValueError):
            Data([rgb], [depth])

    def test_frames_of_different_size_raise(self):
        small, large = _frame(), _frame(rows=6)
        with pytest.raises(ValueError):
            Data([small[0], large[0]], [small[1], large[1]])


class TestReaders:

    def test_from_files_round_trip(self, tmp_path):
        rgb = np.random.RandomState(0).randint(0, 256, size=(4, 5, 3)).astype(np.uint8)
        depth = np.arange(20, dtype=np.uint16).reshape(4, 5) * 1000
        rgb_name = str(tmp_path / 'rgb_0.png')
        depth_name = str(tmp_path / 'depth_0.png')
        cv2.imwrite(rgb_name, rgb)
        cv2.imwrite(depth_name, depth)

        data = Data.from_files([rgb_name], [depth_name], depth_factor=1000)

        np.testing.assert_array_equal(data.get_rgb_image(0), rgb)
        np.testing.assert_array_equal(data.get_depth_image(0), depth)
        assert data.get_depth(0, 3, 4) == pytest.approx(19.0)

    def test_missing_files_raise(self, tmp_path):
        with pytest.raises(IOError):
            readDepthMap([str(tmp_path / 'missing.png')])
        with pytest.raises(IOError):
            readRGBImage([str(tmp_path / 'missing.png')])

    def test_text_2d(self, tmp_path):
        name = str(tmp_path / 'matrix.txt')
        saveText2D(name, np.eye(3))
        np.testing.assert_allclose(readText2D([name])[0], np.eye(3))

    def test_poses(self, tmp_path):
        names = []
        for i in range(2):
            name = str(tmp_path / 'pose_{0}.txt'.format(i))
            pose = np.eye(4)
            pose[:3, 3] = i
            saveText2D(name, pose)
            names.append(name)

        poses = readPoses(names)
        assert poses.shape == (2, 4, 4)
        np.testing.assert_allclose(poses[1, :3, 3], [1, 1, 1])

    def test_pose_with_wrong_shape_raises(self, tmp_path):
        name = str(tmp_path / 'pose.txt')
        saveText2D(name, np.eye(3))
        with pytest.raises(ValueError):
            readPoses([name])
