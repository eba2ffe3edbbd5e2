# -*- coding: utf-8 -*-
"""
Created on Sun Jan  3 16:43:50 2016

@author: owner
"""

import numpy as np
from decision_tree import LabeledSample

def _backproject(rows, cols, depths, settings):

    x = (cols - settings.cx) * depths / settings.fx
    y = (rows - settings.cy) * depths / settings.fy

    return np.c_[x, y, depths]

## Generate labeled pixels consisting of pixel locations and 3D scene coordinates
#  @param data Data context that contains RGB-D frames.
#  @param poses Camera-to-world poses with shape [n_frames, 4, 4].
#  @param settings Settings providing camera intrinsics.
#  @param random Random source used to pick pixels.
#  @param n_samples_per_frame Number of random pixels drawn from each frame.
#  @return labeled_data List of LabeledSample. Pixels without depth are skipped.
def generateLabeledSamples(data, poses, settings, random, n_samples_per_frame):

    poses = np.asarray(poses, np.float64)

    if poses.ndim != 3 or poses.shape[1:] != (4, 4):
        raise ValueError('poses should have shape of [n_frames, 4, 4].')

    if len(poses) != data.n_frames:
        raise ValueError('poses and data should have same number of frames.')

    if n_samples_per_frame <= 0:
        raise ValueError('n_samples_per_frame must be a positive number')

    n_rows, n_cols = data.shape
    labeled_data = []

    for frame, pose in enumerate(poses):

        rows = random.next_int(0, n_rows, size=n_samples_per_frame)
        cols = random.next_int(0, n_cols, size=n_samples_per_frame)

        depths = data.get_depth_image(frame)[rows, cols].astype(np.float64) / data.depth_factor

        # no depth measurement
        valid = depths > 0
        rows, cols, depths = rows[valid], cols[valid], depths[valid]

        # camera coordinates to world coordinates
        points_camera = _backproject(rows, cols, depths, settings)
        points_world = points_camera.dot(pose[:3, :3].T) + pose[:3, 3]

        for row, col, label in zip(rows, cols, points_world):
            labeled_data.append(LabeledSample(frame, (int(row), int(col)), tuple(float(x) for x in label)))

    return labeled_data
