# -*- coding: utf-8 -*-
"""
Created on Sat Jan  2 00:02:58 2016

@author: owner
"""

import cv2
import numpy as np

class Data:
    """RGB-D frames queried by features during tree training.

    Parameters
    ----------
    rgb_images : sequence of ndarray, shape [rows, cols, 3]
        8-bit colour images.

    depth_images : sequence of ndarray, shape [rows, cols]
        Raw 16-bit depth maps. 0 means no measurement.

    depth_factor : float, default: 5000
        Raw depth units per meter.
    """

    def __init__(self, rgb_images, depth_images, depth_factor=5000):

        if len(rgb_images) != len(depth_images):
            raise ValueError('rgb_images and depth_images should have same length.')

        if depth_factor <= 0:
            raise ValueError('depth_factor must be a positive number')

        self._rgb_images = [np.asarray(img) for img in rgb_images]
        self._depth_images = [np.asarray(img) for img in depth_images]
        self.depth_factor = float(depth_factor)

        shapes = set()
        for rgb, depth in zip(self._rgb_images, self._depth_images):
            if rgb.ndim != 3 or depth.ndim != 2:
                raise ValueError('rgb images must have shape [rows, cols, 3] and depth images [rows, cols]')
            if rgb.shape[:2] != depth.shape:
                raise ValueError('rgb and depth images of a frame must have same rows and cols')
            shapes.add(depth.shape)

        if len(shapes) > 1:
            raise ValueError('all frames must have same shape')

        self.shape = shapes.pop() if shapes else (0, 0)

    @classmethod
    def from_files(cls, rgb_names, depth_names, depth_factor=5000):
        return cls(readRGBImage(rgb_names), readDepthMap(depth_names), depth_factor)

    @property
    def n_frames(self):
        return len(self._depth_images)

    def _check_frame(self, frame):
        # negative indices would silently wrap to another frame
        if not 0 <= frame < self.n_frames:
            raise IndexError('frame {0} out of range for {1} frames'.format(frame, self.n_frames))

    def get_rgb_image(self, frame):
        self._check_frame(frame)
        return self._rgb_images[frame]

    def get_depth_image(self, frame):
        self._check_frame(frame)
        return self._depth_images[frame]

    def in_bounds(self, row, col):
        rows, cols = self.shape
        return 0 <= row < rows and 0 <= col < cols

    def get_depth(self, frame, row, col):
        """Depth in meters at (row, col); 0.0 when missing or out of bounds."""

        self._check_frame(frame)

        if not self.in_bounds(row, col):
            return 0.0

        return float(self._depth_images[frame][row, col]) / self.depth_factor

## Read colour images
#  @param filenames File names that contains colour images
#  @return images List of 8-bit, 3-channel images
def readRGBImage(filenames):

    images = []
    for filename in filenames:
        img = cv2.imread(filename, cv2.IMREAD_COLOR)
        if img is None:
            raise IOError('could not read image: {0}'.format(filename))
        images.append(img)

    return images

## Read depth data
#  @param filenames File names that contains depth data
#  @return depthmaps 16-bit, single-channel depth maps
def readDepthMap(filenames):

    depthmaps = []
    for filename in filenames:
        img = cv2.imread(filename, cv2.IMREAD_ANYDEPTH)
        if img is None:
            raise IOError('could not read depth map: {0}'.format(filename))
        depthmaps.append(img)

    return depthmaps

## Save numpy ndarray with ndim==2 to text file
#  @param filename Output text file name
#  @param data Array object to save
def saveText2D(filename, data):

    np.savetxt(filename, data)

## Read numpy ndarray with ndim==2 from text file
#  @param filenames File names that contains 2D arrays
#  @return data List of 2D arrays
def readText2D(filenames):

    data = []
    for filename in filenames:
        data_slice = np.loadtxt(filename, ndmin=2)
        data.append(data_slice)

    return data

## Read camera-to-world poses
#  @param filenames File names that contains 4x4 pose matrices
#  @return poses 3D array with shape [n_frames, 4, 4]
def readPoses(filenames):

    poses = readText2D(filenames)

    for filename, pose in zip(filenames, poses):
        if pose.shape != (4, 4):
            raise ValueError('pose in {0} must have shape (4, 4), got {1}'.format(filename, pose.shape))

    return np.asarray(poses).reshape(-1, 4, 4)
