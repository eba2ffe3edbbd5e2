# -*- coding: utf-8 -*-
"""
Created on Thu Mar 10 18:51:01 2016

@author: owner
"""

import numpy as np

class Settings:
    """Configuration shared by tree training and sample generation.

    Parameters
    ----------
    image_width : int, default: 640
        Width of RGB-D frames in pixels. Bounds random feature offsets.

    image_height : int, default: 480
        Height of RGB-D frames in pixels. Bounds random feature offsets.

    max_tree_depth : int, default: 16
        Nodes at this height from the root always become leaves.
        0 is valid and forces the root to be a leaf.

    depth_factor : float, default: 5000
        Raw depth units per meter.

    fx, fy, cx, cy : float
        Pinhole camera intrinsics of the depth camera.
    """
    __slots__ = ['image_width', 'image_height', 'max_tree_depth', 'depth_factor', 'fx', 'fy', 'cx', 'cy']

    def __init__(self, image_width=640, image_height=480, max_tree_depth=16, depth_factor=5000, fx=525.0, fy=525.0, cx=319.5, cy=239.5):

        if image_width <= 0 or image_height <= 0:
            raise ValueError('image_width and image_height must be positive numbers')

        if max_tree_depth < 0:
            raise ValueError('max_tree_depth must be a non-negative number')

        if depth_factor <= 0:
            raise ValueError('depth_factor must be a positive number')

        if fx <= 0 or fy <= 0:
            raise ValueError('fx and fy must be positive numbers')

        self.image_width = int(image_width)
        self.image_height = int(image_height)
        self.max_tree_depth = int(max_tree_depth)
        self.depth_factor = float(depth_factor)
        self.fx = float(fx)
        self.fy = float(fy)
        self.cx = float(cx)
        self.cy = float(cy)

    def intrinsics(self):
        return np.array([[self.fx, 0.0, self.cx],
                         [0.0, self.fy, self.cy],
                         [0.0, 0.0, 1.0]])
