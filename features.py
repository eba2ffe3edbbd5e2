# -*- coding: utf-8 -*-
"""
Created on Sat Mar 12 15:20:44 2016

@author: owner
"""

import numpy as np

class DepthAdaptiveRGB:
    """Depth-adaptive colour difference feature.

    The response at pixel p with depth D(p) is

        I(p + offset_1 / D(p), color_channel_1) - I(p + offset_2 / D(p), color_channel_2)

    Offsets are scaled by the inverse depth so the probed pattern covers
    the same physical extent regardless of the distance to the camera.

    Parameters
    ----------
    color_channel_1, color_channel_2 : int
        Colour channels read at the two probes, in [0, 3).

    offset_1, offset_2 : array-like of length 2
        (row, col) offsets in pixel-meters.

    threshold : float
        Split threshold tau. Responses >= tau go to the right.
    """
    __slots__ = ['color_channel_1', 'color_channel_2', 'offset_1', 'offset_2', 'threshold']

    def __init__(self, color_channel_1, color_channel_2, offset_1, offset_2, threshold):

        if not (0 <= color_channel_1 < 3 and 0 <= color_channel_2 < 3):
            raise ValueError('color channels must be in [0, 3)')

        if len(offset_1) != 2 or len(offset_2) != 2:
            raise ValueError('offsets must be array-like objects of length 2')

        self.color_channel_1 = int(color_channel_1)
        self.color_channel_2 = int(color_channel_2)
        self.offset_1 = np.asarray(offset_1, np.int32)
        self.offset_2 = np.asarray(offset_2, np.int32)
        self.threshold = float(threshold)

    @classmethod
    def create_random(cls, random, image_width, image_height, max_offset=130, max_threshold=128):
        """Draw a feature with random channels, offsets and threshold.

        Parameters
        ----------
        random : Random
            Source of randomness.

        image_width, image_height : int
            Frame size. Offsets never exceed the image extent along an axis.

        max_offset : int, default: 130
            Offsets are drawn from [-max_offset, max_offset).

        max_threshold : int, default: 128
            Threshold is drawn from [-max_threshold, max_threshold).
        """

        row_bound = min(max_offset, image_height)
        col_bound = min(max_offset, image_width)

        offset_1 = np.floor([random.uniform(-row_bound, row_bound), random.uniform(-col_bound, col_bound)])
        offset_2 = np.floor([random.uniform(-row_bound, row_bound), random.uniform(-col_bound, col_bound)])
        color_channel_1 = random.next_int(0, 3)
        color_channel_2 = random.next_int(0, 3)
        tau = float(np.floor(random.uniform(-max_threshold, max_threshold)))

        return cls(color_channel_1, color_channel_2, offset_1, offset_2, tau)

    def _probe(self, data, row, col, depth, offset):
        # int() truncates toward zero like an integer pixel cast
        probe_row = row + int(offset[0] / depth)
        probe_col = col + int(offset[1] / depth)

        if not data.in_bounds(probe_row, probe_col):
            return None

        return probe_row, probe_col

    def get_response(self, data, sample):
        """Return (response, is_valid) of this feature for ``sample``."""

        row, col = sample.pixel
        frame = sample.frame

        depth = data.get_depth(frame, row, col)
        if depth == 0.0:
            return 0.0, False

        probe_1 = self._probe(data, row, col, depth, self.offset_1)
        probe_2 = self._probe(data, row, col, depth, self.offset_2)
        if probe_1 is None or probe_2 is None:
            return 0.0, False

        rgb = data.get_rgb_image(frame)
        intensity_1 = float(rgb[probe_1][self.color_channel_1])
        intensity_2 = float(rgb[probe_2][self.color_channel_2])

        return intensity_1 - intensity_2, True

    def get_threshold(self):
        return self.threshold

    def __repr__(self):
        return 'DepthAdaptiveRGB(c1={0}, c2={1}, offset_1={2}, offset_2={3}, tau={4})'.format(
            self.color_channel_1, self.color_channel_2, self.offset_1.tolist(), self.offset_2.tolist(), self.threshold)
