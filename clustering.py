# -*- coding: utf-8 -*-
"""
Created on Sun Mar 13 11:48:09 2016

@author: owner
"""

import numpy as np
import sklearn, sklearn.cluster

class MeanShift:
    """Mean-shift mode seeking used to summarize labels at leaf nodes.

    Parameters
    ----------
    kernel : {'gaussian' or 'flat'}, default: 'gaussian'
        'gaussian': every point moves to the Gaussian-weighted mean of the
        original points until it stops moving.
        'flat': delegates to sklearn.cluster.MeanShift and maps each point
        to the center of its cluster.

    max_iter : int, default: 300
        Maximum number of shifting iterations.

    epsilon : float, default: 1e-8
        A point has converged when its shift is shorter than ``epsilon``.
    """

    def __init__(self, kernel='gaussian', max_iter=300, epsilon=1e-8):

        if kernel != 'gaussian' and kernel != 'flat':
            raise ValueError('kernel must be \'gaussian\' or \'flat\'')

        if max_iter <= 0:
            raise ValueError('max_iter must be a positive number')

        if epsilon <= 0:
            raise ValueError('epsilon must be a positive number')

        self.kernel = kernel
        self.max_iter = max_iter
        self.epsilon = epsilon

    def _shift_gaussian(self, points, kernel_bandwidth):

        shifted = points.copy()
        still_shifting = np.ones(len(points), bool)

        for _ in range(self.max_iter):
            if not still_shifting.any():
                break

            moving = shifted[still_shifting]

            # squared distances, shape [n_moving, n_points]
            sq_dists = ((moving[:, np.newaxis, :] - points[np.newaxis, :, :]) ** 2).sum(axis=2)
            weights = np.exp(-0.5 * sq_dists / (kernel_bandwidth * kernel_bandwidth))

            new_positions = weights.dot(points) / weights.sum(axis=1)[:, np.newaxis]
            shift_distances = np.linalg.norm(new_positions - moving, axis=1)

            shifted[still_shifting] = new_positions

            indices = np.flatnonzero(still_shifting)
            still_shifting[indices[shift_distances < self.epsilon]] = False

        return shifted

    def _shift_flat(self, points, kernel_bandwidth):

        ms = sklearn.cluster.MeanShift(bandwidth=kernel_bandwidth, max_iter=self.max_iter).fit(points)

        return ms.cluster_centers_[ms.labels_]

    def cluster(self, points, kernel_bandwidth):
        """Shift every point to the density mode it converges to.

        Parameters
        ----------
        points : array-like, shape [n_points, n_dimensions]

        kernel_bandwidth : float

        Returns
        -------
        shifted : ndarray, shape [n_points, n_dimensions]
            One converged point per input point, in input order.
        """

        if kernel_bandwidth <= 0:
            raise ValueError('kernel_bandwidth must be a positive number')

        points = np.asarray(points, np.float64)

        if len(points) == 0:
            return np.zeros((0, points.shape[1] if points.ndim == 2 else 3))

        if points.ndim != 2:
            raise ValueError('points must be a 2D array-like object')

        if self.kernel == 'flat':
            return self._shift_flat(points, kernel_bandwidth)

        return self._shift_gaussian(points, kernel_bandwidth)
