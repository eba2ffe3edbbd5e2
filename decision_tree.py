# -*- coding: utf-8 -*-
"""
Created on Tue Jan  5 22:35:35 2016

@author: owner
"""

import weakref
import collections
import numpy as np
from features import DepthAdaptiveRGB
from clustering import MeanShift

## A pixel of a training frame with its ground-truth 3D scene coordinate.
#  @param frame Index of the RGB-D frame in the data context.
#  @param pixel (row, col) of the pixel.
#  @param label 3D scene coordinate of the pixel.
LabeledSample = collections.namedtuple('LabeledSample', ['frame', 'pixel', 'label'])

# learner output
LEFT, RIGHT, TRASH = 0, 1, 2

class TreeNode:
    __slots__ = ['is_leaf', 'is_split', 'feature', 'left', 'right', 'mode', '_parent', '__weakref__']

    def __init__(self, parent=None):
        self.is_leaf = False
        self.is_split = False
        self.feature = None
        self.left = None
        self.right = None
        self.mode = None
        self.parent = parent

    @property
    def parent(self):
        return self._parent() if self._parent is not None else None

    @parent.setter
    def parent(self, node):
        # weak back-reference; only children are owned
        self._parent = weakref.ref(node) if node is not None else None

    def get_height(self):
        """Number of edges from this node up to the root."""
        height = 0
        node = self.parent
        while node is not None:
            height += 1
            node = node.parent
        return height

    def iter_nodes(self):
        """Depth-first, pre-order iteration over the subtree."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.right is not None:
                stack.append(node.right)
            if node.left is not None:
                stack.append(node.left)

class Tree:
    """Regression tree mapping pixels to 3D scene coordinates.

    Parameters
    ----------
    num_candidates : int, default: 5
        Number of random features evaluated at every split node.

    n_subsample : int, default: 500
        Maximum number of labels (the first ones) clustered at a leaf.

    kernel_bandwidth : float, default: 0.01
        Bandwidth of the mean-shift kernel used at leaves.

    clusterer : object with ``cluster(points, kernel_bandwidth)``, optional
        Leaf clustering oracle, defaults to a Gaussian ``MeanShift``.

    feature_class : class, default: DepthAdaptiveRGB
        Feature type. Must provide ``create_random(random, image_width,
        image_height)`` and instances with ``get_response(data, sample)`` and
        ``get_threshold()``.

    verbose : int, default: 0
        Controls the verbosity: >0 prints a summary after training,
        >1 also prints one line per finished leaf or discarded node.
    """

    def __init__(self, num_candidates=5, n_subsample=500, kernel_bandwidth=0.01, clusterer=None, feature_class=DepthAdaptiveRGB, verbose=0):

        if num_candidates <= 0:
            raise ValueError('num_candidates must be a positive number')

        if n_subsample <= 0:
            raise ValueError('n_subsample must be a positive number')

        if kernel_bandwidth <= 0:
            raise ValueError('kernel_bandwidth must be a positive number')

        if not hasattr(feature_class, 'create_random'):
            raise ValueError('feature_class must have attribute \'create_random\'')

        if clusterer is None:
            clusterer = MeanShift()
        elif not hasattr(clusterer, 'cluster'):
            raise ValueError('clusterer must have attribute \'cluster\'')

        self.root = TreeNode()
        self.num_candidates = num_candidates
        self.n_subsample = n_subsample
        self.kernel_bandwidth = kernel_bandwidth
        self.clusterer = clusterer
        self.feature_class = feature_class
        self.verbose = verbose
        self.is_trained = False
        self.n_leaves = 0
        self.n_splits = 0
        self.n_discarded = 0

    def eval_learner(self, data, sample, feature):
        """Decide whether ``sample`` goes LEFT, RIGHT or to TRASH."""

        response, is_valid = feature.get_response(data, sample)

        # no depth or out of bounds
        if not is_valid:
            return TRASH

        return RIGHT if response >= feature.get_threshold() else LEFT

    def variance(self, samples):
        """Mean squared distance of the labels to their centroid, V(S)."""

        if len(samples) == 0:
            return 0.0

        labels = np.array([s.label for s in samples], np.float64)
        deviations = labels - labels.mean(axis=0)

        return float((deviations * deviations).sum() / len(labels))

    def objective_function(self, samples, left, right):
        """Variance reduction Q(S, theta) of partitioning ``samples``.

        ``left`` and ``right`` may hold fewer samples than ``samples`` in
        total; trashed samples are still counted in |S|.
        """

        n = float(len(samples))
        if n == 0:
            return 0.0

        left_val = (len(left) / n) * self.variance(left)
        right_val = (len(right) / n) * self.variance(right)

        return self.variance(samples) - (left_val + right_val)

    def _partition(self, data, samples, feature):

        left_data = []
        right_data = []

        for sample in samples:
            out = self.eval_learner(data, sample, feature)
            if out == LEFT:
                left_data.append(sample)
            elif out == RIGHT:
                right_data.append(sample)

        return left_data, right_data

    def _calc_mode(self, samples):
        """Most frequent mean-shift mode of the first ``n_subsample`` labels.

        Converged points are floored to 4 decimals so near-identical modes
        share a key. Ties go to the key seen first. No samples give the
        zero vector.
        """

        points = np.array([s.label for s in samples[:self.n_subsample]], np.float64).reshape(-1, 3)

        if len(points) == 0:
            return np.zeros(3)

        shifted = self.clusterer.cluster(points, self.kernel_bandwidth)
        quantized = np.floor(np.asarray(shifted) * 10000) / 10000

        counts = {}
        for point in quantized:
            key = tuple(float(x) for x in point)
            counts[key] = counts.get(key, 0) + 1

        mode, best_count = (0.0, 0.0, 0.0), 0
        for key, count in counts.items():
            if count > best_count:
                mode, best_count = key, count

        return np.array(mode)

    def _set_leaf(self, node, samples):

        node.is_leaf = True
        node.is_split = False
        node.mode = self._calc_mode(samples)

        self.n_leaves += 1

        if self.verbose > 1:
            print('[Tree] leaf at height {0}: {1} samples, mode {2}'.format(node.get_height(), len(samples), node.mode))

    def _grow_node(self, node, samples, data, random, settings):
        """Turn ``node`` into a leaf or a split node, or discard it.

        Returns
        -------
        node : TreeNode or None
            None when ``samples`` is empty and the node was discarded. The
            caller stores the return value in its child slot.

        children : list of (str, TreeNode, list)
            Child slot, fresh child node and its samples for a split node,
            left before right. Empty for leaves and discarded nodes.
        """

        height = node.get_height()

        if len(samples) == 1 or height >= settings.max_tree_depth:
            self._set_leaf(node, samples)
            return node, []

        elif len(samples) == 0:
            self.n_discarded += 1

            if self.verbose > 1:
                print('[Tree] discarded empty node at height {0}'.format(height))

            return None, []

        node.is_split = True
        node.is_leaf = False

        best_feature = None
        minimum_objective = np.inf
        left_final = []
        right_final = []

        for _ in range(self.num_candidates):
            candidate = self.feature_class.create_random(random, settings.image_width, settings.image_height)

            left_data, right_data = self._partition(data, samples, candidate)

            # TODO: check the selection direction against Shotton et al. (CVPR 2013);
            # variance reduction is normally maximized
            objective = self.objective_function(samples, left_data, right_data)

            if objective < minimum_objective:
                best_feature = candidate
                minimum_objective = objective
                left_final = left_data
                right_final = right_data

        node.feature = best_feature
        node.left = TreeNode(parent=node)
        node.right = TreeNode(parent=node)
        self.n_splits += 1

        return node, [('left', node.left, left_final), ('right', node.right, right_final)]

    def _grow_tree(self, samples, data, random, settings):

        # (parent, slot, node, samples); LIFO gives depth-first, left-first growth
        stack = [(None, None, self.root, samples)]

        while stack:
            parent, slot, node, node_samples = stack.pop()

            node, children = self._grow_node(node, node_samples, data, random, settings)

            if parent is None:
                self.root = node
            else:
                setattr(parent, slot, node)

            for child_slot, child, child_samples in reversed(children):
                stack.append((node, child_slot, child, child_samples))

    def train(self, data, labeled_data, random, settings):
        """Grow the tree from ``labeled_data``.

        Parameters
        ----------
        data : Data
            RGB-D frames queried by the features.

        labeled_data : sequence of LabeledSample
            Training pixels with their 3D scene coordinates.

        random : Random
            Source of randomness for candidate features.

        settings : Settings
            Provides ``max_tree_depth``, ``image_width`` and ``image_height``.
        """

        if self.is_trained:
            raise RuntimeError('tree is already trained')

        if not (hasattr(settings, 'max_tree_depth') and hasattr(settings, 'image_width') and hasattr(settings, 'image_height')):
            raise ValueError('settings must have attributes \'max_tree_depth\', \'image_width\' and \'image_height\'')

        self.is_trained = True
        samples = list(labeled_data)

        # an empty training set discards the root itself
        self._grow_tree(samples, data, random, settings)

        if self.verbose > 0:
            print('[Tree] trained on {0} samples: {1} splits, {2} leaves, {3} discarded, depth {4}'.format(
                len(samples), self.n_splits, self.n_leaves, self.n_discarded, self.get_depth()))

        return self

    def iter_nodes(self):
        if self.root is None:
            return iter(())
        return self.root.iter_nodes()

    def leaves(self):
        return [node for node in self.iter_nodes() if node.is_leaf]

    def get_depth(self):
        """Largest height of any node in the tree."""
        return max((node.get_height() for node in self.iter_nodes()), default=0)
