# -*- coding: utf-8 -*-
"""
Created on Mon Jan  4 20:40:44 2016

@author: owner
"""

import numpy as np
import matplotlib.pyplot as plt
from mpl_toolkits.mplot3d import Axes3D

def visualizeLeafModes(tree, labeled_data, title=None, n_labels_to_render=500, show=True):

    labels = np.array([s.label for s in labeled_data], np.float64).reshape(-1, 3)
    modes = np.array([leaf.mode for leaf in tree.leaves()], np.float64).reshape(-1, 3)

    # reduce number of points for rendering
    if n_labels_to_render < len(labels):
        labels = labels[np.random.randint(len(labels), size=n_labels_to_render), :]

    fig = plt.figure()
    ax = fig.add_subplot(111, projection='3d')

    if title is not None:
        plt.title(title)

    # training labels
    ax.scatter(labels[:, 0], labels[:, 1], labels[:, 2], s=10, c='r', marker='o', alpha=0.5)

    # leaf modes
    ax.scatter(modes[:, 0], modes[:, 1], modes[:, 2], s=40, c='b', marker='^')

    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_zlabel('z')

    if show:
        plt.show()

    return fig
