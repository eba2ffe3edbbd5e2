# -*- coding: utf-8 -*-
"""
Created on Sat Mar 12 14:02:17 2016

@author: owner
"""

import numpy as np
import scipy as sp
import scipy.stats

class Random:
    """Seedable random source consumed by feature instantiation.

    Parameters
    ----------
    seed : int or None
        Seed of the underlying Mersenne Twister. None seeds from the OS.
    """

    def __init__(self, seed=None):
        self.seed = seed
        self.state = np.random.RandomState(seed)

    def next_int(self, low, high, size=None):
        """Uniform integer (or array of ``size`` integers) from [low, high)."""

        if high <= low:
            raise ValueError('high must be greater than low')

        if size is None:
            return int(self.state.randint(low, high))

        return self.state.randint(low, high, size=size)

    def uniform(self, low, high, size=None):
        """Uniform floats from [low, high)."""

        if high <= low:
            raise ValueError('high must be greater than low')

        return sp.stats.uniform(loc=low, scale=high - low).rvs(size=size, random_state=self.state)
