from math import sqrt

import numpy as np


def distance(a, b) -> float:
    if len(a) != len(b):
        raise ValueError('Vectors have different dimensions: {}, {}'.format(len(a), len(b)))
    return sqrt(np.sum((np.asarray(a) - np.asarray(b)) ** 2))


def accumulate(target: np.ndarray, source):
    if len(target) != len(source):
        raise ValueError('Vectors have different dimensions: {}, {}'.format(len(target), len(source)))
    target += source


def scale(target: np.ndarray, factor: float):
    target *= factor
