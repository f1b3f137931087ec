import random
from typing import List, Optional, Tuple

import numpy as np

from vectors import distance, accumulate, scale

CONVERGENCE_RATIO = 0.999
MAX_ITERATIONS = 300


def as_dataset(vectors) -> np.ndarray:
    if len(vectors) == 0:
        raise ValueError('Cannot cluster 0 vectors')
    try:
        dataset = np.asarray(vectors, dtype=float)
    except ValueError as e:
        raise ValueError('Vectors must all have the same dimension') from e
    if dataset.ndim != 2 or dataset.shape[1] == 0:
        raise ValueError('Expected a sequence of non-empty vectors, got shape {}'.format(dataset.shape))
    return dataset


def get_first_centroids(vectors: np.ndarray, clusters_count: int, rng: random.Random) -> np.ndarray:
    """
    Picks the initial centroids with k-means++.

    Every next centroid is sampled with probability proportional to the squared
    distance from the nearest centroid picked so far, in one pass over the
    vectors: a candidate replaces the current pick when random() * sum <= d^2.

    :param vectors: dataset, one vector per row
    :param clusters_count: 1 <= clusters_count <= len(vectors)
    :param rng: source of randomness with random() and sample()
    :return: clusters_count copies of dataset vectors
    """
    centroids = np.zeros((clusters_count, vectors.shape[1]))
    order = rng.sample(range(len(vectors)), len(vectors))

    centroids[0] = vectors[order[0]]
    nearest = [0.0] * len(vectors)
    for j in order:
        nearest[j] = distance(vectors[j], centroids[0])

    for i in range(1, clusters_count):
        total = 0.0
        new_centroid = -1
        for j in order:
            d2 = nearest[j] * nearest[j]
            total += d2
            if rng.random() * total <= d2:
                new_centroid = j
        centroids[i] = vectors[new_centroid]

        for j in order:
            nearest[j] = min(nearest[j], distance(vectors[j], centroids[i]))

    return centroids


def centroid_distances(centroids: np.ndarray) -> List[List[float]]:
    return [[distance(a, b) for b in centroids] for a in centroids]


def allocate_clusters(vectors: np.ndarray, centroids: np.ndarray, old_tags=None) -> np.ndarray:
    """
    Tags every vector with the index of its nearest centroid.

    old_tags only decides where the search starts. A centroid j is skipped when
    dist(j, best) >= 2 * dist(vector, best), since then it cannot be closer.
    """
    if len(centroids) == 0:
        raise RuntimeError('Cannot allocate vectors to 0 centroids')

    centroids_distance = centroid_distances(centroids)
    tags = np.zeros(len(vectors), dtype=int)

    for i, vector in enumerate(vectors):
        best = 0
        if old_tags is not None and 0 <= old_tags[i] < len(centroids):
            best = int(old_tags[i])
        d = distance(centroids[best], vector)

        for j in range(len(centroids)):
            if j == best or centroids_distance[j][best] >= 2 * d:
                continue
            dj = distance(centroids[j], vector)
            if dj < d:
                d = dj
                best = j
        tags[i] = best

    return tags


def get_centroids(vectors: np.ndarray, tags, clusters_count: int) -> np.ndarray:
    # clusters without members stay at zero
    centroids = np.zeros((clusters_count, vectors.shape[1]))
    counts = [0] * clusters_count

    for vector, tag in zip(vectors, tags):
        counts[tag] += 1
        accumulate(centroids[tag], vector)

    for i, count in enumerate(counts):
        if count != 0:
            scale(centroids[i], 1 / count)

    return centroids


def mean_squared_error(vectors, centroids, tags) -> float:
    """Average squared distance of every vector from the centroid it is tagged with."""
    if len(tags) != len(vectors):
        raise ValueError('Non-matching lengths of vectors and tags: {}, {}'.format(len(vectors), len(tags)))
    if len(vectors) == 0:
        return 0.0

    total = 0.0
    for vector, tag in zip(vectors, tags):
        d = distance(centroids[tag], vector)
        total += d * d
    return total / len(vectors)


def has_converged(error: float, previous_error: float) -> bool:
    # an increase always asks for another step, see DESIGN.md
    if error > previous_error:
        return False
    if previous_error == 0:
        return True
    return error / previous_error >= CONVERGENCE_RATIO


def k_means(vectors, clusters_count: int, max_iterations: int = MAX_ITERATIONS,
            seed: Optional[int] = None, rng: random.Random = None) -> Tuple[np.ndarray, np.ndarray]:
    """
    Lloyd's algorithm seeded with k-means++.

    :param vectors: sequence of equal-length real vectors
    :param clusters_count: number of clusters, reduced to len(vectors) if larger
    :param max_iterations: upper bound on refinement steps
    :param seed: seed for a private random.Random, ignored when rng is given
    :param rng: source of randomness with random() and sample()
    :return: (centroids, tags), tags[i] is the index of the centroid of vectors[i]
    """
    if clusters_count < 1:
        raise ValueError('Bad clusters count: {}'.format(clusters_count))
    vectors = as_dataset(vectors)
    clusters_count = min(clusters_count, len(vectors))
    if rng is None:
        rng = random.Random(seed)

    centroids = get_first_centroids(vectors, clusters_count, rng)
    tags = allocate_clusters(vectors, centroids, np.zeros(len(vectors), dtype=int))
    error = mean_squared_error(vectors, centroids, tags)
    previous_error = 2 * error

    iterations = 0
    while not has_converged(error, previous_error) and iterations < max_iterations:
        previous_error = error
        centroids = get_centroids(vectors, tags, clusters_count)
        tags = allocate_clusters(vectors, centroids, tags)
        error = mean_squared_error(vectors, centroids, tags)
        iterations += 1

    return centroids, tags
