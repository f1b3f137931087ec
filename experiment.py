import random
from typing import List, Tuple

import numpy as np

from kmeans import k_means, mean_squared_error

DEFAULT_CONFIG = {
    'clusters count': range(1, 9),
    'clusters': 4,
    'vectors per cluster': 50,
    'dimensions': 2,
    'spread': 1.0,
    'seed': 0,
    'target explained': 0.9,
}

CENTRE_BOX = -10.0, 10.0


def generate_vectors(clusters: int, vectors_per_cluster: int, dimensions: int, spread: float,
                     rng: random.Random) -> Tuple[np.ndarray, np.ndarray]:
    vectors = []
    labels = []
    for label in range(clusters):
        centre = [rng.uniform(*CENTRE_BOX) for _ in range(dimensions)]
        for _ in range(vectors_per_cluster):
            vectors.append([rng.gauss(x, spread) for x in centre])
            labels.append(label)
    return np.array(vectors), np.array(labels, dtype=int)


class Result(object):
    def __init__(self, clusters_count: int, error: float, explained: float):
        self.clusters_count = clusters_count
        self.error = error
        self.explained = explained

    def __repr__(self):
        return 'Result(clusters_count={}, error={:.4f}, explained={:.2%})'.format(
            self.clusters_count, self.error, self.explained)


class Experiment(object):
    """Sweeps the number of clusters over a synthetic dataset with known groups."""

    def __init__(self, config: dict):
        self.validate(config)
        self.clusters_count = list(config['clusters count'])
        self.target_explained = config['target explained']
        self.seed = config['seed']
        self._total_variance = None

        self.vectors, self.labels = generate_vectors(
            config['clusters'], config['vectors per cluster'], config['dimensions'], config['spread'],
            random.Random(self.seed))
        self.results = []  # type: List[Result]

    @staticmethod
    def validate(config: dict):
        missing = [key for key in DEFAULT_CONFIG if key not in config]
        if missing:
            raise ValueError('Missing config keys: {}'.format(', '.join(missing)))
        if not config['clusters count'] or min(config['clusters count']) < 1:
            raise ValueError('Clusters counts must be positive: {}'.format(list(config['clusters count'])))
        for key in ('clusters', 'vectors per cluster', 'dimensions'):
            if config[key] < 1:
                raise ValueError('{} must be positive: {}'.format(key, config[key]))
        if config['spread'] < 0:
            raise ValueError('spread must not be negative: {}'.format(config['spread']))
        if not 0 <= config['target explained'] <= 1:
            raise ValueError('target explained must be in [0, 1]: {}'.format(config['target explained']))

    @property
    def total_variance(self) -> float:
        if self._total_variance is None:
            mean = self.vectors.mean(axis=0)
            tags = np.zeros(len(self.vectors), dtype=int)
            self._total_variance = mean_squared_error(self.vectors, mean[np.newaxis, :], tags)
        return self._total_variance

    def explained(self, error: float) -> float:
        if self.total_variance == 0:
            return 1.0
        return 1 - error / self.total_variance

    def run(self) -> List[Result]:
        self.results = []
        for i in self.clusters_count:
            centroids, tags = k_means(self.vectors, i, seed=self.seed)
            error = mean_squared_error(self.vectors, centroids, tags)
            result = Result(len(centroids), error, self.explained(error))
            print("Number of clusters: {0} MSE: {1:.4f} explained: {2:.2%}".format(
                result.clusters_count, result.error, result.explained))
            self.results.append(result)
        return self.results

    @property
    def best(self) -> Result:
        if not self.results:
            raise ValueError('Experiment has not been run')
        for result in sorted(self.results, key=lambda r: r.clusters_count):
            if result.explained >= self.target_explained:
                return result
        return max(self.results, key=lambda r: r.clusters_count)


def main():
    experiment = Experiment(config=DEFAULT_CONFIG)
    experiment.run()
    best = experiment.best
    print("Best number of clusters: {0} (generated with {1}) {2:.2%}".format(
        best.clusters_count, DEFAULT_CONFIG['clusters'], best.explained))


if __name__ == '__main__':
    main()
