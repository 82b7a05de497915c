import random
from typing import Iterator, List, Sequence

import networkx as nx
import numpy as np


MIN_COST = 10
MAX_COST = 100


class CostMatrix:
    """Immutable symmetric travel costs between cities, zero on the diagonal."""

    def __init__(self, values: Sequence[Sequence[int]]):
        mat = np.array(values, dtype=np.int64)
        if mat.ndim != 2 or mat.shape[0] != mat.shape[1]:
            raise ValueError(f"Cost matrix must be square, got shape {mat.shape}.")
        if (np.diag(mat) != 0).any():
            raise ValueError("Cost matrix diagonal must be zero.")
        if (mat != mat.T).any():
            raise ValueError("Cost matrix must be symmetric.")
        if (mat < 0).any():
            raise ValueError("Costs must be non-negative.")
        mat.setflags(write=False)
        self._values = mat

    @classmethod
    def random(
        cls, n: int, rng: random.Random, low: int = MIN_COST, high: int = MAX_COST
    ) -> "CostMatrix":
        mat = [[0] * n for _ in range(n)]
        for i in range(n):
            for j in range(i + 1, n):
                cost = rng.randint(low, high)
                mat[i][j] = cost
                mat[j][i] = cost
        return cls(mat)

    @classmethod
    def from_graph(cls, graph: nx.Graph) -> "CostMatrix":
        """Costs from ``"weight"`` edge attributes; directed graphs must be symmetric."""
        nodes = sorted(graph.nodes())
        idx_map = {n: i for i, n in enumerate(nodes)}
        mat = [[0] * len(nodes) for _ in nodes]
        for u, v, w in graph.edges(data="weight", default=0):
            if u == v:
                continue
            mat[idx_map[u]][idx_map[v]] = int(w)
            if not graph.is_directed():
                mat[idx_map[v]][idx_map[u]] = int(w)
        return cls(mat)

    def to_graph(self) -> nx.Graph:
        graph = nx.complete_graph(self.size)
        for u, v in graph.edges():
            graph[u][v]["weight"] = int(self._values[u, v])
        return graph

    @property
    def size(self) -> int:
        return self._values.shape[0]

    @property
    def values(self) -> np.ndarray:
        return self._values

    def cost(self, a: int, b: int) -> int:
        n = self.size
        if not (0 <= a < n and 0 <= b < n):
            raise IndexError(f"City pair ({a}, {b}) outside [0, {n}).")
        return int(self._values[a, b])

    def __getitem__(self, i: int) -> np.ndarray:
        if not 0 <= i < self.size:
            raise IndexError(f"City {i} outside [0, {self.size}).")
        return self._values[i]

    def __len__(self) -> int:
        return self.size

    def rows(self) -> Iterator[List[int]]:
        for row in self._values:
            yield [int(c) for c in row]

    def __eq__(self, other) -> bool:
        if not isinstance(other, CostMatrix):
            return NotImplemented
        return np.array_equal(self._values, other._values)
