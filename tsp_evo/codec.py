"""
Genotype encoding and decoding.

A genotype is a list of ``n`` ints drawn from ``[0, n)``. It is not a
permutation: values may repeat or be missing. Decoding turns it into a visiting
order by sorting the slot indices on their value, ties kept in index order.
"""

import random
from typing import List, Sequence

import numpy as np


Genotype = List[int]
Order = List[int]

UPPER_BOUND = 255


def random_genotype(n: int, rng: random.Random) -> Genotype:
    return [rng.randrange(n) for _ in range(n)]


def random_population(n: int, rng: random.Random) -> List[Genotype]:
    return [random_genotype(n, rng) for _ in range(n)]


def traversing_order(genotype: Sequence[int], upper_bound: int = UPPER_BOUND) -> Order:
    """Slot indices ordered by genotype value (stable on ties).

    Slots whose value lies outside ``[0, upper_bound]`` are left out, so the
    order is shorter than the genotype when ``len(genotype) > upper_bound + 1``
    values are in play.
    """
    values = np.asarray(genotype, dtype=np.int64)
    if values.size == 0:
        return []
    idx = np.argsort(values, kind="stable")
    keep = (values[idx] >= 0) & (values[idx] <= upper_bound)
    return [int(i) for i in idx[keep]]
