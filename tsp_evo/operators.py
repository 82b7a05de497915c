import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

from .codec import UPPER_BOUND, Genotype
from .costs import CostMatrix
from .evaluation import genotype_cost


class ConfigurationError(ValueError):
    pass


class CrossStrategy(str, Enum):
    SINGLE_POINT = "single_point_cross"

    @classmethod
    def parse(cls, name) -> "CrossStrategy":
        if isinstance(name, cls):
            return name
        try:
            return cls(name)
        except ValueError:
            known = ", ".join(s.value for s in cls)
            raise ConfigurationError(f"Unknown cross strategy {name!r} (known: {known}).") from None


def single_point_cross(
    parent_a: Sequence[int], parent_b: Sequence[int], rng: random.Random
) -> Tuple[Genotype, Genotype]:
    length = len(parent_a)
    # Cut in [0, length - 1): the tail always carries at least one gene.
    point = rng.randrange(length - 1) if length > 1 else 0
    child_a = list(parent_a[:point]) + list(parent_b[point:])
    child_b = list(parent_b[:point]) + list(parent_a[point:])
    return child_a, child_b


def _crossover_fn(strategy: CrossStrategy):
    return {
        CrossStrategy.SINGLE_POINT: single_point_cross,
    }[strategy]


def cross(
    population: Sequence[Genotype], strategy: CrossStrategy, rng: random.Random
) -> List[Genotype]:
    crossover = _crossover_fn(strategy)
    offspring: List[Genotype] = []
    for i in range(0, len(population) - 1, 2):
        offspring.extend(crossover(population[i], population[i + 1], rng))
    return offspring


def mutate(
    population: List[Genotype],
    offspring: List[Genotype],
    n: int,
    rate: float,
    rng: random.Random,
) -> int:
    """Overwrite ``int(n * n * rate)`` random genes in place; returns the event count."""
    events = int(n * n * rate)
    pools = [population, offspring]
    if not any(pools):
        return 0
    for _ in range(events):
        pool = pools[rng.randrange(2)]
        if not pool:
            pool = population or offspring
        genotype = pool[rng.randrange(len(pool))]
        genotype[rng.randrange(len(genotype))] = rng.randrange(n)
    return events


@dataclass
class Tournament:
    winner: Genotype
    winner_cost: int
    loser: Genotype = None
    loser_cost: int = None


def tournament_rounds(
    population: Sequence[Genotype],
    offspring: Sequence[Genotype],
    costs: CostMatrix,
    rng: random.Random,
    upper_bound: int = UPPER_BOUND,
) -> List[Tournament]:
    pool = list(offspring) + list(population)
    rng.shuffle(pool)
    rounds: List[Tournament] = []
    for i in range(0, len(pool), 2):
        first = pool[i]
        first_cost = genotype_cost(costs, first, upper_bound)
        if i + 1 == len(pool):
            rounds.append(Tournament(winner=first, winner_cost=first_cost))
            continue
        second = pool[i + 1]
        second_cost = genotype_cost(costs, second, upper_bound)
        if second_cost <= first_cost:
            rounds.append(Tournament(second, second_cost, first, first_cost))
        else:
            rounds.append(Tournament(first, first_cost, second, second_cost))
    return rounds


def tournament_selection(
    population: Sequence[Genotype],
    offspring: Sequence[Genotype],
    costs: CostMatrix,
    rng: random.Random,
    upper_bound: int = UPPER_BOUND,
) -> List[Genotype]:
    """Pairwise tournaments over the shuffled offspring + population pool.

    Returns ``ceil(len(pool) / 2)`` survivors; an unpaired last individual
    survives without a match.
    """
    return [t.winner for t in tournament_rounds(population, offspring, costs, rng, upper_bound)]
