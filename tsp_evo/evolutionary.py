import math
import random
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Tuple

from .codec import UPPER_BOUND, Genotype, Order, random_population, traversing_order
from .costs import CostMatrix
from .evaluation import improvement_percent, population_costs
from .operators import ConfigurationError, CrossStrategy, cross, mutate, tournament_selection


@dataclass
class EvolutionConfig:
    number_of_cities: int = 100
    mutation_rate: float = 0.05
    generations_count: int = 100
    cross_strategy: str = CrossStrategy.SINGLE_POINT.value
    present_costs: bool = False
    upper_bound: int = UPPER_BOUND
    random_seed: Optional[int] = None

    def validate(self) -> None:
        if self.number_of_cities < 2:
            raise ConfigurationError(f"number_of_cities must be >= 2, got {self.number_of_cities}.")
        if not math.isfinite(self.mutation_rate) or self.mutation_rate < 0:
            raise ConfigurationError(f"mutation_rate must be finite and >= 0, got {self.mutation_rate}.")
        if self.generations_count < 0:
            raise ConfigurationError(f"generations_count must be >= 0, got {self.generations_count}.")
        if self.upper_bound < 0:
            raise ConfigurationError(f"upper_bound must be >= 0, got {self.upper_bound}.")
        CrossStrategy.parse(self.cross_strategy)


class EvolutionarySearch:
    def __init__(
        self,
        config: EvolutionConfig,
        costs: CostMatrix = None,
        rng: random.Random = None,
    ):
        config.validate()
        self.cfg = config
        self.strategy = CrossStrategy.parse(config.cross_strategy)
        self.rng = rng or random.Random(config.random_seed)
        n = config.number_of_cities
        self.population: List[Genotype] = random_population(n, self.rng)
        self.offspring: List[Genotype] = []
        if costs is None:
            costs = CostMatrix.random(n, self.rng)
        elif costs.size != n:
            raise ConfigurationError(
                f"Cost matrix covers {costs.size} cities, config asks for {n}."
            )
        self.costs = costs
        self.generation = 0
        self._history: List[int] = []

    def evaluate_population(self) -> List[int]:
        return population_costs(self.costs, self.population, self.cfg.upper_bound)

    def _record(self) -> None:
        current = min(self.evaluate_population(), default=None)
        if current is None:
            return
        if self._history:
            current = min(current, self._history[-1])
        self._history.append(current)

    def step(self) -> None:
        if not self._history:
            self._record()
        self.offspring = cross(self.population, self.strategy, self.rng)
        mutate(
            self.population,
            self.offspring,
            self.cfg.number_of_cities,
            self.cfg.mutation_rate,
            self.rng,
        )
        self.population = tournament_selection(
            self.population, self.offspring, self.costs, self.rng, self.cfg.upper_bound
        )
        self.offspring = []
        self.generation += 1
        self._record()

    def run(self, generations: int = None) -> Tuple[int, ...]:
        if generations is None:
            generations = self.cfg.generations_count
        if generations < 0:
            raise ConfigurationError(f"generations must be >= 0, got {generations}.")
        if not self._history:
            self._record()
        for _ in range(generations):
            self.step()
        return self.history

    @property
    def history(self) -> Tuple[int, ...]:
        return tuple(self._history)

    def best_cost(self) -> Optional[int]:
        return self._history[-1] if self._history else None

    def best_order(self) -> Tuple[Optional[Order], Optional[int]]:
        scored = self.evaluate_population()
        if not scored:
            return None, None
        best_idx = min(range(len(scored)), key=lambda i: scored[i])
        return traversing_order(self.population[best_idx], self.cfg.upper_bound), scored[best_idx]

    def improvement(self) -> float:
        return improvement_percent(self._history)

    def to_state(self) -> Dict:
        version, internal, gauss_next = self.rng.getstate()
        return {
            "cfg": asdict(self.cfg),
            "generation": self.generation,
            "population": [list(g) for g in self.population],
            "costs": list(self.costs.rows()),
            "history": list(self._history),
            "rng_state": [version, list(internal), gauss_next],
        }

    @classmethod
    def from_state(cls, state: Dict, rng: random.Random = None) -> "EvolutionarySearch":
        cfg = EvolutionConfig(**state["cfg"])
        search = cls(cfg, costs=CostMatrix(state["costs"]), rng=rng)
        search.generation = state.get("generation", 0)
        population = state.get("population", [])
        if population:
            search.population = [list(g) for g in population]
        search._history = list(state.get("history", []))
        rng_state = state.get("rng_state")
        if rng_state:
            version, internal, gauss_next = rng_state
            search.rng.setstate((version, tuple(internal), gauss_next))
        return search
