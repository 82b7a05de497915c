import random

from tsp_evo.evolutionary import EvolutionConfig, EvolutionarySearch


def main():
    cfg = EvolutionConfig(
        number_of_cities=12,
        mutation_rate=0.05,
        generations_count=20,
        random_seed=7,
    )
    search = EvolutionarySearch(cfg, rng=random.Random(cfg.random_seed))
    for g in range(cfg.generations_count):
        search.step()
        print(f"gen {g+1}: best cost={search.best_cost()}")
    order, cost = search.best_order()
    print(f"final order={order} cost={cost} improvement={search.improvement():.2f}%")


if __name__ == "__main__":
    main()
