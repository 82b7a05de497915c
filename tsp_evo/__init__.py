"""
Toy TSP solved with a generational evolutionary algorithm over integer genotypes.
"""

__all__ = [
    "codec",
    "costs",
    "data",
    "evaluation",
    "evolutionary",
    "operators",
]
