"""
sortcomp: differential correctness and hot/cold benchmarking for stable sorts.

Subpackages:
    patterns    seeded input pattern generators
    values      value variants, deep equality, pattern transforms
    algorithms  sort implementations (reference and candidates)
    validate    differential tester, panic-safety stress test, properties
    bench       hot/cold timing, prediction-state trasher, comparison counts
"""

__version__ = "0.1.0"
