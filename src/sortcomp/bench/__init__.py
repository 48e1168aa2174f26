"""
Benchmarking: hot/cold timing, prediction-state trashing and comparison counts.
"""

from .counting import ComparisonCounter, comparison_run_count, counting_compare, measure_comp_count
from .measure import BatchSize, batch_size_for, time_cold, time_hot
from .trash import trash_prediction_state

__all__ = [
    "ComparisonCounter",
    "comparison_run_count",
    "counting_compare",
    "measure_comp_count",
    "BatchSize",
    "batch_size_for",
    "time_cold",
    "time_hot",
    "trash_prediction_state",
]
