"""
Corpus analysis module.
"""

from .aggregator import AggregationResult, Aggregator
from .keywords import extract_keywords
from .statistics import RankedEntry, Statistics, top_entry

__all__ = ['AggregationResult', 'Aggregator', 'extract_keywords', 'RankedEntry', 'Statistics', 'top_entry']
