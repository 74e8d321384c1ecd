"""
Service layer: the parallel pipeline phases, their orchestration and reports.
"""

from .ingestion import IngestionPool
from .keyword_extraction import KeywordExtractionPool
from .pipeline import AnalysisPipeline
from .report_generator import ReportBuilder, ReportFiles, normalize_category

__all__ = [
    'IngestionPool',
    'KeywordExtractionPool',
    'AnalysisPipeline',
    'ReportBuilder',
    'ReportFiles',
    'normalize_category'
]
