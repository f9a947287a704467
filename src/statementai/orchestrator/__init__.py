"""Orchestrator module."""
from .processor import AnalysisPipeline, ProcessingStatus

__all__ = ["AnalysisPipeline", "ProcessingStatus"]
