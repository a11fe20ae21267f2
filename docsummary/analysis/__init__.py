from docsummary.analysis.analyzer import Analyzer
from docsummary.analysis.base import BaseAnalyzer
from docsummary.analysis.factory import AnalyzerFactory
from docsummary.analysis.models import AnalysisResult

__all__ = ["AnalysisResult", "Analyzer", "AnalyzerFactory", "BaseAnalyzer"]
