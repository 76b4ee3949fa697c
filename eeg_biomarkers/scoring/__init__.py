"""
Risk scoring

This module turns spectral and connectivity features into risk sub-scores,
headline biomarker summaries and a coarse statistical screen.
"""

from .risk import RiskScorer, average_features, clamp
from .biomarkers import classify_risk_level, summarize_biomarkers
from .screening import screen_recording

__all__ = ['RiskScorer', 'average_features', 'clamp',
           'classify_risk_level', 'summarize_biomarkers', 'screen_recording']
