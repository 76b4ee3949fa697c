"""
Result export

This module converts analysis results into JSON-ready structures.
"""

from .serializers import metrics_to_dict, screening_to_dict, save_json

__all__ = ['metrics_to_dict', 'screening_to_dict', 'save_json']
