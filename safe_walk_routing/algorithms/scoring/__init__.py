"""
Route safety scoring.
"""

from .safety_scorer import SafetyScorer, clamp_score

__all__ = [
    'SafetyScorer',
    'clamp_score'
]
