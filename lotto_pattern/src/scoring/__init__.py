"""
조합 스코어링 모듈
"""

from .scoring_system import (
    PatternScore, ScoringConfig, WeightingMode,
    calculate_score, calculate_score_batch, get_score_statistics
)

__all__ = ['PatternScore', 'ScoringConfig', 'WeightingMode',
           'calculate_score', 'calculate_score_batch', 'get_score_statistics']
