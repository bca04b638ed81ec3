"""
패턴 트렌드 분석 모듈
"""

from .trend_analyzer import (
    PatternTrend, TrendConfig, TrendDirection,
    analyze_pattern_trends, analyze_pattern_correlations
)

__all__ = ['PatternTrend', 'TrendConfig', 'TrendDirection',
           'analyze_pattern_trends', 'analyze_pattern_correlations']
