"""
점수 기반 필터링 모듈
"""

from .score_filter import FilterConfig, FilterResult, SortOption, filter_by_score

__all__ = ['FilterConfig', 'FilterResult', 'SortOption', 'filter_by_score']
