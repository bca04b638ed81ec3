"""
로또 번호 분석 모듈

이 패키지는 17개 당첨 패턴 판정, 패턴 신뢰도 분석, 회차 조회 기능을 제공합니다.
"""

from .patterns import Pattern, PatternBounds, StartEndRule, evaluate_patterns
from .reliability import PatternReliability, analyze_pattern_reliability, analyze_recent_trends

__all__ = ['Pattern', 'PatternBounds', 'StartEndRule', 'evaluate_patterns',
           'PatternReliability', 'analyze_pattern_reliability', 'analyze_recent_trends']
