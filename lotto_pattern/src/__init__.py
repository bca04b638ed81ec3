"""
로또 패턴 분석 시스템 - 소스 코드

이 패키지는 로또 패턴 분석 시스템의 핵심 기능을 구현합니다.
"""

from .model.draw_record import DrawRecord, InvalidDrawError
from .analysis.patterns import Pattern, PatternBounds
from .utils.data_loader import DataManager, DataLoadError

__all__ = ['DrawRecord', 'InvalidDrawError', 'Pattern', 'PatternBounds',
           'DataManager', 'DataLoadError']
