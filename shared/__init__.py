"""
공용 유틸리티

로깅 설정과 성능 측정 데코레이터를 제공합니다.
"""

from .error_handler import get_logger, setup_logger, log_performance

__all__ = ['get_logger', 'setup_logger', 'log_performance']
