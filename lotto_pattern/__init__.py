"""
로또 패턴 분석 시스템

이 패키지는 과거 당첨번호의 패턴 신뢰도 분석, 조합 스코어링,
점수 기반 필터링, 패턴 트렌드 분석 기능을 제공합니다.
"""

from pathlib import Path
from shared.error_handler import setup_logger
from .src.utils.config import Config
from .src.utils.data_loader import DataManager
from .src.model.draw_record import DrawRecord
from .src.analysis.patterns import Pattern, PatternBounds
from .src.scoring.scoring_system import ScoringConfig, WeightingMode, calculate_score
from .src.filtering.score_filter import FilterConfig, filter_by_score
from .src.trend.trend_analyzer import analyze_pattern_trends

# 패키지 로거 설정 (하위 모듈 로거가 전파)
logger = setup_logger(__name__)

# 프로젝트 루트 디렉토리
ROOT_DIR = Path(__file__).parent

# 버전
__version__ = "1.0.0"

__all__ = [
    'Config', 'DataManager', 'DrawRecord', 'Pattern', 'PatternBounds',
    'ScoringConfig', 'WeightingMode', 'calculate_score',
    'FilterConfig', 'filter_by_score', 'analyze_pattern_trends'
]
