"""
패턴 신뢰도 분석 모듈

과거 당첨 데이터에서 패턴별 만족률을 구하고, 만족률을 10으로 나눈 값을 가중치로 사용합니다.
호출할 때마다 새로 계산하며 결과를 캐시하지 않습니다.
"""

from dataclasses import dataclass
from typing import Dict, Sequence

import pandas as pd

from shared.error_handler import get_logger, log_performance
from ..model.draw_record import DrawRecord, sort_by_round
from .patterns import DEFAULT_BOUNDS, Pattern, PatternBounds, evaluate_patterns

logger = get_logger(__name__)


@dataclass(frozen=True)
class PatternReliability:
    """패턴 신뢰도"""
    pattern: Pattern
    satisfaction_rate: float
    weight: float
    total_samples: int
    satisfied_count: int

    @property
    def pattern_name(self) -> str:
        return self.pattern.label


def calculate_pattern_reliability(
    pattern: Pattern,
    satisfied_count: int,
    total_samples: int
) -> PatternReliability:
    """만족 횟수로 신뢰도 계산 (표본이 없으면 만족률 0)"""
    if total_samples > 0:
        satisfaction_rate = (satisfied_count / total_samples) * 100
    else:
        satisfaction_rate = 0.0
    return PatternReliability(
        pattern=pattern,
        satisfaction_rate=satisfaction_rate,
        weight=satisfaction_rate / 10.0,
        total_samples=total_samples,
        satisfied_count=satisfied_count
    )


@log_performance
def analyze_pattern_reliability(
    data: Sequence[DrawRecord],
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> Dict[Pattern, PatternReliability]:
    """
    패턴별 신뢰도 분석

    Args:
        data: 과거 당첨 데이터
        bounds: 패턴 경계값

    Returns:
        패턴별 신뢰도 (Pattern 정의 순서)
    """
    if not data:
        logger.warning("분석할 데이터가 없어 모든 패턴의 만족률을 0으로 처리합니다.")

    satisfied = {pattern: 0 for pattern in Pattern}
    for record in data:
        for pattern, ok in evaluate_patterns(record, bounds).items():
            if ok:
                satisfied[pattern] += 1

    total = len(data)
    return {
        pattern: calculate_pattern_reliability(pattern, count, total)
        for pattern, count in satisfied.items()
    }


def analyze_recent_trends(
    data: Sequence[DrawRecord],
    recent_count: int = 50,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> Dict[Pattern, float]:
    """최근 N회 만족률 - 전체 만족률"""
    recent_data = sort_by_round(data, descending=True)[:recent_count]
    recent = analyze_pattern_reliability(recent_data, bounds)
    overall = analyze_pattern_reliability(data, bounds)
    return {
        pattern: recent[pattern].satisfaction_rate - overall[pattern].satisfaction_rate
        for pattern in Pattern
    }


def reliability_frame(reliabilities: Dict[Pattern, PatternReliability]) -> pd.DataFrame:
    """보고용 데이터프레임 (만족률 내림차순)"""
    rows = [
        {
            'pattern': r.pattern_name,
            'satisfaction_rate': r.satisfaction_rate,
            'weight': r.weight,
            'satisfied_count': r.satisfied_count,
            'total_samples': r.total_samples,
        }
        for r in reliabilities.values()
    ]
    frame = pd.DataFrame(
        rows,
        columns=['pattern', 'satisfaction_rate', 'weight', 'satisfied_count', 'total_samples']
    )
    return frame.sort_values('satisfaction_rate', ascending=False, kind='mergesort').reset_index(drop=True)
