"""
패턴 트렌드 분석 모듈

이 모듈은 패턴 만족률의 시간적 변화를 분석하여 다음과 같은 정보를 제공합니다:
- 전체 대비 최근 N회 만족률 변화와 추세 방향
- 슬라이딩 윈도우 만족률의 변동성 (표준편차)
- 최근 위반 회차
- 윈도우 크기별 만족/위반률
- 위반 주기
- 패턴 간 상관관계 (파이 계수)
"""

import math
from dataclasses import dataclass
from enum import Enum
from itertools import combinations
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.stats import chi2_contingency

from shared.error_handler import get_logger, log_performance
from ..model.draw_record import DrawRecord, sort_by_round
from ..analysis.patterns import DEFAULT_BOUNDS, Pattern, PatternBounds, evaluate_patterns
from ..analysis.reliability import analyze_pattern_reliability

logger = get_logger(__name__)

MAX_RECENT_VIOLATIONS = 10


class TrendDirection(Enum):
    STRONGLY_UP = 'strongly_up'
    UP = 'up'
    STABLE = 'stable'
    DOWN = 'down'
    STRONGLY_DOWN = 'strongly_down'


@dataclass
class TrendConfig:
    """트렌드 분석 설정"""
    recent_count: int = 50
    window_size: int = 10
    moving_window_sizes: Tuple[int, ...] = (10, 20, 30, 50)
    min_cycle_length: int = 5
    max_cycle_length: int = 50
    correlation_threshold: float = 0.7

    def __post_init__(self):
        self.moving_window_sizes = tuple(int(w) for w in self.moving_window_sizes)
        if self.window_size <= 0 or self.recent_count <= 0:
            raise ValueError("window_size와 recent_count는 1 이상이어야 합니다.")
        if self.min_cycle_length > self.max_cycle_length:
            raise ValueError(
                f"주기 범위가 잘못되었습니다: {self.min_cycle_length} > {self.max_cycle_length}"
            )


@dataclass(frozen=True)
class PatternTrend:
    pattern: Pattern
    overall_satisfaction_rate: float
    recent_satisfaction_rate: float
    trend_value: float
    trend_direction: TrendDirection
    volatility: float
    recent_violations: List[int]
    recommendation: str


@dataclass(frozen=True)
class WindowAnalysis:
    window_size: int
    start_round: int
    end_round: int
    satisfaction_rate: float
    violation_rate: float


@dataclass(frozen=True)
class PatternCycle:
    pattern: Pattern
    start_round: int
    end_round: int
    cycle_length: int
    violation_rounds: List[int]


@dataclass(frozen=True)
class PatternCorrelation:
    pattern1: Pattern
    pattern2: Pattern
    correlation_value: float
    correlation_type: str
    p_value: Optional[float] = None


def build_pattern_frame(
    data: Sequence[DrawRecord],
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> pd.DataFrame:
    """
    회차 내림차순 패턴 판정 행렬

    Returns:
        인덱스는 회차, 열은 Pattern, 값은 만족 여부(bool)인 데이터프레임
    """
    ordered = sort_by_round(data, descending=True)
    rows = [evaluate_patterns(record, bounds) for record in ordered]
    frame = pd.DataFrame(rows, columns=list(Pattern), dtype=bool)
    frame.index = pd.Index([record.round for record in ordered], name='round')
    return frame


def determine_trend_direction(trend_value: float) -> TrendDirection:
    if trend_value > 5.0:
        return TrendDirection.STRONGLY_UP
    if trend_value > 2.0:
        return TrendDirection.UP
    if trend_value > -2.0:
        return TrendDirection.STABLE
    if trend_value > -5.0:
        return TrendDirection.DOWN
    return TrendDirection.STRONGLY_DOWN


def calculate_volatility(satisfied: pd.Series, window_size: int) -> float:
    """
    슬라이딩 윈도우 만족률의 모표준편차

    데이터가 윈도우 크기의 2배 미만이면 0을 반환합니다.
    """
    if len(satisfied) < window_size * 2:
        return 0.0
    rates = satisfied.astype(float).rolling(window_size).mean().dropna() * 100
    if len(rates) < 2:
        return 0.0
    return float(np.std(rates.to_numpy()))


def find_recent_violations(satisfied: pd.Series) -> List[int]:
    """최근 데이터(회차 내림차순)에서 위반 회차 최대 10개"""
    return [int(r) for r in satisfied.index[~satisfied.to_numpy()]][:MAX_RECENT_VIOLATIONS]


def generate_recommendation(
    direction: TrendDirection,
    recent_rate: float,
    volatility: float
) -> str:
    if volatility < 5.0:
        stability = "안정적"
    elif volatility < 10.0:
        stability = "보통"
    else:
        stability = "변동성 높음"

    rate = f"{recent_rate:.1f}%"
    messages = {
        TrendDirection.STRONGLY_UP: f"최근 상승세가 강함 ({rate}). {stability}. 가중치 상향 조정 고려",
        TrendDirection.UP: f"상승 추세 ({rate}). {stability}. 현재 가중치 유지 권장",
        TrendDirection.STABLE: f"안정적 유지 ({rate}). {stability}. 기본 가중치 적용",
        TrendDirection.DOWN: f"하락 추세 ({rate}). {stability}. 가중치 하향 고려",
        TrendDirection.STRONGLY_DOWN: f"급격한 하락 ({rate}). {stability}. 가중치 대폭 하향 권장",
    }
    return messages[direction]


@log_performance
def analyze_pattern_trends(
    data: Sequence[DrawRecord],
    recent_count: Optional[int] = None,
    window_size: Optional[int] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS,
    config: Optional[TrendConfig] = None
) -> Dict[Pattern, PatternTrend]:
    """
    패턴별 트렌드 분석

    Args:
        data: 과거 당첨 데이터
        recent_count: 최근 구간 회차 수 (없으면 config.recent_count)
        window_size: 변동성 계산용 윈도우 크기 (없으면 config.window_size)
        bounds: 패턴 경계값
        config: 트렌드 분석 설정

    Returns:
        패턴별 트렌드 (Pattern 정의 순서)
    """
    config = config or TrendConfig()
    recent_count = config.recent_count if recent_count is None else recent_count
    window_size = config.window_size if window_size is None else window_size

    frame = build_pattern_frame(data, bounds)
    recent_data = sort_by_round(data, descending=True)[:recent_count]
    recent_frame = frame.iloc[:recent_count]

    overall = analyze_pattern_reliability(data, bounds)
    recent = analyze_pattern_reliability(recent_data, bounds)

    trends = {}
    for pattern in Pattern:
        volatility = calculate_volatility(frame[pattern], window_size)
        trend_value = recent[pattern].satisfaction_rate - overall[pattern].satisfaction_rate
        direction = determine_trend_direction(trend_value)
        trends[pattern] = PatternTrend(
            pattern=pattern,
            overall_satisfaction_rate=overall[pattern].satisfaction_rate,
            recent_satisfaction_rate=recent[pattern].satisfaction_rate,
            trend_value=trend_value,
            trend_direction=direction,
            volatility=volatility,
            recent_violations=find_recent_violations(recent_frame[pattern]),
            recommendation=generate_recommendation(
                direction, recent[pattern].satisfaction_rate, volatility
            )
        )
    return trends


def analyze_moving_window(
    data: Sequence[DrawRecord],
    pattern: Pattern,
    window_sizes: Optional[Sequence[int]] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS,
    config: Optional[TrendConfig] = None
) -> List[WindowAnalysis]:
    """최근 회차 기준 윈도우 크기별 만족/위반률 (데이터보다 큰 윈도우는 제외)"""
    if window_sizes is None:
        window_sizes = (config or TrendConfig()).moving_window_sizes
    pattern = Pattern.parse(pattern)
    satisfied = build_pattern_frame(data, bounds)[pattern]

    analyses = []
    for window_size in window_sizes:
        if window_size <= 0 or len(satisfied) < window_size:
            continue
        window = satisfied.iloc[:window_size]
        satisfaction_rate = (int(window.sum()) / window_size) * 100
        analyses.append(WindowAnalysis(
            window_size=window_size,
            start_round=int(window.index[-1]),
            end_round=int(window.index[0]),
            satisfaction_rate=satisfaction_rate,
            violation_rate=100 - satisfaction_rate
        ))
    return analyses


def find_pattern_cycles(
    data: Sequence[DrawRecord],
    pattern: Pattern,
    min_cycle_length: Optional[int] = None,
    max_cycle_length: Optional[int] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS,
    config: Optional[TrendConfig] = None
) -> List[PatternCycle]:
    """연속된 위반 회차 간격이 [min, max] 범위인 주기 목록 (최신 순)"""
    config = config or TrendConfig()
    if min_cycle_length is None:
        min_cycle_length = config.min_cycle_length
    if max_cycle_length is None:
        max_cycle_length = config.max_cycle_length
    pattern = Pattern.parse(pattern)
    satisfied = build_pattern_frame(data, bounds)[pattern]
    violations = [int(r) for r in satisfied.index[~satisfied.to_numpy()]]

    cycles = []
    for newer, older in zip(violations, violations[1:]):
        gap = newer - older
        if min_cycle_length <= gap <= max_cycle_length:
            cycles.append(PatternCycle(
                pattern=pattern,
                start_round=older,
                end_round=newer,
                cycle_length=gap,
                violation_rounds=[older, newer]
            ))
    return cycles


def calculate_phi(
    both_satisfied: int,
    pattern1_only: int,
    pattern2_only: int,
    neither_satisfied: int
) -> float:
    """2x2 분할표의 파이 계수 (분모가 0이면 0)"""
    total = both_satisfied + pattern1_only + pattern2_only + neither_satisfied
    if total == 0:
        return 0.0

    p1 = (both_satisfied + pattern1_only) / total
    p2 = (both_satisfied + pattern2_only) / total
    p12 = both_satisfied / total

    denominator = math.sqrt(p1 * (1 - p1) * p2 * (1 - p2))
    if denominator == 0.0:
        return 0.0
    return (p12 - p1 * p2) / denominator


def _contingency_p_value(table: np.ndarray) -> Optional[float]:
    # 행/열 합 중 0이 있으면 기대빈도가 0이 되어 검정할 수 없음
    if (table.sum(axis=0) == 0).any() or (table.sum(axis=1) == 0).any():
        return None
    _, p_value, _, _ = chi2_contingency(table, correction=False)
    return float(p_value)


@log_performance
def analyze_pattern_correlations(
    data: Sequence[DrawRecord],
    threshold: Optional[float] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS,
    config: Optional[TrendConfig] = None
) -> List[PatternCorrelation]:
    """
    패턴 쌍별 상관관계 분석

    |phi| >= threshold 인 쌍만 반환하며, |phi| 내림차순으로 정렬합니다.
    """
    if threshold is None:
        threshold = (config or TrendConfig()).correlation_threshold
    frame = build_pattern_frame(data, bounds)

    correlations = []
    for pattern1, pattern2 in combinations(list(Pattern), 2):
        check1 = frame[pattern1].to_numpy()
        check2 = frame[pattern2].to_numpy()
        table = np.array([
            [int((check1 & check2).sum()), int((check1 & ~check2).sum())],
            [int((~check1 & check2).sum()), int((~check1 & ~check2).sum())],
        ])
        phi = calculate_phi(table[0, 0], table[0, 1], table[1, 0], table[1, 1])
        if abs(phi) >= threshold:
            correlations.append(PatternCorrelation(
                pattern1=pattern1,
                pattern2=pattern2,
                correlation_value=phi,
                correlation_type='positive' if phi > 0 else 'negative',
                p_value=_contingency_p_value(table) if phi != 0 else None
            ))

    logger.info(f"상관계수 {threshold} 이상 패턴 쌍: {len(correlations)}개")
    return sorted(correlations, key=lambda c: abs(c.correlation_value), reverse=True)
