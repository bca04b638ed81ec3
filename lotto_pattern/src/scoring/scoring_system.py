"""
로또 패턴 스코어링 시스템

조합 하나에 대해 17개 패턴을 판정하고, 만족한 패턴의 가중치 합을
전체 가중치 합으로 나누어 0~100 점수와 등급으로 환산합니다.

가중치 결정 방식:
- STATIC: 전체 과거 데이터의 패턴 신뢰도 가중치
- CUSTOM: 사용자 지정 가중치 (지정되지 않은 패턴은 5.0)
- DYNAMIC: 최근 N회 만족률로 전체 가중치를 보정
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence, Union

import numpy as np

from shared.error_handler import get_logger, log_performance
from ..model.draw_record import DrawRecord, sort_by_round
from ..analysis.patterns import DEFAULT_BOUNDS, Pattern, PatternBounds, evaluate_patterns
from ..analysis.reliability import analyze_pattern_reliability

logger = get_logger(__name__)

DEFAULT_CUSTOM_WEIGHT = 5.0

# (최소 점수, 등급) - 점수가 경계값 이상이면 해당 등급
GRADE_THRESHOLDS = (
    (95.0, 'S+'),
    (90.0, 'S'),
    (85.0, 'A+'),
    (80.0, 'A'),
    (75.0, 'B+'),
    (70.0, 'B'),
    (65.0, 'C+'),
    (60.0, 'C'),
)
LOWEST_GRADE = 'D'
GRADES = tuple(grade for _, grade in GRADE_THRESHOLDS) + (LOWEST_GRADE,)


class WeightingMode(Enum):
    STATIC = 'static'
    CUSTOM = 'custom'
    DYNAMIC = 'dynamic'


@dataclass
class ScoringConfig:
    """스코어링 설정"""
    weighting_mode: WeightingMode = WeightingMode.STATIC
    custom_weights: Dict[Pattern, float] = field(default_factory=dict)
    recent_data_count: int = 50

    def __post_init__(self):
        if not isinstance(self.weighting_mode, WeightingMode):
            self.weighting_mode = WeightingMode(str(self.weighting_mode).lower())
        self.custom_weights = {
            Pattern.parse(key): float(value)
            for key, value in (self.custom_weights or {}).items()
        }
        if self.recent_data_count <= 0:
            raise ValueError(f"recent_data_count는 1 이상이어야 합니다: {self.recent_data_count}")


@dataclass(frozen=True)
class PatternDetail:
    pattern: Pattern
    weight: float
    satisfied: bool

    @property
    def name(self) -> str:
        return self.pattern.label


@dataclass(frozen=True)
class PatternScore:
    """조합 점수"""
    round: int
    numbers: List[int]
    score: float
    satisfied_patterns: List[PatternDetail]
    violated_patterns: List[PatternDetail]
    grade: str

    @property
    def satisfied_names(self) -> List[str]:
        return [d.name for d in self.satisfied_patterns]

    @property
    def violated_names(self) -> List[str]:
        return [d.name for d in self.violated_patterns]


@dataclass(frozen=True)
class ScoreStatistics:
    average_score: float
    min_score: float
    max_score: float
    median_score: float
    grade_distribution: Dict[str, int]


def calculate_grade(score: float) -> str:
    """점수 → 등급 (경계값 포함: 90.0은 S, 95.0은 S+)"""
    for minimum, grade in GRADE_THRESHOLDS:
        if score >= minimum:
            return grade
    return LOWEST_GRADE


def get_static_weights(
    historical_data: Sequence[DrawRecord],
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> Dict[Pattern, float]:
    reliability = analyze_pattern_reliability(historical_data, bounds)
    return {pattern: r.weight for pattern, r in reliability.items()}


def calculate_dynamic_weights(
    historical_data: Sequence[DrawRecord],
    recent_count: int,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> Dict[Pattern, float]:
    """
    최근 만족률로 보정한 가중치

    weight = 전체 가중치 * (0.7 + 0.3 * 최근 만족률 / 전체 만족률)
    전체 만족률이 0이면 가중치도 0입니다.
    """
    recent_data = sort_by_round(historical_data, descending=True)[:recent_count]
    recent = analyze_pattern_reliability(recent_data, bounds)
    overall = analyze_pattern_reliability(historical_data, bounds)

    weights = {}
    for pattern in Pattern:
        overall_rate = overall[pattern].satisfaction_rate
        if overall_rate == 0:
            weights[pattern] = 0.0
            continue
        adjustment = recent[pattern].satisfaction_rate / overall_rate
        weights[pattern] = overall[pattern].weight * (0.7 + 0.3 * adjustment)
    return weights


def resolve_weights(
    historical_data: Sequence[DrawRecord],
    config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> Dict[Pattern, float]:
    """설정된 방식으로 패턴별 가중치 결정"""
    config = config or ScoringConfig()
    if config.weighting_mode is WeightingMode.CUSTOM:
        return {
            pattern: config.custom_weights.get(pattern, DEFAULT_CUSTOM_WEIGHT)
            for pattern in Pattern
        }
    if config.weighting_mode is WeightingMode.DYNAMIC:
        return calculate_dynamic_weights(historical_data, config.recent_data_count, bounds)
    return get_static_weights(historical_data, bounds)


def score_with_weights(
    record: DrawRecord,
    weights: Mapping[Union[Pattern, str], float],
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> PatternScore:
    """이미 계산된 가중치로 조합 점수 계산"""
    lookup = {Pattern.parse(key): value for key, value in weights.items()}

    satisfied_patterns = []
    violated_patterns = []
    total_score = 0.0
    max_possible_score = 0.0

    for pattern, satisfied in evaluate_patterns(record, bounds).items():
        weight = lookup.get(pattern, DEFAULT_CUSTOM_WEIGHT)
        max_possible_score += weight
        detail = PatternDetail(pattern, weight, satisfied)
        if satisfied:
            satisfied_patterns.append(detail)
            total_score += weight
        else:
            violated_patterns.append(detail)

    if max_possible_score > 0:
        normalized_score = (total_score / max_possible_score) * 100
    else:
        normalized_score = 0.0

    return PatternScore(
        round=record.round,
        numbers=record.numbers,
        score=normalized_score,
        satisfied_patterns=sorted(satisfied_patterns, key=lambda d: d.weight, reverse=True),
        violated_patterns=sorted(violated_patterns, key=lambda d: d.weight, reverse=True),
        grade=calculate_grade(normalized_score)
    )


def calculate_score(
    record: DrawRecord,
    historical_data: Sequence[DrawRecord],
    config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> PatternScore:
    """
    조합 점수 계산

    Args:
        record: 평가할 조합
        historical_data: 가중치 계산에 사용할 과거 데이터
        config: 스코어링 설정
        bounds: 패턴 경계값

    Returns:
        점수, 등급, 만족/위반 패턴 (가중치 내림차순)
    """
    weights = resolve_weights(historical_data, config, bounds)
    return score_with_weights(record, weights, bounds)


@log_performance
def calculate_score_batch(
    records: Sequence[DrawRecord],
    historical_data: Sequence[DrawRecord],
    config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> List[PatternScore]:
    """여러 조합 점수 계산 (가중치는 한 번만 계산)"""
    weights = resolve_weights(historical_data, config, bounds)
    scores = [score_with_weights(record, weights, bounds) for record in records]
    logger.info(f"조합 {len(scores)}개 점수 계산 완료")
    return scores


def get_score_statistics(scores: Sequence[PatternScore]) -> ScoreStatistics:
    """점수 통계 (중간값은 정렬 후 n//2 번째 값)"""
    if not scores:
        return ScoreStatistics(0.0, 0.0, 0.0, 0.0, {})

    values = np.array([s.score for s in scores], dtype=float)
    median = float(np.sort(values)[len(values) // 2])
    distribution = Counter(s.grade for s in scores)

    return ScoreStatistics(
        average_score=float(values.mean()),
        min_score=float(values.min()),
        max_score=float(values.max()),
        median_score=median,
        grade_distribution={grade: distribution[grade] for grade in GRADES if grade in distribution}
    )
