"""
점수 기반 조합 필터

후보 조합들의 점수를 계산한 뒤 최소 점수, 등급, 필수/제외 패턴 조건으로 걸러내고
정렬 및 개수 제한을 적용합니다. 임계값별 결과 비교와 최적 임계값 탐색도 제공합니다.
"""

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence

import numpy as np

from shared.error_handler import get_logger, log_performance
from ..model.draw_record import DrawRecord
from ..analysis.patterns import DEFAULT_BOUNDS, Pattern, PatternBounds
from ..scoring.scoring_system import (
    GRADES, PatternScore, ScoringConfig, calculate_score_batch
)

logger = get_logger(__name__)

OPTIMAL_THRESHOLDS = tuple(float(t) for t in range(60, 100, 5))
DEFAULT_OPTIMAL_THRESHOLD = 80.0


class SortOption(Enum):
    SCORE_DESC = 'score_desc'
    SCORE_ASC = 'score_asc'
    ROUND_DESC = 'round_desc'
    ROUND_ASC = 'round_asc'


@dataclass
class FilterConfig:
    """필터 설정"""
    min_score: float = 80.0
    max_results: int = 1000
    include_grades: FrozenSet[str] = frozenset({'S+', 'S', 'A+', 'A'})
    sort_by: SortOption = SortOption.SCORE_DESC
    require_patterns: FrozenSet[Pattern] = frozenset()
    exclude_patterns: FrozenSet[Pattern] = frozenset()

    def __post_init__(self):
        if not isinstance(self.sort_by, SortOption):
            self.sort_by = SortOption(str(self.sort_by).lower())
        self.include_grades = frozenset(self.include_grades)
        unknown = self.include_grades - set(GRADES)
        if unknown:
            raise ValueError(f"알 수 없는 등급입니다: {sorted(unknown)}")
        self.require_patterns = frozenset(Pattern.parse(p) for p in self.require_patterns)
        self.exclude_patterns = frozenset(Pattern.parse(p) for p in self.exclude_patterns)
        if self.max_results < 0:
            raise ValueError(f"max_results는 0 이상이어야 합니다: {self.max_results}")


@dataclass(frozen=True)
class FilterResult:
    filtered_scores: List[PatternScore]
    total_evaluated: int
    total_passed: int
    filtering_rate: float
    time_elapsed_ms: int


@dataclass(frozen=True)
class EffectivenessReport:
    threshold: float
    total_filtered: int
    filtering_rate: float
    winners_captured: int
    capture_rate: float
    avg_winner_score: float


def _rate(part: int, total: int) -> float:
    return (part / total) * 100 if total > 0 else 0.0


def _elapsed_ms(start_time: float) -> int:
    return int((time.perf_counter() - start_time) * 1000)


def _sort_scores(scores: Iterable[PatternScore], sort_by: SortOption) -> List[PatternScore]:
    if sort_by is SortOption.SCORE_DESC:
        return sorted(scores, key=lambda s: s.score, reverse=True)
    if sort_by is SortOption.SCORE_ASC:
        return sorted(scores, key=lambda s: s.score)
    if sort_by is SortOption.ROUND_DESC:
        return sorted(scores, key=lambda s: s.round, reverse=True)
    return sorted(scores, key=lambda s: s.round)


def check_required_patterns(score: PatternScore, required: FrozenSet[Pattern]) -> bool:
    satisfied = {d.pattern for d in score.satisfied_patterns}
    return required <= satisfied


def check_excluded_patterns(score: PatternScore, excluded: FrozenSet[Pattern]) -> bool:
    violated = {d.pattern for d in score.violated_patterns}
    return not (excluded & violated)


def _passes(score: PatternScore, config: FilterConfig) -> bool:
    return (score.score >= config.min_score
            and score.grade in config.include_grades
            and check_required_patterns(score, config.require_patterns)
            and check_excluded_patterns(score, config.exclude_patterns))


def _filter_scores(
    combinations: Sequence[DrawRecord],
    historical_data: Sequence[DrawRecord],
    predicate: Callable[[PatternScore], bool],
    sort_by: SortOption,
    max_results: Optional[int],
    scoring_config: Optional[ScoringConfig],
    bounds: PatternBounds
) -> FilterResult:
    start_time = time.perf_counter()

    scores = calculate_score_batch(combinations, historical_data, scoring_config, bounds)
    passed = [s for s in scores if predicate(s)]
    ordered = _sort_scores(passed, sort_by)
    if max_results is not None:
        ordered = ordered[:max_results]

    result = FilterResult(
        filtered_scores=ordered,
        total_evaluated=len(combinations),
        total_passed=len(passed),
        filtering_rate=_rate(len(passed), len(combinations)),
        time_elapsed_ms=_elapsed_ms(start_time)
    )
    logger.info(
        f"필터링 완료: {result.total_passed}/{result.total_evaluated} 통과 "
        f"({result.filtering_rate:.2f}%)"
    )
    return result


@log_performance
def filter_by_score(
    combinations: Sequence[DrawRecord],
    historical_data: Sequence[DrawRecord],
    config: Optional[FilterConfig] = None,
    scoring_config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> FilterResult:
    """
    점수/등급/패턴 조건 필터링

    Args:
        combinations: 후보 조합
        historical_data: 가중치 계산용 과거 데이터
        config: 필터 설정
        scoring_config: 스코어링 설정
        bounds: 패턴 경계값

    Returns:
        정렬 및 개수 제한이 적용된 필터 결과 (통과 개수는 제한 전 기준)
    """
    config = config or FilterConfig()
    return _filter_scores(
        combinations, historical_data,
        lambda s: _passes(s, config),
        config.sort_by, config.max_results, scoring_config, bounds
    )


def filter_by_score_range(
    combinations: Sequence[DrawRecord],
    historical_data: Sequence[DrawRecord],
    min_score: float,
    max_score: float,
    max_results: int = 1000,
    scoring_config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> FilterResult:
    """점수 범위 [min_score, max_score] 필터링 (점수 내림차순)"""
    if min_score > max_score:
        raise ValueError(f"점수 범위가 잘못되었습니다: {min_score} > {max_score}")
    return _filter_scores(
        combinations, historical_data,
        lambda s: min_score <= s.score <= max_score,
        SortOption.SCORE_DESC, max_results, scoring_config, bounds
    )


def filter_with_multiple_thresholds(
    combinations: Sequence[DrawRecord],
    historical_data: Sequence[DrawRecord],
    thresholds: Sequence[float],
    scoring_config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> Dict[float, FilterResult]:
    """임계값별 필터 결과 (등급 조건 등 나머지 설정은 기본값)"""
    return {
        threshold: filter_by_score(
            combinations, historical_data,
            FilterConfig(min_score=threshold), scoring_config, bounds
        )
        for threshold in thresholds
    }


def get_optimal_threshold(
    combinations: Sequence[DrawRecord],
    historical_data: Sequence[DrawRecord],
    target_result_count: int,
    scoring_config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> float:
    """
    목표 개수에 가장 가까운 통과 개수를 내는 임계값 (60~95, 5 단위)

    차이가 같으면 낮은 임계값을 선택합니다.
    """
    results = filter_with_multiple_thresholds(
        combinations, historical_data, OPTIMAL_THRESHOLDS, scoring_config, bounds
    )
    if not results:
        return DEFAULT_OPTIMAL_THRESHOLD
    return min(results, key=lambda t: abs(results[t].total_passed - target_result_count))


def filter_by_pattern_count(
    combinations: Sequence[DrawRecord],
    historical_data: Sequence[DrawRecord],
    min_satisfied_patterns: int,
    max_violated_patterns: int,
    scoring_config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> FilterResult:
    """만족 패턴 수 하한 / 위반 패턴 수 상한 필터링"""
    return _filter_scores(
        combinations, historical_data,
        lambda s: (len(s.satisfied_patterns) >= min_satisfied_patterns
                   and len(s.violated_patterns) <= max_violated_patterns),
        SortOption.SCORE_DESC, None, scoring_config, bounds
    )


def get_top_score_combinations(
    combinations: Sequence[DrawRecord],
    historical_data: Sequence[DrawRecord],
    top_n: int = 100,
    scoring_config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> List[PatternScore]:
    scores = calculate_score_batch(combinations, historical_data, scoring_config, bounds)
    return _sort_scores(scores, SortOption.SCORE_DESC)[:top_n]


def analyze_filter_effectiveness(
    test_data: Sequence[DrawRecord],
    historical_data: Sequence[DrawRecord],
    actual_winning_numbers: Sequence[DrawRecord],
    thresholds: Sequence[float] = (70.0, 75.0, 80.0, 85.0, 90.0),
    scoring_config: Optional[ScoringConfig] = None,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> Dict[float, EffectivenessReport]:
    """
    임계값별 필터 효과성

    실제 당첨번호가 임계값 이상 점수를 받아 필터를 통과했는지(포함률)와
    후보 조합의 통과 비율을 함께 비교합니다.
    """
    winner_scores = calculate_score_batch(
        actual_winning_numbers, historical_data, scoring_config, bounds
    )
    winner_values = np.array([s.score for s in winner_scores], dtype=float)
    avg_winner_score = float(winner_values.mean()) if winner_values.size else 0.0

    reports = {}
    for threshold in thresholds:
        result = filter_by_score(
            test_data, historical_data,
            FilterConfig(min_score=threshold), scoring_config, bounds
        )
        captured = int((winner_values >= threshold).sum())
        reports[threshold] = EffectivenessReport(
            threshold=threshold,
            total_filtered=result.total_passed,
            filtering_rate=result.filtering_rate,
            winners_captured=captured,
            capture_rate=_rate(captured, len(winner_scores)),
            avg_winner_score=avg_winner_score
        )
    return reports
