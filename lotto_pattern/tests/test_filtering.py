"""
점수 기반 필터 테스트 모듈
"""

import unittest
import sys
from pathlib import Path

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from lotto_pattern.src.analysis.patterns import Pattern
from lotto_pattern.src.filtering.score_filter import (
    FilterConfig, SortOption, analyze_filter_effectiveness, filter_by_pattern_count,
    filter_by_score, filter_by_score_range, filter_with_multiple_thresholds,
    get_optimal_threshold, get_top_score_combinations
)
from lotto_pattern.src.scoring.scoring_system import GRADES, ScoringConfig
from lotto_pattern.src.utils.combination_generator import generate_random_combinations
from sample_draws import combination, sample_draws


class TestScoreFilter(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        """테스트 클래스 설정"""
        cls.data = sample_draws()
        # 동일 가중치: 1101회 번호는 94.1점(S), 1~6은 64.7점(C)
        cls.scoring = ScoringConfig(weighting_mode='custom')
        cls.high = combination([7, 11, 16, 21, 27, 33], 2000)
        cls.low = combination([1, 2, 3, 4, 5, 6], 2001)
        cls.combinations = [cls.low, cls.high]

    def test_filter_by_score(self):
        result = filter_by_score(self.combinations, self.data, scoring_config=self.scoring)
        self.assertEqual([s.round for s in result.filtered_scores], [2000])
        self.assertEqual(result.total_evaluated, 2)
        self.assertEqual(result.total_passed, 1)
        self.assertAlmostEqual(result.filtering_rate, 50.0)
        self.assertGreaterEqual(result.time_elapsed_ms, 0)

    def test_filter_idempotent(self):
        combinations = generate_random_combinations(50, start_round=3000, seed=7) + self.combinations
        config = FilterConfig(min_score=70.0, include_grades=GRADES)
        first = filter_by_score(combinations, self.data, config, self.scoring)
        passed_rounds = {s.round for s in first.filtered_scores}
        survivors = [c for c in combinations if c.round in passed_rounds]

        second = filter_by_score(survivors, self.data, config, self.scoring)
        self.assertEqual({s.round for s in second.filtered_scores}, passed_rounds)
        self.assertEqual(second.total_passed, second.total_evaluated)

    def test_filter_repeatable(self):
        combinations = generate_random_combinations(30, start_round=3000, seed=11)
        config = FilterConfig(min_score=60.0, include_grades=GRADES, max_results=10)
        first = filter_by_score(combinations, self.data, config)
        second = filter_by_score(combinations, self.data, config)
        self.assertEqual(first.filtered_scores, second.filtered_scores)
        self.assertEqual(first.total_passed, second.total_passed)

    def test_generated_rounds_do_not_overlap_fixture(self):
        rounds = {c.round for c in generate_random_combinations(50, start_round=3000, seed=7)}
        self.assertFalse(rounds & {c.round for c in self.combinations})

    def test_sort_and_limit(self):
        config = FilterConfig(min_score=0.0, include_grades=GRADES, sort_by='round_asc')
        result = filter_by_score(self.combinations, self.data, config, self.scoring)
        self.assertEqual([s.round for s in result.filtered_scores], [2000, 2001])

        config = FilterConfig(min_score=0.0, include_grades=GRADES, sort_by=SortOption.SCORE_ASC)
        result = filter_by_score(self.combinations, self.data, config, self.scoring)
        self.assertEqual([s.round for s in result.filtered_scores], [2001, 2000])

        config = FilterConfig(min_score=0.0, include_grades=GRADES, max_results=1)
        result = filter_by_score(self.combinations, self.data, config, self.scoring)
        self.assertEqual(len(result.filtered_scores), 1)
        self.assertEqual(result.total_passed, 2)

    def test_required_and_excluded_patterns(self):
        config = FilterConfig(min_score=0.0, include_grades=GRADES,
                              require_patterns={'TRIANGLE'})
        result = filter_by_score(self.combinations, self.data, config, self.scoring)
        self.assertEqual([s.round for s in result.filtered_scores], [2000])

        config = FilterConfig(min_score=0.0, include_grades=GRADES,
                              exclude_patterns={Pattern.START_END})
        result = filter_by_score(self.combinations, self.data, config, self.scoring)
        self.assertEqual([s.round for s in result.filtered_scores], [2001])

    def test_filter_by_score_range(self):
        result = filter_by_score_range(self.combinations, self.data, 60.0, 70.0,
                                       scoring_config=self.scoring)
        self.assertEqual([s.round for s in result.filtered_scores], [2001])

        result = filter_by_score_range(self.combinations, self.data, 0.0, 100.0,
                                       max_results=1, scoring_config=self.scoring)
        self.assertEqual([s.round for s in result.filtered_scores], [2000])
        self.assertEqual(result.total_passed, 2)

        with self.assertRaises(ValueError):
            filter_by_score_range(self.combinations, self.data, 90.0, 80.0)

    def test_multiple_thresholds(self):
        results = filter_with_multiple_thresholds(
            self.combinations, self.data, [60.0, 95.0], self.scoring
        )
        self.assertEqual(results[60.0].total_passed, 1)
        self.assertEqual(results[95.0].total_passed, 0)

    def test_optimal_threshold(self):
        self.assertEqual(
            get_optimal_threshold(self.combinations, self.data, 0, self.scoring), 95.0
        )
        # 차이가 같으면 가장 낮은 임계값
        self.assertEqual(
            get_optimal_threshold(self.combinations, self.data, 1, self.scoring), 60.0
        )

    def test_filter_by_pattern_count(self):
        result = filter_by_pattern_count(self.combinations, self.data, 15, 2, self.scoring)
        self.assertEqual([s.round for s in result.filtered_scores], [2000])

    def test_top_scores(self):
        top = get_top_score_combinations(self.combinations, self.data, 1, self.scoring)
        self.assertEqual([s.round for s in top], [2000])

    def test_effectiveness(self):
        reports = analyze_filter_effectiveness(
            self.combinations, self.data, [self.data[0]], thresholds=(80.0, 95.0),
            scoring_config=self.scoring
        )
        self.assertEqual(reports[80.0].winners_captured, 1)
        self.assertAlmostEqual(reports[80.0].capture_rate, 100.0)
        self.assertEqual(reports[80.0].total_filtered, 1)
        self.assertEqual(reports[95.0].winners_captured, 0)
        self.assertAlmostEqual(reports[95.0].avg_winner_score, 16 / 17 * 100)

    def test_invalid_config(self):
        with self.assertRaises(ValueError):
            FilterConfig(include_grades={'Z'})
        with self.assertRaises(ValueError):
            FilterConfig(sort_by='random')
        with self.assertRaises(KeyError):
            FilterConfig(require_patterns={'NOPE'})


if __name__ == '__main__':
    unittest.main()
