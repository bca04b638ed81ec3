"""
회차 조회 및 빈도 통계 테스트 모듈
"""

import unittest
import sys
from pathlib import Path

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from lotto_pattern.src.analysis.draw_queries import (
    find_by_round, find_rounds_with_number, get_bonus_number_frequency,
    get_data_between_dates, get_data_by_month, get_data_by_month_classify_year,
    get_data_by_year, get_data_by_year_month, get_data_by_year_with_month,
    get_least_frequent_numbers, get_monthly_number_frequency, get_monthly_round_count,
    get_number_frequency, get_recent_rounds, get_round_range, get_top_numbers,
    filter_all_patterns, filter_numbers_less_than, get_core_numbers, numbers_to_exclude
)
from lotto_pattern.src.analysis.patterns import PatternBounds, StartEndRule, evaluate_patterns
from sample_draws import combination, sample_draws


class TestDrawQueries(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        """테스트 클래스 설정"""
        cls.data = sample_draws()

    def test_number_frequency(self):
        frequency = get_number_frequency(self.data)
        self.assertEqual(sum(frequency.values()), 60)
        self.assertEqual(frequency[27], 3)
        self.assertEqual(frequency[33], 3)
        self.assertEqual(list(frequency.keys()), sorted(frequency.keys()))

        bonus = get_bonus_number_frequency(self.data)
        self.assertEqual(bonus[45], 2)
        self.assertEqual(sum(bonus.values()), 10)

    def test_top_and_least(self):
        top = get_top_numbers(self.data, 2)
        self.assertEqual([count for _, count in top], [3, 3])
        least = get_least_frequent_numbers(self.data, 3)
        self.assertTrue(all(count == 1 for _, count in least))

    def test_find_rounds_with_number(self):
        rounds = [r.round for r in find_rounds_with_number(self.data, 45)]
        # 1110회는 당첨번호, 1101/1108회는 보너스
        self.assertEqual(rounds, [1101, 1108, 1110])

    def test_round_queries(self):
        self.assertEqual([r.round for r in get_recent_rounds(self.data, 3)], [1110, 1109, 1108])
        self.assertEqual([r.round for r in get_round_range(self.data, 1103, 1105)],
                         [1103, 1104, 1105])
        self.assertEqual(find_by_round(self.data, 1105).bonus, 11)
        self.assertIsNone(find_by_round(self.data, 999))

    def test_date_queries(self):
        self.assertEqual(len(get_data_by_year(self.data, 2024)), 10)
        self.assertEqual(len(get_data_by_month(self.data, 2)), 4)
        self.assertEqual(len(get_data_by_year_with_month(self.data, 2024, 3)), 2)
        self.assertEqual(len(get_data_by_year_month(self.data, 202401)), 4)
        self.assertEqual(get_monthly_round_count(self.data),
                         {'2024-01': 4, '2024-02': 4, '2024-03': 2})

        between = get_data_between_dates(self.data, '2024-01-13', '2024-02-03')
        self.assertEqual([r.round for r in between], [1102, 1103, 1104, 1105])

        grouped = get_data_by_month_classify_year(self.data, 1)
        self.assertEqual([(year, len(records)) for year, records in grouped], [(2024, 4)])

    def test_monthly_number_frequency(self):
        frequency = get_monthly_number_frequency(self.data, 2024, 3)
        self.assertEqual(sum(frequency.values()), 12)
        self.assertEqual(frequency[15], 1)

    def test_exclusion_helpers(self):
        frequency = get_number_frequency(self.data)
        self.assertEqual(numbers_to_exclude(frequency, 3), [25, 27, 33])
        rare = filter_numbers_less_than(frequency, 1)
        self.assertTrue(rare)
        self.assertTrue(all(count == 1 for _, count in rare))
        self.assertNotIn(25, [number for number, _ in rare])

    def test_core_numbers(self):
        core = get_core_numbers(self.data, 1110, 3, 2)
        # 최근 3회 번호 중 이동 구간에서 2회 이상 나온 15, 25, 33, 44 제외
        self.assertEqual(list(core.keys()),
                         [1, 2, 7, 8, 10, 11, 19, 20, 24, 27, 30, 36, 38, 45])
        self.assertTrue(all(count == 1 for count in core.values()))

    def test_filter_all_patterns(self):
        # 샘플 회차는 모두 시작끝번호 규칙을 위반
        self.assertEqual(filter_all_patterns(self.data), [])

        literal = PatternBounds(start_end_rule=StartEndRule.REQUIRE_LOW_START_HIGH_END)
        passed = filter_all_patterns(self.data, literal)
        self.assertIn(1101, [r.round for r in passed])
        for record in passed:
            self.assertTrue(all(evaluate_patterns(record, literal).values()))

        candidates = [combination([10, 20, 26, 32, 38, 45], 2000),
                      combination([1, 2, 3, 4, 5, 6], 2001)]
        self.assertNotIn(2001, [r.round for r in filter_all_patterns(candidates)])


if __name__ == '__main__':
    unittest.main()
