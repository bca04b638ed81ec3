"""
회차 데이터 모델 테스트 모듈
"""

import unittest
from datetime import date
import sys
from pathlib import Path

# 프로젝트 루트 디렉토리를 Python 경로에 추가
project_root = str(Path(__file__).parent.parent.parent)
if project_root not in sys.path:
    sys.path.append(project_root)

from lotto_pattern.src.model.draw_record import (
    DrawRecord, InvalidDrawError, RawDraw, sort_by_round, validate_numbers
)
from sample_draws import sample_draws


class TestDrawRecord(unittest.TestCase):
    def test_numbers_keep_draw_order(self):
        record = DrawRecord("2024-01-06", 1101, 33, 7, 21, 11, 27, 16, bonus=45)
        self.assertEqual(record.numbers, [33, 7, 21, 11, 27, 16])
        self.assertEqual(record.sorted_numbers, [7, 11, 16, 21, 27, 33])

    def test_date_properties(self):
        record = sample_draws()[0]
        self.assertEqual(record.local_date, date(2024, 1, 6))
        self.assertEqual(record.year, 2024)
        self.assertEqual(record.month, 1)
        self.assertEqual(record.year_month, 202401)
        self.assertEqual(record.year_month_key, "2024-01")

    def test_invalid_numbers(self):
        with self.assertRaises(InvalidDrawError):
            DrawRecord("2024-01-06", 1, 1, 2, 3, 4, 5, 46)
        with self.assertRaises(InvalidDrawError):
            DrawRecord("2024-01-06", 1, 1, 2, 3, 4, 5, 5)
        with self.assertRaises(InvalidDrawError):
            validate_numbers([1, 2, 3, 4, 5])
        with self.assertRaises(InvalidDrawError):
            DrawRecord("2024-01-06", 0, 1, 2, 3, 4, 5, 6)

    def test_invalid_bonus_and_date(self):
        with self.assertRaises(InvalidDrawError):
            DrawRecord("2024-01-06", 1, 1, 2, 3, 4, 5, 6, bonus=46)
        with self.assertRaises(InvalidDrawError):
            DrawRecord("2024/01/06", 1, 1, 2, 3, 4, 5, 6)

    def test_malformed_fields_raise_domain_error(self):
        with self.assertRaises(InvalidDrawError):
            DrawRecord("2024-01-06", "abc", 1, 2, 3, 4, 5, 6)
        with self.assertRaises(InvalidDrawError):
            DrawRecord("2024-01-06", True, 1, 2, 3, 4, 5, 6)
        with self.assertRaises(InvalidDrawError):
            DrawRecord("2024-01-06", 1, 1, 2, 3, 4, 5, 6, bonus="x")
        with self.assertRaises(InvalidDrawError):
            DrawRecord("2024-01-06", 1, 1, 2, 3, 4, 5, 6, bonus=7.5)
        with self.assertRaises(InvalidDrawError):
            validate_numbers([1, 2, 3, 4, 5, "six"])
        with self.assertRaises(InvalidDrawError):
            validate_numbers([1, 2, 3, 4, 5, None])

    def test_bonus_optional(self):
        record = DrawRecord.from_numbers([1, 2, 3, 4, 5, 6], round=2000, date="2024-12-01")
        self.assertIsNone(record.bonus)
        self.assertIsNone(record.to_dict()['bonus'])

    def test_invalid_draw_error_is_value_error(self):
        self.assertTrue(issubclass(InvalidDrawError, ValueError))

    def test_raw_draw_to_record(self):
        raw = RawDraw(1100, 1, 2, 3, 4, 5, 6, bonus=7)
        record = raw.to_record(base_round=1101, base_date="2024-01-06")
        self.assertEqual(record.local_date, date(2023, 12, 30))
        self.assertEqual(record.round, 1100)
        self.assertEqual(record.bonus, 7)

    def test_sort_by_round(self):
        records = list(reversed(sample_draws()))
        self.assertEqual([r.round for r in sort_by_round(records)][:2], [1101, 1102])
        self.assertEqual(sort_by_round(records, descending=True)[0].round, 1110)


if __name__ == '__main__':
    unittest.main()
