"""
로또 회차 데이터 모델

이 모듈은 한 회차(또는 후보 조합)의 당첨번호를 표현하는 불변 값 객체를 제공합니다.
- DrawRecord: 날짜, 회차, 번호 6개, 보너스 번호
- RawDraw: 날짜가 없는 원본 회차 데이터 (기준 회차/날짜로 DrawRecord 변환)
"""

import numbers as _numbers
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Sequence, Union

MIN_NUMBER = 1
MAX_NUMBER = 45
NUMBERS_PER_DRAW = 6

DateLike = Union[str, date]


class InvalidDrawError(ValueError):
    """잘못된 회차 데이터 (번호 개수, 범위, 중복 등)"""


def _is_int(value) -> bool:
    return isinstance(value, _numbers.Integral) and not isinstance(value, bool)


def parse_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as e:
        raise InvalidDrawError(f"날짜 형식이 잘못되었습니다: {value!r}") from e


def validate_numbers(numbers: Sequence[int]) -> List[int]:
    """
    당첨번호 6개 유효성 검사

    Args:
        numbers: 검사할 번호 목록

    Returns:
        정수 리스트로 변환된 번호 (입력 순서 유지)

    Raises:
        InvalidDrawError: 개수가 6개가 아니거나, 범위를 벗어나거나, 중복이 있는 경우
    """
    try:
        values = [int(n) for n in numbers]
    except (TypeError, ValueError) as e:
        raise InvalidDrawError(f"번호는 정수여야 합니다: {numbers!r}") from e
    if len(values) != NUMBERS_PER_DRAW:
        raise InvalidDrawError(
            f"번호는 {NUMBERS_PER_DRAW}개여야 합니다: {values}"
        )
    out_of_range = [n for n in values if not MIN_NUMBER <= n <= MAX_NUMBER]
    if out_of_range:
        raise InvalidDrawError(f"번호 범위가 잘못되었습니다: {out_of_range}")
    if len(set(values)) != NUMBERS_PER_DRAW:
        raise InvalidDrawError(f"중복된 번호가 있습니다: {values}")
    return values


@dataclass(frozen=True)
class DrawRecord:
    """로또 회차 데이터 (불변)"""
    date: DateLike
    round: int
    number1: int
    number2: int
    number3: int
    number4: int
    number5: int
    number6: int
    bonus: Optional[int] = None

    def __post_init__(self):
        if not _is_int(self.round) or self.round <= 0:
            raise InvalidDrawError(f"회차는 양의 정수여야 합니다: {self.round!r}")
        validate_numbers(self.numbers)
        if self.bonus is not None and (
            not _is_int(self.bonus) or not MIN_NUMBER <= self.bonus <= MAX_NUMBER
        ):
            raise InvalidDrawError(
                f"보너스 번호가 잘못되었습니다: {self.bonus!r} (회차: {self.round})"
            )
        # 날짜는 항상 date 객체로 보관
        object.__setattr__(self, 'date', parse_date(self.date))

    @classmethod
    def from_numbers(
        cls,
        numbers: Sequence[int],
        round: int,
        date: DateLike,
        bonus: Optional[int] = None
    ) -> 'DrawRecord':
        """번호 목록으로 DrawRecord 생성 (후보 조합용)"""
        values = validate_numbers(numbers)
        return cls(date, round, *values, bonus=bonus)

    @property
    def numbers(self) -> List[int]:
        """추첨 순서 그대로의 당첨번호"""
        return [self.number1, self.number2, self.number3,
                self.number4, self.number5, self.number6]

    @property
    def sorted_numbers(self) -> List[int]:
        return sorted(self.numbers)

    @property
    def local_date(self) -> date:
        return self.date

    @property
    def year(self) -> int:
        return self.local_date.year

    @property
    def month(self) -> int:
        return self.local_date.month

    @property
    def year_month(self) -> int:
        """년월 (202508 형식)"""
        return self.year * 100 + self.month

    @property
    def year_month_key(self) -> str:
        """년월 문자열 (2025-08 형식)"""
        return f"{self.year}-{self.month:02d}"

    def to_dict(self) -> dict:
        return {
            'date': self.local_date.isoformat(),
            'round': self.round,
            'number1': self.number1,
            'number2': self.number2,
            'number3': self.number3,
            'number4': self.number4,
            'number5': self.number5,
            'number6': self.number6,
            'bonus': self.bonus,
        }


@dataclass(frozen=True)
class RawDraw:
    """날짜 정보가 없는 원본 회차 데이터"""
    round: int
    number1: int
    number2: int
    number3: int
    number4: int
    number5: int
    number6: int
    bonus: Optional[int] = None

    @property
    def numbers(self) -> List[int]:
        return [self.number1, self.number2, self.number3,
                self.number4, self.number5, self.number6]

    def to_record(self, base_round: int, base_date: DateLike) -> DrawRecord:
        """
        기준 회차/날짜를 이용해 DrawRecord로 변환

        추첨은 매주 1회이므로 기준 회차와의 차이만큼 주 단위로 날짜를 이동합니다.

        Args:
            base_round: 날짜를 알고 있는 기준 회차
            base_date: 기준 회차의 추첨일

        Returns:
            날짜가 채워진 DrawRecord
        """
        diff = base_round - self.round
        draw_date = parse_date(base_date) - timedelta(weeks=diff)
        return DrawRecord(
            date=draw_date.isoformat(),
            round=self.round,
            number1=self.number1,
            number2=self.number2,
            number3=self.number3,
            number4=self.number4,
            number5=self.number5,
            number6=self.number6,
            bonus=self.bonus
        )


def sort_by_round(records: Iterable[DrawRecord], descending: bool = False) -> List[DrawRecord]:
    """회차 기준 정렬"""
    return sorted(records, key=lambda r: r.round, reverse=descending)
