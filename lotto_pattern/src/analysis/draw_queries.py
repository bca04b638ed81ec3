"""
회차 데이터 조회 및 빈도 통계

번호별 출현 빈도, 기간/회차 범위 조회 등 당첨 데이터에 대한 단순 조회 함수를 제공합니다.
"""

from collections import Counter
from datetime import date
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..model.draw_record import DrawRecord, parse_date, sort_by_round
from .patterns import DEFAULT_BOUNDS, PatternBounds, evaluate_patterns

# 핵심 번호 계산 시 제외 번호를 모으는 구간 수 (기준 회차부터 1회씩 이동)
CORE_NUMBER_SHIFTS = 6


def find_rounds_with_number(data: Sequence[DrawRecord], number: int) -> List[DrawRecord]:
    """당첨번호 또는 보너스 번호에 특정 번호가 포함된 회차"""
    return [r for r in data if number in r.numbers or number == r.bonus]


def get_number_frequency(data: Sequence[DrawRecord]) -> Dict[int, int]:
    """번호별 출현 횟수 (번호 오름차순)"""
    counter = Counter(n for r in data for n in r.numbers)
    return dict(sorted(counter.items()))


def get_bonus_number_frequency(data: Sequence[DrawRecord]) -> Dict[int, int]:
    counter = Counter(r.bonus for r in data if r.bonus is not None)
    return dict(sorted(counter.items()))


def get_top_numbers(data: Sequence[DrawRecord], top_n: int = 10) -> List[Tuple[int, int]]:
    """가장 많이 나온 번호 TOP N"""
    frequency = get_number_frequency(data)
    return sorted(frequency.items(), key=lambda x: x[1], reverse=True)[:top_n]


def get_least_frequent_numbers(data: Sequence[DrawRecord], top_n: int = 10) -> List[Tuple[int, int]]:
    """가장 적게 나온 번호 TOP N (한 번도 안 나온 번호는 포함하지 않음)"""
    frequency = get_number_frequency(data)
    return sorted(frequency.items(), key=lambda x: x[1])[:top_n]


def get_data_by_year(data: Sequence[DrawRecord], year: int) -> List[DrawRecord]:
    return [r for r in data if r.year == year]


def get_data_by_month(data: Sequence[DrawRecord], month: int) -> List[DrawRecord]:
    return [r for r in data if r.month == month]


def get_data_by_year_with_month(data: Sequence[DrawRecord], year: int, month: int) -> List[DrawRecord]:
    return [r for r in data if r.year == year and r.month == month]


def get_data_by_year_month(data: Sequence[DrawRecord], year_month: int) -> List[DrawRecord]:
    """년월로 데이터 조회 (202508 형식)"""
    return [r for r in data if r.year_month == year_month]


def get_data_by_month_classify_year(
    data: Sequence[DrawRecord],
    month: int
) -> List[Tuple[int, List[DrawRecord]]]:
    """특정 월 데이터를 연도별로 묶어 최신 연도부터 반환"""
    by_year: Dict[int, List[DrawRecord]] = {}
    for record in get_data_by_month(data, month):
        by_year.setdefault(record.year, []).append(record)
    return sorted(by_year.items(), key=lambda x: x[0], reverse=True)


def get_recent_rounds(data: Sequence[DrawRecord], count: int) -> List[DrawRecord]:
    """최근 N회차 (회차 내림차순)"""
    return sort_by_round(data, descending=True)[:count]


def get_round_range(data: Sequence[DrawRecord], start_round: int, end_round: int) -> List[DrawRecord]:
    """회차 범위 조회 (양 끝 포함, 회차 오름차순)"""
    return sort_by_round(r for r in data if start_round <= r.round <= end_round)


def find_by_round(data: Sequence[DrawRecord], round_no: int) -> Optional[DrawRecord]:
    return next((r for r in data if r.round == round_no), None)


def get_monthly_number_frequency(data: Sequence[DrawRecord], year: int, month: int) -> Dict[int, int]:
    return get_number_frequency(get_data_by_year_with_month(data, year, month))


def get_monthly_round_count(data: Sequence[DrawRecord]) -> Dict[str, int]:
    """년월(2025-08 형식)별 회차 수"""
    counter = Counter(r.year_month_key for r in data)
    return dict(sorted(counter.items()))


def get_data_between_dates(
    data: Sequence[DrawRecord],
    start_date: Union[str, date],
    end_date: Union[str, date]
) -> List[DrawRecord]:
    """기간 조회 (양 끝 날짜 포함)"""
    start = parse_date(start_date)
    end = parse_date(end_date)
    return [r for r in data if start <= r.local_date <= end]


def filter_numbers_less_than(frequency: Dict[int, int], max_count: int) -> List[Tuple[int, int]]:
    """출현 횟수가 max_count 이하인 (번호, 횟수) 목록"""
    return [(number, count) for number, count in frequency.items() if count <= max_count]


def numbers_to_exclude(frequency: Dict[int, int], max_count: int) -> List[int]:
    """출현 횟수가 max_count 이상인 번호 목록"""
    return [number for number, count in frequency.items() if count >= max_count]


def get_core_numbers(
    data: Sequence[DrawRecord],
    round_no: int,
    count: int,
    max_count: int
) -> Dict[int, int]:
    """
    핵심 번호 빈도

    최근 count회의 번호별 출현 횟수에서, 기준 회차부터 한 회씩 앞당긴 6개 구간
    [round_no - i - count, round_no - i] 중 어느 한 구간에서라도 max_count회 이상
    나온 번호를 제외합니다.

    Args:
        data: 당첨 데이터
        round_no: 기준 회차
        count: 빈도 계산 및 제외 구간의 회차 수
        max_count: 제외 기준 출현 횟수

    Returns:
        제외되지 않은 번호의 출현 횟수 (번호 오름차순)
    """
    frequency = get_number_frequency(get_recent_rounds(data, count))

    excluded = set()
    for shift in range(CORE_NUMBER_SHIFTS):
        current_round = round_no - shift
        window = get_round_range(data, current_round - count, current_round)
        excluded.update(numbers_to_exclude(get_number_frequency(window), max_count))

    return {number: n for number, n in frequency.items() if number not in excluded}


def filter_all_patterns(
    data: Sequence[DrawRecord],
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> List[DrawRecord]:
    """17개 패턴을 모두 만족하는 회차"""
    return [r for r in data if all(evaluate_patterns(r, bounds).values())]
