"""
로또 번호 패턴 라이브러리

역대 1등 당첨번호 통계에서 도출한 17개의 패턴(필터)을 정의합니다.
각 패턴은 번호 6개(보너스 제외)에 대한 독립적인 참/거짓 판정 함수이며,
번호의 입력 순서와 무관하게 같은 결과를 반환합니다.

패턴별 확률은 외부 분석 자료에서 가져온 참고값이며 이 모듈에서 계산하지 않습니다.
"""

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, FrozenSet, Iterable, List, Sequence, Union

from ..model.draw_record import DrawRecord, validate_numbers


class Pattern(Enum):
    """패턴 식별자 (값은 보고서에 표시되는 이름)"""
    TOTAL_SECTION = '총합구간(100-175)'
    AC_VALUE = 'AC값(7이상)'
    ODD_EVEN_BIAS = '홀짝비율(6:0제외)'
    HIGH_LOW_RATIO = '고저비율(6:0제외)'
    SAME_FINAL_DIGIT = '동일끝수(0-3개)'
    FINAL_DIGIT_SUM = '끝수총합(14-38)'
    CONSECUTIVE = '연속번호(0,2연번)'
    PRIME_COUNT = '소수(0-3개)'
    COMPOSITE_COUNT = '합성수(0-3개)'
    PERFECT_SQUARE = '완전제곱수(0-2개)'
    MULTIPLES = '3,5배수규칙'
    DUAL_DIGIT = '쌍수(0-2개)'
    START_END = '시작끝번호규칙'
    FIVE_SECTION = '동일구간(3개미만)'
    CORNER = '모서리패턴(1-3개)'
    TRIANGLE = '삼각패턴(전체선택X)'
    FROG = '개구리패턴(전체선택X)'

    @property
    def label(self) -> str:
        return self.value

    @classmethod
    def parse(cls, key: Union['Pattern', str]) -> 'Pattern':
        """
        패턴 객체, 멤버 이름(대소문자 무시) 또는 표시 이름으로 패턴 조회

        Raises:
            KeyError: 알 수 없는 패턴
        """
        if isinstance(key, cls):
            return key
        text = str(key).strip()
        member = cls.__members__.get(text.upper())
        if member is not None:
            return member
        for pattern in cls:
            if pattern.value == text:
                return pattern
        raise KeyError(f"알 수 없는 패턴입니다: {key}")


class StartEndRule(Enum):
    """시작끝번호 규칙 해석 방식"""
    # 시작번호 14 미만이면서 끝번호 30 초과인 조합을 제외
    EXCLUDE_LOW_START_HIGH_END = 'exclude_low_start_high_end'
    # 원본 필터 그대로: 시작번호 14 미만이면서 끝번호 30 초과인 조합만 통과
    REQUIRE_LOW_START_HIGH_END = 'require_low_start_high_end'


@dataclass
class PatternBounds:
    """설정 가능한 패턴 경계값"""
    final_digit_sum_min: int = 14
    final_digit_sum_max: int = 38
    start_end_rule: StartEndRule = StartEndRule.EXCLUDE_LOW_START_HIGH_END

    def __post_init__(self):
        if not isinstance(self.start_end_rule, StartEndRule):
            self.start_end_rule = StartEndRule(self.start_end_rule)
        if self.final_digit_sum_min > self.final_digit_sum_max:
            raise ValueError(
                f"끝수 총합 범위가 잘못되었습니다: "
                f"{self.final_digit_sum_min} > {self.final_digit_sum_max}"
            )


DEFAULT_BOUNDS = PatternBounds()

# 1. 총합구간 (확률 85%)
TOTAL_SECTION_MIN = 100
TOTAL_SECTION_MAX = 175

# 2. AC값 (확률 84%)
AC_MIN_VALUE = 7

# 4. 고저비율: 23 미만(1~22) 저, 23 이상(23~45) 고
HIGH_LOW_BOUNDARY = 23

# 5. 동일 끝수 (확률 99.5%)
SAME_FINAL_DIGIT_MAX = 3

# 8. 소수 0~3개 (확률 94%)
PRIMES: FrozenSet[int] = frozenset({2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43})
PRIME_MAX_COUNT = 3

# 9. 합성수 0~3개 (확률 88%): 소수와 3의 배수를 제외한 수
COMPOSITES: FrozenSet[int] = frozenset(
    {1, 4, 8, 10, 14, 16, 20, 22, 25, 26, 28, 32, 34, 35, 38, 40, 44}
)
COMPOSITE_MAX_COUNT = 3

# 10. 완전제곱수 0~2개 (확률 97%)
PERFECT_SQUARES: FrozenSet[int] = frozenset({1, 4, 9, 16, 25, 36})
PERFECT_SQUARE_MAX_COUNT = 2

# 11. 3의 배수 0~3개, 5의 배수 0~2개 (확률 84%)
MULTIPLE_OF_THREE_MAX_COUNT = 3
MULTIPLE_OF_FIVE_MAX_COUNT = 2

# 12. 쌍수 0~2개 (확률 99%)
DUAL_NUMBERS: FrozenSet[int] = frozenset({11, 22, 33, 44})
DUAL_MAX_COUNT = 2

# 13. 시작끝번호 (확률 80%)
START_NUMBER = 14
END_NUMBER = 30

# 14. 동일구간 4개 이상 제외 (확률 94%)
SECTIONS = (range(1, 11), range(11, 21), range(21, 31), range(31, 41), range(41, 46))
SECTION_MAX_COUNT = 4

# 15. 모서리 패턴 (용지 7열 배치 기준)
LEFT_TOP_CORNER: FrozenSet[int] = frozenset({1, 2, 8, 9})
RIGHT_TOP_CORNER: FrozenSet[int] = frozenset({6, 7, 13, 14})
LEFT_BOTTOM_CORNER: FrozenSet[int] = frozenset({29, 30, 36, 37, 43, 44})
RIGHT_BOTTOM_CORNER: FrozenSet[int] = frozenset({34, 35, 41, 42})
CORNER_NUMBERS: FrozenSet[int] = (
    LEFT_TOP_CORNER | RIGHT_TOP_CORNER | LEFT_BOTTOM_CORNER | RIGHT_BOTTOM_CORNER
)
CORNER_MIN_COUNT = 1
CORNER_MAX_COUNT = 3

# 16. 삼각 패턴
TRIANGLES: Dict[str, FrozenSet[int]] = {
    'Left Top': frozenset(
        [1, 2, 3, 4, 5, 6, 7, 8, 9, 10, 11, 12, 13, 15, 16, 17, 18, 19,
         22, 23, 24, 25, 29, 30, 31, 36, 37, 43]
    ),
    'Right Top': frozenset(
        [*range(1, 8), *range(9, 15), *range(17, 22), *range(25, 29), *range(33, 36), 41, 42]
    ),
    'Left Bottom': frozenset(
        [1, 8, 9, 15, 16, 17, 22, 23, 24, 25, 29, 30, 31, 32, 33,
         36, 37, 38, 39, 40, 41, 43, 44, 45]
    ),
    'Right Bottom': frozenset(
        [7, 13, 14, *range(19, 22), *range(25, 29), *range(31, 36), *range(37, 46)]
    ),
}

# 17. 개구리 패턴
FROGS: Dict[str, FrozenSet[int]] = {
    'Left Frog': frozenset(
        [1, 2, 4, 5, 8, 9, 11, 12, 15, 16, 18, 19, 22, 23, 25, 26,
         29, 30, 32, 33, 36, 37, 39, 40, 43, 44]
    ),
    'Right Frog': frozenset(
        [3, 4, 6, 7, 10, 11, 13, 14, 17, 18, 20, 21, 24, 25, 27, 28,
         31, 32, 34, 35, 38, 39, 41, 42, 45]
    ),
}

NumbersLike = Union[DrawRecord, Sequence[int]]


def _numbers_of(target: NumbersLike) -> List[int]:
    if isinstance(target, DrawRecord):
        return target.numbers
    return validate_numbers(target)


def count_in(numbers: Iterable[int], members: FrozenSet[int]) -> int:
    """집합에 포함된 번호 개수"""
    return sum(1 for n in numbers if n in members)


def get_ac_value(numbers: Sequence[int]) -> int:
    """
    AC값 계산

    번호 쌍의 차이(절대값) 중 서로 다른 값의 개수에서 (번호 개수 - 1)을 뺀 값입니다.
    """
    differences = {
        abs(numbers[i] - numbers[j])
        for i in range(len(numbers) - 1)
        for j in range(i + 1, len(numbers))
    }
    return len(differences) - (len(numbers) - 1)


def get_max_consecutive(numbers: Sequence[int]) -> int:
    """
    정렬된 번호에서 가장 긴 연번의 +1 간격 개수

    연번 없음은 0, 2연번은 1, 3연번은 2를 반환합니다.
    """
    longest = 0
    current = 0
    previous = None
    for n in sorted(numbers):
        if previous is not None and n == previous + 1:
            current += 1
        else:
            current = 0
        longest = max(longest, current)
        previous = n
    return longest


def check_total_section(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    return TOTAL_SECTION_MIN <= sum(numbers) <= TOTAL_SECTION_MAX


def check_ac_value(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    return get_ac_value(numbers) >= AC_MIN_VALUE


def check_odd_even_bias(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    """홀수 6개 또는 짝수 6개 조합 제외 (확률 97%)"""
    return not all(n % 2 == 0 for n in numbers) and not all(n % 2 != 0 for n in numbers)


def check_high_low_ratio(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    """고저비율 6:0, 0:6 제외 (확률 97%)"""
    return (not all(n < HIGH_LOW_BOUNDARY for n in numbers)
            and not all(n >= HIGH_LOW_BOUNDARY for n in numbers))


def check_same_final_digit(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    most_common = max(Counter(n % 10 for n in numbers).values())
    return 0 <= most_common <= SAME_FINAL_DIGIT_MAX


def check_final_digit_sum(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    """
    끝수 총합 (확률 95%)

    분석가 기준 범위는 14~38이며, 15~38 구간을 쓰는 변형도 있어 경계값을 설정으로 받습니다.
    """
    total = sum(n % 10 for n in numbers)
    return bounds.final_digit_sum_min <= total <= bounds.final_digit_sum_max


def check_consecutive(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    """연번 없음 또는 2연번까지만 허용 (확률 98.5%)"""
    return get_max_consecutive(numbers) <= 1


def check_prime_count(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    return count_in(numbers, PRIMES) <= PRIME_MAX_COUNT


def check_composite_count(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    return count_in(numbers, COMPOSITES) <= COMPOSITE_MAX_COUNT


def check_perfect_square(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    return count_in(numbers, PERFECT_SQUARES) <= PERFECT_SQUARE_MAX_COUNT


def check_multiples(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    """3의 배수 0~3개, 5의 배수 0~2개를 모두 만족해야 통과"""
    threes = sum(1 for n in numbers if n % 3 == 0)
    fives = sum(1 for n in numbers if n % 5 == 0)
    return threes <= MULTIPLE_OF_THREE_MAX_COUNT and fives <= MULTIPLE_OF_FIVE_MAX_COUNT


def check_dual(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    return count_in(numbers, DUAL_NUMBERS) <= DUAL_MAX_COUNT


def check_start_end(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    """시작끝번호 규칙 (확률 80%)"""
    low_start_high_end = min(numbers) < START_NUMBER and max(numbers) > END_NUMBER
    if bounds.start_end_rule is StartEndRule.REQUIRE_LOW_START_HIGH_END:
        return low_start_high_end
    return not low_start_high_end


def check_five_section(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    return all(
        sum(1 for n in numbers if n in section) < SECTION_MAX_COUNT
        for section in SECTIONS
    )


def check_corner(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    return CORNER_MIN_COUNT <= count_in(numbers, CORNER_NUMBERS) <= CORNER_MAX_COUNT


def check_triangle(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    """번호 6개가 모두 한 삼각형 안에 있는 조합 제외"""
    return not any(set(numbers) <= triangle for triangle in TRIANGLES.values())


def check_frog(numbers: Sequence[int], bounds: PatternBounds = DEFAULT_BOUNDS) -> bool:
    return not any(set(numbers) <= frog for frog in FROGS.values())


PatternCheck = Callable[[Sequence[int], PatternBounds], bool]

PATTERN_CHECKS: Dict[Pattern, PatternCheck] = {
    Pattern.TOTAL_SECTION: check_total_section,
    Pattern.AC_VALUE: check_ac_value,
    Pattern.ODD_EVEN_BIAS: check_odd_even_bias,
    Pattern.HIGH_LOW_RATIO: check_high_low_ratio,
    Pattern.SAME_FINAL_DIGIT: check_same_final_digit,
    Pattern.FINAL_DIGIT_SUM: check_final_digit_sum,
    Pattern.CONSECUTIVE: check_consecutive,
    Pattern.PRIME_COUNT: check_prime_count,
    Pattern.COMPOSITE_COUNT: check_composite_count,
    Pattern.PERFECT_SQUARE: check_perfect_square,
    Pattern.MULTIPLES: check_multiples,
    Pattern.DUAL_DIGIT: check_dual,
    Pattern.START_END: check_start_end,
    Pattern.FIVE_SECTION: check_five_section,
    Pattern.CORNER: check_corner,
    Pattern.TRIANGLE: check_triangle,
    Pattern.FROG: check_frog,
}

_missing = set(Pattern) - set(PATTERN_CHECKS)
if _missing:
    raise RuntimeError(f"판정 함수가 없는 패턴: {sorted(p.name for p in _missing)}")


def check_pattern(
    target: NumbersLike,
    pattern: Pattern,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> bool:
    """단일 패턴 판정"""
    return PATTERN_CHECKS[Pattern.parse(pattern)](_numbers_of(target), bounds)


def evaluate_patterns(
    target: NumbersLike,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> Dict[Pattern, bool]:
    """
    17개 패턴 전체 판정

    Args:
        target: DrawRecord 또는 번호 6개
        bounds: 패턴 경계값

    Returns:
        패턴별 만족 여부 (Pattern 정의 순서)
    """
    numbers = _numbers_of(target)
    return {pattern: check(numbers, bounds) for pattern, check in PATTERN_CHECKS.items()}


def get_violated_patterns(
    target: NumbersLike,
    bounds: PatternBounds = DEFAULT_BOUNDS
) -> List[Pattern]:
    """해당 조합이 만족하지 못한 패턴 목록"""
    return [pattern for pattern, satisfied in evaluate_patterns(target, bounds).items()
            if not satisfied]


def corner_count(target: NumbersLike) -> int:
    """모서리 영역에 포함된 번호 개수"""
    return count_in(_numbers_of(target), CORNER_NUMBERS)


def triangle_types(target: NumbersLike) -> List[str]:
    """번호 6개를 모두 포함하는 삼각형 이름 목록"""
    numbers = set(_numbers_of(target))
    return [name for name, triangle in TRIANGLES.items() if numbers <= triangle]


def frog_types(target: NumbersLike) -> List[str]:
    """번호 6개를 모두 포함하는 개구리 패턴 이름 목록"""
    numbers = set(_numbers_of(target))
    return [name for name, frog in FROGS.items() if numbers <= frog]
