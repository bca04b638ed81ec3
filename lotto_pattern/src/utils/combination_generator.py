"""
후보 조합 생성기

필터링/스코어링 대상이 되는 무작위 조합을 만듭니다.
"""

from typing import List, Optional

import numpy as np

from ..model.draw_record import MAX_NUMBER, MIN_NUMBER, NUMBERS_PER_DRAW, DateLike, DrawRecord

DEFAULT_START_ROUND = 2000
DEFAULT_COMBINATION_DATE = '2024-12-01'


def generate_random_combinations(
    count: int,
    start_round: int = DEFAULT_START_ROUND,
    date: DateLike = DEFAULT_COMBINATION_DATE,
    seed: Optional[int] = None
) -> List[DrawRecord]:
    """
    무작위 후보 조합 생성

    Args:
        count: 생성할 조합 수
        start_round: 첫 조합의 회차 (이후 1씩 증가)
        date: 조합에 붙일 날짜
        seed: 난수 시드 (같은 시드면 같은 조합)

    Returns:
        정렬된 번호 6개와 보너스 번호를 가진 DrawRecord 목록
    """
    if count < 0:
        raise ValueError(f"count는 0 이상이어야 합니다: {count}")

    rng = np.random.default_rng(seed)
    pool = np.arange(MIN_NUMBER, MAX_NUMBER + 1)

    combinations = []
    for i in range(count):
        picked = rng.choice(pool, size=NUMBERS_PER_DRAW + 1, replace=False)
        numbers = sorted(int(n) for n in picked[:NUMBERS_PER_DRAW])
        combinations.append(DrawRecord.from_numbers(
            numbers, round=start_round + i, date=date, bonus=int(picked[-1])
        ))
    return combinations
