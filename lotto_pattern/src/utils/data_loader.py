"""
로또 당첨번호 데이터 로더

이 모듈은 당첨번호 파일(JSON/CSV)을 로드하고 검증하는 기능을 제공합니다.
- 날짜가 있는 회차 데이터: date, round, number1~number6, bonus
- 날짜가 없는 원본 데이터: 회차, 번호1~번호6, 보너스 (기준 회차/날짜로 날짜 계산)
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import pandas as pd
from marshmallow import EXCLUDE, Schema, ValidationError, fields, post_load, validate

from shared.error_handler import get_logger
from ..model.draw_record import (
    MAX_NUMBER, MIN_NUMBER, DateLike, DrawRecord, InvalidDrawError, RawDraw, sort_by_round
)
from .config import Config

# 로거 설정
logger = get_logger(__name__)

RAW_ROUND_KEY = '회차'
NUMBER_RANGE = validate.Range(min=MIN_NUMBER, max=MAX_NUMBER)


class DataLoadError(Exception):
    """데이터 파일 파싱/검증 실패"""


class DrawRecordSchema(Schema):
    """날짜가 있는 회차 데이터 스키마"""

    class Meta:
        unknown = EXCLUDE

    date = fields.Date(required=True)
    round = fields.Integer(required=True, validate=validate.Range(min=1))
    number1 = fields.Integer(required=True, validate=NUMBER_RANGE)
    number2 = fields.Integer(required=True, validate=NUMBER_RANGE)
    number3 = fields.Integer(required=True, validate=NUMBER_RANGE)
    number4 = fields.Integer(required=True, validate=NUMBER_RANGE)
    number5 = fields.Integer(required=True, validate=NUMBER_RANGE)
    number6 = fields.Integer(required=True, validate=NUMBER_RANGE)
    bonus = fields.Integer(allow_none=True, load_default=None, validate=NUMBER_RANGE)

    @post_load
    def make_record(self, data: Dict[str, Any], **kwargs) -> DrawRecord:
        return DrawRecord(**data)


class RawDrawSchema(Schema):
    """날짜가 없는 원본 회차 데이터 스키마 (한글 키)"""

    class Meta:
        unknown = EXCLUDE

    round = fields.Integer(required=True, data_key=RAW_ROUND_KEY, validate=validate.Range(min=1))
    number1 = fields.Integer(required=True, data_key='번호1', validate=NUMBER_RANGE)
    number2 = fields.Integer(required=True, data_key='번호2', validate=NUMBER_RANGE)
    number3 = fields.Integer(required=True, data_key='번호3', validate=NUMBER_RANGE)
    number4 = fields.Integer(required=True, data_key='번호4', validate=NUMBER_RANGE)
    number5 = fields.Integer(required=True, data_key='번호5', validate=NUMBER_RANGE)
    number6 = fields.Integer(required=True, data_key='번호6', validate=NUMBER_RANGE)
    bonus = fields.Integer(allow_none=True, load_default=None, data_key='보너스',
                           validate=NUMBER_RANGE)

    @post_load
    def make_raw_draw(self, data: Dict[str, Any], **kwargs) -> RawDraw:
        return RawDraw(**data)


def parse_draw_records(items: Sequence[Dict[str, Any]]) -> List[DrawRecord]:
    """
    날짜가 있는 회차 딕셔너리 목록 파싱

    Raises:
        DataLoadError: 필드 누락, 범위 오류, 중복 번호 등
    """
    try:
        return DrawRecordSchema(many=True).load(list(items))
    except (ValidationError, InvalidDrawError) as e:
        raise DataLoadError(f"회차 데이터 검증 실패: {e}") from e


def parse_raw_draws(
    items: Sequence[Dict[str, Any]],
    base_round: int,
    base_date: DateLike
) -> List[DrawRecord]:
    """
    원본(한글 키) 회차 딕셔너리 목록을 파싱해 날짜를 채운 DrawRecord로 변환

    Args:
        items: 원본 회차 데이터
        base_round: 날짜를 알고 있는 기준 회차
        base_date: 기준 회차의 추첨일
    """
    try:
        raw_draws = RawDrawSchema(many=True).load(list(items))
        return [raw.to_record(base_round, base_date) for raw in raw_draws]
    except (ValidationError, InvalidDrawError) as e:
        raise DataLoadError(f"원본 회차 데이터 검증 실패: {e}") from e


def _frame_to_items(df: pd.DataFrame) -> List[Dict[str, Any]]:
    # 빈 보너스(NaN)는 None으로 변환
    return df.astype(object).where(df.notna(), None).to_dict('records')


class DataManager:
    """당첨번호 데이터 관리자"""

    def __init__(self, config: Optional[Config] = None):
        """
        데이터 관리자 초기화

        Args:
            config: 설정 객체
        """
        self.config = config or Config()
        self.data_config = self.config.data
        self.records: List[DrawRecord] = []

    def load_data(self, path: Union[str, Path, None] = None) -> List[DrawRecord]:
        """
        데이터 로드

        Args:
            path: 데이터 파일 경로 (없으면 설정의 historical_data_path)

        Returns:
            회차 오름차순 DrawRecord 목록
        """
        try:
            data_path = Path(path or self.data_config.historical_data_path)
            if not data_path.exists():
                raise FileNotFoundError(f"데이터 파일을 찾을 수 없습니다: {data_path}")

            if data_path.suffix.lower() == '.csv':
                items = _frame_to_items(pd.read_csv(data_path))
            else:
                with open(data_path, 'r', encoding='utf-8') as f:
                    items = json.load(f)

            records = self._parse_items(items)
            self._validate_records(records)
            self.records = sort_by_round(records)
            logger.info(f"데이터 로드 완료: {len(self.records)} 회차")
            return self.records
        except Exception as e:
            logger.error(f"데이터 로드 실패: {str(e)}")
            raise

    def _parse_items(self, items: Any) -> List[DrawRecord]:
        if not isinstance(items, list):
            raise DataLoadError("데이터 파일은 회차 목록이어야 합니다.")
        if items and RAW_ROUND_KEY in items[0]:
            base_round = self.data_config.base_round
            base_date = self.data_config.base_date
            if base_round is None or base_date is None:
                raise DataLoadError("원본 데이터에는 base_round와 base_date 설정이 필요합니다.")
            return parse_raw_draws(items, base_round, base_date)
        return parse_draw_records(items)

    def _validate_records(self, records: Sequence[DrawRecord]) -> None:
        """
        회차 중복 검사

        Args:
            records: 검사할 회차 목록
        """
        seen = set()
        duplicated = []
        for record in records:
            if record.round in seen:
                duplicated.append(record.round)
            seen.add(record.round)
        if duplicated:
            raise DataLoadError(f"중복된 회차가 있습니다: {sorted(set(duplicated))}")

    def to_dataframe(self) -> pd.DataFrame:
        """
        로드된 데이터를 데이터프레임으로 변환

        Returns:
            회차 오름차순 데이터프레임 (date 열은 datetime)
        """
        columns = ['date', 'round', 'number1', 'number2', 'number3',
                   'number4', 'number5', 'number6', 'bonus']
        df = pd.DataFrame([record.to_dict() for record in self.records], columns=columns)
        df['date'] = pd.to_datetime(df['date'])
        return df

    def get_latest_record(self) -> DrawRecord:
        """
        최신 회차 반환

        Returns:
            가장 큰 회차의 DrawRecord
        """
        if not self.records:
            raise ValueError("데이터가 로드되지 않았습니다.")

        return self.records[-1]

    def save_records(self, path: Union[str, Path]) -> None:
        """로드된 데이터를 JSON으로 저장"""
        save_path = Path(path)
        save_path.parent.mkdir(parents=True, exist_ok=True)
        with open(save_path, 'w', encoding='utf-8') as f:
            json.dump([record.to_dict() for record in self.records], f,
                      ensure_ascii=False, indent=2)
        logger.info(f"데이터 저장 완료: {save_path} ({len(self.records)} 회차)")
