"""
설정 관리 모듈

이 모듈은 프로젝트의 설정을 관리하는 Config 클래스를 제공합니다.
"""

from typing import Any, Dict, Optional
from dataclasses import dataclass, asdict
from enum import Enum
from pathlib import Path
import logging
import yaml

from ..analysis.patterns import PatternBounds
from ..scoring.scoring_system import ScoringConfig
from ..filtering.score_filter import FilterConfig
from ..trend.trend_analyzer import TrendConfig

logger = logging.getLogger(__name__)


@dataclass
class DataConfig:
    """데이터 설정"""
    historical_data_path: str = 'data/lotto_results.json'
    # 날짜 없는 원본(회차/번호1~6/보너스) 데이터의 날짜 계산 기준
    base_round: Optional[int] = None
    base_date: Optional[str] = None


def _plain(value: Any) -> Any:
    """YAML 저장용 기본 타입 변환"""
    if isinstance(value, Enum):
        return value.name if hasattr(value, 'label') else value.value
    if isinstance(value, dict):
        return {_plain(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (set, frozenset)):
        return sorted(_plain(v) for v in value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


class Config:
    """설정 관리 클래스"""

    def __init__(self, config_dict: Dict[str, Any] = None):
        """
        설정 객체 초기화

        Args:
            config_dict: 설정 딕셔너리
        """
        self._config = config_dict or {}

        # 데이터 설정 초기화
        self.data = DataConfig(**self._config.get('data', {}))

        # 패턴 경계값 초기화
        self.patterns = PatternBounds(**self._config.get('patterns', {}))

        # 스코어링 설정 초기화
        self.scoring = ScoringConfig(**self._config.get('scoring', {}))

        # 필터 설정 초기화
        self.filtering = FilterConfig(**self._config.get('filtering', {}))

        # 트렌드 분석 설정 초기화
        self.trend = TrendConfig(**self._config.get('trend', {}))

    def get(self, key: str, default: Any = None) -> Any:
        """
        설정값 조회

        Args:
            key: 설정 키
            default: 기본값

        Returns:
            설정값
        """
        return self._config.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """
        설정값 설정 (섹션 객체도 다시 생성)

        Args:
            key: 설정 키
            value: 설정값
        """
        self._config[key] = value
        self.__init__(self._config)

    def update(self, config_dict: Dict[str, Any]) -> None:
        """
        설정 업데이트

        Args:
            config_dict: 업데이트할 설정 딕셔너리
        """
        self._config.update(config_dict)
        self.__init__(self._config)

    def save(self, filepath: str) -> None:
        """
        설정 저장

        Args:
            filepath: 저장할 파일 경로
        """
        try:
            save_dir = Path(filepath).parent
            save_dir.mkdir(parents=True, exist_ok=True)

            # YAML 형식으로 저장
            with open(filepath, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self.to_dict(), f, allow_unicode=True,
                               default_flow_style=False, sort_keys=False)
            logger.info(f'설정 저장 완료: {filepath}')
        except Exception as e:
            logger.error(f'설정 저장 실패: {str(e)}')
            raise

    def load(self, filepath: str) -> None:
        """
        설정 로드

        Args:
            filepath: 로드할 파일 경로
        """
        try:
            if not Path(filepath).exists():
                raise FileNotFoundError(f'설정 파일을 찾을 수 없습니다: {filepath}')

            # YAML 형식으로 로드
            with open(filepath, 'r', encoding='utf-8') as f:
                loaded = yaml.safe_load(f) or {}
            logger.info(f'설정 로드 완료: {filepath}')

            # 설정 객체 재초기화
            self.__init__(loaded)
        except Exception as e:
            logger.error(f'설정 로드 실패: {str(e)}')
            raise

    @classmethod
    def from_file(cls, filepath: str) -> 'Config':
        config = cls()
        config.load(filepath)
        return config

    def to_dict(self) -> Dict[str, Any]:
        """
        설정을 딕셔너리로 변환

        Returns:
            설정 딕셔너리
        """
        return {
            'data': _plain(asdict(self.data)),
            'patterns': _plain(asdict(self.patterns)),
            'scoring': _plain(asdict(self.scoring)),
            'filtering': _plain(asdict(self.filtering)),
            'trend': _plain(asdict(self.trend)),
        }

    def __str__(self) -> str:
        """문자열 표현"""
        return str(self.to_dict())

    def __repr__(self) -> str:
        """표현식 문자열"""
        return f'Config({self.to_dict()})'
