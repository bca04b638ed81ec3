"""
로또 회차 데이터 모델
"""

from .draw_record import DrawRecord, RawDraw, InvalidDrawError

__all__ = ['DrawRecord', 'RawDraw', 'InvalidDrawError']
