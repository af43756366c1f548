# -*- coding: utf-8 -*-
"""
core 모듈 - 공통 클래스 및 유틸리티

단위 변환, 예외 등 프로젝트 전체에서 사용되는 공통 코드
"""

from .unit import Unit
from .errors import (
    FlexTableError,
    ConstructionError,
    SelectorError,
    MergeConflictError,
    LayoutConsistencyError,
    OptionValueError,
    OptionTypeError,
)

__all__ = [
    'Unit',
    'FlexTableError',
    'ConstructionError',
    'SelectorError',
    'MergeConflictError',
    'LayoutConsistencyError',
    'OptionValueError',
    'OptionTypeError',
]
