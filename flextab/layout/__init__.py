# -*- coding: utf-8 -*-
"""
레이아웃 모듈

- engine: fixed / autofit 레이아웃 계산
- metrics: 텍스트 자연 크기 추정
"""

from .engine import (
    TableLayout,
    compute_layout,
    fixed_equivalent,
    natural_dims,
    validate_fixed,
)
from .metrics import (
    cell_extent,
    paragraph_extent,
    text_width,
)

__all__ = [
    'TableLayout',
    'compute_layout',
    'fixed_equivalent',
    'natural_dims',
    'validate_fixed',
    'cell_extent',
    'paragraph_extent',
    'text_width',
]
