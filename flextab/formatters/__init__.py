# -*- coding: utf-8 -*-
"""
서식 결정 모듈

기본값과 셀별 서식 패치를 합쳐 렌더링 시점의 최종 서식을 계산합니다.

    from flextab.formatters import FormatResolver

    resolver = FormatResolver(model.defaults)
    fmt = resolver.resolve(model.body.cells[0][0])
"""

from .resolver import (
    FormatResolver,
    ResolvedFormat,
)

__all__ = [
    'FormatResolver',
    'ResolvedFormat',
]
