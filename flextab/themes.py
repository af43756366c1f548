# -*- coding: utf-8 -*-
"""
테이블 테마

테마는 ops 변환 연산을 순서대로 적용하는 함수입니다. 테마 적용 시점에
존재하는 행에만 영향을 주며, 이후 추가한 행에는 다시 적용해야 합니다.

- booktabs: 가로선 3개 (header 위 굵게, header 아래, body 아래 굵게)
- vanilla: booktabs + header 굵은 글씨
- box: 모든 셀 테두리 + header 굵은 글씨
- zebra: header 배경 + body 홀수 행 배경, 테두리 없음
- none: 아무것도 하지 않음

숫자 열은 모든 테마(none 제외)에서 오른쪽 정렬됩니다.
"""

import logging
from typing import Callable, Dict

from .config import THEMES
from .core.errors import OptionValueError
from .model import ops
from .model.dataset import numeric_columns
from .model.properties import Border
from .model.table import TableModel

logger = logging.getLogger(__name__)

# 굵은 선 두께 배율
THICK_RATIO = 2


def _borders(x: TableModel):
    d = x.defaults
    std = Border(width=d.border_width, color=d.border_color)
    thick = Border(width=d.border_width * THICK_RATIO, color=d.border_color)
    return std, thick


def _align_numeric(x: TableModel) -> TableModel:
    """숫자 열을 모든 파트에서 오른쪽 정렬"""
    keys = numeric_columns(x.col_keys, list(x.body.data))
    if not keys:
        return x
    return ops.align(x, j=keys, align='right', part='all')


def theme_booktabs(x: TableModel) -> TableModel:
    std, thick = _borders(x)
    x = ops.border_remove(x)
    x = ops.hline_top(x, border=thick, part='header')
    x = ops.hline_bottom(x, border=std, part='header')
    x = ops.hline_bottom(x, border=thick, part='body')
    x = ops.hline_bottom(x, border=thick, part='footer')
    return _align_numeric(x)


def theme_vanilla(x: TableModel) -> TableModel:
    x = theme_booktabs(x)
    return ops.bold(x, part='header')


def theme_box(x: TableModel) -> TableModel:
    std, _ = _borders(x)
    x = ops.border_remove(x)
    x = ops.border_outer(x, border=std, part='all')
    x = ops.border_inner(x, border=std, part='all')
    x = ops.bold(x, part='header')
    return _align_numeric(x)


def theme_zebra(x: TableModel, odd_header: str = "#CFCFCF", odd_body: str = "#EFEFEF") -> TableModel:
    x = ops.border_remove(x)
    x = ops.bg(x, bg=odd_header, part='header')
    x = ops.bold(x, part='header')
    if x.body.nrow:
        odd = [k % 2 == 0 for k in range(x.body.nrow)]
        x = ops.bg(x, i=odd, bg=odd_body, part='body')
    return _align_numeric(x)


def theme_none(x: TableModel) -> TableModel:
    return x


THEME_FUNCTIONS: Dict[str, Callable[[TableModel], TableModel]] = {
    'booktabs': theme_booktabs,
    'vanilla': theme_vanilla,
    'box': theme_box,
    'zebra': theme_zebra,
    'none': theme_none,
}


def apply_theme(x: TableModel, name: str) -> TableModel:
    """이름으로 테마 적용"""
    if name not in THEME_FUNCTIONS:
        raise OptionValueError(f"알 수 없는 테마: {name} (가능: {', '.join(THEMES)})")
    logger.debug("테마 적용: %s", name)
    return THEME_FUNCTIONS[name](x)
