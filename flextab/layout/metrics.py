# -*- coding: utf-8 -*-
"""
텍스트 크기 추정 모듈

글꼴 파일 없이 문자 종류별 평균 폭 비율로 텍스트 폭을 추정합니다.
결과는 항상 같은 입력에 같은 값을 반환하며, 글자 크기에 비례합니다.

- 한글/한자 등 전각 문자: 1.0 em
- 대문자: 0.67 em, 숫자: 0.56 em, 소문자: 0.5 em
- 좁은 문자(i, l, 구두점, 공백): 0.28 em
- 넓은 문자(m, w, @ 등): 0.83 em
"""

import unicodedata
from typing import Tuple

from ..model.content import Chunk, Paragraph
from ..model.part import Cell
from ..model.properties import TextProps

# 줄 높이 = 글자 크기 * LINE_HEIGHT * 줄 간격
LINE_HEIGHT = 1.2

NARROW_CHARS = set("iIjlft.,;:!|'`()[]{} ")
WIDE_CHARS = set("mwMW@%")

# 위/아래 첨자 글자 크기 비율
SCRIPT_RATIO = 0.7
BOLD_RATIO = 1.06


def char_em(ch: str) -> float:
    """문자 하나의 폭 (em)"""
    if unicodedata.east_asian_width(ch) in ('W', 'F'):
        return 1.0
    if ch in NARROW_CHARS:
        return 0.28
    if ch in WIDE_CHARS:
        return 0.83
    if ch.isupper():
        return 0.67
    if ch.isdigit():
        return 0.56
    return 0.5


def text_width(text: str, font_size: float, bold: bool = False) -> float:
    """텍스트 폭 (pt)"""
    width = sum(char_em(ch) for ch in text) * font_size
    return width * BOLD_RATIO if bold else width


def effective_size(props: TextProps) -> float:
    """첨자를 반영한 글자 크기 (pt)"""
    size = props.font_size or 0
    if props.vertical_align in ('superscript', 'subscript'):
        return size * SCRIPT_RATIO
    return size


def chunk_extent(chunk: Chunk, props: TextProps, line_spacing: float) -> Tuple[float, float]:
    """조각 하나의 (폭, 높이) pt"""
    if chunk.kind in ('image', 'equation') and chunk.width is not None:
        return chunk.width * 72, (chunk.height or 0) * 72
    size = effective_size(props)
    line_h = (props.font_size or 0) * LINE_HEIGHT * line_spacing
    if chunk.kind == 'tab':
        return size, line_h
    if chunk.kind == 'break':
        return 0, line_h
    return text_width(chunk.text, size, bool(props.bold)), line_h


def paragraph_extent(paragraph: Paragraph, base: TextProps, line_spacing: float) -> Tuple[float, float]:
    """
    문단 (폭, 높이) pt

    폭은 가장 긴 줄, 높이는 줄 높이의 합입니다.
    """
    max_w = 0.0
    total_h = 0.0
    for line in paragraph.lines():
        line_w = 0.0
        line_h = (base.font_size or 0) * LINE_HEIGHT * line_spacing
        for chunk in line:
            props = base.update(chunk.props)
            w, h = chunk_extent(chunk, props, line_spacing)
            line_w += w
            line_h = max(line_h, h)
        max_w = max(max_w, line_w)
        total_h += line_h
    return max_w, total_h


def cell_extent(cell: Cell, resolver) -> Tuple[float, float]:
    """
    셀의 자연 크기 (폭, 높이) inch

    안쪽 여백과 테두리 두께를 포함합니다. 세로 쓰기 셀은 폭과 높이를
    바꿉니다.
    """
    fmt = resolver.resolve(cell)
    line_spacing = fmt.par.line_spacing or 1
    width = 0.0
    height = 0.0
    for paragraph in cell.content:
        w, h = paragraph_extent(paragraph, fmt.text, line_spacing)
        width = max(width, w)
        height += h

    if fmt.cell.text_direction in ('tbrl', 'btlr'):
        width, height = height, width

    top, bottom, left, right = fmt.borders
    width += (fmt.par.padding_left or 0) + (fmt.par.padding_right or 0)
    width += _border_width(left) + _border_width(right)
    height += (fmt.par.padding_top or 0) + (fmt.par.padding_bottom or 0)
    height += _border_width(top) + _border_width(bottom)
    return width / 72, height / 72


def _border_width(border) -> float:
    return border.width if border is not None and border.visible else 0.0
