# -*- coding: utf-8 -*-
"""
테이블 데이터 모델

- content: Chunk / Paragraph 셀 내용
- properties: 글자/문단/셀 서식과 테두리
- part: 셀 격자 (header / body / footer)
- table: TableModel, 캡션, 테이블 속성
- factory: create_table / qtable
- ops: 변환 연산
"""

from .content import (
    Chunk,
    Paragraph,
    as_b,
    as_chunk,
    as_equation,
    as_highlight,
    as_i,
    as_image,
    as_paragraph,
    as_sub,
    as_sup,
    as_u,
    colorize,
    hyperlink_text,
)
from .properties import (
    NO_BORDER,
    Border,
    CellProps,
    FormatPatch,
    ParProps,
    TextProps,
    color_to_hex,
)
from .part import Cell, TablePart
from .table import (
    Autonum,
    Caption,
    HtmlOptions,
    PdfOptions,
    TableModel,
    TableProperties,
    WordOptions,
)
from .factory import create_table, qtable

__all__ = [
    'Chunk', 'Paragraph',
    'as_b', 'as_chunk', 'as_equation', 'as_highlight', 'as_i', 'as_image',
    'as_paragraph', 'as_sub', 'as_sup', 'as_u', 'colorize', 'hyperlink_text',
    'NO_BORDER', 'Border', 'CellProps', 'FormatPatch', 'ParProps', 'TextProps',
    'color_to_hex',
    'Cell', 'TablePart',
    'Autonum', 'Caption', 'HtmlOptions', 'PdfOptions', 'TableModel',
    'TableProperties', 'WordOptions',
    'create_table', 'qtable',
]
