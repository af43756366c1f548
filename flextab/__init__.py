# -*- coding: utf-8 -*-
"""
flextab 패키지

데이터셋으로 보고서용 표를 만들고 여러 문서 형식으로 출력하는 도구

모듈:
- model: 표 데이터 모델 (셀 내용, 서식, 파트, 캡션)과 변환 연산(ops)
- formatters: 기본값 + 셀 서식 -> 최종 서식
- layout: fixed / autofit 레이아웃 계산
- render: Word, HTML, PowerPoint, LaTeX, Excel 렌더러
- themes: booktabs, vanilla, box, zebra
- core: 공통 유틸리티 (단위 변환, 예외)

사용 예:
    from flextab import create_table, ops, render

    ft = create_table(df)
    ft = ops.bold(ft, part='header')
    ft = ops.set_caption(ft, '지역별 매출')
    html = render(ft, 'html')
"""

from .config import (
    ConfigLoader,
    TableDefaults,
    get_defaults,
    init_defaults,
    load_defaults,
    set_defaults,
    setup_logging,
)
from .core import (
    ConstructionError,
    FlexTableError,
    LayoutConsistencyError,
    MergeConflictError,
    OptionTypeError,
    OptionValueError,
    SelectorError,
    Unit,
)
from .model import ops
from .model import (
    Autonum,
    Border,
    Caption,
    CellProps,
    Chunk,
    FormatPatch,
    Paragraph,
    ParProps,
    TableModel,
    TextProps,
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
    create_table,
    hyperlink_text,
    qtable,
)
from .formatters import FormatResolver
from .layout import TableLayout, compute_layout
from .render import RENDERERS, render, save_as_html, save_as_xlsx
from .themes import apply_theme

__version__ = '0.1.0'

__all__ = [
    'ConfigLoader', 'TableDefaults', 'get_defaults', 'init_defaults', 'load_defaults',
    'set_defaults', 'setup_logging',
    'ConstructionError', 'FlexTableError', 'LayoutConsistencyError', 'MergeConflictError',
    'OptionTypeError', 'OptionValueError', 'SelectorError', 'Unit',
    'ops',
    'Autonum', 'Border', 'Caption', 'CellProps', 'Chunk', 'FormatPatch', 'Paragraph',
    'ParProps', 'TableModel', 'TextProps',
    'as_b', 'as_chunk', 'as_equation', 'as_highlight', 'as_i', 'as_image', 'as_paragraph',
    'as_sub', 'as_sup', 'as_u', 'colorize', 'hyperlink_text',
    'create_table', 'qtable',
    'FormatResolver', 'TableLayout', 'compute_layout',
    'RENDERERS', 'render', 'save_as_html', 'save_as_xlsx',
    'apply_theme',
]
