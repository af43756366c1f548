# -*- coding: utf-8 -*-
"""
테이블 변환 연산

모든 함수는 (모델, 인자) -> 새 모델 형태이며 입력 모델을 바꾸지 않습니다.
여러 행/열에 한 번에 적용되는 연산도 하나의 원자적 연산으로 처리되어,
오류가 나면 부분 변경 없이 예외만 전달됩니다.

공통 인자:
    i: 행 선택자 (None, int, slice, 목록, bool 마스크, callable(행 딕셔너리))
    j: 열 선택자 (None, 열 키, int, 목록, bool 마스크)
    part: 'header' | 'body' | 'footer' | 'all'
          'all'에는 행 선택자를 함께 쓸 수 없습니다.

사용 예:
    ft = create_table(df)
    ft = bold(ft, part='header')
    ft = bg(ft, i=lambda r: r['score'] > 90, bg='#FFF2CC')
    ft = merge_v(ft, j='group')
    ft = set_caption(ft, '분기별 실적', autonum=Autonum(bookmark='tab-sales'))
"""

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .content import Paragraph, as_paragraph, as_sup
from .dataset import format_integer, format_number, format_value, is_missing, is_numeric_value
from .part import TablePart
from .properties import (
    NO_BORDER, Border, CellProps, FormatPatch, ParProps, TextProps,
)
from .table import (
    Autonum, Caption, TableModel, TableProperties, html_options, pdf_options,
    resolve_part_names, word_options,
)
from ..core.errors import OptionTypeError, OptionValueError, SelectorError
from ..core.unit import Unit

logger = logging.getLogger(__name__)


# ============================================================
# 공통 헬퍼
# ============================================================

def _apply(x: TableModel, part: str, fn: Callable[[TablePart], TablePart], i=None) -> TableModel:
    """선택 파트마다 fn을 적용한 새 모델 (모든 파트 계산 후 한 번에 교체)"""
    names = resolve_part_names(part)
    if part == 'all' and i is not None:
        raise SelectorError("part='all'에는 행 선택자(i)를 지정할 수 없습니다")
    updated = {}
    for name in names:
        current = x.part(name)
        new = fn(current)
        if new is not current:
            updated[name] = new
    if not updated:
        return x
    return x.with_parts(**updated)


def _format(x: TableModel, i, j, part: str, patch: FormatPatch) -> TableModel:
    return _apply(x, part, lambda p: p.set_format(i, j, patch), i)


def style(x: TableModel, i=None, j=None, pr_t: Optional[TextProps] = None,
          pr_p: Optional[ParProps] = None, pr_c: Optional[CellProps] = None,
          part: str = 'body') -> TableModel:
    """글자/문단/셀 서식을 한 번에 적용"""
    patch = FormatPatch(
        text=pr_t or TextProps(),
        par=pr_p or ParProps(),
        cell=pr_c or CellProps(),
    )
    return _format(x, i, j, part, patch)


# ============================================================
# 글자 서식
# ============================================================

def bold(x: TableModel, i=None, j=None, bold: bool = True, part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(text=TextProps(bold=bold)))


def italic(x: TableModel, i=None, j=None, italic: bool = True, part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(text=TextProps(italic=italic)))


def underline(x: TableModel, i=None, j=None, underlined: bool = True, part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(text=TextProps(underlined=underlined)))


def fontsize(x: TableModel, i=None, j=None, size: float = 11, part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(text=TextProps(font_size=size)))


def font(x: TableModel, i=None, j=None, fontname: str = "Arial", part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(text=TextProps(font_family=fontname)))


def color(x: TableModel, i=None, j=None, color: str = "black", part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(text=TextProps(color=color)))


def highlight(x: TableModel, i=None, j=None, color: str = "yellow", part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(text=TextProps(shading_color=color)))


# ============================================================
# 문단 서식
# ============================================================

def align(x: TableModel, i=None, j=None, align: str = 'left', part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(par=ParProps(text_align=align)))


def padding(x: TableModel, i=None, j=None, padding: Optional[float] = None,
            padding_top: Optional[float] = None, padding_bottom: Optional[float] = None,
            padding_left: Optional[float] = None, padding_right: Optional[float] = None,
            part: str = 'body') -> TableModel:
    """안쪽 여백 (pt). padding은 네 변 모두에 적용"""
    if padding is not None:
        padding_top = padding if padding_top is None else padding_top
        padding_bottom = padding if padding_bottom is None else padding_bottom
        padding_left = padding if padding_left is None else padding_left
        padding_right = padding if padding_right is None else padding_right
    patch = FormatPatch(par=ParProps(
        padding_top=padding_top, padding_bottom=padding_bottom,
        padding_left=padding_left, padding_right=padding_right,
    ))
    return _format(x, i, j, part, patch)


def line_spacing(x: TableModel, i=None, j=None, space: float = 1, part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(par=ParProps(line_spacing=space)))


# ============================================================
# 셀 서식
# ============================================================

def bg(x: TableModel, i=None, j=None, bg: str = "transparent", part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(cell=CellProps(background_color=bg)))


def valign(x: TableModel, i=None, j=None, valign: str = 'center', part: str = 'body') -> TableModel:
    return _format(x, i, j, part, FormatPatch(cell=CellProps(vertical_align=valign)))


def rotate(x: TableModel, i=None, j=None, rotation: str = 'lrtb', part: str = 'body') -> TableModel:
    """글 방향 (lrtb: 가로, tbrl: 위→아래, btlr: 아래→위)"""
    return _format(x, i, j, part, FormatPatch(cell=CellProps(text_direction=rotation)))


def _default_border(x: TableModel, width: Optional[float] = None) -> Border:
    d = x.defaults
    return Border(width=d.border_width if width is None else width, color=d.border_color)


def border(x: TableModel, i=None, j=None, border: Optional[Border] = None,
           border_top: Optional[Border] = None, border_bottom: Optional[Border] = None,
           border_left: Optional[Border] = None, border_right: Optional[Border] = None,
           part: str = 'body') -> TableModel:
    """셀 테두리 지정. border는 지정되지 않은 네 변 모두에 적용"""
    if border is not None:
        border_top = border_top or border
        border_bottom = border_bottom or border
        border_left = border_left or border
        border_right = border_right or border
    patch = FormatPatch(cell=CellProps(
        border_top=border_top, border_bottom=border_bottom,
        border_left=border_left, border_right=border_right,
    ))
    return _format(x, i, j, part, patch)


def border_remove(x: TableModel) -> TableModel:
    """모든 파트의 테두리 제거"""
    return border(x, border=NO_BORDER, part='all')


def hline(x: TableModel, i=None, j=None, border: Optional[Border] = None, part: str = 'body') -> TableModel:
    """선택 행 아래 가로선 (다음 행의 위 테두리도 함께 지정)"""
    b = border or _default_border(x)

    def fn(p: TablePart) -> TablePart:
        rows = p.select_rows(i)
        cols = p.select_cols(j)
        if not rows or not cols:
            return p
        p = p.set_format(rows, cols, FormatPatch(cell=CellProps(border_bottom=b)))
        below = [r + 1 for r in rows if r + 1 < p.nrow]
        return p.set_format(below, cols, FormatPatch(cell=CellProps(border_top=b)))

    return _apply(x, part, fn, i)


def hline_top(x: TableModel, j=None, border: Optional[Border] = None, part: str = 'body') -> TableModel:
    """파트 첫 행 위 가로선"""
    b = border or _default_border(x)

    def fn(p: TablePart) -> TablePart:
        if p.nrow == 0:
            return p
        return p.set_format([0], j, FormatPatch(cell=CellProps(border_top=b)))

    return _apply(x, part, fn)


def hline_bottom(x: TableModel, j=None, border: Optional[Border] = None, part: str = 'body') -> TableModel:
    """파트 마지막 행 아래 가로선"""
    b = border or _default_border(x)

    def fn(p: TablePart) -> TablePart:
        if p.nrow == 0:
            return p
        return p.set_format([p.nrow - 1], j, FormatPatch(cell=CellProps(border_bottom=b)))

    return _apply(x, part, fn)


def vline(x: TableModel, i=None, j=None, border: Optional[Border] = None, part: str = 'all') -> TableModel:
    """선택 열 오른쪽 세로선 (다음 열의 왼쪽 테두리도 함께 지정)"""
    b = border or _default_border(x)

    def fn(p: TablePart) -> TablePart:
        rows = p.select_rows(i)
        cols = p.select_cols(j)
        if not rows or not cols:
            return p
        p = p.set_format(rows, cols, FormatPatch(cell=CellProps(border_right=b)))
        right = [c + 1 for c in cols if c + 1 < p.ncol]
        return p.set_format(rows, right, FormatPatch(cell=CellProps(border_left=b)))

    return _apply(x, part, fn, i)


def border_inner_h(x: TableModel, border: Optional[Border] = None, part: str = 'body') -> TableModel:
    """파트 안쪽 가로선"""
    b = border or _default_border(x)

    def fn(p: TablePart) -> TablePart:
        if p.nrow < 2:
            return p
        p = p.set_format(list(range(p.nrow - 1)), None, FormatPatch(cell=CellProps(border_bottom=b)))
        return p.set_format(list(range(1, p.nrow)), None, FormatPatch(cell=CellProps(border_top=b)))

    return _apply(x, part, fn)


def border_inner_v(x: TableModel, border: Optional[Border] = None, part: str = 'body') -> TableModel:
    """파트 안쪽 세로선"""
    b = border or _default_border(x)

    def fn(p: TablePart) -> TablePart:
        if p.nrow == 0 or p.ncol < 2:
            return p
        p = p.set_format(None, list(range(p.ncol - 1)), FormatPatch(cell=CellProps(border_right=b)))
        return p.set_format(None, list(range(1, p.ncol)), FormatPatch(cell=CellProps(border_left=b)))

    return _apply(x, part, fn)


def border_inner(x: TableModel, border: Optional[Border] = None, part: str = 'all') -> TableModel:
    """안쪽 가로선과 세로선"""
    return border_inner_v(border_inner_h(x, border, part), border, part)


def border_outer(x: TableModel, border: Optional[Border] = None, part: str = 'all') -> TableModel:
    """
    바깥 테두리

    part='all'이면 표 전체의 바깥쪽(첫 파트 첫 행 위, 마지막 파트 마지막
    행 아래, 모든 행의 첫 열 왼쪽/마지막 열 오른쪽)에 적용합니다.
    """
    b = border or _default_border(x)
    names = [n for n in resolve_part_names(part) if x.part(n).nrow > 0]
    if not names:
        return x
    first, last = names[0], names[-1]

    def outer(name: str):
        def fn(r: int, c: int, _fmt: FormatPatch) -> Optional[FormatPatch]:
            p = x.part(name)
            cell = CellProps(
                border_top=b if (name == first and r == 0) else None,
                border_bottom=b if (name == last and r == p.nrow - 1) else None,
                border_left=b if c == 0 else None,
                border_right=b if c == p.ncol - 1 else None,
            )
            return FormatPatch(cell=cell)
        return fn

    updated = {name: x.part(name).map_format(None, None, outer(name)) for name in names}
    return x.with_parts(**updated)


# ============================================================
# 내용
# ============================================================

def compose(x: TableModel, i=None, j=None, value=None, part: str = 'body') -> TableModel:
    """
    셀 내용 교체

    value: 문자열, Chunk, Paragraph, 문단 목록 또는 callable(행 딕셔너리)
    """
    return _apply(x, part, lambda p: p.set_content(i, j, value), i)


def append_chunks(x: TableModel, i=None, j=None, *chunks, part: str = 'body') -> TableModel:
    """셀 마지막 문단 뒤에 조각 추가"""
    def fn(content):
        return content[:-1] + (content[-1].append(*chunks),)
    return _apply(x, part, lambda p: p.map_content(i, j, fn), i)


def prepend_chunks(x: TableModel, i=None, j=None, *chunks, part: str = 'body') -> TableModel:
    """셀 첫 문단 앞에 조각 추가"""
    def fn(content):
        return (content[0].prepend(*chunks),) + content[1:]
    return _apply(x, part, lambda p: p.map_content(i, j, fn), i)


def set_header_labels(x: TableModel, labels: Optional[Dict[str, Any]] = None, **kwargs) -> TableModel:
    """header 마지막 행의 열 이름 교체: set_header_labels(ft, a='가', b='나')"""
    mapping = dict(labels or {})
    mapping.update(kwargs)
    if not mapping or x.header.nrow == 0:
        return x
    header = x.header
    row = header.nrow - 1
    for key, label in mapping.items():
        header = header.set_content([row], key, label)
    return x.with_parts(header=header)


def _row_part(x: TableModel, name: str, rows: List[Dict[str, Any]]) -> TablePart:
    """새 행들로 이루어진 임시 파트 (기존 열 너비 유지)"""
    part = TablePart.create(
        name=name,
        rows=rows,
        col_keys=x.col_keys,
        default_width=0,
        default_height=x.body.heights[0] if x.body.nrow else 0.25,
        defaults=x.defaults,
    )
    return replace(part, widths=x.widths)


def _add_row(x: TableModel, name: str, values: Sequence[Any],
             colwidths: Optional[Sequence[int]], top: bool) -> TableModel:
    if colwidths is None:
        colwidths = [1] * len(values)
    colwidths = list(colwidths)
    if len(colwidths) != len(values):
        raise OptionValueError(f"values 개수({len(values)})와 colwidths 개수({len(colwidths)})가 다릅니다")
    if any(not isinstance(w, int) or w < 1 for w in colwidths):
        raise OptionValueError("colwidths는 1 이상의 정수여야 합니다")
    if sum(colwidths) != x.ncol:
        raise OptionValueError(f"colwidths 합계({sum(colwidths)})가 열 수({x.ncol})와 다릅니다")

    row: Dict[str, Any] = {}
    spans = []
    start = 0
    for value, w in zip(values, colwidths):
        for k in range(start, start + w):
            row[x.col_keys[k]] = value
        spans.append((start, w, value))
        start += w

    new = _row_part(x, name, [{k: "" for k in x.col_keys}])
    new = replace(new, data=(row,))
    for c, w, value in spans:
        cols = list(range(c, c + w))
        content = value if isinstance(value, Paragraph) else format_value(value, x.defaults)
        new = new.set_content([0], cols, content).merge([0], cols)
    combined = x.part(name).insert_rows(new, top=top)
    return x.with_parts(**{name: combined})


def add_header_row(x: TableModel, values: Sequence[Any], colwidths: Optional[Sequence[int]] = None,
                   top: bool = True) -> TableModel:
    """header에 행 추가 (colwidths만큼 병합된 셀)"""
    return _add_row(x, 'header', values, colwidths, top)


def add_footer_row(x: TableModel, values: Sequence[Any], colwidths: Optional[Sequence[int]] = None,
                   top: bool = False) -> TableModel:
    """footer에 행 추가 (colwidths만큼 병합된 셀)"""
    return _add_row(x, 'footer', values, colwidths, top)


def add_header_lines(x: TableModel, values: Sequence[Any], top: bool = True) -> TableModel:
    """header에 전체 너비 행 추가 (값마다 한 행)"""
    if isinstance(values, str):
        values = [values]
    out = x
    ordered = list(reversed(values)) if top else list(values)
    for value in ordered:
        out = _add_row(out, 'header', [value], [x.ncol], top)
    return out


def add_footer_lines(x: TableModel, values: Sequence[Any], top: bool = False) -> TableModel:
    """footer에 전체 너비 행 추가 (값마다 한 행)"""
    if isinstance(values, str):
        values = [values]
    out = x
    ordered = list(reversed(values)) if top else list(values)
    for value in ordered:
        out = _add_row(out, 'footer', [value], [x.ncol], top)
    return out


def footnote(x: TableModel, i=None, j=None, value: Sequence[Any] = (),
             ref_symbols: Optional[Sequence[str]] = None, part: str = 'body') -> TableModel:
    """
    각주 추가

    선택한 셀 뒤에 위 첨자 기호를 붙이고, footer에 '기호 + 설명' 행을
    추가합니다. value가 여러 개이면 선택한 (행, 열) 조합 순서대로 대응합니다.
    """
    if isinstance(value, (str, Paragraph)):
        value = [value]
    value = list(value)
    if not value:
        return x
    if ref_symbols is None:
        ref_symbols = [str(k + 1) for k in range(len(value))]
    ref_symbols = list(ref_symbols)
    if len(ref_symbols) != len(value):
        raise OptionValueError("ref_symbols 개수가 value 개수와 다릅니다")

    p = x.part(part)
    rows = p.select_rows(i)
    cols = p.select_cols(j)
    targets = [(r, c) for r in rows for c in cols]
    if len(value) > 1 and len(targets) != len(value):
        raise OptionValueError(f"각주 {len(value)}개와 선택한 셀 {len(targets)}개가 대응하지 않습니다")

    out = x
    for k, (r, c) in enumerate(targets):
        symbol = ref_symbols[k] if len(value) > 1 else ref_symbols[0]
        out = append_chunks(out, [r], [c], as_sup(symbol), part=part)

    notes = [as_paragraph(as_sup(sym), text) for sym, text in zip(ref_symbols, value)]
    return add_footer_lines(out, notes)


# ============================================================
# 병합
# ============================================================

def merge_at(x: TableModel, i=None, j=None, part: str = 'body') -> TableModel:
    """선택 영역을 감싸는 직사각형 병합"""
    return _apply(x, part, lambda p: p.merge(i, j), i)


def merge_none(x: TableModel, part: str = 'all') -> TableModel:
    """병합 모두 해제"""
    return _apply(x, part, lambda p: p.unmerge())


def _runs(keys: List[Optional[str]]) -> List[List[int]]:
    """같은 값이 연속된 구간 (None은 구간을 끊음)"""
    runs = []
    current: List[int] = []
    for k, key in enumerate(keys):
        if current and key is not None and keys[current[-1]] == key:
            current.append(k)
        else:
            if len(current) > 1:
                runs.append(current)
            current = [k] if key is not None else []
    if len(current) > 1:
        runs.append(current)
    return runs


def merge_v(x: TableModel, j=None, target=None, part: str = 'body') -> TableModel:
    """
    열마다 같은 값이 연속된 셀을 세로로 병합

    j: 값 비교 기준 열, target: 병합할 열 (기본은 j)
    이미 병합된 셀은 구간을 끊습니다.
    """
    def fn(p: TablePart) -> TablePart:
        key_cols = p.select_cols(j)
        target_cols = p.select_cols(target) if target is not None else key_cols
        for kc in key_cols:
            keys = [
                None if (p.cells[r][kc].covered or p.cells[r][kc].merged) else p.cells[r][kc].text
                for r in range(p.nrow)
            ]
            for run in _runs(keys):
                for tc in target_cols:
                    if any(p.cells[r][tc].covered or p.cells[r][tc].merged for r in run):
                        continue
                    p = p.merge(run, [tc])
        return p
    return _apply(x, part, fn)


def merge_h(x: TableModel, i=None, part: str = 'body') -> TableModel:
    """행마다 같은 값이 연속된 셀을 가로로 병합"""
    def fn(p: TablePart) -> TablePart:
        for r in p.select_rows(i):
            keys = [
                None if (c.covered or c.merged) else c.text
                for c in p.cells[r]
            ]
            for run in _runs(keys):
                p = p.merge([r], run)
        return p
    return _apply(x, part, fn, i)


# ============================================================
# 크기
# ============================================================

def width(x: TableModel, j=None, width: Union[float, Sequence[float]] = 0.75, unit: str = 'in') -> TableModel:
    """
    열 너비 지정 (세 파트 공통)

    width가 목록이면 선택 열 순서대로 대응합니다.
    """
    cols = x.body.select_cols(j)
    if not cols:
        return x
    values = list(width) if isinstance(width, (list, tuple)) else [width] * len(cols)
    if len(values) != len(cols):
        raise OptionValueError(f"너비 {len(values)}개와 열 {len(cols)}개가 대응하지 않습니다")
    for v in values:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise OptionTypeError(f"너비는 숫자여야 합니다: {v!r}")
    updated = {}
    for name, p in x.iter_parts(include_empty=True):
        for c, v in zip(cols, values):
            p = p.set_widths([c], Unit.to_inch(v, unit))
        updated[name] = p
    return x.with_parts(**updated)


def height(x: TableModel, i=None, height: Union[float, Sequence[float]] = 0.25,
           part: str = 'body', unit: str = 'in') -> TableModel:
    """행 높이 지정"""
    def fn(p: TablePart) -> TablePart:
        rows = p.select_rows(i)
        values = list(height) if isinstance(height, (list, tuple)) else [height] * len(rows)
        if len(values) != len(rows):
            raise OptionValueError(f"높이 {len(values)}개와 행 {len(rows)}개가 대응하지 않습니다")
        for r, v in zip(rows, values):
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise OptionTypeError(f"높이는 숫자여야 합니다: {v!r}")
            p = p.set_heights([r], Unit.to_inch(v, unit))
        return p
    return _apply(x, part, fn, i)


def height_all(x: TableModel, height: float = 0.25, part: str = 'all', unit: str = 'in') -> TableModel:
    """모든 행 높이 지정"""
    return _apply(x, part, lambda p: p.set_heights(None, Unit.to_inch(height, unit)))


def hrule(x: TableModel, i=None, rule: str = 'auto', part: str = 'body') -> TableModel:
    """행 높이 규칙 (auto: 내용에 맞춤, atleast: 최소 높이, exact: 정확한 높이)"""
    return _apply(x, part, lambda p: p.set_hrule(i, rule), i)


def cell_width(x: TableModel, i=None, j=None, width: Optional[float] = None,
               part: str = 'body', unit: str = 'in') -> TableModel:
    """
    셀 선언 너비 지정

    fixed 레이아웃에서 병합 셀의 선언 너비가 걸친 열 너비 합과 다르면
    레이아웃 계산 시 오류가 납니다.
    """
    value = None if width is None else Unit.to_inch(width, unit)
    return _apply(x, part, lambda p: p.set_declared_width(i, j, value), i)


def autofit(x: TableModel, add_w: float = 0.1, add_h: float = 0.1, unit: str = 'in') -> TableModel:
    """
    내용 크기에 맞게 열 너비/행 높이를 계산해 저장

    레이아웃 종류는 바꾸지 않습니다.
    """
    from ..layout.engine import natural_dims

    widths, heights = natural_dims(x)
    extra_w = Unit.to_inch(add_w, unit)
    extra_h = Unit.to_inch(add_h, unit)
    updated = {}
    for name, p in x.iter_parts(include_empty=True):
        p = replace(
            p,
            widths=tuple(w + extra_w for w in widths),
            heights=tuple(h + extra_h for h in heights[name]),
        )
        updated[name] = p
    logger.debug("autofit: 열 너비 %s", [round(w, 3) for w in widths])
    return x.with_parts(**updated)


def dim(x: TableModel) -> Dict[str, Any]:
    """저장된 열 너비와 행 높이"""
    return x.dim()


# ============================================================
# 캡션 / 테이블 속성
# ============================================================

def _fill_caption_defaults(x: TableModel, caption: Paragraph) -> Paragraph:
    """서식 캡션의 지정 안 된 글자 속성을 기본값으로 채움"""
    d = x.defaults
    base = TextProps(
        font_family=d.font_family, font_size=d.font_size, bold=False, italic=False,
        underlined=False, color=d.font_color, shading_color='transparent',
        vertical_align='baseline',
    )
    return Paragraph(tuple(replace(c, props=base.update(c.props)) for c in caption.chunks))


def set_caption(x: TableModel, caption=None, autonum: Optional[Autonum] = None,
                word_stylename: str = "Table Caption", fp_p: Optional[ParProps] = None,
                align_with_table: bool = True, html_classes=None,
                html_escape: bool = True) -> TableModel:
    """
    캡션 지정

    caption이 문자열이면 서식 없는 캡션, Paragraph이면 서식 캡션입니다.
    """
    simple = not isinstance(caption, Paragraph)
    value = caption
    if isinstance(caption, Paragraph):
        value = _fill_caption_defaults(x, caption).expanded()
    if isinstance(html_classes, (list, tuple)):
        html_classes = ' '.join(html_classes)
    new_caption = Caption(
        value=value,
        simple_caption=simple,
        autonum=autonum,
        word_stylename=word_stylename,
        fp_p=fp_p if fp_p is not None else Caption().fp_p,
        align_with_table=align_with_table,
        html_classes=html_classes,
        html_escape=html_escape,
    )
    return replace(x, caption=new_caption)


def update_caption(x: TableModel, caption=None, autonum: Optional[Autonum] = None,
                   word_stylename: Optional[str] = None, fp_p: Optional[ParProps] = None,
                   align_with_table: Optional[bool] = None, html_classes=None) -> TableModel:
    """지정한 캡션 항목만 교체"""
    changes: Dict[str, Any] = {}
    if caption is not None:
        changes['simple_caption'] = not isinstance(caption, Paragraph)
        changes['value'] = caption
    if autonum is not None:
        changes['autonum'] = autonum
    if fp_p is not None:
        changes['fp_p'] = fp_p
    if word_stylename is not None:
        changes['word_stylename'] = word_stylename
    if html_classes is not None:
        changes['html_classes'] = ' '.join(html_classes) if isinstance(html_classes, (list, tuple)) else html_classes
    if align_with_table is not None:
        changes['align_with_table'] = align_with_table
    if not changes:
        return x
    return replace(x, caption=replace(x.caption, **changes))


def set_table_properties(x: TableModel, layout: str = 'fixed', width: float = 0,
                         align: Optional[str] = None, opts_html=None, opts_word=None,
                         opts_pdf=None, word_title: Optional[str] = None,
                         word_description: Optional[str] = None) -> TableModel:
    """
    테이블 속성 지정

    잘못된 값은 이 시점에 OptionValueError / OptionTypeError로 거부됩니다.
    """
    d = x.defaults
    props = TableProperties(
        layout=layout,
        width=width,
        align=d.table_align if align is None else align,
        opts_html=html_options(opts_html, d),
        opts_word=word_options(opts_word, d),
        opts_pdf=pdf_options(opts_pdf, d),
        word_title=word_title,
        word_description=word_description,
    )
    return replace(x, properties=props)


def set_layout(x: TableModel, layout: str) -> TableModel:
    """레이아웃 종류만 교체"""
    return replace(x, properties=replace(x.properties, layout=layout))


# ============================================================
# 열 값 서식
# ============================================================

def set_formatter(x: TableModel, part: str = 'body', **formatters: Callable[[Any], Any]) -> TableModel:
    """
    열별 값 서식 함수 적용: set_formatter(ft, price=lambda v: f"${v:.2f}")

    결측 값은 na_str로 표시됩니다.
    """
    def fn(p: TablePart) -> TablePart:
        for key, func in formatters.items():
            if not callable(func):
                raise OptionTypeError(f"'{key}' 서식 함수가 callable이 아닙니다")
            p = p.set_content(None, key, lambda row, k=key, f=func: format_value(row.get(k), x.defaults, f))
        return p
    return _apply(x, part, fn)


def _colformat(x: TableModel, i, j, part: str, func: Callable[[Any], str],
               na_str: Optional[str], prefix: str, suffix: str, accept: Callable[[Any], bool]) -> TableModel:
    na = x.defaults.na_str if na_str is None else na_str

    def fn(p: TablePart) -> TablePart:
        rows = p.select_rows(i)
        cols = p.select_cols(j)
        for c in cols:
            key = p.col_keys[c]
            for r in rows:
                value = p.data[r].get(key)
                if is_missing(value):
                    p = p.set_content([r], [c], na)
                elif accept(value):
                    p = p.set_content([r], [c], f"{prefix}{func(value)}{suffix}")
        return p
    return _apply(x, part, fn, i)


def colformat_num(x: TableModel, i=None, j=None, digits: Optional[int] = None,
                  big_mark: Optional[str] = None, decimal_mark: Optional[str] = None,
                  na_str: Optional[str] = None, prefix: str = "", suffix: str = "",
                  part: str = 'body') -> TableModel:
    """숫자 열 서식 (소수 자릿수, 천 단위 기호)"""
    d = x.defaults
    digits = d.digits if digits is None else digits
    big = d.big_mark if big_mark is None else big_mark
    dec = d.decimal_mark if decimal_mark is None else decimal_mark
    return _colformat(x, i, j, part, lambda v: format_number(v, digits, big, dec),
                      na_str, prefix, suffix, is_numeric_value)


def colformat_int(x: TableModel, i=None, j=None, big_mark: Optional[str] = None,
                  na_str: Optional[str] = None, prefix: str = "", suffix: str = "",
                  part: str = 'body') -> TableModel:
    """정수 열 서식"""
    big = x.defaults.big_mark if big_mark is None else big_mark
    return _colformat(x, i, j, part, lambda v: format_integer(v, big),
                      na_str, prefix, suffix, is_numeric_value)


def colformat_char(x: TableModel, i=None, j=None, na_str: Optional[str] = None,
                   prefix: str = "", suffix: str = "", part: str = 'body') -> TableModel:
    """문자 열 서식 (앞뒤 문구)"""
    return _colformat(x, i, j, part, str, na_str, prefix, suffix, lambda v: True)


def colformat_date(x: TableModel, i=None, j=None, fmt_date: Optional[str] = None,
                   na_str: Optional[str] = None, prefix: str = "", suffix: str = "",
                   part: str = 'body') -> TableModel:
    """날짜 열 서식 (strftime 형식)"""
    fmt = x.defaults.fmt_date if fmt_date is None else fmt_date
    return _colformat(x, i, j, part, lambda v: v.strftime(fmt),
                      na_str, prefix, suffix, lambda v: hasattr(v, 'strftime'))
