# -*- coding: utf-8 -*-
"""
서식 속성 데이터 모델

개요:
- Border: 셀 한 변의 테두리 (두께 pt, 색상, 선 종류)
- TextProps: 글자 서식 (글꼴, 크기, 굵게/기울임/밑줄, 색상, 형광, 위/아래 첨자)
- ParProps: 문단 서식 (정렬, 안쪽 여백, 줄 간격)
- CellProps: 셀 서식 (배경색, 세로 정렬, 글 방향, 네 변 테두리)
- FormatPatch: 위 세 가지를 묶은 셀 서식 패치

모든 필드의 None 값은 "지정 안 됨(상속)"을 의미합니다.
패치를 겹칠 때는 None이 아닌 필드만 덮어쓰므로, 속성별로 마지막에
지정된 값이 남습니다.
"""

import re
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

from ..core.errors import OptionTypeError, OptionValueError


BORDER_STYLES = ('solid', 'dashed', 'dotted', 'double', 'none')
TEXT_ALIGNS = ('left', 'center', 'right', 'justify')
CELL_VALIGNS = ('top', 'center', 'bottom')
TEXT_VALIGNS = ('baseline', 'superscript', 'subscript')
TEXT_DIRECTIONS = ('lrtb', 'tbrl', 'btlr')

# 자주 쓰는 색상 이름 -> hex
NAMED_COLORS = {
    'black': '000000',
    'white': 'FFFFFF',
    'red': 'FF0000',
    'green': '008000',
    'blue': '0000FF',
    'yellow': 'FFFF00',
    'orange': 'FFA500',
    'purple': '800080',
    'gray': '808080',
    'grey': '808080',
    'lightgray': 'D3D3D3',
    'lightgrey': 'D3D3D3',
    'darkgray': 'A9A9A9',
    'darkgrey': 'A9A9A9',
    'navy': '000080',
    'transparent': None,
}

_HEX_RE = re.compile(r'^#?([0-9A-Fa-f]{6})([0-9A-Fa-f]{2})?$')


# ============================================================
# 색상 변환
# ============================================================

def color_to_hex(color: Optional[str]) -> Optional[str]:
    """
    색상 문자열을 RRGGBB (대문자, # 없음)로 변환

    'transparent' 또는 알파 값이 00인 색상은 None을 반환합니다.
    """
    if color is None:
        return None
    name = color.strip().lower()
    if name in NAMED_COLORS:
        return NAMED_COLORS[name]
    m = _HEX_RE.match(color.strip())
    if not m:
        raise OptionValueError(f"알 수 없는 색상: {color}")
    if m.group(2) is not None and m.group(2) == '00':
        return None
    return m.group(1).upper()


def _check_color(name: str, value):
    if value is None:
        return
    if not isinstance(value, str):
        raise OptionTypeError(f"'{name}'는 색상 문자열이어야 합니다: {value!r}")
    color_to_hex(value)


def _check_number(name: str, value, minimum: float = 0):
    if value is None:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise OptionTypeError(f"'{name}'는 숫자여야 합니다: {value!r}")
    if value < minimum:
        raise OptionValueError(f"'{name}'는 {minimum} 이상이어야 합니다: {value!r}")


def _check_bool(name: str, value):
    if value is not None and not isinstance(value, bool):
        raise OptionTypeError(f"'{name}'는 bool이어야 합니다: {value!r}")


def _check_choice(name: str, value, choices):
    if value is not None and value not in choices:
        raise OptionValueError(f"'{name}' 값 '{value}'는 허용되지 않습니다 (가능: {', '.join(choices)})")


def overlay(base, patch):
    """patch의 None이 아닌 필드를 base 위에 덮어쓴 새 객체 반환"""
    if patch is None:
        return base
    changes = {
        f.name: getattr(patch, f.name)
        for f in fields(patch)
        if getattr(patch, f.name) is not None
    }
    if not changes:
        return base
    return replace(base, **changes)


# ============================================================
# 테두리
# ============================================================

@dataclass(frozen=True)
class Border:
    """테두리 정보 (두께는 pt)"""
    width: float = 0.75
    color: str = "#666666"
    style: str = "solid"

    def __post_init__(self):
        _check_number('width', self.width)
        _check_color('color', self.color)
        _check_choice('style', self.style, BORDER_STYLES)

    @property
    def visible(self) -> bool:
        return self.style != 'none' and self.width > 0 and color_to_hex(self.color) is not None


NO_BORDER = Border(width=0, style='none')


# ============================================================
# 글자 / 문단 / 셀 서식
# ============================================================

@dataclass(frozen=True)
class TextProps:
    """글자 서식"""
    font_family: Optional[str] = None
    font_size: Optional[float] = None  # pt
    bold: Optional[bool] = None
    italic: Optional[bool] = None
    underlined: Optional[bool] = None
    color: Optional[str] = None
    shading_color: Optional[str] = None
    vertical_align: Optional[str] = None  # baseline | superscript | subscript

    def __post_init__(self):
        if self.font_family is not None and not isinstance(self.font_family, str):
            raise OptionTypeError(f"'font_family'는 문자열이어야 합니다: {self.font_family!r}")
        _check_number('font_size', self.font_size)
        _check_bool('bold', self.bold)
        _check_bool('italic', self.italic)
        _check_bool('underlined', self.underlined)
        _check_color('color', self.color)
        _check_color('shading_color', self.shading_color)
        _check_choice('vertical_align', self.vertical_align, TEXT_VALIGNS)

    def update(self, other: Optional['TextProps']) -> 'TextProps':
        return overlay(self, other)


@dataclass(frozen=True)
class ParProps:
    """문단 서식 (여백은 pt)"""
    text_align: Optional[str] = None
    padding_top: Optional[float] = None
    padding_bottom: Optional[float] = None
    padding_left: Optional[float] = None
    padding_right: Optional[float] = None
    line_spacing: Optional[float] = None

    def __post_init__(self):
        _check_choice('text_align', self.text_align, TEXT_ALIGNS)
        for name in ('padding_top', 'padding_bottom', 'padding_left', 'padding_right', 'line_spacing'):
            _check_number(name, getattr(self, name))

    def update(self, other: Optional['ParProps']) -> 'ParProps':
        return overlay(self, other)


@dataclass(frozen=True)
class CellProps:
    """셀 서식"""
    background_color: Optional[str] = None
    vertical_align: Optional[str] = None  # top | center | bottom
    text_direction: Optional[str] = None  # lrtb | tbrl | btlr
    border_top: Optional[Border] = None
    border_bottom: Optional[Border] = None
    border_left: Optional[Border] = None
    border_right: Optional[Border] = None

    def __post_init__(self):
        _check_color('background_color', self.background_color)
        _check_choice('vertical_align', self.vertical_align, CELL_VALIGNS)
        _check_choice('text_direction', self.text_direction, TEXT_DIRECTIONS)
        for side in ('border_top', 'border_bottom', 'border_left', 'border_right'):
            value = getattr(self, side)
            if value is not None and not isinstance(value, Border):
                raise OptionTypeError(f"'{side}'는 Border여야 합니다: {value!r}")

    def update(self, other: Optional['CellProps']) -> 'CellProps':
        return overlay(self, other)


@dataclass(frozen=True)
class FormatPatch:
    """
    셀 서식 패치

    text/par/cell 각각의 None이 아닌 필드만 의미가 있습니다.
    """
    text: TextProps = field(default_factory=TextProps)
    par: ParProps = field(default_factory=ParProps)
    cell: CellProps = field(default_factory=CellProps)

    def merge(self, other: Optional['FormatPatch']) -> 'FormatPatch':
        """other를 위에 겹친 새 패치 (속성별 마지막 값 우선)"""
        if other is None:
            return self
        return FormatPatch(
            text=self.text.update(other.text),
            par=self.par.update(other.par),
            cell=self.cell.update(other.cell),
        )

    @classmethod
    def of(cls, **kwargs) -> 'FormatPatch':
        """
        키워드 인자로 패치 생성

        예: FormatPatch.of(bold=True, text_align='right', background_color='#EEEEEE')
        """
        groups: Dict[str, Dict[str, Any]] = {'text': {}, 'par': {}, 'cell': {}}
        text_names = {f.name for f in fields(TextProps)}
        par_names = {f.name for f in fields(ParProps)}
        cell_names = {f.name for f in fields(CellProps)}
        for key, value in kwargs.items():
            # vertical_align은 셀 세로 정렬로 해석 (글자 첨자는 text_vertical_align)
            if key == 'text_vertical_align':
                groups['text']['vertical_align'] = value
            elif key in cell_names:
                groups['cell'][key] = value
            elif key in par_names:
                groups['par'][key] = value
            elif key in text_names:
                groups['text'][key] = value
            else:
                raise OptionValueError(f"알 수 없는 서식 항목: {key}")
        return cls(
            text=TextProps(**groups['text']),
            par=ParProps(**groups['par']),
            cell=CellProps(**groups['cell']),
        )
