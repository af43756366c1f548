# -*- coding: utf-8 -*-
"""
셀 서식 결정 모듈

셀에 명시된 서식 패치와 기본값 스냅샷을 속성 단위로 합쳐 최종 서식을
계산합니다. 명시된 값이 있으면 그 값을, 없으면 기본값을 씁니다.
문단 안의 조각(run)은 셀 글자 서식을 상속하고, 조각 자체에 지정된
속성만 덮어씁니다.

사용 예:
    resolver = FormatResolver(model.defaults)
    fmt = resolver.resolve(cell)
    for chunk in cell.content[0].chunks:
        run_props = resolver.resolve_run(chunk, fmt)
"""

from dataclasses import dataclass

from ..config import TableDefaults
from ..model.content import Chunk
from ..model.part import Cell
from ..model.properties import NO_BORDER, CellProps, FormatPatch, ParProps, TextProps


@dataclass(frozen=True)
class ResolvedFormat:
    """최종 서식 (모든 필드가 채워짐)"""
    text: TextProps
    par: ParProps
    cell: CellProps

    @property
    def borders(self):
        """(top, bottom, left, right)"""
        c = self.cell
        return c.border_top, c.border_bottom, c.border_left, c.border_right


class FormatResolver:
    """기본값 + 셀 패치 -> 최종 서식"""

    def __init__(self, defaults: TableDefaults):
        self.defaults = defaults
        self.base_text = TextProps(
            font_family=defaults.font_family,
            font_size=defaults.font_size,
            bold=False,
            italic=False,
            underlined=False,
            color=defaults.font_color,
            shading_color='transparent',
            vertical_align='baseline',
        )
        self.base_par = ParProps(
            text_align=defaults.text_align,
            padding_top=defaults.padding_top,
            padding_bottom=defaults.padding_bottom,
            padding_left=defaults.padding_left,
            padding_right=defaults.padding_right,
            line_spacing=defaults.line_spacing,
        )
        self.base_cell = CellProps(
            background_color=defaults.background_color,
            vertical_align='center',
            text_direction='lrtb',
            border_top=NO_BORDER,
            border_bottom=NO_BORDER,
            border_left=NO_BORDER,
            border_right=NO_BORDER,
        )

    def resolve_patch(self, patch: FormatPatch) -> ResolvedFormat:
        return ResolvedFormat(
            text=self.base_text.update(patch.text),
            par=self.base_par.update(patch.par),
            cell=self.base_cell.update(patch.cell),
        )

    def resolve(self, cell: Cell) -> ResolvedFormat:
        """셀 최종 서식"""
        return self.resolve_patch(cell.fmt)

    def resolve_run(self, chunk: Chunk, resolved: ResolvedFormat) -> TextProps:
        """조각 최종 글자 서식 (셀 글자 서식 상속)"""
        return resolved.text.update(chunk.props)

    def resolve_free_run(self, chunk: Chunk) -> TextProps:
        """셀 밖 조각(캡션 등)의 글자 서식 (기본값 상속)"""
        return self.base_text.update(chunk.props)
