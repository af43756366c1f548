# -*- coding: utf-8 -*-
"""
렌더러 공통 인터페이스

모든 출력 형식은 BaseRenderer를 상속해 _render()만 구현합니다.
render()는 레이아웃을 계산(또는 전달받은 레이아웃을 사용)하고, 모델의
기본값 스냅샷으로 서식 결정기를 만든 뒤 _render()를 호출합니다.

렌더러 객체는 호출 사이에 상태를 보관하지 않습니다. 같은 모델과
레이아웃이면 항상 같은 결과를 반환합니다.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Tuple

from ..formatters.resolver import FormatResolver, ResolvedFormat
from ..layout.engine import TableLayout, compute_layout
from ..model.part import Cell, TablePart
from ..model.properties import Border, color_to_hex
from ..model.table import TableModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RowView:
    """렌더링할 행 하나"""
    part_name: str
    part: TablePart
    index: int        # 파트 안 행 번호
    height: float     # inch
    hrule: str


@dataclass(frozen=True)
class CellView:
    """렌더링할 셀 하나 (앵커 기준)"""
    row: int
    col: int
    cell: Cell
    fmt: ResolvedFormat

    # 병합 영역 바깥쪽 테두리 (top, bottom, left, right)
    borders: Tuple[Border, Border, Border, Border]

    @property
    def row_span(self) -> int:
        return self.cell.row_span

    @property
    def col_span(self) -> int:
        return self.cell.col_span


class BaseRenderer(ABC):
    """렌더러 기본 클래스"""

    format_name = ""

    def render(self, model: TableModel, layout: Optional[TableLayout] = None) -> Any:
        """
        테이블 모델 렌더링

        Args:
            model: 테이블 모델
            layout: 미리 계산한 레이아웃 (없으면 계산)

        Raises:
            LayoutConsistencyError: fixed 레이아웃에서 선언 너비가 맞지 않을 때
        """
        layout = self.prepare_layout(model, layout)
        resolver = FormatResolver(model.defaults)
        logger.debug("%s 렌더링: 열 %d개, 레이아웃 %s", self.format_name, model.ncol, layout.layout)
        return self._render(model, layout, resolver)

    def prepare_layout(self, model: TableModel, layout: Optional[TableLayout]) -> TableLayout:
        """렌더링에 쓸 레이아웃 (형식별로 재정의)"""
        return layout if layout is not None else compute_layout(model)

    @abstractmethod
    def _render(self, model: TableModel, layout: TableLayout, resolver: FormatResolver) -> Any:
        """형식별 출력 생성"""


# ============================================================
# 순회 헬퍼
# ============================================================

def iter_rows(model: TableModel, layout: TableLayout) -> Iterator[RowView]:
    """header, body, footer 순서로 행 순회 (행이 없는 파트는 건너뜀)"""
    for name, part in model.iter_parts():
        heights = layout.heights.get(name, part.heights)
        for i in range(part.nrow):
            yield RowView(
                part_name=name,
                part=part,
                index=i,
                height=heights[i] if i < len(heights) else part.heights[i],
                hrule=part.hrules[i],
            )


def cell_view(part: TablePart, i: int, j: int, resolver: FormatResolver) -> CellView:
    """
    앵커 셀 정보

    병합 셀의 아래/오른쪽 테두리는 영역의 마지막 행/열 셀에서 가져옵니다.
    """
    cell = part.cells[i][j]
    fmt = resolver.resolve(cell)
    top, bottom, left, right = fmt.borders
    if cell.row_span > 1:
        bottom = resolver.resolve(part.cells[i + cell.row_span - 1][j]).cell.border_bottom
    if cell.col_span > 1:
        right = resolver.resolve(part.cells[i][j + cell.col_span - 1]).cell.border_right
    return CellView(row=i, col=j, cell=cell, fmt=fmt, borders=(top, bottom, left, right))


def iter_cells(row: RowView, resolver: FormatResolver) -> Iterator[CellView]:
    """행의 앵커 셀 순회 (덮인 셀 제외)"""
    for j, cell in enumerate(row.part.cells[row.index]):
        if not cell.covered:
            yield cell_view(row.part, row.index, j, resolver)


def hex_color(color: Optional[str]) -> Optional[str]:
    """색상 -> RRGGBB (투명이면 None)"""
    return color_to_hex(color)


def visible(border: Optional[Border]) -> bool:
    return border is not None and border.visible
