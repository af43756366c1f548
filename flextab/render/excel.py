# -*- coding: utf-8 -*-
"""
Excel 렌더러

openpyxl Workbook을 생성합니다.

- 캡션이 있으면 표 위 한 행을 병합해 캡션을 기록
- 병합 영역은 merge_cells, 테두리는 영역 바깥쪽만 유지
- 열 너비/행 높이는 Unit으로 Excel 단위 변환

사용 예:
    wb = ExcelRenderer().render(model)
    wb.save('table.xlsx')
"""

import logging
from pathlib import Path
from typing import Optional, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .base import BaseRenderer, CellView, hex_color, iter_cells, iter_rows, visible
from ..core.unit import Unit
from ..formatters.resolver import FormatResolver
from ..layout.engine import TableLayout, fixed_equivalent
from ..model.properties import Border as TableBorder
from ..model.properties import FormatPatch
from ..model.table import TableModel

logger = logging.getLogger(__name__)


class ExcelStyler:
    """셀 서식 -> openpyxl 스타일 변환"""

    # 선 종류 -> openpyxl 스타일 매핑
    BORDER_STYLE_MAP = {
        'solid': 'thin',
        'dashed': 'dashed',
        'dotted': 'dotted',
        'double': 'double',
    }

    # 두께 기준 (pt)
    MEDIUM_WIDTH = 1.25
    THICK_WIDTH = 2.25

    H_ALIGN_MAP = {'left': 'left', 'center': 'center', 'right': 'right', 'justify': 'justify'}
    V_ALIGN_MAP = {'top': 'top', 'center': 'center', 'bottom': 'bottom'}
    ROTATION_MAP = {'lrtb': 0, 'btlr': 90, 'tbrl': 180}

    def get_border_side(self, border: Optional[TableBorder]) -> Side:
        """테두리를 openpyxl Side로 변환"""
        if not visible(border):
            return Side(style=None)
        style = self.BORDER_STYLE_MAP.get(border.style, 'thin')
        if style == 'thin':
            if border.width >= self.THICK_WIDTH:
                style = 'thick'
            elif border.width >= self.MEDIUM_WIDTH:
                style = 'medium'
        return Side(style=style, color=hex_color(border.color))

    def apply_cell_style(self, excel_cell, view: CellView, resolver: FormatResolver):
        """앵커 셀에 스타일 적용 (테두리, 배경색, 폰트, 정렬)"""
        fmt = view.fmt
        top, bottom, left, right = view.borders
        excel_cell.border = Border(
            left=self.get_border_side(left),
            right=self.get_border_side(right),
            top=self.get_border_side(top),
            bottom=self.get_border_side(bottom),
        )

        bg_color = hex_color(fmt.cell.background_color)
        if bg_color:
            excel_cell.fill = PatternFill(start_color=bg_color, end_color=bg_color, fill_type='solid')

        # 첫 조각 글자 서식 (셀 전체에 하나만 지정 가능)
        props = fmt.text
        for paragraph in view.cell.content:
            if paragraph.chunks:
                props = resolver.resolve_run(paragraph.chunks[0], fmt)
                break
        font_color = hex_color(props.color)
        excel_cell.font = Font(
            name=props.font_family,
            size=props.font_size,
            bold=props.bold,
            italic=props.italic,
            underline='single' if props.underlined else None,
            vertAlign=props.vertical_align if props.vertical_align != 'baseline' else None,
            color=font_color if font_color else None,
        )

        excel_cell.alignment = Alignment(
            horizontal=self.H_ALIGN_MAP.get(fmt.par.text_align, 'left'),
            vertical=self.V_ALIGN_MAP.get(fmt.cell.vertical_align, 'center'),
            text_rotation=self.ROTATION_MAP.get(fmt.cell.text_direction, 0),
            wrap_text=True,
        )

    def apply_merged_cell_borders(self, ws: Worksheet, view: CellView,
                                  start_row: int, start_col: int, end_row: int, end_col: int):
        """병합된 셀 영역의 테두리 적용 (외곽만 유지, 내부 제거)"""
        if start_row == end_row and start_col == end_col:
            return

        top, bottom, left, right = view.borders
        for r in range(start_row, end_row + 1):
            for c in range(start_col, end_col + 1):
                if r == start_row and c == start_col:
                    continue
                ws.cell(row=r, column=c).border = Border(
                    left=self.get_border_side(left) if c == start_col else Side(),
                    right=self.get_border_side(right) if c == end_col else Side(),
                    top=self.get_border_side(top) if r == start_row else Side(),
                    bottom=self.get_border_side(bottom) if r == end_row else Side(),
                )


def cell_text(content) -> str:
    """셀 문단들을 줄바꿈으로 연결한 텍스트 (탭은 그대로)"""
    return '\n'.join(p.text for p in content)


def write_text(excel_cell, text: str):
    """
    문자열 값 기록

    openpyxl은 '='로 시작하는 문자열을 수식으로 저장하므로 문자열 형식으로 고정합니다.
    """
    excel_cell.value = text
    if text.startswith('='):
        excel_cell.data_type = 's'


class ExcelRenderer(BaseRenderer):
    """
    openpyxl Workbook 렌더러

    Args:
        sheet_name: 시트 이름
        start_row: 표를 시작할 행 (1부터)
        start_col: 표를 시작할 열 (1부터)
    """

    format_name = "xlsx"

    def __init__(self, sheet_name: str = "Table", start_row: int = 1, start_col: int = 1):
        self.sheet_name = sheet_name
        self.start_row = start_row
        self.start_col = start_col
        self.styler = ExcelStyler()

    def prepare_layout(self, model: TableModel, layout: Optional[TableLayout]) -> TableLayout:
        return fixed_equivalent(model, layout)

    def _render(self, model: TableModel, layout: TableLayout, resolver: FormatResolver) -> Workbook:
        wb = Workbook()
        ws = wb.active
        ws.title = self.sheet_name
        self.write(ws, model, layout, resolver)
        return wb

    def write(self, ws: Worksheet, model: TableModel, layout: TableLayout, resolver: FormatResolver) -> int:
        """
        워크시트에 표 기록

        Returns:
            기록한 마지막 행 번호
        """
        row_no = self.start_row
        col0 = self.start_col

        # 열 너비
        for k, width in enumerate(layout.widths):
            ws.column_dimensions[get_column_letter(col0 + k)].width = Unit.inch_to_excel_width(width)

        # 캡션
        if model.caption.has_value:
            row_no = self._write_caption(ws, model, resolver, row_no)

        # 행별로 기록
        base_row = {}
        for row in iter_rows(model, layout):
            base_row[(row.part_name, row.index)] = row_no
            ws.row_dimensions[row_no].height = Unit.inch_to_excel_height(row.height)
            row_no += 1

        for row in iter_rows(model, layout):
            r = base_row[(row.part_name, row.index)]
            for view in iter_cells(row, resolver):
                c = col0 + view.col
                excel_cell = ws.cell(row=r, column=c)
                write_text(excel_cell, cell_text(view.cell.content))
                self.styler.apply_cell_style(excel_cell, view, resolver)

                end_row = r + view.row_span - 1
                end_col = c + view.col_span - 1
                if end_row > r or end_col > c:
                    ws.merge_cells(start_row=r, start_column=c, end_row=end_row, end_column=end_col)
                    self.styler.apply_merged_cell_borders(ws, view, r, c, end_row, end_col)

        logger.debug("xlsx: %d행 기록", row_no - self.start_row)
        return row_no - 1

    def _write_caption(self, ws: Worksheet, model: TableModel, resolver: FormatResolver, row_no: int) -> int:
        caption = model.caption
        text = caption.text
        autonum = caption.autonum
        if autonum is not None:
            text = f"{autonum.pre_label}{autonum.start_at or 1}{autonum.post_label}{text}"

        excel_cell = ws.cell(row=row_no, column=self.start_col)
        write_text(excel_cell, text)
        base = resolver.resolve_patch(FormatPatch())
        props = base.text
        if not caption.simple_caption and caption.value.chunks:
            props = resolver.resolve_free_run(caption.value.chunks[0])
        excel_cell.font = Font(name=props.font_family, size=props.font_size,
                               bold=props.bold, italic=props.italic)
        align = model.properties.align if caption.align_with_table else (caption.fp_p.text_align or 'left')
        excel_cell.alignment = Alignment(horizontal=align, vertical='center', wrap_text=True)
        if model.ncol > 1:
            ws.merge_cells(start_row=row_no, start_column=self.start_col,
                           end_row=row_no, end_column=self.start_col + model.ncol - 1)
        return row_no + 1

    def save(self, model: TableModel, path: Union[str, Path], layout: Optional[TableLayout] = None) -> str:
        """xlsx 파일로 저장"""
        path = Path(path)
        wb = self.render(model, layout)
        wb.save(path)
        logger.info("xlsx 저장: %s", path)
        return str(path)
