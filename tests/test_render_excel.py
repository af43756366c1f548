# -*- coding: utf-8 -*-
"""Excel 렌더러 테스트"""

import pytest
from openpyxl import load_workbook

from flextab import ops
from flextab.model import Autonum, create_table
from flextab.render import render, save_as_xlsx
from flextab.render.excel import ExcelStyler
from flextab.model.properties import Border


def merged_ranges(ws):
    return sorted(str(r) for r in ws.merged_cells.ranges)


def test_values(ft):
    ws = render(ft, 'xlsx').active
    assert ws.title == "Table"
    assert [ws.cell(row=1, column=c).value for c in (1, 2, 3)] == ['a', 'b', 'c']
    assert ws['B5'].value == "1,234"


def test_sheet_name_option(ft):
    wb = render(ft, 'xlsx', sheet_name="Data")
    assert wb.active.title == "Data"


def test_dimensions(ft):
    ws = render(ops.height(ft, i=0, height=0.5), 'xlsx').active
    assert ws.column_dimensions['A'].width == pytest.approx(0.75 * 72 / 7)
    assert ws.row_dimensions[1].height == pytest.approx(18)
    assert ws.row_dimensions[2].height == pytest.approx(36)


def test_merged_ranges(ft):
    ws = render(ops.merge_v(ft, j='a'), 'xlsx').active
    assert merged_ranges(ws) == ['A2:A3', 'A4:A5']


def test_caption_row(ft):
    ft = ops.set_caption(ft, "Sales", autonum=Autonum())
    ws = render(ft, 'xlsx').active
    assert ws['A1'].value == "Table 1: Sales"
    assert 'A1:C1' in merged_ranges(ws)
    assert ws['A2'].value == 'a'


def test_styles(rows):
    ft = create_table(rows, theme='vanilla')
    ft = ops.bg(ft, i=0, bg='#EFEFEF')
    ws = render(ft, 'xlsx').active
    assert ws['A1'].font.b is True
    assert ws['A1'].border.top.style == 'medium'
    assert ws['A1'].border.bottom.style == 'thin'
    assert ws['A5'].border.bottom.style == 'medium'
    assert ws['A2'].fill.fgColor.rgb.endswith('EFEFEF')
    assert ws['B2'].alignment.horizontal == 'right'


def test_zero_row_body():
    ws = render(create_table({'a': [], 'b': []}), 'xlsx').active
    assert ws['A1'].value == 'a'
    assert ws.max_row == 1


def test_border_side_mapping():
    styler = ExcelStyler()
    assert styler.get_border_side(Border(width=0.5)).style == 'thin'
    assert styler.get_border_side(Border(width=1.5)).style == 'medium'
    assert styler.get_border_side(Border(width=3)).style == 'thick'
    assert styler.get_border_side(Border(style='dashed')).style == 'dashed'
    assert styler.get_border_side(Border(width=0)).style is None


def test_save_and_reload(ft, tmp_path):
    path = save_as_xlsx(ft, tmp_path / 'table.xlsx', sheet_name="Report")
    wb = load_workbook(path)
    ws = wb["Report"]
    assert ws['A2'].value == 'x'
    assert ws['C2'].value == "2.5"


def test_leading_equals_stays_text(tmp_path):
    ft = create_table([{'a': '=1+1', 'b': 'x'}])
    ft = ops.set_caption(ft, "=SUM(A1:A9)")
    ws = render(ft, 'xlsx').active
    assert ws['A1'].value == "=SUM(A1:A9)"
    assert ws['A1'].data_type == 's'
    assert ws['A3'].value == '=1+1'
    assert ws['A3'].data_type == 's'
    assert ws['B3'].data_type == 's'

    path = save_as_xlsx(ft, tmp_path / 'text.xlsx')
    reloaded = load_workbook(path).active
    assert reloaded['A3'].value == '=1+1'
    assert reloaded['A3'].data_type == 's'
