# -*- coding: utf-8 -*-
"""Word 렌더러 테스트"""

import xml.etree.ElementTree as ET

from flextab import ops
from flextab.model import Autonum, as_image, as_paragraph, create_table
from flextab.render import render

W = '{http://schemas.openxmlformats.org/wordprocessingml/2006/main}'


def parse(ft):
    return ET.fromstring(render(ft, 'docx'))


def attr(elem, name):
    return elem.get(f'{W}{name}')


def test_grid(ft):
    tbl = parse(ft)
    rows = tbl.findall(f'{W}tr')
    assert len(rows) == 5
    assert all(len(tr.findall(f'{W}tc')) == 3 for tr in rows)
    cols = tbl.findall(f'{W}tblGrid/{W}gridCol')
    assert [attr(c, 'w') for c in cols] == ['1080'] * 3


def test_fixed_table_properties(ft):
    tbl = parse(ft)
    tbl_w = tbl.find(f'{W}tblPr/{W}tblW')
    assert (attr(tbl_w, 'w'), attr(tbl_w, 'type')) == ('3240', 'dxa')
    assert attr(tbl.find(f'{W}tblPr/{W}tblLayout'), 'type') == 'fixed'
    assert attr(tbl.find(f'{W}tblPr/{W}jc'), 'val') == 'center'


def test_autofit_table_properties(ft):
    tbl = parse(ops.set_layout(ft, 'autofit'))
    assert attr(tbl.find(f'{W}tblPr/{W}tblW'), 'type') == 'auto'
    assert attr(tbl.find(f'{W}tblPr/{W}tblLayout'), 'type') == 'autofit'
    tbl = parse(ops.set_table_properties(ft, layout='autofit', width=0.5))
    tbl_w = tbl.find(f'{W}tblPr/{W}tblW')
    assert (attr(tbl_w, 'w'), attr(tbl_w, 'type')) == ('2500', 'pct')


def test_merge_markers(ft):
    tbl = parse(ops.merge_at(ft, i=[0, 1], j=['a', 'b']))
    rows = tbl.findall(f'{W}tr')
    first = rows[1].findall(f'{W}tc')
    second = rows[2].findall(f'{W}tc')
    assert attr(first[0].find(f'{W}tcPr/{W}hMerge'), 'val') == 'restart'
    assert attr(first[0].find(f'{W}tcPr/{W}vMerge'), 'val') == 'restart'
    assert attr(first[1].find(f'{W}tcPr/{W}hMerge'), 'val') == 'continue'
    assert attr(second[0].find(f'{W}tcPr/{W}vMerge'), 'val') == 'continue'
    assert first[2].find(f'{W}tcPr/{W}hMerge') is None


def test_row_properties(ft):
    ft = ops.set_table_properties(ft, opts_word={'split': False})
    ft = ops.hrule(ft, i=0, rule='exact')
    rows = parse(ft).findall(f'{W}tr')
    assert rows[0].find(f'{W}trPr/{W}tblHeader') is not None
    assert rows[1].find(f'{W}trPr/{W}tblHeader') is None
    assert rows[1].find(f'{W}trPr/{W}cantSplit') is not None
    height = rows[1].find(f'{W}trPr/{W}trHeight')
    assert (attr(height, 'val'), attr(height, 'hRule')) == ('360', 'exact')


def test_borders(ft):
    rows = parse(ft).findall(f'{W}tr')
    header_top = rows[0].find(f'{W}tc/{W}tcPr/{W}tcBorders/{W}top')
    assert (attr(header_top, 'val'), attr(header_top, 'sz')) == ('single', '12')
    inner = rows[1].find(f'{W}tc/{W}tcPr/{W}tcBorders/{W}bottom')
    assert attr(inner, 'val') == 'nil'


def test_run_properties(ft):
    ft = ops.bold(ft, part='header')
    out = render(ft, 'docx')
    tbl = ET.fromstring(out)
    r_pr = tbl.find(f'{W}tr/{W}tc/{W}p/{W}r/{W}rPr')
    assert r_pr.find(f'{W}b') is not None
    assert attr(r_pr.find(f'{W}sz'), 'val') == '22'
    assert attr(r_pr.find(f'{W}rFonts'), 'ascii') == 'Arial'


def test_newline_and_tab(ft):
    out = render(ops.compose(ft, i=0, j='a', value="one\ntwo\tthree"), 'docx')
    assert 'w:br' in out
    assert 'w:tab' in out
    assert '>two<' in out


def test_zero_row_body():
    out = render(create_table({'a': [], 'b': []}), 'docx')
    assert out.count('<w:tr>') == 1


def test_caption_field(ft):
    ft = ops.set_caption(ft, "Sales", autonum=Autonum(seq_id='tab', bookmark='tab1'))
    out = render(ft, 'docx')
    assert out.index('w:pStyle') < out.index('w:tbl')
    assert 'SEQ tab' in out
    assert 'w:bookmarkStart' in out
    assert 'w:val="Table Caption"' in out
    assert '>Sales<' in out


def test_image(ft):
    out = render(ops.compose(ft, i=0, j='a', value=as_paragraph(as_image("logo.png"))), 'docx')
    assert 'wp:inline' in out
    assert 'r:embed="logo.png"' in out


def test_word_title(ft):
    tbl = parse(ops.set_table_properties(ft, word_title="Sales", word_description="By region"))
    assert attr(tbl.find(f'{W}tblPr/{W}tblCaption'), 'val') == "Sales"
    assert attr(tbl.find(f'{W}tblPr/{W}tblDescription'), 'val') == "By region"
