# -*- coding: utf-8 -*-
"""PowerPoint 렌더러 테스트"""

import xml.etree.ElementTree as ET

from flextab import ops
from flextab.model import as_image, create_table
from flextab.render import render

P = '{http://schemas.openxmlformats.org/presentationml/2006/main}'
A = '{http://schemas.openxmlformats.org/drawingml/2006/main}'
R = '{http://schemas.openxmlformats.org/officeDocument/2006/relationships}'


def parse(ft, **options):
    return ET.fromstring(render(ft, 'pptx', **options))


def test_one_shape_per_anchor(ft):
    grp = parse(ft)
    assert len(grp.findall(f'{P}sp')) == 15
    merged = parse(ops.merge_at(ft, i=[0, 1], j='a'))
    assert len(merged.findall(f'{P}sp')) == 14


def test_merged_shape_spans_area(ft):
    grp = parse(ops.merge_at(ft, i=3, j=['b', 'c']))
    shapes = grp.findall(f'{P}sp')
    last = shapes[-1]
    ext = last.find(f'{P}spPr/{A}xfrm/{A}ext')
    assert ext.get('cx') == str(int(round(1.5 * 914400)))


def test_zero_row_body():
    grp = parse(create_table({'a': [], 'b': [], 'c': []}))
    assert len(grp.findall(f'{P}sp')) == 3


def test_group_position(ft):
    grp = parse(ft, left=0.5, top=1)
    off = grp.find(f'{P}grpSpPr/{A}xfrm/{A}off')
    assert (off.get('x'), off.get('y')) == ('457200', '914400')
    ext = grp.find(f'{P}grpSpPr/{A}xfrm/{A}ext')
    assert ext.get('cx') == str(int(round(2.25 * 914400)))


def test_border_lines_deduplicated(ft):
    grp = parse(ft)
    # header 위, header 아래, body 아래 (열마다 한 구간)
    assert len(grp.findall(f'{P}cxnSp')) == 9


def test_text_runs(ft):
    ft = ops.compose(ft, i=0, j='a', value="one\ntwo\tthree")
    ft = ops.bold(ft, i=0, j='a')
    out = render(ft, 'pptx')
    grp = ET.fromstring(out)
    cell = grp.findall(f'{P}sp')[3]
    texts = [t.text for t in cell.iter(f'{A}t')]
    assert texts == ["one", "two", "\t", "three"]
    assert cell.find(f'.//{A}br') is not None
    r_pr = cell.find(f'.//{A}r/{A}rPr')
    assert (r_pr.get('sz'), r_pr.get('b')) == ('1100', '1')


def test_autofit_uses_natural_widths():
    ft = ops.set_layout(create_table({'long': ["a fairly long sentence"], 'n': [1]}), 'autofit')
    grp = parse(ft)
    shapes = grp.findall(f'{P}sp')
    first = int(shapes[0].find(f'{P}spPr/{A}xfrm/{A}ext').get('cx'))
    second = int(shapes[1].find(f'{P}spPr/{A}xfrm/{A}ext').get('cx'))
    assert first > second


def test_fill_and_anchor(ft):
    ft = ops.bg(ft, i=0, j='a', bg='#FFF2CC')
    ft = ops.valign(ft, i=0, j='a', valign='top')
    cell = parse(ft).findall(f'{P}sp')[3]
    assert cell.find(f'{P}spPr/{A}solidFill/{A}srgbClr').get('val') == 'FFF2CC'
    assert cell.find(f'{P}txBody/{A}bodyPr').get('anchor') == 't'


def test_image_becomes_picture(ft):
    ft = ops.compose(ft, i=0, j='a', value=as_image('logo.png', 1, 1))
    grp = parse(ft)
    assert 'logo.png' not in [t.text for t in grp.iter(f'{A}t')]
    pics = grp.findall(f'{P}pic')
    assert len(pics) == 1
    blip = pics[0].find(f'{P}blipFill/{A}blip')
    assert blip.get(f'{R}embed') == 'logo.png'
    ext = pics[0].find(f'{P}spPr/{A}xfrm/{A}ext')
    assert (ext.get('cx'), ext.get('cy')) == ('914400', '914400')

    cell_off = grp.findall(f'{P}sp')[3].find(f'{P}spPr/{A}xfrm/{A}off')
    off = pics[0].find(f'{P}spPr/{A}xfrm/{A}off')
    # 안쪽 여백 5pt = 63500 EMU
    assert int(off.get('x')) == int(cell_off.get('x')) + 63500
    assert int(off.get('y')) == int(cell_off.get('y')) + 63500
