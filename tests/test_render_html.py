# -*- coding: utf-8 -*-
"""HTML 렌더러 테스트"""

from flextab import ops
from flextab.model import Autonum, as_equation, as_image, as_paragraph, create_table, hyperlink_text
from flextab.model.properties import Border
from flextab.render import render, save_as_html


def test_structure(ft):
    out = render(ft, 'html')
    assert out.startswith('<div class="flextab-container">')
    assert '<table class="flextab-table"' in out
    assert out.count('<th ') == 3
    assert out.count('<td ') == 12
    assert '<thead>' in out and '<tbody>' in out
    assert '<tfoot>' not in out


def test_fixed_layout(ft):
    out = render(ft, 'html')
    assert 'table-layout:fixed;width:2.25in;' in out
    assert out.count('<col style="width:0.75in;"/>') == 3
    assert '<tr style="height:0.25in;">' in out


def test_autofit_layout(ft):
    out = render(ops.set_layout(ft, 'autofit'), 'html')
    assert '<colgroup>' not in out
    assert 'table-layout:fixed' not in out
    out = render(ops.set_table_properties(ft, layout='autofit', width=0.5), 'html')
    assert 'width:50%;' in out


def test_escaping(ft):
    out = render(ops.compose(ft, i=0, j='a', value="<b> & co"), 'html')
    assert '&lt;b&gt; &amp; co' in out
    assert '<b>' not in out


def test_newline_and_tab(ft):
    out = render(ops.compose(ft, i=0, j='a', value="one\ntwo\tthree"), 'html')
    assert '<br>' in out
    assert '&emsp;' in out


def test_merges(ft):
    ft = ops.merge_at(ft, i=[0, 1], j='a')
    ft = ops.merge_at(ft, i=3, j=['b', 'c'])
    out = render(ft, 'html')
    assert 'rowspan="2"' in out
    assert 'colspan="2"' in out
    assert out.count('<td ') == 12 - 1 - 1


def test_zero_row_body():
    ft = create_table({'a': [], 'b': []})
    out = render(ft, 'html')
    assert '<thead>' in out
    assert '<tbody>' not in out
    assert out.count('<th ') == 2


def test_caption(ft):
    ft = ops.set_caption(ft, "Sales <2024>", autonum=Autonum(seq_id='tab', bookmark='tab1'))
    out = render(ft, 'html')
    assert '<caption id="tab1"' in out
    assert 'data-seq-id="tab"' in out
    assert 'Table <span class="flextab-seq"' in out
    assert 'Sales &lt;2024&gt;' in out


def test_caption_without_escape(ft):
    ft = ops.set_caption(ft, "<em>raw</em>", html_escape=False, html_classes='cap')
    out = render(ft, 'html')
    assert '<em>raw</em>' in out
    assert 'class="cap"' in out


def test_scroll_box(ft):
    ft = ops.set_table_properties(
        ft, opts_html={'scroll': {'height': 200, 'freeze_first_column': True}, 'extra_css': '.x{}'},
    )
    out = render(ft, 'html')
    assert out.startswith('<style>.x{}</style><div class="flextab-scroll"')
    assert 'max-height:200px;overflow-y:auto;' in out
    assert 'position:sticky;left:0;' in out


def test_text_styles(ft):
    ft = ops.bold(ft, part='header')
    ft = ops.color(ft, i=0, j='a', color='red')
    ft = ops.bg(ft, i=1, bg='#FFF2CC')
    out = render(ft, 'html')
    assert 'font-weight:bold;' in out
    assert 'color:#FF0000;' in out
    assert 'background-color:#FFF2CC;' in out
    assert 'text-align:right;' in out


def test_rich_chunks(ft):
    value = as_paragraph(
        hyperlink_text("site", "https://example.org"),
        as_image("logo.png", width=0.5, height=0.2),
        as_equation("x^2"),
    )
    out = render(ops.compose(ft, i=0, j='a', value=value), 'html')
    assert '<a href="https://example.org">' in out
    assert '<img src="logo.png" style="width:0.5in;height:0.2in;"/>' in out
    assert '\\(x^2\\)' in out


def test_deterministic(ft):
    assert render(ft, 'html') == render(ft, 'html')


def test_save_as_html(ft, tmp_path):
    path = save_as_html(ft, tmp_path / 'table.html', title="Report")
    text = (tmp_path / 'table.html').read_text(encoding='utf-8')
    assert path.endswith('table.html')
    assert text.startswith('<!DOCTYPE html>')
    assert '<title>Report</title>' in text
    assert '<table class="flextab-table"' in text


def test_font_family_quoted_in_style(ft):
    out = render(ops.font(ft, i=0, j='a', fontname='My "Font\'s"'), 'html')
    assert "font-family:'My &quot;Font\\&#x27;s&quot;';" in out


def test_border_style_passed_through(ft):
    out = render(ops.border(ft, i=0, j='a', border=Border(width=1, style='dashed')), 'html')
    assert 'border-top:1pt dashed #666666;' in out
