# -*- coding: utf-8 -*-
"""LaTeX 렌더러 테스트"""

from flextab import ops
from flextab.model import Autonum, create_table, hyperlink_text
from flextab.model.properties import Border
from flextab.render import escape_latex, render
from flextab.render.latex import escape_url, label_key


def test_longtable_by_default(ft):
    out = render(ft, 'latex')
    assert '\\begin{longtable}[c]{p{0.75in}p{0.75in}p{0.75in}}' in out
    assert '\\endfirsthead' in out
    assert '\\endhead' in out
    assert out.rstrip().endswith('}')
    assert '\\setlength{\\tabcolsep}{0pt}' in out
    assert '\\renewcommand*{\\arraystretch}{1.5}' in out


def test_escape_latex():
    assert escape_latex("50% of $x_1 & #2") == "50\\% of \\$x\\_1 \\& \\#2"
    assert escape_latex("a\\b") == "a\\textbackslash{}b"


def test_caption(ft):
    ft = ops.set_caption(ft, "Sales & Costs", autonum=Autonum(bookmark='tab1'))
    out = render(ft, 'latex')
    assert '\\caption{Sales \\& Costs}\\label{tab1}' in out
    assert '\\caption[]{Sales \\& Costs}' in out


def test_caption_not_repeated(ft):
    ft = ops.set_caption(ft, "Sales")
    ft = ops.set_table_properties(ft, opts_pdf={'caption_repeat': False})
    out = render(ft, 'latex')
    assert '\\caption[]' not in out


def test_cell_content(ft):
    ft = ops.compose(ft, i=0, j='a', value="50%\nnext")
    ft = ops.bold(ft, i=0, j='a')
    out = render(ft, 'latex')
    assert '\\textbf{50\\%}' in out
    assert '\\linebreak{}' in out
    assert '\\fontspec{Arial}' in out


def test_fonts_ignore(ft):
    out = render(ops.set_table_properties(ft, opts_pdf={'fonts_ignore': True}), 'latex')
    assert '\\fontspec' not in out
    assert '\\fontsize{11}{13.2}\\selectfont' in out


def test_merges(ft):
    ft = ops.merge_at(ft, i=[0, 1], j='a')
    ft = ops.merge_at(ft, i=3, j=['b', 'c'])
    out = render(ft, 'latex')
    assert '\\multirow{2}{=}' in out
    assert '\\multicolumn{2}' in out


def test_horizontal_rules(ft):
    out = render(ft, 'latex')
    assert '\\noalign{\\global\\arrayrulewidth=1.5pt}\\arrayrulecolor[HTML]{666666}\\cline{1-3}' in out
    assert '\\arrayrulewidth=0.75pt' in out


def test_float_environments(ft):
    out = render(ops.set_table_properties(ft, opts_pdf={'float': 'float'}), 'latex')
    assert '\\begin{table}[!htbp]' in out
    assert '\\begin{tabular}{p{0.75in}p{0.75in}p{0.75in}}' in out
    assert 'longtable' not in out
    out = render(ops.set_table_properties(ft, opts_pdf={'float': 'wrap-r'}), 'latex')
    assert '\\begin{wraptable}{r}{2.25in}' in out


def test_footer_placement(ft):
    ft = ops.footnote(ft, i=0, j='a', value="note")
    out = render(ft, 'latex')
    assert out.index('\\endfoot') < out.index('\\endlastfoot')
    assert out.count('{note}') == 1
    out = render(ops.set_table_properties(ft, opts_pdf={'footer_repeat': True}), 'latex')
    assert out.count('{note}') == 2


def test_zero_row_body():
    out = render(create_table({'a': [], 'b': []}), 'latex')
    assert '\\begin{longtable}' in out
    assert '\\end{longtable}' in out


def test_background(ft):
    out = render(ops.bg(ft, i=0, j='a', bg='#FFF2CC'), 'latex')
    assert '\\cellcolor[HTML]{FFF2CC}' in out


def test_part_top_rules(rows):
    ft = create_table(rows, theme='none')
    ft = ops.hline_top(ft, border=Border(width=3, color='red'), part='body')
    out = render(ft, 'latex')
    assert '\\arrayrulewidth=3pt}\\arrayrulecolor[HTML]{FF0000}\\cline{1-3}' in out

    ft = ops.add_footer_lines(ft, "total")
    ft = ops.hline_top(ft, border=Border(width=2.5), part='footer')
    out = render(ft, 'latex')
    assert '\\arrayrulewidth=2.5pt' in out
    out = render(ops.set_table_properties(ft, opts_pdf={'float': 'float'}), 'latex')
    assert '\\arrayrulewidth=3pt' in out
    assert '\\arrayrulewidth=2.5pt' in out


def test_link_and_label_escaped(ft):
    ft = ops.compose(ft, i=0, j='a', value=hyperlink_text("site", url="https://x.org/a%20b#top"))
    ft = ops.set_caption(ft, "Sales", autonum=Autonum(bookmark='tab_1%'))
    out = render(ft, 'latex')
    assert '\\href{https://x.org/a\\%20b\\#top}' in out
    assert '\\label{tab1}' in out
    assert escape_url('50%#') == '50\\%\\#'
    assert label_key('a_b{c}') == 'abc'
