# -*- coding: utf-8 -*-
"""변환 연산(ops) 테스트"""

import datetime

import pytest

from flextab import ops
from flextab.core.errors import MergeConflictError, OptionTypeError, OptionValueError, SelectorError
from flextab.model import NO_BORDER, Border, Paragraph, TextProps, as_b, as_paragraph, create_table


# ============================================================
# 서식
# ============================================================

class TestTextFormat:
    def test_bold_header(self, ft):
        ft2 = ops.bold(ft, part='header')
        assert all(c.fmt.text.bold for c in ft2.header.cells[0])
        assert ft2.body.cells[0][0].fmt.text.bold is None

    def test_row_predicate(self, ft):
        ft2 = ops.bg(ft, i=lambda r: r['b'] > 2, bg='#FFF2CC')
        colored = [k for k, row in enumerate(ft2.body.cells) if row[0].fmt.cell.background_color]
        assert colored == [2, 3]

    def test_all_parts_with_row_selector(self, ft):
        with pytest.raises(SelectorError):
            ops.bold(ft, i=0, part='all')

    def test_all_parts(self, ft):
        ft2 = ops.italic(ft, part='all')
        assert ft2.header.cells[0][0].fmt.text.italic is True
        assert ft2.body.cells[3][2].fmt.text.italic is True

    def test_unknown_part(self, ft):
        with pytest.raises(SelectorError):
            ops.bold(ft, part='caption')

    def test_bad_color(self, ft):
        with pytest.raises(OptionValueError):
            ops.color(ft, color='notacolor')

    def test_bad_fontsize_type(self, ft):
        with pytest.raises(OptionTypeError):
            ops.fontsize(ft, size='big')

    def test_style(self, ft):
        ft2 = ops.style(ft, i=0, j='a', pr_t=TextProps(bold=True, color='navy'))
        fmt = ft2.body.cells[0][0].fmt
        assert fmt.text.bold is True
        assert fmt.text.color == 'navy'

    def test_padding(self, ft):
        ft2 = ops.padding(ft, padding=2, padding_top=8)
        par = ft2.body.cells[0][0].fmt.par
        assert (par.padding_top, par.padding_bottom, par.padding_left, par.padding_right) == (8, 2, 2, 2)

    def test_rotate_value(self, ft):
        assert ops.rotate(ft, j='a', rotation='btlr').body.cells[0][0].fmt.cell.text_direction == 'btlr'
        with pytest.raises(OptionValueError):
            ops.rotate(ft, rotation='diagonal')

    def test_empty_selection_returns_same_model(self, ft):
        assert ops.bold(ft, i=lambda r: False) is ft


class TestBorders:
    def test_border_remove(self, ft):
        ft2 = ops.border_remove(ft)
        for _, part in ft2.iter_parts():
            for row in part.cells:
                for c in row:
                    assert c.fmt.cell.border_top == NO_BORDER
                    assert c.fmt.cell.border_right == NO_BORDER

    def test_hline_sets_next_row_top(self, ft):
        b = Border(width=2, color='red')
        ft2 = ops.hline(ft, i=0, border=b)
        assert ft2.body.cells[0][1].fmt.cell.border_bottom == b
        assert ft2.body.cells[1][1].fmt.cell.border_top == b

    def test_vline(self, ft):
        b = Border(width=1, style='dashed')
        ft2 = ops.vline(ft, j='a', border=b)
        assert ft2.header.cells[0][0].fmt.cell.border_right == b
        assert ft2.body.cells[2][1].fmt.cell.border_left == b

    def test_border_outer(self, rows):
        ft = create_table(rows, theme='none')
        b = Border(width=1)
        ft2 = ops.border_outer(ft, border=b)
        assert ft2.header.cells[0][1].fmt.cell.border_top == b
        assert ft2.header.cells[0][1].fmt.cell.border_bottom is None
        assert ft2.body.cells[3][1].fmt.cell.border_bottom == b
        assert ft2.body.cells[1][0].fmt.cell.border_left == b
        assert ft2.body.cells[1][2].fmt.cell.border_right == b
        assert ft2.body.cells[1][1].fmt.cell.border_left is None

    def test_border_inner(self, rows):
        ft = create_table(rows, theme='none')
        ft2 = ops.border_inner(ft, part='body')
        assert ft2.body.cells[0][0].fmt.cell.border_bottom is not None
        assert ft2.body.cells[3][0].fmt.cell.border_bottom is None
        assert ft2.body.cells[0][2].fmt.cell.border_right is None
        assert ft2.body.cells[0][1].fmt.cell.border_left is not None

    def test_bad_border_style(self):
        with pytest.raises(OptionValueError):
            Border(style='wavy')


# ============================================================
# 내용
# ============================================================

class TestContent:
    def test_compose_paragraph(self, ft):
        ft2 = ops.compose(ft, i=0, j='a', value=as_paragraph("n = ", as_b("4")))
        cell = ft2.body.cells[0][0]
        assert cell.text == "n = 4"
        assert cell.content[0].chunks[1].props.bold is True

    def test_compose_callable(self, ft):
        ft2 = ops.compose(ft, j='a', value=lambda r: f"{r['a']}-{r['b']}")
        assert ft2.body.cells[3][0].text == "y-1234"

    def test_append_prepend(self, ft):
        ft2 = ops.append_chunks(ft, 0, 'a', " kg")
        ft2 = ops.prepend_chunks(ft2, 0, 'a', "~")
        assert ft2.body.cells[0][0].text == "~x kg"

    def test_set_header_labels(self, ft):
        ft2 = ops.set_header_labels(ft, a="Group", c="Ratio")
        assert [c.text for c in ft2.header.cells[0]] == ["Group", "b", "Ratio"]

    def test_set_header_labels_unknown_key(self, ft):
        with pytest.raises(SelectorError):
            ops.set_header_labels(ft, z="Nope")


class TestAddRows:
    def test_add_header_row_spans(self, ft):
        ft2 = ops.add_header_row(ft, ["G1", "G2"], colwidths=[1, 2])
        assert ft2.header.nrow == 2
        assert ft2.header.cells[0][0].text == "G1"
        assert ft2.header.cells[0][1].text == "G2"
        assert ft2.header.merges() == [(0, 1, 1, 2)]
        assert [c.text for c in ft2.header.cells[1]] == ["a", "b", "c"]
        ft2.validate()

    def test_add_header_row_bad_colwidths(self, ft):
        with pytest.raises(OptionValueError):
            ops.add_header_row(ft, ["G1", "G2"], colwidths=[1, 1])
        with pytest.raises(OptionValueError):
            ops.add_header_row(ft, ["G1"], colwidths=[1, 2])

    def test_add_footer_row_bottom(self, ft):
        ft2 = ops.add_footer_row(ft, ["Total", 1240], colwidths=[2, 1])
        ft2 = ops.add_footer_row(ft2, ["n", 4], colwidths=[2, 1])
        assert [row[0].text for row in ft2.footer.cells] == ["Total", "n"]
        assert ft2.footer.cells[0][2].text == "1,240"

    def test_header_lines(self, ft):
        ft2 = ops.add_header_lines(ft, ["Title", "Subtitle"])
        assert [row[0].text for row in ft2.header.cells[:2]] == ["Title", "Subtitle"]
        assert ft2.header.merges() == [(0, 0, 1, 3), (1, 0, 1, 3)]

    def test_footnote(self, ft):
        ft2 = ops.footnote(ft, i=0, j='a', value="Estimated", ref_symbols=['*'])
        assert ft2.body.cells[0][0].text == "x*"
        assert ft2.body.cells[0][0].content[0].chunks[-1].props.vertical_align == 'superscript'
        assert ft2.footer.nrow == 1
        assert ft2.footer.cells[0][0].text == "*Estimated"
        assert ft2.footer.merges() == [(0, 0, 1, 3)]

    def test_footnote_count_mismatch(self, ft):
        with pytest.raises(OptionValueError):
            ops.footnote(ft, i=[0, 1], j='a', value=["one", "two", "three"])

    def test_footnote_paragraph_value(self, ft):
        note = Paragraph(as_paragraph("see ", as_b("annex")).chunks)
        ft2 = ops.footnote(ft, i=1, j='b', value=note)
        assert ft2.footer.cells[0][0].text == "1see annex"


# ============================================================
# 병합
# ============================================================

class TestMergeOps:
    def test_merge_conflict_leaves_model_unchanged(self, ft):
        ft1 = ops.merge_at(ft, i=[1, 2], j='a')
        with pytest.raises(MergeConflictError):
            ops.merge_at(ft1, i=[2, 3], j='a')
        assert ft1.body.merges() == [(1, 0, 2, 1)]
        assert ft.body.merges() == []

    def test_merge_v(self, ft):
        ft2 = ops.merge_v(ft, j='a')
        assert ft2.body.merges() == [(0, 0, 2, 1), (2, 0, 2, 1)]

    def test_merge_v_target(self, ft):
        ft2 = ops.merge_v(ft, j='a', target=['a', 'c'])
        assert ft2.body.merges() == [(0, 0, 2, 1), (0, 2, 2, 1), (2, 0, 2, 1), (2, 2, 2, 1)]

    def test_merge_h(self):
        ft = create_table([{'a': 'k', 'b': 'k', 'c': 'z'}, {'a': 'p', 'b': 'q', 'c': 'q'}])
        ft2 = ops.merge_h(ft)
        assert ft2.body.merges() == [(0, 0, 1, 2), (1, 1, 1, 2)]

    def test_merge_none(self, ft):
        ft2 = ops.merge_none(ops.merge_v(ft, j='a'))
        assert ft2.body.merges() == []

    def test_merge_all_parts_atomic(self, ft):
        ft1 = ops.merge_at(ft, i=[0, 1], j='a')
        with pytest.raises(MergeConflictError):
            ops.merge_at(ft1, j=['a', 'b'], part='all')
        assert ft1.header.merges() == []


# ============================================================
# 크기
# ============================================================

class TestDims:
    def test_width_all_parts(self, ft):
        ft2 = ops.width(ft, j='b', width=2)
        assert ft2.widths == (0.75, 2.0, 0.75)
        assert ft2.header.widths == ft2.footer.widths == ft2.widths

    def test_width_list(self, ft):
        ft2 = ops.width(ft, j=['a', 'c'], width=[1, 3])
        assert ft2.widths == (1.0, 0.75, 3.0)

    def test_width_unit(self, ft):
        ft2 = ops.width(ft, j='a', width=2.54, unit='cm')
        assert ft2.widths[0] == pytest.approx(1.0)

    def test_width_errors(self, ft):
        with pytest.raises(OptionTypeError):
            ops.width(ft, j='a', width='wide')
        with pytest.raises(OptionValueError):
            ops.width(ft, j=['a', 'b'], width=[1, 2, 3])
        with pytest.raises(OptionValueError):
            ops.width(ft, j='a', width=1, unit='furlong')

    def test_height(self, ft):
        ft2 = ops.height(ft, i=0, height=0.5)
        assert ft2.body.heights[0] == 0.5
        ft3 = ops.height_all(ft2, height=0.3)
        assert set(ft3.body.heights) == {0.3}
        assert ft3.header.heights == (0.3,)

    def test_hrule(self, ft):
        ft2 = ops.hrule(ft, i=[0, 1], rule='exact')
        assert ft2.body.hrules[:2] == ('exact', 'exact')

    def test_autofit_longer_column_is_wider(self):
        ft = create_table({'long': ["a fairly long sentence of text"], 'n': [1]})
        ft2 = ops.autofit(ft)
        assert ft2.widths[0] > ft2.widths[1]
        assert ft2.properties.layout == ft.properties.layout

    def test_autofit_extra_space(self, ft):
        base = ops.autofit(ft, add_w=0, add_h=0)
        padded = ops.autofit(ft, add_w=0.2, add_h=0)
        for a, b in zip(base.widths, padded.widths):
            assert b == pytest.approx(a + 0.2)


# ============================================================
# 열 값 서식
# ============================================================

class TestColumnFormat:
    def test_colformat_num(self, ft):
        ft2 = ops.colformat_num(ft, j='c', digits=2, na_str='-')
        assert [row[2].text for row in ft2.body.cells] == ["2.50", "3.25", "4.00", "-"]

    def test_colformat_num_marks(self):
        ft = create_table({'v': [1234567.891]})
        ft2 = ops.colformat_num(ft, j='v', digits=2, big_mark=' ', decimal_mark=',')
        assert ft2.body.cells[0][0].text == "1 234 567,89"

    def test_colformat_int(self, ft):
        ft2 = ops.colformat_int(ft, j='b', prefix='#')
        assert ft2.body.cells[3][1].text == "#1,234"

    def test_colformat_char(self, ft):
        ft2 = ops.colformat_char(ft, j='a', suffix='!')
        assert ft2.body.cells[0][0].text == "x!"

    def test_colformat_date(self):
        ft = create_table({'d': [datetime.date(2024, 1, 5), None]})
        ft2 = ops.colformat_date(ft, j='d', fmt_date='%d/%m/%Y', na_str='n/a')
        assert [row[0].text for row in ft2.body.cells] == ["05/01/2024", "n/a"]

    def test_colformat_reads_raw_data(self, ft):
        ft2 = ops.compose(ft, j='c', value="overwritten")
        ft2 = ops.colformat_num(ft2, j='c', digits=0)
        assert ft2.body.cells[0][2].text == "2"

    def test_set_formatter(self, ft):
        ft2 = ops.set_formatter(ft, b=lambda v: f"{v} pcs")
        assert ft2.body.cells[0][1].text == "1 pcs"
        assert ft2.body.cells[3][1].text == "1234 pcs"

    def test_set_formatter_not_callable(self, ft):
        with pytest.raises(OptionTypeError):
            ops.set_formatter(ft, b="{:.2f}")


# ============================================================
# 테마
# ============================================================

class TestThemes:
    def test_booktabs_rules(self, ft):
        top = ft.header.cells[0][0].fmt.cell.border_top
        assert top.width == pytest.approx(1.5)
        assert ft.header.cells[0][0].fmt.cell.border_bottom.width == pytest.approx(0.75)
        assert ft.body.cells[3][0].fmt.cell.border_bottom.width == pytest.approx(1.5)
        assert ft.body.cells[0][0].fmt.cell.border_bottom == NO_BORDER

    def test_numeric_columns_right_aligned(self, ft):
        assert ft.body.cells[0][1].fmt.par.text_align == 'right'
        assert ft.header.cells[0][2].fmt.par.text_align == 'right'
        assert ft.body.cells[0][0].fmt.par.text_align is None

    def test_vanilla_bold_header(self, rows):
        ft = create_table(rows, theme='vanilla')
        assert ft.header.cells[0][0].fmt.text.bold is True

    def test_box(self, rows):
        ft = create_table(rows, theme='box')
        cell = ft.body.cells[1][1].fmt.cell
        assert cell.border_top.visible and cell.border_left.visible

    def test_zebra(self, rows):
        ft = create_table(rows, theme='zebra')
        colors = [row[0].fmt.cell.background_color for row in ft.body.cells]
        assert colors == ["#EFEFEF", None, "#EFEFEF", None]

    def test_unknown_theme(self, rows):
        with pytest.raises(OptionValueError):
            create_table(rows, theme='neon')

    def test_theme_only_touches_existing_rows(self, ft):
        ft2 = ops.add_footer_lines(ft, "note")
        assert ft2.footer.cells[0][0].fmt.cell.border_bottom is None
