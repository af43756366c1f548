# -*- coding: utf-8 -*-
"""레이아웃 계산 테스트"""

import pytest

from flextab import ops
from flextab.core.errors import LayoutConsistencyError
from flextab.layout import compute_layout
from flextab.layout.engine import fixed_equivalent, natural_dims
from flextab.layout.metrics import char_em, text_width
from flextab.model import create_table


class TestFixed:
    def test_stored_widths_verbatim(self, ft):
        ft = ops.width(ft, j='a', width=1.3)
        ft = ops.height(ft, i=1, height=0.6)
        layout = compute_layout(ft)
        assert layout.layout == 'fixed'
        assert layout.widths == (1.3, 0.75, 0.75)
        assert layout.heights['body'] == (0.25, 0.6, 0.25, 0.25)
        assert layout.heights['footer'] == ()

    def test_zero_width_kept(self, ft):
        layout = compute_layout(ops.width(ft, j='b', width=0))
        assert layout.widths[1] == 0

    def test_declared_width_mismatch(self, ft):
        ft = ops.merge_at(ft, i=0, j=['a', 'b'])
        with pytest.raises(LayoutConsistencyError):
            compute_layout(ops.cell_width(ft, i=0, j='a', width=2.0))

    def test_declared_width_match(self, ft):
        ft = ops.merge_at(ft, i=0, j=['a', 'b'])
        layout = compute_layout(ops.cell_width(ft, i=0, j='a', width=1.5))
        assert layout.total_width == pytest.approx(2.25)

    def test_helpers(self, ft):
        layout = compute_layout(ops.width(ft, width=[1, 2, 3]))
        assert layout.span_width(1, 2) == 5
        assert layout.col_offsets() == [0.0, 1.0, 3.0]
        assert layout.span_height('body', 0, 2) == pytest.approx(0.5)


class TestAutofit:
    def test_natural_widths(self):
        ft = ops.set_layout(create_table({'long': ["a fairly long sentence"], 'n': [1]}), 'autofit')
        layout = compute_layout(ft)
        assert layout.layout == 'autofit'
        assert layout.widths[0] > layout.widths[1]

    def test_monotonic_in_content(self):
        short = ops.set_layout(create_table({'a': ["abc"]}), 'autofit')
        longer = ops.set_layout(create_table({'a': ["abcdefghij"]}), 'autofit')
        assert compute_layout(longer).widths[0] >= compute_layout(short).widths[0]

    def test_bigger_font_is_wider(self):
        ft = ops.set_layout(create_table({'a': ["sample text"]}), 'autofit')
        big = ops.fontsize(ft, size=22)
        assert compute_layout(big).widths[0] > compute_layout(ft).widths[0]

    def test_merged_cell_shares_width(self):
        ft = create_table({'a': ["x", "y"], 'b': ["x", "y"]}, theme='none')
        ft = ops.compose(ft, i=0, j='a', value="a considerably longer merged label")
        merged = ops.merge_at(ft, i=0, j=['a', 'b'])
        widths, _ = natural_dims(merged)
        alone, _ = natural_dims(ft)
        assert widths[0] == pytest.approx(widths[1])
        assert widths[0] == pytest.approx(alone[0] / 2)

    def test_zero_row_part(self):
        ft = ops.set_layout(create_table({'a': [], 'b': []}), 'autofit')
        layout = compute_layout(ft)
        assert layout.heights['body'] == ()
        assert len(layout.widths) == 2

    def test_fixed_equivalent(self, ft):
        layout = compute_layout(ops.set_layout(ft, 'autofit'))
        fixed = fixed_equivalent(ft, layout)
        assert fixed.layout == 'fixed'
        assert fixed.widths == layout.widths


def test_text_width_scales_with_size():
    assert text_width("Table", 20) == pytest.approx(2 * text_width("Table", 10))
    assert char_em("가") == 1.0
    assert text_width("ab", 10, bold=True) > text_width("ab", 10)
