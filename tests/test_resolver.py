# -*- coding: utf-8 -*-
"""서식 결정(FormatResolver) 테스트"""

from dataclasses import replace

from flextab.config import TableDefaults
from flextab.formatters import FormatResolver
from flextab.model import Cell, Chunk, FormatPatch, TextProps
from flextab.model.properties import NO_BORDER


def test_defaults_fill_everything():
    resolver = FormatResolver(TableDefaults())
    fmt = resolver.resolve(Cell())
    assert fmt.text.font_family == "Arial"
    assert fmt.text.font_size == 11
    assert fmt.text.bold is False
    assert fmt.par.text_align == 'left'
    assert fmt.par.padding_top == 5
    assert fmt.cell.vertical_align == 'center'
    assert fmt.borders == (NO_BORDER,) * 4


def test_defaults_snapshot_used():
    resolver = FormatResolver(TableDefaults(font_family="Cambria", text_align='right'))
    fmt = resolver.resolve(Cell())
    assert fmt.text.font_family == "Cambria"
    assert fmt.par.text_align == 'right'


def test_explicit_value_wins():
    cell = Cell(fmt=FormatPatch.of(bold=True, text_align='center', background_color='#EEEEEE'))
    fmt = FormatResolver(TableDefaults()).resolve(cell)
    assert fmt.text.bold is True
    assert fmt.par.text_align == 'center'
    assert fmt.cell.background_color == '#EEEEEE'
    assert fmt.text.italic is False


def test_idempotent():
    resolver = FormatResolver(TableDefaults())
    cell = Cell(fmt=FormatPatch.of(italic=True, padding_left=2))
    assert resolver.resolve(cell) == resolver.resolve(cell)
    once = resolver.resolve_patch(cell.fmt)
    again = FormatResolver(TableDefaults()).resolve(replace(cell, fmt=cell.fmt.merge(cell.fmt)))
    assert once == again


def test_disjoint_patches_commute():
    a = FormatPatch.of(bold=True)
    b = FormatPatch.of(color='red')
    resolver = FormatResolver(TableDefaults())
    assert resolver.resolve_patch(a.merge(b)) == resolver.resolve_patch(b.merge(a))


def test_last_patch_wins_on_same_field():
    first = FormatPatch.of(color='red')
    second = FormatPatch.of(color='blue')
    fmt = FormatResolver(TableDefaults()).resolve_patch(first.merge(second))
    assert fmt.text.color == 'blue'


def test_run_inherits_and_overrides():
    resolver = FormatResolver(TableDefaults())
    fmt = resolver.resolve(Cell(fmt=FormatPatch.of(color='blue', bold=True)))
    plain = resolver.resolve_run(Chunk(text="a"), fmt)
    red = resolver.resolve_run(Chunk(text="b", props=TextProps(color='red')), fmt)
    assert plain.color == 'blue'
    assert red.color == 'red'
    assert red.bold is True


def test_text_vertical_align_keyword():
    patch = FormatPatch.of(vertical_align='top', text_vertical_align='superscript')
    assert patch.cell.vertical_align == 'top'
    assert patch.text.vertical_align == 'superscript'
