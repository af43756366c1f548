# -*- coding: utf-8 -*-
"""
HTML 렌더러

인라인 스타일만 사용하는 자체 완결 <table> 조각을 생성합니다.

- fixed: table-layout:fixed와 <col> 너비(inch)
- autofit: 너비 지정 없음 (width 비율이 있으면 %)
- 병합: rowspan / colspan
- 줄바꿈은 <br>, 탭은 &emsp;
- scroll 옵션이 있으면 스크롤 상자(<div>)로 감쌈
"""

import html
import logging
from typing import List, Optional

from .base import BaseRenderer, CellView, hex_color, iter_cells, iter_rows, visible
from ..formatters.resolver import FormatResolver, ResolvedFormat
from ..layout.engine import TableLayout
from ..model.content import Chunk, Paragraph
from ..model.properties import Border, FormatPatch, TextProps
from ..model.table import TableModel

logger = logging.getLogger(__name__)


SECTION_TAGS = {'header': 'thead', 'body': 'tbody', 'footer': 'tfoot'}
VALIGN_CSS = {'top': 'top', 'center': 'middle', 'bottom': 'bottom'}
DIRECTION_CSS = {
    'tbrl': 'writing-mode:vertical-rl;',
    'btlr': 'writing-mode:vertical-rl;transform:rotate(180deg);',
}


def _num(value: float) -> str:
    """CSS 숫자 표기 (불필요한 0 제거)"""
    text = f"{value:.4f}".rstrip('0').rstrip('.')
    return text or '0'


def _border_css(side: str, border: Optional[Border]) -> str:
    if not visible(border):
        return f"border-{side}:none;"
    return f"border-{side}:{_num(border.width)}pt {border.style} #{hex_color(border.color)};"


def _css_string(value: str) -> str:
    """style 속성 안에 넣을 CSS 문자열 값 (작은따옴표로 감쌈)"""
    value = value.replace('\\', '\\\\').replace("'", "\\'")
    return "'" + html.escape(value, quote=True) + "'"


def _text_css(props: TextProps) -> str:
    css = [
        f"font-family:{_css_string(props.font_family)};",
        f"font-size:{_num(props.font_size)}pt;",
        f"font-weight:{'bold' if props.bold else 'normal'};",
        f"font-style:{'italic' if props.italic else 'normal'};",
        f"text-decoration:{'underline' if props.underlined else 'none'};",
    ]
    color = hex_color(props.color)
    if color is not None:
        css.append(f"color:#{color};")
    shading = hex_color(props.shading_color)
    if shading is not None:
        css.append(f"background-color:#{shading};")
    if props.vertical_align == 'superscript':
        css.append("vertical-align:super;")
    elif props.vertical_align == 'subscript':
        css.append("vertical-align:sub;")
    return ''.join(css)


class HtmlRenderer(BaseRenderer):
    """HTML 표 렌더러"""

    format_name = "html"

    def _render(self, model: TableModel, layout: TableLayout, resolver: FormatResolver) -> str:
        props = model.properties
        opts = props.opts_html
        out: List[str] = []

        if opts.extra_css:
            out.append(f"<style>{opts.extra_css}</style>")

        scroll = opts.scroll
        freeze = bool(scroll and scroll.get('freeze_first_column'))
        if scroll is not None:
            out.append(f'<div class="flextab-scroll" style="{self._scroll_css(scroll)}">')
        out.append('<div class="flextab-container">')

        classes = 'flextab-table'
        if opts.extra_class:
            classes += f' {opts.extra_class}'
        out.append(f'<table class="{html.escape(classes)}" style="{self._table_css(model, layout)}">')

        if model.caption.has_value:
            out.append(self._caption(model, resolver))

        if layout.layout == 'fixed':
            out.append('<colgroup>')
            for width in layout.widths:
                out.append(f'<col style="width:{_num(width)}in;"/>')
            out.append('</colgroup>')

        current = None
        for row in iter_rows(model, layout):
            if row.part_name != current:
                if current is not None:
                    out.append(f'</{SECTION_TAGS[current]}>')
                current = row.part_name
                out.append(f'<{SECTION_TAGS[current]}>')

            if layout.layout == 'fixed':
                out.append(f'<tr style="height:{_num(row.height)}in;">')
            else:
                out.append('<tr>')
            tag = 'th' if row.part_name == 'header' else 'td'
            for view in iter_cells(row, resolver):
                out.append(self._cell(view, tag, freeze and view.col == 0, resolver))
            out.append('</tr>')
        if current is not None:
            out.append(f'</{SECTION_TAGS[current]}>')

        out.append('</table>')
        out.append('</div>')
        if scroll is not None:
            out.append('</div>')
        return ''.join(out)

    # ========== 스타일 ==========

    def _table_css(self, model: TableModel, layout: TableLayout) -> str:
        css = ["border-collapse:collapse;"]
        if layout.layout == 'fixed':
            css.append("table-layout:fixed;")
            css.append(f"width:{_num(layout.total_width)}in;")
        elif layout.width > 0:
            css.append(f"width:{_num(layout.width * 100)}%;")
        align = model.properties.align
        if align == 'center':
            css.append("margin-left:auto;margin-right:auto;")
        elif align == 'right':
            css.append("margin-left:auto;margin-right:0;")
        else:
            css.append("margin-left:0;margin-right:auto;")
        return ''.join(css)

    def _scroll_css(self, scroll: dict) -> str:
        css = ["overflow-x:auto;width:100%;"]
        height = scroll.get('height')
        if height is not None:
            value = f"{_num(height)}px" if isinstance(height, (int, float)) else height
            css.append(f"max-height:{value};overflow-y:auto;")
        css.append(scroll.get('add_css', ''))
        return html.escape(''.join(css), quote=True)

    def _cell_css(self, view: CellView, sticky: bool) -> str:
        fmt = view.fmt
        par = fmt.par
        top, bottom, left, right = view.borders
        css = [
            _border_css('top', top),
            _border_css('bottom', bottom),
            _border_css('left', left),
            _border_css('right', right),
            f"padding:{_num(par.padding_top)}pt {_num(par.padding_right)}pt "
            f"{_num(par.padding_bottom)}pt {_num(par.padding_left)}pt;",
            f"vertical-align:{VALIGN_CSS[fmt.cell.vertical_align]};",
            f"text-align:{par.text_align};",
        ]
        background = hex_color(fmt.cell.background_color)
        if background is not None:
            css.append(f"background-color:#{background};")
        elif sticky:
            css.append("background-color:#FFFFFF;")
        css.append(DIRECTION_CSS.get(fmt.cell.text_direction, ''))
        if sticky:
            css.append("position:sticky;left:0;z-index:1;")
        return ''.join(css)

    # ========== 셀 / 문단 ==========

    def _cell(self, view: CellView, tag: str, sticky: bool, resolver: FormatResolver) -> str:
        attrs = ''
        if view.row_span > 1:
            attrs += f' rowspan="{view.row_span}"'
        if view.col_span > 1:
            attrs += f' colspan="{view.col_span}"'
        body = ''.join(self._paragraph(p, view.fmt, resolver) for p in view.cell.content)
        return f'<{tag}{attrs} style="{self._cell_css(view, sticky)}">{body}</{tag}>'

    def _paragraph(self, paragraph: Paragraph, fmt: ResolvedFormat, resolver: FormatResolver) -> str:
        par = fmt.par
        style = f"margin:0;text-align:{par.text_align};line-height:{_num(par.line_spacing)};"
        runs = ''.join(
            self._run(chunk, resolver.resolve_run(chunk, fmt))
            for chunk in paragraph.expanded().chunks
        )
        return f'<p style="{style}">{runs}</p>'

    def _run(self, chunk: Chunk, props: TextProps, escape: bool = True) -> str:
        if chunk.kind == 'break':
            return '<br>'
        if chunk.kind == 'tab':
            return '&emsp;'
        if chunk.kind == 'image':
            return (
                f'<img src="{html.escape(chunk.src)}" '
                f'style="width:{_num(chunk.width or 0)}in;height:{_num(chunk.height or 0)}in;"/>'
            )
        if chunk.kind == 'equation':
            text = html.escape(f"\\({chunk.text}\\)")
        else:
            text = html.escape(chunk.text) if escape else chunk.text
        span = f'<span style="{_text_css(props)}">{text}</span>'
        if chunk.url:
            return f'<a href="{html.escape(chunk.url)}">{span}</a>'
        return span

    # ========== 캡션 ==========

    def _caption(self, model: TableModel, resolver: FormatResolver) -> str:
        """
        <caption> 요소

        번호 자체는 문서 조립 단계에서 채웁니다. 여기서는 앞뒤 문구와
        번호 자리(span.flextab-seq)만 출력합니다.
        """
        caption = model.caption
        base = resolver.resolve_patch(FormatPatch())
        par = base.par.update(caption.fp_p)
        align = model.properties.align if caption.align_with_table else (par.text_align or 'left')

        attrs = ''
        autonum = caption.autonum
        if autonum is not None and autonum.bookmark:
            attrs += f' id="{html.escape(autonum.bookmark)}"'
        if caption.html_classes:
            attrs += f' class="{html.escape(caption.html_classes)}"'
        style = (
            f"caption-side:top;text-align:{align};"
            f"padding:{_num(par.padding_top)}pt {_num(par.padding_right)}pt "
            f"{_num(par.padding_bottom)}pt {_num(par.padding_left)}pt;"
        )

        label = ''
        if autonum is not None:
            label = (
                f'{html.escape(autonum.pre_label)}'
                f'<span class="flextab-seq" data-seq-id="{html.escape(autonum.seq_id)}"></span>'
                f'{html.escape(autonum.post_label)}'
            )

        if caption.simple_caption:
            text = caption.text
            body = html.escape(text) if caption.html_escape else text
            body = body.replace('\n', '<br>').replace('\t', '&emsp;')
        else:
            body = ''.join(
                self._run(chunk, resolver.resolve_free_run(chunk), escape=caption.html_escape)
                for chunk in caption.value.expanded().chunks
            )
        return f'<caption{attrs} style="{style}">{label}{body}</caption>'
