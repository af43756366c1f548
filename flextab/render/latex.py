# -*- coding: utf-8 -*-
"""
LaTeX 렌더러

float 옵션에 따라 두 가지 형태로 출력합니다.
- none: longtable (페이지 나눔, 캡션/header 반복)
- float / wrap-*: table 또는 wraptable 안의 tabular

열 너비는 항상 고정 값입니다. autofit 요청은 자연 너비를 계산한 뒤
고정 너비처럼 사용합니다.

셀 출력:
- 모든 셀을 \\multicolumn{n}{spec}{...}으로 출력해 셀마다 세로 테두리를 지정
- 세로 병합은 \\multirow{n}{=}{...}, 아래쪽 덮인 행에는 빈 \\multicolumn
- 가로 테두리는 행 끝에서 열 구간별 \\cline

필요 패키지: longtable, multirow, colortbl, xcolor, array, hhline(선택),
wrapfig(wrap-*), fontspec(fonts_ignore=False일 때), hyperref(링크), graphicx(이미지)
"""

import logging
from typing import List, Optional, Tuple

from .base import BaseRenderer, RowView, cell_view, hex_color, iter_rows, visible
from ..formatters.resolver import FormatResolver, ResolvedFormat
from ..layout.engine import TableLayout, fixed_equivalent
from ..model.content import Chunk, Paragraph
from ..model.part import TablePart
from ..model.properties import Border, TextProps
from ..model.table import TableModel

logger = logging.getLogger(__name__)


LATEX_SPECIAL = {
    '\\': r'\textbackslash{}',
    '&': r'\&',
    '%': r'\%',
    '$': r'\$',
    '#': r'\#',
    '_': r'\_',
    '{': r'\{',
    '}': r'\}',
    '~': r'\textasciitilde{}',
    '^': r'\textasciicircum{}',
}

ALIGN_MAP = {
    'left': r'\raggedright',
    'center': r'\centering',
    'right': r'\raggedleft',
    'justify': '',
}
COLTYPE_MAP = {'top': 'p', 'center': 'm', 'bottom': 'b'}
LONGTABLE_ALIGN = {'left': 'l', 'center': 'c', 'right': 'r'}
WRAP_MAP = {'wrap-r': 'r', 'wrap-l': 'l', 'wrap-i': 'i', 'wrap-o': 'o'}


def escape_latex(text: str) -> str:
    """LaTeX 특수 문자 이스케이프"""
    return ''.join(LATEX_SPECIAL.get(ch, ch) for ch in text)


def escape_url(url: str) -> str:
    """\\href 인자용 URL (% # 이스케이프)"""
    return url.replace('%', r'\%').replace('#', r'\#')


def label_key(text: str) -> str:
    """\\label 키 (특수 문자 제거)"""
    return ''.join(ch for ch in text if ch not in LATEX_SPECIAL)


def _num(value: float) -> str:
    text = f"{value:.4f}".rstrip('0').rstrip('.')
    return text or '0'


def _vrule(border: Optional[Border]) -> str:
    if not visible(border):
        return ''
    return f"!{{\\color[HTML]{{{hex_color(border.color)}}}\\vrule width {_num(border.width)}pt}}"


class LatexRenderer(BaseRenderer):
    """LaTeX 표 렌더러"""

    format_name = "latex"

    def prepare_layout(self, model: TableModel, layout: Optional[TableLayout]) -> TableLayout:
        return fixed_equivalent(model, layout)

    def _render(self, model: TableModel, layout: TableLayout, resolver: FormatResolver) -> str:
        opts = model.properties.opts_pdf
        rows = {name: [] for name in ('header', 'body', 'footer')}
        all_rows = list(iter_rows(model, layout))
        for k, row in enumerate(all_rows):
            first = k == 0
            # 파트 마지막 행의 아래선은 다음 파트 첫 행의 위선과 합침
            next_part = None
            if k + 1 < len(all_rows) and all_rows[k + 1].part_name != row.part_name:
                next_part = all_rows[k + 1].part
            rows[row.part_name].append(
                self._row(row, layout, resolver, first, opts.fonts_ignore, next_part))

        colspec = ''.join(f"p{{{_num(w)}in}}" for w in layout.widths)
        out = [
            '{',
            f"\\setlength{{\\tabcolsep}}{{{_num(opts.tabcolsep)}pt}}",
            f"\\renewcommand*{{\\arraystretch}}{{{_num(opts.arraystretch)}}}",
        ]
        if opts.float == 'none':
            out.extend(self._longtable(model, colspec, rows))
        else:
            out.extend(self._float(model, layout, colspec, rows))
        out.append(f"\\arrayrulecolor{{{opts.default_line_color}}}")
        out.append('}')
        return '\n'.join(out) + '\n'

    # ========== 환경 ==========

    def _caption(self, model: TableModel, short: bool = False) -> str:
        caption = model.caption
        if caption.simple_caption:
            text = self._text(caption.text)
        else:
            fonts_ignore = model.properties.opts_pdf.fonts_ignore
            text = ''.join(self._chunk(c, self._caption_props(model, c), fonts_ignore)
                           for c in caption.value.expanded().chunks)
        label = ''
        if not short and caption.autonum is not None and caption.autonum.bookmark:
            label = f"\\label{{{label_key(caption.autonum.bookmark)}}}"
        if short:
            return f"\\caption[]{{{text}}}"
        return f"\\caption{{{text}}}{label}"

    def _caption_props(self, model: TableModel, chunk: Chunk) -> TextProps:
        return FormatResolver(model.defaults).resolve_free_run(chunk)

    def _longtable(self, model: TableModel, colspec: str, rows) -> List[str]:
        opts = model.properties.opts_pdf
        align = LONGTABLE_ALIGN[model.properties.align]
        has_caption = model.caption.has_value
        out = [f"\\begin{{longtable}}[{align}]{{{colspec}}}"]

        header = rows['header']
        if has_caption or header:
            if has_caption:
                out.append(self._caption(model) + '\\\\')
            out.extend(header)
            out.append('\\endfirsthead')
            if has_caption and opts.caption_repeat:
                out.append(self._caption(model, short=True) + '\\\\')
            out.extend(header)
            out.append('\\endhead')

        footer = rows['footer']
        if footer:
            if opts.footer_repeat:
                out.extend(footer)
            out.append('\\endfoot')
            out.extend(footer)
            out.append('\\endlastfoot')

        out.extend(rows['body'])
        out.append('\\end{longtable}')
        return out

    def _float(self, model: TableModel, layout: TableLayout, colspec: str, rows) -> List[str]:
        opts = model.properties.opts_pdf
        align = ALIGN_MAP.get(model.properties.align, '')
        if opts.float == 'float':
            begin, end = "\\begin{table}[!htbp]", "\\end{table}"
        else:
            width = _num(layout.total_width)
            begin = f"\\begin{{wraptable}}{{{WRAP_MAP[opts.float]}}}{{{width}in}}"
            end = "\\end{wraptable}"
        out = [begin]
        if align:
            out.append(align)
        if model.caption.has_value:
            out.append(self._caption(model))
        out.append(f"\\begin{{tabular}}{{{colspec}}}")
        out.extend(rows['header'])
        out.extend(rows['body'])
        out.extend(rows['footer'])
        out.append('\\end{tabular}')
        out.append(end)
        return out

    # ========== 행 ==========

    def _row(self, row: RowView, layout: TableLayout, resolver: FormatResolver,
             first: bool, fonts_ignore: bool, next_part: Optional[TablePart] = None) -> str:
        part = row.part
        i = row.index
        cells = []
        prev_right: Optional[Border] = None
        j = 0
        while j < part.ncol:
            ar, ac = part.anchor_of(i, j)
            view = cell_view(part, ar, ac, resolver)
            span = view.col_span
            _, _, left, right = view.borders

            left_rule = _vrule(left) if (j == 0 or not visible(prev_right)) else ''
            spec = self._colspec(view.fmt, layout, j, span, left_rule, _vrule(right))
            if (ar, ac) == (i, j):
                body = self._cell_body(view, layout, fonts_ignore, resolver)
            else:
                # 세로 병합으로 덮인 행 (배경색만 유지)
                body = self._background(view.fmt)
            cells.append(f"\\multicolumn{{{span}}}{{{spec}}}{{{body}}}")
            prev_right = right
            j += span

        line = ' & '.join(cells) + ' \\\\'
        top_rules = self._hrules(part, i, resolver, top_edge=True) if first else ''
        return top_rules + line + self._hrules(part, i, resolver, top_edge=False, next_part=next_part)

    def _colspec(self, fmt: ResolvedFormat, layout: TableLayout, j: int, span: int,
                 left_rule: str, right_rule: str) -> str:
        coltype = COLTYPE_MAP[fmt.cell.vertical_align]
        width = f"{_num(layout.span_width(j, span))}in"
        if span > 1:
            width = f"\\dimexpr {width}+{2 * (span - 1)}\\tabcolsep\\relax"
        align = ALIGN_MAP.get(fmt.par.text_align, '')
        prefix = f">{{{align}\\arraybackslash}}" if align else ''
        return f"{left_rule}{prefix}{coltype}{{{width}}}{right_rule}"

    def _background(self, fmt: ResolvedFormat) -> str:
        fill = hex_color(fmt.cell.background_color)
        return f"\\cellcolor[HTML]{{{fill}}}" if fill is not None else ''

    def _cell_body(self, view, layout: TableLayout, fonts_ignore: bool, resolver: FormatResolver) -> str:
        paragraphs = [
            self._paragraph(p, view.fmt, resolver, fonts_ignore)
            for p in view.cell.content
        ]
        content = '\\par '.join(paragraphs)
        if view.fmt.cell.text_direction == 'btlr':
            content = f"\\rotatebox{{90}}{{{content}}}"
        elif view.fmt.cell.text_direction == 'tbrl':
            content = f"\\rotatebox{{270}}{{{content}}}"
        if view.row_span > 1:
            content = f"\\multirow{{{view.row_span}}}{{=}}{{{content}}}"
        return self._background(view.fmt) + content

    def _hrules(self, part: TablePart, i: int, resolver: FormatResolver, top_edge: bool,
                next_part: Optional[TablePart] = None) -> str:
        """
        행 위(top_edge) 또는 아래 가로선

        next_part가 있으면 파트 마지막 행 아래선에 다음 파트 첫 행의
        위선을 함께 반영합니다.

        같은 병합 영역 안쪽 경계에는 선을 긋지 않습니다. 인접한 두 셀의
        선 중 더 두꺼운 쪽을 사용합니다.
        """
        segments: List[Tuple[int, Border]] = []
        for j in range(part.ncol):
            anchor = part.anchor_of(i, j)
            border = None
            if top_edge:
                if anchor[0] == i:
                    border = resolver.resolve(part.cells[anchor[0]][anchor[1]]).cell.border_top
            else:
                below = part.anchor_of(i + 1, j) if i + 1 < part.nrow else None
                if below == anchor:
                    continue
                view = cell_view(part, anchor[0], anchor[1], resolver)
                end_row = anchor[0] + view.row_span - 1
                if end_row == i:
                    border = resolver.resolve(part.cells[i][j]).cell.border_bottom
                other = None
                if below is not None:
                    other = resolver.resolve(part.cells[i + 1][j]).cell.border_top
                elif next_part is not None:
                    other = resolver.resolve(next_part.cells[0][j]).cell.border_top
                if visible(other) and (not visible(border) or other.width > border.width):
                    border = other
            if visible(border):
                segments.append((j, border))

        out = []
        k = 0
        while k < len(segments):
            start, border = segments[k]
            end = start
            while (k + 1 < len(segments) and segments[k + 1][0] == end + 1
                   and segments[k + 1][1] == border):
                k += 1
                end = segments[k][0]
            out.append(
                f"\\noalign{{\\global\\arrayrulewidth={_num(border.width)}pt}}"
                f"\\arrayrulecolor[HTML]{{{hex_color(border.color)}}}"
                f"\\cline{{{start + 1}-{end + 1}}}"
            )
            k += 1
        if not out:
            return ''
        joined = ''.join(out)
        return joined if top_edge else '\n' + joined

    # ========== 문단 / 조각 ==========

    def _paragraph(self, paragraph: Paragraph, fmt: ResolvedFormat, resolver: FormatResolver,
                   fonts_ignore: bool) -> str:
        return ''.join(
            self._chunk(chunk, resolver.resolve_run(chunk, fmt), fonts_ignore)
            for chunk in paragraph.expanded().chunks
        )

    def _text(self, text: str) -> str:
        """문자열 (줄바꿈/탭 포함) 이스케이프"""
        out = []
        for chunk in Paragraph((Chunk(text=text),)).expanded().chunks:
            if chunk.kind == 'break':
                out.append('\\linebreak{}')
            elif chunk.kind == 'tab':
                out.append('\\quad{}')
            else:
                out.append(escape_latex(chunk.text))
        return ''.join(out)

    def _chunk(self, chunk: Chunk, props: TextProps, fonts_ignore: bool) -> str:
        if chunk.kind == 'break':
            return '\\linebreak{}'
        if chunk.kind == 'tab':
            return '\\quad{}'
        if chunk.kind == 'image':
            return (
                f"\\includegraphics[width={_num(chunk.width or 0)}in,"
                f"height={_num(chunk.height or 0)}in]{{{chunk.src}}}"
            )
        if chunk.kind == 'equation':
            return f"${chunk.text}$"

        text = escape_latex(chunk.text)
        if props.bold:
            text = f"\\textbf{{{text}}}"
        if props.italic:
            text = f"\\textit{{{text}}}"
        if props.underlined:
            text = f"\\underline{{{text}}}"
        if props.vertical_align == 'superscript':
            text = f"\\textsuperscript{{{text}}}"
        elif props.vertical_align == 'subscript':
            text = f"\\textsubscript{{{text}}}"
        color = hex_color(props.color)
        if color is not None:
            text = f"\\textcolor[HTML]{{{color}}}{{{text}}}"
        shading = hex_color(props.shading_color)
        if shading is not None:
            text = f"\\colorbox[HTML]{{{shading}}}{{{text}}}"
        size = props.font_size
        font = '' if fonts_ignore else f"\\fontspec{{{props.font_family}}}"
        text = f"{{{font}\\fontsize{{{_num(size)}}}{{{_num(size * 1.2)}}}\\selectfont {text}}}"
        if chunk.url:
            text = f"\\href{{{escape_url(chunk.url)}}}{{{text}}}"
        return text
