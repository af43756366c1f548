# -*- coding: utf-8 -*-
"""
Word (WordprocessingML) 렌더러

w:tbl XML 문자열을 생성합니다. 캡션이 있으면 캡션 문단(w:p)이 표 앞에
붙습니다. 문서 조립(관계 ID, 번호 매김)은 이 모듈의 범위가 아닙니다.

구조:
    w:tbl
    ├── w:tblPr      (tblW, jc, tblLayout, tblCaption, tblDescription)
    ├── w:tblGrid    (gridCol: 열 너비 twips)
    └── w:tr
        ├── w:trPr   (cantSplit, tblHeader, trHeight)
        └── w:tc     (열마다 하나, 병합은 hMerge/vMerge 표시)
            ├── w:tcPr
            └── w:p / w:r

병합 표시:
- 가로 병합: 앵커는 hMerge restart, 덮인 셀은 hMerge continue
- 세로 병합: 앵커 행은 vMerge restart, 아래 행은 vMerge continue
"""

import logging
import xml.etree.ElementTree as ET
from typing import Optional

from .base import BaseRenderer, cell_view, hex_color, iter_rows, visible
from ..core.unit import Unit
from ..formatters.resolver import FormatResolver, ResolvedFormat
from ..layout.engine import TableLayout
from ..model.content import Chunk, Paragraph
from ..model.properties import Border, FormatPatch, ParProps, TextProps
from ..model.table import TableModel

logger = logging.getLogger(__name__)


# ============================================================
# 네임스페이스
# ============================================================

NAMESPACES = {
    'w': 'http://schemas.openxmlformats.org/wordprocessingml/2006/main',
    'r': 'http://schemas.openxmlformats.org/officeDocument/2006/relationships',
    'wp': 'http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing',
    'a': 'http://schemas.openxmlformats.org/drawingml/2006/main',
    'pic': 'http://schemas.openxmlformats.org/drawingml/2006/picture',
}

for _prefix, _uri in NAMESPACES.items():
    ET.register_namespace(_prefix, _uri)

XML_SPACE = '{http://www.w3.org/XML/1998/namespace}space'


def _q(tag: str) -> str:
    """'w:tbl' -> '{uri}tbl'"""
    prefix, local = tag.split(':')
    return f'{{{NAMESPACES[prefix]}}}{local}'


def _el(parent: Optional[ET.Element], tag: str, **attrs) -> ET.Element:
    """w 네임스페이스 속성을 가진 요소 생성"""
    elem = ET.Element(_q(tag)) if parent is None else ET.SubElement(parent, _q(tag))
    for key, value in attrs.items():
        elem.set(_q(f'w:{key}'), str(value))
    return elem


# ============================================================
# 값 매핑
# ============================================================

BORDER_STYLE_MAP = {
    'solid': 'single',
    'dashed': 'dashed',
    'dotted': 'dotted',
    'double': 'double',
    'none': 'nil',
}

JC_MAP = {'left': 'left', 'center': 'center', 'right': 'right', 'justify': 'both'}
VALIGN_MAP = {'top': 'top', 'center': 'center', 'bottom': 'bottom'}
TEXT_DIRECTION_MAP = {'tbrl': 'tbRl', 'btlr': 'btLr'}
HRULE_MAP = {'auto': 'auto', 'atleast': 'atLeast', 'exact': 'exact'}


class DocxRenderer(BaseRenderer):
    """WordprocessingML 표 렌더러"""

    format_name = "docx"

    def _render(self, model: TableModel, layout: TableLayout, resolver: FormatResolver) -> str:
        parts = []
        if model.caption.has_value:
            caption = self._caption(model, resolver)
            parts.append(ET.tostring(caption, encoding='unicode'))
        tbl = self._table(model, layout, resolver)
        parts.append(ET.tostring(tbl, encoding='unicode'))
        return ''.join(parts)

    # ========== 표 ==========

    def _table(self, model: TableModel, layout: TableLayout, resolver: FormatResolver) -> ET.Element:
        props = model.properties
        tbl = _el(None, 'w:tbl')

        tbl_pr = _el(tbl, 'w:tblPr')
        if layout.layout == 'fixed':
            _el(tbl_pr, 'w:tblW', w=Unit.inch_to_twips(layout.total_width), type='dxa')
        elif layout.width > 0:
            # pct 단위는 1/50 %
            _el(tbl_pr, 'w:tblW', w=int(round(layout.width * 5000)), type='pct')
        else:
            _el(tbl_pr, 'w:tblW', w=0, type='auto')
        _el(tbl_pr, 'w:jc', val=props.align)
        _el(tbl_pr, 'w:tblLayout', type='fixed' if layout.layout == 'fixed' else 'autofit')
        if props.word_title:
            _el(tbl_pr, 'w:tblCaption', val=props.word_title)
        if props.word_description:
            _el(tbl_pr, 'w:tblDescription', val=props.word_description)

        grid = _el(tbl, 'w:tblGrid')
        for width in layout.widths:
            _el(grid, 'w:gridCol', w=Unit.inch_to_twips(width))

        rows = list(iter_rows(model, layout))
        opts = props.opts_word
        for k, row in enumerate(rows):
            keep_next = opts.keep_with_next and k < len(rows) - 1
            tr = _el(tbl, 'w:tr')
            tr_pr = _el(tr, 'w:trPr')
            if not opts.split:
                _el(tr_pr, 'w:cantSplit')
            if row.part_name == 'header' and opts.repeat_header:
                _el(tr_pr, 'w:tblHeader')
            _el(tr_pr, 'w:trHeight', val=Unit.inch_to_twips(row.height), hRule=HRULE_MAP[row.hrule])

            part = row.part
            for j in range(model.ncol):
                ar, ac = part.anchor_of(row.index, j)
                view = cell_view(part, ar, ac, resolver)
                tc = _el(tr, 'w:tc')
                self._cell_props(tc, view, row.index, j, layout)
                if (ar, ac) == (row.index, j):
                    for paragraph in view.cell.content:
                        self._paragraph(tc, paragraph, view.fmt, resolver, keep_next)
                else:
                    # 덮인 셀도 문단 하나는 필요
                    self._paragraph(tc, Paragraph(), view.fmt, resolver, keep_next)
        return tbl

    def _cell_props(self, tc: ET.Element, view, i: int, j: int, layout: TableLayout):
        fmt = view.fmt
        tc_pr = _el(tc, 'w:tcPr')
        _el(tc_pr, 'w:tcW', w=Unit.inch_to_twips(layout.widths[j]), type='dxa')

        if view.col_span > 1:
            _el(tc_pr, 'w:hMerge', val='restart' if j == view.col else 'continue')
        if view.row_span > 1:
            _el(tc_pr, 'w:vMerge', val='restart' if i == view.row else 'continue')

        top, bottom, left, right = view.borders
        borders = _el(tc_pr, 'w:tcBorders')
        for side, border in (('top', top), ('left', left), ('bottom', bottom), ('right', right)):
            self._border(borders, side, border)

        fill = hex_color(fmt.cell.background_color)
        if fill is not None:
            _el(tc_pr, 'w:shd', val='clear', color='auto', fill=fill)

        par = fmt.par
        mar = _el(tc_pr, 'w:tcMar')
        _el(mar, 'w:top', w=Unit.pt_to_twips(par.padding_top), type='dxa')
        _el(mar, 'w:left', w=Unit.pt_to_twips(par.padding_left), type='dxa')
        _el(mar, 'w:bottom', w=Unit.pt_to_twips(par.padding_bottom), type='dxa')
        _el(mar, 'w:right', w=Unit.pt_to_twips(par.padding_right), type='dxa')

        direction = TEXT_DIRECTION_MAP.get(fmt.cell.text_direction)
        if direction:
            _el(tc_pr, 'w:textDirection', val=direction)
        _el(tc_pr, 'w:vAlign', val=VALIGN_MAP[fmt.cell.vertical_align])

    def _border(self, parent: ET.Element, side: str, border: Optional[Border]):
        if not visible(border):
            _el(parent, f'w:{side}', val='nil')
            return
        _el(
            parent, f'w:{side}',
            val=BORDER_STYLE_MAP.get(border.style, 'single'),
            sz=Unit.pt_to_eighths(border.width),
            space=0,
            color=hex_color(border.color),
        )

    # ========== 문단 / 조각 ==========

    def _paragraph(self, parent: ET.Element, paragraph: Paragraph, fmt: ResolvedFormat,
                   resolver: FormatResolver, keep_next: bool = False,
                   par: Optional[ParProps] = None, style: Optional[str] = None) -> ET.Element:
        par = par or fmt.par
        p = _el(parent, 'w:p')
        p_pr = _el(p, 'w:pPr')
        if style:
            _el(p_pr, 'w:pStyle', val=style)
        if keep_next:
            _el(p_pr, 'w:keepNext')
        line = int(round(240 * (par.line_spacing or 1)))
        _el(p_pr, 'w:spacing', before=0, after=0, line=line, lineRule='auto')
        _el(p_pr, 'w:jc', val=JC_MAP.get(par.text_align or 'left', 'left'))

        for chunk in paragraph.expanded().chunks:
            self._run(p, chunk, resolver.resolve_run(chunk, fmt))
        return p

    def _run(self, p: ET.Element, chunk: Chunk, props: TextProps):
        r = _el(p, 'w:r')
        self._run_props(r, props)
        if chunk.kind == 'break':
            _el(r, 'w:br')
        elif chunk.kind == 'tab':
            _el(r, 'w:tab')
        elif chunk.kind == 'image':
            self._drawing(r, chunk)
        else:
            t = _el(r, 'w:t')
            t.set(XML_SPACE, 'preserve')
            t.text = chunk.text

    def _run_props(self, r: ET.Element, props: TextProps):
        r_pr = _el(r, 'w:rPr')
        font = props.font_family
        _el(r_pr, 'w:rFonts', ascii=font, hAnsi=font, eastAsia=font, cs=font)
        if props.bold:
            _el(r_pr, 'w:b')
        if props.italic:
            _el(r_pr, 'w:i')
        if props.underlined:
            _el(r_pr, 'w:u', val='single')
        color = hex_color(props.color)
        if color is not None:
            _el(r_pr, 'w:color', val=color)
        half_points = int(round(props.font_size * 2))
        _el(r_pr, 'w:sz', val=half_points)
        _el(r_pr, 'w:szCs', val=half_points)
        shading = hex_color(props.shading_color)
        if shading is not None:
            _el(r_pr, 'w:shd', val='clear', color='auto', fill=shading)
        if props.vertical_align in ('superscript', 'subscript'):
            _el(r_pr, 'w:vertAlign', val=props.vertical_align)

    def _drawing(self, r: ET.Element, chunk: Chunk):
        """
        인라인 이미지

        r:embed에는 이미지 경로를 그대로 기록합니다. 문서 조립 단계에서
        관계 ID로 바꿔야 합니다.
        """
        cx = str(Unit.inch_to_emu(chunk.width or 0))
        cy = str(Unit.inch_to_emu(chunk.height or 0))
        drawing = _el(r, 'w:drawing')
        inline = ET.SubElement(drawing, _q('wp:inline'))
        ET.SubElement(inline, _q('wp:extent'), cx=cx, cy=cy)
        ET.SubElement(inline, _q('wp:docPr'), id='1', name=chunk.src)
        graphic = ET.SubElement(inline, _q('a:graphic'))
        data = ET.SubElement(graphic, _q('a:graphicData'),
                             uri=NAMESPACES['pic'])
        pic = ET.SubElement(data, _q('pic:pic'))
        nv = ET.SubElement(pic, _q('pic:nvPicPr'))
        ET.SubElement(nv, _q('pic:cNvPr'), id='0', name=chunk.src)
        ET.SubElement(nv, _q('pic:cNvPicPr'))
        fill = ET.SubElement(pic, _q('pic:blipFill'))
        blip = ET.SubElement(fill, _q('a:blip'))
        blip.set(_q('r:embed'), chunk.src)
        stretch = ET.SubElement(fill, _q('a:stretch'))
        ET.SubElement(stretch, _q('a:fillRect'))
        sp_pr = ET.SubElement(pic, _q('pic:spPr'))
        xfrm = ET.SubElement(sp_pr, _q('a:xfrm'))
        ET.SubElement(xfrm, _q('a:off'), x='0', y='0')
        ET.SubElement(xfrm, _q('a:ext'), cx=cx, cy=cy)
        geom = ET.SubElement(sp_pr, _q('a:prstGeom'), prst='rect')
        ET.SubElement(geom, _q('a:avLst'))

    # ========== 캡션 ==========

    def _caption(self, model: TableModel, resolver: FormatResolver) -> ET.Element:
        """
        캡션 문단

        autonum이 있으면 '앞 문구 + SEQ 필드 + 뒤 문구' 순서로 출력하고,
        책갈피가 있으면 번호 부분을 감쌉니다.
        """
        caption = model.caption
        base = resolver.resolve_patch(FormatPatch())
        par = base.par.update(caption.fp_p)
        if caption.align_with_table:
            par = par.update(ParProps(text_align=model.properties.align))

        p = _el(None, 'w:p')
        p_pr = _el(p, 'w:pPr')
        _el(p_pr, 'w:pStyle', val=caption.word_stylename)
        _el(p_pr, 'w:keepNext')
        _el(p_pr, 'w:spacing',
            before=Unit.pt_to_twips(par.padding_top), after=Unit.pt_to_twips(par.padding_bottom))
        _el(p_pr, 'w:jc', val=JC_MAP.get(par.text_align or 'left', 'left'))

        autonum = caption.autonum
        if autonum is not None:
            self._text_run(p, autonum.pre_label, base.text)
            if autonum.bookmark:
                _el(p, 'w:bookmarkStart', id=0, name=autonum.bookmark)
            instr = f' SEQ {autonum.seq_id} \\* Arabic '
            if autonum.start_at is not None:
                instr += f'\\r {autonum.start_at} '
            field = _el(p, 'w:fldSimple', instr=instr)
            self._text_run(field, str(autonum.start_at or 1), base.text)
            if autonum.bookmark:
                _el(p, 'w:bookmarkEnd', id=0)
            self._text_run(p, autonum.post_label, base.text)

        if caption.simple_caption:
            self._text_run(p, caption.text, base.text)
        else:
            for chunk in caption.value.expanded().chunks:
                self._run(p, chunk, resolver.resolve_free_run(chunk))
        return p

    def _text_run(self, p: ET.Element, text: str, props: TextProps):
        if not text:
            return
        for chunk in Paragraph((Chunk(text=text),)).expanded().chunks:
            self._run(p, chunk, props)
