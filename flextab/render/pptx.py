# -*- coding: utf-8 -*-
"""
PowerPoint (PresentationML) 렌더러

표를 절대 위치 도형 묶음(p:grpSp)으로 출력합니다.

- 앵커 셀마다 사각형 도형(p:sp) 하나, 병합 셀은 걸친 영역 전체 크기
- 이미지 조각은 셀 안쪽 왼쪽 위부터 가로로 놓는 그림 도형(p:pic)
- 테두리는 선 도형(p:cxnSp), 같은 위치의 선은 한 번만 출력
- 페이지 개념이 없으므로 캡션과 페이지 관련 옵션은 무시
- autofit 요청은 계산한 자연 너비를 고정 너비처럼 사용

좌표는 모두 EMU입니다.
"""

import logging
import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Tuple

from .base import BaseRenderer, CellView, hex_color, iter_cells, iter_rows, visible
from ..core.unit import Unit
from ..formatters.resolver import FormatResolver
from ..layout.engine import TableLayout, fixed_equivalent
from ..model.content import Chunk, Paragraph
from ..model.properties import Border, TextProps
from ..model.table import TableModel

logger = logging.getLogger(__name__)


NAMESPACES = {
    'p': 'http://schemas.openxmlformats.org/presentationml/2006/main',
    'a': 'http://schemas.openxmlformats.org/drawingml/2006/main',
    'r': 'http://schemas.openxmlformats.org/officeDocument/2006/relationships',
}

for _prefix, _uri in NAMESPACES.items():
    ET.register_namespace(_prefix, _uri)


def _q(tag: str) -> str:
    prefix, local = tag.split(':')
    return f'{{{NAMESPACES[prefix]}}}{local}'


def _sub(parent: ET.Element, tag: str, **attrs) -> ET.Element:
    return ET.SubElement(parent, _q(tag), {k: str(v) for k, v in attrs.items()})


ALGN_MAP = {'left': 'l', 'center': 'ctr', 'right': 'r', 'justify': 'just'}
ANCHOR_MAP = {'top': 't', 'center': 'ctr', 'bottom': 'b'}
VERT_MAP = {'tbrl': 'vert', 'btlr': 'vert270'}
DASH_MAP = {'solid': 'solid', 'dashed': 'dash', 'dotted': 'sysDot', 'double': 'solid'}
BASELINE_MAP = {'superscript': 30000, 'subscript': -25000}

# (x1, y1, x2, y2)
Segment = Tuple[int, int, int, int]


class PptxRenderer(BaseRenderer):
    """
    PresentationML 도형 묶음 렌더러

    Args:
        left: 묶음 왼쪽 위치 (inch)
        top: 묶음 위쪽 위치 (inch)
    """

    format_name = "pptx"

    def __init__(self, left: float = 1, top: float = 2):
        self.left = left
        self.top = top

    def prepare_layout(self, model: TableModel, layout: Optional[TableLayout]) -> TableLayout:
        return fixed_equivalent(model, layout)

    def _render(self, model: TableModel, layout: TableLayout, resolver: FormatResolver) -> str:
        x0 = Unit.inch_to_emu(self.left)
        y0 = Unit.inch_to_emu(self.top)
        offsets = [x0 + Unit.inch_to_emu(x) for x in layout.col_offsets()]

        shapes: List[ET.Element] = []
        lines: Dict[Segment, Border] = {}
        next_id = [2]

        def new_id() -> int:
            value = next_id[0]
            next_id[0] += 1
            return value

        y = y0
        row_tops: Dict[Tuple[str, int], int] = {}
        for row in iter_rows(model, layout):
            row_tops[(row.part_name, row.index)] = y
            y += Unit.inch_to_emu(row.height)
        total_h = y - y0
        total_w = Unit.inch_to_emu(layout.total_width)

        for row in iter_rows(model, layout):
            top = row_tops[(row.part_name, row.index)]
            for view in iter_cells(row, resolver):
                x = offsets[view.col]
                cx = Unit.inch_to_emu(layout.span_width(view.col, view.col_span))
                cy = Unit.inch_to_emu(layout.span_height(row.part_name, row.index, view.row_span))
                shapes.append(self._shape(view, new_id(), x, top, cx, cy, resolver))
                shapes.extend(self._pictures(view, x, top, new_id))
                self._collect_lines(lines, view, x, top, cx, cy)

        grp = ET.Element(_q('p:grpSp'))
        nv = _sub(grp, 'p:nvGrpSpPr')
        _sub(nv, 'p:cNvPr', id=1, name='flextab')
        _sub(nv, 'p:cNvGrpSpPr')
        _sub(nv, 'p:nvPr')
        grp_pr = _sub(grp, 'p:grpSpPr')
        xfrm = _sub(grp_pr, 'a:xfrm')
        _sub(xfrm, 'a:off', x=x0, y=y0)
        _sub(xfrm, 'a:ext', cx=total_w, cy=total_h)
        _sub(xfrm, 'a:chOff', x=x0, y=y0)
        _sub(xfrm, 'a:chExt', cx=total_w, cy=total_h)

        for shape in shapes:
            grp.append(shape)
        for segment, border in lines.items():
            grp.append(self._line(segment, border, new_id()))

        logger.debug("pptx: 도형 %d개, 선 %d개", len(shapes), len(lines))
        return ET.tostring(grp, encoding='unicode')

    # ========== 셀 도형 ==========

    def _shape(self, view: CellView, shape_id: int, x: int, y: int, cx: int, cy: int,
               resolver: FormatResolver) -> ET.Element:
        fmt = view.fmt
        sp = ET.Element(_q('p:sp'))
        nv = _sub(sp, 'p:nvSpPr')
        _sub(nv, 'p:cNvPr', id=shape_id, name=f'Cell {view.row} {view.col}')
        _sub(nv, 'p:cNvSpPr')
        _sub(nv, 'p:nvPr')

        sp_pr = _sub(sp, 'p:spPr')
        xfrm = _sub(sp_pr, 'a:xfrm')
        _sub(xfrm, 'a:off', x=x, y=y)
        _sub(xfrm, 'a:ext', cx=cx, cy=cy)
        geom = _sub(sp_pr, 'a:prstGeom', prst='rect')
        _sub(geom, 'a:avLst')
        fill = hex_color(fmt.cell.background_color)
        if fill is not None:
            solid = _sub(sp_pr, 'a:solidFill')
            _sub(solid, 'a:srgbClr', val=fill)
        else:
            _sub(sp_pr, 'a:noFill')
        ln = _sub(sp_pr, 'a:ln')
        _sub(ln, 'a:noFill')

        par = fmt.par
        tx = _sub(sp, 'p:txBody')
        body_attrs = {
            'wrap': 'square',
            'lIns': Unit.pt_to_emu(par.padding_left),
            'tIns': Unit.pt_to_emu(par.padding_top),
            'rIns': Unit.pt_to_emu(par.padding_right),
            'bIns': Unit.pt_to_emu(par.padding_bottom),
            'anchor': ANCHOR_MAP[fmt.cell.vertical_align],
        }
        vert = VERT_MAP.get(fmt.cell.text_direction)
        if vert:
            body_attrs['vert'] = vert
        _sub(tx, 'a:bodyPr', **body_attrs)
        _sub(tx, 'a:lstStyle')
        for paragraph in view.cell.content:
            self._paragraph(tx, paragraph, view, resolver)
        return sp

    def _pictures(self, view: CellView, x: int, y: int, new_id) -> List[ET.Element]:
        """
        셀 안 이미지 조각 -> 그림 도형

        문단마다 한 줄로 가로 배치하고, 다음 문단은 앞 줄의 가장 높은
        이미지 아래에서 시작합니다. r:embed에는 이미지 경로를 그대로
        기록합니다 (문서 조립 단계에서 관계 ID로 교체).
        """
        par = view.fmt.par
        left = x + Unit.pt_to_emu(par.padding_left)
        cursor_y = y + Unit.pt_to_emu(par.padding_top)
        pics = []
        for paragraph in view.cell.content:
            cursor_x = left
            line_h = 0
            for chunk in paragraph.chunks:
                if chunk.kind != 'image':
                    continue
                cx = Unit.inch_to_emu(chunk.width or 0)
                cy = Unit.inch_to_emu(chunk.height or 0)
                pics.append(self._picture(chunk, new_id(), cursor_x, cursor_y, cx, cy))
                cursor_x += cx
                line_h = max(line_h, cy)
            cursor_y += line_h
        return pics

    def _picture(self, chunk: Chunk, shape_id: int, x: int, y: int, cx: int, cy: int) -> ET.Element:
        pic = ET.Element(_q('p:pic'))
        nv = _sub(pic, 'p:nvPicPr')
        _sub(nv, 'p:cNvPr', id=shape_id, name=f'Picture {shape_id}', descr=chunk.src)
        pic_pr = _sub(nv, 'p:cNvPicPr')
        _sub(pic_pr, 'a:picLocks', noChangeAspect=1)
        _sub(nv, 'p:nvPr')

        fill = _sub(pic, 'p:blipFill')
        blip = _sub(fill, 'a:blip')
        blip.set(_q('r:embed'), chunk.src)
        stretch = _sub(fill, 'a:stretch')
        _sub(stretch, 'a:fillRect')

        sp_pr = _sub(pic, 'p:spPr')
        xfrm = _sub(sp_pr, 'a:xfrm')
        _sub(xfrm, 'a:off', x=x, y=y)
        _sub(xfrm, 'a:ext', cx=cx, cy=cy)
        geom = _sub(sp_pr, 'a:prstGeom', prst='rect')
        _sub(geom, 'a:avLst')
        return pic

    def _paragraph(self, tx: ET.Element, paragraph: Paragraph, view: CellView, resolver: FormatResolver):
        par = view.fmt.par
        p = _sub(tx, 'a:p')
        p_pr = _sub(p, 'a:pPr', algn=ALGN_MAP.get(par.text_align, 'l'))
        spacing = _sub(p_pr, 'a:lnSpc')
        _sub(spacing, 'a:spcPct', val=int(round((par.line_spacing or 1) * 100000)))

        chunks = paragraph.expanded().chunks
        for chunk in chunks:
            self._run(p, chunk, resolver.resolve_run(chunk, view.fmt))
        end = _sub(p, 'a:endParaRPr', lang='en-US')
        end.set('sz', str(int(round(view.fmt.text.font_size * 100))))

    def _run(self, p: ET.Element, chunk: Chunk, props: TextProps):
        if chunk.kind == 'break':
            br = _sub(p, 'a:br')
            self._run_props(br, props)
            return
        if chunk.kind == 'image':
            # 그림 도형으로 따로 출력
            return
        r = _sub(p, 'a:r')
        self._run_props(r, props)
        t = _sub(r, 'a:t')
        t.text = '\t' if chunk.kind == 'tab' else chunk.text

    def _run_props(self, parent: ET.Element, props: TextProps):
        attrs = {
            'lang': 'en-US',
            'sz': int(round(props.font_size * 100)),
            'b': 1 if props.bold else 0,
            'i': 1 if props.italic else 0,
        }
        if props.underlined:
            attrs['u'] = 'sng'
        if props.vertical_align in BASELINE_MAP:
            attrs['baseline'] = BASELINE_MAP[props.vertical_align]
        r_pr = _sub(parent, 'a:rPr', **attrs)
        color = hex_color(props.color)
        if color is not None:
            solid = _sub(r_pr, 'a:solidFill')
            _sub(solid, 'a:srgbClr', val=color)
        shading = hex_color(props.shading_color)
        if shading is not None:
            highlight = _sub(r_pr, 'a:highlight')
            _sub(highlight, 'a:srgbClr', val=shading)
        _sub(r_pr, 'a:latin', typeface=props.font_family)
        _sub(r_pr, 'a:ea', typeface=props.font_family)
        _sub(r_pr, 'a:cs', typeface=props.font_family)

    # ========== 테두리 선 ==========

    def _collect_lines(self, lines: Dict[Segment, Border], view: CellView, x: int, y: int, cx: int, cy: int):
        top, bottom, left, right = view.borders
        candidates = (
            ((x, y, x + cx, y), top),
            ((x, y + cy, x + cx, y + cy), bottom),
            ((x, y, x, y + cy), left),
            ((x + cx, y, x + cx, y + cy), right),
        )
        for segment, border in candidates:
            if not visible(border):
                continue
            # 이웃 셀과 겹치는 선은 더 두꺼운 쪽을 사용
            current = lines.get(segment)
            if current is None or border.width > current.width:
                lines[segment] = border

    def _line(self, segment: Segment, border: Border, shape_id: int) -> ET.Element:
        x1, y1, x2, y2 = segment
        cxn = ET.Element(_q('p:cxnSp'))
        nv = _sub(cxn, 'p:nvCxnSpPr')
        _sub(nv, 'p:cNvPr', id=shape_id, name=f'Line {shape_id}')
        _sub(nv, 'p:cNvCxnSpPr')
        _sub(nv, 'p:nvPr')
        sp_pr = _sub(cxn, 'p:spPr')
        xfrm = _sub(sp_pr, 'a:xfrm')
        _sub(xfrm, 'a:off', x=x1, y=y1)
        _sub(xfrm, 'a:ext', cx=x2 - x1, cy=y2 - y1)
        geom = _sub(sp_pr, 'a:prstGeom', prst='line')
        _sub(geom, 'a:avLst')
        ln = _sub(sp_pr, 'a:ln', w=Unit.pt_to_emu(border.width),
                  cmpd='dbl' if border.style == 'double' else 'sng')
        solid = _sub(ln, 'a:solidFill')
        _sub(solid, 'a:srgbClr', val=hex_color(border.color))
        _sub(ln, 'a:prstDash', val=DASH_MAP.get(border.style, 'solid'))
        return cxn
