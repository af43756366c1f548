# -*- coding: utf-8 -*-
"""
렌더러 모듈

출력 형식 이름 -> 렌더러 클래스 등록부와 공통 진입점을 제공합니다.
새 형식은 BaseRenderer를 상속한 클래스를 RENDERERS에 등록해 추가합니다.

    from flextab.render import render

    xml = render(ft, 'docx')
    page = render(ft, 'html')
    wb = render(ft, 'xlsx')
"""

from pathlib import Path
from typing import Dict, Optional, Type, Union

from .base import BaseRenderer
from .docx import DocxRenderer
from .excel import ExcelRenderer, ExcelStyler
from .html import HtmlRenderer
from .latex import LatexRenderer, escape_latex
from .pptx import PptxRenderer
from ..core.errors import OptionValueError
from ..layout.engine import TableLayout
from ..model.table import TableModel

RENDERERS: Dict[str, Type[BaseRenderer]] = {
    'docx': DocxRenderer,
    'html': HtmlRenderer,
    'pptx': PptxRenderer,
    'latex': LatexRenderer,
    'xlsx': ExcelRenderer,
}


def get_renderer(fmt: str, **options) -> BaseRenderer:
    """형식 이름으로 렌더러 생성"""
    if fmt not in RENDERERS:
        raise OptionValueError(f"지원하지 않는 출력 형식: {fmt} (가능: {', '.join(RENDERERS)})")
    return RENDERERS[fmt](**options)


def render(model: TableModel, fmt: str, layout: Optional[TableLayout] = None, **options):
    """
    테이블 렌더링

    Args:
        model: 테이블 모델
        fmt: docx | html | pptx | latex | xlsx
        layout: 미리 계산한 레이아웃
        **options: 렌더러 생성 인자 (pptx: left/top, xlsx: sheet_name 등)
    """
    return get_renderer(fmt, **options).render(model, layout)


HTML_PAGE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
</head>
<body>
{body}
</body>
</html>
"""


def save_as_html(model: TableModel, path: Union[str, Path], title: str = "flextab") -> str:
    """표 하나를 담은 HTML 문서로 저장"""
    import html

    path = Path(path)
    body = HtmlRenderer().render(model)
    path.write_text(HTML_PAGE.format(title=html.escape(title), body=body), encoding='utf-8')
    return str(path)


def save_as_xlsx(model: TableModel, path: Union[str, Path], sheet_name: str = "Table") -> str:
    """xlsx 파일로 저장"""
    return ExcelRenderer(sheet_name=sheet_name).save(model, path)


__all__ = [
    'BaseRenderer',
    'DocxRenderer',
    'ExcelRenderer',
    'ExcelStyler',
    'HtmlRenderer',
    'LatexRenderer',
    'PptxRenderer',
    'RENDERERS',
    'escape_latex',
    'get_renderer',
    'render',
    'save_as_html',
    'save_as_xlsx',
]
