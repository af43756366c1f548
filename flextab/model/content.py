# -*- coding: utf-8 -*-
"""
셀 내용 데이터 모델

개요:
- Chunk: 서식을 가진 내용 조각 (텍스트, 이미지, 수식, 줄바꿈, 탭)
- Paragraph: Chunk의 순서 있는 묶음 (셀 하나에 여러 문단 가능)

텍스트 안의 '\\n'은 문단 나눔이 아닌 줄바꿈(soft return), '\\t'는 탭으로
해석됩니다. 렌더러는 Paragraph.expanded()로 두 문자를 break/tab 조각으로
분리한 뒤 출력 형식별 기본 요소로 옮깁니다.

사용 예:
    par = as_paragraph("평균 ", as_b("12.5"), as_sup("a"))
    img = as_paragraph(as_image("logo.png", width=.5, height=.2))
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Tuple, Union

from .properties import TextProps
from ..core.errors import OptionTypeError, OptionValueError


CHUNK_KINDS = ('text', 'image', 'equation', 'break', 'tab')


@dataclass(frozen=True)
class Chunk:
    """내용 조각"""
    text: str = ""
    props: TextProps = field(default_factory=TextProps)
    kind: str = 'text'

    # 이미지 / 수식 크기 (inch)
    src: Optional[str] = None
    width: Optional[float] = None
    height: Optional[float] = None

    # 하이퍼링크
    url: Optional[str] = None

    def __post_init__(self):
        if self.kind not in CHUNK_KINDS:
            raise OptionValueError(f"알 수 없는 조각 종류: {self.kind}")
        if not isinstance(self.text, str):
            raise OptionTypeError(f"조각 텍스트는 문자열이어야 합니다: {self.text!r}")
        if self.kind == 'image' and not self.src:
            raise OptionValueError("이미지 조각에는 src가 필요합니다")

    @property
    def is_text(self) -> bool:
        return self.kind == 'text'


@dataclass(frozen=True)
class Paragraph:
    """문단 (Chunk 튜플)"""
    chunks: Tuple[Chunk, ...] = ()

    @property
    def text(self) -> str:
        """서식 없는 텍스트 (이미지는 빈 문자열, 수식은 원문)"""
        parts = []
        for chunk in self.chunks:
            if chunk.kind == 'break':
                parts.append('\n')
            elif chunk.kind == 'tab':
                parts.append('\t')
            elif chunk.kind in ('text', 'equation'):
                parts.append(chunk.text)
        return ''.join(parts)

    def expanded(self) -> 'Paragraph':
        """텍스트 조각 안의 '\\n', '\\t'를 break/tab 조각으로 분리"""
        out = []
        for chunk in self.chunks:
            if chunk.kind != 'text' or ('\n' not in chunk.text and '\t' not in chunk.text):
                out.append(chunk)
                continue
            buf = ''
            for ch in chunk.text.replace('\r\n', '\n'):
                if ch in '\n\t':
                    if buf:
                        out.append(Chunk(text=buf, props=chunk.props, url=chunk.url))
                        buf = ''
                    out.append(Chunk(kind='break' if ch == '\n' else 'tab', props=chunk.props))
                else:
                    buf += ch
            if buf:
                out.append(Chunk(text=buf, props=chunk.props, url=chunk.url))
        return Paragraph(tuple(out))

    def lines(self) -> Iterator[Tuple[Chunk, ...]]:
        """줄바꿈 기준으로 나눈 조각 묶음"""
        line = []
        for chunk in self.expanded().chunks:
            if chunk.kind == 'break':
                yield tuple(line)
                line = []
            else:
                line.append(chunk)
        yield tuple(line)

    def append(self, *items) -> 'Paragraph':
        """조각을 뒤에 붙인 새 문단"""
        return Paragraph(self.chunks + as_paragraph(*items).chunks)

    def prepend(self, *items) -> 'Paragraph':
        """조각을 앞에 붙인 새 문단"""
        return Paragraph(as_paragraph(*items).chunks + self.chunks)

    def __len__(self) -> int:
        return len(self.chunks)


# ============================================================
# 조각 생성 함수
# ============================================================

def as_chunk(value, props: Optional[TextProps] = None, **kwargs) -> Chunk:
    """값을 텍스트 조각으로 변환 (kwargs는 TextProps 필드)"""
    if props is None:
        props = TextProps(**kwargs)
    elif kwargs:
        props = props.update(TextProps(**kwargs))
    return Chunk(text='' if value is None else str(value), props=props)


def as_b(value) -> Chunk:
    """굵은 글씨 조각"""
    return as_chunk(value, bold=True)


def as_i(value) -> Chunk:
    """기울임 조각"""
    return as_chunk(value, italic=True)


def as_u(value) -> Chunk:
    """밑줄 조각"""
    return as_chunk(value, underlined=True)


def as_sup(value) -> Chunk:
    """위 첨자 조각"""
    return as_chunk(value, vertical_align='superscript')


def as_sub(value) -> Chunk:
    """아래 첨자 조각"""
    return as_chunk(value, vertical_align='subscript')


def as_highlight(value, color: str = "yellow") -> Chunk:
    """형광 표시 조각"""
    return as_chunk(value, shading_color=color)


def colorize(value, color: str) -> Chunk:
    """글자색 조각"""
    return as_chunk(value, color=color)


def hyperlink_text(value, url: str, props: Optional[TextProps] = None) -> Chunk:
    """하이퍼링크 조각"""
    return Chunk(text=str(value), props=props or TextProps(), url=url)


def as_image(src: str, width: float = 0.5, height: float = 0.2) -> Chunk:
    """이미지 조각 (크기 inch)"""
    return Chunk(kind='image', src=str(src), width=width, height=height)


def as_equation(expr: str, width: float = 1, height: float = 0.2,
                props: Optional[TextProps] = None) -> Chunk:
    """수식 조각 (TeX 표기)"""
    return Chunk(kind='equation', text=expr, width=width, height=height, props=props or TextProps())


ParagraphItem = Union[Chunk, 'Paragraph', str, int, float, None]


def as_paragraph(*items: ParagraphItem) -> Paragraph:
    """
    여러 항목을 하나의 문단으로 결합

    문자열/숫자는 서식 없는 텍스트 조각이 되고, Paragraph는 조각이 펼쳐집니다.
    """
    chunks = []
    for item in items:
        if isinstance(item, Chunk):
            chunks.append(item)
        elif isinstance(item, Paragraph):
            chunks.extend(item.chunks)
        elif item is None:
            continue
        else:
            chunks.append(as_chunk(item))
    return Paragraph(tuple(chunks))


def to_content(value) -> Tuple[Paragraph, ...]:
    """셀 내용 값 (문자열, Chunk, Paragraph 또는 그 리스트)을 문단 튜플로 변환"""
    if isinstance(value, (list, tuple)) and value and all(isinstance(v, Paragraph) for v in value):
        return tuple(value)
    if isinstance(value, Paragraph):
        return (value,)
    if isinstance(value, (list, tuple)):
        return (as_paragraph(*value),)
    return (as_paragraph(value),)
