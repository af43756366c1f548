# -*- coding: utf-8 -*-
"""
테이블 모델

개요:
- HtmlOptions / WordOptions / PdfOptions: 출력 형식별 옵션 묶음
- TableProperties: 레이아웃, 너비 비율, 정렬, 형식별 옵션
- Autonum / Caption: 캡션 내용과 번호 매김 메타데이터
- TableModel: header/body/footer 파트와 공통 열 키 순서

옵션 값은 대입 시점(__post_init__)에 검증되며, 렌더링 시점까지 미루지
않습니다.
"""

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

from .content import Paragraph
from .part import PART_NAMES, TablePart
from .properties import ParProps
from ..config import FLOATS, LAYOUTS, TABLE_ALIGNS, TableDefaults
from ..core.errors import ConstructionError, OptionTypeError, OptionValueError, SelectorError

logger = logging.getLogger(__name__)


def _require_bool(name: str, value):
    if not isinstance(value, bool):
        raise OptionTypeError(f"'{name}'는 bool 단일 값이어야 합니다: {value!r}")


def _require_number(name: str, value, minimum: Optional[float] = 0, maximum: Optional[float] = None):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise OptionTypeError(f"'{name}'는 숫자여야 합니다: {value!r}")
    if minimum is not None and value < minimum:
        raise OptionValueError(f"'{name}'는 {minimum} 이상이어야 합니다: {value!r}")
    if maximum is not None and value > maximum:
        raise OptionValueError(f"'{name}'는 {maximum} 이하여야 합니다: {value!r}")


# ============================================================
# 형식별 옵션
# ============================================================

SCROLL_KEYS = ('height', 'freeze_first_column', 'add_css')


@dataclass(frozen=True)
class HtmlOptions:
    """
    HTML 옵션

    scroll:
        None이면 스크롤 상자 없음, dict이면 가로 스크롤 상자.
        - height: 지정 시 세로 스크롤 (숫자는 px, 문자열은 CSS 길이)
        - freeze_first_column: 첫 열 고정
        - add_css: 스크롤 상자에 추가할 CSS
    """
    extra_css: str = ""
    scroll: Optional[Dict[str, Any]] = None
    extra_class: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.extra_css, str):
            raise OptionTypeError("'extra_css'는 문자열 하나여야 합니다")
        if self.scroll is not None:
            if not isinstance(self.scroll, dict):
                raise OptionTypeError("'scroll'은 None 또는 dict여야 합니다")
            unknown = sorted(set(self.scroll) - set(SCROLL_KEYS))
            if unknown:
                raise OptionValueError(f"알 수 없는 scroll 항목: {', '.join(unknown)}")
            height = self.scroll.get('height')
            if height is not None and not isinstance(height, (int, float, str)):
                raise OptionTypeError("scroll 'height'는 숫자 또는 CSS 길이 문자열이어야 합니다")
            if 'freeze_first_column' in self.scroll:
                _require_bool('freeze_first_column', self.scroll['freeze_first_column'])
            if not isinstance(self.scroll.get('add_css', ''), str):
                raise OptionTypeError("scroll 'add_css'는 문자열이어야 합니다")
        if self.extra_class is not None and not isinstance(self.extra_class, str):
            raise OptionTypeError("'extra_class'는 문자열이어야 합니다")


@dataclass(frozen=True)
class WordOptions:
    """
    Word 옵션

    - split: 행이 페이지 경계에서 나뉘는 것을 허용
    - keep_with_next: 표 전체를 다음 문단과 같은 페이지에 유지
    - repeat_header: 페이지마다 header 행 반복
    """
    split: bool = True
    keep_with_next: bool = False
    repeat_header: bool = True

    def __post_init__(self):
        _require_bool('split', self.split)
        _require_bool('keep_with_next', self.keep_with_next)
        _require_bool('repeat_header', self.repeat_header)


@dataclass(frozen=True)
class PdfOptions:
    """
    LaTeX 옵션

    - tabcolsep: 셀 글자와 좌우 경계 사이 간격 (pt)
    - arraystretch: 행 높이 배율
    - float: none | float | wrap-r | wrap-l | wrap-i | wrap-o
    - fonts_ignore: 글꼴 지정 생략 (pdflatex 호환)
    - caption_repeat: 페이지마다 캡션 반복
    - footer_repeat: 페이지마다 footer 반복
    - default_line_color: 표 출력 후 복원할 선 색상
    """
    tabcolsep: float = 0
    arraystretch: float = 1.5
    fonts_ignore: bool = False
    caption_repeat: bool = True
    footer_repeat: bool = False
    default_line_color: str = "black"
    float: str = "none"

    def __post_init__(self):
        _require_number('tabcolsep', self.tabcolsep)
        _require_number('arraystretch', self.arraystretch)
        _require_bool('fonts_ignore', self.fonts_ignore)
        _require_bool('caption_repeat', self.caption_repeat)
        _require_bool('footer_repeat', self.footer_repeat)
        if not isinstance(self.default_line_color, str):
            raise OptionTypeError("'default_line_color'는 문자열이어야 합니다")
        if self.float not in FLOATS:
            raise OptionValueError(f"'float' 값은 {', '.join(FLOATS)} 중 하나여야 합니다: {self.float!r}")


def _options(cls, value, defaults_kwargs: Dict[str, Any]):
    """dict / 옵션 객체 / None을 옵션 객체로 변환"""
    if isinstance(value, cls):
        return value
    if value is None:
        value = {}
    if not isinstance(value, dict):
        raise OptionTypeError(f"{cls.__name__}에는 dict를 전달해야 합니다: {value!r}")
    known = {f.name for f in fields(cls)}
    unknown = sorted(set(value) - known)
    if unknown:
        raise OptionValueError(f"{cls.__name__}: 알 수 없는 옵션: {', '.join(unknown)}")
    merged = dict(defaults_kwargs)
    merged.update(value)
    return cls(**merged)


def html_options(value=None, defaults: Optional[TableDefaults] = None) -> HtmlOptions:
    d = defaults or TableDefaults()
    return _options(HtmlOptions, value, {'extra_css': d.extra_css, 'scroll': d.scroll})


def word_options(value=None, defaults: Optional[TableDefaults] = None) -> WordOptions:
    d = defaults or TableDefaults()
    return _options(WordOptions, value, {'split': d.split, 'keep_with_next': d.keep_with_next})


def pdf_options(value=None, defaults: Optional[TableDefaults] = None) -> PdfOptions:
    d = defaults or TableDefaults()
    return _options(PdfOptions, value, {
        'tabcolsep': d.tabcolsep,
        'arraystretch': d.arraystretch,
        'float': d.float,
        'fonts_ignore': d.fonts_ignore,
    })


# ============================================================
# 테이블 속성
# ============================================================

@dataclass(frozen=True)
class TableProperties:
    """
    테이블 속성

    - layout: fixed이면 저장된 열 너비 사용, autofit이면 내용 기준
    - width: autofit에서 최소 너비 비율 (0~1, 0이면 필요한 만큼)
    - align: 문서 안 테이블 정렬
    """
    layout: str = "fixed"
    width: float = 0
    align: str = "center"
    opts_html: HtmlOptions = field(default_factory=HtmlOptions)
    opts_word: WordOptions = field(default_factory=WordOptions)
    opts_pdf: PdfOptions = field(default_factory=PdfOptions)
    word_title: Optional[str] = None
    word_description: Optional[str] = None

    def __post_init__(self):
        if self.layout not in LAYOUTS:
            raise OptionValueError(f"잘못된 레이아웃 값: {self.layout!r} (가능: {', '.join(LAYOUTS)})")
        _require_number('width', self.width, 0, 1)
        if self.align not in TABLE_ALIGNS:
            raise OptionValueError(f"잘못된 정렬 값: {self.align!r} (가능: {', '.join(TABLE_ALIGNS)})")
        for name in ('word_title', 'word_description'):
            value = getattr(self, name)
            if value is not None and not isinstance(value, str):
                raise OptionTypeError(f"'{name}'는 문자열 하나여야 합니다: {value!r}")
        if not isinstance(self.opts_html, HtmlOptions):
            raise OptionTypeError("'opts_html'은 HtmlOptions여야 합니다")
        if not isinstance(self.opts_word, WordOptions):
            raise OptionTypeError("'opts_word'는 WordOptions여야 합니다")
        if not isinstance(self.opts_pdf, PdfOptions):
            raise OptionTypeError("'opts_pdf'는 PdfOptions여야 합니다")


# ============================================================
# 캡션
# ============================================================

@dataclass(frozen=True)
class Autonum:
    """
    캡션 자동 번호 설정

    번호 자체는 문서 조립 단계에서 결정됩니다. 여기서는 시퀀스 식별자와
    책갈피, 앞뒤 문구만 보관합니다.
    """
    seq_id: str = "tab"
    bookmark: Optional[str] = None
    pre_label: str = "Table "
    post_label: str = ": "
    start_at: Optional[int] = None

    def __post_init__(self):
        if not self.seq_id or not isinstance(self.seq_id, str):
            raise OptionValueError("'seq_id'는 비어 있지 않은 문자열이어야 합니다")
        if self.start_at is not None:
            _require_number('start_at', self.start_at)


DEFAULT_CAPTION_PAR = ParProps(padding_top=3, padding_bottom=3, padding_left=3, padding_right=3)


@dataclass(frozen=True)
class Caption:
    """캡션 정보"""
    value: Union[str, Paragraph, None] = None
    simple_caption: bool = True
    autonum: Optional[Autonum] = None
    word_stylename: str = "Table Caption"
    fp_p: ParProps = DEFAULT_CAPTION_PAR
    align_with_table: bool = True
    html_classes: Optional[str] = None
    html_escape: bool = True

    def __post_init__(self):
        if self.value is not None and not isinstance(self.value, (str, Paragraph)):
            raise OptionTypeError(f"캡션은 문자열 또는 Paragraph여야 합니다: {type(self.value).__name__}")
        if self.autonum is not None and not isinstance(self.autonum, Autonum):
            raise OptionTypeError("'autonum'은 Autonum이어야 합니다")
        if not isinstance(self.fp_p, ParProps):
            raise OptionTypeError("'fp_p'는 ParProps여야 합니다")
        _require_bool('align_with_table', self.align_with_table)
        _require_bool('html_escape', self.html_escape)

    @property
    def has_value(self) -> bool:
        return self.value is not None and (not isinstance(self.value, str) or self.value != "")

    @property
    def text(self) -> str:
        if self.value is None:
            return ""
        return self.value if isinstance(self.value, str) else self.value.text


# ============================================================
# 테이블 모델
# ============================================================

@dataclass(frozen=True)
class TableModel:
    """
    테이블 모델

    세 파트는 같은 열 키 순서와 같은 열 너비를 가집니다. 변경 연산은
    ops 모듈의 함수를 통해 새 모델을 반환합니다.
    """
    header: TablePart
    body: TablePart
    footer: TablePart
    col_keys: Tuple[str, ...]
    properties: TableProperties = field(default_factory=TableProperties)
    caption: Caption = field(default_factory=Caption)
    defaults: TableDefaults = field(default_factory=TableDefaults)
    blanks: Tuple[str, ...] = ()

    def __post_init__(self):
        for name in PART_NAMES:
            part = getattr(self, name)
            if part.col_keys != self.col_keys:
                raise ConstructionError(f"{name} 파트의 열 키 순서가 테이블과 다릅니다")
        if not (self.header.widths == self.body.widths == self.footer.widths):
            raise ConstructionError("파트별 열 너비가 서로 다릅니다")

    # ========== 파트 조회 ==========

    def part(self, name: str) -> TablePart:
        if name not in PART_NAMES:
            raise SelectorError(f"알 수 없는 파트: {name} (가능: {', '.join(PART_NAMES)})")
        return getattr(self, name)

    def iter_parts(self, include_empty: bool = False) -> Iterator[Tuple[str, TablePart]]:
        """header, body, footer 순서로 (이름, 파트) 순회 (기본은 행이 있는 파트만)"""
        for name in PART_NAMES:
            part = getattr(self, name)
            if include_empty or part.nrow > 0:
                yield name, part

    def with_parts(self, **parts: TablePart) -> 'TableModel':
        """파트를 교체한 새 모델"""
        return replace(self, **parts)

    # ========== 크기 ==========

    @property
    def ncol(self) -> int:
        return len(self.col_keys)

    @property
    def widths(self) -> Tuple[float, ...]:
        """공통 열 너비 (inch)"""
        return self.body.widths

    def nrow(self, part: str = 'body') -> int:
        return self.part(part).nrow

    def dim(self) -> Dict[str, Any]:
        """저장된 열 너비와 행 높이"""
        return {
            'widths': dict(zip(self.col_keys, self.widths)),
            'heights': {name: list(p.heights) for name, p in self.iter_parts(include_empty=True)},
        }

    def pipe(self, fn, *args, **kwargs) -> 'TableModel':
        """ops 함수 연쇄 호출: ft.pipe(bold, part='header').pipe(autofit)"""
        return fn(self, *args, **kwargs)

    def validate(self):
        """모든 파트의 격자 불변 조건 확인"""
        for _, part in self.iter_parts(include_empty=True):
            part.validate()


def resolve_part_names(part: str) -> List[str]:
    """'all' 또는 파트 이름을 파트 이름 목록으로 변환"""
    if part == 'all':
        return list(PART_NAMES)
    if part not in PART_NAMES:
        raise SelectorError(f"알 수 없는 파트: {part} (가능: all, {', '.join(PART_NAMES)})")
    return [part]
