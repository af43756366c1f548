# -*- coding: utf-8 -*-
"""
프로젝트 설정 및 기본 서식 관리

프로세스 전역 기본값(TableDefaults)을 보관하고, YAML 파일로 읽고 쓰는
ConfigLoader와 로깅 설정 함수를 제공합니다.

기본값은 테이블 생성 시점에 스냅샷으로 복사되어 모델에 저장되므로
이후 set_defaults() 호출은 이미 생성된 테이블에 영향을 주지 않습니다.

사용 예:
    from flextab.config import set_defaults, get_defaults

    old = set_defaults(font_family="Cambria", font_size=10)
    ft = create_table(data)      # Cambria 10pt
    set_defaults(**old.to_dict())
"""

import logging
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .core.errors import OptionTypeError, OptionValueError


# ============================================================
# 기본 경로 설정
# ============================================================

# 패키지 루트 디렉토리
PACKAGE_ROOT = Path(__file__).parent.resolve()

# 패키지에 포함된 기본 설정 파일
DEFAULT_CONFIG_PATH = PACKAGE_ROOT / 'defaults.yaml'


# ============================================================
# 허용 값
# ============================================================

LAYOUTS = ('fixed', 'autofit')
TABLE_ALIGNS = ('left', 'center', 'right')
TEXT_ALIGNS = ('left', 'center', 'right', 'justify')
FLOATS = ('none', 'float', 'wrap-r', 'wrap-l', 'wrap-i', 'wrap-o')
THEMES = ('booktabs', 'vanilla', 'box', 'zebra', 'none')


@dataclass(frozen=True)
class TableDefaults:
    """테이블 기본 서식 및 레이아웃 옵션"""
    # 글꼴
    font_family: str = "Arial"
    font_size: float = 11
    font_color: str = "#000000"

    # 문단
    text_align: str = "left"
    padding_top: float = 5
    padding_bottom: float = 5
    padding_left: float = 5
    padding_right: float = 5
    line_spacing: float = 1

    # 셀 / 테두리 (두께 pt)
    border_color: str = "#666666"
    border_width: float = 0.75
    background_color: str = "transparent"

    # 테이블
    table_layout: str = "fixed"
    table_align: str = "center"
    theme: str = "booktabs"

    # Word
    split: bool = True
    keep_with_next: bool = False

    # LaTeX
    tabcolsep: float = 0
    arraystretch: float = 1.5
    fonts_ignore: bool = False

    # HTML
    extra_css: str = ""
    scroll: Optional[Dict[str, Any]] = None

    # 값 서식
    digits: int = 1
    decimal_mark: str = "."
    big_mark: str = ","
    na_str: str = ""
    nan_str: str = ""
    fmt_date: str = "%Y-%m-%d"
    fmt_datetime: str = "%Y-%m-%d %H:%M:%S"

    # LaTeX 배치 방식 (builtin float을 가리지 않도록 마지막에 선언)
    float: str = "none"

    def __post_init__(self):
        _validate_defaults(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _validate_defaults(d: TableDefaults):
    """기본값 검증 (대입 시점에 즉시 오류 보고)"""
    for name in ('font_size', 'padding_top', 'padding_bottom', 'padding_left',
                 'padding_right', 'line_spacing', 'border_width', 'tabcolsep',
                 'arraystretch'):
        value = getattr(d, name)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise OptionTypeError(f"'{name}'는 숫자여야 합니다: {value!r}")
        if value < 0:
            raise OptionValueError(f"'{name}'는 0 이상이어야 합니다: {value!r}")
    for name in ('split', 'keep_with_next', 'fonts_ignore'):
        if not isinstance(getattr(d, name), bool):
            raise OptionTypeError(f"'{name}'는 bool이어야 합니다: {getattr(d, name)!r}")
    if d.table_layout not in LAYOUTS:
        raise OptionValueError(f"알 수 없는 레이아웃: {d.table_layout} (가능: {', '.join(LAYOUTS)})")
    if d.table_align not in TABLE_ALIGNS:
        raise OptionValueError(f"알 수 없는 테이블 정렬: {d.table_align}")
    if d.text_align not in TEXT_ALIGNS:
        raise OptionValueError(f"알 수 없는 텍스트 정렬: {d.text_align}")
    if d.float not in FLOATS:
        raise OptionValueError(f"알 수 없는 float 값: {d.float} (가능: {', '.join(FLOATS)})")
    if d.theme not in THEMES:
        raise OptionValueError(f"알 수 없는 테마: {d.theme} (가능: {', '.join(THEMES)})")
    if not isinstance(d.extra_css, str):
        raise OptionTypeError("'extra_css'는 문자열이어야 합니다")
    if d.scroll is not None and not isinstance(d.scroll, dict):
        raise OptionTypeError("'scroll'은 None 또는 dict여야 합니다")
    if not isinstance(d.digits, int) or isinstance(d.digits, bool) or d.digits < 0:
        raise OptionValueError(f"'digits'는 0 이상의 정수여야 합니다: {d.digits!r}")


# ============================================================
# 프로세스 전역 기본값
# ============================================================

_DEFAULTS = TableDefaults()


def get_defaults() -> TableDefaults:
    """현재 기본값 스냅샷 반환 (불변 객체)"""
    return _DEFAULTS


def set_defaults(**kwargs) -> TableDefaults:
    """
    기본값 변경

    렌더링과 동시에 호출하지 마세요. 이미 생성된 테이블에는 영향이 없습니다.

    Returns:
        변경 전 기본값 (복원용)
    """
    global _DEFAULTS
    known = {f.name for f in fields(TableDefaults)}
    unknown = sorted(set(kwargs) - known)
    if unknown:
        raise OptionValueError(f"알 수 없는 기본값 항목: {', '.join(unknown)}")
    previous = _DEFAULTS
    _DEFAULTS = replace(_DEFAULTS, **kwargs)
    return previous


def init_defaults() -> TableDefaults:
    """기본값 초기화, 변경 전 값을 반환"""
    global _DEFAULTS
    previous = _DEFAULTS
    _DEFAULTS = TableDefaults()
    return previous


# ============================================================
# YAML 설정 로더
# ============================================================

class ConfigLoader:
    """YAML 기본값 설정 로더"""

    DEFAULT_CONFIG_NAME = "flextab_defaults.yaml"

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._config: Optional[TableDefaults] = None

    def load(self, config_path: Optional[Union[str, Path]] = None) -> TableDefaults:
        """YAML 설정 파일 로드 (파일이 없으면 기본값)"""
        path = Path(config_path) if config_path else self.config_path

        if path and path.exists():
            with open(path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
            self._config = self._parse_config(data)
        else:
            self._config = TableDefaults()

        return self._config

    def load_from_string(self, yaml_string: str) -> TableDefaults:
        """YAML 문자열에서 설정 로드"""
        data = yaml.safe_load(yaml_string) or {}
        self._config = self._parse_config(data)
        return self._config

    def load_from_dict(self, data: Dict[str, Any]) -> TableDefaults:
        """딕셔너리에서 설정 로드"""
        self._config = self._parse_config(data)
        return self._config

    def _parse_config(self, data: Dict[str, Any]) -> TableDefaults:
        """
        설정 데이터 파싱

        font/paragraph/border/table/word/pdf/html/format 섹션을 평탄화합니다.
        최상위에 필드명을 바로 써도 됩니다.
        """
        if not isinstance(data, dict):
            raise OptionTypeError("설정 파일의 최상위는 매핑이어야 합니다")

        known = {f.name for f in fields(TableDefaults)}
        values: Dict[str, Any] = {}
        for key, value in data.items():
            if isinstance(value, dict) and key in self.SECTIONS:
                for sub_key, sub_value in value.items():
                    name = self.SECTIONS[key].get(sub_key, sub_key)
                    values[name] = sub_value
            else:
                values[key] = value

        unknown = sorted(set(values) - known)
        if unknown:
            raise OptionValueError(f"알 수 없는 설정 항목: {', '.join(unknown)}")
        return TableDefaults(**values)

    # 섹션 키 -> 필드명 매핑
    SECTIONS = {
        'font': {'family': 'font_family', 'size': 'font_size', 'color': 'font_color'},
        'paragraph': {},
        'border': {'color': 'border_color', 'width': 'border_width'},
        'table': {'layout': 'table_layout', 'align': 'table_align'},
        'word': {},
        'pdf': {},
        'html': {},
        'format': {},
    }

    def save(self, config: TableDefaults, path: Optional[Union[str, Path]] = None) -> str:
        """설정을 YAML 파일로 저장"""
        save_path = Path(path) if path else Path(self.DEFAULT_CONFIG_NAME)

        with open(save_path, 'w', encoding='utf-8') as f:
            yaml.dump(config.to_dict(), f, default_flow_style=False, allow_unicode=True, sort_keys=False)

        return str(save_path)

    def to_yaml_string(self, config: TableDefaults) -> str:
        """설정을 YAML 문자열로 변환"""
        return yaml.dump(config.to_dict(), default_flow_style=False, allow_unicode=True, sort_keys=False)

    @property
    def config(self) -> TableDefaults:
        """현재 로드된 설정 반환"""
        if self._config is None:
            self._config = self.load()
        return self._config


def load_defaults(config_path: Union[str, Path]) -> TableDefaults:
    """
    YAML 파일의 값을 프로세스 기본값으로 적용 (편의 함수)

    Returns:
        변경 전 기본값
    """
    global _DEFAULTS
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"설정 파일을 찾을 수 없습니다: {path}")
    loaded = ConfigLoader(path).load()
    previous = _DEFAULTS
    _DEFAULTS = loaded
    return previous


# ============================================================
# 로깅 설정
# ============================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """로깅 설정"""
    logger = logging.getLogger('flextab')

    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level)
    return logger
