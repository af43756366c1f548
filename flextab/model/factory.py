# -*- coding: utf-8 -*-
"""
테이블 생성 함수

사용 예:
    import pandas as pd
    from flextab import create_table, qtable

    df = pd.DataFrame({'name': ['A', 'B'], 'score': [91.5, 78.25]})
    ft = create_table(df, col_keys=['name', 'score', 'memo'])  # memo는 빈 열
    ft = qtable(df)                                             # 내용에 맞춘 크기
"""

import logging
from typing import Optional, Sequence

from .dataset import normalize_dataset
from .part import TablePart
from .table import TableModel, TableProperties, html_options, pdf_options, word_options
from ..config import TableDefaults, get_defaults
from ..core.errors import ConstructionError

logger = logging.getLogger(__name__)


def create_table(data, col_keys: Optional[Sequence[str]] = None, cwidth: float = 0.75,
                 cheight: float = 0.25, defaults: Optional[TableDefaults] = None,
                 theme: Optional[str] = None) -> TableModel:
    """
    데이터셋으로 테이블 모델 생성

    Args:
        data: DataFrame, 행 딕셔너리 리스트 또는 열 리스트 딕셔너리
        col_keys: 표시할 열 키 순서 (기본은 데이터셋 열 순서).
                  데이터셋에 없는 키는 빈 문자열 열이 됩니다.
        cwidth: 열 기본 너비 (inch)
        cheight: 행 기본 높이 (inch)
        defaults: 기본값 스냅샷 (기본은 현재 프로세스 기본값)
        theme: 적용할 테마 이름 (기본은 defaults.theme)

    Raises:
        ConstructionError: 열 키 중복, 비직사각형 데이터, 열 없음
    """
    from ..themes import apply_theme

    d = defaults if defaults is not None else get_defaults()
    columns, rows = normalize_dataset(data)

    keys = list(columns) if col_keys is None else [str(k) for k in col_keys]
    if not keys:
        raise ConstructionError("열이 하나도 없습니다")
    dup = sorted({k for k in keys if keys.count(k) > 1})
    if dup:
        raise ConstructionError(f"열 키가 중복됩니다: {', '.join(dup)}")

    blanks = tuple(k for k in keys if k not in columns)
    if blanks:
        rows = [dict(row, **{k: "" for k in blanks}) for row in rows]

    header = TablePart.create('header', [{k: k for k in keys}], keys, cwidth, cheight, d)
    body = TablePart.create('body', rows, keys, cwidth, cheight, d)
    footer = TablePart.create('footer', [], keys, cwidth, cheight, d)

    props = TableProperties(
        layout=d.table_layout,
        align=d.table_align,
        opts_html=html_options(None, d),
        opts_word=word_options(None, d),
        opts_pdf=pdf_options(None, d),
    )
    model = TableModel(
        header=header,
        body=body,
        footer=footer,
        col_keys=tuple(keys),
        properties=props,
        defaults=d,
        blanks=blanks,
    )
    logger.debug("테이블 생성: 열 %d개 (빈 열 %d개), body %d행", len(keys), len(blanks), body.nrow)
    return apply_theme(model, theme or d.theme)


def qtable(data, col_keys: Optional[Sequence[str]] = None, defaults: Optional[TableDefaults] = None,
           theme: Optional[str] = None) -> TableModel:
    """고정 레이아웃 + 내용에 맞춘 열 너비/행 높이로 테이블 생성"""
    from .ops import autofit, set_layout

    model = create_table(data, col_keys=col_keys, defaults=defaults, theme=theme)
    return autofit(set_layout(model, 'fixed'))
