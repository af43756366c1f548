# -*- coding: utf-8 -*-
"""
입력 데이터셋 정규화 및 값 서식

지원 입력:
- pandas.DataFrame
- 행 딕셔너리 리스트: [{'a': 1, 'b': 2}, ...]
- 열 리스트 딕셔너리: {'a': [1, 2], 'b': [3, 4]}

모든 입력은 (열 이름 리스트, 행 딕셔너리 리스트)로 변환됩니다.
"""

import datetime
import math
import numbers
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from ..config import TableDefaults
from ..core.errors import ConstructionError


Rows = List[Dict[str, Any]]


def normalize_dataset(data) -> Tuple[List[str], Rows]:
    """
    데이터셋을 (열 이름, 행 목록)으로 정규화

    Raises:
        ConstructionError: 행마다 열 구성이 다르거나 열 길이가 다를 때
    """
    if isinstance(data, pd.DataFrame):
        columns = [str(c) for c in data.columns]
        if len(set(columns)) != len(columns):
            raise ConstructionError(f"데이터셋 열 이름이 중복됩니다: {columns}")
        rows = [
            dict(zip(columns, values))
            for values in data.itertuples(index=False, name=None)
        ]
        return columns, rows

    if isinstance(data, dict):
        columns = [str(c) for c in data.keys()]
        lengths = {len(v) for v in data.values()}
        if len(lengths) > 1:
            raise ConstructionError(f"열 길이가 서로 다릅니다: {sorted(lengths)}")
        n = lengths.pop() if lengths else 0
        values = list(data.values())
        rows = [{c: values[k][i] for k, c in enumerate(columns)} for i in range(n)]
        return columns, rows

    if isinstance(data, (list, tuple)):
        if not data:
            return [], []
        if not all(isinstance(r, dict) for r in data):
            raise ConstructionError("행 리스트의 각 항목은 dict여야 합니다")
        columns = [str(c) for c in data[0].keys()]
        expected = set(columns)
        rows = []
        for i, row in enumerate(data):
            keys = {str(k) for k in row.keys()}
            if keys != expected:
                missing = sorted(expected - keys)
                extra = sorted(keys - expected)
                raise ConstructionError(
                    f"{i}번째 행의 열 구성이 다릅니다 (누락: {missing}, 추가: {extra})"
                )
            rows.append({str(k): v for k, v in row.items()})
        return columns, rows

    raise ConstructionError(f"지원하지 않는 데이터셋 형식: {type(data).__name__}")


# ============================================================
# 값 서식
# ============================================================

def _swap_marks(text: str, big_mark: str, decimal_mark: str) -> str:
    """',' / '.' 를 지정한 천 단위/소수점 기호로 교체"""
    return ''.join(
        big_mark if ch == ',' else decimal_mark if ch == '.' else ch
        for ch in text
    )


def is_missing(value) -> bool:
    """None, NaN, pandas NA/NaT 여부"""
    if value is None:
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)):
        return False
    try:
        return bool(pd.isna(value))
    except (TypeError, ValueError):
        return False


def is_numeric_value(value) -> bool:
    """숫자 값 여부 (bool 제외)"""
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def format_number(value, digits: int, big_mark: str, decimal_mark: str) -> str:
    """실수 서식"""
    return _swap_marks(f"{float(value):,.{digits}f}", big_mark, decimal_mark)


def format_integer(value, big_mark: str) -> str:
    """정수 서식"""
    return _swap_marks(f"{int(value):,}", big_mark, '.')


def format_value(value, defaults: TableDefaults,
                 formatter: Optional[Callable[[Any], str]] = None) -> str:
    """
    셀 값을 표시 문자열로 변환

    Args:
        value: 원본 값
        defaults: 기본값 스냅샷 (자릿수, 구분 기호, 결측 표시)
        formatter: 열별 사용자 서식 함수 (결측이 아닌 값에만 적용)
    """
    if isinstance(value, float) and math.isnan(value):
        return defaults.nan_str
    if is_missing(value):
        return defaults.na_str
    if formatter is not None:
        return str(formatter(value))
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, numbers.Integral):
        return format_integer(value, defaults.big_mark)
    if isinstance(value, numbers.Real):
        return format_number(value, defaults.digits, defaults.big_mark, defaults.decimal_mark)
    if isinstance(value, datetime.datetime):
        return value.strftime(defaults.fmt_datetime)
    if isinstance(value, datetime.date):
        return value.strftime(defaults.fmt_date)
    return str(value)


def numeric_columns(columns: Sequence[str], rows: Rows) -> List[str]:
    """결측이 아닌 모든 값이 숫자인 열 목록"""
    result = []
    for col in columns:
        values = [r[col] for r in rows if not is_missing(r[col])]
        if values and all(is_numeric_value(v) for v in values):
            result.append(col)
    return result
