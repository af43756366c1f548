# -*- coding: utf-8 -*-
"""
레이아웃 계산 모듈

테이블 모델에서 실제 출력에 쓸 열 너비와 행 높이를 계산합니다.

레이아웃 종류:
- fixed: 저장된 열 너비/행 높이를 그대로 사용 (0도 그대로 유지)
         병합 셀에 선언 너비가 있으면 걸친 열 너비 합과 같아야 함
- autofit: 내용의 자연 크기로 계산
         열 너비 = 그 열의 단일 열 셀 자연 폭 최댓값
         병합 셀 자연 폭은 걸친 열에 똑같이 나누고, 열마다 다른 제약과
         비교해 큰 값을 사용

사용 예:
    layout = compute_layout(model)
    layout.widths          # 열 순서대로 inch
    layout.heights['body'] # body 행 높이
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from .metrics import cell_extent
from ..core.errors import LayoutConsistencyError
from ..formatters.resolver import FormatResolver
from ..model.table import TableModel

logger = logging.getLogger(__name__)

# 선언 너비 비교 허용 오차 (inch)
WIDTH_TOLERANCE = 1e-6


@dataclass(frozen=True)
class TableLayout:
    """계산된 레이아웃 (inch)"""
    col_keys: Tuple[str, ...]
    widths: Tuple[float, ...]
    heights: Dict[str, Tuple[float, ...]] = field(default_factory=dict)
    layout: str = "fixed"
    width: float = 0

    @property
    def total_width(self) -> float:
        return sum(self.widths)

    def span_width(self, col: int, span: int = 1) -> float:
        """col부터 span개 열의 너비 합"""
        return sum(self.widths[col:col + span])

    def span_height(self, part: str, row: int, span: int = 1) -> float:
        """part의 row부터 span개 행의 높이 합"""
        return sum(self.heights.get(part, ())[row:row + span])

    def col_offsets(self) -> List[float]:
        """각 열의 왼쪽 x 좌표"""
        offsets = [0.0]
        for w in self.widths[:-1]:
            offsets.append(offsets[-1] + w)
        return offsets


def validate_fixed(model: TableModel):
    """
    고정 레이아웃 너비 검증

    선언 너비를 가진 셀은 걸친 열의 저장 너비 합과 같아야 합니다.
    불일치는 자동 보정하지 않고 오류로 보고합니다.

    Raises:
        LayoutConsistencyError
    """
    widths = model.widths
    for name, part in model.iter_parts():
        for i, j, cell in part.iter_anchors():
            if cell.width is None:
                continue
            actual = sum(widths[j:j + cell.col_span])
            if abs(actual - cell.width) > WIDTH_TOLERANCE:
                raise LayoutConsistencyError(
                    f"{name} ({i}, {part.col_keys[j]}): 선언 너비 {cell.width:.4f}in와 "
                    f"열 너비 합 {actual:.4f}in가 다릅니다 (열 {cell.col_span}개)"
                )


def natural_dims(model: TableModel) -> Tuple[List[float], Dict[str, List[float]]]:
    """
    내용 기준 자연 크기 계산

    제약이 전혀 없는 열/행은 저장된 값을 유지합니다.

    Returns:
        (열 너비 목록, 파트별 행 높이 목록)
    """
    resolver = FormatResolver(model.defaults)
    col_need: List[Optional[float]] = [None] * model.ncol
    heights: Dict[str, List[float]] = {}

    def bump(values: List[Optional[float]], k: int, need: float):
        values[k] = need if values[k] is None else max(values[k], need)

    for name, part in model.iter_parts(include_empty=True):
        row_need: List[Optional[float]] = [None] * part.nrow
        for i, j, cell in part.iter_anchors():
            w, h = cell_extent(cell, resolver)
            for c in range(j, j + cell.col_span):
                bump(col_need, c, w / cell.col_span)
            for r in range(i, i + cell.row_span):
                bump(row_need, r, h / cell.row_span)
        heights[name] = [
            stored if need is None else need
            for stored, need in zip(part.heights, row_need)
        ]

    widths = [
        stored if need is None else need
        for stored, need in zip(model.widths, col_need)
    ]
    return widths, heights


def compute_layout(model: TableModel) -> TableLayout:
    """
    출력용 레이아웃 계산

    Raises:
        LayoutConsistencyError: fixed 레이아웃에서 선언 너비가 맞지 않을 때
    """
    layout = model.properties.layout
    if layout == 'fixed':
        validate_fixed(model)
        widths = list(model.widths)
        heights = {name: list(part.heights) for name, part in model.iter_parts(include_empty=True)}
    else:
        widths, heights = natural_dims(model)

    logger.debug("레이아웃 계산: %s, 열 %d개, 전체 너비 %.3fin", layout, len(widths), sum(widths))
    return TableLayout(
        col_keys=model.col_keys,
        widths=tuple(widths),
        heights={name: tuple(h) for name, h in heights.items()},
        layout=layout,
        width=model.properties.width,
    )


def fixed_equivalent(model: TableModel, layout: Optional[TableLayout] = None) -> TableLayout:
    """
    항상 고정 너비가 필요한 출력 형식용 레이아웃

    autofit이 요청된 경우 자연 크기를 고정 값처럼 사용합니다.
    """
    if layout is None:
        layout = compute_layout(model)
    if layout.layout == 'fixed':
        return layout
    return TableLayout(
        col_keys=layout.col_keys,
        widths=layout.widths,
        heights=layout.heights,
        layout='fixed',
        width=layout.width,
    )
