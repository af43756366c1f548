# -*- coding: utf-8 -*-
"""
테이블 파트(header / body / footer) 데이터 모델

개요:
- Cell: 셀 정보 (내용, 서식 패치, 병합 상태)
- TablePart: (행, 열 키)로 색인되는 셀 격자와 행 높이/열 너비

병합 표현:
- 병합 영역의 왼쪽 위 셀(앵커)이 row_span/col_span을 가집니다.
- 나머지 셀은 anchor=(앵커 행, 앵커 열)을 가지며 단독으로 출력되지 않습니다.

+-------+-------+-------+
| A 2x2 |   →   |   C   |
+   ↓   +   ↘   +-------+
|   ↓   |   ↘   |   F   |
+-------+-------+-------+

TablePart는 변경 메서드마다 새 객체를 반환합니다. 선택자가 비어 있으면
같은 객체를 그대로 반환하고, 오류가 나면 원본은 바뀌지 않습니다.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Tuple

from .content import Paragraph, to_content
from .dataset import format_value
from .properties import FormatPatch
from ..config import TableDefaults
from ..core.errors import (
    ConstructionError, MergeConflictError, OptionTypeError, OptionValueError, SelectorError,
)

logger = logging.getLogger(__name__)


PART_NAMES = ('header', 'body', 'footer')
HRULES = ('auto', 'atleast', 'exact')


@dataclass(frozen=True)
class Cell:
    """테이블 셀 정보"""
    content: Tuple[Paragraph, ...] = (Paragraph(),)
    fmt: FormatPatch = field(default_factory=FormatPatch)

    # 병합 상태
    row_span: int = 1
    col_span: int = 1
    anchor: Optional[Tuple[int, int]] = None

    # 선언 너비 (inch, 고정 레이아웃 검증용)
    width: Optional[float] = None

    @property
    def covered(self) -> bool:
        """다른 셀의 병합 영역에 덮인 셀 여부"""
        return self.anchor is not None

    @property
    def merged(self) -> bool:
        """병합 영역의 앵커 여부"""
        return self.anchor is None and (self.row_span > 1 or self.col_span > 1)

    @property
    def text(self) -> str:
        return '\n'.join(p.text for p in self.content)


RowSelector = Any
ColSelector = Any


@dataclass(frozen=True)
class TablePart:
    """테이블 파트 (셀 격자)"""
    name: str
    col_keys: Tuple[str, ...]
    data: Tuple[Dict[str, Any], ...] = ()
    cells: Tuple[Tuple[Cell, ...], ...] = ()

    # 열별 너비 / 행별 높이 (inch)
    widths: Tuple[float, ...] = ()
    heights: Tuple[float, ...] = ()
    hrules: Tuple[str, ...] = ()

    # ========== 생성 ==========

    @classmethod
    def create(
        cls,
        name: str,
        rows: Sequence[Dict[str, Any]],
        col_keys: Sequence[str],
        default_width: float,
        default_height: float,
        defaults: TableDefaults,
        formatters: Optional[Dict[str, Callable[[Any], str]]] = None,
    ) -> 'TablePart':
        """
        데이터셋 행으로 파트 생성

        Args:
            name: header | body | footer
            rows: 행 딕셔너리 목록 (col_keys의 모든 키를 가져야 함)
            col_keys: 열 키 순서
            default_width: 열 기본 너비 (inch)
            default_height: 행 기본 높이 (inch)
            defaults: 값 서식에 쓸 기본값 스냅샷
            formatters: 열 키 -> 값 서식 함수
        """
        if name not in PART_NAMES:
            raise ConstructionError(f"알 수 없는 파트: {name}")
        col_keys = tuple(col_keys)
        dup = sorted({k for k in col_keys if col_keys.count(k) > 1})
        if dup:
            raise ConstructionError(f"열 키가 중복됩니다: {', '.join(dup)}")
        formatters = formatters or {}

        data = []
        cells = []
        for i, row in enumerate(rows):
            missing = [k for k in col_keys if k not in row]
            if missing:
                raise ConstructionError(f"{name} {i}번째 행에 열이 없습니다: {', '.join(missing)}")
            data.append(dict(row))
            cells.append(tuple(
                Cell(content=to_content(format_value(row[k], defaults, formatters.get(k))))
                for k in col_keys
            ))

        return cls(
            name=name,
            col_keys=col_keys,
            data=tuple(data),
            cells=tuple(cells),
            widths=tuple(float(default_width) for _ in col_keys),
            heights=tuple(float(default_height) for _ in data),
            hrules=tuple('auto' for _ in data),
        )

    # ========== 조회 ==========

    @property
    def nrow(self) -> int:
        return len(self.cells)

    @property
    def ncol(self) -> int:
        return len(self.col_keys)

    def cell(self, row: int, col) -> Cell:
        """(행, 열 키 또는 열 번호) 위치의 셀"""
        rows = self.select_rows(row)
        cols = self.select_cols(col)
        return self.cells[rows[0]][cols[0]]

    def anchor_of(self, row: int, col: int) -> Tuple[int, int]:
        """특정 위치를 표시하는 앵커 위치 반환 (병합 없으면 자기 자신)"""
        c = self.cells[row][col]
        return c.anchor if c.anchor is not None else (row, col)

    def iter_anchors(self) -> Iterator[Tuple[int, int, Cell]]:
        """덮이지 않은 셀 (i, j, cell) 순회"""
        for i, row in enumerate(self.cells):
            for j, c in enumerate(row):
                if not c.covered:
                    yield i, j, c

    def merges(self) -> List[Tuple[int, int, int, int]]:
        """병합 영역 목록 (행, 열, 행 수, 열 수)"""
        return [
            (i, j, c.row_span, c.col_span)
            for i, j, c in self.iter_anchors()
            if c.merged
        ]

    def column_values(self, col: int) -> List[Any]:
        key = self.col_keys[col]
        return [row.get(key) for row in self.data]

    # ========== 선택자 ==========

    def select_rows(self, i: RowSelector = None) -> List[int]:
        """
        행 선택자를 정렬된 행 번호 목록으로 변환

        선택자: None(전체) | int | slice | range | bool 마스크 | int 목록 |
                callable(행 딕셔너리) -> bool
        """
        n = self.nrow
        if i is None:
            return list(range(n))
        if isinstance(i, bool):
            raise SelectorError(f"{self.name}: 행 선택자로 bool 단일 값은 쓸 수 없습니다")
        if isinstance(i, int):
            i = [i]
        if isinstance(i, slice):
            return list(range(n))[i]
        if callable(i):
            return [k for k, row in enumerate(self.data) if i(row)]
        selected = list(i)
        if selected and all(isinstance(v, bool) for v in selected):
            if len(selected) != n:
                raise SelectorError(f"{self.name}: 행 마스크 길이 {len(selected)}가 행 수 {n}와 다릅니다")
            return [k for k, flag in enumerate(selected) if flag]
        for v in selected:
            if isinstance(v, bool) or not isinstance(v, int):
                raise SelectorError(f"{self.name}: 잘못된 행 선택자: {v!r}")
            if v < 0 or v >= n:
                raise SelectorError(f"{self.name}: 행 번호 {v}가 범위를 벗어났습니다. (총 {n}행)")
        return sorted(set(selected))

    def select_cols(self, j: ColSelector = None) -> List[int]:
        """
        열 선택자를 정렬된 열 번호 목록으로 변환

        선택자: None(전체) | 열 키 | int | bool 마스크 | 열 키/번호 목록
        """
        n = self.ncol
        if j is None:
            return list(range(n))
        if isinstance(j, (str, int)) and not isinstance(j, bool):
            j = [j]
        if isinstance(j, slice):
            return list(range(n))[j]
        selected = list(j)
        if selected and all(isinstance(v, bool) for v in selected):
            if len(selected) != n:
                raise SelectorError(f"{self.name}: 열 마스크 길이 {len(selected)}가 열 수 {n}와 다릅니다")
            return [k for k, flag in enumerate(selected) if flag]
        out = set()
        for v in selected:
            if isinstance(v, str):
                if v not in self.col_keys:
                    raise SelectorError(f"{self.name}: 알 수 없는 열 키: {v}")
                out.add(self.col_keys.index(v))
            elif isinstance(v, int) and not isinstance(v, bool):
                if v < 0 or v >= n:
                    raise SelectorError(f"{self.name}: 열 번호 {v}가 범위를 벗어났습니다. (총 {n}열)")
                out.add(v)
            else:
                raise SelectorError(f"{self.name}: 잘못된 열 선택자: {v!r}")
        return sorted(out)

    # ========== 공통 헬퍼 ==========

    def _with_cells(self, updates: Dict[Tuple[int, int], Cell]) -> 'TablePart':
        """변경된 셀만 교체한 새 파트"""
        if not updates:
            return self
        rows = [list(r) for r in self.cells]
        for (i, j), c in updates.items():
            rows[i][j] = c
        return replace(self, cells=tuple(tuple(r) for r in rows))

    # ========== 내용 / 서식 ==========

    def set_content(self, i: RowSelector, j: ColSelector, content) -> 'TablePart':
        """
        셀 내용 교체

        content가 callable이면 행 딕셔너리를 받아 내용을 반환해야 합니다.
        """
        rows = self.select_rows(i)
        cols = self.select_cols(j)
        updates = {}
        for r in rows:
            value = content(self.data[r]) if callable(content) else content
            paragraphs = to_content(value)
            for c in cols:
                updates[(r, c)] = replace(self.cells[r][c], content=paragraphs)
        return self._with_cells(updates)

    def map_content(self, i: RowSelector, j: ColSelector,
                    fn: Callable[[Tuple[Paragraph, ...]], Tuple[Paragraph, ...]]) -> 'TablePart':
        """셀 내용에 함수 적용"""
        rows = self.select_rows(i)
        cols = self.select_cols(j)
        updates = {
            (r, c): replace(self.cells[r][c], content=fn(self.cells[r][c].content))
            for r in rows for c in cols
        }
        return self._with_cells(updates)

    def set_format(self, i: RowSelector, j: ColSelector, patch: FormatPatch) -> 'TablePart':
        """서식 패치를 기존 서식 위에 겹침 (지정 안 한 속성은 유지)"""
        rows = self.select_rows(i)
        cols = self.select_cols(j)
        updates = {
            (r, c): replace(self.cells[r][c], fmt=self.cells[r][c].fmt.merge(patch))
            for r in rows for c in cols
        }
        return self._with_cells(updates)

    def map_format(self, i: RowSelector, j: ColSelector,
                   fn: Callable[[int, int, FormatPatch], FormatPatch]) -> 'TablePart':
        """위치별로 서식 패치를 계산해 겹침 (테두리 외곽선 등)"""
        rows = self.select_rows(i)
        cols = self.select_cols(j)
        updates = {}
        for r in rows:
            for c in cols:
                patch = fn(r, c, self.cells[r][c].fmt)
                if patch is not None:
                    updates[(r, c)] = replace(self.cells[r][c], fmt=self.cells[r][c].fmt.merge(patch))
        return self._with_cells(updates)

    def set_declared_width(self, i: RowSelector, j: ColSelector, width: Optional[float]) -> 'TablePart':
        """셀 선언 너비 설정 (None이면 해제)"""
        if width is not None and width < 0:
            raise OptionValueError(f"너비는 0 이상이어야 합니다: {width}")
        rows = self.select_rows(i)
        cols = self.select_cols(j)
        updates = {(r, c): replace(self.cells[r][c], width=width) for r in rows for c in cols}
        return self._with_cells(updates)

    # ========== 병합 ==========

    def merge(self, i: RowSelector, j: ColSelector) -> 'TablePart':
        """
        선택 행/열을 감싸는 직사각형 영역 병합

        Raises:
            MergeConflictError: 영역이 기존 병합 영역과 겹칠 때
        """
        rows = self.select_rows(i)
        cols = self.select_cols(j)
        if not rows or not cols:
            return self
        r0, r1 = rows[0], rows[-1]
        c0, c1 = cols[0], cols[-1]
        if r0 == r1 and c0 == c1:
            return self

        for r in range(r0, r1 + 1):
            for c in range(c0, c1 + 1):
                existing = self.cells[r][c]
                if existing.covered or existing.merged:
                    ar, ac = self.anchor_of(r, c)
                    raise MergeConflictError(
                        f"{self.name}: 병합 영역 행 {r0}-{r1}, 열 {c0}-{c1}이 "
                        f"기존 병합 영역(앵커 행 {ar}, 열 {ac})과 겹칩니다"
                    )

        updates = {}
        for r in range(r0, r1 + 1):
            for c in range(c0, c1 + 1):
                if (r, c) == (r0, c0):
                    updates[(r, c)] = replace(
                        self.cells[r][c], row_span=r1 - r0 + 1, col_span=c1 - c0 + 1, anchor=None
                    )
                else:
                    updates[(r, c)] = replace(self.cells[r][c], row_span=1, col_span=1, anchor=(r0, c0))
        logger.debug("%s: 병합 행 %d-%d, 열 %d-%d", self.name, r0, r1, c0, c1)
        return self._with_cells(updates)

    def unmerge(self, i: RowSelector = None, j: ColSelector = None) -> 'TablePart':
        """선택 영역에 걸친 병합을 모두 해제"""
        rows = self.select_rows(i)
        cols = self.select_cols(j)
        anchors = {self.anchor_of(r, c) for r in rows for c in cols}
        updates = {}
        for ar, ac in anchors:
            anchor = self.cells[ar][ac]
            if not anchor.merged:
                continue
            for r in range(ar, ar + anchor.row_span):
                for c in range(ac, ac + anchor.col_span):
                    updates[(r, c)] = replace(self.cells[r][c], row_span=1, col_span=1, anchor=None)
        return self._with_cells(updates)

    # ========== 크기 ==========

    def set_widths(self, j: ColSelector, width: float) -> 'TablePart':
        """열 너비 설정 (inch, 0 허용)"""
        _check_dim(width)
        cols = self.select_cols(j)
        if not cols:
            return self
        widths = list(self.widths)
        for c in cols:
            widths[c] = float(width)
        return replace(self, widths=tuple(widths))

    def set_heights(self, i: RowSelector, height: float) -> 'TablePart':
        """행 높이 설정 (inch, 0 허용)"""
        _check_dim(height)
        rows = self.select_rows(i)
        if not rows:
            return self
        heights = list(self.heights)
        for r in rows:
            heights[r] = float(height)
        return replace(self, heights=tuple(heights))

    def set_hrule(self, i: RowSelector, rule: str) -> 'TablePart':
        """행 높이 규칙 설정 (auto | atleast | exact)"""
        if rule not in HRULES:
            raise OptionValueError(f"알 수 없는 행 높이 규칙: {rule} (가능: {', '.join(HRULES)})")
        rows = self.select_rows(i)
        if not rows:
            return self
        hrules = list(self.hrules)
        for r in rows:
            hrules[r] = rule
        return replace(self, hrules=tuple(hrules))

    # ========== 행 추가 ==========

    def insert_rows(self, other: 'TablePart', top: bool = False) -> 'TablePart':
        """
        다른 파트의 행을 위 또는 아래에 추가

        기존 병합 좌표는 위에 추가한 행 수만큼 아래로 이동합니다.
        """
        if other.col_keys != self.col_keys:
            raise ConstructionError("열 키 구성이 다른 행은 추가할 수 없습니다")
        if other.nrow == 0:
            return self
        if top:
            first, second, shift_first, shift_second = other, self, 0, other.nrow
        else:
            first, second, shift_first, shift_second = self, other, 0, self.nrow

        def shifted(part: 'TablePart', offset: int):
            if offset == 0:
                return part.cells
            return tuple(
                tuple(
                    replace(c, anchor=(c.anchor[0] + offset, c.anchor[1])) if c.covered else c
                    for c in row
                )
                for row in part.cells
            )

        return replace(
            self,
            data=first.data + second.data,
            cells=shifted(first, shift_first) + shifted(second, shift_second),
            heights=first.heights + second.heights,
            hrules=first.hrules + second.hrules,
        )

    # ========== 검증 ==========

    def validate(self):
        """
        격자 불변 조건 확인

        - 모든 행이 열 키 수만큼 셀을 가짐
        - 덮인 셀은 범위 안의 앵커를 가리키고 그 앵커가 실제로 덮음
        - 병합 영역끼리 겹치지 않음
        """
        if len(self.widths) != self.ncol:
            raise ConstructionError(f"{self.name}: 열 너비 수가 열 수와 다릅니다")
        if len(self.heights) != self.nrow or len(self.hrules) != self.nrow:
            raise ConstructionError(f"{self.name}: 행 높이 수가 행 수와 다릅니다")
        owner: Dict[Tuple[int, int], Tuple[int, int]] = {}
        for i, row in enumerate(self.cells):
            if len(row) != self.ncol:
                raise ConstructionError(f"{self.name}: {i}번째 행의 셀 수가 열 수와 다릅니다")
            for j, c in enumerate(row):
                if c.covered:
                    continue
                if i + c.row_span > self.nrow or j + c.col_span > self.ncol:
                    raise ConstructionError(f"{self.name}: ({i}, {j}) 병합 영역이 범위를 벗어납니다")
                for r in range(i, i + c.row_span):
                    for k in range(j, j + c.col_span):
                        if (r, k) in owner:
                            raise ConstructionError(f"{self.name}: 병합 영역이 겹칩니다 ({r}, {k})")
                        owner[(r, k)] = (i, j)
        for i, row in enumerate(self.cells):
            for j, c in enumerate(row):
                if c.covered and owner.get((i, j)) != c.anchor:
                    raise ConstructionError(f"{self.name}: ({i}, {j})의 앵커가 올바르지 않습니다")


def _check_dim(value: float):
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise OptionTypeError(f"크기는 숫자여야 합니다: {value!r}")
    if value < 0:
        raise OptionValueError(f"크기는 0 이상이어야 합니다: {value}")
