# -*- coding: utf-8 -*-
"""
flextab 예외 정의

모든 예외는 FlexTableError를 상속하며, 호출자가 표준 예외로도
잡을 수 있도록 ValueError / IndexError / TypeError를 함께 상속합니다.
"""


class FlexTableError(Exception):
    """flextab 기본 예외"""


class ConstructionError(FlexTableError, ValueError):
    """테이블 생성 오류 (중복 열 키, 비직사각형 데이터 등)"""


class SelectorError(FlexTableError, IndexError):
    """행/열 선택자가 범위를 벗어났거나 알 수 없는 키를 가리킴"""


class MergeConflictError(FlexTableError, ValueError):
    """요청한 병합 영역이 기존 병합 영역과 겹침"""


class LayoutConsistencyError(FlexTableError, ValueError):
    """고정 레이아웃에서 병합 셀 너비와 열 너비 합계가 일치하지 않음"""


class OptionValueError(FlexTableError, ValueError):
    """옵션 값이 허용 범위를 벗어남"""


class OptionTypeError(FlexTableError, TypeError):
    """옵션 값의 자료형이 잘못됨"""
