# -*- coding: utf-8 -*-
"""
길이 단위 변환 유틸리티

테이블 모델은 모든 길이를 inch 단위로 저장합니다.
출력 형식별 내부 단위로의 변환은 이 모듈을 거칩니다.
- 1 inch = 72 pt
- 1 inch = 1440 twips (Word dxa)
- 1 inch = 914400 EMU (PowerPoint)
- 1 inch = 96 px (CSS)
"""

from .errors import OptionValueError


class Unit:
    """단위 변환 상수 및 메서드"""

    # 기본 변환 상수
    PT_PER_INCH = 72
    TWIPS_PER_INCH = 1440
    EMU_PER_INCH = 914400
    PX_PER_INCH = 96
    CM_PER_INCH = 2.54
    MM_PER_INCH = 25.4

    # Excel 변환용
    # 엑셀 열 너비 1 문자 ≈ 7 pt (Calibri 11pt 기준)
    EXCEL_CHAR_TO_PT = 7

    SUPPORTED = ('in', 'pt', 'cm', 'mm', 'px')

    # ========================================
    # 임의 단위 -> inch
    # ========================================

    @staticmethod
    def to_inch(value: float, unit: str = 'in') -> float:
        """지정 단위 값을 inch로 변환"""
        if unit == 'in':
            return float(value)
        if unit == 'pt':
            return value / Unit.PT_PER_INCH
        if unit == 'cm':
            return value / Unit.CM_PER_INCH
        if unit == 'mm':
            return value / Unit.MM_PER_INCH
        if unit == 'px':
            return value / Unit.PX_PER_INCH
        raise OptionValueError(f"지원하지 않는 단위: {unit} (가능: {', '.join(Unit.SUPPORTED)})")

    # ========================================
    # inch ↔ 포인트
    # ========================================

    @staticmethod
    def inch_to_pt(inch: float) -> float:
        """inch -> 포인트"""
        return inch * Unit.PT_PER_INCH

    @staticmethod
    def pt_to_inch(pt: float) -> float:
        """포인트 -> inch"""
        return pt / Unit.PT_PER_INCH

    # ========================================
    # Word / PowerPoint 내부 단위
    # ========================================

    @staticmethod
    def inch_to_twips(inch: float) -> int:
        """inch -> twips (1/20 pt)"""
        return int(round(inch * Unit.TWIPS_PER_INCH))

    @staticmethod
    def pt_to_twips(pt: float) -> int:
        """포인트 -> twips"""
        return int(round(pt * 20))

    @staticmethod
    def pt_to_eighths(pt: float) -> int:
        """포인트 -> 1/8 pt (Word 테두리 두께)"""
        return int(round(pt * 8))

    @staticmethod
    def inch_to_emu(inch: float) -> int:
        """inch -> EMU"""
        return int(round(inch * Unit.EMU_PER_INCH))

    @staticmethod
    def pt_to_emu(pt: float) -> int:
        """포인트 -> EMU"""
        return int(round(pt * Unit.EMU_PER_INCH / Unit.PT_PER_INCH))

    # ========================================
    # Excel 변환
    # ========================================

    @staticmethod
    def inch_to_excel_width(inch: float) -> float:
        """inch -> Excel 열 너비 (문자 단위)"""
        return Unit.inch_to_pt(inch) / Unit.EXCEL_CHAR_TO_PT

    @staticmethod
    def inch_to_excel_height(inch: float) -> float:
        """inch -> Excel 행 높이 (pt)"""
        return Unit.inch_to_pt(inch)

    @staticmethod
    def excel_width_to_inch(width: float) -> float:
        """Excel 열 너비 -> inch"""
        return Unit.pt_to_inch(width * Unit.EXCEL_CHAR_TO_PT)
