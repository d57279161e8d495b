"""
시뮬레이션 설정
"""

from typing import Tuple

from pydantic import BaseModel, Field, model_validator

from .process import IOKind


class SimulationConfig(BaseModel):
    """
    시뮬레이션 옵션
    생성 시점에 검증 (시뮬레이션 상태를 만들기 전)
    """
    population_size: int = Field(8, ge=1)
    quantum: int = Field(3, ge=1)

    cpu_min: int = Field(8, ge=1)
    cpu_max: int = Field(25, ge=1)

    io_chance_pct: int = Field(25, ge=0, le=100)

    disk_min: int = Field(3, ge=1)
    disk_max: int = Field(7, ge=1)
    tape_min: int = Field(4, ge=1)
    tape_max: int = Field(9, ge=1)
    printer_min: int = Field(5, ge=1)
    printer_max: int = Field(10, ge=1)

    # 0 = 현재 시간 사용
    seed: int = Field(0, ge=0)

    @model_validator(mode='after')
    def check_ranges(self):
        for name in ('cpu', 'disk', 'tape', 'printer'):
            low = getattr(self, f'{name}_min')
            high = getattr(self, f'{name}_max')
            if low > high:
                raise ValueError(f"{name}_min ({low}) must not exceed {name}_max ({high})")
        return self

    def io_duration_range(self, kind: IOKind) -> Tuple[int, int]:
        """장치별 I/O 시간 (최소, 최대)"""
        if kind == IOKind.DISK:
            return self.disk_min, self.disk_max
        if kind == IOKind.TAPE:
            return self.tape_min, self.tape_max
        if kind == IOKind.PRINTER:
            return self.printer_min, self.printer_max
        raise ValueError(f"No duration range for {kind}")
