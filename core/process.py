"""
프로세스 및 PCB (Process Control Block) 모듈
"""

from enum import Enum
from typing import Optional


class ProcessState(Enum):
    """프로세스 상태"""
    READY = "Ready"
    RUNNING = "Running"
    BLOCKED = "Blocked"
    FINISHED = "Finished"


class Priority(Enum):
    """준비 큐 단계"""
    HIGH = "HIGH"
    LOW = "LOW"


class IOKind(Enum):
    """프로세스가 대기할 수 있는 I/O 장치"""
    NONE = 0
    DISK = 1
    TAPE = 2
    PRINTER = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()


class Process:
    """
    Process Control Block (PCB)
    시뮬레이션 프로세스 하나의 스케줄링 상태를 관리
    디스패처, I/O 서브시스템, 스케줄러가 직접 갱신
    """

    def __init__(self, pid: int, parent_pid: Optional[int], cpu_total: int):
        """
        프로세스 초기화

        Args:
            pid: 프로세스 ID (생성 순서대로 부여)
            parent_pid: 부모 프로세스 ID (루트 프로세스는 None)
            cpu_total: 필요한 총 CPU 틱
        """
        self.pid = pid
        self.parent_pid = parent_pid
        self.priority = Priority.HIGH
        self.state = ProcessState.READY

        self.cpu_total = cpu_total
        self.cpu_remaining = cpu_total

        self.io_kind = IOKind.NONE
        self.io_remaining = 0

        # 통계
        self.first_run_time: Optional[int] = None
        self.finish_time: Optional[int] = None
        self.io_time = 0
        self.io_requests = 0
        self.dispatch_count = 0

    def execute_tick(self):
        """CPU 1틱 실행"""
        if self.state != ProcessState.RUNNING:
            raise ValueError(f"P{self.pid} is not running ({self.state.value})")
        if self.cpu_remaining > 0:
            self.cpu_remaining -= 1

    def is_finished(self) -> bool:
        return self.state == ProcessState.FINISHED

    def block(self, kind: IOKind, duration: int):
        """장치에서 `duration` 틱 동안 대기 상태로 전환"""
        self.state = ProcessState.BLOCKED
        self.io_kind = kind
        self.io_remaining = duration
        self.io_requests += 1

    def advance_io(self) -> bool:
        """
        대기 중인 프로세스의 I/O를 1틱 진행

        Returns:
            I/O 작업이 완료되면 True
        """
        if self.io_remaining > 0:
            self.io_remaining -= 1
            self.io_time += 1
        return self.io_remaining == 0

    @property
    def turnaround_time(self) -> Optional[int]:
        # 모든 프로세스는 t=0에 생성됨
        return self.finish_time

    @property
    def waiting_time(self) -> Optional[int]:
        if self.finish_time is None:
            return None
        return self.finish_time - self.cpu_total - self.io_time

    @property
    def response_time(self) -> Optional[int]:
        return self.first_run_time

    def __repr__(self):
        return f"P{self.pid}[{self.state.value}]"

    def __str__(self):
        return f"Process {self.pid}: State={self.state.value}, Priority={self.priority.value}, " \
               f"Remaining={self.cpu_remaining}"
