"""
프로세스 테이블 및 프로세스 생성
"""

from typing import TYPE_CHECKING, Dict, Iterator, List

from .events import EventType
from .process import Process, ProcessState
from .random_source import RandomSource

if TYPE_CHECKING:
    from .state import SimulationState


class ProcessTable:
    """전체 PCB (pid 기준)와 전역 시계 관리"""

    def __init__(self):
        self._processes: Dict[int, Process] = {}
        self.clock = 0

    def add(self, process: Process):
        if process.pid in self._processes:
            raise ValueError(f"Duplicate pid: {process.pid}")
        self._processes[process.pid] = process

    def get(self, pid: int) -> Process:
        return self._processes[pid]

    def advance_clock(self) -> int:
        self.clock += 1
        return self.clock

    def finished_count(self) -> int:
        return sum(1 for p in self._processes.values() if p.state == ProcessState.FINISHED)

    def __len__(self):
        return len(self._processes)

    def __iter__(self) -> Iterator[Process]:
        return iter(sorted(self._processes.values(), key=lambda p: p.pid))


def generate_processes(state: 'SimulationState', rng: RandomSource) -> List[Process]:
    """
    고정된 수의 프로세스를 생성해 HIGH 준비 큐에 넣음

    P0가 루트 프로세스이고 나머지는 모두 P0의 자식

    Args:
        state: 새 시뮬레이션 상태
        rng: CPU 요구량에 사용할 난수 생성기

    Returns:
        생성된 프로세스 목록 (pid 순)
    """
    if len(state.table):
        raise RuntimeError("Process population has already been generated")

    config = state.config
    created = []
    for pid in range(config.population_size):
        parent_pid = None if pid == 0 else 0
        process = Process(pid, parent_pid, rng.uniform(config.cpu_min, config.cpu_max))
        state.table.add(process)
        state.enqueue(state.ready_high, pid)
        state.events.emit(state.clock, EventType.PROCESS_CREATED, pid,
                          parent_pid=parent_pid, cpu_total=process.cpu_total)
        created.append(process)
    return created
