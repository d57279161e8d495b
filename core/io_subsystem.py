"""
장치 큐 및 틱 단위 I/O 진행
"""

from typing import TYPE_CHECKING, Dict

from .events import EventType
from .process import IOKind, Priority, Process, ProcessState
from .queue import ProcessQueue
from .random_source import RandomSource

if TYPE_CHECKING:
    from .state import SimulationState

# 한 틱 안에서의 장치 진행 순서
DEVICE_ORDER = (IOKind.DISK, IOKind.TAPE, IOKind.PRINTER)


class IOSubsystem:
    """
    독립된 세 장치 큐 (디스크, 테이프, 프린터)

    I/O 완료 후 이동:
        디스크           -> 우선순위 LOW,  LOW 준비 큐
        테이프/프린터    -> 우선순위 HIGH, HIGH 준비 큐
    """

    def __init__(self, state: 'SimulationState'):
        self.state = state
        capacity = state.config.population_size
        self.queues: Dict[IOKind, ProcessQueue] = {
            kind: ProcessQueue(kind.label.lower(), capacity) for kind in DEVICE_ORDER
        }

    def draw_duration(self, kind: IOKind, rng: RandomSource) -> int:
        low, high = self.state.config.io_duration_range(kind)
        return rng.uniform(low, high)

    def request(self, process: Process, kind: IOKind, duration: int):
        """실행 중인 프로세스를 장치 대기 상태로 전환"""
        if kind not in self.queues:
            raise ValueError(f"Not a device: {kind}")
        process.block(kind, duration)
        self.state.enqueue(self.queues[kind], process.pid)
        self.state.events.emit(self.state.clock, EventType.IO_REQUESTED, process.pid,
                               device=kind.label, duration=duration)

    def tick(self):
        """모든 장치를 DEVICE_ORDER 순서로 1틱 진행"""
        for kind in DEVICE_ORDER:
            self._tick_device(kind)

    def _tick_device(self, kind: IOKind):
        queue = self.queues[kind]
        table = self.state.table

        # 현재 들어 있는 pid를 한 바퀴 순회 (큐 밖에 있는 pid는 한 번에 하나)
        for _ in range(len(queue)):
            pid = queue.pop()
            if pid is None:
                break
            process = table.get(pid)

            if process.state != ProcessState.BLOCKED:
                # 대기 상태가 아닌 항목
                self.state.enqueue(queue, pid)
                continue

            if process.advance_io():
                self._complete(process, kind)
            else:
                self.state.enqueue(queue, pid)

    def _complete(self, process: Process, kind: IOKind):
        process.io_kind = IOKind.NONE
        process.state = ProcessState.READY
        if kind == IOKind.DISK:
            process.priority = Priority.LOW
        else:
            process.priority = Priority.HIGH

        self.state.enqueue(self.state.ready_queue_for(process.priority), process.pid)
        self.state.events.emit(self.state.clock, EventType.IO_COMPLETED, process.pid,
                               device=kind.label, queue=process.priority.value)
