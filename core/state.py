"""
디스패처, I/O 서브시스템, 스케줄러가 공유하는 시뮬레이션 상태
"""

from typing import Dict, List

from .config import SimulationConfig
from .events import EventLog, EventType
from .io_subsystem import IOSubsystem
from .process import Priority
from .process_table import ProcessTable
from .queue import ProcessQueue


class SimulationState:
    """
    프로세스 테이블, 시계, 준비 큐, 장치 큐, 이벤트 기록
    순차적으로만 접근하며 스케줄러가 소유
    """

    def __init__(self, config: SimulationConfig):
        self.config = config
        self.table = ProcessTable()
        self.events = EventLog()

        capacity = config.population_size
        self.ready_high = ProcessQueue("high", capacity)
        self.ready_low = ProcessQueue("low", capacity)
        self.io = IOSubsystem(self)

    @property
    def clock(self) -> int:
        return self.table.clock

    def ready_queue_for(self, priority: Priority) -> ProcessQueue:
        return self.ready_high if priority == Priority.HIGH else self.ready_low

    def enqueue(self, queue: ProcessQueue, pid: int) -> bool:
        """pid 추가 (가득 차면 오버플로 이벤트 기록)"""
        if queue.push(pid):
            return True
        self.events.emit(self.clock, EventType.QUEUE_OVERFLOW, pid, queue=queue.name)
        return False

    def all_queues(self) -> List[ProcessQueue]:
        return [self.ready_high, self.ready_low] + list(self.io.queues.values())

    def membership(self) -> Dict[int, List[str]]:
        """pid -> 해당 pid가 들어 있는 큐 이름 목록"""
        result: Dict[int, List[str]] = {p.pid: [] for p in self.table}
        for queue in self.all_queues():
            for pid in queue:
                result.setdefault(pid, []).append(queue.name)
        return result
