"""
스케줄링 이벤트 및 이벤트 기록
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional


class EventType(Enum):
    """이벤트 타입"""
    PROCESS_CREATED = "Process Created"
    DISPATCHED = "Dispatched"
    PREEMPTED = "Preempted"
    FINISHED = "Finished"
    IO_REQUESTED = "I/O Requested"
    IO_COMPLETED = "I/O Completed"
    SIMULATION_COMPLETE = "Simulation Complete"
    QUEUE_OVERFLOW = "Queue Overflow"


@dataclass
class Event:
    """시뮬레이션 이벤트"""
    time: int
    event_type: EventType
    pid: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)

    def describe(self) -> str:
        """이벤트를 실행 기록 한 줄로 변환"""
        d = self.data
        t = self.event_type
        if t == EventType.PROCESS_CREATED:
            parent = d['parent_pid'] if d['parent_pid'] is not None else -1
            message = f"Created P{self.pid} (PPID={parent}, CPU={d['cpu_total']}) -> HIGH queue"
        elif t == EventType.DISPATCHED:
            message = f"RUNNING P{self.pid} (remaining={d['cpu_remaining']}, priority={d['priority']})"
        elif t == EventType.PREEMPTED:
            message = f"P{self.pid} preempted (remaining={d['cpu_remaining']})"
        elif t == EventType.FINISHED:
            message = f"P{self.pid} FINISHED"
        elif t == EventType.IO_REQUESTED:
            message = f"P{self.pid} requested I/O ({d['device']}) for {d['duration']}"
        elif t == EventType.IO_COMPLETED:
            message = f"P{self.pid} completed I/O ({d['device']}) -> {d['queue']} queue"
        elif t == EventType.SIMULATION_COMPLETE:
            return (f"=== DONE: all {d['process_count']} processes finished "
                    f"at t={d['final_clock']} ===")
        elif t == EventType.QUEUE_OVERFLOW:
            message = f"WARNING: {d['queue']} queue full, dropped P{self.pid}"
        else:
            message = t.value
        return f"[t={self.time:02d}] {message}"


class EventLog:
    """
    순서가 보장되는 이벤트 기록
    이벤트가 발생할 때마다 리스너를 동기적으로 호출
    """

    def __init__(self):
        self.events: List[Event] = []
        self._listeners: List[Callable[[Event], None]] = []

    def subscribe(self, listener: Callable[[Event], None]):
        self._listeners.append(listener)

    def emit(self, time: int, event_type: EventType, pid: Optional[int] = None, **data) -> Event:
        event = Event(time, event_type, pid, data)
        self.events.append(event)
        for listener in self._listeners:
            listener(event)
        return event

    def of_type(self, event_type: EventType) -> List[Event]:
        return [e for e in self.events if e.event_type == event_type]

    def lines(self) -> List[str]:
        return [e.describe() for e in self.events]

    def __len__(self):
        return len(self.events)

    def __iter__(self):
        return iter(self.events)
