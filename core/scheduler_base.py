"""
스케줄러 기본 프레임워크 (통계, 간트 차트, 결과)
"""

from typing import List, Dict, Optional
from dataclasses import dataclass

from .config import SimulationConfig
from .events import Event, EventType
from .process import Process, ProcessState
from .state import SimulationState

# 간트 차트에서 CPU 유휴 구간에 쓰는 pid
IDLE_PID = -1


@dataclass
class GanttEntry:
    """간트 차트 항목"""
    pid: int
    start_time: int
    end_time: int
    state: ProcessState  # RUNNING, BLOCKED, CPU 유휴 구간은 READY


class SchedulerStats:
    """스케줄링 통계"""

    def __init__(self):
        self.total_waiting_time = 0
        self.total_turnaround_time = 0
        self.total_response_time = 0
        self.context_switches = 0
        self.cpu_busy_time = 0
        self.total_simulation_time = 0
        self.process_count = 0

    def calculate_averages(self):
        """평균 계산"""
        idle_time = self.total_simulation_time - self.cpu_busy_time
        if self.process_count == 0:
            return {
                'avg_waiting_time': 0,
                'avg_turnaround_time': 0,
                'avg_response_time': 0,
                'cpu_utilization': 0,
                'context_switches': 0,
                'final_clock': self.total_simulation_time,
                'idle_time': idle_time
            }

        return {
            'avg_waiting_time': self.total_waiting_time / self.process_count,
            'avg_turnaround_time': self.total_turnaround_time / self.process_count,
            'avg_response_time': self.total_response_time / self.process_count,
            'cpu_utilization': (self.cpu_busy_time / self.total_simulation_time * 100)
                               if self.total_simulation_time > 0 else 0,
            'context_switches': self.context_switches,
            'final_clock': self.total_simulation_time,
            'idle_time': idle_time
        }


def build_gantt_chart(events: List[Event], final_clock: int) -> List[GanttEntry]:
    """
    이벤트 기록으로부터 간트 차트 항목 생성

    RUNNING: 디스패치부터 선점, 종료 또는 I/O 요청까지
    BLOCKED: I/O 요청부터 완료까지
    RUNNING 항목이 없는 CPU 구간은 유휴 상태
    """
    running: List[GanttEntry] = []
    blocked: List[GanttEntry] = []
    dispatched_at: Dict[int, int] = {}
    blocked_at: Dict[int, int] = {}

    for event in events:
        t = event.event_type
        if t == EventType.DISPATCHED:
            dispatched_at[event.pid] = event.time
        elif t in (EventType.PREEMPTED, EventType.FINISHED, EventType.IO_REQUESTED):
            start = dispatched_at.pop(event.pid, None)
            if start is not None and start < event.time:
                running.append(GanttEntry(event.pid, start, event.time, ProcessState.RUNNING))
            if t == EventType.IO_REQUESTED:
                blocked_at[event.pid] = event.time
        elif t == EventType.IO_COMPLETED:
            start = blocked_at.pop(event.pid, None)
            if start is not None and start < event.time:
                blocked.append(GanttEntry(event.pid, start, event.time, ProcessState.BLOCKED))

    idle: List[GanttEntry] = []
    cursor = 0
    for entry in sorted(running, key=lambda e: e.start_time):
        if entry.start_time > cursor:
            idle.append(GanttEntry(IDLE_PID, cursor, entry.start_time, ProcessState.READY))
        cursor = max(cursor, entry.end_time)
    if cursor < final_clock:
        idle.append(GanttEntry(IDLE_PID, cursor, final_clock, ProcessState.READY))

    return sorted(running + blocked + idle, key=lambda e: (e.start_time, e.pid))


class BaseScheduler:
    """
    스케줄러 기본 클래스
    시뮬레이션 상태를 소유하고 이벤트 기록, 통계, 결과를 제공
    """

    def __init__(self, config: SimulationConfig, name: str = "Base Scheduler"):
        self.config = config
        self.name = name
        self.state = SimulationState(config)
        self.running_process: Optional[Process] = None
        self.previous_pid: Optional[int] = None
        self.stats = SchedulerStats()
        self.gantt_chart: List[GanttEntry] = []

    @property
    def current_time(self) -> int:
        return self.state.clock

    @property
    def events(self) -> List[Event]:
        return self.state.events.events

    @property
    def event_log(self) -> List[str]:
        return self.state.events.lines()

    @property
    def processes(self) -> List[Process]:
        return list(self.state.table)

    def log_event(self, event_type: EventType, pid: Optional[int] = None, **data) -> Event:
        """현재 시각으로 이벤트 기록"""
        return self.state.events.emit(self.current_time, event_type, pid, **data)

    def record_dispatch(self, process: Process):
        """실행할 프로세스의 문맥 교환 횟수 집계"""
        if self.previous_pid is not None and self.previous_pid != process.pid:
            self.stats.context_switches += 1
        self.previous_pid = process.pid
        self.running_process = process

    def select_next_process(self) -> Optional[int]:
        """
        다음에 실행할 pid 선택 (하위 클래스에서 구현)

        Returns:
            선택된 pid 또는 None
        """
        raise NotImplementedError("Subclasses must implement select_next_process()")

    def is_simulation_complete(self) -> bool:
        """시뮬레이션 완료 여부 확인 (하위 클래스에서 구현)"""
        raise NotImplementedError("Subclasses must implement is_simulation_complete()")

    def update_statistics(self):
        """최종 통계 갱신"""
        finished = [p for p in self.state.table if p.is_finished()]
        self.stats.total_simulation_time = self.current_time
        self.stats.process_count = len(finished)
        self.stats.cpu_busy_time = sum(p.cpu_total - p.cpu_remaining for p in self.state.table)
        self.stats.total_waiting_time = sum(p.waiting_time for p in finished)
        self.stats.total_turnaround_time = sum(p.turnaround_time for p in finished)
        self.stats.total_response_time = sum(p.response_time for p in finished
                                             if p.response_time is not None)

    def get_current_snapshot(self) -> Dict:
        """
        현재 시뮬레이션 상태 스냅샷 (실시간 뷰어용)

        Returns:
            상태 딕셔너리
        """
        running = self.running_process
        return {
            'time': self.current_time,
            'running': running.pid if running and running.state == ProcessState.RUNNING else None,
            'ready_high': list(self.state.ready_high),
            'ready_low': list(self.state.ready_low),
            'devices': {q.name: list(q) for q in self.state.io.queues.values()},
            'finished': self.state.table.finished_count(),
            'total': self.config.population_size,
            'context_switches': self.stats.context_switches,
        }

    def run(self, verbose: bool = False) -> Dict:
        """
        스케줄링 시뮬레이션 실행

        Args:
            verbose: 실행 기록 출력 여부

        Returns:
            결과 딕셔너리
        """
        raise NotImplementedError("Subclasses must implement run()")

    def get_results(self) -> Dict:
        """
        시뮬레이션 결과

        Returns:
            결과 딕셔너리 (통계, 간트 차트, 이벤트 기록 등)
        """
        self.update_statistics()
        self.gantt_chart = build_gantt_chart(self.events, self.current_time)

        return {
            'algorithm': self.name,
            'seed': None,
            'final_clock': self.current_time,
            'statistics': self.stats.calculate_averages(),
            'gantt_chart': self.gantt_chart,
            'events': list(self.events),
            'event_log': self.event_log,
            'processes': self.processes
        }
