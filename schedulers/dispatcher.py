"""
디스패처: 프로세스 하나를 최대 한 퀀텀 동안 실행
"""

from enum import Enum

from core.events import EventType
from core.io_subsystem import DEVICE_ORDER
from core.process import IOKind, ProcessState
from core.random_source import RandomSource
from core.state import SimulationState


class Outcome(Enum):
    """퀀텀 실행 결과"""
    DONE = "done"            # 프로세스 종료
    BLOCKED = "blocked"      # 장치 큐에서 대기 중
    PREEMPTED = "preempted"  # 퀀텀 소진, 호출한 쪽에서 다시 큐에 넣어야 함


class Dispatcher:
    """
    READY 상태 프로세스를 최대 `quantum` CPU 틱 동안 실행

    CPU 1틱마다 시계를 진행하고, CPU 요구량을 1 소모한 뒤
    모든 장치를 1틱 진행한다. 남은 작업이 있으면 난수로 I/O 요청 여부를
    결정하며, I/O를 요청하면 남은 퀀텀은 버린다.
    """

    def __init__(self, state: SimulationState, rng: RandomSource):
        self.state = state
        self.rng = rng

    def execute_quantum(self, pid: int) -> Outcome:
        """
        한 퀀텀 실행

        Args:
            pid: 실행할 READY 프로세스

        Returns:
            Outcome.DONE, Outcome.BLOCKED 또는 Outcome.PREEMPTED
        """
        state = self.state
        config = state.config
        process = state.table.get(pid)

        if process.state != ProcessState.READY:
            raise ValueError(f"P{pid} cannot be dispatched from state {process.state.value}")

        process.state = ProcessState.RUNNING
        process.dispatch_count += 1
        if process.first_run_time is None:
            process.first_run_time = state.clock
        state.events.emit(state.clock, EventType.DISPATCHED, pid,
                          cpu_remaining=process.cpu_remaining,
                          priority=process.priority.value)

        executed = 0
        while executed < config.quantum and process.cpu_remaining > 0:
            state.table.advance_clock()
            process.execute_tick()
            executed += 1

            # 장치는 CPU와 동시에 진행
            state.io.tick()

            if process.cpu_remaining > 0 and self.rng.trigger_io(config.io_chance_pct):
                kind = IOKind(self.rng.uniform(DEVICE_ORDER[0].value, DEVICE_ORDER[-1].value))
                duration = state.io.draw_duration(kind, self.rng)
                state.io.request(process, kind, duration)
                return Outcome.BLOCKED

        if process.cpu_remaining == 0:
            process.state = ProcessState.FINISHED
            process.finish_time = state.clock
            state.events.emit(state.clock, EventType.FINISHED, pid)
            return Outcome.DONE

        process.state = ProcessState.READY
        return Outcome.PREEMPTED
