"""
두 준비 큐 (HIGH, LOW)를 사용하는 피드백 라운드 로빈
"""

from typing import Dict, Optional

from core.config import SimulationConfig
from core.events import EventType
from core.process import Priority
from core.process_table import generate_processes
from core.random_source import RandomSource, SystemRandomSource
from core.scheduler_base import BaseScheduler
from .dispatcher import Dispatcher, Outcome


class FeedbackScheduler(BaseScheduler):
    """
    다단계 피드백 큐 스케줄러
    - HIGH 큐를 항상 LOW 큐보다 먼저 처리
    - 퀀텀을 모두 사용한 프로세스는 LOW로 강등
    - I/O 완료: 디스크 -> LOW, 테이프/프린터 -> HIGH
    - 두 준비 큐가 모두 비어 있으면 CPU는 유휴 상태이고 장치만 진행
    """

    def __init__(self, config: Optional[SimulationConfig] = None,
                 rng: Optional[RandomSource] = None,
                 name: str = "MLFQ (Round Robin with Feedback)"):
        config = config if config is not None else SimulationConfig()
        super().__init__(config, name)
        self.rng = rng if rng is not None else SystemRandomSource(config.seed)
        self.dispatcher = Dispatcher(self.state, self.rng)
        self.finished = 0
        self.idle_ticks = 0
        self._generated = False
        self._completed = False

    @property
    def seed(self) -> Optional[int]:
        return getattr(self.rng, 'seed', None)

    def generate(self):
        """프로세스 생성 (한 번만)"""
        if self._generated:
            raise RuntimeError("Process population has already been generated")
        generate_processes(self.state, self.rng)
        self._generated = True

    def select_next_process(self) -> Optional[int]:
        """HIGH 큐 먼저, 그 다음 LOW 큐"""
        if not self.state.ready_high.is_empty():
            return self.state.ready_high.pop()
        if not self.state.ready_low.is_empty():
            return self.state.ready_low.pop()
        return None

    def idle_tick(self):
        """실행 가능한 프로세스 없음: 시계와 장치만 진행"""
        self.state.table.advance_clock()
        self.state.io.tick()
        self.idle_ticks += 1

    def step(self) -> bool:
        """
        스케줄러 한 단계 실행 (실시간 뷰어용)

        Returns:
            시뮬레이션 완료 여부
        """
        if not self._generated:
            self.generate()
        if self.is_simulation_complete():
            return True

        pid = self.select_next_process()
        if pid is None:
            self.idle_tick()
            return False

        process = self.state.table.get(pid)
        self.record_dispatch(process)
        outcome = self.dispatcher.execute_quantum(pid)

        if outcome == Outcome.DONE:
            self.finished += 1
        elif outcome == Outcome.PREEMPTED:
            process.priority = Priority.LOW
            self.state.enqueue(self.state.ready_low, pid)
            self.log_event(EventType.PREEMPTED, pid, cpu_remaining=process.cpu_remaining)
        # Outcome.BLOCKED: 이미 장치 큐에 있음

        self.running_process = None
        return self.is_simulation_complete()

    def is_simulation_complete(self) -> bool:
        return self.finished >= self.config.population_size

    def run(self, verbose: bool = False) -> Dict:
        """모든 프로세스가 FINISHED가 될 때까지 실행"""
        while not self.step():
            pass

        if not self._completed:
            self.log_event(EventType.SIMULATION_COMPLETE,
                           final_clock=self.current_time,
                           process_count=self.config.population_size)
            self._completed = True

        if verbose:
            for line in self.event_log:
                print(line)

        results = self.get_results()
        results['seed'] = self.seed
        return results
