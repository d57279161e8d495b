import matplotlib

matplotlib.use("Agg")

import pytest

from core.config import SimulationConfig
from core.process import Process, ProcessState
from core.state import SimulationState


class ScriptedRandomSource:
    """RandomSource replaying fixed values; falls back to `low` / no I/O when exhausted"""

    def __init__(self, values=(), triggers=()):
        self.values = list(values)
        self.triggers = list(triggers)
        self.uniform_calls = []
        self.trigger_calls = 0

    def uniform(self, low, high):
        self.uniform_calls.append((low, high))
        if not self.values:
            return low
        value = self.values.pop(0)
        assert low <= value <= high, f"scripted {value} outside [{low}, {high}]"
        return value

    def trigger_io(self, probability_pct):
        self.trigger_calls += 1
        if self.triggers:
            return self.triggers.pop(0)
        return False


@pytest.fixture
def scripted():
    return ScriptedRandomSource


@pytest.fixture
def make_state():
    """SimulationState with hand-made processes already in the table"""

    def _make(cpu_totals, **config):
        config.setdefault('population_size', max(len(cpu_totals), 1))
        state = SimulationState(SimulationConfig(**config))
        for pid, cpu in enumerate(cpu_totals):
            state.table.add(Process(pid, None if pid == 0 else 0, cpu))
        return state

    return _make


def check_invariants(state):
    """Queue membership and single-CPU invariants"""
    membership = state.membership()
    ready_names = {state.ready_high.name, state.ready_low.name}
    device_names = {q.name for q in state.io.queues.values()}

    running = [p for p in state.table if p.state == ProcessState.RUNNING]
    assert len(running) <= 1

    for process in state.table:
        queues = membership[process.pid]
        assert process.cpu_remaining >= 0
        assert process.io_remaining >= 0
        if process.state == ProcessState.READY:
            assert len(queues) == 1 and queues[0] in ready_names, (process, queues)
        elif process.state == ProcessState.BLOCKED:
            assert len(queues) == 1 and queues[0] in device_names, (process, queues)
        else:
            assert queues == [], (process, queues)
        if process.state == ProcessState.FINISHED:
            assert process.cpu_remaining == 0
        if process.cpu_remaining == 0:
            assert process.state in (ProcessState.RUNNING, ProcessState.FINISHED)


@pytest.fixture
def invariants():
    return check_invariants
