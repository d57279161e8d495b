import pytest

from core.config import SimulationConfig
from core.events import EventType
from core.process import Priority, ProcessState
from core.random_source import SystemRandomSource
from core.scheduler_base import IDLE_PID
from schedulers.feedback_scheduler import FeedbackScheduler


def _summary(events, event_type):
    return [(e.time, e.pid, e.data) for e in events if e.event_type == event_type]


def test_single_process_without_io():
    config = SimulationConfig(population_size=1, quantum=3, cpu_min=5, cpu_max=5,
                              io_chance_pct=0, seed=1)
    result = FeedbackScheduler(config).run()

    events = result['events']
    assert _summary(events, EventType.DISPATCHED) == [
        (0, 0, {'cpu_remaining': 5, 'priority': 'HIGH'}),
        (3, 0, {'cpu_remaining': 2, 'priority': 'LOW'}),
    ]
    assert _summary(events, EventType.PREEMPTED) == [(3, 0, {'cpu_remaining': 2})]
    assert _summary(events, EventType.FINISHED) == [(5, 0, {})]
    assert result['final_clock'] == 5
    assert events[-1].event_type == EventType.SIMULATION_COMPLETE
    assert events[-1].data == {'final_clock': 5, 'process_count': 1}


def test_disk_io_on_first_tick(scripted):
    config = SimulationConfig(population_size=1, cpu_min=1, cpu_max=10)
    rng = scripted(values=[5, 1, 3], triggers=[True])
    scheduler = FeedbackScheduler(config, rng=rng)
    result = scheduler.run()
    events = result['events']

    assert _summary(events, EventType.IO_REQUESTED) == [(1, 0, {'device': 'Disk', 'duration': 3})]
    assert _summary(events, EventType.IO_COMPLETED) == [(4, 0, {'device': 'Disk', 'queue': 'LOW'})]
    dispatches = _summary(events, EventType.DISPATCHED)
    assert dispatches[1] == (4, 0, {'cpu_remaining': 4, 'priority': 'LOW'})

    assert scheduler.idle_ticks == 3
    idle = [(g.start_time, g.end_time) for g in result['gantt_chart'] if g.pid == IDLE_PID]
    assert idle == [(1, 4)]

    process = result['processes'][0]
    assert process.io_time == 3
    assert process.finish_time == 8
    assert process.waiting_time == 0
    assert result['final_clock'] == 8


def test_short_process_finishes_while_long_one_cycles(scripted):
    config = SimulationConfig(population_size=2, cpu_min=1, cpu_max=100, io_chance_pct=0)
    scheduler = FeedbackScheduler(config, rng=scripted(values=[1, 100]))

    seen = {}

    def on_event(event):
        if event.event_type == EventType.FINISHED and event.pid == 0:
            long_one = scheduler.state.table.get(1)
            seen['long_state'] = long_one.state
            seen['finished'] = scheduler.finished

    scheduler.state.events.subscribe(on_event)
    result = scheduler.run()

    assert seen['long_state'] == ProcessState.READY
    assert seen['finished'] == 0
    assert scheduler.finished == 2
    assert [e.pid for e in result['events'] if e.event_type == EventType.FINISHED] == [0, 1]
    assert result['final_clock'] == 101
    assert scheduler.state.table.get(1).dispatch_count == 34
    assert result['statistics']['context_switches'] == 1


def test_population_starts_on_high_queue():
    scheduler = FeedbackScheduler(SimulationConfig(seed=3))
    scheduler.generate()

    assert list(scheduler.state.ready_high) == list(range(8))
    created = [e for e in scheduler.events if e.event_type == EventType.PROCESS_CREATED]
    assert [e.data['parent_pid'] for e in created] == [None] + [0] * 7
    for process in scheduler.processes:
        assert 8 <= process.cpu_total <= 25
        assert process.cpu_remaining == process.cpu_total
        assert process.priority == Priority.HIGH
        assert process.state == ProcessState.READY

    with pytest.raises(RuntimeError):
        scheduler.generate()


def test_preemption_demotes_even_after_tape_promotion(scripted):
    # P0: tape I/O on its first tick, then runs full quanta
    config = SimulationConfig(population_size=1, cpu_min=1, cpu_max=20)
    rng = scripted(values=[10, 2, 4], triggers=[True])
    result = FeedbackScheduler(config, rng=rng).run()

    dispatches = _summary(result['events'], EventType.DISPATCHED)
    assert dispatches[1][2]['priority'] == 'HIGH'
    assert all(d[2]['priority'] == 'LOW' for d in dispatches[2:])


@pytest.mark.parametrize("seed", range(1, 21))
def test_invariants_hold_at_every_event(seed, invariants):
    config = SimulationConfig(seed=seed)
    scheduler = FeedbackScheduler(config)
    state = scheduler.state
    last_remaining = {}
    last_priority = {}

    def on_event(event):
        invariants(state)
        for process in state.table:
            previous = last_remaining.get(process.pid, process.cpu_total)
            assert process.cpu_remaining <= previous
            last_remaining[process.pid] = process.cpu_remaining

            if process.pid in last_priority and last_priority[process.pid] != process.priority:
                assert event.pid == process.pid
                assert event.event_type in (EventType.PREEMPTED, EventType.IO_COMPLETED)
            last_priority[process.pid] = process.priority

    state.events.subscribe(on_event)
    result = scheduler.run()

    assert all(p.state == ProcessState.FINISHED for p in result['processes'])
    assert len([e for e in result['events'] if e.event_type == EventType.FINISHED]) == 8
    assert state.events.of_type(EventType.QUEUE_OVERFLOW) == []


@pytest.mark.parametrize("seed", range(1, 11))
@pytest.mark.parametrize("options", [
    {'quantum': 1},
    {'io_chance_pct': 100, 'population_size': 5},
    {'population_size': 1, 'cpu_min': 1, 'cpu_max': 1},
    {'quantum': 10, 'io_chance_pct': 50, 'disk_min': 1, 'disk_max': 1},
])
def test_terminates(seed, options):
    config = SimulationConfig(seed=seed, **options)
    result = FeedbackScheduler(config).run()

    total_cpu = sum(p.cpu_total for p in result['processes'])
    assert result['final_clock'] >= total_cpu
    assert result['statistics']['final_clock'] == result['final_clock']


def test_same_seed_same_transcript():
    config = SimulationConfig(seed=42)
    first = FeedbackScheduler(config).run()
    second = FeedbackScheduler(config).run()

    assert first['events'] == second['events']
    assert first['event_log'] == second['event_log']
    assert first['final_clock'] == second['final_clock']


def test_time_based_seed_is_reported():
    scheduler = FeedbackScheduler(SimulationConfig(population_size=2))
    result = scheduler.run()
    assert result['seed'] > 0

    replay = FeedbackScheduler(SimulationConfig(population_size=2, seed=result['seed'])).run()
    assert replay['event_log'] == result['event_log']


def test_statistics():
    config = SimulationConfig(seed=7)
    scheduler = FeedbackScheduler(config, rng=SystemRandomSource(7))
    result = scheduler.run()
    stats = result['statistics']
    processes = result['processes']

    busy = sum(p.cpu_total for p in processes)
    assert stats['cpu_utilization'] == pytest.approx(busy / result['final_clock'] * 100)
    assert stats['idle_time'] == scheduler.idle_ticks
    assert stats['avg_turnaround_time'] == pytest.approx(
        sum(p.finish_time for p in processes) / len(processes))
    assert all(p.waiting_time >= 0 for p in processes)


def test_gantt_covers_the_whole_run():
    result = FeedbackScheduler(SimulationConfig(seed=11)).run()
    cpu_rows = sorted((g.start_time, g.end_time) for g in result['gantt_chart']
                      if g.state == ProcessState.RUNNING or g.pid == IDLE_PID)

    cursor = 0
    for start, end in cpu_rows:
        assert start == cursor
        cursor = end
    assert cursor == result['final_clock']


def test_step_and_snapshot():
    scheduler = FeedbackScheduler(SimulationConfig(seed=5, population_size=3))
    assert scheduler.step() is False

    snapshot = scheduler.get_current_snapshot()
    assert snapshot['time'] == scheduler.current_time
    assert snapshot['total'] == 3
    assert set(snapshot['devices']) == {'disk', 'tape', 'printer'}
    assert snapshot['running'] is None

    while not scheduler.step():
        pass
    assert scheduler.get_current_snapshot()['finished'] == 3
    assert scheduler.state.table.finished_count() == scheduler.finished == 3


def test_verbose_prints_transcript(capsys):
    config = SimulationConfig(population_size=1, cpu_min=2, cpu_max=2, io_chance_pct=0, seed=1)
    FeedbackScheduler(config).run(verbose=True)

    out = capsys.readouterr().out.splitlines()
    assert out == [
        "[t=00] Created P0 (PPID=-1, CPU=2) -> HIGH queue",
        "[t=00] RUNNING P0 (remaining=2, priority=HIGH)",
        "[t=02] P0 FINISHED",
        "=== DONE: all 1 processes finished at t=2 ===",
    ]


def test_run_twice_completes_once():
    scheduler = FeedbackScheduler(SimulationConfig(seed=9, population_size=3))
    first = scheduler.run()
    second = scheduler.run()

    completions = [e for e in scheduler.events if e.event_type == EventType.SIMULATION_COMPLETE]
    assert len(completions) == 1
    assert second['final_clock'] == first['final_clock']
    assert second['event_log'] == first['event_log']
