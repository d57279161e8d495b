"""
MLFQ 스케줄러 시뮬레이터 핵심 모듈
"""

from .process import Process, ProcessState, Priority, IOKind
from .queue import ProcessQueue
from .config import SimulationConfig
from .events import Event, EventLog, EventType
from .random_source import RandomSource, SystemRandomSource
from .process_table import ProcessTable, generate_processes
from .io_subsystem import IOSubsystem, DEVICE_ORDER
from .state import SimulationState
from .scheduler_base import BaseScheduler, SchedulerStats, GanttEntry, build_gantt_chart

__all__ = [
    'Process',
    'ProcessState',
    'Priority',
    'IOKind',
    'ProcessQueue',
    'SimulationConfig',
    'Event',
    'EventLog',
    'EventType',
    'RandomSource',
    'SystemRandomSource',
    'ProcessTable',
    'generate_processes',
    'IOSubsystem',
    'DEVICE_ORDER',
    'SimulationState',
    'BaseScheduler',
    'SchedulerStats',
    'GanttEntry',
    'build_gantt_chart'
]
