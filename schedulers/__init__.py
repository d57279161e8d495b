"""
CPU 스케줄링 알고리즘
"""

from .dispatcher import Dispatcher, Outcome
from .feedback_scheduler import FeedbackScheduler

__all__ = [
    'Dispatcher',
    'Outcome',
    'FeedbackScheduler'
]
