"""
유틸리티 모듈
"""

from .input_parser import InputParser
from .visualization import Visualizer

__all__ = ['InputParser', 'Visualizer']
