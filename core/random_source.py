"""
시뮬레이션에서 사용하는 난수 생성기
"""

import random
import time
from typing import Protocol


class RandomSource(Protocol):
    def uniform(self, low: int, high: int) -> int:
        """[low, high] 구간의 균등 분포 정수"""
        ...

    def trigger_io(self, probability_pct: int) -> bool:
        """주어진 확률(%)로 True"""
        ...


class SystemRandomSource:
    """
    random.Random 기반 RandomSource
    시드가 0이면 현재 시간을 사용하고, 실제 시드를 `seed`에 저장해
    같은 실행을 재현할 수 있음
    """

    def __init__(self, seed: int = 0):
        self.seed = seed if seed else int(time.time())
        self._rng = random.Random(self.seed)

    def uniform(self, low: int, high: int) -> int:
        return self._rng.randint(low, high)

    def trigger_io(self, probability_pct: int) -> bool:
        return self._rng.randint(0, 99) < probability_pct
