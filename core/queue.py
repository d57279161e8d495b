"""
프로세스 ID 원형 큐 (고정 크기 FIFO)
"""

from typing import Iterator, List, Optional


class ProcessQueue:
    """
    pid만 저장하는 고정 크기 원형 큐
    PCB 상태는 항상 ProcessTable에 있음
    """

    def __init__(self, name: str, capacity: int):
        if capacity <= 0:
            raise ValueError(f"Queue capacity must be positive: {capacity}")
        self.name = name
        self.capacity = capacity
        self._slots: List[Optional[int]] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._count = 0

    def push(self, pid: int) -> bool:
        """pid를 뒤에 추가. 가득 차 있으면 저장하지 않고 False 반환"""
        if self.is_full():
            return False
        self._slots[self._tail] = pid
        self._tail = (self._tail + 1) % self.capacity
        self._count += 1
        return True

    def pop(self) -> Optional[int]:
        """맨 앞 pid를 꺼내 반환, 비어 있으면 None"""
        if self.is_empty():
            return None
        pid = self._slots[self._head]
        self._slots[self._head] = None
        self._head = (self._head + 1) % self.capacity
        self._count -= 1
        return pid

    def is_empty(self) -> bool:
        return self._count == 0

    def is_full(self) -> bool:
        return self._count == self.capacity

    def __len__(self):
        return self._count

    def __iter__(self) -> Iterator[int]:
        # 앞에서부터 순회 (제거하지 않음)
        for i in range(self._count):
            yield self._slots[(self._head + i) % self.capacity]

    def __contains__(self, pid: int) -> bool:
        return any(p == pid for p in self)

    def __repr__(self):
        return f"ProcessQueue({self.name!r}, {list(self)})"
