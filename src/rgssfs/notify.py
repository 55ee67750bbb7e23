#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
变更通知合并器

连续的多次修改会在短暂延迟后合并为一次通知。
合并器只有两个状态:

- 空闲: 没有待发送的事件
- 等待: 有待发送的事件和一个截止时间

时间由注入的 clock 提供，宿主在自己的事件循环里调用 poll()，
测试中则可以注入假时钟得到确定的结果。
"""

import logging
import time
from typing import Callable, List, Optional

from .core.schema import Disposable, FileChangeEvent

logger = logging.getLogger(__name__)

Listener = Callable[[List[FileChangeEvent]], None]


class ChangeBatcher:
    """
    变更通知合并器

    用法:
        batcher = ChangeBatcher(delay=0.005)
        handle = batcher.subscribe(print)
        batcher.fire_soon(event_a, event_b)
        batcher.poll()  # 截止时间之后调用才会发送
    """

    def __init__(self, delay: float = 0.005, clock: Callable[[], float] = time.monotonic):
        """
        Args:
            delay: 合并延迟 (秒)
            clock: 单调时钟
        """
        self._delay = delay
        self._clock = clock
        self._pending: List[FileChangeEvent] = []
        self._deadline: Optional[float] = None
        self._listeners: List[Listener] = []

    @property
    def pending(self) -> List[FileChangeEvent]:
        """待发送事件的副本"""
        return list(self._pending)

    @property
    def deadline(self) -> Optional[float]:
        """截止时间，空闲时为 None"""
        return self._deadline

    @property
    def is_pending(self) -> bool:
        return self._deadline is not None

    def subscribe(self, listener: Listener) -> Disposable:
        """订阅批量事件，返回用于取消订阅的句柄"""
        self._listeners.append(listener)

        def _remove():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Disposable(_remove)

    def fire_soon(self, *events: FileChangeEvent) -> None:
        """
        追加事件并重置计时

        与上一条待发送事件完全相同的事件会被丢弃。
        """
        if not events:
            return
        for event in events:
            if self._pending and self._pending[-1] == event:
                continue
            self._pending.append(event)
        self._deadline = self._clock() + self._delay

    def poll(self) -> bool:
        """
        截止时间已过则发送全部待发送事件

        Returns:
            是否发送了一批事件
        """
        if self._deadline is None or self._clock() < self._deadline:
            return False
        self.flush()
        return True

    def flush(self) -> List[FileChangeEvent]:
        """立即发送全部待发送事件并回到空闲状态"""
        batch, self._pending = self._pending, []
        self._deadline = None
        if batch:
            logger.debug("发送 %d 条变更通知", len(batch))
            for listener in list(self._listeners):
                listener(batch)
        return batch
