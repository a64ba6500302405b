import asyncio
from typing import Awaitable, Callable, Dict, List

import discord
from discord.ext import tasks

from .logging_setup import log

Job = Callable[[], Awaitable[None]]


class RefreshScheduler:
    """One repeating refresh loop per message, keyed by message id.

    Scheduling a message that already has a loop cancels the old one first,
    so pressing refresh repeatedly never stacks timers on the same message.
    """

    def __init__(self, interval_sec: float):
        if interval_sec <= 0:
            raise ValueError("interval_sec must be positive")
        self.interval_sec = interval_sec
        self._loops: Dict[int, tasks.Loop] = {}

    def __len__(self) -> int:
        return len(self._loops)

    def __contains__(self, message_id: int) -> bool:
        return message_id in self._loops

    @property
    def active(self) -> List[int]:
        return list(self._loops)

    def schedule(self, message_id: int, job: Job) -> tasks.Loop:
        self.cancel(message_id)

        async def tick():
            try:
                await job()
            except discord.NotFound:
                log.info(f"Message {message_id} is gone; stopping auto refresh")
                if self._loops.get(message_id) is loop:
                    del self._loops[message_id]
                loop.stop()
            except Exception:
                log.exception(f"Auto refresh failed for message {message_id}")

        async def wait_one_period():
            await asyncio.sleep(self.interval_sec)

        loop = tasks.loop(seconds=self.interval_sec)(tick)
        loop.before_loop(wait_one_period)
        self._loops[message_id] = loop
        loop.start()
        log.debug(f"Auto refresh every {self.interval_sec}s scheduled for message {message_id}")
        return loop

    def cancel(self, message_id: int) -> bool:
        loop = self._loops.pop(message_id, None)
        if loop is None: return False
        loop.cancel()
        log.debug(f"Auto refresh cancelled for message {message_id}")
        return True

    def cancel_all(self):
        for mid in list(self._loops):
            self.cancel(mid)
