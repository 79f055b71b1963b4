"""
In-process realtime feed of message inserts.
Listeners register per room; every stored message is fanned out to the matching
listeners, each notification running as its own asyncio task.
"""
import asyncio
import logging

from ..RealtimeEnums import RealtimeStatusEnums


class RealtimeChannel():

    def __init__(self, name: str = "public:messages"):
        self.name = name
        self.subscribed = False
        self._insert_listeners = []  # (room_id, callback)
        self._status_callbacks = []
        self._tasks = set()
        self.logger = logging.getLogger(__name__)

    def on_insert(self, room_id: str, callback):
        """Register an async callback for messages inserted into `room_id`."""
        self._insert_listeners.append((room_id, callback))
        return self

    def subscribe(self, status_callback=None):
        """Activate the channel; status callbacks receive SUBSCRIBED once."""
        if status_callback is not None:
            self._status_callbacks.append(status_callback)
        if self.subscribed:
            return self
        self.subscribed = True
        self.logger.debug("Channel %s subscribed (%d listeners)", self.name, len(self._insert_listeners))
        self._emit_status(RealtimeStatusEnums.SUBSCRIBED)
        return self

    def unsubscribe(self):
        if not self.subscribed:
            return
        self.subscribed = False
        self._emit_status(RealtimeStatusEnums.CLOSED)
        self._insert_listeners.clear()
        self._status_callbacks.clear()

    def publish(self, message) -> int:
        """Schedule delivery of an inserted message. Returns the number of listeners notified."""
        if not self.subscribed:
            return 0
        delivered = 0
        for room_id, callback in list(self._insert_listeners):
            if room_id != message.room_id:
                continue
            self._spawn(callback(message), f"insert:{message.message_id}")
            delivered += 1
        return delivered

    async def join(self):
        """Wait until every in-flight notification has finished, including ones they trigger."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _emit_status(self, status: RealtimeStatusEnums):
        for callback in list(self._status_callbacks):
            self._spawn(callback(status), f"status:{status.value}")

    def _spawn(self, coro, label: str):
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._on_task_done(t, label))

    def _on_task_done(self, task: asyncio.Task, label: str):
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            self.logger.error("Realtime callback %s on %s failed: %s", label, self.name, exc, exc_info=exc)
