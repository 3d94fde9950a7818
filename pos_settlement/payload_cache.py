"""Keyed cache of rendered payment payload images.

Each (channel, payload) key is rendered by its own asyncio task. Tasks only
ever write their own slot, so no locking is needed, and nothing is
cancelled: a result for a channel the user already left is simply cached
until they come back.
"""

import asyncio
from typing import Optional

import structlog

from .errors import RenderError
from .models import PaymentPayload
from .rendering import DEFAULT_SIZE_HINT, QrRenderer

logger = structlog.get_logger()

CacheKey = tuple[str, str]  # (channel, payload)


class PayloadCache:
    def __init__(self, renderer: QrRenderer, size_hint: int = DEFAULT_SIZE_HINT):
        self._renderer = renderer
        self._size_hint = size_hint
        self._slots: dict[CacheKey, PaymentPayload] = {}
        self._tasks: dict[CacheKey, asyncio.Task] = {}

    def get(self, channel: str, payload: str) -> Optional[PaymentPayload]:
        return self._slots.get((channel, payload))

    def in_flight(self) -> int:
        return sum(1 for task in self._tasks.values() if not task.done())

    def schedule(self, channel: str, payload: str) -> Optional[asyncio.Task]:
        """Start rendering ``payload`` unless it is cached or already running.

        Returns the task when one is running on the current loop. Without a
        running loop the render happens inline and ``None`` is returned.
        A slot whose earlier render failed is attempted again.
        """
        if not payload:
            return None
        key = (channel, payload)
        slot = self._slots.get(key)
        if slot is not None and slot.has_image():
            return None
        task = self._tasks.get(key)
        if task is not None and not task.done():
            return task

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self._store(channel, payload, self._render_inline(channel, payload))
            return None

        task = loop.create_task(self._generate(channel, payload))
        self._tasks[key] = task
        return task

    async def wait(self, channel: str, payload: str) -> Optional[PaymentPayload]:
        task = self._tasks.get((channel, payload))
        if task is not None:
            await task
        return self.get(channel, payload)

    async def drain(self) -> None:
        """Wait for every in-flight render."""
        pending = [task for task in self._tasks.values() if not task.done()]
        if pending:
            await asyncio.gather(*pending)

    async def _generate(self, channel: str, payload: str) -> PaymentPayload:
        try:
            image = await asyncio.to_thread(self._renderer.render, payload, self._size_hint)
        except RenderError as e:
            logger.warning("payload_render_failed", channel=channel, error=str(e))
            image = None
        slot = self._store(channel, payload, image)
        self._tasks.pop((channel, payload), None)
        return slot

    def _render_inline(self, channel: str, payload: str) -> Optional[bytes]:
        try:
            return self._renderer.render(payload, self._size_hint)
        except RenderError as e:
            logger.warning("payload_render_failed", channel=channel, error=str(e))
            return None

    def _store(self, channel: str, payload: str, image: Optional[bytes]) -> PaymentPayload:
        slot = PaymentPayload(channel=channel, payload=payload, image=image)
        self._slots[slot.key] = slot
        logger.debug("payload_cached", channel=channel, has_image=image is not None)
        return slot
