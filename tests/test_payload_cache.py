"""Tests for the keyed payload image cache."""

import asyncio

from fixtures import RecordingRenderer
from pos_settlement.payload_cache import PayloadCache


class TestScheduleWithoutLoop:
    def test_renders_inline(self, renderer):
        cache = PayloadCache(renderer)
        assert cache.schedule("ewallet-dana", "dana://qr?phone=1") is None
        slot = cache.get("ewallet-dana", "dana://qr?phone=1")
        assert slot.image == b"PNG:dana://qr?phone=1"

    def test_cached_slot_not_rendered_again(self, renderer):
        cache = PayloadCache(renderer)
        cache.schedule("ewallet-dana", "dana://qr?phone=1")
        cache.schedule("ewallet-dana", "dana://qr?phone=1")
        assert renderer.calls == ["dana://qr?phone=1"]

    def test_empty_payload_is_ignored(self, renderer):
        cache = PayloadCache(renderer)
        assert cache.schedule("ewallet-dana", "") is None
        assert renderer.calls == []

    def test_render_error_degrades_to_text_only(self):
        renderer = RecordingRenderer(fail_on=("bad",))
        cache = PayloadCache(renderer)
        cache.schedule("transfer", "bad")
        slot = cache.get("transfer", "bad")
        assert slot.payload == "bad"
        assert slot.image is None

    def test_failed_slot_is_retried(self):
        renderer = RecordingRenderer(fail_on=("flaky",))
        cache = PayloadCache(renderer)
        cache.schedule("transfer", "flaky")
        renderer.fail_on = ()
        cache.schedule("transfer", "flaky")
        assert cache.get("transfer", "flaky").has_image()
        assert renderer.calls == ["flaky", "flaky"]


class TestScheduleOnLoop:
    def test_tasks_per_key_run_concurrently(self, renderer):
        cache = PayloadCache(renderer)
        keys = [
            ("ewallet-gopay", "gopay://qr?phone=1"),
            ("ewallet-ovo", "ovo://qr?phone=2"),
            ("ewallet-dana", "dana://qr?phone=3"),
        ]

        async def run():
            tasks = [cache.schedule(channel, payload) for channel, payload in keys]
            assert all(isinstance(t, asyncio.Task) for t in tasks)
            assert cache.in_flight() == 3
            await cache.drain()

        asyncio.run(run())
        assert cache.in_flight() == 0
        for channel, payload in keys:
            assert cache.get(channel, payload).image == b"PNG:" + payload.encode()

    def test_in_flight_key_is_not_duplicated(self, renderer):
        cache = PayloadCache(renderer)

        async def run():
            first = cache.schedule("ewallet-dana", "dana://qr?phone=3")
            second = cache.schedule("ewallet-dana", "dana://qr?phone=3")
            assert first is second
            return await cache.wait("ewallet-dana", "dana://qr?phone=3")

        slot = asyncio.run(run())
        assert slot.has_image()
        assert renderer.calls == ["dana://qr?phone=3"]

    def test_failure_in_task_does_not_propagate(self):
        renderer = RecordingRenderer(fail_on=("bad",))
        cache = PayloadCache(renderer)

        async def run():
            cache.schedule("transfer", "bad")
            cache.schedule("ewallet-ovo", "ovo://qr?phone=2")
            await cache.drain()

        asyncio.run(run())
        assert cache.get("transfer", "bad").image is None
        assert cache.get("ewallet-ovo", "ovo://qr?phone=2").has_image()

    def test_wait_on_unknown_key_returns_none(self, renderer):
        cache = PayloadCache(renderer)
        assert asyncio.run(cache.wait("transfer", "nothing")) is None
