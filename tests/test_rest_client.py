import logging
import threading
import time

import pytest

from restkit.errors import RestcError
from restkit.rest_client import ClientProperties, Context, RestClient


def test_default_content_type_is_json():
    client = RestClient.create_use_own_thread()
    headers = client.connection_properties().headers
    assert headers["Content-Type"] == "application/json; charset=utf-8"


def test_existing_content_type_is_kept():
    props = ClientProperties(headers={"Content-Type": "text/plain"})
    client = RestClient.create_use_own_thread(props)
    assert client.connection_properties().headers == {"Content-Type": "text/plain"}


def test_properties_are_copied():
    props = ClientProperties(headers={"X-Test": "1"})
    client = RestClient.create_use_own_thread(props)
    props.headers["X-Test"] = "2"
    assert client.connection_properties().headers["X-Test"] == "1"
    assert "Content-Type" not in props.headers


def test_process_with_promise_returns_value_and_context():
    with RestClient.create() as client:
        future = client.process_with_promise(lambda ctx: (ctx.client, 42))
        got_client, value = future.result(timeout=5)
    assert got_client is client
    assert value == 42


def test_process_with_promise_propagates_exception():
    def fail(ctx):
        raise KeyError("missing")

    with RestClient.create() as client:
        future = client.process_with_promise(fail)
        with pytest.raises(KeyError):
            future.result(timeout=5)


def test_process_runs_function():
    done = threading.Event()
    seen = []
    with RestClient.create() as client:
        client.process(lambda ctx: (seen.append(isinstance(ctx, Context)), done.set()))
        assert done.wait(5)
    assert seen == [True]


def test_process_error_is_logged_and_worker_survives(caplog):
    def fail(ctx):
        raise RuntimeError("boom")

    with caplog.at_level(logging.ERROR, logger="restkit.rest_client"):
        with RestClient.create() as client:
            client.process(fail)
            future = client.process_with_promise(lambda ctx: "ok")
            assert future.result(timeout=5) == "ok"
    assert any("boom" in record.getMessage() for record in caplog.records)


def test_close_marks_closing_and_rejects_work():
    client = RestClient.create()
    assert client.is_closing() is False
    client.close_when_ready()
    assert client.is_closing() is True
    with pytest.raises(RestcError):
        client.process(lambda ctx: None)


def test_context_manager_closes_client():
    with RestClient.create() as client:
        future = client.process_with_promise(lambda ctx: "done")
    assert future.result(timeout=5) == "done"
    assert client.is_closing() is True


def test_main_thread_mode_runs_only_on_run():
    client = RestClient.create_use_own_thread()
    results = []
    future = client.process_with_promise(lambda ctx: results.append("a") or "a")
    client.process(lambda ctx: results.append("b"))
    assert results == []
    assert future.done() is False
    assert client.run() == 2
    assert results == ["a", "b"]
    assert future.result() == "a"


def test_work_in_flight_may_queue_more_after_close():
    client = RestClient.create_use_own_thread()
    outer = client.process_with_promise(
        lambda ctx: ctx.client.process_with_promise(lambda inner_ctx: "inner")
    )
    client.close_when_ready(wait=False)
    assert client.is_closing() is True
    assert client.run() == 2
    assert outer.result().result() == "inner"
    with pytest.raises(RestcError):
        client.process(lambda ctx: None)


def test_multiple_threads_run_concurrently():
    barrier = threading.Barrier(4, timeout=5)
    props = ClientProperties(threads=4)
    with RestClient.create(props) as client:
        futures = [
            client.process_with_promise(lambda ctx, i=i: (barrier.wait(), i)[1])
            for i in range(4)
        ]
        results = sorted(f.result(timeout=5) for f in futures)
    assert results == [0, 1, 2, 3]


def test_zero_threads_rejected():
    with pytest.raises(ValueError):
        RestClient.create(ClientProperties(threads=0))


def test_context_sleep_pauses():
    with RestClient.create() as client:
        def sleeper(ctx):
            start = time.monotonic()
            ctx.sleep(0.05)
            return time.monotonic() - start

        elapsed = client.process_with_promise(sleeper).result(timeout=5)
    assert elapsed >= 0.05