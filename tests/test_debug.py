import logging
from dataclasses import dataclass
from wsgiref.util import setup_testing_defaults

import pytest

from clue.debug import (
    _debug_scope,
    debug_context_enabled,
    debug_logs_enabled,
    log_payloads,
    mount_debug_log_enabler,
    set_debug_logs,
)
from clue.debug_options import (
    with_client,
    with_format,
    with_max_size,
    with_off_value,
    with_on_value,
    with_path,
    with_query,
)


class _Mux:
    def __init__(self):
        self.routes = {}

    def handle(self, pattern, handler):
        self.routes[pattern] = handler

    def handle_func(self, pattern, handler):
        self.routes[pattern] = handler

    def __call__(self, environ, start_response):
        handler = self.routes.get(environ["PATH_INFO"]) or self.routes.get("/")
        if handler is None:
            start_response("404 Not Found", [])
            return [b""]
        return handler(environ, start_response)


def _request(app, url):
    path, _, query = url.partition("?")
    environ = {}
    setup_testing_defaults(environ)
    environ["REQUEST_METHOD"] = "GET"
    environ["PATH_INFO"] = path
    environ["QUERY_STRING"] = query
    captured = {}

    def start_response(status, headers, exc_info=None):
        captured["status"] = status

    body = b"".join(app(environ, start_response))
    return int(captured["status"].split()[0]), body.decode()


@pytest.fixture(autouse=True)
def _reset_debug_logs():
    set_debug_logs(False)
    yield
    set_debug_logs(False)


@pytest.mark.parametrize(
    "prefix,query,onval,offval,url,expected",
    [
        ("", "", "", "", "/debug", '{"debug-logs":"off"}'),
        ("", "", "", "", "/debug?debug-logs=on", '{"debug-logs":"on"}'),
        ("", "", "", "", "/debug?debug-logs=off", '{"debug-logs":"off"}'),
        ("test", "", "", "", "/test", '{"debug-logs":"off"}'),
        ("test", "", "", "", "/test?debug-logs=on", '{"debug-logs":"on"}'),
        ("test", "", "", "", "/test?debug-logs=off", '{"debug-logs":"off"}'),
        ("", "debug", "", "", "/debug", '{"debug":"off"}'),
        ("", "debug", "", "", "/debug?debug=on", '{"debug":"on"}'),
        ("", "debug", "", "", "/debug?debug=off", '{"debug":"off"}'),
        ("", "", "foo", "", "/debug?debug-logs=foo", '{"debug-logs":"foo"}'),
        ("", "", "", "bar", "/debug?debug-logs=bar", '{"debug-logs":"bar"}'),
        ("test", "debug", "", "", "/test?debug=on", '{"debug":"on"}'),
        ("test", "debug", "", "", "/test?debug=off", '{"debug":"off"}'),
        ("test", "", "foo", "", "/test?debug-logs=foo", '{"debug-logs":"foo"}'),
        ("test", "", "", "bar", "/test?debug-logs=bar", '{"debug-logs":"bar"}'),
        ("test", "debug", "foo", "", "/test?debug=foo", '{"debug":"foo"}'),
        ("test", "debug", "", "bar", "/test?debug=bar", '{"debug":"bar"}'),
    ],
)
def test_mount_debug_log_enabler(prefix, query, onval, offval, url, expected):
    mux = _Mux()
    options = []
    if prefix:
        options.append(with_path(prefix))
    if query:
        options.append(with_query(query))
    if onval:
        options.append(with_on_value(onval))
    if offval:
        options.append(with_off_value(offval))
    mount_debug_log_enabler(mux, *options)

    status, body = _request(mux, url)

    assert status == 200
    assert body == expected


def test_enabler_toggles_global_flag():
    mux = _Mux()
    mount_debug_log_enabler(mux)
    _request(mux, "/debug?debug-logs=on")
    assert debug_logs_enabled() is True
    _request(mux, "/debug")
    assert debug_logs_enabled() is True
    _request(mux, "/debug?debug-logs=off")
    assert debug_logs_enabled() is False


def test_set_debug_logs_round_trip():
    set_debug_logs(True)
    assert debug_logs_enabled() is True
    set_debug_logs(False)
    assert debug_logs_enabled() is False


def test_debug_context_scope():
    assert debug_context_enabled() is False
    with _debug_scope(True):
        assert debug_context_enabled() is True
    assert debug_context_enabled() is False


@dataclass
class _Fields:
    S: str
    I: int


def _format_test(_value):
    return "test"


@pytest.mark.parametrize(
    "debug,option,error,expected_logs",
    [
        (False, None, None, []),
        (True, None, None, ['payload={"S":"test","I":1}', 'result={"S":"test","I":1}']),
        (False, None, "test error", []),
        (True, None, "test error", ['payload={"S":"test","I":1}']),
        (True, with_max_size(1), None, ["payload={", "result={"]),
        (True, with_format(_format_test), None, ["payload=test", "result=test"]),
        (
            True,
            with_client(),
            None,
            ['client-payload={"S":"test","I":1}', 'client-result={"S":"test","I":1}'],
        ),
    ],
)
def test_log_payloads(caplog, debug, option, error, expected_logs):
    caplog.set_level(logging.DEBUG, logger="clue.debug")
    payload = _Fields(S="test", I=1)

    def service(request):
        if error:
            raise RuntimeError(error)
        return request

    endpoint = log_payloads(option)(service)
    with _debug_scope(debug):
        if error:
            with pytest.raises(RuntimeError, match=error):
                endpoint(payload)
            result = None
        else:
            result = endpoint(payload)

    logs = [r.getMessage() for r in caplog.records if r.name == "clue.debug"]
    assert logs == expected_logs
    if not error:
        assert result == payload