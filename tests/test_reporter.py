import httpx

from core.services.reporter import format_headers, format_record, status_line


def _exchange(status, body="", content=b'{"build":{"number":42}}\n'):
    request = httpx.Request(
        "POST",
        "http://hooks.test/notify",
        content=content,
        headers={"Content-Type": "application/json", "X-Token": "abc"},
    )
    response = httpx.Response(status, request=request, text=body)
    return request, response


def test_summary_record_for_error_status():
    request, response = _exchange(404, "no such hook")
    record = format_record(2, request, response, "no such hook", debug=False)

    assert record == (
        "[info] Webhook 2\n"
        "  URL: http://hooks.test/notify\n"
        "  RESPONSE STATUS: 404 Not Found\n"
        "  RESPONSE BODY: no such hook\n"
    )


def test_no_record_for_success_without_debug():
    request, response = _exchange(200, "ok")
    assert format_record(1, request, response, None, debug=False) is None


def test_verbose_record_in_debug():
    request, response = _exchange(200, "ok")
    record = format_record(1, request, response, "ok", debug=True)

    assert record.startswith("[debug] Webhook 1\n")
    assert "  URL: http://hooks.test/notify\n" in record
    assert "  METHOD: POST\n" in record
    assert "Content-Type: application/json" in record
    assert "X-Token: abc" in record
    assert '  REQUEST BODY: {"build":{"number":42}}\n' in record
    assert "  RESPONSE STATUS: 200 OK\n" in record
    assert record.endswith("  RESPONSE BODY: ok\n")


def test_missing_body_reported_as_empty():
    request, response = _exchange(500)
    record = format_record(3, request, response, None, debug=False)
    assert record.endswith("  RESPONSE BODY: \n")


def test_status_line_and_headers():
    request, response = _exchange(503)
    assert status_line(response) == "503 Service Unavailable"
    assert format_headers(httpx.Headers({"A": "1", "b": "2"})) == "{A: 1, b: 2}"
