import json

import httpx
import pytest
from typer.testing import CliRunner

from adapters.http_client import build_client
from cli import main as cli_main

from conftest import build_context_data

runner = CliRunner()


@pytest.fixture(autouse=True)
def mock_network(monkeypatch, recorder):
    def fake_build_client(settings=None):
        return build_client(settings, transport=httpx.MockTransport(recorder))

    monkeypatch.setattr(cli_main, "build_client", fake_build_client)
    monkeypatch.delenv("DRONE_WEBHOOK_CONTINUE_ON_ERROR", raising=False)


def _document(**vargs):
    doc = build_context_data()
    doc["vargs"] = vargs
    return json.dumps(doc)


def test_run_success_prints_nothing(recorder):
    result = runner.invoke(cli_main.app, ["run", _document(urls=["http://a.test/", "http://b.test/"])])

    assert result.exit_code == 0, result.output
    assert recorder.hosts == ["a.test", "b.test"]
    assert "Webhook" not in result.output


def test_run_reports_error_status_without_failing(recorder):
    recorder.routes["a.test"] = lambda request: httpx.Response(404, text="no such hook")
    result = runner.invoke(cli_main.app, ["run", _document(urls=["http://a.test/"])])

    assert result.exit_code == 0
    assert "[info] Webhook 1" in result.output
    assert "RESPONSE STATUS: 404 Not Found" in result.output
    assert "RESPONSE BODY: no such hook" in result.output


def test_run_debug_flag(recorder):
    result = runner.invoke(cli_main.app, ["run", "--debug", _document(urls=["http://a.test/"])])

    assert result.exit_code == 0
    assert "[debug] Webhook 1" in result.output
    assert "METHOD: POST" in result.output


def test_run_bad_url_exits_non_zero(recorder):
    doc = _document(urls=["http://a.test/", "not a url", "http://c.test/"])
    result = runner.invoke(cli_main.app, ["run", doc])

    assert result.exit_code == 1
    assert "Error parsing hook url." in result.output
    assert recorder.hosts == ["a.test"]


def test_run_transport_error_exits_non_zero(recorder):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    recorder.routes["a.test"] = refuse
    result = runner.invoke(cli_main.app, ["run", _document(urls=["http://a.test/", "http://b.test/"])])

    assert result.exit_code == 1
    assert "Error executing http request." in result.output
    assert recorder.hosts == ["a.test"]


def test_run_continue_on_error(recorder):
    doc = _document(urls=["ftp://a.test/", "http://b.test/"])
    result = runner.invoke(cli_main.app, ["run", "--continue-on-error", doc])

    assert result.exit_code == 1
    assert recorder.hosts == ["b.test"]
    assert "Error parsing hook url." in result.output


def test_run_reads_stdin(recorder):
    result = runner.invoke(cli_main.app, ["run"], input=_document(urls=["http://a.test/"]))

    assert result.exit_code == 0, result.output
    assert recorder.hosts == ["a.test"]


def test_run_template_error_sends_nothing(recorder):
    doc = _document(urls=["http://a.test/"], template="{{ Build.nope }}")
    result = runner.invoke(cli_main.app, ["run", doc])

    assert result.exit_code == 1
    assert "Error executing content template." in result.output
    assert recorder.requests == []


def test_run_invalid_document():
    result = runner.invoke(cli_main.app, ["run", "{broken"])

    assert result.exit_code == 1
    assert "Error parsing plugin parameters." in result.output


def test_render_prints_default_payload(recorder, tmp_path):
    path = tmp_path / "input.json"
    path.write_text(_document(urls=["http://a.test/"]), encoding="utf-8")
    result = runner.invoke(cli_main.app, ["render", "--input", str(path)])

    assert result.exit_code == 0, result.output
    assert list(json.loads(result.output)) == ["system", "repo", "build"]
    assert recorder.requests == []


def test_render_template():
    result = runner.invoke(cli_main.app, ["render", _document(template="build #{{ Build.number }}")])

    assert result.exit_code == 0
    assert result.output == "build #42"


def test_run_template_arithmetic_error(recorder):
    doc = _document(urls=["http://a.test/"], template="{{ Build.number / 0 }}")
    result = runner.invoke(cli_main.app, ["run", doc])

    assert result.exit_code == 1
    assert "Error executing content template." in result.output
    assert recorder.requests == []


def test_run_invalid_settings(monkeypatch, recorder):
    monkeypatch.setenv("DRONE_WEBHOOK_HTTP_TIMEOUT_SECONDS", "abc")
    result = runner.invoke(cli_main.app, ["run", _document(urls=["http://a.test/"])])

    assert result.exit_code == 1
    assert "Error loading settings." in result.output
    assert "Traceback" not in result.output
    assert recorder.requests == []
