"""drone-webhook command line.

`run` delivers the build notification; `render` prints the payload that
would be delivered. Both read the plugin input document from the argument,
`--input` or stdin.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import httpx
import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.http_client import build_client
from cli.ui_components import build_outcomes_table, print_error, print_record, print_warning
from core.config import load_settings
from core.domain.errors import WebhookError
from core.domain.outcome import FailurePolicy
from core.plugin_input import read_plugin_input
from core.services.dispatcher import DispatchHooks
from core.services.notifier import notify
from core.services.payload_builder import build_payload
from core.services.reporter import format_record

app = typer.Typer(
    no_args_is_help=True,
    add_completion=False,
    help="Send CI build notifications to one or more webhooks.",
)

_console = Console()


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=_console, show_path=False, show_time=False)],
        force=True,
    )
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def _fail(exc: WebhookError) -> NoReturn:
    print_error(_console, str(exc))
    raise typer.Exit(code=1)


def _make_hooks(debug: bool) -> DispatchHooks:
    def report(index: int, request: httpx.Request, response: httpx.Response, body: str | None) -> None:
        record = format_record(index, request, response, body, debug)
        if record:
            print_record(_console, record, failed=response.status_code >= 400)

    return DispatchHooks(report=report, warning=lambda message: print_warning(_console, message))


@app.command("run")
def run_command(
    payload: Optional[str] = typer.Argument(None, help="Plugin input JSON (default: --input or stdin)."),
    input_path: Optional[Path] = typer.Option(None, "--input", "-i", help="Read the plugin input from a file."),
    debug: bool = typer.Option(False, "--debug", "-d", help="Report every request, not only failures."),
    continue_on_error: bool = typer.Option(
        False,
        "--continue-on-error",
        help="Keep going after a URL fails; exit 1 at the end.",
    ),
) -> None:
    """Deliver the build notification to every configured URL."""

    try:
        settings = load_settings()
        plugin = read_plugin_input(payload, path=input_path)
    except WebhookError as exc:
        _fail(exc)

    config = plugin.vargs
    if debug:
        config = config.model_copy(update={"debug": True})
    _configure_logging(config.debug)

    policy = FailurePolicy.from_bool(continue_on_error or settings.continue_on_error)

    with build_client(settings) as client:
        try:
            result = notify(
                plugin.to_context(),
                config,
                client=client,
                policy=policy,
                hooks=_make_hooks(config.debug),
            )
        except WebhookError as exc:
            _fail(exc)

    if result.failed:
        _console.print(build_outcomes_table(result.outcomes))
        raise typer.Exit(code=1)


@app.command("render")
def render_command(
    payload: Optional[str] = typer.Argument(None, help="Plugin input JSON (default: --input or stdin)."),
    input_path: Optional[Path] = typer.Option(None, "--input", "-i", help="Read the plugin input from a file."),
) -> None:
    """Print the payload without sending it."""

    try:
        settings = load_settings()
        plugin = read_plugin_input(payload, path=input_path)
        with build_client(settings) as client:
            body = build_payload(plugin.to_context(), plugin.vargs.template, client=client)
    except WebhookError as exc:
        _fail(exc)

    typer.echo(body.decode("utf-8", errors="replace"), nl=False)


def run() -> None:
    app(prog_name="drone-webhook")
