"""
CLI Request Commands

Issue a GET or POST through the facade and print the result.

Usage:
    simplehttp get URL [-H "Name: value"]... [--async] [--json] [--encoding ENC]
    simplehttp post URL (--data TEXT | --data-file PATH) [-H ...] [--async] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from argparse import Namespace
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

from simplehttp_cli import EXIT_HTTP_ERROR, EXIT_RUNTIME_ERROR, EXIT_SUCCESS
from simplehttp.http import FunctionCallback, RequestFacade, SharedClient
from simplehttp.schemas import HeaderMap, RequestBuildError, SimpleHttpException, SimpleResponse


logger = logging.getLogger(__name__)


@dataclass
class RequestSummary:
    """Outcome of one CLI request, for output."""
    method: str = ""
    url: str = ""
    status_code: Optional[int] = None
    body: str = ""
    sent_headers: dict[str, list[str]] = field(default_factory=dict)
    sent_body_length: Optional[int] = None
    error: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        for key in ("sent_headers", "sent_body_length", "error"):
            if not d[key] and d[key] != 0:
                del d[key]
        return d


def parse_header_args(values: Optional[list[str]]) -> HeaderMap:
    """Turn repeated ``-H "Name: value"`` arguments into a HeaderMap."""
    headers = HeaderMap()
    for raw in values or []:
        name, sep, value = raw.partition(":")
        if not sep or not name.strip():
            raise RequestBuildError(f"Malformed header (expected 'Name: value'): {raw!r}")
        headers.add(name.strip(), value.strip())
    return headers


def read_body_arg(args: Namespace) -> bytes:
    if getattr(args, "data_file", None):
        return Path(args.data_file).read_bytes()
    return (args.data or "").encode("utf-8")


def _run_async(
    facade: RequestFacade,
    method: str,
    url: str,
    headers: HeaderMap,
    body: Optional[bytes],
) -> tuple[RequestSummary, SimpleResponse]:
    """Dispatch on the worker pool and wait for the callback."""
    done = threading.Event()
    summary = RequestSummary(method=method, url=url)
    outcome: dict[str, Any] = {}

    def on_response(url, method, sent_headers, sent_body, response):
        outcome["response"] = response
        outcome["sent"] = (sent_headers, sent_body)
        done.set()

    def on_exception(url, method, sent_headers, sent_body, error):
        outcome["error"] = error
        outcome["sent"] = (sent_headers, sent_body)
        done.set()

    facade.request_async(url, method, headers, body, FunctionCallback(on_response, on_exception))
    done.wait()

    sent_headers, sent_body = outcome["sent"]
    summary.sent_headers = sent_headers.to_dict()
    summary.sent_body_length = len(sent_body) if sent_body is not None else None
    if "error" in outcome:
        raise outcome["error"]
    response = outcome["response"]
    summary.status_code = response.status_code
    return summary, response


def _print_summary(summary: RequestSummary, as_json: bool) -> None:
    if as_json:
        print(json.dumps(summary.to_dict(), indent=2))
        return
    if summary.error:
        print(f"Error [{summary.error['code']}]: {summary.error['message']}", file=sys.stderr)
        return
    print(f"HTTP {summary.status_code}", file=sys.stderr)
    for name, values in summary.sent_headers.items():
        for value in values:
            print(f"> {name}: {value}", file=sys.stderr)
    sys.stdout.write(summary.body)
    if summary.body and not summary.body.endswith("\n"):
        sys.stdout.write("\n")


def _request_cmd(args: Namespace, method: str, body: Optional[bytes]) -> int:
    client = SharedClient(args.client_config)
    facade = RequestFacade(client)
    summary = RequestSummary(method=method, url=args.url)

    try:
        headers = parse_header_args(args.header)
        if args.use_async:
            summary, response = _run_async(facade, method, args.url, headers, body)
        else:
            response = facade.request_sync(args.url, method, headers, body)
            summary.status_code = response.status_code
        summary.body = response.body_as_string(args.encoding)
    except SimpleHttpException as e:
        logger.debug(f"{method} {args.url} failed", exc_info=True)
        summary.error = e.to_error_model().model_dump()
        _print_summary(summary, args.json)
        return EXIT_RUNTIME_ERROR
    except UnicodeDecodeError as e:
        print(f"Error: response body is not valid {args.encoding or 'utf-8'}: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    finally:
        client.close()

    _print_summary(summary, args.json)
    return EXIT_SUCCESS if response.ok else EXIT_HTTP_ERROR


def get_cmd(args: Namespace) -> int:
    """Handle get command."""
    return _request_cmd(args, "GET", None)


def post_cmd(args: Namespace) -> int:
    """Handle post command."""
    return _request_cmd(args, "POST", read_body_arg(args))
