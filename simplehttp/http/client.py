"""
Shared HTTP Client

Process-wide handle around the underlying engine: one requests session
(connection pool, TLS, redirects) and one worker pool for asynchronous
dispatch.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

import requests
from requests.adapters import BaseAdapter, HTTPAdapter
from urllib3 import HTTPHeaderDict

from simplehttp.config import ClientConfig, get_default_config
from simplehttp.schemas.request import RequestDescriptor

logger = logging.getLogger(__name__)

WORKER_THREAD_PREFIX = "simplehttp-worker"


class SharedClient:
    """
    Shared engine handle.

    Usage:
        client = SharedClient(ClientConfig(timeout=5.0))
        facade = RequestFacade(client)

    Session and worker pool are created on first use and live until
    ``close()``; the process-wide instance from ``get_shared_client()`` is
    never closed explicitly.
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        session: Optional[requests.Session] = None,
        executor: Optional[ThreadPoolExecutor] = None,
    ) -> None:
        """
        Initialize the shared client.

        Args:
            config: Engine configuration (defaults to ``get_default_config()``,
                which never reads the environment)
            session: Pre-built requests session to use instead of building one
            executor: Pre-built worker pool to use for asynchronous dispatch
        """
        self.config = config or get_default_config()
        self._session = session
        self._executor = executor
        self._lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        """Lazy-load requests session."""
        if self._session is None:
            with self._lock:
                if self._session is None:
                    self._session = self._build_session()
        return self._session

    @property
    def executor(self) -> ThreadPoolExecutor:
        """Lazy-load the worker pool."""
        if self._executor is None:
            with self._lock:
                if self._executor is None:
                    self._executor = ThreadPoolExecutor(
                        max_workers=self.config.max_workers,
                        thread_name_prefix=WORKER_THREAD_PREFIX,
                    )
        return self._executor

    def _build_session(self) -> requests.Session:
        session = requests.Session()
        adapter = HTTPAdapter(
            pool_connections=self.config.pool_connections,
            pool_maxsize=self.config.connection_pool_size,
        )
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        if self.config.user_agent:
            session.headers["User-Agent"] = self.config.user_agent
        if self.config.proxy:
            session.proxies = {
                "http": self.config.proxy,
                "https": self.config.proxy,
            }
        session.verify = self.config.verify_tls
        logger.debug(
            f"Built session (pool_connections={self.config.pool_connections}, "
            f"pool_maxsize={self.config.connection_pool_size})"
        )
        return session

    def mount(self, prefix: str, adapter: BaseAdapter) -> None:
        """Route URLs starting with ``prefix`` through ``adapter``."""
        self.session.mount(prefix, adapter)

    def prepare(self, descriptor: RequestDescriptor) -> requests.PreparedRequest:
        """
        Build the engine request for ``descriptor``.

        Session defaults (User-Agent, Accept, ...) are merged in, so the
        result is exactly what goes on the wire. The prepared headers are
        an ``HTTPHeaderDict`` holding one entry per caller value, which
        urllib3 writes as one header line each.
        """
        # Joined values only pass requests' header validation here
        headers = {name: descriptor.headers.joined(name) for name in descriptor.headers}
        request = requests.Request(
            method=descriptor.method.value,
            url=descriptor.url,
            headers=headers,
            data=descriptor.body,
        )
        prepared = self.session.prepare_request(request)
        # requests drops empty bodies; POST keeps its zero-length body
        if descriptor.body is not None and prepared.body is None:
            prepared.body = descriptor.body

        wire = HTTPHeaderDict()
        for name, value in prepared.headers.items():
            if name in descriptor.headers:
                for item in descriptor.headers.get_all(name):
                    wire.add(name, item)
            else:
                wire.add(name, value)
        prepared.headers = wire
        return prepared

    def send(self, prepared: requests.PreparedRequest) -> requests.Response:
        """
        Send a prepared request, blocking until the response head arrives.

        The body is left unread (``stream=True``) so the caller can tell a
        failed exchange from a failed body read.
        """
        settings = self.session.merge_environment_settings(
            prepared.url, {}, True, None, None
        )
        return self.session.send(
            prepared,
            timeout=self.config.request_timeout,
            allow_redirects=True,
            **settings,
        )

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Future:
        """Run ``fn`` on the worker pool."""
        return self.executor.submit(fn, *args, **kwargs)

    def close(self) -> None:
        """Close the session and shut the worker pool down."""
        with self._lock:
            executor, self._executor = self._executor, None
        # In-flight calls still need the session
        if executor is not None:
            executor.shutdown(wait=True)
        with self._lock:
            session, self._session = self._session, None
        if session is not None:
            session.close()

    def __enter__(self) -> "SharedClient":
        return self

    def __exit__(self, *args) -> None:
        self.close()


# Process-wide instance
_shared_client: Optional[SharedClient] = None
_shared_lock = threading.Lock()


def get_shared_client() -> SharedClient:
    """Get the process-wide client, creating it on first use."""
    global _shared_client
    if _shared_client is None:
        with _shared_lock:
            if _shared_client is None:
                _shared_client = SharedClient()
    return _shared_client


def set_shared_client(client: Optional[SharedClient]) -> None:
    """Replace the process-wide client (``None`` recreates it on next use)."""
    global _shared_client
    with _shared_lock:
        _shared_client = client
