from __future__ import annotations

import logging
import threading
import time
from collections import deque
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, wait
from contextlib import closing
from typing import Callable, Deque, Iterator, List, Optional, Set, Tuple

from .errors import InvalidOptionError
from .models import PortProbeResult, ScanSummary, ScanTarget
from .prober import DEFAULT_TIMEOUT, probe, validate_timeout
from .services import service_name
from .targets import resolve_host

DEFAULT_WORKERS = 100
DEFAULT_PROGRESS_EVERY = 1000

Prober = Callable[[str, int, float], bool]
Resolver = Callable[[str], str]

log = logging.getLogger(__name__)


class ScanRun:
    """
    One pass over a target's port range.

    Iterating yields a PortProbeResult for every open port, in ascending
    port order, as soon as all lower ports have been probed. Once iteration
    stops (exhausted, cancelled, or aborted by an exception) ``summary`` is
    set. A run can only be iterated once; call scan() again to rescan.
    """

    def __init__(
        self,
        target: ScanTarget,
        address: str,
        prober: Prober,
        timeout: float,
        workers: int,
        progress_every: int = DEFAULT_PROGRESS_EVERY,
        started: Optional[float] = None,
    ):
        self.target = target
        self.address = address
        self.prober = prober
        self.timeout = timeout
        self.workers = workers
        self.progress_every = progress_every
        self.summary: Optional[ScanSummary] = None
        # perf_counter() reading to time from; scan() takes it before resolving the host
        self.started = started

        self._cancel = threading.Event()
        self._consumed = False
        self._scanned = 0
        self._open_count = 0

    @property
    def cancelled(self) -> bool:
        return self._cancel.is_set()

    def cancel(self) -> None:
        """Stop issuing probes. In-flight probes finish and are still reported."""
        self._cancel.set()

    def __iter__(self) -> Iterator[PortProbeResult]:
        if self._consumed:
            raise RuntimeError("ScanRun already consumed; call scan() again to rescan")
        self._consumed = True
        return self._run()

    def collect(self) -> Tuple[List[PortProbeResult], ScanSummary]:
        results = list(self)
        assert self.summary is not None
        return results, self.summary

    def _run(self) -> Iterator[PortProbeResult]:
        total = len(self.target.ports)
        start = self.started if self.started is not None else time.perf_counter()
        outcomes = self._probe_inline() if self.workers == 1 else self._probe_pooled()
        try:
            log.info(
                "Scanning %s (%s) ports %s with %d worker(s), timeout %.2fs",
                self.target.host, self.address, self.target.ports, self.workers, self.timeout,
            )
            with closing(outcomes):
                for port, is_open in outcomes:
                    self._scanned += 1
                    self._log_progress(total, start)
                    if is_open:
                        self._open_count += 1
                        log.debug("%s:%d open", self.address, port)
                        yield PortProbeResult(port=port, is_open=True, service=service_name(port))
        finally:
            self.summary = ScanSummary(
                open_port_count=self._open_count,
                elapsed_seconds=time.perf_counter() - start,
                ports_scanned=self._scanned,
                cancelled=self._scanned < total,
            )
            if self.summary.cancelled:
                log.warning("Scan stopped after %d/%d ports", self._scanned, total)

    def _log_progress(self, total: int, start: float) -> None:
        if self.progress_every <= 0:
            return
        if self._scanned % self.progress_every == 0 or self._scanned == total:
            elapsed = time.perf_counter() - start
            rate = self._scanned / elapsed if elapsed > 0 else 0.0
            log.info(
                "Scanned %d/%d | open=%d | %.0f probes/s",
                self._scanned, total, self._open_count, rate,
            )

    def _probe_inline(self) -> Iterator[Tuple[int, bool]]:
        for port in self.target.ports:
            if self.cancelled:
                return
            yield port, self.prober(self.address, port, self.timeout)

    def _probe_pooled(self) -> Iterator[Tuple[int, bool]]:
        """
        Bounded-futures pool: never more than max_pending probes queued, so a
        full 1-65535 range doesn't create 65k futures up front. Finished
        probes wait in ``in_order`` until every lower port is done.
        """
        ports = iter(self.target.ports)
        max_pending = max(self.workers * 4, 100)
        pending: Set[Future] = set()
        in_order: Deque[Tuple[int, Future]] = deque()

        pool = ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="portprobe")

        def submit_next() -> bool:
            if self.cancelled:
                return False
            try:
                port = next(ports)
            except StopIteration:
                return False
            fut = pool.submit(self.prober, self.address, port, self.timeout)
            pending.add(fut)
            in_order.append((port, fut))
            return True

        try:
            # Prime the queue
            while len(pending) < max_pending and submit_next():
                pass

            while pending:
                done, pending = wait(pending, return_when=FIRST_COMPLETED)

                if self.cancelled:
                    for fut in pending:
                        fut.cancel()
                else:
                    while len(pending) < max_pending and submit_next():
                        pass

                while in_order and in_order[0][1].done():
                    port, fut = in_order.popleft()
                    if fut.cancelled():
                        continue
                    yield port, fut.result()
        finally:
            pool.shutdown(wait=True, cancel_futures=True)


def scan(
    target: ScanTarget,
    timeout: float = DEFAULT_TIMEOUT,
    workers: int = DEFAULT_WORKERS,
    prober: Optional[Prober] = None,
    resolver: Optional[Resolver] = None,
    progress_every: int = DEFAULT_PROGRESS_EVERY,
) -> ScanRun:
    """
    Resolves the target host and returns a ScanRun ready to iterate.

    Resolution happens here, so an unresolvable host raises ResolutionError
    before a single probe is sent.
    """
    validate_timeout(timeout)
    if workers < 1:
        raise InvalidOptionError(f"Workers must be >= 1, got {workers}")
    if progress_every < 0:
        raise InvalidOptionError(f"Progress interval must be >= 0, got {progress_every}")

    started = time.perf_counter()
    address = (resolver or resolve_host)(target.host)
    return ScanRun(
        target=target,
        address=address,
        prober=prober or probe,
        timeout=timeout,
        workers=workers,
        progress_every=progress_every,
        started=started,
    )
