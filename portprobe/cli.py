from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .errors import ScanError, UsageError
from .logger import setup_logging
from .models import PortProbeResult, ScanSummary, ScanTarget
from .output import SAVE_FORMATS, print_report, print_result, save_results
from .prober import DEFAULT_TIMEOUT
from .scanner import DEFAULT_WORKERS, scan

EXIT_INTERRUPTED = 130

USAGE = """Usage
=====
You will have to supply 3 things in this order:
{prog} [HOST] [START_PORT] [END_PORT]

Example:
=======
{prog} localhost 1 3500
"""

log = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    # argparse would print to stderr and exit 2; main() shows the usage text instead
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(prog="portprobe", description="TCP connect port scanner")
    p.add_argument("host", help="Hostname or IP address")
    p.add_argument("start_port", type=int, help="First port of the range (1-65535)")
    p.add_argument("end_port", type=int, help="Last port of the range, inclusive")
    p.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT,
                   help=f"Connect timeout seconds (default: {DEFAULT_TIMEOUT})")
    p.add_argument("--workers", type=int, default=DEFAULT_WORKERS,
                   help=f"Parallel probes; 1 scans sequentially (default: {DEFAULT_WORKERS})")
    p.add_argument("--save", choices=SAVE_FORMATS, help="Also save open ports to a file")
    p.add_argument("--out-dir", default="scans", help="Output directory for saved files")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v for progress, -vv for debug")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        print(USAGE.format(prog=parser.prog))
        return e.exit_code

    setup_logging(args.verbose)

    try:
        target = ScanTarget(args.host, args.start_port, args.end_port)
        run = scan(target, timeout=args.timeout, workers=args.workers)
    except ScanError as e:
        print(f"Error: {e.message}")
        return e.exit_code

    results: List[PortProbeResult] = []
    interrupted = False
    it = iter(run)
    try:
        for r in it:
            print_result(r)
            results.append(r)
    except KeyboardInterrupt:
        interrupted = True
        run.cancel()
        it.close()
    except ScanError as e:
        print(f"Error: {e.message}")
        return e.exit_code

    summary = run.summary
    if summary is None:
        # interrupted before the run got going
        summary = ScanSummary(open_port_count=len(results), elapsed_seconds=0.0, cancelled=True)
    print_report(summary)

    if args.save:
        try:
            path = save_results(target, results, summary, fmt=args.save, out_dir=args.out_dir)
        except OSError as e:
            print(f"Error: could not save results: {e}")
            return 1
        print(f"Saved results to {path}")

    if interrupted:
        log.warning("Interrupted by user")
        return EXIT_INTERRUPTED
    return 0
