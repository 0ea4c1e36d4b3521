from __future__ import annotations

import csv
import json
import os
import re
from datetime import datetime
from typing import List

from .errors import InvalidOptionError
from .models import PortProbeResult, ScanSummary, ScanTarget

SAVE_FORMATS = ("txt", "csv", "json")

REPORT_TEMPLATE = """
=================================
          Scan Report
=================================
Scan completed in: {elapsed:.2f} seconds
Number of open ports: {open_count}
"""

_UNSAFE_FILENAME = re.compile(r"[^A-Za-z0-9._-]")


def format_result(r: PortProbeResult) -> str:
    return f"Open:\t{r.port}:{r.service}"


def format_report(summary: ScanSummary) -> str:
    text = REPORT_TEMPLATE.format(
        elapsed=summary.elapsed_seconds,
        open_count=summary.open_port_count,
    )
    if summary.cancelled:
        text += f"Scan interrupted after {summary.ports_scanned} ports\n"
    return text


def print_result(r: PortProbeResult) -> None:
    print(format_result(r), flush=True)


def print_report(summary: ScanSummary) -> None:
    print(format_report(summary))


def save_results(
    target: ScanTarget,
    results: List[PortProbeResult],
    summary: ScanSummary,
    fmt: str,
    out_dir: str = "scans",
) -> str:
    if fmt not in SAVE_FORMATS:
        raise InvalidOptionError(f"Unsupported format: {fmt}")

    os.makedirs(out_dir, exist_ok=True)
    ts = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    host = _UNSAFE_FILENAME.sub("_", target.host)
    path = os.path.join(out_dir, f"{ts}_{host}_port_scan.{fmt}")

    ordered = sorted(results, key=lambda x: x.port)

    if fmt == "txt":
        with open(path, "w", encoding="utf-8") as f:
            f.write(f"Target: {target.host} | Ports: {target.ports}\n")
            for r in ordered:
                f.write(format_result(r) + "\n")
            f.write(format_report(summary))

    elif fmt == "csv":
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(["host", "port", "status", "service"])
            for r in ordered:
                w.writerow([target.host, r.port, "open", r.service or ""])

    else:
        payload = {
            "target": {
                "host": target.host,
                "start_port": target.start_port,
                "end_port": target.end_port,
            },
            "open_ports": [{"port": r.port, "service": r.service} for r in ordered],
            "summary": {
                "open_port_count": summary.open_port_count,
                "elapsed_seconds": round(summary.elapsed_seconds, 2),
                "ports_scanned": summary.ports_scanned,
                "cancelled": summary.cancelled,
            },
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2)

    return path
