import csv

import pytest

from portprobe.errors import InvalidOptionError
from portprobe.models import PortProbeResult, ScanSummary, ScanTarget
from portprobe.output import format_report, format_result, save_results


def _results():
    return [
        PortProbeResult(port=443, is_open=True, service="HTTPS"),
        PortProbeResult(port=22, is_open=True, service="SSH"),
    ]


def test_format_result():
    assert format_result(PortProbeResult(80, True, "HTTP")) == "Open:\t80:HTTP"


def test_format_report_rounds_to_two_decimals():
    text = format_report(ScanSummary(open_port_count=3, elapsed_seconds=1.23456, ports_scanned=100))
    assert "Scan Report" in text
    assert "Scan completed in: 1.23 seconds" in text
    assert "Number of open ports: 3" in text
    assert "interrupted" not in text


def test_format_report_marks_interrupted_scans():
    text = format_report(ScanSummary(0, 0.5, ports_scanned=7, cancelled=True))
    assert "Scan interrupted after 7 ports" in text


def test_save_csv_sorted_by_port(tmp_path):
    target = ScanTarget("localhost", 1, 1024)
    path = save_results(target, _results(), ScanSummary(2, 0.1, 1024), fmt="csv", out_dir=str(tmp_path))

    with open(path, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ["host", "port", "status", "service"]
    assert rows[1:] == [["localhost", "22", "open", "SSH"], ["localhost", "443", "open", "HTTPS"]]


def test_save_txt_matches_console_format(tmp_path):
    target = ScanTarget("localhost", 1, 1024)
    path = save_results(target, _results(), ScanSummary(2, 0.1, 1024), fmt="txt", out_dir=str(tmp_path))

    with open(path, encoding="utf-8") as f:
        text = f.read()
    assert text.startswith("Target: localhost | Ports: 1-1024\n")
    assert "Open:\t22:SSH\nOpen:\t443:HTTPS\n" in text
    assert "Number of open ports: 2" in text


def test_save_sanitizes_host_in_filename(tmp_path):
    target = ScanTarget("::1", 1, 2)
    path = save_results(target, [], ScanSummary(0, 0.0, 2), fmt="json", out_dir=str(tmp_path))
    assert path.endswith("___1_port_scan.json")


def test_save_rejects_unknown_format(tmp_path):
    with pytest.raises(InvalidOptionError):
        save_results(ScanTarget("localhost", 1, 2), [], ScanSummary(0, 0.0), fmt="html", out_dir=str(tmp_path))
