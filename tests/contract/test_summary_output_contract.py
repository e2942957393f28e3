from __future__ import annotations

import re
from pathlib import Path

from dataset_processor.cli import main as cli_main

"""SUMMARY output contract: exactly one SUMMARY line, last line of output."""

SUMMARY_RE = re.compile(
    r"^SUMMARY program=(grades|cart|devices|collections) records=\d+ accepted=\d+ failed=\d+ elapsed_sec=\d+(\.\d+)?$"
)


def test_summary_line_is_last_and_unique(temp_workdir: Path, capsys):
    """Exactly one SUMMARY line, printed last, in the documented format."""
    code = cli_main(["collections"])
    out_lines = capsys.readouterr().out.strip().splitlines()
    assert code == 0
    summary = [line for line in out_lines if line.startswith("SUMMARY")]
    assert len(summary) == 1
    assert out_lines[-1] == summary[0]
    assert SUMMARY_RE.match(summary[0]), summary[0]


def test_summary_counts_add_up_with_overwrite(temp_workdir: Path, write_config, write_csv, capsys):
    """records = accepted + failed when duplicate names overwrite each other."""
    text = write_config.read_text(encoding="utf-8").replace("duplicate_policy: reject", "duplicate_policy: overwrite")
    write_config.write_text(text, encoding="utf-8")
    path = write_csv("devices.csv", "name,ip,active\nA,10.0.0.1,yes\nA,10.0.0.2,no\nB,10.0.0,yes\n")
    code = cli_main(["devices", "--input", str(path)])
    summary = [line for line in capsys.readouterr().out.splitlines() if line.startswith("SUMMARY")][0]
    assert code == 2
    counts = dict(part.split("=") for part in summary.split()[1:])
    assert (counts["records"], counts["accepted"], counts["failed"]) == ("3", "2", "1")
