"""
Manual evaluation runner for urlsentry.

Loads docs/manual_eval_urls.csv (or a CSV given on the command line),
runs enrich_score on each URL, and prints basic confusion counts +
sample disagreements.
"""

from __future__ import annotations

import csv
import sys
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .scoring import enrich_score


# repo root = urlsentry/..
DEFAULT_EVAL_PATH = Path(__file__).resolve().parents[1] / "docs" / "manual_eval_urls.csv"


@dataclass
class Disagreement:
    url: str
    true_label: str
    notes: str
    result: Dict[str, Any]


@dataclass
class EvalReport:
    counts: Counter = field(default_factory=Counter)
    disagreements: List[Disagreement] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    @property
    def correct(self) -> int:
        return sum(c for (true_label, pred), c in self.counts.items() if true_label == pred)


def load_rows(path: Path) -> List[Tuple[str, str, str]]:
    """Read (url, label, notes) rows, skipping rows without a url or label."""
    rows = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            url = (row.get("url") or "").strip()
            label = (row.get("label") or "").strip()
            if not url or not label:
                continue
            rows.append((url, label, (row.get("notes") or "").strip()))
    return rows


def evaluate(path: Path) -> EvalReport:
    report = EvalReport()
    for url, true_label, notes in load_rows(path):
        r = enrich_score(url)
        report.counts[(true_label, r["status"])] += 1
        if true_label != r["status"]:
            report.disagreements.append(Disagreement(url, true_label, notes, r))
    return report


def print_report(report: EvalReport) -> None:
    print("Confusion (true_label -> status):")
    for (true_label, pred), c in sorted(report.counts.items()):
        print(f"  {true_label:10s} -> {pred:10s}: {c}")
    print(f"\nAgreement: {report.correct}/{report.total}")

    print("\nSample disagreements:")
    for d in report.disagreements:
        print(f"- URL:        {d.url}")
        print(f"  true_label: {d.true_label}")
        print(f"  status:     {d.result['status']}")
        print(f"  score:      {d.result['score']}")
        print(f"  reasons:    {', '.join(d.result['reasons'])}")
        if d.notes:
            print(f"  notes:      {d.notes}")
        print()


def main(argv: Optional[List[str]] = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    eval_path = Path(argv[0]) if argv else DEFAULT_EVAL_PATH

    if not eval_path.exists():
        raise SystemExit(f"Manual eval file not found: {eval_path}")

    print_report(evaluate(eval_path))


if __name__ == "__main__":
    main()
