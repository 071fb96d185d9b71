from pathlib import Path

import pytest

from urlsentry.manual_eval import evaluate, main


def write_csv(path: Path) -> Path:
    path.write_text(
        "url,label,notes\n"
        "https://www.google.com,safe,\n"
        "http://192.168.1.1/login,dangerous,raw ip\n"
        "https://bit.ly/abc,safe,shortener\n"
        ",safe,missing url\n"
        "https://example.com,,missing label\n",
        encoding="utf-8",
    )
    return path


def test_evaluate_counts_and_disagreements(tmp_path: Path):
    report = evaluate(write_csv(tmp_path / "eval.csv"))

    assert report.total == 3
    assert report.correct == 2
    assert report.counts[("safe", "suspicious")] == 1
    assert [d.url for d in report.disagreements] == ["https://bit.ly/abc"]
    assert report.disagreements[0].notes == "shortener"


def test_main_prints_report(tmp_path: Path, capsys):
    main([str(write_csv(tmp_path / "eval.csv"))])

    out = capsys.readouterr().out
    assert "Agreement: 2/3" in out
    assert "https://bit.ly/abc" in out


def test_main_missing_file(tmp_path: Path):
    with pytest.raises(SystemExit):
        main([str(tmp_path / "missing.csv")])
