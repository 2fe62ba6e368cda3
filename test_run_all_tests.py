import pytest

import run_all_tests


def test_tables_report_pass(capsys):
    assert run_all_tests.run_tables(2)
    out = capsys.readouterr().out
    assert "16 additions, 0 failed" in out
    assert "Result check: PASS" in out


def test_summary_without_pytest(monkeypatch, capsys):
    monkeypatch.setattr("sys.argv", ["run_all_tests.py", "--bits", "2", "--skip-pytest"])
    assert run_all_tests.main() == 0
    out = capsys.readouterr().out
    assert "[SUMMARY]" in out
    assert "[✓] exhaustive table" in out
    assert "pytest suite" not in out


def test_rejects_non_positive_bits(monkeypatch):
    monkeypatch.setattr("sys.argv", ["run_all_tests.py", "--bits", "0"])
    with pytest.raises(SystemExit):
        run_all_tests.main()
