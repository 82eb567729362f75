import pytest

from loansim.cli import main


class TestCLI:
    def test_summary_report(self, capsys):
        code = main(["--amount", "200000", "--term-years", "20", "--rate", "12"])
        out = capsys.readouterr().out
        assert code == 0
        assert "Loan Summary" in out
        assert "TCEA:" in out
        assert "240 months" in out

    def test_schedule_and_yearly(self, capsys):
        code = main([
            "--amount", "100000", "--term-years", "2", "--rate", "10",
            "--grace-months", "3", "--grace-mode", "partial",
            "--schedule", "5", "--yearly", "--start-date", "2024-01-31",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "Payment Schedule" in out
        assert "(grace)" in out
        assert "2024-02-29" in out
        assert "19 more payments" in out
        assert "Year  2" in out

    def test_invalid_parameters(self, capsys):
        code = main([
            "--amount", "100000", "--term-years", "10", "--rate", "10", "--grace-months", "6",
        ])
        err = capsys.readouterr().err
        assert code == 2
        assert "grace_mode" in err

    @pytest.mark.parametrize("flag,value", [
        ("--amount", "nan"), ("--amount", "inf"), ("--rate", "Infinity"), ("--term-years", "nan"),
    ])
    def test_non_finite_input_exits_with_status_2(self, capsys, flag, value):
        args = {"--amount": "100000", "--term-years": "10", "--rate": "10"}
        args[flag] = value
        code = main([token for pair in args.items() for token in pair])
        err = capsys.readouterr().err
        assert code == 2
        assert "finite" in err

    def test_nominal_rate_with_fees(self, capsys):
        code = main([
            "--amount", "150000", "--term-years", "15", "--rate", "10",
            "--rate-mode", "nominal", "--capitalization", "quarterly",
            "--admin-fees", "1.5", "--life-insurance", "0.3", "--currency", "USD", "--no-van",
        ])
        out = capsys.readouterr().out
        assert code == 0
        assert "$ 2,250.00" in out  # 1.5% upfront
        assert "VAN:" in out and "N/A" in out
