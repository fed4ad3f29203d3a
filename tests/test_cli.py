"""
Tests for the ledger command line interface
"""

import json
import pytest

from broker_ledger.cli import main


class TestParseCommand:
    """Test cases for the parse command"""

    def test_parse_statement(self, sample_statement_path, temp_config_dir, tmp_path, capsys):
        output = tmp_path / "summary.json"

        main(["parse", str(sample_statement_path), "--config", str(temp_config_dir), "--output", str(output)])

        out = capsys.readouterr().out
        assert "Period: 2018-05-21 - 2018-09-29" in out
        assert "Total value: 9950.35 USD" in out
        assert "9000.50 USD" in out

        summary = json.loads(output.read_text())
        assert summary['withholding_taxes'] == 2
        assert summary['tickers'] == 2

    def test_currency_override(self, sample_statement_path, temp_config_dir, capsys):
        main(["parse", str(sample_statement_path), "--config", str(temp_config_dir), "--currency", "eur"])

        assert "Total value: 9950.35 EUR" in capsys.readouterr().out

    def test_invalid_statement(self, tmp_path, temp_config_dir, capsys):
        statement = tmp_path / "broken.csv"
        statement.write_text("Statement\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["parse", str(statement), "--config", str(temp_config_dir)])

        assert exc_info.value.code == 1
        assert "Statement parsing failed" in capsys.readouterr().out

    def test_unreadable_csv(self, tmp_path, temp_config_dir, capsys):
        statement = tmp_path / "huge.csv"
        statement.write_text(f"Statement,Header,Field Name,Field Value\nStatement,Data,Notes,{'x' * 200_000}\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["parse", str(statement), "--config", str(temp_config_dir)])

        assert exc_info.value.code == 1
        assert "Statement parsing failed" in capsys.readouterr().out

    def test_missing_statement(self, tmp_path, temp_config_dir):
        with pytest.raises(SystemExit) as exc_info:
            main(["parse", str(tmp_path / "missing.csv"), "--config", str(temp_config_dir)])

        assert exc_info.value.code == 1


class TestCompareCommand:
    """Test cases for the compare command"""

    def test_matching_series(self, fixtures_dir, tmp_path, capsys):
        computed = tmp_path / "computed.csv"
        computed.write_text("date,currency,amount\n"
                            "2018-05-23,USD,5000\n"
                            "2018-07-03,USD,9000.50\n"
                            "2018-09-29,USD,1500.25\n")

        main(["compare", "--computed", str(computed),
              "--historical", str(fixtures_dir / "historical_cash_assets.csv")])

        out = capsys.readouterr().out
        assert "match historical data" in out
        assert "were not checked" not in out

    def test_unchecked_history(self, fixtures_dir, tmp_path, capsys):
        computed = tmp_path / "computed.csv"
        computed.write_text("date,currency,amount\n2018-05-23,USD,5000\n")

        main(["compare", "--computed", str(computed),
              "--historical", str(fixtures_dir / "historical_cash_assets.csv")])

        assert "2 historical entries were not checked" in capsys.readouterr().out

    def test_discrepancies(self, fixtures_dir, tmp_path, capsys):
        computed = tmp_path / "computed.csv"
        computed.write_text("date,currency,amount\n"
                            "2018-05-23,USD,5000\n"
                            "2018-07-03,USD,9000\n"
                            "2018-09-29,USD,1500.25\n")

        main(["compare", "--computed", str(computed),
              "--historical", str(fixtures_dir / "historical_cash_assets.csv")])

        assert "Found 1 cash assets discrepancies" in capsys.readouterr().out

    def test_missing_file(self, tmp_path, fixtures_dir):
        with pytest.raises(SystemExit) as exc_info:
            main(["compare", "--computed", str(tmp_path / "missing.csv"),
                  "--historical", str(fixtures_dir / "historical_cash_assets.csv")])

        assert exc_info.value.code == 1

    def test_invalid_historical_amount(self, tmp_path, fixtures_dir, capsys):
        historical = tmp_path / "historical.csv"
        historical.write_text("date,currency,amount\n2018-05-22,USD,NaN\n")

        with pytest.raises(SystemExit) as exc_info:
            main(["compare", "--computed", str(fixtures_dir / "historical_cash_assets.csv"),
                  "--historical", str(historical)])

        assert exc_info.value.code == 1
        assert "Invalid cash amount" in capsys.readouterr().out
