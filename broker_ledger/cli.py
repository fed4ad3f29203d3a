"""
Command Line Interface for Broker Ledger
"""

import argparse
import json
import logging
import sys


def _setup_logging(verbose: bool, level: str = "INFO"):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format='%(levelname)s: %(message)s')
    else:
        logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO),
                            format='%(levelname)s: %(message)s')


def main(argv=None):
    """Main CLI entry point"""
    parser = argparse.ArgumentParser(description="Broker Ledger - statement parsing and cash reconciliation")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Parse command
    parse_parser = subparsers.add_parser("parse", help="Parse IB activity statement")
    parse_parser.add_argument("statement", type=str,
                              help="Path to activity statement CSV")
    parse_parser.add_argument("--config", type=str, default="config/",
                              help="Config directory path")
    parse_parser.add_argument("--currency", type=str, default=None,
                              help="Net asset value currency (overrides config)")
    parse_parser.add_argument("--output", type=str, default=None,
                              help="Output file path for JSON summary")
    parse_parser.add_argument("--verbose", "-v", action="store_true", default=False,
                              help="Enable verbose logging")

    # Compare command
    compare_parser = subparsers.add_parser("compare", help="Compare computed cash assets against history")
    compare_parser.add_argument("--computed", type=str, required=True,
                                help="CSV with computed cash assets (date,currency,amount)")
    compare_parser.add_argument("--historical", type=str, required=True,
                                help="CSV with historical cash assets (date,currency,amount)")
    compare_parser.add_argument("--verbose", "-v", action="store_true", default=False,
                                help="Enable verbose logging")

    args = parser.parse_args(argv)

    if args.command == "parse":
        _handle_parse(args.statement, args.config, args.currency, args.output, args.verbose)

    elif args.command == "compare":
        _handle_compare(args.computed, args.historical, args.verbose)

    else:
        parser.print_help()


def _handle_parse(statement_path: str, config_dir: str, currency: str, output: str, verbose: bool):
    """Handle statement parse command"""
    from broker_ledger.statement import IBStatementParser, StatementParseError
    from broker_ledger.utils.config import ConfigManager

    try:
        config = ConfigManager(config_dir).get_ledger_config()
        _setup_logging(verbose, config['log_level'])

        reporting_currency = currency.upper() if currency else config['reporting_currency']
        parser = IBStatementParser(reporting_currency=reporting_currency, encoding=config['encoding'])
        statement = parser.parse(statement_path)

    except (StatementParseError, FileNotFoundError, ValueError) as e:
        print(f"❌ Statement parsing failed: {e}")
        sys.exit(1)

    summary = statement.summary()

    print(f"✅ Statement parsed: {statement_path}")
    print(f"   • Period: {summary['period_start']} - {summary['period_end']}")
    print(f"   • Total value: {summary['total_value'] or 'n/a'}")
    print(f"   • Deposits: {summary['deposits']}")
    for deposit_currency, amount in summary['deposits_by_currency'].items():
        print(f"     - {amount} {deposit_currency}")
    print(f"   • Withholding taxes: {summary['withholding_taxes']}")
    print(f"   • Tickers: {summary['tickers']}")

    if output:
        with open(output, 'w') as f:
            json.dump(summary, f, indent=2)
        print(f"📄 Summary saved to: {output}")


def _handle_compare(computed_path: str, historical_path: str, verbose: bool):
    """Handle cash assets comparison command"""
    from broker_ledger.reconciliation import load_cash_assets, reconcile_cash_assets

    _setup_logging(verbose)

    try:
        computed = load_cash_assets(computed_path)
        historical = load_cash_assets(historical_path)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Failed to load cash assets: {e}")
        sys.exit(1)

    comparator = reconcile_cash_assets(computed, historical)

    if comparator.discrepancies:
        print(f"⚠️  Found {comparator.discrepancies} cash assets discrepancies")
    else:
        print("✅ Computed cash assets match historical data")

    if not comparator.cursor.exhausted:
        print(f"   • {comparator.cursor.remaining} historical entries were not checked")


if __name__ == "__main__":
    main()
