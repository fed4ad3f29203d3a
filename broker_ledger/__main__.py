"""
CLI package main entry point
"""

from broker_ledger.cli import main

if __name__ == "__main__":
    main()
