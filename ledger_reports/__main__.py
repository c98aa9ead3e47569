import sys

from ledger_reports.cli import main

if __name__ == "__main__":
    sys.exit(main())
