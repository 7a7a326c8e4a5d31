"""Resolve listing item specifics from the command line.

Examples:
    python main.py list
    python main.py resolve 663 "Fitment Type" --confidence 74
    python main.py enrich 450-9012 --report enrichment_report.json
"""

from src.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
