"""
Print risk reports for registered protocols.

Usage:
    python -m protocol_risk                 # all registered protocols
    python -m protocol_risk aave-v3 lido
"""

import argparse
import logging
import sys

from .config.settings import LOG_LEVEL
from .core.engine import get_risk_reports
from .core.registry import list_protocols
from .exceptions import UnknownProtocolError
from .models import RiskReport
from .scoring import get_score_justifications


def print_report(report: RiskReport) -> None:
    print(f"\n=== {report.protocol_id} ===")
    print(f"Total Score: {report.total_score} ({report.risk_level.value} risk)")
    if report.fallback_sources:
        print(f"Fallback data: {', '.join(report.fallback_sources)}")
    for entry in get_score_justifications(report):
        if "score" in entry:
            print(f"  {entry['category']}: {entry['score']} - {entry.get('justification', '')}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(prog="protocol_risk", description="Print protocol risk reports")
    parser.add_argument("protocols", nargs="*", help="Protocol ids (default: all registered)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        reports = get_risk_reports(args.protocols or list_protocols())
    except UnknownProtocolError as e:
        print(f"Error: {e}. Known protocols: {', '.join(list_protocols())}", file=sys.stderr)
        return 1

    for report in reports:
        print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
