#!/usr/bin/env python
"""
Tender Report Script

Fetches the grouped transactions report and the credit/debit summary from a
running Tenderbook API and prints them as a text report.

Usage:
    python print_report.py --url http://localhost:8000
    python print_report.py --tender-id TD-001
    python print_report.py --output report.json
"""
import argparse
import json
import sys
from typing import Any, Dict, List

import httpx


class ReportPrinter:
    """Client for the report and summary endpoints with text rendering."""

    def __init__(self, api_url: str = "http://localhost:8000"):
        """
        Initialize printer.

        Args:
            api_url: Base URL of the Tenderbook API
        """
        self.api_url = api_url.rstrip("/")

    def fetch_report(self, tender_id: str = "all") -> Dict[str, Any]:
        """
        Fetch transactions grouped by tender.

        Args:
            tender_id: Tender ID, or "all"

        Returns:
            API response dictionary
        """
        endpoint = f"{self.api_url}/reports/transactions"
        with httpx.Client(timeout=30) as client:
            response = client.get(endpoint, params={"tender_id": tender_id})
            response.raise_for_status()
            return response.json()

    def fetch_summary(self, tender_id: str = "all") -> List[Dict[str, Any]]:
        """Fetch every summary row, following pagination."""
        endpoint = f"{self.api_url}/summary"
        rows: List[Dict[str, Any]] = []
        page = 1
        with httpx.Client(timeout=30) as client:
            while True:
                response = client.get(endpoint, params={"tender_id": tender_id, "page": page})
                response.raise_for_status()
                data = response.json()
                rows.extend(data.get("items", []))
                if page >= data.get("pages", 1):
                    return rows
                page += 1

    @staticmethod
    def _amount(value: Any) -> str:
        try:
            return f"{float(value):,.2f}"
        except (TypeError, ValueError):
            return ""

    def generate_report(self, report: Dict[str, Any], summary: List[Dict[str, Any]]) -> str:
        """
        Render the report as plain text.

        Args:
            report: Response of /reports/transactions
            summary: Rows of /summary

        Returns:
            Formatted report string
        """
        groups = report.get("groups", [])
        if not groups:
            return "No transactions found for the selected tender."

        lines = []
        lines.append("=" * 80)
        lines.append("TENDERS & TRANSACTIONS REPORT")
        lines.append("=" * 80)
        lines.append(f"Tender filter: {report.get('tenderId')}")
        lines.append(f"Generated at: {report.get('generatedAt')}")
        lines.append("")

        for group in groups:
            tender = group["tender"]
            lines.append("-" * 80)
            lines.append(
                f"Tender ID: {tender['tenderId']}  |  Name: {tender.get('tenderName') or ''}"
                f"  |  City: {tender.get('tenderCity') or ''}"
            )
            value = tender.get("tenderValue")
            lines.append(
                f"Pincode: {tender.get('tenderPincode') or ''}  |  "
                f"Value: {self._amount(value) if value is not None else ''}  |  "
                f"Date: {group.get('dateDisplay') or ''}"
            )
            lines.append("-" * 80)

            rows = group.get("rows", [])
            if not rows:
                lines.append("No transactions found")
                lines.append("")
                continue

            lines.append(f"{'Txn ID':<16} {'Description':<22} {'Type':<8} {'Vendor':<14} {'Amount':>12}  Date")
            for row in rows:
                txn = row["transaction"]
                lines.append(
                    f"{txn['txnId']:<16} {(txn.get('txnDesc') or '')[:22]:<22} "
                    f"{(txn.get('txnType') or '')[:8]:<8} {(txn.get('vendorName') or '')[:14]:<14} "
                    f"{self._amount(txn.get('amount')):>12}  {row.get('dateDisplay') or ''}"
                )
            lines.append("")

        if summary:
            lines.append("=" * 80)
            lines.append("SUMMARY")
            lines.append("-" * 80)
            for row in summary:
                lines.append(
                    f"{row['tenderId']:<12} credit {self._amount(row['totalCredit']):>14}  "
                    f"debit {self._amount(row['totalDebit']):>14}  "
                    f"net {self._amount(row['netAmount']):>14}  {row['status']}"
                )
            lines.append("=" * 80)

        return "\n".join(lines)


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Print the tenders & transactions report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--url",
        type=str,
        default="http://localhost:8000",
        help="Base API URL (default: http://localhost:8000)"
    )

    parser.add_argument(
        "--tender-id",
        type=str,
        default="all",
        help="Report a single tender (default: all tenders with transactions)"
    )

    parser.add_argument(
        "--output",
        type=str,
        help="Save the raw report to a JSON file"
    )

    args = parser.parse_args()

    printer = ReportPrinter(api_url=args.url)

    try:
        report = printer.fetch_report(args.tender_id)
        summary = printer.fetch_summary(args.tender_id)
    except httpx.HTTPError as e:
        print(f"Failed to load report: {e}", file=sys.stderr)
        sys.exit(1)

    print(printer.generate_report(report, summary))

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            json.dump({"report": report, "summary": summary}, f, indent=2, ensure_ascii=False)
        print(f"\nReport saved to: {args.output}")


if __name__ == "__main__":
    main()
