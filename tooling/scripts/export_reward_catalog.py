#!/usr/bin/env python3
"""Export the curated reward catalog view to CSV for catalog audits."""

from __future__ import annotations

import argparse
import csv
import io
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List

import httpx


CSV_COLUMNS: List[str] = [
    "displayOrder",
    "id",
    "title",
    "category",
    "cost",
    "stockQuantity",
    "isActive",
    "isFeatured",
    "minStatusTier",
    "sponsorName",
    "sponsorshipStatus",
    "sponsorshipExpiringSoon",
    "sponsorStartDate",
    "sponsorEndDate",
    "claimCount",
    "wishlistCount",
]


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Export the curated reward catalog as CSV.")
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="Base URL of the RewardOps API service.",
    )
    parser.add_argument(
        "--api-key",
        default="",
        help="Admin API key (sent as X-API-Key when provided).",
    )
    parser.add_argument(
        "--bucket",
        action="append",
        default=[],
        help="Bucket filter (active, inactive, featured, sponsored, low_stock, out_of_stock). Repeatable.",
    )
    parser.add_argument("--category", help="Restrict the export to one category.")
    parser.add_argument(
        "--order-mode",
        action="store_true",
        help="Export rows in display order instead of the default sort.",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Optional path to write the CSV. If omitted, prints to stdout.",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=10.0,
        help="HTTP request timeout in seconds.",
    )
    return parser.parse_args(list(argv) if argv is not None else None)


def build_params(args: argparse.Namespace) -> List[tuple[str, str]]:
    params: List[tuple[str, str]] = [("bucket", bucket) for bucket in args.bucket]
    if args.category:
        params.append(("category", args.category))
    if args.order_mode:
        params.append(("orderMode", "true"))
    return params


def render_csv(items: Iterable[Dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_COLUMNS, extrasaction="ignore")
    writer.writeheader()
    for item in items:
        writer.writerow({column: "" if item.get(column) is None else item.get(column) for column in CSV_COLUMNS})
    return buffer.getvalue()


def main(argv: Iterable[str] | None = None) -> None:
    args = parse_args(argv)

    headers = {"X-API-Key": args.api_key} if args.api_key else {}

    with httpx.Client(base_url=args.base_url, timeout=args.timeout) as client:
        response = client.get("/api/v1/admin/rewards/", params=build_params(args), headers=headers)
        response.raise_for_status()
        payload = response.json()

    content = render_csv(payload.get("items", []))

    if args.output:
        args.output.write_text(content)
        print(f"[export-reward-catalog] ✅ wrote {payload.get('total', 0)} rows to {args.output}")
    else:
        print(content, end="")


if __name__ == "__main__":
    try:
        main()
    except httpx.HTTPStatusError as exc:  # pragma: no cover
        print(
            f"[export-reward-catalog] ❌ HTTP {exc.response.status_code} while calling {exc.request.url}",
            file=sys.stderr,
        )
        sys.exit(1)
    except httpx.HTTPError as exc:  # pragma: no cover
        print(f"[export-reward-catalog] ❌ Request failed: {exc}", file=sys.stderr)
        sys.exit(1)
