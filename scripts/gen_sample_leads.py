#!/usr/bin/env python3
"""Sample lead workbook generator.

Generates a synthetic lead spreadsheet for trying out the importer and for
throughput runs. The generated workbook follows the import format:
- Row 1: Header row (CRM export style headers, picked up by auto-mapping)
- Row 2+: Data rows

A share of the rows repeats an earlier phone number with different spacing
(counted as duplicates), a share has no name (counted as rejected) and a few
rows are left completely blank (skipped by the reader).
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

HEADERS = [
    "Full Name", "Mobile", "Email", "City", "Budget",
    "Lead Source", "Stage", "Priority", "Project", "Remarks",
]

FIRST_NAMES = ["Asha", "Ravi", "Meera", "Kiran", "Priya", "Arjun", "Neha", "Vikram", "Sana", "Rohit"]
LAST_NAMES = ["Patil", "Kumar", "Shah", "Rao", "Iyer", "Singh", "Das", "Nair"]
CITIES = ["Pune", "Mumbai", "Nashik", "Bengaluru", "Hyderabad", "Delhi"]
SOURCES = ["Website", "Google", "Referral", "Social", "Walk-in", ""]
STAGES = ["New", "Qualified", "Proposal", "Negotiation", "Won", "Lost", "follow up"]
PRIORITIES = ["Hot", "Warm", "Cold", ""]
PROJECTS = ["Skyline Towers", "Green Meadows", "Riverside Residency", ""]


def _spaced(phone: str) -> str:
    return f"{phone[:5]} {phone[5:]}"


def generate_leads(
    rows: int,
    seed: int = 42,
    duplicate_ratio: float = 0.1,
    nameless_ratio: float = 0.05,
    blank_ratio: float = 0.01,
) -> pd.DataFrame:
    """Generate synthetic lead rows.

    Args:
        rows: Number of data rows to generate
        seed: Random seed for reproducible data
        duplicate_ratio: Share of rows reusing an earlier phone number
        nameless_ratio: Share of rows without a name
        blank_ratio: Share of rows with every cell empty

    Returns:
        DataFrame with one column per header in HEADERS
    """
    rng = np.random.default_rng(seed)

    phones = [str(p) for p in rng.integers(7_000_000_000, 9_999_999_999, rows)]
    duplicate_mask = rng.random(rows) < duplicate_ratio
    for i in np.flatnonzero(duplicate_mask):
        if i > 0:
            phones[i] = _spaced(phones[int(rng.integers(0, i))].replace(" ", ""))

    names: list[Any] = [
        f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}" for _ in range(rows)
    ]
    for i in np.flatnonzero(rng.random(rows) < nameless_ratio):
        names[i] = None

    budgets: list[Any] = (rng.integers(20, 500, rows) * 100_000).tolist()
    # some budgets typed as text
    for i in np.flatnonzero(rng.random(rows) < 0.05):
        budgets[i] = "on request"

    data = {
        "Full Name": names,
        "Mobile": phones,
        "Email": [
            f"{str(n).split()[0].lower()}{i}@example.com" if n else None
            for i, n in enumerate(names)
        ],
        "City": rng.choice(CITIES, rows).tolist(),
        "Budget": budgets,
        "Lead Source": rng.choice(SOURCES, rows).tolist(),
        "Stage": rng.choice(STAGES, rows).tolist(),
        "Priority": rng.choice(PRIORITIES, rows).tolist(),
        "Project": rng.choice(PROJECTS, rows).tolist(),
        "Remarks": [None] * rows,
    }
    df = pd.DataFrame(data, columns=HEADERS)
    df.loc[rng.random(rows) < blank_ratio, :] = None
    return df


def create_workbook(output_path: Path, rows: int, sheet_name: str = "Leads", seed: int = 42) -> None:
    """Write the generated leads to an .xlsx file (header on row 1)."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df = generate_leads(rows, seed)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=sheet_name, index=False)

    print(f"Created workbook: {output_path}")
    print(f"  Sheet: {sheet_name}")
    print(f"  Rows: {rows:,} (+ 1 header row)")
    print(f"  Columns: {len(HEADERS)}")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic lead spreadsheet",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 500 leads into data/leads.xlsx
  %(prog)s data/leads.xlsx

  # large file for throughput runs
  %(prog)s data/big.xlsx --rows 50000 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output .xlsx path")
    parser.add_argument("--rows", type=int, default=500, help="Number of data rows (default: 500)")
    parser.add_argument("--sheet", default="Leads", help="Sheet name (default: Leads)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1

    create_workbook(args.output, args.rows, args.sheet, args.seed)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
