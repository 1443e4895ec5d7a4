"""CSV export of ranked results."""

import csv
import io
from pathlib import Path
from typing import TextIO

from leadscore.models import CRITERION_SPECS, RankedEntry

HEADER = [
    "Rank",
    "Name",
    "Registration No",
    "Industry",
    "Province",
    "Company Size",
    "Verification Status",
    "Score",
    "Raw Score",
    "Max Possible Score",
    "Matched Criteria",
    "Signals",
]


def _enum_value(value) -> str:
    if value is None:
        return ""
    return getattr(value, "value", str(value))


def entry_row(entry: RankedEntry) -> list:
    """One CSV row for a ranked entry."""
    company = entry.company
    breakdown = entry.breakdown
    matched = [CRITERION_SPECS[key].label for key in breakdown.matched_criteria]
    signals = [f"{key} {value:+d}" for key, value in breakdown.signal_adjustments.items()]
    return [
        entry.rank,
        company.name,
        company.registration_number or "",
        "; ".join(company.industries),
        company.province or "",
        _enum_value(company.company_size),
        _enum_value(company.verification_status),
        breakdown.normalized_score,
        f"{breakdown.raw_score:g}",
        f"{breakdown.max_possible_score:g}",
        "; ".join(matched),
        "; ".join(signals),
    ]


def write_csv(entries: list[RankedEntry], f: TextIO):
    """Write ranked entries, in rank order, to an open text stream."""
    writer = csv.writer(f)
    writer.writerow(HEADER)
    for entry in entries:
        writer.writerow(entry_row(entry))


def export_to_csv(entries: list[RankedEntry], output_path: Path):
    """Export ranked entries to a CSV file."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="", encoding="utf-8") as f:
        write_csv(entries, f)


def to_csv_string(entries: list[RankedEntry]) -> str:
    output = io.StringIO()
    write_csv(entries, output)
    return output.getvalue()
