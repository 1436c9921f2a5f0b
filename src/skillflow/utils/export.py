"""Export utilities for spreadsheets (CSV) and backup files."""

from __future__ import annotations

import csv
import io
from collections.abc import Sequence
from datetime import date
from pathlib import Path

from skillflow.models import Skill

CSV_HEADER = (
    "Skill Name",
    "Module",
    "Date",
    "Topic",
    "Subject",
    "Status",
    "Video URL",
    "Website URL",
    "Docs URL",
    "Other URL",
)

# Byte-order mark so spreadsheet apps detect UTF-8.
_BOM = "\ufeff"


def _generate_filename(kind: str, extension: str, on: date | None = None) -> str:
    """Return ``skillflow-<kind>-<YYYY-MM-DD>.<extension>``."""
    day = (on or date.today()).isoformat()
    return f"skillflow-{kind}-{day}.{extension}"


def csv_filename(on: date | None = None) -> str:
    return _generate_filename("export", "csv", on)


def backup_filename(on: date | None = None) -> str:
    return _generate_filename("backup", "json", on)


def skills_to_csv(skills: Sequence[Skill]) -> str:
    """Render one row per entry, every field quoted, with a leading BOM.

    The header row is left unquoted; data fields are wrapped in double
    quotes with embedded quotes doubled.
    """
    buffer = io.StringIO()
    buffer.write(_BOM)
    buffer.write(",".join(CSV_HEADER) + "\n")

    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for skill in skills:
        for entry in skill.entries:
            writer.writerow(
                [
                    skill.name,
                    entry.module or "",
                    entry.date.isoformat(),
                    entry.topic,
                    entry.subject,
                    entry.progress.value,
                    entry.video_url or "",
                    entry.website_url or "",
                    entry.docs_url or "",
                    entry.other_url or "",
                ]
            )
    return buffer.getvalue()


def export_to_csv(skills: Sequence[Skill], output_path: Path) -> Path:
    """Write the CSV export to ``output_path`` (UTF-8, BOM included).

    Args:
        skills: Skills whose entries become rows.
        output_path: Full path for the output file.

    Returns:
        Path to the created file
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(skills_to_csv(skills), encoding="utf-8", newline="")
    return output_path


def export_backup(document_json: str, output_path: Path) -> Path:
    """Write a serialized backup document to ``output_path``."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(document_json, encoding="utf-8")
    return output_path
