"""Export the section tree as JSON, HTML or CSV."""

import csv
import html
import io
import json
from collections.abc import Sequence
from dataclasses import asdict
from pathlib import Path

from loguru import logger

from snipnotes.errors import ExportError
from snipnotes.models.note import ExportFormat, Section

EXPORT_BASENAME = "snipnotes-export"


def render_json(sections: Sequence[Section]) -> str:
    data = [asdict(section) for section in sections]
    return json.dumps({"sections": data}, indent=4, ensure_ascii=False) + "\n"


def render_html(sections: Sequence[Section]) -> str:
    parts = [
        "<!DOCTYPE html>",
        '<html><head><meta charset="utf-8"><title>snipnotes export</title></head><body>',
        "<h1>Exported Sections</h1>",
    ]
    for section in sections:
        parts.append(f"<h2>{html.escape(section.title)}</h2>")
        parts.append("<ul>")
        for detail in section.details:
            description = html.escape(detail.description).replace("\n", "<br>")
            parts.append(
                f"<li><strong>{html.escape(detail.title)}</strong><br>{description}"
                f"<br><small>{html.escape(detail.created_at)}</small></li>"
            )
        parts.append("</ul>")
    parts.append("</body></html>")
    return "\n".join(parts) + "\n"


def render_csv(sections: Sequence[Section]) -> str:
    out = io.StringIO()
    writer = csv.writer(out)
    writer.writerow(["Section", "Title", "Description", "Language", "Created At"])
    for section in sections:
        for detail in section.details:
            writer.writerow(
                [section.title, detail.title, detail.description,
                 detail.language.value, detail.created_at]
            )
    return out.getvalue()


_RENDERERS = {
    ExportFormat.JSON: render_json,
    ExportFormat.HTML: render_html,
    ExportFormat.CSV: render_csv,
}


class Exporter:
    """Write exports into a fixed directory, overwriting the previous export."""

    def __init__(self, export_dir: str | Path) -> None:
        self.export_dir = Path(export_dir).expanduser()

    def path_for(self, fmt: ExportFormat) -> Path:
        return self.export_dir / f"{EXPORT_BASENAME}.{fmt.extension}"

    def write(self, sections: Sequence[Section], fmt: ExportFormat) -> Path:
        """Render and write the export.

        Raises:
            ExportError: Serialization or the file write failed.
        """
        path = self.path_for(fmt)
        try:
            contents = _RENDERERS[fmt](sections)
            self.export_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            msg = f"Cannot export {fmt.name} to {path}: {e}"
            raise ExportError(msg) from e
        return path

    def export(self, sections: Sequence[Section], fmt: ExportFormat) -> str:
        """Export and return a message suitable for the status line."""
        try:
            path = self.write(sections, fmt)
        except ExportError as e:
            logger.warning("{}", e)
            return f"Export failed: {e}"
        logger.info("Exported {} sections to {}", len(sections), path)
        return f"Exported {len(sections)} sections to {path}"
