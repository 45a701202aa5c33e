# -*- coding: utf-8 -*-
"""jotnote.export
Snapshot the notes collection to PDF, JSON or YAML files.

License: MIT
"""
import json
import os
from datetime import datetime

import tzlocal
import yaml
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.units import inch
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

DEFAULT_WATERMARK = "Generated by jotnote"
PAGE_SIZES = {
    "letter": letter,
    "a4": A4,
}
FONT_NAME = "Helvetica"
FONT_SIZE = 12
LINE_HEIGHT = 20
MARGIN = 0.75 * inch


class ExportError(ValueError):
    """Raised for an unknown export format or page size."""


def _ensure_parent(destination):
    """Create the parent directory of an export file if needed."""
    parent = os.path.dirname(os.path.abspath(destination))
    os.makedirs(parent, exist_ok=True)


def _snapshot(notes):
    """Copy notes into a standalone document so exporting can never
    touch the caller's objects.
    """
    return {"notes": [
        {"id": note['id'], "content": note['content']} for note in notes]}


def _draw_page_frame(pdf, width, height, watermark, stamp, page):
    """Draw the header and footer watermark on the current page."""
    pdf.setFont(FONT_NAME, 8)
    pdf.drawString(MARGIN, height - MARGIN / 2, f"Notes - exported {stamp}")
    pdf.drawRightString(width - MARGIN, height - MARGIN / 2, f"Page {page}")
    pdf.drawCentredString(width / 2, MARGIN / 2, watermark)
    pdf.setFont(FONT_NAME, FONT_SIZE)


def export_pdf(notes, destination, watermark=DEFAULT_WATERMARK,
               page_size="letter"):
    """Render notes into a multi-page PDF, one 'ID: n | Content: text'
    entry per note. Every page carries the watermark in the footer.

    Args:
        notes (list):       the notes (dicts) to render.
        destination (str):  the output file path.
        watermark (str):    footer text for every page.
        page_size (str):    'letter' or 'a4'.

    Returns:
        destination (str):  the output file path.

    """
    size = PAGE_SIZES.get(str(page_size).lower())
    if not size:
        raise ExportError(f"unknown page size '{page_size}'")
    _ensure_parent(destination)
    width, height = size
    max_width = width - (MARGIN * 2)
    top = height - MARGIN
    bottom = MARGIN
    stamp = datetime.now(tz=tzlocal.get_localzone()).strftime(
        "%Y-%m-%d %H:%M")

    pdf = canvas.Canvas(destination, pagesize=size)
    pdf.setTitle("Notes")
    page = 1
    _draw_page_frame(pdf, width, height, watermark, stamp, page)
    y_pos = top

    entries = [f"ID: {note['id']} | Content: {note['content']}"
               for note in notes]
    if not entries:
        entries = ["No notes."]
    for entry in entries:
        lines = []
        # keep the note's own line breaks, then wrap to the page width
        for part in entry.split("\n"):
            lines.extend(
                simpleSplit(part, FONT_NAME, FONT_SIZE, max_width) or [""])
        for line in lines:
            if y_pos - LINE_HEIGHT < bottom:
                pdf.showPage()
                page += 1
                _draw_page_frame(pdf, width, height, watermark, stamp, page)
                y_pos = top
            y_pos -= LINE_HEIGHT
            pdf.drawString(MARGIN, y_pos, line)
    pdf.save()
    return destination


def export_json(notes, destination):
    """Write notes as a pretty-printed JSON document with the same shape
    as the backing file.

    Args:
        notes (list):       the notes (dicts) to write.
        destination (str):  the output file path.

    Returns:
        destination (str):  the output file path.

    """
    _ensure_parent(destination)
    with open(destination, "w", encoding="utf-8") as out_file:
        json.dump(_snapshot(notes), out_file, indent=2, ensure_ascii=False)
    return destination


def export_yaml(notes, destination):
    """Write notes as a YAML document.

    Args:
        notes (list):       the notes (dicts) to write.
        destination (str):  the output file path.

    Returns:
        destination (str):  the output file path.

    """
    _ensure_parent(destination)
    with open(destination, "w", encoding="utf-8") as out_file:
        yaml.dump(
            _snapshot(notes),
            out_file,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True)
    return destination


EXPORTERS = {
    "pdf": export_pdf,
    "json": export_json,
    "yaml": export_yaml,
}


def get_exporter(fmt):
    """Look up the export function for a format name.

    Args:
        fmt (str):  'pdf', 'json' or 'yaml'.

    Returns:
        exporter (func): the export function.

    """
    try:
        return EXPORTERS[fmt.lower()]
    except KeyError:
        raise ExportError(f"unknown export format '{fmt}'") from None
