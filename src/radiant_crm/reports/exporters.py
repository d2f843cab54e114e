from __future__ import annotations

import io
from typing import Sequence

import pandas as pd
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .model import Column

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
PDF_MIMETYPE = "application/pdf"


def to_excel_bytes(rows: Sequence[dict], columns: Sequence[Column], *, sheet_name: str) -> io.BytesIO:
    """Write report rows into an in-memory workbook (never touches the disk)."""

    df = pd.DataFrame(
        [[row.get(c.key) for c in columns] for row in rows],
        columns=[c.label for c in columns],
    )
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)
    output.seek(0)
    return output


def to_pdf_bytes(title: str, rows: Sequence[dict], columns: Sequence[Column]) -> io.BytesIO:
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=landscape(A4),
        leftMargin=32,
        rightMargin=32,
        topMargin=32,
        bottomMargin=28,
        title=title,
    )
    styles = getSampleStyleSheet()

    data = [[c.label for c in columns]]
    for row in rows:
        data.append(["" if row.get(c.key) is None else str(row.get(c.key)) for c in columns])

    table = Table(data, repeatRows=1, hAlign="LEFT")
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#0284c7")),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
                ("FONTSIZE", (0, 0), (-1, -1), 9),
                ("ALIGN", (0, 0), (-1, -1), "LEFT"),
                ("VALIGN", (0, 0), (-1, -1), "TOP"),
                ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f1f5f9")]),
                ("GRID", (0, 0), (-1, -1), 0.3, colors.HexColor("#cbd5e1")),
            ]
        )
    )

    doc.build([Paragraph(title, styles["Title"]), Spacer(1, 12), table])
    buf.seek(0)
    return buf
