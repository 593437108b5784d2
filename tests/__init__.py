"""
Test utilities shared across test modules.

Fixtures live in conftest.py.
"""

import io

from docx import Document


DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def make_docx(paragraphs, table_rows=None) -> bytes:
    """Build a DOCX document in memory."""
    doc = Document()
    for text in paragraphs:
        doc.add_paragraph(text)

    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for row, values in zip(table.rows, table_rows):
            for cell, value in zip(row.cells, values):
                cell.text = value

    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()
