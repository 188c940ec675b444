import io
import zipfile

from openpyxl import Workbook
from PyPDF2 import PdfReader

HEADER = ["Date", "Document No.", "Description", "Debit", "Credit", "Balance"]


def build_workbook(rows, header=HEADER):
    wb = Workbook()
    ws = wb.active
    ws.append(header)
    for row in rows:
        ws.append(row)
    return wb


def workbook_bytes(rows, header=HEADER):
    buffer = io.BytesIO()
    build_workbook(rows, header).save(buffer)
    return buffer.getvalue()


def corrupt_workbook_bytes(rows=()):
    """A zip-valid xlsx whose workbook part is not well-formed XML."""
    source = zipfile.ZipFile(io.BytesIO(workbook_bytes(list(rows))))
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as target:
        for info in source.infolist():
            data = source.read(info.filename)
            if info.filename == "xl/workbook.xml":
                data = b"<workbook><<<broken"
            target.writestr(info, data)
    return buffer.getvalue()


def pdf_text(pdf_bytes):
    reader = PdfReader(io.BytesIO(pdf_bytes))
    return "\n".join(page.extract_text() or "" for page in reader.pages)


def find_block(document, kind):
    return next(b for b in document.blocks if b.kind == kind)


def block_texts(document, kind):
    return [item.text for line in find_block(document, kind).lines for item in line]


def table_rows(document):
    # first line of the table block is the column header row
    return find_block(document, "table").lines[1:]
