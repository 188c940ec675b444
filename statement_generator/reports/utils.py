import datetime
import io
import logging
import os
import re
import time
import zipfile

from django.conf import settings
from django.core.files.base import ContentFile
from django.utils import timezone
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from .documents import Column, LayoutBlock, StatementDocument, StatementRow, TextItem
from .exceptions import MalformedInputError, NotFoundError, StatementIOError

logger = logging.getLogger(__name__)

# Page geometry (points, origin top-left)
PAGE_SIZE = A4
PAGE_WIDTH, PAGE_HEIGHT = PAGE_SIZE
MARGIN = 50
RIGHT_EDGE = PAGE_WIDTH - MARGIN

SENDER_X = 100
SENDER_NAME_Y = 86
SENDER_ADDRESS_Y = 106

SALUTATION_X = MARGIN
SALUTATION_Y = 150
RECIPIENT_NAME_Y = 166
RECIPIENT_ADDRESS_Y = 184
NOTICE_Y = 212

HEADER_ROW_Y = 300
ROW_HEIGHT = 20
TABLE_TOP = HEADER_ROW_Y + ROW_HEIGHT

LOGO_WIDTH = 120
LOGO_HEIGHT = 60

SALUTATION_LABEL = "Dear"
TOTAL_LABEL = "TOTAL"
NOTICE_TEMPLATE = "Statement of account as of {date} is attached."

COLUMNS = (
    Column("Date", "date", x=55, width=145),
    Column("Document No.", "document_number", x=200, width=75),
    Column("Description", "description", x=275, width=75),
    Column("Debit", "debit", x=350, width=50),
    Column("Credit", "credit", x=400, width=100),
    Column("Balance", "balance", x=500, width=RIGHT_EDGE - 500),
)


def _parse_amount(text):
    if not text:
        return 0
    s = str(text).replace("\u00A0", " ").replace(",", "")
    s = re.sub(r"[^\d\.-]", "", s).strip()
    try:
        return float(s) if s not in ("", "-", ".") else 0
    except ValueError:
        return 0


def _plain_number(value):
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def format_statement_date(value):
    return value.strftime("%d/%m/%Y")


def _cell_text(value):
    if value is None:
        return ""
    if isinstance(value, (datetime.date, datetime.datetime)):
        return format_statement_date(value)
    if isinstance(value, (int, float)):
        return str(_plain_number(value))
    return str(value)


def _single_line(text):
    # drawString has no line breaking; keep multi-line addresses on one line
    parts = [p.strip() for p in str(text or "").splitlines() if p.strip()]
    return ", ".join(parts)


# Spreadsheet reading
def rows_from_workbook(workbook):
    if not workbook.worksheets:
        raise MalformedInputError("Spreadsheet has no worksheets")
    worksheet = workbook.worksheets[0]
    rows = []
    for values in worksheet.iter_rows(min_row=2, max_col=len(COLUMNS), values_only=True):
        rows.append(StatementRow.from_values(values))
    return rows


def load_statement_rows(source):
    try:
        if hasattr(source, "seek"):
            source.seek(0)
        workbook = load_workbook(source, data_only=True)
    except FileNotFoundError as exc:
        raise NotFoundError(f"Spreadsheet not found: {source}") from exc
    except (InvalidFileException, zipfile.BadZipFile, KeyError, ValueError, SyntaxError) as exc:
        raise MalformedInputError(f"Could not read spreadsheet: {exc}") from exc
    except OSError as exc:
        raise StatementIOError(f"Could not read spreadsheet: {exc}") from exc
    try:
        return rows_from_workbook(workbook)
    finally:
        workbook.close()


# Fonts
def _register_font(path):
    name = f"Statement-{os.path.splitext(os.path.basename(path))[0]}"
    if name not in pdfmetrics.getRegisteredFontNames():
        try:
            pdfmetrics.registerFont(TTFont(name, path))
        except (OSError, TTFError) as exc:
            raise StatementIOError(f"Could not load font {path}: {exc}") from exc
    return name


def statement_fonts():
    """
    Return the (regular, bold) font names used for the statement.

    Helvetica only covers WinAnsi, so Turkish names and addresses need a
    TrueType font configured through STATEMENT_FONT_PATH.
    """
    regular_path = getattr(settings, "STATEMENT_FONT_PATH", "")
    if not regular_path:
        return "Helvetica", "Helvetica-Bold"
    regular = _register_font(regular_path)
    bold_path = getattr(settings, "STATEMENT_BOLD_FONT_PATH", "")
    return regular, _register_font(bold_path) if bold_path else regular


# Layout
def compute_total(rows):
    total = 0
    for row in rows:
        debit = row.debit
        if not isinstance(debit, (int, float)):
            debit = _parse_amount(debit)
        total += debit
    return _plain_number(total)


def build_statement_document(rows, metadata, as_of, logo=None):
    rows = list(rows)
    regular, bold = statement_fonts()

    header = LayoutBlock("header", [
        [TextItem(_single_line(metadata.sender_name), SENDER_X, SENDER_NAME_Y, regular, 10)],
        [TextItem(_single_line(metadata.sender_address), SENDER_X, SENDER_ADDRESS_Y, regular, 8)],
    ])

    salutation = LayoutBlock("salutation", [
        [TextItem(SALUTATION_LABEL, SALUTATION_X, SALUTATION_Y, regular, 12)],
        [TextItem(_single_line(metadata.recipient_name), SALUTATION_X, RECIPIENT_NAME_Y, bold, 14)],
        [TextItem(_single_line(metadata.recipient_address), SALUTATION_X, RECIPIENT_ADDRESS_Y, regular, 10)],
    ])

    notice = LayoutBlock("notice", [
        [TextItem(NOTICE_TEMPLATE.format(date=format_statement_date(as_of)), SALUTATION_X, NOTICE_Y, regular, 12)],
    ])

    table = LayoutBlock("table")
    table.lines.append([
        TextItem(col.label, _column_anchor(col), HEADER_ROW_Y, bold, 10, col.align)
        for col in COLUMNS
    ])
    for index, row in enumerate(rows):
        y = TABLE_TOP + index * ROW_HEIGHT
        table.lines.append([
            TextItem(_cell_text(getattr(row, col.field)), _column_anchor(col), y, regular, 6, col.align)
            for col in COLUMNS
        ])

    total = compute_total(rows)
    last_y = TABLE_TOP + (len(rows) - 1) * ROW_HEIGHT if rows else HEADER_ROW_Y
    total_y = last_y + 2 * ROW_HEIGHT
    total_block = LayoutBlock("total", [
        [TextItem(TOTAL_LABEL, RIGHT_EDGE, total_y, bold, 12, "right")],
        [TextItem(_cell_text(total), RIGHT_EDGE, total_y + 16, regular, 12, "right")],
    ])

    return StatementDocument(
        blocks=[header, salutation, notice, table, total_block],
        total=total,
        logo=logo,
    )


def _column_anchor(col):
    if col.align == "right":
        return col.x + col.width
    if col.align == "center":
        return col.x + col.width / 2.0
    return col.x


# PDF generation
def _draw_item(pdf, item):
    pdf.setFont(item.font_name, item.font_size)
    # baseline sits one font size below the top of the text line
    y = PAGE_HEIGHT - item.y - item.font_size
    if item.align == "right":
        pdf.drawRightString(item.x, y, item.text)
    elif item.align == "center":
        pdf.drawCentredString(item.x, y, item.text)
    else:
        pdf.drawString(item.x, y, item.text)


def _draw_logo(pdf, logo):
    if hasattr(logo, "seek"):
        logo.seek(0)
    try:
        pdf.drawImage(
            ImageReader(logo),
            RIGHT_EDGE - LOGO_WIDTH,
            PAGE_HEIGHT - MARGIN - LOGO_HEIGHT,
            width=LOGO_WIDTH,
            height=LOGO_HEIGHT,
            preserveAspectRatio=True,
            anchor="ne",
            mask="auto",
        )
    except OSError as exc:
        raise StatementIOError(f"Could not read logo: {exc}") from exc


def draw_statement(document):
    buffer = io.BytesIO()
    try:
        pdf = canvas.Canvas(buffer, pagesize=PAGE_SIZE)
        pdf.setTitle("Account Statement")
        if document.logo is not None:
            _draw_logo(pdf, document.logo)
        for block in document.blocks:
            for line in block.lines:
                for item in line:
                    _draw_item(pdf, item)
        pdf.showPage()
        pdf.save()
        return buffer.getvalue()
    finally:
        buffer.close()


def render_statement_pdf(rows, metadata, as_of, logo=None):
    document = build_statement_document(rows, metadata, as_of, logo=logo)
    return draw_statement(document)


def write_statement_pdf(path, pdf_bytes):
    path = os.fspath(path)
    partial = path + ".part"
    try:
        with open(partial, "wb") as fh:
            fh.write(pdf_bytes)
        os.replace(partial, path)
    except OSError as exc:
        if os.path.exists(partial):
            os.remove(partial)
        raise StatementIOError(f"Could not write statement to {path}: {exc}") from exc
    return path


def timestamped_name(ext):
    return f"{int(time.time() * 1000)}{ext}"


def generate_pdf_from_request(statement_request, as_of=None):
    as_of = as_of or timezone.localdate()
    if not statement_request.spreadsheet:
        raise NotFoundError(f"Statement request {statement_request.pk} has no spreadsheet")

    try:
        with statement_request.spreadsheet.open("rb") as fh:
            rows = load_statement_rows(fh)
    except FileNotFoundError as exc:
        raise NotFoundError(f"Spreadsheet missing from storage: {statement_request.spreadsheet.name}") from exc

    logo = None
    if statement_request.logo:
        try:
            with statement_request.logo.open("rb") as fh:
                logo = io.BytesIO(fh.read())
        except OSError as exc:
            raise StatementIOError(f"Could not read logo: {exc}") from exc

    pdf_bytes = render_statement_pdf(rows, statement_request.metadata, as_of, logo=logo)
    return ContentFile(pdf_bytes, name=timestamped_name(".pdf"))
