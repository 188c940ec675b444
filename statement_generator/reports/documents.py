"""
Value types shared by the spreadsheet reader, the metadata resolvers and the
statement renderer.

Layout coordinates are points measured from the top-left corner of the page,
the way the statement template is laid out. The renderer flips them onto
reportlab's bottom-left origin when drawing.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

METADATA_FIELDS = ("sender_name", "sender_address", "recipient_name", "recipient_address")
ROW_FIELDS = ("date", "document_number", "description", "debit", "credit", "balance")


@dataclass(frozen=True)
class StatementMetadata:
    sender_name: str = ""
    sender_address: str = ""
    recipient_name: str = ""
    recipient_address: str = ""

    @classmethod
    def from_dict(cls, data):
        # Missing or null fields become empty strings; nothing is rejected here.
        data = data or {}
        return cls(**{name: "" if data.get(name) is None else str(data.get(name)) for name in METADATA_FIELDS})

    def to_dict(self):
        return {name: getattr(self, name) for name in METADATA_FIELDS}


@dataclass(frozen=True)
class StatementRow:
    date: Any = None
    document_number: Any = None
    description: Any = None
    debit: Any = None
    credit: Any = None
    balance: Any = None

    @classmethod
    def from_values(cls, values):
        values = tuple(values)[:len(ROW_FIELDS)]
        values = values + (None,) * (len(ROW_FIELDS) - len(values))
        return cls(*values)


@dataclass(frozen=True)
class Column:
    label: str
    field: str
    x: float
    width: float
    align: str = "left"


@dataclass(frozen=True)
class TextItem:
    text: str
    x: float
    y: float
    font_name: str = "Helvetica"
    font_size: float = 10
    align: str = "left"


@dataclass
class LayoutBlock:
    kind: str
    lines: List[List[TextItem]] = field(default_factory=list)


@dataclass
class StatementDocument:
    blocks: List[LayoutBlock]
    total: Any = 0
    logo: Optional[Any] = None

