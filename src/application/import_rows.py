"""
Spreadsheet row mapping for the inventory bulk import.

Rows arrive as header -> cell dictionaries (the spreadsheet reader lives
outside this service). Headers are matched case- and accent-insensitively
against the Spanish column names used by the shop's templates, with
English names accepted as well.
"""

import math
import unicodedata
from typing import Any

from src.core.entities.inventory import InventoryImportRow

COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "sku": ("sku", "codigo", "code"),
    "name": ("nombre", "name"),
    "category": ("categoria", "category"),
    "stock": ("stock",),
    "min_stock": ("stock minimo", "min stock", "minimum stock"),
    "unit": ("unidad", "unit"),
    "location": ("ubicacion", "location"),
    "price": ("precio", "price"),
}

NUMERIC_FIELDS = ("stock", "min_stock", "price")
FIRST_DATA_ROW = 2  # row 1 holds the headers


class CellError(ValueError):
    """A cell that cannot be read as the column's type."""

    def __init__(self, column: str, value: Any):
        super().__init__(f"invalid number in '{column}': {value!r}")
        self.column = column


def normalize_header(header: str) -> str:
    """``"  Stock_Mínimo "`` -> ``"stock minimo"``."""
    decomposed = unicodedata.normalize("NFKD", str(header))
    plain = "".join(c for c in decomposed if not unicodedata.combining(c))
    return " ".join(plain.replace("_", " ").lower().split())


def _text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def _number(column: str, value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, bool):
        raise CellError(column, value)
    if isinstance(value, int | float):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        # Decimal comma, as typed in local spreadsheets
        if text.count(",") == 1 and "." not in text:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            raise CellError(column, value) from None
    if not math.isfinite(number):
        raise CellError(column, value)
    return number


def parse_import_row(raw: dict[str, Any], row_number: int | None = None) -> InventoryImportRow:
    """
    Map one raw row onto ``InventoryImportRow``.

    Absent columns and blank cells stay ``None`` so an update keeps the
    current value. Raises ``CellError`` on a non-numeric numeric cell.
    """
    by_header = {normalize_header(k): v for k, v in raw.items()}
    values: dict[str, Any] = {"row_number": row_number}

    for field, aliases in COLUMN_ALIASES.items():
        header = next((a for a in aliases if a in by_header), None)
        if header is None:
            continue
        cell = by_header[header]
        if field in NUMERIC_FIELDS:
            values[field] = _number(header, cell)
        else:
            values[field] = _text(cell)

    return InventoryImportRow(**values)


def parse_import_rows(
    raw_rows: list[dict[str, Any]],
) -> tuple[list[InventoryImportRow], list[str]]:
    """Parse every row; unreadable rows become ``Row N: ...`` messages."""
    rows: list[InventoryImportRow] = []
    errors: list[str] = []
    for index, raw in enumerate(raw_rows):
        row_number = index + FIRST_DATA_ROW
        try:
            rows.append(parse_import_row(raw, row_number))
        except CellError as e:
            errors.append(f"Row {row_number}: {e}.")
    return rows, errors
