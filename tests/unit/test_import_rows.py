"""Tests for spreadsheet row mapping."""

import pytest

from src.application.import_rows import (
    CellError,
    normalize_header,
    parse_import_row,
    parse_import_rows,
)


class TestNormalizeHeader:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("SKU", "sku"),
            ("  Stock_Mínimo ", "stock minimo"),
            ("Ubicación", "ubicacion"),
            ("Min   Stock", "min stock"),
            ("Categoría", "categoria"),
        ],
    )
    def test_normalize(self, header, expected):
        assert normalize_header(header) == expected


class TestParseImportRow:
    def test_spanish_headers(self):
        raw = {
            "SKU": "st-304",
            "Nombre": "Acero 304",
            "Stock": 12,
            "Stock Mínimo": 4,
            "Precio": "5000",
        }
        row = parse_import_row(raw, row_number=2)
        assert row.row_number == 2
        assert row.sku == "st-304"
        assert row.name == "Acero 304"
        assert row.stock == 12.0
        assert row.min_stock == 4.0
        assert row.price == 5000.0

    def test_english_headers(self):
        row = parse_import_row({"code": "BOLT-M10", "Location": "B2", "Unit": "un"})
        assert row.sku == "BOLT-M10"
        assert row.location == "B2"
        assert row.unit == "un"

    def test_absent_and_blank_cells_are_none(self):
        row = parse_import_row({"SKU": "A-1", "Stock": "", "Nombre": "   "})
        assert row.stock is None
        assert row.name is None
        assert row.price is None

    def test_decimal_comma(self):
        row = parse_import_row({"SKU": "A-1", "Precio": "12,5"})
        assert row.price == 12.5

    def test_numeric_code_loses_float_suffix(self):
        row = parse_import_row({"Codigo": 1001.0})
        assert row.sku == "1001"

    @pytest.mark.parametrize("value", ["abc", True, "nan", "1.234,5"])
    def test_bad_numbers(self, value):
        with pytest.raises(CellError):
            parse_import_row({"SKU": "A-1", "Stock": value})


class TestParseImportRows:
    def test_errors_name_sheet_rows(self):
        rows, errors = parse_import_rows(
            [
                {"SKU": "A-1", "Stock": 3},
                {"SKU": "A-2", "Precio": "abc"},
                {"SKU": "A-3"},
            ]
        )
        assert [r.sku for r in rows] == ["A-1", "A-3"]
        assert [r.row_number for r in rows] == [2, 4]
        assert errors == ["Row 3: invalid number in 'precio': 'abc'."]

    def test_empty_sheet(self):
        assert parse_import_rows([]) == ([], [])
