"""Tests for the JSON and CSV event file adapters."""

import json
from pathlib import Path

import pytest

from fiado.exceptions import EventFileError
from fiado.ingestion import CSVEventAdapter, JSONEventAdapter, adapter_for

CSV_HEADER = "id,clienteId,tipo,fecha,producto,cantidad,costoUnitario,gananciaUnitaria,totalVenta,montoPago,borrado\n"


class TestAdapterFor:
    def test_by_extension(self):
        assert isinstance(adapter_for(Path("events.json")), JSONEventAdapter)
        assert isinstance(adapter_for(Path("EVENTS.CSV")), CSVEventAdapter)

    def test_unsupported_extension(self):
        with pytest.raises(EventFileError, match="unsupported file type"):
            adapter_for(Path("events.xlsx"))


class TestJSONEventAdapter:
    def setup_method(self):
        self.adapter = JSONEventAdapter()

    def test_parse_list(self, tmp_path: Path, make_sale, make_payment):
        path = tmp_path / "events.json"
        path.write_text(json.dumps([make_sale("v1", 100), make_payment("p1", 50)]))
        result = self.adapter.parse(path)
        assert result.source == "json"
        assert result.file_path == path
        assert [r["id"] for r in result.records] == ["v1", "p1"]

    def test_parse_events_object(self, tmp_path: Path, make_sale):
        path = tmp_path / "export.json"
        path.write_text(json.dumps({"events": [make_sale("v1", 100)]}))
        assert len(self.adapter.parse(path).records) == 1

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(EventFileError, match="file not found"):
            self.adapter.parse(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("[{")
        with pytest.raises(EventFileError, match="invalid JSON"):
            self.adapter.parse(path)

    def test_object_without_events(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text('{"ventas": []}')
        with pytest.raises(EventFileError, match="expected a list"):
            self.adapter.parse(path)

    def test_non_object_entries(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text('[{"id": "v1"}, 3]')
        with pytest.raises(EventFileError, match="must be a JSON object"):
            self.adapter.parse(path)

    def test_validate_clean(self, tmp_path: Path, make_sale, make_payment):
        path = tmp_path / "events.json"
        path.write_text(json.dumps([make_sale("v1", 100), make_payment("p1", 50)]))
        assert self.adapter.validate(self.adapter.parse(path)) == []

    def test_validate_reports_problems(self, tmp_path: Path, make_sale, make_payment):
        orphan = make_payment("p1", 50)
        del orphan["clienteId"]
        path = tmp_path / "events.json"
        path.write_text(json.dumps([make_sale("v1", 100), {"id": "x1", "tipo": "pago"}, orphan]))

        errors = self.adapter.validate(self.adapter.parse(path))
        assert len(errors) == 2
        assert errors[0].startswith("Record 2 (id=x1):")
        assert errors[1] == "Event p1 has no clienteId"


class TestCSVEventAdapter:
    def setup_method(self):
        self.adapter = CSVEventAdapter()

    def _write(self, tmp_path: Path, body: str, header: str = CSV_HEADER) -> Path:
        path = tmp_path / "events.csv"
        path.write_text(header + body, encoding="utf-8")
        return path

    def test_parse_rows(self, tmp_path: Path):
        path = self._write(
            tmp_path,
            "v1,cli-001,venta,1709287200000,Pan,2,100,50,300,,no\n"
            "p1,cli-001,pago,2024-03-02T10:00:00Z,,,,,,120,\n",
        )
        result = self.adapter.parse(path)
        assert result.source == "csv"
        sale, payment = result.records
        assert sale["fecha"] == 1709287200000
        assert sale["borrado"] is False
        assert sale["totalVenta"] == "300"
        assert "montoPago" not in sale
        assert payment["fecha"] == "2024-03-02T10:00:00Z"
        assert "producto" not in payment
        assert "borrado" not in payment
        assert self.adapter.validate(result) == []

    def test_bom_is_stripped(self, tmp_path: Path):
        path = tmp_path / "events.csv"
        path.write_text("\ufeff" + CSV_HEADER + "p1,cli-001,pago,0,,,,,,10,\n", encoding="utf-8")
        assert self.adapter.parse(path).records[0]["id"] == "p1"

    @pytest.mark.parametrize("cell,expected", [("true", True), ("Sí", True), ("1", True), ("N", False)])
    def test_borrado_values(self, tmp_path: Path, cell, expected):
        path = self._write(tmp_path, f"p1,cli-001,pago,0,,,,,,10,{cell}\n")
        assert self.adapter.parse(path).records[0]["borrado"] is expected

    def test_invalid_borrado(self, tmp_path: Path):
        path = self._write(tmp_path, "p1,cli-001,pago,0,,,,,,10,quizas\n")
        with pytest.raises(EventFileError, match="row 2: invalid borrado"):
            self.adapter.parse(path)

    def test_missing_columns(self, tmp_path: Path):
        path = self._write(tmp_path, "cli-001,10\n", header="clienteId,montoPago\n")
        with pytest.raises(EventFileError, match="missing columns: id, tipo"):
            self.adapter.parse(path)

    def test_blank_rows_skipped(self, tmp_path: Path):
        path = self._write(tmp_path, "p1,cli-001,pago,0,,,,,,10,\n,,,,,,,,,,\n")
        assert len(self.adapter.parse(path).records) == 1

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(EventFileError, match="file not found"):
            self.adapter.parse(tmp_path / "nope.csv")
