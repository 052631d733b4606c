"""Unit tests for output rendering."""

import csv
import json

import pytest

from hvcli.models import PowerProviderComponent
from hvcli.output import handle_output_choice
from hvcli.utils import NoOutputFilenameError, OutputFileExistsError

COMPONENTS = [
    PowerProviderComponent(id="o-1", name="Outlet 1", number=1),
    PowerProviderComponent(id="o-2", name="Outlet 2", number=2, panel_number=1),
]


class TestHandleOutputChoice:
    """Tests for handle_output_choice."""

    def test_record_blocks(self, capsys: pytest.CaptureFixture) -> None:
        handle_output_choice(COMPONENTS, "record")

        out = capsys.readouterr().out
        assert "---- [1] ----" in out
        assert "---- [2] ----" in out
        assert "name: Outlet 2" in out
        assert "panel_number: \n" in out

    def test_json(self, capsys: pytest.CaptureFixture) -> None:
        handle_output_choice(COMPONENTS, "json")

        data = json.loads(capsys.readouterr().out)
        assert data[1] == {"id": "o-2", "name": "Outlet 2", "number": 2, "panel_number": 1}

    def test_table(self, capsys: pytest.CaptureFixture) -> None:
        handle_output_choice(COMPONENTS, "table", total_label="component(s)")

        out = capsys.readouterr().out
        assert out.startswith("┌")
        assert "│ Number │" in out
        assert "Total: 2 component(s)" in out

    def test_empty_table(self, capsys: pytest.CaptureFixture) -> None:
        handle_output_choice([], "table")

        assert "No items found." in capsys.readouterr().out

    def test_csv_file(self, tmp_path) -> None:
        filename = tmp_path / "components.csv"

        handle_output_choice(COMPONENTS, "csv-file", str(filename))

        with open(filename, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert rows[0] == {"id": "o-1", "name": "Outlet 1", "number": "1", "panel_number": ""}

    def test_csv_file_requires_filename(self) -> None:
        with pytest.raises(NoOutputFilenameError):
            handle_output_choice(COMPONENTS, "csv-file")

    def test_csv_file_refuses_overwrite(self, tmp_path) -> None:
        filename = tmp_path / "components.csv"
        filename.write_text("keep me", encoding="utf-8")

        with pytest.raises(OutputFileExistsError):
            handle_output_choice(COMPONENTS, "csv-file", str(filename))

        assert filename.read_text(encoding="utf-8") == "keep me"
