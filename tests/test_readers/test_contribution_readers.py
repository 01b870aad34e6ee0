"""
Tests for contribution file readers and the loader
"""

import json

import pytest

from contribstats.core.models import Contribution
from contribstats.readers.csv_reader import CSVReader
from contribstats.readers.json_reader import JSONReader
from contribstats.readers.jsonl_reader import JSONLReader
from contribstats.readers.loader import create_reader, load_contributions, load_records


class TestCSVReader:
    """Test CSV reader"""

    def test_type_inference(self, contributions_csv):
        rows = list(CSVReader(str(contributions_csv)))

        assert len(rows) == 6
        assert rows[0] == {"team_name": "Team A", "category": "Engineering", "value": 10}
        assert rows[4]["value"] is None
        assert rows[5]["category"] is None

    def test_float_and_text_values(self, tmp_path):
        csv_file = tmp_path / "c.csv"
        csv_file.write_text("category,value\nA,40.5\nB,n/a\n")

        rows = list(CSVReader(str(csv_file)).read_lazy())
        assert rows == [{"category": "A", "value": 40.5}, {"category": "B", "value": "n/a"}]

    def test_extra_columns_warn(self, tmp_path):
        csv_file = tmp_path / "bad.csv"
        csv_file.write_text("category,value\nA,1\nB,2,oops\nC,3\n")

        with pytest.warns(UserWarning, match="Skipping malformed row 3"):
            rows = list(CSVReader(str(csv_file)))

        assert [r["category"] for r in rows] == ["A", "C"]

    def test_short_row_reads_none(self, tmp_path):
        csv_file = tmp_path / "short.csv"
        csv_file.write_text("team_name,category,value\nTeam A,Eng\n")

        assert list(CSVReader(str(csv_file))) == [
            {"team_name": "Team A", "category": "Eng", "value": None}
        ]

    def test_delimiter(self, tmp_path):
        csv_file = tmp_path / "c.csv"
        csv_file.write_text("category;value\nA;1\n")

        assert list(CSVReader(str(csv_file), delimiter=";")) == [{"category": "A", "value": 1}]

    def test_columns_and_limit(self, contributions_csv):
        reader = CSVReader(str(contributions_csv))
        reader.set_columns(["category", "missing"])
        reader.set_limit(2)

        assert list(reader) == [
            {"category": "Engineering", "missing": None},
            {"category": "Engineering", "missing": None},
        ]

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="CSV file not found"):
            CSVReader(str(tmp_path / "nope.csv"))


class TestJSONReader:
    """Test JSON reader"""

    def test_array(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps([{"category": "A", "value": 1}, {"category": "B", "value": None}]))

        assert list(JSONReader(str(path))) == [
            {"category": "A", "value": 1},
            {"category": "B", "value": None},
        ]

    def test_auto_detect_records_key(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"meta": {"n": 1}, "contributions": [{"category": "A"}]}))

        assert list(JSONReader(str(path))) == [{"category": "A"}]

    def test_explicit_records_key(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"a": [{"x": 1}], "b": [{"x": 2}]}))

        assert list(JSONReader(str(path), records_key="b")) == [{"x": 2}]

    def test_missing_records_key(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"a": [{"x": 1}]}))

        with pytest.raises(ValueError, match="Key 'b' not found"):
            list(JSONReader(str(path), records_key="b"))

    def test_no_records(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps({"a": 1}))

        with pytest.raises(ValueError, match="Could not find a list of records"):
            list(JSONReader(str(path)))

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text("[{")

        with pytest.raises(ValueError, match="Invalid JSON file"):
            list(JSONReader(str(path)))

    def test_non_object_records_warn(self, tmp_path):
        path = tmp_path / "c.json"
        path.write_text(json.dumps([{"category": "A"}, 5, {"category": "B"}]))

        with pytest.warns(UserWarning, match="index 1"):
            rows = list(JSONReader(str(path)))
        assert rows == [{"category": "A"}, {"category": "B"}]


class TestJSONLReader:
    """Test JSONL reader"""

    def test_basic(self, tmp_path):
        path = tmp_path / "c.jsonl"
        path.write_text('{"category": "A", "value": 1}\n\n{"category": "B", "value": 2.5}\n')

        assert list(JSONLReader(str(path))) == [
            {"category": "A", "value": 1},
            {"category": "B", "value": 2.5},
        ]

    def test_malformed_lines(self, tmp_path):
        path = tmp_path / "c.jsonl"
        path.write_text('{"id": 1}\ninvalid json\n[1, 2]\n{"id": 2}\n')

        with pytest.warns(UserWarning) as record:
            rows = list(JSONLReader(str(path)))

        assert rows == [{"id": 1}, {"id": 2}]
        messages = [str(w.message) for w in record]
        assert "Skipping invalid JSON at line 2" in messages
        assert "Skipping non-dict row at line 3" in messages


class TestLoader:
    """Test reader selection and contribution loading"""

    @pytest.mark.parametrize(
        "name,cls",
        [("c.csv", CSVReader), ("c.json", JSONReader), ("c.jsonl", JSONLReader), ("c.ndjson", JSONLReader)],
    )
    def test_create_reader_by_extension(self, tmp_path, name, cls):
        path = tmp_path / name
        path.write_text("")
        assert isinstance(create_reader(str(path)), cls)

    def test_explicit_format(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text('{"category": "A"}\n')

        assert isinstance(create_reader(str(path), format="jsonl"), JSONLReader)
        assert load_records(str(path), format="jsonl") == [{"category": "A"}]

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "data.parquet"
        path.write_text("")

        with pytest.raises(ValueError, match="Unsupported file format: .parquet"):
            create_reader(str(path))

    def test_load_contributions(self, contributions_csv):
        loaded = load_contributions(str(contributions_csv))

        assert loaded[0] == Contribution("Team A", "Engineering", 10)
        assert loaded[4] == Contribution("Team E", "Sales", None)
        assert loaded[5] == Contribution("Team F", None, 7)

    def test_team_field_aliases(self, tmp_path):
        path = tmp_path / "c.jsonl"
        path.write_text(
            '{"teamName": "T1", "category": "A", "value": 1, "id": 5}\n'
            '{"team": "T2", "category": "A", "value": 2, "id": "x"}\n'
        )

        loaded = load_contributions(str(path))
        assert loaded == [
            Contribution("T1", "A", 1, id=5),
            Contribution("T2", "A", 2, id=None),
        ]
