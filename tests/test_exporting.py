import json
import os

from json_log_extractor.exporting import (
    beautify_json,
    export_all_as_csv,
    export_all_as_json,
    export_to_csv,
    write_export_file,
)
from json_log_extractor.extractor import extract
from json_log_extractor.models import TabularRow


class TestBeautify:
    def test_indent(self):
        assert beautify_json({"a": [1]}, indent=2) == '{\n  "a": [\n    1\n  ]\n}'

    def test_none(self):
        assert beautify_json(None) == "null"

    def test_unserialisable(self):
        assert beautify_json({"a": {1, 2}}).startswith("Error beautifying JSON: ")


class TestExportToCsv:
    def test_without_size(self):
        rows = [TabularRow("a", "1", "number"), TabularRow("", "[Object]", "object", 1)]
        assert export_to_csv(rows) == "Path,Value,Type\na,1,number\n,[Object],object\n"

    def test_with_size(self):
        rows = [TabularRow("", "[Object]", "object", 1), TabularRow("a", "1", "number")]
        assert export_to_csv(rows, include_size=True) == (
            "Path,Value,Type,Size\n,[Object],object,1\na,1,number,\n"
        )

    def test_quotes_values(self):
        out = export_to_csv([TabularRow("msg", 'he said "hi", ok', "string")])
        assert out.splitlines()[1] == 'msg,"he said ""hi"", ok",string'


class TestExportAll:
    def test_json_keeps_only_valid(self):
        fragments = extract('{"a":1} {"b": tru}')
        assert len(fragments) == 2
        assert json.loads(export_all_as_json(fragments)) == [{"a": 1}]

    def test_csv_numbers_fragments(self):
        fragments = extract('{"a":1} {"b":[2]}')
        assert export_all_as_csv(fragments).splitlines() == [
            "JSON Object,Path,Value,Type,Size",
            "1,,[Object],object,1",
            "1,a,1,number,",
            "2,,[Object],object,1",
            "2,b,[Array(1)],array,1",
            "2,b[0],2,number,",
        ]


class TestWriteExportFile:
    def test_adds_extension(self, tmp_path):
        path = write_export_file("x", "report", "csv", str(tmp_path))
        assert path == os.path.join(str(tmp_path), "report.csv")
        with open(path, encoding="utf-8") as f:
            assert f.read() == "x"

    def test_keeps_existing_extension(self, tmp_path):
        path = write_export_file("{}", "out.JSON", "json", str(tmp_path))
        assert os.path.basename(path) == "out.JSON"

    def test_default_name(self, tmp_path):
        path = write_export_file("[]", "  ", "json", str(tmp_path))
        assert os.path.basename(path) == "extracted.json"
