import json
from datetime import date

import pytest
from conftest import STUDENT

from app.services.errors import ImportValidationError
from app.services.merge import merge_states
from app.services.transfer import MISSING_ID_MESSAGE, export_document, export_filename, import_and_merge, parse_import


class TestParseImport:
    def test_minimal_document_is_accepted(self):
        state = parse_import(json.dumps({"students": [STUDENT], "goals": []}))
        assert [s.id for s in state.students] == ["S1"]
        assert state.objectives == []
        assert state.data_points == []

    def test_bytes_are_accepted(self):
        state = parse_import(json.dumps({"students": [], "goals": []}).encode("utf-8"))
        assert state.students == []

    @pytest.mark.parametrize("raw", ["{not json", "", '"just a string"'])
    def test_unparseable_input_is_rejected(self, raw):
        with pytest.raises(ImportValidationError):
            parse_import(raw)

    @pytest.mark.parametrize(
        "document",
        [
            {"students": []},
            {"goals": []},
            {"students": {}, "goals": []},
            {"students": [], "goals": "G1"},
            [],
        ],
    )
    def test_missing_required_arrays_are_rejected(self, document):
        with pytest.raises(ImportValidationError, match="Invalid file format"):
            parse_import(json.dumps(document))

    def test_record_without_id_rejects_whole_import(self):
        with pytest.raises(ImportValidationError) as excinfo:
            parse_import(json.dumps({"students": [STUDENT, {"name": "No id"}], "goals": []}))
        assert str(excinfo.value) == MISSING_ID_MESSAGE

    def test_off_type_fields_are_imported_as_is(self):
        state = parse_import(json.dumps({"students": [{"id": "S9", "grade": 5, "name": "X"}], "goals": []}))
        assert state.students[0].grade == 5
        assert state.to_document()["students"] == [{"id": "S9", "grade": 5, "name": "X"}]

    def test_record_without_parent_id_is_rejected(self):
        document = {"students": [STUDENT], "goals": [{"id": "G9", "description": "No student"}]}
        with pytest.raises(ImportValidationError, match="parent id"):
            parse_import(json.dumps(document))


class TestExport:
    def test_export_is_pretty_printed_snapshot(self, sample_state):
        raw = export_document(sample_state)
        assert json.loads(raw) == sample_state.to_document()
        assert "\n  " in raw

    def test_export_import_merge_is_a_no_op(self, sample_state):
        merged = import_and_merge(sample_state, export_document(sample_state))
        assert merged.to_document() == sample_state.to_document()

    def test_filename_uses_the_date(self):
        assert export_filename(date(2024, 5, 17)) == "sprout_backup_2024-05-17.json"


class TestImportAndMerge:
    def test_existing_student_name_is_kept(self, sample_state):
        raw = json.dumps({"students": [{**STUDENT, "name": "Renamed"}], "goals": []})
        merged = import_and_merge(sample_state, raw)
        assert [s.name for s in merged.students] == ["Avery"]

    def test_new_records_are_added(self, sample_state):
        raw = json.dumps({"students": [{"id": "S2", "name": "Blake"}], "goals": [{"id": "G9", "studentId": "S2"}]})
        merged = import_and_merge(sample_state, raw)
        assert [s.id for s in merged.students] == ["S1", "S2"]
        assert [g.id for g in merged.goals] == ["G1", "G9"]

    def test_matches_plain_merge(self, sample_state):
        incoming = {"students": [{"id": "S2", "name": "Blake"}], "goals": []}
        assert import_and_merge(sample_state, json.dumps(incoming)) == merge_states(
            sample_state, parse_import(json.dumps(incoming))
        )
