import pytest
from pydantic import ValidationError

from readsutils.models import (
    DownloadReadsOutput,
    DownloadReadsParams,
    ExportParams,
    UploadReadsParams,
    ValidateFASTQOutput,
    ValidateFASTQParams,
    coerce_params,
    coerce_params_list,
)
from readsutils.utils.exceptions import ArgumentValidationError

BASE_UPLOAD = {"fwd_file": "/data/fwd.fq", "wsid": 7, "objid": 3, "sequencing_tech": "PacBio"}


class TestUploadReadsParams:
    def test_minimal_valid(self) -> None:
        params = UploadReadsParams(**BASE_UPLOAD)
        assert params.to_wire() == BASE_UPLOAD

    def test_nested_metadata_is_serialized(self) -> None:
        params = UploadReadsParams(
            **BASE_UPLOAD,
            strain={"genus": "Escherichia", "species": "coli", "location": {"lat": 1.5}},
            single_genome=1,
        )
        wire = params.to_wire()
        assert wire["strain"] == {"genus": "Escherichia", "species": "coli", "location": {"lat": 1.5}}
        assert wire["single_genome"] == 1
        assert type(wire["single_genome"]) is int

    @pytest.mark.parametrize(
        "changes,message",
        [
            ({"fwd_id": "shock-1"}, "exactly one of fwd_id"),
            ({"fwd_file": None}, "exactly one of fwd_id"),
            ({"wsname": "ws"}, "wsid or wsname"),
            ({"wsid": None}, "wsid or wsname"),
            ({"name": "reads"}, "objid or name"),
            ({"objid": None}, "objid or name"),
            ({"sequencing_tech": None}, "sequencing_tech is required"),
        ],
    )
    def test_cross_field_rules(self, changes, message) -> None:
        with pytest.raises(ValidationError, match=message):
            UploadReadsParams(**{**BASE_UPLOAD, **changes})

    def test_source_reads_ref_replaces_sequencing_tech(self) -> None:
        params = UploadReadsParams(**{**BASE_UPLOAD, "sequencing_tech": None, "source_reads_ref": "1/2/3"})
        assert "sequencing_tech" not in params.to_wire()

    @pytest.mark.parametrize(
        "field,value",
        [
            ("insert_size_mean", 250.0),
            ("insert_size_std_dev", 12.5),
            ("sequencing_tech", "Illumina"),
            ("read_orientation_outward", 0),
            ("strain", {"genus": "Escherichia"}),
            ("source", {"source": "JGI"}),
            ("single_genome", 1),
        ],
    )
    def test_source_reads_ref_rejects_copied_metadata(self, field, value) -> None:
        with pytest.raises(ValidationError, match=f"{field} cannot be specified with source_reads_ref"):
            UploadReadsParams(**{**BASE_UPLOAD, "sequencing_tech": None, "source_reads_ref": "1/2/3", field: value})

    @pytest.mark.parametrize("value,expected", [(True, 1), (False, 0), (1, 1), (0, 0)])
    def test_boolean_fields_are_sent_as_ints(self, value, expected) -> None:
        wire = UploadReadsParams(**BASE_UPLOAD, single_genome=value, interleaved=value, read_orientation_outward=value).to_wire()
        for key in ("single_genome", "interleaved", "read_orientation_outward"):
            assert wire[key] == expected
            assert type(wire[key]) is int

    @pytest.mark.parametrize("value", [2, -1, "yes"])
    def test_boolean_fields_reject_out_of_range(self, value) -> None:
        with pytest.raises(ValidationError):
            UploadReadsParams(**BASE_UPLOAD, interleaved=value)

    def test_unknown_fields_are_rejected(self) -> None:
        with pytest.raises(ValidationError):
            UploadReadsParams(**BASE_UPLOAD, fwd_flie="typo")


def test_download_params_tern_and_libraries() -> None:
    assert DownloadReadsParams(read_libraries=["1/2/3"]).to_wire() == {"read_libraries": ["1/2/3"]}
    assert DownloadReadsParams(read_libraries=["a"], interleaved="false").interleaved == "false"
    with pytest.raises(ValidationError):
        DownloadReadsParams(read_libraries=["a"], interleaved="maybe")
    with pytest.raises(ValidationError):
        DownloadReadsParams(read_libraries=[])


def test_validate_fastq_interleaved_is_sent_as_int() -> None:
    assert ValidateFASTQParams(file_path="a.fq", interleaved=True).to_wire() == {"file_path": "a.fq", "interleaved": 1}
    assert ValidateFASTQParams(file_path="a.fq", interleaved=0).to_wire() == {"file_path": "a.fq", "interleaved": 0}


def test_outputs_accept_int_booleans_and_extra_members() -> None:
    out = ValidateFASTQOutput.model_validate({"validated": 1, "report": "ok"})
    assert out.validated is True
    assert out.model_extra == {"report": "ok"}

    files = DownloadReadsOutput.model_validate({"files": {"1/2/3": {"ref": "1/2/3", "read_size": 150}}})
    assert files.files["1/2/3"].read_size == 150


def test_coerce_params_accepts_models_and_mappings() -> None:
    model = ExportParams(input_ref="1/2/3")
    assert coerce_params(ExportParams, model, "export_reads") is model
    assert coerce_params(ExportParams, {"input_ref": "x"}, "export_reads").input_ref == "x"


@pytest.mark.parametrize("value", [["1/2/3"], "1/2/3", 5, None])
def test_coerce_params_rejects_non_mappings(value) -> None:
    with pytest.raises(ArgumentValidationError) as err:
        coerce_params(ExportParams, value, "export_reads")
    assert err.value.method_name == "export_reads"
    assert 'Invalid type for argument 1 "params"' in err.value.message


def test_coerce_params_wraps_model_errors() -> None:
    with pytest.raises(ArgumentValidationError) as err:
        coerce_params(ExportParams, {"ref": "x"}, "export_reads")
    assert "Invalid value for argument 1" in err.value.message
    assert isinstance(err.value.__cause__, ValidationError)


def test_coerce_params_list() -> None:
    items = coerce_params_list(ValidateFASTQParams, ({"file_path": "a.fq"}, ValidateFASTQParams(file_path="b.fq")), "validateFASTQ")
    assert [i.file_path for i in items] == ["a.fq", "b.fq"]
    with pytest.raises(ArgumentValidationError):
        coerce_params_list(ValidateFASTQParams, {"file_path": "a.fq"}, "validateFASTQ")
    with pytest.raises(ArgumentValidationError):
        coerce_params_list(ValidateFASTQParams, [["a.fq"]], "validateFASTQ")
