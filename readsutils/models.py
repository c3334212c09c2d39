"""Typed parameter and result structures for the ReadsUtils methods.

Parameter models reject unknown members so misspelled fields fail locally.
Result models keep any extra members the service sends back.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, ValidationError, model_validator

from readsutils.utils.exceptions import ArgumentValidationError

Tern = Literal["true", "false"]

# KBase boolean: 0 or 1 on the wire. Python bools are accepted and sent as ints.
KBaseBool = Annotated[int, BeforeValidator(lambda v: int(v) if isinstance(v, bool) else v), Field(ge=0, le=1)]


class _Params(BaseModel):
    model_config = ConfigDict(extra="forbid")

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class _Output(BaseModel):
    model_config = ConfigDict(extra="allow")


# KBaseCommon types shared by upload and download.


class Location(_Output):
    lat: float | None = None
    lon: float | None = None
    elevation: float | None = None
    date: str | None = None
    description: str | None = None


class SourceInfo(_Output):
    source: str | None = None
    source_id: str | None = None
    project_id: str | None = None


class StrainInfo(_Output):
    genetic_code: int | None = None
    genus: str | None = None
    species: str | None = None
    strain: str | None = None
    organelle: str | None = None
    source: SourceInfo | None = None
    ncbi_taxid: int | None = None
    location: Location | None = None


class ValidateFASTQParams(_Params):
    """A FASTQ file (.fq, .fnq or .fastq) to validate. The service strips blank lines in place first."""
    file_path: str
    interleaved: KBaseBool | None = None


class ValidateFASTQOutput(_Output):
    validated: bool


_FWD_SOURCES = ("fwd_id", "fwd_file", "fwd_file_url", "fwd_staging_file_name")

# Metadata that source_reads_ref copies from the source object; passing it as well is an error.
_COPIED_FROM_SOURCE = (
    "insert_size_mean",
    "insert_size_std_dev",
    "sequencing_tech",
    "read_orientation_outward",
    "strain",
    "source",
    "single_genome",
)


class UploadReadsParams(_Params):
    """
    Input for loading a set of reads into the data stores.

    Exactly one forward-reads source, one workspace selector (``wsid`` or
    ``wsname``) and one object selector (``objid`` or ``name``) must be given.
    ``sequencing_tech`` is required unless metadata is copied from
    ``source_reads_ref``, in which case none of the copied metadata fields
    may be passed.
    """
    fwd_id: str | None = None
    fwd_file: str | None = None
    fwd_file_url: str | None = None
    fwd_staging_file_name: str | None = None
    rev_id: str | None = None
    rev_file: str | None = None
    rev_file_url: str | None = None
    rev_staging_file_name: str | None = None
    wsid: int | None = None
    wsname: str | None = None
    objid: int | None = None
    name: str | None = None
    sequencing_tech: str | None = None
    single_genome: KBaseBool | None = None
    strain: StrainInfo | None = None
    source: SourceInfo | None = None
    interleaved: KBaseBool | None = None
    read_orientation_outward: KBaseBool | None = None
    insert_size_mean: float | None = None
    insert_size_std_dev: float | None = None
    source_reads_ref: str | None = None
    download_type: str | None = None

    @model_validator(mode="after")
    def _check_selectors(self) -> "UploadReadsParams":
        fwd = [key for key in _FWD_SOURCES if getattr(self, key)]
        if len(fwd) != 1:
            raise ValueError(f"exactly one of {', '.join(_FWD_SOURCES)} must be specified")
        if (self.wsid is None) == (not self.wsname):
            raise ValueError("exactly one of wsid or wsname must be specified")
        if (self.objid is None) == (not self.name):
            raise ValueError("exactly one of objid or name must be specified")
        if self.source_reads_ref:
            passed = [key for key in _COPIED_FROM_SOURCE if getattr(self, key) is not None]
            if passed:
                raise ValueError(f"{', '.join(passed)} cannot be specified with source_reads_ref")
        elif not self.sequencing_tech:
            raise ValueError("sequencing_tech is required unless source_reads_ref is given")
        return self


class UploadReadsOutput(_Output):
    obj_ref: str


class DownloadReadsParams(_Params):
    """``interleaved`` is a tern: unset keeps each library's own layout."""
    read_libraries: list[str] = Field(min_length=1)
    interleaved: Tern | None = None


class ReadsFiles(_Output):
    fwd: str | None = None
    fwd_name: str | None = None
    rev: str | None = None
    rev_name: str | None = None
    otype: str | None = None
    type: str | None = None


class DownloadedReadLibrary(_Output):
    files: ReadsFiles | None = None
    ref: str | None = None
    single_genome: Tern | None = None
    read_orientation_outward: Tern | None = None
    sequencing_tech: str | None = None
    strain: StrainInfo | None = None
    source: SourceInfo | None = None
    insert_size_mean: float | None = None
    insert_size_std_dev: float | None = None
    read_count: int | None = None
    read_size: int | None = None
    gc_content: float | None = None
    total_bases: int | None = None
    read_length_mean: float | None = None
    read_length_stdev: float | None = None
    phred_type: str | None = None
    number_of_duplicates: int | None = None
    qual_min: float | None = None
    qual_max: float | None = None
    qual_mean: float | None = None
    qual_stdev: float | None = None
    base_percentages: dict[str, float] | None = None


class DownloadReadsOutput(_Output):
    files: dict[str, DownloadedReadLibrary] = Field(default_factory=dict)


class ExportParams(_Params):
    input_ref: str


class ExportOutput(_Output):
    shock_id: str


P = TypeVar("P", bound=_Params)


def _bad_argument(method_name: str, value: Any, problem: str) -> ArgumentValidationError:
    return ArgumentValidationError(
        f"Invalid arguments passed to {method_name}:\n\t{problem} (value was {value!r})",
        method_name=method_name,
    )


def coerce_params(model: type[P], value: Any, method_name: str, position: int = 1) -> P:
    """Accept a model instance or a mapping; anything else is an argument error."""
    if isinstance(value, model):
        return value
    if not isinstance(value, Mapping):
        raise _bad_argument(method_name, value, f'Invalid type for argument {position} "params"')
    try:
        return model.model_validate(dict(value))
    except ValidationError as e:
        raise _bad_argument(method_name, dict(value), f"Invalid value for argument {position} \"params\": {e}") from e


def coerce_params_list(model: type[P], value: Any, method_name: str) -> list[P]:
    """Like coerce_params for a list argument; strings and mappings are not lists."""
    if not isinstance(value, (list, tuple)):
        raise _bad_argument(method_name, value, 'Invalid type for argument 1 "params"')
    return [coerce_params(model, item, method_name) for item in value]
