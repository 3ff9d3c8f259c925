"""EasyRAG SDK data models."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Base for values exchanged with the service.

    Fields are snake_case in Python and camelCase on the wire. Unknown fields
    sent by the service are kept, so ``to_wire`` returns the received payload.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Return the payload in its wire form, as received."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


# File models
class SrtEntry(WireModel):
    """A single subtitle cue of a transcribed audio or video file."""

    id: str
    start_time: str
    end_time: str
    text: str


class FileMetadata(WireModel):
    """A file previously uploaded to a dataset."""

    file_id: str
    dataset_id: str | None = None
    customer_id: str | None = None
    file_path: str | None = None
    original_name: str | None = None
    mime_type: str | None = None
    size: int | None = None
    loader_id: str | None = None
    created: str | None = None
    extension: str | None = None
    transcription_text: str | None = None
    transcription_srt: list[SrtEntry] | None = None
    extra_meta: dict[str, Any] | None = None
    permanent_url: str | None = None


class BilledUsage(WireModel):
    """Credits charged for an upload."""

    file_count: int = 0
    upload_units: int = 0


class UploadResponse(WireModel):
    """Response from a file upload."""

    success: bool = True
    message: str | None = None
    files: list[FileMetadata] = Field(default_factory=list)
    billed: BilledUsage | None = None


class ListFilesResponse(WireModel):
    """Response from listing the files of a dataset."""

    success: bool = True
    files: list[FileMetadata] = Field(default_factory=list)


class GetFileResponse(WireModel):
    """Response from fetching a single file."""

    success: bool = True
    file: FileMetadata


class DeleteResponse(WireModel):
    """Response from a file, dataset or account-wide deletion."""

    success: bool = True
    deleted: int | None = None


# Search models
class FilterMatch(WireModel):
    """Exact value a metadata key must equal."""

    value: bool | int | float | str


class SearchFilter(WireModel):
    """Key/exact-value equality constraint; multiple filters are ANDed by the service."""

    key: str
    match: FilterMatch

    @classmethod
    def equals(cls, key: str, value: bool | int | float | str) -> "SearchFilter":
        return cls(key=key, match=FilterMatch(value=value))


class SearchResultMetadata(WireModel):
    """Metadata attached to a matched chunk; custom upload metadata is kept as extra fields."""

    file_id: str | None = None
    original_name: str | None = None
    customer_id: str | None = None
    dataset_id: str | None = None


class SearchResult(WireModel):
    """A single search result."""

    score: float
    page_content: str
    metadata: SearchResultMetadata = Field(default_factory=SearchResultMetadata)


class SearchResponse(WireModel):
    """Response from a search request."""

    success: bool = True
    data: list[SearchResult] = Field(default_factory=list)


# Query models
class QuerySource(WireModel):
    """A chunk the generated answer was grounded on."""

    page_content: str
    metadata: dict[str, Any] = Field(default_factory=dict)


class QueryData(WireModel):
    result: str
    sources: list[QuerySource] | None = None


class QueryResponse(WireModel):
    """Response from a non-streaming query."""

    success: bool = True
    data: QueryData

    @property
    def result(self) -> str:
        return self.data.result


# Token models
class CreateTokenResponse(WireModel):
    """A short-lived, dataset-scoped frontend token."""

    token: str
    expires_in: int


# Streaming models
class DeltaEvent(WireModel):
    """An incremental fragment of generated text."""

    type: Literal["delta"] = "delta"
    delta: str

    @property
    def is_terminal(self) -> bool:
        return False


class DoneEvent(WireModel):
    """Indicates the stream is complete."""

    type: Literal["done"] = "done"
    done: Literal[True] = True

    @property
    def is_terminal(self) -> bool:
        return True


class ErrorEvent(WireModel):
    """Terminal failure reported by the service inside the stream."""

    type: Literal["error"] = "error"
    error: str

    @property
    def is_terminal(self) -> bool:
        return True


StreamEvent = Annotated[DeltaEvent | DoneEvent | ErrorEvent, Field(discriminator="type")]


def parse_stream_event(payload: Any) -> DeltaEvent | DoneEvent | ErrorEvent | None:
    """
    Map a decoded ``data:`` frame payload onto its event variant.

    ``{"error": str}`` wins over ``{"done": true}``, which wins over
    ``{"delta": str}``. Returns None for payloads of no recognised shape.
    """
    if not isinstance(payload, dict):
        return None

    if isinstance(payload.get("error"), str):
        event_cls = ErrorEvent
    elif payload.get("done") is True:
        event_cls = DoneEvent
    elif isinstance(payload.get("delta"), str):
        event_cls = DeltaEvent
    else:
        return None

    # A server-side "type" field must not clash with the variant tag
    fields = {key: value for key, value in payload.items() if key != "type"}
    try:
        return event_cls.model_validate(fields)
    except ValidationError:
        return None
