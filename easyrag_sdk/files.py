"""EasyRAG SDK files client."""

import json
import os
from contextlib import ExitStack
from pathlib import Path
from typing import IO, TYPE_CHECKING, Any, Union

from ._utils import parse_response, path_segment, require_id
from .models import DeleteResponse, GetFileResponse, ListFilesResponse, UploadResponse

if TYPE_CHECKING:
    from .client import EasyRAGClient

FILE_FIELD = "file"
DEFAULT_FILENAME = "file"

# A path, raw bytes, a binary file object, or (filename, content[, content_type])
FileInput = Union[str, os.PathLike, bytes, IO[bytes], tuple]


def _to_part(item: Any, stack: ExitStack) -> tuple:
    if isinstance(item, tuple):
        if len(item) not in (2, 3):
            raise ValueError("file tuples must be (filename, content) or (filename, content, content_type)")
        return item

    if isinstance(item, (str, os.PathLike)):
        path = Path(item)
        return (path.name, stack.enter_context(open(path, "rb")))

    if isinstance(item, (bytes, bytearray)):
        return (DEFAULT_FILENAME, bytes(item))

    if hasattr(item, "read"):
        name = getattr(item, "name", None)
        filename = Path(name).name if isinstance(name, str) and name else DEFAULT_FILENAME
        return (filename, item)

    raise TypeError(f"Unsupported file input: {type(item).__name__}")


class FilesClient:
    """Client for file and dataset operations."""

    def __init__(self, client: "EasyRAGClient"):
        self._client = client

    async def upload(
        self,
        dataset_id: str,
        files: FileInput | list[FileInput],
        *,
        metadata: dict[str, dict[str, Any]] | None = None,
        chunk_size: int | None = None,
        chunk_overlap: int | None = None,
    ) -> UploadResponse:
        """
        Upload one or more files into a dataset.

        Args:
            dataset_id: Target dataset.
            files: A single file input or a list of them. Each may be a path,
                raw bytes, a binary file object, or a (filename, content) tuple.
            metadata: Per-file metadata keyed by original filename, usable
                later as search filters.
            chunk_size: Server-side chunk size override.
            chunk_overlap: Server-side chunk overlap override.

        Returns:
            UploadResponse with the stored files and billed usage.

        Raises:
            ValueError: If no file is given.
        """
        require_id(dataset_id, "dataset_id")
        items = files if isinstance(files, list) else [files]
        if not items:
            raise ValueError("At least one file is required")

        data: dict[str, str] = {"datasetId": dataset_id}
        if metadata:
            data["metadata"] = json.dumps(metadata)
        if chunk_size is not None:
            data["chunkSize"] = str(chunk_size)
        if chunk_overlap is not None:
            data["chunkOverlap"] = str(chunk_overlap)

        with ExitStack() as stack:
            parts = [(FILE_FIELD, _to_part(item, stack)) for item in items]
            response = await self._client._request(
                "POST",
                "/v1/files/upload",
                data=data,
                files=parts,
            )

        return parse_response(UploadResponse, response)

    async def list(self, dataset_id: str) -> ListFilesResponse:
        """List the files of a dataset."""
        require_id(dataset_id, "dataset_id")
        response = await self._client._request(
            "GET",
            "/v1/files",
            params={"datasetId": dataset_id},
        )
        return parse_response(ListFilesResponse, response)

    async def get(self, dataset_id: str, file_id: str) -> GetFileResponse:
        """Get a single file's metadata, including its signed download URL when available."""
        require_id(dataset_id, "dataset_id")
        require_id(file_id, "file_id")
        response = await self._client._request(
            "GET",
            f"/v1/files/{path_segment(file_id)}",
            params={"datasetId": dataset_id},
        )
        return parse_response(GetFileResponse, response)

    async def delete(self, dataset_id: str, file_id: str) -> DeleteResponse:
        """Delete a single file from a dataset."""
        require_id(dataset_id, "dataset_id")
        require_id(file_id, "file_id")
        response = await self._client._request(
            "DELETE",
            f"/v1/files/{path_segment(file_id)}",
            params={"datasetId": dataset_id},
        )
        return parse_response(DeleteResponse, response)

    async def delete_dataset(self, dataset_id: str) -> DeleteResponse:
        """Delete every file in a dataset."""
        require_id(dataset_id, "dataset_id")
        response = await self._client._request(
            "DELETE",
            f"/v1/datasets/{path_segment(dataset_id)}/files",
        )
        return parse_response(DeleteResponse, response)

    async def delete_all(self) -> DeleteResponse:
        """Delete every file of the account, across all datasets."""
        response = await self._client._request("DELETE", "/v1/files")
        return parse_response(DeleteResponse, response)
