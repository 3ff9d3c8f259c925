"""EasyRAG SDK query client."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ._utils import FilterInput, parse_response, require_id, serialize_filters
from .models import QueryResponse
from .streaming import QueryStream

if TYPE_CHECKING:
    from .client import EasyRAGClient


def _query_body(
    dataset_id: str,
    question: str,
    stream: bool,
    filters: Sequence[FilterInput] | None,
) -> dict[str, Any]:
    require_id(dataset_id, "dataset_id")
    body: dict[str, Any] = {
        "datasetId": dataset_id,
        "question": question,
        "stream": stream,
    }
    serialized = serialize_filters(filters)
    if serialized is not None:
        body["filters"] = serialized
    return body


class QueryClient:
    """Client for AI answers grounded on a dataset."""

    def __init__(self, client: "EasyRAGClient"):
        self._client = client

    async def create(
        self,
        dataset_id: str,
        question: str,
        *,
        filters: Sequence[FilterInput] | None = None,
    ) -> QueryResponse:
        """
        Ask a question and wait for the complete answer.

        Returns:
            QueryResponse; ``response.result`` holds the generated text.
        """
        response = await self._client._request(
            "POST",
            "/v1/query",
            json=_query_body(dataset_id, question, False, filters),
        )
        return parse_response(QueryResponse, response)

    def stream(
        self,
        dataset_id: str,
        question: str,
        *,
        filters: Sequence[FilterInput] | None = None,
    ) -> QueryStream:
        """
        Ask a question and receive the answer incrementally.

        Usage:
            async with client.query.stream("my-dataset", "Explain RAG") as stream:
                async for text in stream.text_stream:
                    print(text, end="")

        Returns:
            A QueryStream. The request is sent when the stream is entered or
            first iterated; a non-2xx status is raised at that point. Close it
            (or use it as a context manager) to release the connection;
            ``cancel()`` stops it early.
        """
        return self._client._stream(
            "/v1/query",
            json=_query_body(dataset_id, question, True, filters),
        )
