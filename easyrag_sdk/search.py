"""EasyRAG SDK search client."""

from collections.abc import Sequence
from typing import TYPE_CHECKING

from ._utils import FilterInput, parse_response, require_id, serialize_filters
from .models import SearchResponse

if TYPE_CHECKING:
    from .client import EasyRAGClient


class SearchClient:
    """Client for semantic search."""

    def __init__(self, client: "EasyRAGClient"):
        self._client = client

    async def query(
        self,
        dataset_id: str,
        question: str,
        *,
        filters: Sequence[FilterInput] | None = None,
    ) -> SearchResponse:
        """
        Search a dataset for the chunks closest to a question.

        Args:
            dataset_id: Dataset to search.
            question: Natural-language query.
            filters: Metadata equality filters, ANDed by the service and sent
                in the given order.

        Returns:
            SearchResponse with scored chunks and their metadata.
        """
        require_id(dataset_id, "dataset_id")
        body = {"datasetId": dataset_id, "question": question}
        serialized = serialize_filters(filters)
        if serialized is not None:
            body["filters"] = serialized

        response = await self._client._request("POST", "/v1/search", json=body)
        return parse_response(SearchResponse, response)
