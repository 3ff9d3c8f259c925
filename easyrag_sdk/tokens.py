"""EasyRAG SDK frontend token client."""

from typing import TYPE_CHECKING

from ._utils import parse_response, require_id
from .models import CreateTokenResponse

if TYPE_CHECKING:
    from .client import EasyRAGClient

DEFAULT_TOKEN_TTL = 3600


class TokensClient:
    """Client for issuing short-lived, dataset-scoped frontend tokens."""

    def __init__(self, client: "EasyRAGClient"):
        self._client = client

    async def create(
        self,
        dataset_id: str,
        *,
        ttl_seconds: int | None = None,
    ) -> CreateTokenResponse:
        """
        Create a token that browsers or mobile apps can use instead of the API key.

        Args:
            dataset_id: Dataset the token is scoped to.
            ttl_seconds: Token lifetime; None or 0 means one hour.
        """
        require_id(dataset_id, "dataset_id")
        if ttl_seconds is not None and ttl_seconds < 0:
            raise ValueError("ttl_seconds must not be negative")

        response = await self._client._request(
            "POST",
            "/v1/tokens/create",
            json={"datasetId": dataset_id, "ttlSeconds": ttl_seconds or DEFAULT_TOKEN_TTL},
        )
        return parse_response(CreateTokenResponse, response)
