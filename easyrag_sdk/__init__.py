"""
EasyRAG Python SDK.

A Python client library for the EasyRAG document ingestion and RAG API.

Usage:
    from easyrag_sdk import EasyRAGClient, SearchFilter

    # Using environment variables (EASYRAG_API_KEY, EASYRAG_BASE_URL)
    async with EasyRAGClient() as client:
        # Upload a document with metadata
        await client.files.upload(
            "legal-docs",
            "./contract.pdf",
            metadata={"contract.pdf": {"department": "legal"}},
        )

        # Search with filters
        results = await client.search.query(
            "legal-docs",
            "termination clause",
            filters=[SearchFilter.equals("department", "legal")],
        )

        # Non-streaming query
        answer = await client.query.create("legal-docs", "Summarize the contract")
        print(answer.result)

        # Streaming query
        async with client.query.stream("legal-docs", "Explain the terms") as stream:
            async for text in stream.text_stream:
                print(text, end="")

        # Frontend token for browser use
        token = await client.tokens.create("legal-docs", ttl_seconds=600)
"""

from .client import EasyRAGClient
from .config import DEFAULT_BASE_URL, DEFAULT_TIMEOUT, ClientConfig
from .exceptions import (
    APIStatusError,
    AuthenticationError,
    BadRequestError,
    ConfigurationError,
    EasyRAGError,
    InsufficientCreditsError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    StreamingError,
    UnexpectedResponseError,
)
from .logging_config import configure_logging
from .models import (
    BilledUsage,
    CreateTokenResponse,
    DeleteResponse,
    DeltaEvent,
    DoneEvent,
    ErrorEvent,
    FileMetadata,
    FilterMatch,
    GetFileResponse,
    ListFilesResponse,
    QueryData,
    QueryResponse,
    QuerySource,
    SearchFilter,
    SearchResponse,
    SearchResult,
    SearchResultMetadata,
    SrtEntry,
    StreamEvent,
    UploadResponse,
    parse_stream_event,
)
from .streaming import FrameDecoder, QueryStream

__version__ = "0.1.0"

__all__ = [
    # Main client
    "EasyRAGClient",
    "ClientConfig",
    "DEFAULT_BASE_URL",
    "DEFAULT_TIMEOUT",
    "configure_logging",
    # Streaming
    "QueryStream",
    "FrameDecoder",
    # Exceptions
    "EasyRAGError",
    "ConfigurationError",
    "RequestTimeoutError",
    "NetworkError",
    "StreamingError",
    "UnexpectedResponseError",
    "APIStatusError",
    "BadRequestError",
    "AuthenticationError",
    "InsufficientCreditsError",
    "NotFoundError",
    "RateLimitError",
    "ServerError",
    # Models
    "FileMetadata",
    "SrtEntry",
    "BilledUsage",
    "UploadResponse",
    "ListFilesResponse",
    "GetFileResponse",
    "DeleteResponse",
    "FilterMatch",
    "SearchFilter",
    "SearchResult",
    "SearchResultMetadata",
    "SearchResponse",
    "QuerySource",
    "QueryData",
    "QueryResponse",
    "CreateTokenResponse",
    "StreamEvent",
    "DeltaEvent",
    "DoneEvent",
    "ErrorEvent",
    "parse_stream_event",
]
