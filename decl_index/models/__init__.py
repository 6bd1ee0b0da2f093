"""Data models for the declaration index API."""

from .response import LinkInfo, ErrorResponse, HealthResponse
from .request import SearchDeclRequest, AnnotateInstancesRequest

__all__ = [
    "LinkInfo",
    "ErrorResponse",
    "HealthResponse",
    "SearchDeclRequest",
    "AnnotateInstancesRequest",
]
