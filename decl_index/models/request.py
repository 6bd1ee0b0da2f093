"""Request models for API endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..core.snapshot import Kind


class SearchDeclRequest(BaseModel):
    """Request model for declaration search.

    Keys are accepted in camelCase, as the browser client sends them, or in
    snake_case.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    pattern: str = Field(..., description="Search pattern")
    strict: bool = Field(default=False, description="Exact name lookup instead of fuzzy search")
    allowed_kinds: Optional[List[Kind]] = Field(
        None, description="Only return declarations of these kinds"
    )
    max_results: Optional[int] = Field(
        None, ge=0, description="Maximum number of results (default 30, capped at 80)"
    )


class AnnotateInstancesRequest(BaseModel):
    """Request model for instance annotation."""

    names: List[str] = Field(..., description="Class or type names to annotate")
