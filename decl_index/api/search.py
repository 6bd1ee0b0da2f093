"""Declaration search API endpoint."""

from typing import List

from fastapi import APIRouter, HTTPException

from ..core.errors import EngineNotReadyError
from ..core.snapshot import Declaration
from ..models.request import SearchDeclRequest

router = APIRouter(tags=["search"])

# Import the global search engine instance
from ..engine_instance import search_engine


@router.post(
    "/search_decl",
    response_model=List[Declaration],
    summary="Search declarations",
    description="Fuzzy search declaration names, or look one up exactly with strict=true"
)
def search_decl(request: SearchDeclRequest) -> List[Declaration]:
    """
    Search declarations by name.

    Fuzzy results are ordered by match cost; a strict search returns the
    declaration named exactly by the pattern, or nothing.
    """
    try:
        if request.strict:
            decl = search_engine.search_strict(request.pattern)
            return [decl] if decl is not None else []

        return search_engine.search(
            request.pattern,
            allowed_kinds=request.allowed_kinds,
            max_results=request.max_results,
        )

    except EngineNotReadyError as e:
        raise HTTPException(status_code=503, detail=str(e))
