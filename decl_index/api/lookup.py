"""Instance, link and import lookup endpoints.

Each endpoint takes a bare JSON string or a ``{"names": [...]}`` body, as the
browser client sends them, and answers unknown names with empty values.
"""

from typing import List

from fastapi import APIRouter, Body, HTTPException

from ..core.errors import EngineNotReadyError
from ..core.store import SnapshotStore
from ..models.request import AnnotateInstancesRequest
from ..models.response import LinkInfo

router = APIRouter(tags=["lookup"])

from ..engine_instance import search_engine


def get_store() -> SnapshotStore:
    try:
        return search_engine.store
    except EngineNotReadyError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/instances_for_class", response_model=List[str], summary="Instances of a class")
def instances_for_class(class_name: str = Body(...)) -> List[str]:
    return get_store().instances_for_class(class_name)


@router.post("/instances_for_type", response_model=List[str], summary="Instances for a type")
def instances_for_type(type_name: str = Body(...)) -> List[str]:
    return get_store().instances_for_type(type_name)


@router.post("/decl_name_to_link", response_model=str, summary="Declaration doc link")
def decl_name_to_link(decl_name: str = Body(...)) -> str:
    """Doc link of a declaration, or an empty string if it is unknown."""
    return get_store().declaration_link(decl_name)


@router.post("/module_imported_by", response_model=List[str], summary="Importers of a module")
def module_imported_by(module_name: str = Body(...)) -> List[str]:
    return get_store().imported_by(module_name)


@router.post("/module_name_to_link", response_model=str, summary="Module doc link")
def module_name_to_link(module_name: str = Body(...)) -> str:
    """Doc link of a module, or an empty string if it is unknown."""
    return get_store().module_link(module_name) or ""


@router.post(
    "/annotate_instances",
    response_model=List[List[LinkInfo]],
    summary="Linked instances of classes"
)
def annotate_instances(request: AnnotateInstancesRequest) -> List[List[LinkInfo]]:
    """For each class name, its instances with their doc links."""
    return get_store().annotate_instances(request.names)


@router.post(
    "/annotate_instances_for",
    response_model=List[List[LinkInfo]],
    summary="Linked instances for types"
)
def annotate_instances_for(request: AnnotateInstancesRequest) -> List[List[LinkInfo]]:
    """For each type name, the instances mentioning it with their doc links."""
    return get_store().annotate_instances_for(request.names)


@router.post(
    "/linked_imported_by",
    response_model=List[LinkInfo],
    summary="Linked importers of a module"
)
def linked_imported_by(module_name: str = Body(...)) -> List[LinkInfo]:
    return get_store().linked_imported_by(module_name)
