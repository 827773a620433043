"""API routes for composed lists.

A fresh ListController is built for every request by the injected factory,
so widget state never leaks between requests.
"""

import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from listcompose.controller import IndexPage, ListController
from listcompose.deletion.schemas import DeletionOutcome, DeletionRequest
from listcompose.errors import (
    ConfigurationError,
    ListBehaviorError,
    ListNotReadyError,
    MissingDefinitionError,
    UnsupportedOperationError,
)
from listcompose.ordering.schemas import MoveRequest
from listcompose.widgets.schemas import ListSnapshot, ListState

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lists", tags=["lists"])

ControllerFactory = Callable[[ListState], ListController]

_factory: ControllerFactory | None = None


def init_controller_factory(factory: Optional[ControllerFactory]) -> None:
    global _factory
    _factory = factory


def _make_controller(state: Optional[ListState] = None) -> ListController:
    if _factory is None:
        raise HTTPException(status_code=503, detail="List controller factory not initialized")
    return _factory(state or ListState())


_STATUS_CODES: list[tuple[type[ListBehaviorError], int]] = [
    (MissingDefinitionError, 404),
    (UnsupportedOperationError, 400),
    (ListNotReadyError, 409),
    (ConfigurationError, 500),
]


def _http_error(error: ListBehaviorError) -> HTTPException:
    for error_type, status_code in _STATUS_CODES:
        if isinstance(error, error_type):
            break
    else:
        status_code = 500

    if status_code >= 500:
        logger.error(f"List request failed: {error}")
    return HTTPException(status_code=status_code, detail=str(error))


# ── Request / response bodies ────────────────────────────


class RefreshBody(BaseModel):
    definition: Optional[str] = Field(None, description="Definition id (default: primary)")
    state: ListState = Field(default_factory=ListState)


class SearchBody(RefreshBody):
    term: Optional[str] = Field(None, description="Search term; empty clears the search")


class FilterBody(RefreshBody):
    values: dict[str, Any] = Field(default_factory=dict, description="Scope name -> value")


class DeleteBody(RefreshBody):
    checked: list[Any] = Field(default_factory=list, description="Keys of the checked records")


class ReorderBody(RefreshBody):
    ids: Optional[list[Any]] = None
    orders: Optional[list[Any]] = None
    source_node: Optional[Any] = None
    target_node: Optional[Any] = None
    position: Optional[str] = None


class DeleteResponse(BaseModel):
    outcome: DeletionOutcome
    list: ListSnapshot


class ReorderResponse(BaseModel):
    moved: bool
    list: Optional[ListSnapshot] = None


# ── Endpoints ────────────────────────────────────────────


@router.get("", response_model=IndexPage)
async def index():
    """Compose and refresh every list definition."""
    try:
        return _make_controller().index()
    except ListBehaviorError as e:
        raise _http_error(e) from e


@router.post("/refresh", response_model=ListSnapshot)
async def refresh(body: RefreshBody):
    """Refresh one list with the given request state."""
    try:
        return _make_controller(body.state).list_refresh(body.definition)
    except ListBehaviorError as e:
        raise _http_error(e) from e


@router.post("/search", response_model=ListSnapshot)
async def search(body: SearchBody):
    """Submit the list's search box."""
    try:
        return _make_controller(body.state).on_search(body.term, body.definition)
    except ListBehaviorError as e:
        raise _http_error(e) from e


@router.post("/filter", response_model=ListSnapshot)
async def filter_list(body: FilterBody):
    """Update the list's filter scope values."""
    try:
        return _make_controller(body.state).on_filter(body.values, body.definition)
    except ListBehaviorError as e:
        raise _http_error(e) from e


@router.post("/delete", response_model=DeleteResponse)
async def delete(body: DeleteBody):
    """Delete the checked records and refresh the list.

    An unknown explicit definition is a 404; an empty selection or a
    selection matching nothing is reported in the outcome, not as an error.
    """
    request = DeletionRequest(definition=body.definition, checked_ids=body.checked)
    try:
        outcome, snapshot = _make_controller(body.state).on_delete(request)
    except ListBehaviorError as e:
        raise _http_error(e) from e
    return DeleteResponse(outcome=outcome, list=snapshot)


@router.post("/reorder", response_model=ReorderResponse)
async def reorder(body: ReorderBody):
    """Apply a drag-and-drop move (flat sequence or tree)."""
    request = MoveRequest(
        definition=body.definition,
        ids=body.ids,
        orders=body.orders,
        source_node=body.source_node,
        target_node=body.target_node,
        position=body.position,
    )
    try:
        snapshot = _make_controller(body.state).on_reorder(request)
    except ListBehaviorError as e:
        raise _http_error(e) from e
    return ReorderResponse(moved=snapshot is not None, list=snapshot)
