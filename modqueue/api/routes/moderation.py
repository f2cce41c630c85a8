"""Unified moderation queue endpoints.

Exposes the controller-owned session state to the admin UI. Every mutation
goes through the controller, which owns the selection, the busy flags and
the persistence mode.

Error mapping (RFC 7807 problem details):
- QueueItemNotFoundError -> 404
- UnsupportedActionError -> 422
"""

from dataclasses import replace

from fastapi import APIRouter, Depends, HTTPException, Query, Request

from modqueue.api.dependencies.moderation import get_moderation_controller
from modqueue.api.models.moderation import (
    ActionRequest,
    ActionResponse,
    BulkRequest,
    BulkResponse,
    DecisionLogEntryResponse,
    HistoryResponse,
    ModerationErrorResponse,
    PersistenceResponse,
    QueueCountsResponse,
    QueueItemResponse,
    QueueResponse,
    SelectionFilterRequest,
    SelectionResponse,
    SelectionToggleRequest,
)
from modqueue.application.services.action_dispatcher_service import coerce_action
from modqueue.application.services.moderation_queue_service import (
    ModerationQueueController,
)
from modqueue.domain.errors import QueueItemNotFoundError, UnsupportedActionError
from modqueue.domain.models.moderation_action import ModerationAction
from modqueue.domain.models.queue_item import QueueKind
from modqueue.domain.services.queue_filter import QueueFilter

router = APIRouter(prefix="/v1/moderation", tags=["moderation"])


def _not_found(e: QueueItemNotFoundError, request: Request) -> HTTPException:
    return HTTPException(
        status_code=404,
        detail={
            "type": "urn:modqueue:queue-item:not-found",
            "title": "Queue Item Not Found",
            "status": 404,
            "detail": str(e),
            "instance": str(request.url),
        },
    )


def _unsupported(e: UnsupportedActionError, request: Request) -> HTTPException:
    return HTTPException(
        status_code=422,
        detail={
            "type": "urn:modqueue:action:unsupported",
            "title": "Unsupported Action",
            "status": 422,
            "detail": str(e),
            "instance": str(request.url),
        },
    )


def _payload(kind: QueueKind, body: ActionRequest) -> ModerationAction:
    action = coerce_action(kind, body.action)
    payload = ModerationAction.default_for(action)
    overrides = {
        field: value
        for field, value in (
            ("reason", body.reason),
            ("duration_days", body.duration_days),
            ("notify_user", body.notify_user),
            ("notes", body.notes),
        )
        if value is not None
    }
    return replace(payload, **overrides) if overrides else payload


@router.get("/queue", response_model=QueueResponse, summary="Filtered moderation queue")
async def get_queue(
    search: str = Query(default=""),
    kind: str = Query(default="all"),
    status: str = Query(default="all"),
    controller: ModerationQueueController = Depends(get_moderation_controller),
) -> QueueResponse:
    """Return the filtered queue with selection, busy flags and persistence mode."""
    state = controller.state()
    items = controller.visible(QueueFilter(search=search, kind=kind, status=status))
    return QueueResponse(
        items=[
            QueueItemResponse.from_item(
                item,
                selected=item.queue_id in state.selection,
                busy=item.queue_id in state.busy,
            )
            for item in items
        ],
        counts=QueueCountsResponse(**controller.counts()),
        selection=sorted(state.selection),
        busy=sorted(state.busy),
        persistence_mode=state.persistence_mode.value,
        degraded=state.degraded,
    )


@router.post(
    "/queue/{queue_id}/actions",
    response_model=ActionResponse,
    responses={
        404: {"model": ModerationErrorResponse, "description": "Unknown queue id"},
        422: {"model": ModerationErrorResponse, "description": "Action not legal for the item kind"},
    },
    summary="Apply a moderation action to one item",
)
async def apply_action(
    queue_id: str,
    body: ActionRequest,
    request: Request,
    controller: ModerationQueueController = Depends(get_moderation_controller),
) -> ActionResponse:
    """Dispatch one action.

    ``ok`` is False when the item was busy, not eligible for reactivation
    or the collaborator did not apply the mutation; nothing is recorded in
    that case.
    """
    try:
        item = controller.get(queue_id)
        payload = _payload(item.kind, body)
        ok = await controller.dispatch(queue_id, payload.type, payload)
    except QueueItemNotFoundError as e:
        raise _not_found(e, request) from None
    except UnsupportedActionError as e:
        raise _unsupported(e, request) from None
    return ActionResponse(queue_id=queue_id, action=payload.type.value, ok=ok)


@router.post("/selection/toggle", response_model=SelectionResponse)
async def toggle_selection(
    body: SelectionToggleRequest,
    request: Request,
    controller: ModerationQueueController = Depends(get_moderation_controller),
) -> SelectionResponse:
    try:
        selected = controller.toggle_selected(body.queue_id)
    except QueueItemNotFoundError as e:
        raise _not_found(e, request) from None
    return SelectionResponse(selection=sorted(controller.selection), selected=selected)


@router.post("/selection/toggle-all", response_model=SelectionResponse)
async def toggle_select_all(
    body: SelectionFilterRequest,
    controller: ModerationQueueController = Depends(get_moderation_controller),
) -> SelectionResponse:
    """Select every item visible under the filter, or deselect them all."""
    selection = controller.toggle_select_all(
        QueueFilter(search=body.search, kind=body.kind, status=body.status)
    )
    return SelectionResponse(selection=sorted(selection))


@router.post("/selection/clear", response_model=SelectionResponse)
async def clear_selection(
    controller: ModerationQueueController = Depends(get_moderation_controller),
) -> SelectionResponse:
    controller.clear_selection()
    return SelectionResponse(selection=[])


@router.post("/bulk", response_model=BulkResponse, summary="Bulk reactivate or suspend the selection")
async def run_bulk(
    body: BulkRequest,
    controller: ModerationQueueController = Depends(get_moderation_controller),
) -> BulkResponse:
    """Run a bulk mode over the current selection.

    Per-item failures are reported in the body; the request itself
    succeeds. The selection is cleared afterwards.
    """
    result = await controller.run_bulk(body.mode)
    return BulkResponse.from_result(result)


@router.get(
    "/queue/{queue_id}/history",
    response_model=HistoryResponse,
    summary="Most recent decisions for one item",
)
async def get_history(
    queue_id: str,
    controller: ModerationQueueController = Depends(get_moderation_controller),
) -> HistoryResponse:
    return HistoryResponse(
        queue_id=queue_id,
        entries=[DecisionLogEntryResponse.from_entry(e) for e in controller.history(queue_id)],
    )


@router.get("/persistence", response_model=PersistenceResponse)
async def get_persistence(
    controller: ModerationQueueController = Depends(get_moderation_controller),
) -> PersistenceResponse:
    state = controller.state()
    return PersistenceResponse(
        persistence_mode=state.persistence_mode.value,
        degraded=state.degraded,
    )
