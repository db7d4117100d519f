"""API routes exposing per-session search controllers."""

from fastapi import APIRouter, Depends, HTTPException, Path, Query

from trade_lookup.errors import MalformedDataError, TransportError, ValidationError
from trade_lookup.models import (
    ControllerState,
    ModeUpdate,
    SessionCreateRequest,
    SessionResponse,
    TextUpdate,
    TradeView,
    UserSession,
)
from trade_lookup.services import SearchSession, SessionRegistry, access_mode
from .dependencies import get_registry, get_session

router = APIRouter(prefix="/v1")


@router.post("/sessions", response_model=SessionResponse, status_code=201)
async def create_session(
    body: SessionCreateRequest,
    registry: SessionRegistry = Depends(get_registry),
) -> SessionResponse:
    """
    Open a search session for a user.

    Returns: sessionId and the initial (IDLE) state
    """
    session = registry.create(
        UserSession(userId=body.userId, authorization=body.authorization)
    )
    return SessionResponse(sessionId=session.session_id, state=session.controller.state)


@router.get("/sessions/{session_id}", response_model=ControllerState)
async def get_state(session: SearchSession = Depends(get_session)) -> ControllerState:
    """Get the current controller state."""
    return session.controller.state


@router.delete("/sessions/{session_id}", status_code=204)
async def close_session(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
) -> None:
    """Close a session and drop its state."""
    if not registry.remove(session_id):
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")


@router.put("/sessions/{session_id}/mode", response_model=ControllerState)
async def set_mode(
    body: ModeUpdate,
    session: SearchSession = Depends(get_session),
) -> ControllerState:
    """
    Switch search mode (STRUCTURED, RSQL, SETTLEMENT).

    Previous results are cleared; entered criteria are kept.
    """
    session.controller.set_mode(body.mode)
    return session.controller.state


@router.put("/sessions/{session_id}/criteria/{field}", response_model=ControllerState)
async def update_criteria_field(
    body: TextUpdate,
    field: str = Path(
        ...,
        description="Criteria field",
        examples=["book"],
    ),
    session: SearchSession = Depends(get_session),
) -> ControllerState:
    """Set one structured search field."""
    try:
        session.controller.update_criteria_field(field, body.value)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return session.controller.state


@router.put("/sessions/{session_id}/rsql", response_model=ControllerState)
async def update_rsql_query(
    body: TextUpdate,
    session: SearchSession = Depends(get_session),
) -> ControllerState:
    """Set the RSQL query text."""
    session.controller.update_rsql_query(body.value)
    return session.controller.state


@router.put("/sessions/{session_id}/settlement", response_model=ControllerState)
async def update_settlement_text(
    body: TextUpdate,
    session: SearchSession = Depends(get_session),
) -> ControllerState:
    """Set the settlement instruction search text."""
    session.controller.update_settlement_text(body.value)
    return session.controller.state


@router.post("/sessions/{session_id}/search", response_model=ControllerState)
async def search(
    page: int = Query(
        0,
        description="Page number (0-indexed)",
        examples=[0],
    ),
    session: SearchSession = Depends(get_session),
) -> ControllerState:
    """
    Run a search in the active mode.

    Validation and backend failures are reported in the state's error
    field, not as HTTP errors.
    """
    return await session.controller.search(page)


@router.post("/sessions/{session_id}/page/{page}", response_model=ControllerState)
async def change_page(
    page: int,
    session: SearchSession = Depends(get_session),
) -> ControllerState:
    """Load another page of the current search."""
    return await session.controller.change_page(page)


@router.post("/sessions/{session_id}/clear", response_model=ControllerState)
async def clear(session: SearchSession = Depends(get_session)) -> ControllerState:
    """Reset the session to its initial state."""
    session.controller.clear()
    return session.controller.state


@router.get("/sessions/{session_id}/trades/{trade_id}", response_model=TradeView)
async def get_trade(
    trade_id: str,
    session: SearchSession = Depends(get_session),
) -> TradeView:
    """
    Open a single trade.

    Returns: mode ('edit' or 'view'), canBook, and the normalized trade
    """
    try:
        trade = await session.lookup.lookup_trade(trade_id)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.message)
    except TransportError as e:
        raise HTTPException(status_code=e.status_code or 502, detail=e.message)
    except MalformedDataError as e:
        raise HTTPException(status_code=502, detail=e.message)
    return TradeView(
        mode=access_mode(session.user),
        canBook=session.user.can_book,
        trade=trade,
    )


@router.get("/sessions/{session_id}/blotter", response_model=list[dict])
async def get_blotter(session: SearchSession = Depends(get_session)) -> list[dict]:
    """Get all trades with settlementInstructions derived."""
    try:
        return await session.lookup.get_blotter()
    except TransportError as e:
        raise HTTPException(status_code=e.status_code or 502, detail=e.message)
    except MalformedDataError as e:
        raise HTTPException(status_code=502, detail=e.message)
