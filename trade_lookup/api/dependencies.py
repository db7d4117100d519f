"""FastAPI dependencies for dependency injection."""

from fastapi import HTTPException, Request

from trade_lookup.services import SearchSession, SessionRegistry


def get_registry(request: Request) -> SessionRegistry:
    """Get the session registry created by the application factory."""
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise RuntimeError("SessionRegistry not initialized. Use create_app().")
    return registry


def get_session(session_id: str, request: Request) -> SearchSession:
    """Resolve the session_id path parameter to an open session."""
    try:
        return get_registry(request).get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}")
