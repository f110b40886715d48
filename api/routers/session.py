"""
Session router - sesje gry w pamięci procesu.

Każda sesja to GameSession z własnym silnikiem i seedem. Warstwa
prezentacji wysyła komendy i ticki, a w odpowiedzi dostaje snapshot
stanu (JSON).
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from pathlib import Path
from dataclasses import replace
import uuid

from hexforage.core.config_loader import ConfigLoader
from hexforage.core.hex_coord import HexCoord
from hexforage.events.event_logger import EventType
from hexforage.simulation.session import GameSession
from hexforage.templates.template import TemplateLibrary


router = APIRouter()

DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))
_templates = TemplateLibrary.from_loader(_loader)

# Aktywne sesje (id -> sesja)
_sessions: Dict[str, GameSession] = {}


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class CreateSessionRequest(BaseModel):
    """Parametry nowej sesji."""
    seed: Optional[int] = None
    platform: Optional[str] = None
    language: Optional[str] = None
    params: Dict[str, Any] = {}
    autostart: bool = True


class TickRequest(BaseModel):
    """Przesunięcie czasu gry."""
    steps: int = 1


class CommandRequest(BaseModel):
    """Komenda gracza (pola zależne od typu)."""
    type: str
    steps: Optional[int] = None
    direction: Optional[int] = None
    dq: Optional[int] = None
    dr: Optional[int] = None
    q: Optional[int] = None
    r: Optional[int] = None
    index: Optional[int] = None
    color: Optional[int] = None
    template_id: Optional[str] = None


# ═══════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════

def _get_session(session_id: str) -> GameSession:
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return session


def _session_response(session_id: str, session: GameSession, include_grid: bool = True) -> Dict[str, Any]:
    result = session.to_dict(include_grid)
    result["session_id"] = session_id
    result["seed"] = session.engine.seed
    return result


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.get("/config/defaults")
async def get_config_defaults() -> Dict[str, Any]:
    """
    Zwraca domyślną konfigurację (sekcje game i session z defaults.yaml).
    """
    return {
        "game": _loader.load_params().to_dict(),
        "session": _loader.get_session_defaults(),
    }


@router.get("/templates")
async def list_templates(language: str = "en") -> Dict[str, Any]:
    """
    Zwraca bibliotekę szablonów budowli.

    Args:
        language: Język nazw, opisów i podpowiedzi (fallback: en)
    """
    return {
        "templates": [template.to_dict(language) for template in _templates],
        "total": len(_templates),
    }


@router.get("/templates/{template_id}")
async def get_template(template_id: str, language: str = "en") -> Dict[str, Any]:
    """Zwraca pojedynczy szablon."""
    template = _templates.find(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail=f"Template '{template_id}' not found")
    return template.to_dict(language)


@router.post("/sessions")
async def create_session(request: CreateSessionRequest) -> Dict[str, Any]:
    """
    Tworzy nową sesję.

    Args:
        request: Seed, platforma, język i nadpisania parametrów gry

    Returns:
        Snapshot stanu początkowego z session_id
    """
    try:
        config = _loader.load_session_config(overrides=request.params)
        config = replace(
            config,
            platform=request.platform or config.platform,
            language=request.language or config.language,
        )
        session = GameSession.from_config(config, seed=request.seed, templates=_templates)
    except (KeyError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e).strip("'\""))

    if request.autostart:
        session.start()

    session_id = uuid.uuid4().hex
    _sessions[session_id] = session
    return _session_response(session_id, session)


@router.get("/sessions/{session_id}")
async def get_session(session_id: str, include_grid: bool = True) -> Dict[str, Any]:
    """Zwraca aktualny snapshot sesji."""
    session = _get_session(session_id)
    return _session_response(session_id, session, include_grid)


@router.post("/sessions/{session_id}/tick")
async def tick_session(session_id: str, request: TickRequest) -> Dict[str, Any]:
    """
    Przesuwa czas gry o request.steps ticków.

    Sesja niewystartowana lub wstrzymana nie zmienia stanu.
    """
    session = _get_session(session_id)
    if request.steps < 0:
        raise HTTPException(status_code=400, detail="steps must be >= 0")
    session.advance(request.steps)
    return _session_response(session_id, session)


@router.post("/sessions/{session_id}/commands")
async def send_command(session_id: str, request: CommandRequest) -> Dict[str, Any]:
    """
    Wykonuje komendę gracza.

    Odrzucona komenda (np. ruch na kolorowe pole) nie jest błędem HTTP -
    stan po prostu się nie zmienia, a log zawiera COMMAND_REJECTED.
    """
    session = _get_session(session_id)
    try:
        session.execute_dict(request.model_dump(exclude_none=True))
    except (TypeError, ValueError) as e:
        raise HTTPException(status_code=400, detail=str(e))
    return _session_response(session_id, session)


@router.get("/sessions/{session_id}/cells/{q}/{r}")
async def get_cell(session_id: str, q: int, r: int) -> Dict[str, Any]:
    """Zwraca pojedyncze pole świata."""
    session = _get_session(session_id)
    cell = session.engine.get_cell(HexCoord(q, r))
    if cell is None:
        raise HTTPException(status_code=404, detail=f"Cell ({q}, {r}) is outside the grid")
    return {"q": q, "r": r, "color": cell.color_index}


@router.get("/sessions/{session_id}/template")
async def get_template_progress(session_id: str) -> Dict[str, Any]:
    """
    Zwraca postęp aktywnego szablonu.

    Brak aktywnego szablonu -> {"active": null}.
    """
    session = _get_session(session_id)
    return {
        "active": session.engine.template_progress(),
        "completed_templates": sorted(session.engine.state.completed_templates),
    }


@router.get("/sessions/{session_id}/events")
async def get_events(
    session_id: str,
    event_type: Optional[str] = None,
    since_tick: int = 0,
) -> Dict[str, Any]:
    """
    Zwraca log zdarzeń sesji.

    Args:
        event_type: Nazwa EventType (np. CAPTURE_SUCCESS) - filtr opcjonalny
        since_tick: Tylko zdarzenia od tego ticka
    """
    session = _get_session(session_id)
    logger = session.engine.logger

    if event_type is not None:
        try:
            events = logger.get_events_by_type(EventType[event_type.upper()])
        except KeyError:
            raise HTTPException(
                status_code=400,
                detail=f"Unknown event type: {event_type}. Available: {[t.name for t in EventType]}",
            )
    else:
        events = logger.events

    result: List[Dict[str, Any]] = [e.to_dict() for e in events if e.tick >= since_tick]
    return {
        "metadata": logger.metadata,
        "events": result,
        "total_events": len(result),
        "dropped_events": logger.dropped_events,
    }


@router.delete("/sessions/{session_id}")
async def delete_session(session_id: str) -> Dict[str, Any]:
    """Kończy sesję i usuwa ją z pamięci."""
    session = _get_session(session_id)
    summary = session.stop()
    del _sessions[session_id]
    return {"session_id": session_id, "summary": summary}
