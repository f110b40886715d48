"""
FastAPI Backend dla hexforage.

Endpoints:
    GET    /api/health                          - health check
    GET    /api/config/defaults                 - domyślne parametry gry
    GET    /api/templates                       - biblioteka szablonów budowli
    GET    /api/templates/{template_id}         - pojedynczy szablon
    POST   /api/sessions                        - nowa sesja
    GET    /api/sessions/{id}                   - snapshot stanu
    POST   /api/sessions/{id}/tick              - przesunięcie czasu
    POST   /api/sessions/{id}/commands          - komenda gracza
    GET    /api/sessions/{id}/cells/{q}/{r}     - pojedyncze pole
    GET    /api/sessions/{id}/template          - postęp aktywnego szablonu
    GET    /api/sessions/{id}/events            - log zdarzeń
    DELETE /api/sessions/{id}                   - koniec sesji
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import sys
from pathlib import Path

# Dodaj katalog projektu do path
sys.path.insert(0, str(Path(__file__).parent.parent))

from api.routers import session


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown events."""
    # Startup
    print("🚀 hexforage API starting...")
    print(f"🌐 API docs at http://localhost:8000/docs")
    yield
    # Shutdown
    print("👋 hexforage API shutting down...")


app = FastAPI(
    title="hexforage API",
    description="Backend API for the hexforage color-foraging game engine",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS - allow all origins (including file://)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(session.router, prefix="/api", tags=["Sessions"])


@app.get("/api/health")
async def health():
    """API health check."""
    return {"status": "healthy"}
