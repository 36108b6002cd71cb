"""FastAPI API endpoints under /api.

Endpoint groups: chat (transcript, input, history), wiki (reference
database), settings (persisted settings, model listing, health).

The process serves a single chat session; it lives on app.state and is
reached through the dependencies in .deps.
"""

from fastapi import APIRouter

from .chat import router as chat_router
from .settings import router as settings_router
from .wiki import router as wiki_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(chat_router)
router.include_router(wiki_router)
