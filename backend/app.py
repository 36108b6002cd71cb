import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from backend import storage
from backend.routes import router
from mother.clock import Clock, LoopClock
from mother.providers import ProviderGateway
from mother.reference import ReferenceStore
from mother.router import CommandRouter, Gateway
from mother.session import ChatSession

load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def create_app(
    data_dir: Path | None = None,
    *,
    clock: Clock | None = None,
    gateway: Gateway | None = None,
) -> FastAPI:
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    storage.init_storage(resolved)

    store = ReferenceStore()
    gateway = gateway or ProviderGateway()
    session = ChatSession(
        router=CommandRouter(store, gateway),
        settings=storage.StoredSettings(),
        clock=clock or LoopClock(),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session.start_boot()
        yield
        session.close()

    app = FastAPI(title="MU/TH/UR 6000", lifespan=lifespan)
    app.state.session = session
    app.state.store = store
    app.state.gateway = gateway
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
