"""Health check, settings and model listing endpoints."""

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from backend import storage
from mother.router import Gateway

from .deps import get_gateway

router = APIRouter()


@router.get("/health")
async def health():
    """Health check."""
    return {"status": "ok"}


@router.get("/settings")
async def get_settings():
    """Current settings (defaults merged with stored values)."""
    return storage.get_settings()


@router.patch("/settings")
async def update_settings(body: dict):
    """Update settings (partial merge)."""
    try:
        return storage.update_settings(body)
    except ValidationError as e:
        raise HTTPException(422, str(e))


@router.delete("/settings")
async def reset_settings():
    """Forget stored settings and return the defaults."""
    return storage.reset_settings()


@router.get("/models")
async def list_models(gateway: Gateway = Depends(get_gateway)):
    """Models selectable for the configured provider."""
    return await gateway.fetch_models(storage.get_settings())
