"""Request-scoped access to the objects created by create_app()."""

from fastapi import Request

from mother.reference import ReferenceStore
from mother.router import Gateway
from mother.session import ChatSession


def get_session(request: Request) -> ChatSession:
    return request.app.state.session


def get_store(request: Request) -> ReferenceStore:
    return request.app.state.store


def get_gateway(request: Request) -> Gateway:
    return request.app.state.gateway
