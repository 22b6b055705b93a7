from fastapi import Request

from ...store import ModuleStore


def get_store(request: Request) -> ModuleStore:
    return request.app.state.store
