"""
Shared fixtures: a small FastAPI app behind the CORS middleware whose
downstream handler records every call it receives.
"""

import os

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure test env before any corsguard imports read settings
os.environ.pop("CORS_ALLOW_ORIGINS", None)
os.environ.setdefault("APP_ENV", "dev")

from corsguard.cors.middleware import CorsMiddleware
from corsguard.cors.policy import OriginPolicy


class HandlerSpy:
    def __init__(self):
        self.calls = []


def build_app(policy: OriginPolicy, spy: HandlerSpy) -> FastAPI:
    app = FastAPI()
    app.add_middleware(CorsMiddleware, policy=policy)

    @app.get("/items")
    async def items():
        spy.calls.append("items")
        return {"items": []}

    @app.options("/items")
    async def items_options():
        spy.calls.append("options")
        return {}

    return app


@pytest.fixture
def spy():
    return HandlerSpy()


@pytest.fixture
def make_client(spy):
    def _make(policy: OriginPolicy) -> TestClient:
        return TestClient(build_app(policy, spy))
    return _make
