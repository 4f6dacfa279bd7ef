"""FastAPI application entrypoint for tlgen service mode."""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

import uvicorn
from fastapi import Depends, FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..config import GeneratorConfig
from ..errors import TlError
from ..orchestrator import CheckOutcome, Diagnostic, GenerateOutcome, Orchestrator


class DiagnosticModel(BaseModel):
    kind: str
    message: str
    statement: str


class CheckRequest(BaseModel):
    schema_text: str


class CheckResponse(BaseModel):
    definitions: int
    diagnostics: List[DiagnosticModel]


class GenerateRequest(BaseModel):
    schema_text: str
    include_client: bool = False
    bots_only_api: bool = False
    impl_debug: bool = True
    impl_from_enum: bool = False
    impl_from_type: bool = False


class GenerateResponse(BaseModel):
    definitions: int
    code: str
    client_code: Optional[str] = None
    diagnostics: List[DiagnosticModel]


class HealthResponse(BaseModel):
    status: str


def _default_orchestrator() -> Orchestrator:
    return Orchestrator()


def _diagnostics(items: List[Diagnostic]) -> List[DiagnosticModel]:
    return [
        DiagnosticModel(kind=item.kind, message=item.message, statement=item.statement)
        for item in items
    ]


async def _run_blocking(func: Callable[[], Any]) -> Any:
    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:  # pragma: no cover - fallback path when not in async context
        return func()
    return await loop.run_in_executor(None, func)


def create_app(
    orchestrator_factory: Callable[[], Orchestrator] = _default_orchestrator,
) -> FastAPI:
    """Create the FastAPI application exposing tlgen operations."""

    app = FastAPI(title="tlgen Service", version="1.0.0")

    async def get_orchestrator() -> Orchestrator:
        return orchestrator_factory()

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.post("/check", response_model=CheckResponse)
    async def check_schema(
        payload: CheckRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> CheckResponse:
        def _run_check() -> CheckOutcome:
            return orchestrator.check_text(payload.schema_text)

        outcome = await _run_blocking(_run_check)
        return CheckResponse(
            definitions=outcome.definitions,
            diagnostics=_diagnostics(outcome.diagnostics),
        )

    @app.post("/generate", response_model=GenerateResponse)
    async def generate_code(
        payload: GenerateRequest,
        orchestrator: Orchestrator = Depends(get_orchestrator),
    ) -> GenerateResponse:
        generator = GeneratorConfig(
            bots_only_api=payload.bots_only_api,
            impl_debug=payload.impl_debug,
            impl_from_enum=payload.impl_from_enum,
            impl_from_type=payload.impl_from_type,
        )

        def _run_generate() -> GenerateOutcome:
            return orchestrator.generate_from_text(
                payload.schema_text,
                generator,
                include_client=payload.include_client,
            )

        outcome = await _run_blocking(_run_generate)
        return GenerateResponse(
            definitions=outcome.definitions,
            code=outcome.code,
            client_code=outcome.client_code,
            diagnostics=_diagnostics(outcome.diagnostics),
        )

    @app.exception_handler(TlError)
    async def tl_error_handler(_: Any, exc: TlError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(RuntimeError)
    async def runtime_error_handler(
        _: Any, exc: RuntimeError
    ) -> JSONResponse:  # pragma: no cover - simple mapping
        return JSONResponse(status_code=400, content={"detail": str(exc)})

    return app


def run_service(
    host: str = "127.0.0.1", port: int = 8000
) -> None:  # pragma: no cover - integration path
    app = create_app()
    uvicorn.run(app, host=host, port=port)
