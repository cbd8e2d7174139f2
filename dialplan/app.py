"""FastAPI application factory for the dialplan translator."""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .config import configure_logging, ensure_data_directory, get_settings
from .exceptions import BlockNotFoundError, LoadError, ScriptNotFoundError
from .schemas import HostAddress, ScriptList
from .store import DialplanStore
from .translator import DialplanCache, TranslatorService

logger = logging.getLogger("dialplan.api")


def create_app() -> FastAPI:
    settings = get_settings()
    configure_logging(settings)
    ensure_data_directory(settings.data_path)

    store = DialplanStore(settings.data_path, default_host=settings.fastagi_host)
    translator = TranslatorService(store, DialplanCache(), generator_name=settings.generator_name)

    app = FastAPI(title="Dialplan Translator API", version="0.1.0", docs_url="/docs")
    app.state.store = store
    app.state.translator = translator
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health", summary="Simple health check")
    async def health() -> dict[str, object]:
        return {
            "status": "ok",
            "environment": app.state.settings.environment,
            "cached": bool(app.state.translator.cache),
        }

    def get_store(request: Request) -> DialplanStore:
        return request.app.state.store

    def get_translator(request: Request) -> TranslatorService:
        return request.app.state.translator

    @app.get("/scripts", response_model=ScriptList, summary="List stored scripts")
    async def list_scripts(store: DialplanStore = Depends(get_store)) -> ScriptList:
        try:
            scripts = await run_in_threadpool(store.list_scripts)
        except LoadError as exc:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
        return ScriptList(scripts=scripts)

    @app.get(
        "/scripts/{script_id}/translation",
        response_class=PlainTextResponse,
        summary="Translate a single script",
    )
    async def translate_script(
        script_id: int,
        translator: TranslatorService = Depends(get_translator),
    ) -> PlainTextResponse:
        try:
            text = await run_in_threadpool(translator.translate_script, script_id)
        except ScriptNotFoundError as exc:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
        except BlockNotFoundError as exc:
            raise HTTPException(status_code=422, detail=str(exc)) from exc
        except LoadError as exc:
            logger.exception("Could not translate script %s", script_id)
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
        return PlainTextResponse(text)

    @app.get("/dialplan", response_class=PlainTextResponse, summary="Translate every context")
    async def dialplan(translator: TranslatorService = Depends(get_translator)) -> PlainTextResponse:
        text = await run_in_threadpool(translator.translate_dialplan)
        return PlainTextResponse(text)

    @app.get("/configuration/fastagi-host", response_model=HostAddress, summary="Current FastAGI host")
    async def get_fastagi_host(store: DialplanStore = Depends(get_store)) -> HostAddress:
        try:
            value = await run_in_threadpool(store.current_host_address)
        except LoadError as exc:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
        return HostAddress(value=value)

    @app.put("/configuration/fastagi-host", response_model=HostAddress, summary="Change the FastAGI host")
    async def put_fastagi_host(
        payload: HostAddress,
        store: DialplanStore = Depends(get_store),
    ) -> HostAddress:
        try:
            value = await run_in_threadpool(store.update_host_address, payload.value)
        except LoadError as exc:
            raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
        return HostAddress(value=value)

    return app
