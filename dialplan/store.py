"""JSON-backed storage for scripts, contexts and the FastAGI host."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import Lock
from typing import List

from pydantic import ValidationError

from .exceptions import LoadError, ScriptNotFoundError
from .model import Context, Extension, Script
from .schemas import DialplanDocument, ScriptSummary

logger = logging.getLogger("dialplan.store")


class DialplanStore:
    """Reads a fresh copy of the document on every call.

    Each translation gets its own graph objects, so edits to the file show up
    on the next request without a restart.
    """

    def __init__(self, path: Path, default_host: str):
        self._path = path
        self._default_host = default_host
        self._lock = Lock()

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> DialplanDocument:
        if not self._path.exists():
            return DialplanDocument()
        try:
            data = json.loads(self._path.read_text("utf-8"))
            return DialplanDocument.model_validate(data)
        except (OSError, json.JSONDecodeError, ValidationError) as exc:
            raise LoadError(f"Could not read {self._path}") from exc

    def _load(self) -> DialplanDocument:
        with self._lock:
            return self._read()

    def _save(self, document: DialplanDocument) -> None:
        payload = document.model_dump(mode="json")
        self._path.write_text(json.dumps(payload, indent=2), "utf-8")

    def load_script(self, script_id: int) -> Script:
        return self._find_script(self._load(), script_id)

    def _find_script(self, document: DialplanDocument, script_id: int) -> Script:
        for script in document.scripts:
            if script.id == script_id:
                return script.to_script()
        raise ScriptNotFoundError(script_id)

    def list_scripts(self) -> List[ScriptSummary]:
        document = self._load()
        summaries = [ScriptSummary(id=script.id, name=script.name) for script in document.scripts]
        return sorted(summaries, key=lambda s: s.id)

    def load_all_contexts(self) -> List[Context]:
        document = self._load()
        contexts = []
        for context in document.contexts:
            extensions = []
            for extension in context.extensions:
                script = None
                if extension.script_id is not None:
                    try:
                        script = self._find_script(document, extension.script_id)
                    except ScriptNotFoundError as exc:
                        raise LoadError(
                            f"Could not load the script with id {extension.script_id} "
                            f"for extension {extension.name} in context {context.name}"
                        ) from exc
                extensions.append(Extension(name=extension.name, script=script))
            contexts.append(Context(name=context.name, extensions=extensions))
        return contexts

    def current_host_address(self) -> str:
        return self._load().configuration.fastagi_host or self._default_host

    def update_host_address(self, value: str) -> str:
        with self._lock:
            document = self._read()
            document.configuration.fastagi_host = value
            try:
                self._save(document)
            except OSError as exc:
                raise LoadError(f"Could not write {self._path}") from exc
        logger.info("FastAGI host set to %s", value)
        return value
