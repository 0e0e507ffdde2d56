"""
JSON output envelope shared by every command's --json mode.

    {"meta": {"status": "success", "command": "stats"}, "data": {...}}
    {"meta": {"status": "error", "command": "stats"}, "error": {...}}
"""

import json
from typing import Any, Dict

import click
from pydantic import BaseModel

from ..core.exceptions import InvalidTemplateError


class JsonRenderer:
    def __init__(self, command: str):
        self.command = command

    def _emit(self, status: str, key: str, payload: Any) -> None:
        envelope = {
            "meta": {"status": status, "command": self.command},
            key: payload,
        }
        click.echo(json.dumps(envelope, indent=2))

    def render_success(self, data: BaseModel | Dict[str, Any] | list) -> None:
        if isinstance(data, BaseModel):
            data = data.model_dump(by_alias=True, mode="json")
        self._emit("success", "data", data)

    def render_error(self, error: Exception) -> None:
        payload: Dict[str, Any] = {
            "type": type(error).__name__,
            "message": str(error),
        }
        if isinstance(error, InvalidTemplateError):
            payload["kind"] = error.kind.value
        self._emit("error", "error", payload)
