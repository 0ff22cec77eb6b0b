"""URL composition helpers."""

from __future__ import annotations

from typing import Any, Dict
from urllib.parse import quote


def compose_url(base_url: str, path_template: str, path_params: Dict[str, Any]) -> str:
    path = path_template
    for name, value in path_params.items():
        path = path.replace(f"{{{name}}}", quote(str(value), safe="!'()*-._~"))

    base = base_url[:-1] if base_url.endswith("/") else base_url
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{base}{path}"
