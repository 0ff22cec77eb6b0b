"""Classify user-supplied values into request locations."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable

from .models import BoundParameters, Parameter


logger = logging.getLogger(__name__)


def bind_parameters(parameters: Iterable[Parameter], values: Dict[str, Any]) -> BoundParameters:
    """Route each declared parameter's value into its path/query/header/body bucket.

    Missing values are skipped; ``required`` is not enforced here. A ``body``
    parameter replaces the whole body, while ``formData`` parameters are
    collected into a dict body. Unknown locations contribute nothing.
    """
    path: Dict[str, Any] = {}
    query: Dict[str, Any] = {}
    header: Dict[str, Any] = {}
    body: Any = None

    for parameter in parameters:
        if parameter.name not in values:
            continue
        value = values[parameter.name]

        if parameter.location == "path":
            path[parameter.name] = value
        elif parameter.location == "query":
            query[parameter.name] = value
        elif parameter.location == "header":
            header[parameter.name] = value
        elif parameter.location == "body":
            body = value
        elif parameter.location == "formData":
            if not isinstance(body, dict):
                body = {}
            body = {**body, parameter.name: value}
        else:
            logger.debug(
                "Skipping parameter %s with unknown location %r", parameter.name, parameter.location
            )

    return BoundParameters(path=path, query=query, header=header, body=body)
