"""Flattening of nested payloads into AWS/QUERY parameters.

Nested mappings become dotted names and lists are indexed through a
``member`` segment starting at 1::

    {"Instances": {"InstanceCount": 2}, "Steps": [{"Name": "a"}]}

becomes::

    {"Instances.InstanceCount": "2", "Steps.member.1.Name": "a"}
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping
from typing import Any


class QueryStringMap(MutableMapping[str, str]):
    """Flat mapping of wire parameter name to text value.

    Built from a nested payload; further parameters may be assigned
    afterwards (the protocol handler sets ``Action`` and ``ContentType``).

    Args:
        payload: Nested mapping to flatten (None is treated as empty)

    Raises:
        TypeError: If payload is not a mapping

    Example:
        >>> params = QueryStringMap({"JobFlowIds": ["j-1", "j-2"]})
        >>> params["JobFlowIds.member.2"]
        'j-2'
    """

    def __init__(self, payload: Mapping[str, Any] | None = None) -> None:
        if payload is None:
            payload = {}
        if not isinstance(payload, Mapping):
            raise TypeError(
                f"Request payload must be a mapping, got {type(payload).__name__}"
            )
        self._params: dict[str, str] = {}
        self._flatten("", payload)

    def _flatten(self, prefix: str, value: Any) -> None:
        if value is None:
            return
        if isinstance(value, Mapping):
            for key, item in value.items():
                self._flatten(_join(prefix, str(key)), item)
        elif isinstance(value, (list, tuple)):
            for index, item in enumerate(value, start=1):
                self._flatten(_join(prefix, f"member.{index}"), item)
        else:
            if not prefix:
                raise TypeError("Scalar values must be nested under a parameter name")
            self._params[prefix] = _render(value)

    def __getitem__(self, key: str) -> str:
        return self._params[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._params[key] = value

    def __delitem__(self, key: str) -> None:
        del self._params[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._params)

    def __len__(self) -> int:
        return len(self._params)

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}={v}" for k, v in self._params.items()) + "}"

    def __repr__(self) -> str:
        return f"QueryStringMap({self._params!r})"


def _join(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


def _render(value: Any) -> str:
    # bool is an int subclass, check it first
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
