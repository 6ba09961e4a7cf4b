from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

ParamValue = str | int | float | bool | IntEnum | None


class CommandArguments:
    """Wire parameters for one call to a remote method.

    Values are coerced to strings when added. ``None`` leaves the parameter
    out, which is how optional arguments are omitted.
    """

    def __init__(self, method: str) -> None:
        self.method = method
        self._params: dict[str, str] = {}

    def add_param(self, name: str, value: ParamValue) -> CommandArguments:
        if value is None:
            return self
        self._params[name] = _coerce(value)
        return self

    @property
    def params(self) -> dict[str, str]:
        return dict(self._params)

    def as_params(self) -> dict[str, str]:
        return {"method": self.method, **self._params}

    def __repr__(self) -> str:
        return f"CommandArguments({self.method!r}, {self._params!r})"


def join_tags(tags: Iterable[str]) -> str:
    parts: list[str] = []
    for tag in tags:
        if any(char.isspace() for char in tag):
            parts.append(f'"{tag}" ')
        else:
            parts.append(f"{tag} ")
    return "".join(parts)


def _coerce(value: ParamValue) -> str:
    # bool and IntEnum are both int subclasses; order matters.
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, IntEnum):
        return str(int(value))
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    raise TypeError(f"Unsupported parameter value type: {type(value).__name__}")
