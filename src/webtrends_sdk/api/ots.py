from __future__ import annotations

from typing import TYPE_CHECKING

from ..core.primitives import PathString
from .control import ControlOperations

if TYPE_CHECKING:
    from ..client import ApiClient

OTS_BASE_PATH = PathString("/ots/api/rest-1.2")


class OtsOperations:
    """Operations for ``/ots/api/rest-1.2``."""

    def __init__(self, path: PathString, client: "ApiClient"):
        self._path = path
        self._client = client
        self._control = client.defer(
            lambda c: ControlOperations(self._path + "/control", c)
        )

    @property
    def path(self) -> PathString:
        return self._path

    @property
    def control(self) -> ControlOperations:
        return self._control.value


__all__ = ["OtsOperations", "OTS_BASE_PATH"]
