from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Result:
    """Outcome of a public tracker operation.

    ``value`` holds the success payload when ``ok`` is true, otherwise the
    failure indicator: an error code, or ``False`` for operations that only
    report coarse failure.
    """

    ok: bool
    value: Any

    @classmethod
    def success(cls, value=True):
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, value=False):
        return cls(ok=False, value=value)
