"""
Structured service results.

Expected business failures (not found, conflict, insufficient quantity,
validation) are returned as results carrying an HTTP-like status so callers
can pick a message. Transport failures are raised instead.
"""
from dataclasses import dataclass
from typing import Any, Optional


@dataclass
class ServiceResult:
    status: int
    message: str = ""
    data: Optional[Any] = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    @classmethod
    def success(cls, data: Any = None, message: str = "", status: int = 200) -> 'ServiceResult':
        return cls(status=status, message=message, data=data)

    @classmethod
    def not_found(cls, message: str) -> 'ServiceResult':
        return cls(status=404, message=message)

    @classmethod
    def conflict(cls, message: str) -> 'ServiceResult':
        return cls(status=409, message=message)

    @classmethod
    def invalid(cls, message: str) -> 'ServiceResult':
        return cls(status=400, message=message)
