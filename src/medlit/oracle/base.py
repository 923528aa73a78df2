"""
Oracle Base

Protocol and base class for the external text-generation oracle. The oracle
is a black box: given a task and a document it returns JSON of uncertain
quality. Prompt construction lives with the concrete implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Protocol, runtime_checkable

from medlit.core.enums import OracleTask


@dataclass(frozen=True)
class OracleRequest:
    """One unit of work for the oracle."""

    task: OracleTask
    text: str
    context: str | None = None  # e.g. full paper text for a methods excerpt


@dataclass
class OracleResponse:
    """Raw oracle answer; ``content`` is untrusted."""

    task: OracleTask
    content: str | dict[str, Any] | None
    oracle: str = "oracle"
    raw_response: Any | None = None


@runtime_checkable
class Oracle(Protocol):
    """Protocol for oracle implementations."""

    @property
    def name(self) -> str:
        """Oracle name."""
        ...

    async def generate(self, request: OracleRequest) -> OracleResponse:
        """Run one task. May raise OracleError subclasses."""
        ...


class BaseOracle(ABC):
    """
    Abstract base class for oracles.

    Subclasses implement ``generate``; they should raise
    ``OracleUnavailableError`` when no session can be created and let the
    pipeline handle timeouts and retries.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Oracle name (e.g. 'on-device', 'openai')."""
        ...

    @abstractmethod
    async def generate(self, request: OracleRequest) -> OracleResponse:
        ...

    def _response(self, request: OracleRequest, content: str | dict[str, Any] | None) -> OracleResponse:
        return OracleResponse(task=request.task, content=content, oracle=self.name)


class CallableOracle(BaseOracle):
    """
    Adapter turning an async callable into an Oracle.

    Usage:
        async def ask(task: OracleTask, text: str, context: str | None) -> str:
            ...
        oracle = CallableOracle(ask, name="host")
    """

    def __init__(
        self,
        func: Callable[[OracleTask, str, str | None], Awaitable[str | dict[str, Any] | None]],
        name: str = "callable",
    ) -> None:
        self._func = func
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def generate(self, request: OracleRequest) -> OracleResponse:
        content = await self._func(request.task, request.text, request.context)
        return self._response(request, content)
