"""Base class and transaction decorator for ledger contracts."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from realty_escrow.exceptions import ConfigurationError
from realty_escrow.models.ledger import EventType, Operation, Role

if TYPE_CHECKING:
    from realty_escrow.network import Network


@dataclass(frozen=True)
class CallContext:
    """Caller identity and attached value of the executing call."""

    sender: str
    value: int
    operation: Operation


def transaction(operation: Operation, payable: bool = False) -> Callable:
    """Declare a contract method as a role-gated, atomic transaction.

    The decorated method receives a ``CallContext`` after ``self``.  Callers
    invoke it without the context and pass ``sender=`` (and ``value=`` for
    payable operations) as keywords; dispatch goes through
    ``Network.execute``.
    """

    def decorator(method: Callable) -> Callable:
        @functools.wraps(method)
        def wrapper(self: Contract, *args: Any, sender: Any, value: int = 0, **kwargs: Any) -> Any:
            return self.network.execute(
                self,
                operation,
                method,
                args,
                kwargs,
                sender=sender,
                value=value,
                payable=payable,
            )

        wrapper.operation = operation  # type: ignore[attr-defined]
        wrapper.payable = payable  # type: ignore[attr-defined]
        return wrapper

    return decorator


class Contract:
    """Base class for contracts deployed on a ``Network``.

    Subclasses list the attributes holding their mutable state in
    ``STORAGE``; each must be a journaled store offering ``begin``,
    ``commit`` and ``rollback``.
    """

    STORAGE: tuple[str, ...] = ()

    def __init__(self, network: Network, address: str) -> None:
        self.network = network
        self.address = address

    def role_holders(self, role: Role, token_id: int | None = None) -> frozenset[str]:
        """Return the addresses holding role for the given token."""
        raise ConfigurationError(f"{type(self).__name__} does not define role {role.value}")

    def begin(self) -> None:
        """Start journaling storage changes."""
        for name in self.STORAGE:
            getattr(self, name).begin()

    def commit(self) -> None:
        """Keep storage changes made since ``begin``."""
        for name in self.STORAGE:
            getattr(self, name).commit()

    def rollback(self) -> None:
        """Undo storage changes made since ``begin``."""
        for name in self.STORAGE:
            getattr(self, name).rollback()

    def emit(self, event_type: EventType, subject: int, data: dict[str, Any]) -> None:
        """Emit an event into the current transaction."""
        self.network.record_event(self, event_type, subject, data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.address})"
