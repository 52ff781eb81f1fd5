"""Access-control policy for ledger operations.

Each mutating operation is permitted to exactly one role.  The network
checks the table before any state is touched, so individual contract
methods never compare caller identities themselves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from realty_escrow.exceptions import AuthorizationError, ConfigurationError
from realty_escrow.models.ledger import Operation, Role

if TYPE_CHECKING:
    from realty_escrow.contracts.base import Contract

ACCESS_POLICY: dict[Operation, Role] = {
    Operation.DEPLOY: Role.ANYONE,
    Operation.MINT: Role.ANYONE,
    Operation.APPROVE: Role.TOKEN_OWNER,
    Operation.TRANSFER: Role.OWNER_OR_APPROVED,
    Operation.LIST: Role.SELLER,
    Operation.DEPOSIT_EARNEST: Role.BUYER,
    Operation.UPDATE_INSPECTION_STATUS: Role.INSPECTOR,
}


class AccessPolicy:
    """Map operations to roles and check callers against them.

    Parameters
    ----------
    table : dict[Operation, Role] | None
        Operation-to-role rules (default ``ACCESS_POLICY``).
    """

    def __init__(self, table: dict[Operation, Role] | None = None) -> None:
        self.table = dict(ACCESS_POLICY if table is None else table)

    def role_for(self, operation: Operation) -> Role:
        """Return the role permitted to invoke an operation."""
        try:
            return self.table[operation]
        except KeyError:
            raise ConfigurationError(f"No access rule for operation {operation.value}") from None

    def authorize(
        self,
        contract: Contract,
        operation: Operation,
        sender: str,
        token_id: int | None = None,
    ) -> Role:
        """Check that sender holds the role required for operation.

        Parameters
        ----------
        contract : Contract
            Contract being called; resolves who holds a role.
        operation : Operation
            Operation being invoked.
        sender : str
            Normalized caller address.
        token_id : int | None
            Token the call targets, for per-token roles.

        Returns
        -------
        Role
            The role the sender was authorized under.

        Raises
        ------
        AuthorizationError
            If sender does not hold the role.
        """
        role = self.role_for(operation)
        if role is Role.ANYONE:
            return role

        holders = contract.role_holders(role, token_id)
        if sender not in holders:
            raise AuthorizationError(
                f"{sender} is not permitted to call {operation.value}: requires {role.value}"
            )
        return role
