"""Sequential ledger network executing contract transactions.

The network owns every piece of mutable state: account balances, deployed
contracts, committed receipts and the event log.  Calls run one at a time.
A call either commits in full, producing a ``Receipt``, or fails and
leaves no trace.  While the outermost call runs, every store and balance
saves its prior value the first time it changes; on failure those values
are put back and the events of the call are dropped.  Calls a contract makes
into another contract during its own transaction join that transaction.
"""

from __future__ import annotations

import hashlib
import inspect
import logging
import uuid
from datetime import datetime
from typing import Any, Callable

from realty_escrow.addresses import ZERO_ADDRESS, to_address
from realty_escrow.config import NetworkConfig
from realty_escrow.contracts.access import AccessPolicy
from realty_escrow.contracts.base import CallContext, Contract
from realty_escrow.exceptions import (
    EntityNotFoundError,
    InsufficientFundsError,
    InvalidAddressError,
    InvalidValueError,
)
from realty_escrow.generators.signer import SignerGenerator
from realty_escrow.models.base import Event, Receipt
from realty_escrow.models.ledger import EventType, Operation, Signer
from realty_escrow.units import parse_ether, require_uint

logger = logging.getLogger(__name__)


class Network:
    """In-process ledger with funded signer accounts.

    Parameters
    ----------
    config : NetworkConfig | None
        Number of signers, their starting balance and the chain id.
    seed : int | None
        Seed for reproducible signer addresses.
    policy : AccessPolicy | None
        Operation-to-role rules (default ``ACCESS_POLICY``).
    """

    def __init__(
        self,
        config: NetworkConfig | None = None,
        seed: int | None = None,
        policy: AccessPolicy | None = None,
    ) -> None:
        self.config = config or NetworkConfig()
        self.policy = policy or AccessPolicy()
        self.chain_id = self.config.chain_id

        self.balances: dict[str, int] = {}
        self.contracts: dict[str, Contract] = {}
        self.receipts: list[Receipt] = []
        self.events: list[Event] = []

        self._nonces: dict[str, int] = {}
        self._depth = 0
        self._balance_undo: dict[str, int | None] | None = None

        initial_balance = parse_ether(self.config.initial_balance_ether)
        generator = SignerGenerator(seed=seed)
        self._signers = list(generator.generate_batch(self.config.num_signers))
        for signer in self._signers:
            self.balances[signer.address] = initial_balance

        logger.info(
            "Network %d started with %d signers",
            self.chain_id,
            len(self._signers),
        )

    # Accounts
    def get_signers(self) -> list[Signer]:
        """Return the funded signer accounts."""
        return list(self._signers)

    def balance_of(self, address: Any) -> int:
        """Return the balance of an account or contract in base units."""
        return self.balances.get(to_address(address), 0)

    def set_balance(self, address: Any, amount: int) -> None:
        """Fund an account by overwriting its balance in base units.

        This is the network's faucet: accounts other than the initial
        signers start at zero and are funded this way.  Inside a running
        transaction the change is undone if the transaction fails.
        """
        self._write_balance(to_address(address), require_uint(amount, "amount"))

    # Contracts
    def deploy(self, contract_cls: type[Contract], *args: Any, sender: Any) -> Contract:
        """Deploy a contract and return the instance.

        The contract address is derived from the deployer and its deploy
        count, so the same sequence of deployments yields the same
        addresses.
        """
        deployer = self._require_sender(sender)
        nonce = self._nonces.get(deployer, 0)
        digest = hashlib.sha256(f"{deployer}:{nonce}".encode("utf-8")).hexdigest()
        address = "0x" + digest[-40:]

        contract = contract_cls(self, address, *args)
        self._nonces[deployer] = nonce + 1
        self.contracts[address] = contract

        receipt = Receipt(
            block_number=len(self.receipts) + 1,
            operation=Operation.DEPLOY.value,
            contract=address,
            sender=deployer,
        )
        self.receipts.append(receipt)
        logger.info("Deployed %s at %s", contract_cls.__name__, address)
        return contract

    def get_contract(self, address: Any) -> Contract:
        """Return the contract deployed at address."""
        address = to_address(address)
        contract = self.contracts.get(address)
        if contract is None:
            raise EntityNotFoundError(f"No contract deployed at {address}")
        return contract

    # Execution
    def execute(
        self,
        contract: Contract,
        operation: Operation,
        method: Callable,
        args: tuple,
        kwargs: dict[str, Any],
        *,
        sender: Any,
        value: int = 0,
        payable: bool = False,
    ) -> Any:
        """Run a contract method as a transaction.

        Parameters
        ----------
        contract : Contract
            Contract being called.
        operation : Operation
            Operation the method implements; selects the access rule.
        method : Callable
            Undecorated method taking ``(self, ctx, *args, **kwargs)``.
        args, kwargs
            Call arguments.
        sender : Any
            Caller address, signer or contract.
        value : int
            Base units attached to the call.
        payable : bool
            Whether the operation accepts value.

        Returns
        -------
        Any
            The method's return value.
        """
        sender = self._require_sender(sender)
        require_uint(value, "value")
        if value and not payable:
            raise InvalidValueError(f"{operation.value} does not accept value")

        bound = inspect.signature(method).bind(contract, None, *args, **kwargs)
        token_id = bound.arguments.get("token_id")

        outermost = self._depth == 0
        if outermost:
            first_event = len(self.events)
            self._begin()

        self._depth += 1
        try:
            self.policy.authorize(contract, operation, sender, token_id)
            if value:
                self._transfer_value(sender, contract.address, value)
            result = method(contract, CallContext(sender, value, operation), *args, **kwargs)
        except Exception as e:
            if outermost:
                self._rollback(first_event)
                logger.warning(
                    "Reverted %s on %s from %s: %s",
                    operation.value,
                    contract.address,
                    sender,
                    e,
                    extra={
                        "operation": operation.value,
                        "contract": contract.address,
                        "sender": sender,
                        "token_id": token_id,
                    },
                )
            raise
        finally:
            self._depth -= 1

        if outermost:
            self._commit()
            receipt = Receipt(
                block_number=len(self.receipts) + 1,
                operation=operation.value,
                contract=contract.address,
                sender=sender,
                value=value,
                result=result,
                events=self.events[first_event:],
            )
            self.receipts.append(receipt)
            logger.info(
                "Block %d: %s on %s from %s",
                receipt.block_number,
                operation.value,
                contract.address,
                sender,
                extra={
                    "block_number": receipt.block_number,
                    "operation": operation.value,
                    "contract": contract.address,
                    "sender": sender,
                    "token_id": token_id,
                },
            )
        return result

    def record_event(
        self,
        contract: Contract,
        event_type: EventType,
        subject: int,
        data: dict[str, Any],
    ) -> Event:
        """Append an event to the log of the running transaction."""
        event = Event(
            event_id=str(uuid.uuid4()),
            event_type=event_type.value,
            event_time=datetime.now(),
            source=contract.address,
            subject=str(subject),
            data=data,
            metadata={"chain_id": self.chain_id, "block_number": len(self.receipts) + 1},
        )
        self.events.append(event)
        return event

    def get_events(self, event_type: EventType | None = None) -> list[Event]:
        """Return committed events, optionally of one type."""
        if event_type is None:
            return list(self.events)
        return [e for e in self.events if e.event_type == event_type.value]

    def _transfer_value(self, sender: str, recipient: str, amount: int) -> None:
        available = self.balances.get(sender, 0)
        if available < amount:
            raise InsufficientFundsError(
                f"{sender} has {available} base units, needs {amount}"
            )
        self._write_balance(sender, available - amount)
        self._write_balance(recipient, self.balances.get(recipient, 0) + amount)

    def _require_sender(self, sender: Any) -> str:
        address = to_address(sender)
        if address == ZERO_ADDRESS:
            raise InvalidAddressError("Calls cannot be sent from the zero address")
        return address

    def _write_balance(self, address: str, amount: int) -> None:
        if self._balance_undo is not None and address not in self._balance_undo:
            self._balance_undo[address] = self.balances.get(address)
        self.balances[address] = amount

    def _begin(self) -> None:
        logger.debug("Opening transaction at block %d", len(self.receipts) + 1)
        self._balance_undo = {}
        for contract in self.contracts.values():
            contract.begin()

    def _commit(self) -> None:
        self._balance_undo = None
        for contract in self.contracts.values():
            contract.commit()

    def _rollback(self, first_event: int) -> None:
        for address, prior in (self._balance_undo or {}).items():
            if prior is None:
                self.balances.pop(address, None)
            else:
                self.balances[address] = prior
        self._balance_undo = None
        del self.events[first_event:]
        for contract in self.contracts.values():
            contract.rollback()

    def summary(self) -> dict[str, int]:
        """Return summary counts."""
        return {
            "signers": len(self._signers),
            "contracts": len(self.contracts),
            "blocks": len(self.receipts),
            "events": len(self.events),
        }
