# Approval lifecycle for privileged accounts:
#   pending -> approved | rejected, both terminal.
# Standard accounts are created approved and never enter this machine.

import logging
from typing import List

from barangay.core.errors import InvalidTransition, ValidationError
from barangay.models import Account, ApprovalStatus, Role
from barangay.services.credential_store import CredentialStore

logger = logging.getLogger(__name__)

DECISIONS = (ApprovalStatus.APPROVED, ApprovalStatus.REJECTED)


class ApprovalStateMachine:
    def __init__(self, store: CredentialStore):
        self.store = store

    @staticmethod
    def initial_status(role: Role) -> ApprovalStatus:
        if role == Role.PRIVILEGED:
            return ApprovalStatus.PENDING
        return ApprovalStatus.APPROVED

    @staticmethod
    def parse_decision(decision: str | ApprovalStatus) -> ApprovalStatus:
        try:
            status = ApprovalStatus(decision)
        except ValueError:
            raise ValidationError("Decision must be 'approved' or 'rejected'")
        if status not in DECISIONS:
            raise ValidationError("Decision must be 'approved' or 'rejected'")
        return status

    @staticmethod
    def ensure_transition(account: Account, decision: ApprovalStatus) -> None:
        if not account.is_privileged:
            raise InvalidTransition("Only privileged accounts go through approval")
        if account.approval_status != ApprovalStatus.PENDING:
            raise InvalidTransition(f"Account is already {account.approval_status.value}")
        if decision not in DECISIONS:
            raise InvalidTransition(f"Cannot move a pending account to {decision.value}")

    def decide(self, identity: str, decision: str | ApprovalStatus) -> Account:
        status = self.parse_decision(decision)
        account = self.store.find_by_identity(identity)
        self.ensure_transition(account, status)

        # Conditional write: a concurrent decision that landed first makes this fail
        updated = self.store.update_approval_status(identity, status, expected=ApprovalStatus.PENDING)
        logger.info(f"Approval decided: identity={identity}, decision={status.value}")
        return updated

    def list_pending(self) -> List[Account]:
        return self.store.list_by(Role.PRIVILEGED, ApprovalStatus.PENDING)
