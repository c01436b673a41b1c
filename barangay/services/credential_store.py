import logging
from typing import List

from barangay.core.errors import AccountNotFound, DuplicateIdentity, InvalidTransition
from barangay.db import ConditionFailed, DocumentStore, DuplicateKeyError
from barangay.models import Account, ApprovalStatus, Role

logger = logging.getLogger(__name__)

ACCOUNTS = "accounts"


class CredentialStore:
    """Persists one Account document per identity in the document store"""

    def __init__(self, db: DocumentStore):
        self.db = db

    def exists(self, identity: str) -> bool:
        return self.db.contains(ACCOUNTS, identity)

    def create(
        self,
        identity: str,
        secret_hash: str,
        role: Role,
        approval_status: ApprovalStatus,
        login_token: str,
    ) -> Account:
        account = Account(
            identity=identity,
            secret_hash=secret_hash,
            role=role,
            approval_status=approval_status,
            login_token=login_token,
        )
        try:
            self.db.insert(ACCOUNTS, identity, account.to_document())
        except DuplicateKeyError:
            logger.warning(f"Account create failed: identity={identity} already exists")
            raise DuplicateIdentity()

        logger.info(f"Account created: identity={identity}, role={role.value}, status={approval_status.value}")
        return account

    def find_by_identity(self, identity: str) -> Account:
        doc = self.db.get(ACCOUNTS, identity)
        if doc is None:
            raise AccountNotFound()
        return Account.from_document(doc)

    def update_approval_status(
        self,
        identity: str,
        new_status: ApprovalStatus,
        expected: ApprovalStatus | None = None,
    ) -> Account:
        """
        Sets the approval status. With expected, the write only happens if the
        stored status still equals it (checked and written atomically).
        """
        condition = {"approval_status": expected.value} if expected else None
        try:
            doc = self.db.update(ACCOUNTS, identity, {"approval_status": new_status.value}, expected=condition)
        except ConditionFailed:
            logger.warning(f"Approval update failed: identity={identity} is no longer {expected.value}")
            raise InvalidTransition()

        if doc is None:
            raise AccountNotFound()

        logger.info(f"Approval status updated: identity={identity}, status={new_status.value}")
        return Account.from_document(doc)

    def list_by(self, role: Role, approval_status: ApprovalStatus) -> List[Account]:
        docs = self.db.find(ACCOUNTS, role=role.value, approval_status=approval_status.value)
        return [Account.from_document(doc) for doc in docs]
