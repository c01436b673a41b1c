import logging
from dataclasses import dataclass
from typing import List

from barangay.core.errors import (
    AccountNotApproved,
    AccountRejected,
    DuplicateIdentity,
    InvalidCredentials,
    ValidationError,
)
from barangay.models import Account, ApprovalStatus, Role
from barangay.services.approvals import ApprovalStateMachine
from barangay.services.credential_store import CredentialStore
from barangay.services.passwords import PasswordHasher
from barangay.services.qr_service import QRService

"""AuthService: Handles registration, password and QR login, and admin approval"""

logger = logging.getLogger(__name__)

PRIVILEGED_CREATED_MESSAGE = "Privileged account request submitted. Awaiting approval."
STANDARD_CREATED_MESSAGE = "Account created successfully."


@dataclass
class RegistrationResult:
    message: str
    image: str
    account: Account


@dataclass
class LoginResult:
    identity: str
    role: Role


def parse_role(role: str | Role) -> Role:
    try:
        return Role(role)
    except ValueError:
        raise ValidationError("Role must be 'standard' or 'privileged'")


class AuthService:
    def __init__(
        self,
        store: CredentialStore,
        hasher: PasswordHasher,
        approvals: ApprovalStateMachine,
        qr: type[QRService] = QRService,
    ):
        self.store = store
        self.hasher = hasher
        self.approvals = approvals
        self.qr = qr

    def register(self, identity: str, secret: str, role: str | Role) -> RegistrationResult:
        """
        Creates an account. Privileged accounts start pending and cannot log in
        until an administrator approves them.
        """
        if not identity or not secret or not role:
            raise ValidationError("Identity, secret, and role required")
        role = parse_role(role)

        # Fast path only; the store's unique insert is the authority
        if self.store.exists(identity):
            logger.warning(f"Registration rejected: identity={identity} exists")
            raise DuplicateIdentity()

        secret_hash = self.hasher.hash(secret)
        _, image = self.qr.issue(identity)
        status = self.approvals.initial_status(role)

        account = self.store.create(identity, secret_hash, role, status, image)

        message = PRIVILEGED_CREATED_MESSAGE if role == Role.PRIVILEGED else STANDARD_CREATED_MESSAGE
        logger.info(f"Registration: identity={identity}, role={role.value}, status={status.value}")
        return RegistrationResult(message=message, image=image, account=account)

    def _approved_account(self, identity: str) -> Account:
        # Shared gate for both login protocols: not found, rejected, not approved
        account = self.store.find_by_identity(identity)

        if account.is_privileged and account.approval_status == ApprovalStatus.REJECTED:
            logger.warning(f"Login refused: identity={identity} rejected")
            raise AccountRejected()

        if account.is_privileged and account.approval_status != ApprovalStatus.APPROVED:
            logger.warning(f"Login refused: identity={identity} not approved")
            raise AccountNotApproved()

        return account

    def login_with_password(self, identity: str, secret: str) -> LoginResult:
        if not identity or not secret:
            raise ValidationError("Identity and secret required")

        account = self._approved_account(identity)

        if not self.hasher.verify(secret, account.secret_hash):
            logger.warning(f"Login failed: identity={identity} bad credentials")
            raise InvalidCredentials()

        logger.info(f"Password login: identity={identity}")
        return LoginResult(identity=account.identity, role=account.role)

    def login_with_token(self, token_payload: dict | str) -> LoginResult:
        """
        Logs in with a scanned token payload. Knowing the payload is enough;
        there is no secret and no freshness check on this path.
        """
        identity = self.qr.decode(token_payload)
        account = self._approved_account(identity)

        logger.info(f"QR login: identity={identity}")
        return LoginResult(identity=account.identity, role=account.role)

    def decide_approval(self, identity: str, decision: str | ApprovalStatus) -> Account:
        return self.approvals.decide(identity, decision)

    def list_pending(self) -> List[Account]:
        return self.approvals.list_pending()

    def account_token(self, identity: str) -> str:
        return self.store.find_by_identity(identity).login_token

    def seed_default_admin(self, identity: str, secret: str) -> bool:
        """
        Creates an approved privileged account if none exists with this
        identity. Returns True when an account was created.
        """
        if self.store.exists(identity):
            logger.info("Default admin exists")
            return False

        _, image = self.qr.issue(identity)
        try:
            self.store.create(identity, self.hasher.hash(secret), Role.PRIVILEGED, ApprovalStatus.APPROVED, image)
        except DuplicateIdentity:
            return False

        logger.info(f"Default admin account created: identity={identity}")
        return True
