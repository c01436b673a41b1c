# Account record and the enums describing its role and approval state.

from dataclasses import asdict, dataclass
from enum import Enum


class Role(str, Enum):
    STANDARD = "standard"
    PRIVILEGED = "privileged"


class ApprovalStatus(str, Enum):
    APPROVED = "approved"
    PENDING = "pending"
    REJECTED = "rejected"


@dataclass
class Account:
    identity: str
    secret_hash: str
    role: Role
    approval_status: ApprovalStatus
    login_token: str

    @property
    def is_privileged(self) -> bool:
        return self.role == Role.PRIVILEGED

    def public(self) -> dict:
        # Never includes secret_hash or the token image
        return {
            "identity": self.identity,
            "role": self.role.value,
            "approvalStatus": self.approval_status.value,
        }

    def to_document(self) -> dict:
        doc = asdict(self)
        doc["role"] = self.role.value
        doc["approval_status"] = self.approval_status.value
        return doc

    @classmethod
    def from_document(cls, doc: dict) -> "Account":
        return cls(
            identity=doc["identity"],
            secret_hash=doc["secret_hash"],
            role=Role(doc["role"]),
            approval_status=ApprovalStatus(doc["approval_status"]),
            login_token=doc["login_token"],
        )
