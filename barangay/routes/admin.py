# Administrative review queue for privileged account requests.

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from barangay.models import ApprovalStatus
from barangay.routes.deps import get_auth_service, require_admin
from barangay.services.auth_service import AuthService

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


class PendingAccountResp(BaseModel):
    identity: str
    role: str
    approvalStatus: str


class DecisionReq(BaseModel):
    decision: str | None = None


class MessageResp(BaseModel):
    message: str


@router.get("/pending-privileged-accounts", response_model=List[PendingAccountResp])
def pending_privileged_accounts(auth: AuthService = Depends(get_auth_service)):
    return [account.public() for account in auth.list_pending()]


@router.put("/decide-approval/{identity}", response_model=MessageResp)
def decide_approval(identity: str, req: DecisionReq, auth: AuthService = Depends(get_auth_service)):
    account = auth.decide_approval(identity, req.decision or "")
    if account.approval_status == ApprovalStatus.APPROVED:
        return MessageResp(message="Privileged account approved successfully")
    return MessageResp(message="Privileged account rejected successfully")
