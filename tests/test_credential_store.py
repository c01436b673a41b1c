import threading

import pytest

from barangay.core.errors import AccountNotFound, DuplicateIdentity, InvalidTransition
from barangay.models import ApprovalStatus, Role


def _create(store, identity, role=Role.STANDARD, status=ApprovalStatus.APPROVED):
    return store.create(identity, "hash", role, status, "data:image/png;base64,")


def test_create_and_find(credential_store):
    _create(credential_store, "alice")
    assert credential_store.exists("alice")
    account = credential_store.find_by_identity("alice")
    assert account.role == Role.STANDARD
    assert account.approval_status == ApprovalStatus.APPROVED


def test_create_duplicate_identity(credential_store):
    _create(credential_store, "alice")
    with pytest.raises(DuplicateIdentity):
        _create(credential_store, "alice", role=Role.PRIVILEGED, status=ApprovalStatus.PENDING)
    # The first record is untouched
    assert credential_store.find_by_identity("alice").role == Role.STANDARD


def test_find_missing_identity(credential_store):
    with pytest.raises(AccountNotFound):
        credential_store.find_by_identity("ghost")


def test_concurrent_creates_only_one_wins(credential_store):
    results = []
    barrier = threading.Barrier(16)

    def worker():
        barrier.wait()
        try:
            _create(credential_store, "alice")
            results.append("ok")
        except DuplicateIdentity:
            results.append("dup")

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("dup") == 15


def test_update_approval_status_conditional(credential_store):
    _create(credential_store, "boss", role=Role.PRIVILEGED, status=ApprovalStatus.PENDING)
    updated = credential_store.update_approval_status("boss", ApprovalStatus.REJECTED, expected=ApprovalStatus.PENDING)
    assert updated.approval_status == ApprovalStatus.REJECTED

    with pytest.raises(InvalidTransition):
        credential_store.update_approval_status("boss", ApprovalStatus.APPROVED, expected=ApprovalStatus.PENDING)
    assert credential_store.find_by_identity("boss").approval_status == ApprovalStatus.REJECTED


def test_update_approval_status_missing(credential_store):
    with pytest.raises(AccountNotFound):
        credential_store.update_approval_status("ghost", ApprovalStatus.APPROVED)


def test_list_by_role_and_status(credential_store):
    _create(credential_store, "alice")
    _create(credential_store, "boss", role=Role.PRIVILEGED, status=ApprovalStatus.PENDING)
    _create(credential_store, "chief", role=Role.PRIVILEGED, status=ApprovalStatus.APPROVED)

    pending = credential_store.list_by(Role.PRIVILEGED, ApprovalStatus.PENDING)
    assert [a.identity for a in pending] == ["boss"]
