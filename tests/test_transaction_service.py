import json

import pytest

from core.memory_store import MemoryObjectStore
from core.object_store import StoreError
from repository.recycle_repository import RecycleRepository
from repository.user_index_repository import UserIndexRepository
from service.transaction_service import TransactionService
from util.errors import InvalidArgumentError, NotFoundError, StoreFailureError, VerificationError

JSON = "application/json; charset=utf-8"


async def _stage(staging, ns, base, payload=b'{"role":"admin"}', sig=b"SIG1\n"):
    if payload is not None:
        await staging.put(f"{ns}/{base}.json", payload, JSON)
    if sig is not None:
        await staging.put(f"{ns}/{base}.signature", sig, "text/plain")


class RefusingVerifier:
    def __init__(self):
        self.calls = []

    async def verify(self, ref, payload, signature):
        self.calls.append((ref.signature_key, payload, signature))
        return False


class BrokenListStore(MemoryObjectStore):
    async def list(self, prefix="", delimiter=None, max_keys=1000):
        raise StoreError("list", prefix, "down")


class BrokenPutStore(MemoryObjectStore):
    async def put(self, key, body, content_type):
        raise StoreError("put", key, "down")


# ---------------- list ----------------


async def test_list_only_pending_signatures(staging, tx_service):
    await _stage(staging, "alice", "alice")
    await _stage(staging, "bob", "update", payload=None)  # incomplete, still listed
    await staging.put("recycle/1/carol/c.signature", b"old", "text/plain")
    await staging.put("dave/notes.txt", b"x", "text/plain")

    pending = await tx_service.list_pending()

    assert sorted(pending) == ["alice/alice.signature", "bob/update.signature"]


async def test_list_is_capped_at_page_size(staging, admin, archiver):
    for i in range(5):
        await _stage(staging, "ns", f"t{i}")
    service = TransactionService(
        staging, admin, archiver, UserIndexRepository(admin), RefusingVerifier(), page_size=4
    )

    assert len(await service.list_pending()) == 2  # four keys = two pairs


async def test_list_store_failure_is_500(admin, archiver):
    service = TransactionService(
        BrokenListStore(), admin, archiver, UserIndexRepository(admin), RefusingVerifier()
    )
    with pytest.raises(StoreFailureError) as exc:
        await service.list_pending()
    assert exc.value.status_code == 500


# ---------------- raw ----------------


async def test_raw_returns_trimmed_signature_without_payload(staging, tx_service):
    await _stage(staging, "alice", "alice", payload=None, sig=b"  SIG1 \n")

    raw = await tx_service.get_raw_signature("alice", "alice.signature")

    assert raw.signature == "SIG1"
    assert raw.sigKey == "alice/alice.signature"


async def test_raw_rejects_wrong_suffix_before_store_access(tx_service):
    with pytest.raises(InvalidArgumentError):
        await tx_service.get_raw_signature("alice", "alice.json")


async def test_raw_missing_is_404(tx_service):
    with pytest.raises(NotFoundError) as exc:
        await tx_service.get_raw_signature("alice", "alice.signature")
    assert exc.value.status_code == 404


# ---------------- commit ----------------


async def test_commit_promotes_archives_and_reindexes(staging, admin, tx_service):
    await _stage(staging, "alice", "alice")

    res = await tx_service.commit("alice", "alice.signature")

    ts = res.archivedAt
    assert res.success and res.indexRebuilt
    assert await admin.get("alice/alice.json") == b'{"role":"admin"}'
    assert admin.content_type("alice/alice.json") == JSON
    assert await staging.get(f"recycle/{ts}/alice/alice.json") == b'{"role":"admin"}'
    assert await staging.get(f"recycle/{ts}/alice/alice.signature") == b"SIG1\n"
    assert "alice/alice.signature" not in await tx_service.list_pending()
    assert json.loads(await admin.get("user.json")) == ["alice"]


async def test_commit_overwrites_existing_record(staging, admin, tx_service):
    await admin.put("alice/alice.json", b'{"role":"user"}', JSON)
    await _stage(staging, "alice", "alice")

    await tx_service.commit("alice", "alice.signature")

    assert await admin.get("alice/alice.json") == b'{"role":"admin"}'


async def test_commit_without_payload_touches_nothing(staging, admin, tx_service):
    await _stage(staging, "alice", "alice", payload=None)

    with pytest.raises(NotFoundError):
        await tx_service.commit("alice", "alice.signature")

    assert admin.keys() == []
    assert staging.keys() == ["alice/alice.signature"]


async def test_commit_rerun_after_success_reports_not_found(staging, admin, tx_service):
    await _stage(staging, "alice", "alice")
    await tx_service.commit("alice", "alice.signature")

    with pytest.raises(NotFoundError):
        await tx_service.commit("alice", "alice.signature")
    assert await admin.get("alice/alice.json") == b'{"role":"admin"}'


async def test_commit_refused_signature_writes_nothing(staging, admin, archiver):
    verifier = RefusingVerifier()
    service = TransactionService(staging, admin, archiver, UserIndexRepository(admin), verifier)
    await _stage(staging, "alice", "alice")

    with pytest.raises(VerificationError) as exc:
        await service.commit("alice", "alice.signature")

    assert exc.value.status_code == 422
    assert verifier.calls == [("alice/alice.signature", b'{"role":"admin"}', "SIG1")]
    assert admin.keys() == []
    assert sorted(staging.keys()) == ["alice/alice.json", "alice/alice.signature"]


async def test_commit_succeeds_when_index_rebuild_fails(staging):
    class IndexWriteFails(MemoryObjectStore):
        async def put(self, key, body, content_type):
            if key == "user.json":
                raise StoreError("put", key, "down")
            await super().put(key, body, content_type)

    admin = IndexWriteFails("admin")
    service = TransactionService(
        staging,
        admin,
        RecycleRepository(staging, clock=lambda: "5"),
        UserIndexRepository(admin),
        _Accepting(),
    )
    await _stage(staging, "alice", "alice")

    res = await service.commit("alice", "alice.signature")

    assert res.indexRebuilt is False
    assert await admin.get("alice/alice.json") == b'{"role":"admin"}'
    assert "alice/alice.json" not in staging.keys()


async def test_commit_promote_failure_is_500_and_staging_kept(staging, archiver):
    admin = BrokenPutStore("admin")
    service = TransactionService(staging, admin, archiver, UserIndexRepository(admin), _Accepting())
    await _stage(staging, "alice", "alice")

    with pytest.raises(StoreFailureError):
        await service.commit("alice", "alice.signature")

    assert sorted(staging.keys()) == ["alice/alice.json", "alice/alice.signature"]


async def test_commit_rejects_filename_without_suffix(tx_service):
    with pytest.raises(InvalidArgumentError):
        await tx_service.commit("alice", "alice.json")


# ---------------- reject ----------------


async def test_reject_archives_pair_and_never_touches_admin(staging, admin, tx_service):
    await _stage(staging, "bob", "update")

    res = await tx_service.reject("bob", "update.signature")

    ts = res.archivedAt
    assert admin.keys() == []
    assert sorted(staging.keys()) == [f"recycle/{ts}/bob/update.json", f"recycle/{ts}/bob/update.signature"]


async def test_reject_without_payload_archives_signature(staging, admin, tx_service):
    await _stage(staging, "bob", "update", payload=None)

    res = await tx_service.reject("bob", "update.signature")

    assert staging.keys() == [f"recycle/{res.archivedAt}/bob/update.signature"]
    assert admin.keys() == []


async def test_reject_validates_short_filename(staging, tx_service):
    await staging.put("bob/x", b"x", "text/plain")

    with pytest.raises(InvalidArgumentError):
        await tx_service.reject("bob", "x")
    assert staging.keys() == ["bob/x"]


class _Accepting:
    async def verify(self, ref, payload, signature):
        return True
