import pytest

from model.transaction import TransactionRef
from util.errors import InvalidArgumentError


def test_parse_derives_pair_keys():
    ref = TransactionRef.parse("alice", "update.signature")

    assert ref.base == "update"
    assert ref.signature_key == "alice/update.signature"
    assert ref.payload_key == "alice/update.json"
    assert ref.keys == ["alice/update.json", "alice/update.signature"]


@pytest.mark.parametrize("filename", ["update.json", "sig", ".signature", "", "a.signature.bak"])
def test_parse_rejects_bad_filenames(filename):
    with pytest.raises(InvalidArgumentError) as exc:
        TransactionRef.parse("alice", filename)
    assert exc.value.status_code == 400


@pytest.mark.parametrize("namespace", ["", "a/b", "recycle", " alice", "alice ", " "])
def test_parse_rejects_bad_namespaces(namespace):
    with pytest.raises(InvalidArgumentError):
        TransactionRef.parse(namespace, "x.signature")
