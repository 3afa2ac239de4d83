import gc

import pytest

from linkagg.ids import (
    ConnId,
    EncryptedConnId,
    LinkId,
    OwnedConnId,
    ServerId,
    debug_id,
)


def test_debug_id_truncates():
    assert debug_id(0xABCDEF << 104) == "abcdef"
    assert debug_id(0) == "000000"


def test_display_is_padded_hex():
    assert str(ConnId(255)) == "00000000000000ff"
    assert str(LinkId(0x1234567890ABCDEF1)) == "1234567890abcdef1"


def test_repr_uses_debug_id():
    cid = ConnId(0x123456789ABCDEF0)
    assert repr(cid) == debug_id(cid.value)
    assert repr(ServerId(cid.value)) == repr(cid)


def test_ids_of_different_kinds_differ():
    assert (ConnId(1) == LinkId(1)) is False
    assert ConnId(1) == ConnId(1)


def test_ordering():
    assert ConnId(1) < ConnId(2)
    assert sorted([LinkId(3), LinkId(1)]) == [LinkId(1), LinkId(3)]


def test_generate_in_range():
    ids = {ConnId.generate() for _ in range(50)}
    assert len(ids) == 50
    assert all(0 <= cid.value < (1 << 128) for cid in ids)


def test_server_id_nonzero():
    with pytest.raises(ValueError):
        ServerId(0)
    assert all(ServerId.generate().value > 0 for _ in range(50))


def test_id_out_of_range():
    with pytest.raises(ValueError):
        ConnId(1 << 128)
    with pytest.raises(ValueError):
        LinkId(-1)


def test_encryption_round_trip():
    shared = bytes(range(32))
    cid = ConnId(0x0123456789ABCDEF0123456789ABCDEF)
    enc = EncryptedConnId.encrypt(cid, shared)
    assert enc.decrypt(shared) == cid
    assert enc.value == cid.value ^ int.from_bytes(shared[:16], "big")


def test_encryption_with_other_secret_fails_to_recover():
    cid = ConnId(0x55)
    enc = EncryptedConnId.encrypt(cid, bytes(32))
    assert enc.value == cid.value
    assert enc.decrypt(bytes([1]) * 32).value == cid.value ^ int.from_bytes(bytes([1]) * 16, "big")


def test_short_secret_rejected():
    with pytest.raises(ValueError):
        EncryptedConnId.encrypt(ConnId(1), bytes(8))


def test_encrypted_repr():
    assert repr(EncryptedConnId(0x123456789ABCDEF0)) == "*123456*"


def test_owned_release_reports_once():
    seen = []
    owned = OwnedConnId(ConnId(7), seen.append)
    assert owned.get() == ConnId(7)
    owned.release()
    owned.release()
    del owned
    gc.collect()
    assert seen == [ConnId(7)]


def test_owned_reports_on_collection():
    seen = []
    owned = OwnedConnId(ConnId(9), seen.append)
    del owned
    gc.collect()
    assert seen == [ConnId(9)]


def test_untracked_reports_nothing():
    owned = OwnedConnId.untracked(ConnId(3))
    owned.release()
    assert owned.get() == ConnId(3)
    assert str(owned) == str(ConnId(3))
    assert repr(owned) == repr(ConnId(3))