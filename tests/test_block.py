import struct

import pytest

from zainofetch.block import (
    GENESIS_TARGET_DIFFICULTY,
    BlockHeader,
    FullBlock,
    block_height,
    parse_block,
    parse_block_header,
    parse_full_block,
)
from zainofetch.encoding import ByteReader
from zainofetch.errors import InvalidDataError


def header_bytes(nonce=b"\x07" * 32, solution=b"\xaa" * 5, time=1_700_000_000):
    return (
        struct.pack("<i", 4)
        + b"\x01" * 32
        + b"\x02" * 32
        + b"\x03" * 32
        + struct.pack("<I", time)
        + b"\x1f\x07\xff\xff"
        + nonce
        + bytes([len(solution)])
        + solution
    )


def coinbase_tx(script):
    return (
        struct.pack("<I", 0x80000004)
        + struct.pack("<I", 0x892F2085)
        + b"\x01"
        + b"\x00" * 32
        + b"\xff\xff\xff\xff"
        + bytes([len(script)])
        + script
        + b"\xff\xff\xff\xff"
        + b"\x01"
        + struct.pack("<Q", 50_000)
        + b"\x00"
        + b"\x00" * 4
        + b"\x00" * 4
        + b"\x00" * 8
        + b"\x00\x00\x00"
    )


ACTION_NULLIFIER = b"\x11" * 32
ACTION_CMX = b"\x22" * 32
ACTION_EPK = b"\x33" * 32
ACTION_CIPHERTEXT = bytes(range(256)) * 2 + bytes(68)


def orchard_tx():
    action = (
        b"\x00" * 32
        + ACTION_NULLIFIER
        + b"\x00" * 32
        + ACTION_CMX
        + ACTION_EPK
        + ACTION_CIPHERTEXT
        + b"\x00" * 80
    )
    return (
        struct.pack("<I", 0x80000005)
        + struct.pack("<I", 0x26A7270A)
        + struct.pack("<I", 0xC2D6D0B4)
        + b"\x00" * 4
        + b"\x00" * 4
        + b"\x00"
        + b"\x00"
        + b"\x00"
        + b"\x00"
        + b"\x01"
        + action
        + b"\x01"
        + b"\x00" * 8
        + b"\x00" * 32
        + b"\x00"
        + b"\x00" * 64
        + b"\x00" * 64
    )


def height_script(height):
    return b"\x03" + height.to_bytes(3, "little")


def block_bytes(txs, **header_kwargs):
    return header_bytes(**header_kwargs) + bytes([len(txs)]) + b"".join(txs)


TXID_A = b"\xaa" * 32
TXID_B = b"\xbb" * 32


def test_header_round_trip():
    raw = header_bytes()
    header, remaining = parse_block_header(raw + b"tail")
    assert remaining == b"tail"
    assert header.version == 4
    assert header.time == 1_700_000_000
    assert header.hash_prev_block == b"\x01" * 32
    assert header.solution == b"\xaa" * 5
    assert header.to_bytes() == raw


def test_header_reader_is_advanced():
    raw = header_bytes()
    reader = ByteReader(raw + b"\x09")
    parse_block_header(reader)
    assert reader.position == len(raw)


def test_truncated_header_raises():
    with pytest.raises(InvalidDataError):
        parse_block_header(header_bytes()[:50])


def test_block_hash_depends_on_nonce():
    first, _ = parse_block_header(header_bytes(nonce=b"\x00" * 32))
    second, _ = parse_block_header(header_bytes(nonce=b"\x01" * 32))
    assert len(first.block_hash()) == 32
    assert first.block_hash() == first.block_hash()
    assert first.block_hash() != second.block_hash()


def test_parse_block_reads_height_and_transactions():
    data = block_bytes([coinbase_tx(height_script(1000)), orchard_tx()])
    block = parse_block(data, [TXID_A, TXID_B])
    assert block.height == 1000
    assert [tx.tx_id for tx in block.transactions] == [TXID_A, TXID_B]
    assert block.cached_hash == block.header.block_hash()
    assert block.transactions[0].transparent_outputs[0].value == 50_000


@pytest.mark.parametrize(
    "script, expected",
    [
        (b"\x00", 0),
        (b"\x4f", -1),
        (b"\x51", 1),
        (b"\x60", 16),
        (b"\x04" + GENESIS_TARGET_DIFFICULTY.to_bytes(4, "little"), 0),
        (b"\x05" + (1 << 32).to_bytes(5, "little"), -1),
    ],
)
def test_block_height_special_cases(script, expected):
    block = parse_block(block_bytes([coinbase_tx(script)]), [TXID_A])
    assert block.height == expected
    assert block_height(block.transactions) == expected


def test_block_height_without_transactions_raises():
    with pytest.raises(InvalidDataError):
        block_height([])


def test_txid_count_mismatch_raises():
    data = block_bytes([coinbase_tx(height_script(5))])
    with pytest.raises(InvalidDataError, match="does not match tx_count"):
        parse_full_block(data, [TXID_A, TXID_B])


def test_missing_txids_raises():
    with pytest.raises(InvalidDataError):
        parse_full_block(block_bytes([coinbase_tx(height_script(5))]), None)


def test_missing_transaction_data_raises():
    data = header_bytes() + b"\x01"
    with pytest.raises(InvalidDataError, match="not enough data"):
        parse_full_block(data, [TXID_A])


def test_trailing_data():
    data = block_bytes([coinbase_tx(height_script(7))]) + b"\xde\xad"
    block, remaining = parse_full_block(data, [TXID_A])
    assert remaining == b"\xde\xad"
    assert block.height == 7
    with pytest.raises(InvalidDataError, match="2 bytes of Remaining data"):
        parse_block(data, [TXID_A])


def test_into_compact_keeps_only_shielded_transactions():
    data = block_bytes([coinbase_tx(height_script(1000)), orchard_tx()])
    block = parse_block(data, [TXID_A, TXID_B])
    compact = block.into_compact(12, 34)
    assert compact.proto_version == 4
    assert compact.height == 1000
    assert compact.hash == block.cached_hash
    assert compact.prev_hash == b"\x01" * 32
    assert compact.time == 1_700_000_000
    assert compact.header == b""
    assert compact.chain_metadata.sapling_commitment_tree_size == 12
    assert compact.chain_metadata.orchard_commitment_tree_size == 34
    assert len(compact.vtx) == 1
    tx = compact.vtx[0]
    assert tx.index == 1
    assert tx.hash == TXID_B
    assert tx.actions[0].nullifier == ACTION_NULLIFIER
    assert tx.actions[0].cmx == ACTION_CMX
    assert tx.actions[0].ciphertext == ACTION_CIPHERTEXT[:52]


def test_full_block_constructed_directly():
    header, _ = parse_block_header(header_bytes())
    block = FullBlock(header=header, cached_hash=header.block_hash(), height=3)
    compact = block.into_compact(0, 0)
    assert compact.vtx == []
    assert compact.height == 3
    assert isinstance(block.header, BlockHeader)
    assert compact.hash == header.block_hash()