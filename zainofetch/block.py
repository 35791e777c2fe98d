"""Full Zcash blocks: header parsing, hashing and compact conversion."""

from __future__ import annotations

import hashlib
import struct
from collections.abc import Sequence
from dataclasses import dataclass, field

from zainofetch.compact import ChainMetadata, CompactBlock
from zainofetch.encoding import ByteReader, encode_compact_size
from zainofetch.errors import InvalidDataError
from zainofetch.transaction import FullTransaction, parse_transaction

GENESIS_TARGET_DIFFICULTY = 520617983
COMPACT_PROTO_VERSION = 4
_U32_MAX = 0xFFFFFFFF
_U64_MASK = 0xFFFFFFFFFFFFFFFF


@dataclass
class BlockHeader:
    """A block header as serialized on the wire."""

    version: int
    hash_prev_block: bytes
    hash_merkle_root: bytes
    hash_final_sapling_root: bytes
    time: int
    n_bits_bytes: bytes
    nonce: bytes
    solution: bytes

    def to_bytes(self) -> bytes:
        """Serialize the header back into its wire form."""
        return b"".join(
            (
                struct.pack("<i", self.version),
                self.hash_prev_block,
                self.hash_merkle_root,
                self.hash_final_sapling_root,
                struct.pack("<I", self.time),
                self.n_bits_bytes,
                self.nonce,
                encode_compact_size(len(self.solution)),
                self.solution,
            )
        )

    def block_hash(self) -> bytes:
        """Return the double SHA-256 of the serialized header."""
        first = hashlib.sha256(self.to_bytes()).digest()
        return hashlib.sha256(first).digest()


def _as_reader(data: bytes | ByteReader) -> ByteReader:
    return data if isinstance(data, ByteReader) else ByteReader(data)


def parse_block_header(data: bytes | ByteReader) -> tuple[BlockHeader, bytes]:
    """Parse a block header from the front of data.

    Returns the header and the bytes that follow it. A ByteReader given as
    data is advanced past the header.
    """
    reader = _as_reader(data)
    version = reader.read_i32("Error reading BlockHeaderData::version")
    hash_prev_block = reader.read(32, "Error reading BlockHeaderData::hash_prev_block")
    hash_merkle_root = reader.read(32, "Error reading BlockHeaderData::hash_merkle_root")
    hash_final_sapling_root = reader.read(
        32, "Error reading BlockHeaderData::hash_final_sapling_root"
    )
    time = reader.read_u32("Error reading BlockHeaderData::time")
    n_bits_bytes = reader.read(4, "Error reading BlockHeaderData::n_bits_bytes")
    nonce = reader.read(32, "Error reading BlockHeaderData::nonce")
    solution_length = reader.read_compact_size()
    solution = reader.read(solution_length, "Error reading BlockHeaderData::solution")
    header = BlockHeader(
        version=version,
        hash_prev_block=hash_prev_block,
        hash_merkle_root=hash_merkle_root,
        hash_final_sapling_root=hash_final_sapling_root,
        time=time,
        n_bits_bytes=n_bits_bytes,
        nonce=nonce,
        solution=solution,
    )
    return header, reader.remaining()


def block_height(transactions: Sequence[FullTransaction]) -> int:
    """Read the block height from the coinbase script of the first transaction.

    Heights that are negative or above the 32-bit range come back as -1, and
    the genesis block's special coinbase value comes back as 0.
    """
    if not transactions or not transactions[0].transparent_inputs:
        raise InvalidDataError("block has no coinbase input to read the height from")
    script = transactions[0].transparent_inputs[0].script_sig
    height = ByteReader(script).read_script_i64()
    if height < 0 or height > _U32_MAX:
        return -1
    if height == GENESIS_TARGET_DIFFICULTY:
        return 0
    height &= _U32_MAX
    return height - (1 << 32) if height >= 1 << 31 else height


@dataclass
class FullBlock:
    """A parsed block with its transactions, hash and height."""

    header: BlockHeader
    cached_hash: bytes
    transactions: list[FullTransaction] = field(default_factory=list)
    height: int = 0

    def into_compact(
        self, sapling_commitment_tree_size: int, orchard_commitment_tree_size: int
    ) -> CompactBlock:
        """Reduce the block to the compact form served to light clients."""
        vtx = [
            tx.to_compact(index)
            for index, tx in enumerate(self.transactions)
            if tx.has_shielded_elements()
        ]
        return CompactBlock(
            proto_version=COMPACT_PROTO_VERSION,
            height=self.height & _U64_MASK,
            hash=self.cached_hash,
            prev_hash=self.header.hash_prev_block,
            time=self.header.time,
            header=b"",
            vtx=vtx,
            chain_metadata=ChainMetadata(
                sapling_commitment_tree_size=sapling_commitment_tree_size,
                orchard_commitment_tree_size=orchard_commitment_tree_size,
            ),
        )


def parse_full_block(
    data: bytes | ByteReader, txids: Sequence[bytes] | None
) -> tuple[FullBlock, bytes]:
    """Parse a block from the front of data, pairing each transaction with a txid.

    Returns the block and the bytes that follow it.
    """
    if txids is None:
        raise InvalidDataError("txid must be used for FullBlock::parse_from_slice")
    reader = _as_reader(data)
    header, _ = parse_block_header(reader)
    tx_count = reader.read_compact_size()
    if len(txids) != tx_count:
        raise InvalidDataError(
            f"number of txids ({len(txids)}) does not match tx_count ({tx_count})"
        )
    transactions = []
    for txid in txids:
        if not len(reader):
            raise InvalidDataError(
                "parsing block transactions: not enough data for transaction."
            )
        transaction, _ = parse_transaction(reader, txid)
        transactions.append(transaction)
    block = FullBlock(
        header=header,
        cached_hash=header.block_hash(),
        transactions=transactions,
        height=block_height(transactions),
    )
    return block, reader.remaining()


def parse_block(data: bytes, txids: Sequence[bytes] | None) -> FullBlock:
    """Parse a complete serialized block, rejecting any trailing bytes."""
    block, remaining = parse_full_block(data, txids)
    if remaining:
        raise InvalidDataError(
            f"Error decoding full block - {len(remaining)} bytes of Remaining data. "
            f"Compact Block Created: ({block.into_compact(0, 0)!r})"
        )
    return block