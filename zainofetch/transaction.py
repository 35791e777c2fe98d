"""Full Zcash transactions (v4 and v5) and their compact form."""

from __future__ import annotations

from dataclasses import dataclass, field

from zainofetch.compact import (
    CompactOrchardAction,
    CompactSaplingOutput,
    CompactSaplingSpend,
    CompactTx,
)
from zainofetch.components import (
    Action,
    JoinSplit,
    Output,
    Spend,
    TxIn,
    TxOut,
    parse_transparent,
)
from zainofetch.encoding import ByteReader
from zainofetch.errors import InvalidDataError

V4_VERSION_GROUP_ID = 0x892F2085
V5_VERSION_GROUP_ID = 0x26A7270A
COMPACT_CIPHERTEXT_SIZE = 52
_MAX_SHIELDED_COUNT = 1 << 16


@dataclass
class FullTransaction:
    """A parsed transaction together with its raw bytes and txid."""

    version: int
    n_version_group_id: int
    consensus_branch_id: int
    transparent_inputs: list[TxIn]
    transparent_outputs: list[TxOut]
    shielded_spends: list[Spend]
    shielded_outputs: list[Output]
    orchard_actions: list[Action]
    raw_bytes: bytes
    tx_id: bytes
    join_splits: list[JoinSplit] = field(default_factory=list)
    f_overwintered: bool = True

    def has_shielded_elements(self) -> bool:
        """True if the transaction has Sapling spends or outputs, or Orchard actions."""
        return bool(self.shielded_spends or self.shielded_outputs or self.orchard_actions)

    def to_compact(self, index: int) -> CompactTx:
        """Reduce the transaction to its compact form at the given block index."""
        return CompactTx(
            index=index,
            hash=self.tx_id,
            fee=0,
            spends=[CompactSaplingSpend(nf=s.nullifier) for s in self.shielded_spends],
            outputs=[
                CompactSaplingOutput(
                    cmu=o.cmu,
                    ephemeral_key=o.ephemeral_key,
                    ciphertext=o.enc_ciphertext[:COMPACT_CIPHERTEXT_SIZE],
                )
                for o in self.shielded_outputs
            ],
            actions=[
                CompactOrchardAction(
                    nullifier=a.nullifier,
                    cmx=a.cmx,
                    ephemeral_key=a.ephemeral_key,
                    ciphertext=a.enc_ciphertext[:COMPACT_CIPHERTEXT_SIZE],
                )
                for a in self.orchard_actions
            ],
        )


@dataclass
class _Body:
    consensus_branch_id: int
    inputs: list[TxIn]
    outputs: list[TxOut]
    spends: list[Spend]
    shielded_outputs: list[Output]
    join_splits: list[JoinSplit]
    actions: list[Action]


def _parse_v4(reader: ByteReader, group_id: int) -> _Body:
    if group_id != V4_VERSION_GROUP_ID:
        raise InvalidDataError(
            f"version group ID {group_id:x} must be 0x892F2085 for v4 transactions"
        )
    inputs, outputs = parse_transparent(reader)
    reader.skip(4, "Error skipping TransactionData::nLockTime")
    reader.skip(4, "Error skipping TransactionData::nExpiryHeight")
    reader.skip(8, "Error skipping TransactionData::valueBalance")

    spends = [Spend.parse(reader, 4) for _ in range(reader.read_compact_size())]
    shielded_outputs = [Output.parse(reader, 4) for _ in range(reader.read_compact_size())]
    join_splits = [JoinSplit.parse(reader) for _ in range(reader.read_compact_size())]

    if join_splits:
        reader.skip(32, "Error skipping TransactionData::joinSplitPubKey")
        reader.skip(64, "could not skip TransactionData::joinSplitSig")
    if spends or shielded_outputs:
        reader.skip(64, "Error skipping TransactionData::bindingSigSapling")

    return _Body(0, inputs, outputs, spends, shielded_outputs, join_splits, [])


def _read_bounded_count(reader: ByteReader, name: str) -> int:
    count = reader.read_compact_size()
    if count >= _MAX_SHIELDED_COUNT:
        raise InvalidDataError(f"{name} ({count}) must be less than 2^16")
    return count


def _parse_v5(reader: ByteReader, group_id: int) -> _Body:
    if group_id != V5_VERSION_GROUP_ID:
        raise InvalidDataError(
            f"version group ID {group_id:x} must be 0x26A7270A for v5 transactions"
        )
    branch_id = reader.read_u32("Error reading TransactionData::ConsensusBranchId")
    reader.skip(4, "Error skipping TransactionData::nLockTime")
    reader.skip(4, "Error skipping TransactionData::nExpiryHeight")
    inputs, outputs = parse_transparent(reader)

    spend_count = _read_bounded_count(reader, "spendCount")
    spends = [Spend.parse(reader, 5) for _ in range(spend_count)]
    output_count = _read_bounded_count(reader, "outputCount")
    shielded_outputs = [Output.parse(reader, 5) for _ in range(output_count)]

    if spend_count + output_count > 0:
        reader.skip(8, "Error skipping TransactionData::valueBalance")
    if spend_count > 0:
        reader.skip(32, "Error skipping TransactionData::anchorSapling")
        reader.skip(192 * spend_count, "Error skipping TransactionData::vSpendProofsSapling")
        reader.skip(64 * spend_count, "Error skipping TransactionData::vSpendAuthSigsSapling")
    if output_count > 0:
        reader.skip(192 * output_count, "Error skipping TransactionData::vOutputProofsSapling")
    if spend_count + output_count > 0:
        reader.skip(64, "Error skipping TransactionData::bindingSigSapling")

    actions_count = _read_bounded_count(reader, "actionsCount")
    actions = [Action.parse(reader) for _ in range(actions_count)]

    if actions_count > 0:
        reader.skip(1, "Error skipping TransactionData::flagsOrchard")
        reader.skip(8, "Error skipping TransactionData::valueBalanceOrchard")
        reader.skip(32, "Error skipping TransactionData::anchorOrchard")
        proofs_size = reader.read_compact_size()
        reader.skip(proofs_size, "Error skipping TransactionData::proofsOrchard")
        reader.skip(64 * actions_count, "Error skipping TransactionData::vSpendAuthSigsOrchard")
        reader.skip(64, "Error skipping TransactionData::bindingSigOrchard")

    return _Body(branch_id, inputs, outputs, spends, shielded_outputs, [], actions)


def parse_transaction(
    data: bytes | ByteReader, txid: bytes | None
) -> tuple[FullTransaction, bytes]:
    """Parse one transaction from the front of data.

    Returns the transaction and the bytes that follow it. When a ByteReader is
    given it is advanced past the transaction.
    """
    if txid is None:
        raise InvalidDataError("txid must be given to parse a transaction")
    reader = data if isinstance(data, ByteReader) else ByteReader(data)
    start = reader.position

    header = reader.read_u32("Error reading FullTransaction::header")
    if header >> 31 != 1:
        raise InvalidDataError("fOverwinter flag must be set")
    version = header & 0x7FFFFFFF
    if version < 4:
        raise InvalidDataError(f"version number {version} must be greater or equal to 4")
    group_id = reader.read_u32("Error reading FullTransaction::n_version_group_id")

    body = _parse_v4(reader, group_id) if version <= 4 else _parse_v5(reader, group_id)

    transaction = FullTransaction(
        version=version,
        n_version_group_id=group_id,
        consensus_branch_id=body.consensus_branch_id,
        transparent_inputs=body.inputs,
        transparent_outputs=body.outputs,
        shielded_spends=body.spends,
        shielded_outputs=body.shielded_outputs,
        orchard_actions=body.actions,
        raw_bytes=reader.data[start:reader.position],
        tx_id=bytes(txid),
        join_splits=body.join_splits,
    )
    return transaction, reader.remaining()