"""Compact block and transaction records served to light clients."""

from __future__ import annotations

from dataclasses import dataclass, field, replace


@dataclass
class CompactSaplingSpend:
    """A Sapling spend reduced to its nullifier."""

    nf: bytes = b""


@dataclass
class CompactSaplingOutput:
    """A Sapling output with the first 52 bytes of its ciphertext."""

    cmu: bytes = b""
    ephemeral_key: bytes = b""
    ciphertext: bytes = b""


@dataclass
class CompactOrchardAction:
    """An Orchard action with the first 52 bytes of its ciphertext."""

    nullifier: bytes = b""
    cmx: bytes = b""
    ephemeral_key: bytes = b""
    ciphertext: bytes = b""


@dataclass
class CompactTx:
    """The shielded parts of a transaction needed for trial decryption."""

    index: int = 0
    hash: bytes = b""
    fee: int = 0
    spends: list[CompactSaplingSpend] = field(default_factory=list)
    outputs: list[CompactSaplingOutput] = field(default_factory=list)
    actions: list[CompactOrchardAction] = field(default_factory=list)


@dataclass
class ChainMetadata:
    """Note commitment tree sizes at the end of a block."""

    sapling_commitment_tree_size: int = 0
    orchard_commitment_tree_size: int = 0


@dataclass
class CompactBlock:
    """A block reduced to the data light clients need."""

    proto_version: int = 0
    height: int = 0
    hash: bytes = b""
    prev_hash: bytes = b""
    time: int = 0
    header: bytes = b""
    vtx: list[CompactTx] = field(default_factory=list)
    chain_metadata: ChainMetadata | None = None

    def nullifiers_only(self) -> CompactBlock:
        """Return a copy holding only spend and action nullifiers."""
        vtx = [
            CompactTx(
                index=tx.index,
                hash=tx.hash,
                fee=tx.fee,
                spends=[CompactSaplingSpend(nf=s.nf) for s in tx.spends],
                outputs=[],
                actions=[CompactOrchardAction(nullifier=a.nullifier) for a in tx.actions],
            )
            for tx in self.vtx
        ]
        return replace(self, vtx=vtx, chain_metadata=ChainMetadata())