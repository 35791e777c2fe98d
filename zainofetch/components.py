"""Parsers for the pieces that make up a Zcash transaction."""

from __future__ import annotations

from dataclasses import dataclass

from zainofetch.encoding import ByteReader


@dataclass
class TxIn:
    """A transparent input; only its script is kept."""

    script_sig: bytes

    @classmethod
    def parse(cls, reader: ByteReader) -> TxIn:
        """Read one input: previous outpoint, script and sequence number."""
        reader.skip(32, "Error skipping TxIn::PrevTxHash")
        reader.skip(4, "Error skipping TxIn::PrevTxOutIndex")
        length = reader.read_compact_size()
        script_sig = reader.read(length, "Error reading TxIn::ScriptSig")
        reader.skip(4, "Error skipping TxIn::SequenceNumber")
        return cls(script_sig)


@dataclass
class TxOut:
    """A transparent output; only its value in zatoshis is kept."""

    value: int

    @classmethod
    def parse(cls, reader: ByteReader) -> TxOut:
        """Read one output: value followed by a length-prefixed script."""
        value = reader.read_u64("Error TxOut::reading Value")
        length = reader.read_compact_size()
        reader.skip(length, "Error skipping TxOut::Script")
        return cls(value)


def parse_transparent(reader: ByteReader) -> tuple[list[TxIn], list[TxOut]]:
    """Read the counted lists of transparent inputs and outputs."""
    inputs = [TxIn.parse(reader) for _ in range(reader.read_compact_size())]
    outputs = [TxOut.parse(reader) for _ in range(reader.read_compact_size())]
    return inputs, outputs


@dataclass
class Spend:
    """A Sapling spend description; only its nullifier is kept."""

    nullifier: bytes

    @classmethod
    def parse(cls, reader: ByteReader, tx_version: int) -> Spend:
        """Read a spend in the layout used by the given transaction version."""
        legacy = tx_version <= 4
        reader.skip(32, "Error skipping Spend::Cv")
        if legacy:
            reader.skip(32, "Error skipping Spend::Anchor")
        nullifier = reader.read(32, "Error reading Spend::nullifier")
        reader.skip(32, "Error skipping Spend::Rk")
        if legacy:
            reader.skip(192, "Error skipping Spend::Zkproof")
            reader.skip(64, "Error skipping Spend::SpendAuthSig")
        return cls(nullifier)


@dataclass
class Output:
    """A Sapling output description."""

    cmu: bytes
    ephemeral_key: bytes
    enc_ciphertext: bytes

    @classmethod
    def parse(cls, reader: ByteReader, tx_version: int) -> Output:
        """Read an output in the layout used by the given transaction version."""
        reader.skip(32, "Error skipping Output::Cv")
        cmu = reader.read(32, "Error reading Output::cmu")
        ephemeral_key = reader.read(32, "Error reading Output::ephemeral_key")
        enc_ciphertext = reader.read(580, "Error reading Output::enc_ciphertext")
        reader.skip(80, "Error skipping Output::OutCiphertext")
        if tx_version <= 4:
            reader.skip(192, "Error skipping Output::Zkproof")
        return cls(cmu, ephemeral_key, enc_ciphertext)


@dataclass
class JoinSplit:
    """A legacy Sprout JoinSplit description; its contents are skipped."""

    _FIELDS = (
        (8, "vpubOld"),
        (8, "vpubNew"),
        (32, "anchor"),
        (64, "nullifiers"),
        (64, "commitments"),
        (32, "ephemeralKey"),
        (32, "randomSeed"),
        (64, "vmacs"),
        (192, "proofGroth16"),
        (1202, "encCiphertexts"),
    )

    @classmethod
    def parse(cls, reader: ByteReader) -> JoinSplit:
        """Skip over one Groth16 JoinSplit description."""
        for size, name in cls._FIELDS:
            reader.skip(size, f"Error skipping JoinSplit::{name}")
        return cls()


@dataclass
class Action:
    """An Orchard action description."""

    nullifier: bytes
    cmx: bytes
    ephemeral_key: bytes
    enc_ciphertext: bytes

    @classmethod
    def parse(cls, reader: ByteReader) -> Action:
        """Read one Orchard action."""
        reader.skip(32, "Error skipping Action::Cv")
        nullifier = reader.read(32, "Error reading Action::nullifier")
        reader.skip(32, "Error skipping Action::Rk")
        cmx = reader.read(32, "Error reading Action::cmx")
        ephemeral_key = reader.read(32, "Error reading Action::ephemeral_key")
        enc_ciphertext = reader.read(580, "Error reading Action::enc_ciphertext")
        reader.skip(80, "Error skipping Action::OutCiphertext")
        return cls(nullifier, cmx, ephemeral_key, enc_ciphertext)