from zainofetch.compact import (
    ChainMetadata,
    CompactBlock,
    CompactOrchardAction,
    CompactSaplingOutput,
    CompactSaplingSpend,
    CompactTx,
)


def _sample_block():
    tx = CompactTx(
        index=3,
        hash=b"h" * 32,
        fee=0,
        spends=[CompactSaplingSpend(nf=b"n" * 32)],
        outputs=[CompactSaplingOutput(cmu=b"c" * 32, ephemeral_key=b"e" * 32, ciphertext=b"x" * 52)],
        actions=[
            CompactOrchardAction(
                nullifier=b"o" * 32, cmx=b"m" * 32, ephemeral_key=b"k" * 32, ciphertext=b"y" * 52
            )
        ],
    )
    return CompactBlock(
        proto_version=4,
        height=1000,
        hash=b"a" * 32,
        prev_hash=b"b" * 32,
        time=1700000000,
        header=b"",
        vtx=[tx],
        chain_metadata=ChainMetadata(5, 6),
    )


def test_defaults_are_empty():
    block = CompactBlock()
    assert block.vtx == []
    assert block.chain_metadata is None
    assert CompactTx().actions == []
    assert CompactOrchardAction().ciphertext == b""


def test_default_lists_not_shared():
    a, b = CompactTx(), CompactTx()
    a.spends.append(CompactSaplingSpend(nf=b"z"))
    assert b.spends == []


def test_nullifiers_only_keeps_block_fields():
    block = _sample_block()
    reduced = block.nullifiers_only()
    assert reduced.proto_version == block.proto_version
    assert reduced.height == block.height
    assert reduced.hash == block.hash
    assert reduced.prev_hash == block.prev_hash
    assert reduced.time == block.time
    assert reduced.chain_metadata == ChainMetadata(0, 0)


def test_nullifiers_only_strips_outputs_and_action_data():
    block = _sample_block()
    tx = block.nullifiers_only().vtx[0]
    assert tx.index == 3
    assert tx.hash == block.vtx[0].hash
    assert tx.spends == [CompactSaplingSpend(nf=b"n" * 32)]
    assert tx.outputs == []
    assert tx.actions == [CompactOrchardAction(nullifier=b"o" * 32)]


def test_nullifiers_only_does_not_mutate_original():
    block = _sample_block()
    block.nullifiers_only()
    assert len(block.vtx[0].outputs) == 1
    assert block.vtx[0].actions[0].cmx == b"m" * 32
    assert block.chain_metadata == ChainMetadata(5, 6)