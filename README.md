# zainofetch

Parsers for serialized Zcash full blocks and transactions, and conversion of
them into the compact block format used by light wallets.

The package reads the raw (hex-decoded) bytes of a block as a full node
returns them from `getblock` with verbosity 0. It works out the block height
from the coinbase script and the block hash (double SHA-256) from the header.
It can then reduce the block to a `CompactBlock`: the Sapling spends and
outputs and the Orchard actions a wallet needs to scan for its notes.

## Installation

```
pip install zainofetch
```

To run the tests:

```
pip install "zainofetch[test]"
pytest
```

## Usage

```python
from zainofetch.block import parse_block
from zainofetch.encoding import display_txids_to_server

# raw_block: bytes of a block from `getblock <hash> 0`
# display_txids: the "tx" list from `getblock <height> 1`, as the node shows them
txids = display_txids_to_server(display_txids)
block = parse_block(raw_block, txids)

print(block.height)
print(block.cached_hash.hex())

compact = block.into_compact(
    sapling_commitment_tree_size=0,
    orchard_commitment_tree_size=0,
)
for tx in compact.vtx:
    print(tx.index, len(tx.spends), len(tx.outputs), len(tx.actions))

# Keep only the nullifiers, for example to detect spent notes.
nullifiers = compact.nullifiers_only()
```

`parse_block` rejects trailing bytes after the last transaction. To parse a
block from the front of a longer buffer, use `parse_full_block`, which returns
the block and the bytes that follow it. `parse_block_header` does the same for
a header alone.

Transactions can be parsed on their own:

```python
from zainofetch.transaction import parse_transaction

tx, remaining = parse_transaction(raw_tx_bytes, txid_bytes)
if tx.has_shielded_elements():
    compact_tx = tx.to_compact(index=0)
```

Both v4 (Sapling) and v5 (NU5) transaction formats are parsed. Legacy
JoinSplits are skipped over. Compact outputs and actions keep the first 52
bytes of the encrypted ciphertext, and the compact fee is always 0.

Block height is read from the coinbase script: values that are negative or
above the 32-bit range give -1, and the genesis block's special coinbase value
gives 0.

## Errors

Malformed input raises `zainofetch.errors.InvalidDataError`, a subclass of
`zainofetch.errors.ParseError`. The message names the field that could not be
read or that failed validation. A malformed or oversized CompactSize raises
`ParseError` itself. The other types in `zainofetch.errors` are
`BlockCacheError`, `MempoolError` and `JsonRpcConnectorError`; the last can be
turned into an internal `GrpcStatus` with `to_grpc_status()`.

## Modules

- `zainofetch.encoding`: `ByteReader` (little-endian integers, CompactSize,
  script integers), `encode_compact_size`, `display_txids_to_server`
- `zainofetch.components`: transparent inputs and outputs, Sapling spends and
  outputs, JoinSplits, Orchard actions, `parse_transparent`
- `zainofetch.transaction`: `FullTransaction` and `parse_transaction`
- `zainofetch.block`: `BlockHeader`, `FullBlock`, `parse_block`,
  `parse_full_block`, `parse_block_header`, `block_height`
- `zainofetch.compact`: the compact block data types
- `zainofetch.errors`: exception types and `GrpcStatus`

## What it does not do

The package only parses bytes you hand it. It has no JSON-RPC client and does
not connect to a node, so fetching blocks, transaction ids or commitment tree
sizes is left to the caller. It does not track a mempool, keeps no block cache
and provides no command-line tool or server.