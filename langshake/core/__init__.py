"""Core pipeline: checksums, cache, writer, Merkle index, index publisher."""
