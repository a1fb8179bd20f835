"""Shared constants for talking to Bitcoin Core."""

JSONRPC_VERSION = "1.0"

# RPC method returning chain, height, best hash, difficulty and sync state
BLOCKCHAIN_INFO_METHOD = "getblockchaininfo"

NODE_TYPE = "bitcoin-core"

SERVICE_NAME = "ohla-backend"
