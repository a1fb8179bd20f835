"""Schemas for live node state: the raw RPC result and the projection served to clients."""

from pydantic import BaseModel


class BlockchainInfo(BaseModel):
    """Subset of the ``getblockchaininfo`` result this service reads."""

    chain: str
    blocks: int
    headers: int | None = None
    bestblockhash: str
    difficulty: float
    verificationprogress: float
    initialblockdownload: bool
    pruned: bool
    size_on_disk: int | None = None


class SyncInfo(BaseModel):
    is_synced: bool
    progress: float


class BackendInfo(BaseModel):
    version: str
    node_type: str


class NodeInfo(BaseModel):
    network: str
    block_height: int
    best_block_hash: str
    sync: SyncInfo
    pruned: bool
    verification_progress: float
    backend: BackendInfo
