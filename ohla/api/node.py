"""Node API — live status of the active node."""

import asyncio
import logging

from fastapi import APIRouter, Depends

from ohla.api.deps import get_store
from ohla.config import settings
from ohla.schemas.node import NodeInfo
from ohla.schemas.response import ApiResponse
from ohla.services.bitcoin_rpc import BitcoinRpcClient
from ohla.services.node_store import NodeProfileStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/node", tags=["node"])


@router.get("/info", response_model=ApiResponse[NodeInfo], response_model_exclude_none=True)
async def get_node_info(store: NodeProfileStore = Depends(get_store)):
    """Query the active node. The client is rebuilt per request from the store."""
    loop = asyncio.get_event_loop()
    # Both the store read and the RPC call block; keep them off the event loop
    profile = await loop.run_in_executor(None, store.get_active)
    client = BitcoinRpcClient.from_profile(profile, timeout=settings.rpc_timeout_seconds)
    logger.debug(f"Fetching node info from profile {profile.id} ({profile.rpc_url})")
    info = await loop.run_in_executor(None, client.get_node_info)
    return ApiResponse[NodeInfo].success(info, "Node information retrieved successfully")
