"""Connectivity check against credentials that need not be saved."""

import asyncio
import logging

from ohla.errors import RemoteRpcError
from ohla.schemas.node_profile import ConnectionTestResult
from ohla.services.bitcoin_rpc import DEFAULT_TIMEOUT_SECONDS, BitcoinRpcClient

logger = logging.getLogger(__name__)


async def check_connection(
    rpc_url: str,
    rpc_user: str,
    rpc_password: str,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> ConnectionTestResult:
    """Try one ``getblockchaininfo`` call and report only whether it worked.

    The failure kind is logged but never returned; callers that need it use
    the node status endpoint.
    """
    client = BitcoinRpcClient(url=rpc_url, username=rpc_user, password=rpc_password, timeout=timeout)
    try:
        # requests is blocking; keep it off the event loop
        await asyncio.get_event_loop().run_in_executor(None, client.get_blockchain_info)
    except RemoteRpcError as e:
        logger.info(f"Connection test to {rpc_url} failed ({e.error_type}): {e.message}")
        return ConnectionTestResult(success=False, message="Connection failed")

    logger.info(f"Connection test to {rpc_url} succeeded")
    return ConnectionTestResult(success=True, message="Connection successful")
