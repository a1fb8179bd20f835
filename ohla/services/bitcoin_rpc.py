"""JSON-RPC client for Bitcoin Core.

One client per credential set. Every call is a single HTTP POST with Basic
auth; failures are classified into the ``RemoteRpcError`` family so callers
can branch on the kind (and on ``RemoteProtocolError.code``) instead of on
message text. No retries happen here.
"""

import logging
from typing import Any, Protocol, TypeVar

import requests
from pydantic import BaseModel, ValidationError
from requests.auth import HTTPBasicAuth

from ohla.errors import (
    RemoteConnectionError,
    RemoteEmptyResultError,
    RemoteParseError,
    RemoteProtocolError,
)
from ohla.schemas.node import BackendInfo, BlockchainInfo, NodeInfo, SyncInfo
from ohla.utils.constants import BLOCKCHAIN_INFO_METHOD, JSONRPC_VERSION, NODE_TYPE

logger = logging.getLogger(__name__)

ResultT = TypeVar("ResultT", bound=BaseModel)

DEFAULT_TIMEOUT_SECONDS = 10.0


class RpcCredentials(Protocol):
    rpc_url: str
    rpc_user: str
    rpc_password: str


class RpcErrorObject(BaseModel):
    code: int
    message: str


class RpcResponse(BaseModel):
    result: Any = None
    error: RpcErrorObject | None = None


class BitcoinRpcClient:
    """Stateless translator from method calls to JSON-RPC requests."""

    def __init__(
        self,
        url: str,
        username: str,
        password: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.url = url
        self.username = username
        self.password = password
        self.timeout = timeout
        # Bitcoin Core decodes Basic credentials as UTF-8; requests would use latin-1 for str
        self.auth = HTTPBasicAuth(username.encode("utf-8"), password.encode("utf-8"))
        self.headers = {"Content-Type": "application/json"}

    @classmethod
    def from_profile(cls, profile: RpcCredentials, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> "BitcoinRpcClient":
        """Build a client from anything carrying rpc_url / rpc_user / rpc_password."""
        return cls(
            url=profile.rpc_url,
            username=profile.rpc_user,
            password=profile.rpc_password,
            timeout=timeout,
        )

    def call(
        self,
        method: str,
        params: list | None = None,
        result_type: type[ResultT] | None = None,
    ) -> Any:
        """Issue one JSON-RPC call and return its ``result``.

        When ``result_type`` is given the result is validated into it.

        Raises:
            RemoteConnectionError: the node could not be reached.
            RemoteParseError: the body is not a JSON-RPC response of the expected shape.
            RemoteProtocolError: the node answered with an ``error`` object.
            RemoteEmptyResultError: the node answered with neither result nor error.
        """
        payload = {
            "jsonrpc": JSONRPC_VERSION,
            "id": method,
            "method": method,
            "params": params if params is not None else [],
        }

        try:
            resp = requests.post(
                self.url,
                json=payload,
                headers=self.headers,
                auth=self.auth,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning(f"RPC {method} to {self.url} failed: {e}")
            raise RemoteConnectionError(str(e)) from e

        # Bitcoin Core answers RPC errors with HTTP 500 and a JSON body;
        # the status code is only reported, never checked.
        try:
            body = resp.json()
        except ValueError as e:
            raise RemoteParseError(f"HTTP {resp.status_code}: {e}") from e

        try:
            rpc_response = RpcResponse.model_validate(body)
        except ValidationError as e:
            raise RemoteParseError(f"HTTP {resp.status_code}: unexpected response shape") from e

        if rpc_response.error is not None:
            logger.info(f"RPC {method} returned error {rpc_response.error.code}: {rpc_response.error.message}")
            raise RemoteProtocolError(rpc_response.error.code, rpc_response.error.message)

        if rpc_response.result is None:
            raise RemoteEmptyResultError()

        if result_type is None:
            return rpc_response.result

        try:
            return result_type.model_validate(rpc_response.result)
        except ValidationError as e:
            raise RemoteParseError(f"{method} result does not match {result_type.__name__}") from e

    def get_blockchain_info(self) -> BlockchainInfo:
        return self.call(BLOCKCHAIN_INFO_METHOD, result_type=BlockchainInfo)

    def get_node_info(self) -> NodeInfo:
        """Fetch chain state and project it onto the fields served to clients."""
        return to_node_info(self.get_blockchain_info())


def to_node_info(info: BlockchainInfo) -> NodeInfo:
    return NodeInfo(
        network=info.chain,
        block_height=info.blocks,
        best_block_hash=info.bestblockhash,
        sync=SyncInfo(
            is_synced=not info.initialblockdownload,
            progress=info.verificationprogress,
        ),
        pruned=info.pruned,
        verification_progress=info.verificationprogress,
        backend=BackendInfo(version=JSONRPC_VERSION, node_type=NODE_TYPE),
    )
