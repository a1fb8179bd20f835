"""Node profile API — CRUD, activation and connection testing."""

from fastapi import APIRouter, Depends

from ohla.api.deps import get_store
from ohla.config import settings
from ohla.schemas.node_profile import (
    ConnectionTestRequest,
    ConnectionTestResult,
    NodeProfileCreate,
    NodeProfileRead,
)
from ohla.schemas.response import ApiResponse
from ohla.services.connection_check import check_connection
from ohla.services.node_store import NodeProfileStore

router = APIRouter(prefix="/api/config/nodes", tags=["config"])


@router.post(
    "",
    response_model=ApiResponse[NodeProfileRead],
    response_model_exclude_none=True,
    status_code=201,
)
def create_node_config(data: NodeProfileCreate, store: NodeProfileStore = Depends(get_store)):
    profile = store.create(data)
    return ApiResponse[NodeProfileRead].success(
        NodeProfileRead.model_validate(profile),
        "Node configuration created successfully",
        status=201,
    )


@router.get("", response_model=ApiResponse[list[NodeProfileRead]], response_model_exclude_none=True)
def list_node_configs(store: NodeProfileStore = Depends(get_store)):
    profiles = [NodeProfileRead.model_validate(p) for p in store.list_profiles()]
    return ApiResponse[list[NodeProfileRead]].success(
        profiles, "Node configurations retrieved successfully"
    )


# Declared before /{node_id} so "active" and "test" are not taken as ids
@router.get("/active", response_model=ApiResponse[NodeProfileRead], response_model_exclude_none=True)
def get_active_node_config(store: NodeProfileStore = Depends(get_store)):
    profile = store.get_active()
    return ApiResponse[NodeProfileRead].success(
        NodeProfileRead.model_validate(profile),
        "Active node configuration retrieved successfully",
    )


@router.post("/test", response_model=ApiResponse[ConnectionTestResult], response_model_exclude_none=True)
async def test_node_connection(body: ConnectionTestRequest):
    """Test a node connection without saving it."""
    result = await check_connection(
        rpc_url=body.rpc_url,
        rpc_user=body.rpc_user,
        rpc_password=body.rpc_password,
        timeout=settings.rpc_timeout_seconds,
    )
    return ApiResponse[ConnectionTestResult].success(result, "Connection test completed")


@router.get("/{node_id}", response_model=ApiResponse[NodeProfileRead], response_model_exclude_none=True)
def get_node_config(node_id: str, store: NodeProfileStore = Depends(get_store)):
    profile = store.get(node_id)
    return ApiResponse[NodeProfileRead].success(
        NodeProfileRead.model_validate(profile),
        "Node configuration retrieved successfully",
    )


@router.put("/{node_id}/activate", response_model=ApiResponse[None], response_model_exclude_none=True)
def set_active_node_config(node_id: str, store: NodeProfileStore = Depends(get_store)):
    store.activate(node_id)
    return ApiResponse[None].success(None, "Node configuration activated successfully")


@router.delete("/{node_id}", response_model=ApiResponse[None], response_model_exclude_none=True)
def delete_node_config(node_id: str, store: NodeProfileStore = Depends(get_store)):
    store.delete(node_id)
    return ApiResponse[None].success(None, "Node configuration deleted successfully")
