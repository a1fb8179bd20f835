"""NodeProfile model — a named set of Bitcoin Core RPC connection credentials."""

from sqlalchemy import Index, text
from sqlmodel import SQLModel, Field


class NodeProfile(SQLModel, table=True):
    __tablename__ = "node_profiles"
    __table_args__ = (
        # At most one row may be active
        Index(
            "ix_node_profiles_single_active",
            "is_active",
            unique=True,
            sqlite_where=text("is_active = 1"),
            postgresql_where=text("is_active"),
        ),
    )

    id: str = Field(primary_key=True)  # UUID4
    name: str
    rpc_url: str
    rpc_user: str
    rpc_password: str  # stored as plaintext
    network: str  # free-form label, e.g. "mainnet" / "testnet"
    is_active: bool = Field(default=False)
    created_at: int  # epoch seconds
    seq: int = Field(default=0, index=True)  # insertion order, breaks created_at ties
