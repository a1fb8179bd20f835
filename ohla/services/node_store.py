"""Node profile store: persisted connection profiles and the single-active rule.

Every operation runs in its own transaction. The engine serializes
transactions (see ``ohla.database.build_engine``), so the count-then-insert
in ``create`` and the check-then-update in ``activate`` / ``delete`` cannot
interleave with another writer. The store itself holds no locks.
"""

import logging
import time
import uuid
from contextlib import contextmanager

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select, func

from ohla.config import Settings
from ohla.errors import DatabaseError, InvalidInputError, NotFoundError
from ohla.models.node_profile import NodeProfile
from ohla.schemas.node_profile import NodeProfileCreate

logger = logging.getLogger(__name__)


class NodeProfileStore:
    def __init__(self, engine: Engine):
        self.engine = engine

    @contextmanager
    def _session(self):
        with Session(self.engine, expire_on_commit=False) as session:
            try:
                yield session
            except IntegrityError as e:
                session.rollback()
                raise InvalidInputError(str(e.orig)) from e
            except SQLAlchemyError as e:
                session.rollback()
                raise DatabaseError(str(e)) from e

    def create(self, data: NodeProfileCreate) -> NodeProfile:
        """Persist a new profile; the first profile in an empty store becomes active."""
        with self._session() as session:
            count, last_seq = session.exec(
                select(func.count(NodeProfile.id), func.max(NodeProfile.seq))
            ).one()
            profile = NodeProfile(
                id=str(uuid.uuid4()),
                name=data.name,
                rpc_url=data.rpc_url,
                rpc_user=data.rpc_user,
                rpc_password=data.rpc_password,
                network=data.network,
                is_active=count == 0,
                created_at=int(time.time()),
                seq=(last_seq or 0) + 1,
            )
            session.add(profile)
            session.commit()

        logger.info(f"Created node profile {profile.id} ({profile.name}, active={profile.is_active})")
        return profile

    def get(self, profile_id: str) -> NodeProfile:
        with self._session() as session:
            profile = session.get(NodeProfile, profile_id)
        if profile is None:
            raise NotFoundError(f"Node configuration with id {profile_id} not found")
        return profile

    def get_active(self) -> NodeProfile:
        with self._session() as session:
            profile = session.exec(
                select(NodeProfile).where(NodeProfile.is_active == True)  # noqa: E712
            ).first()
        if profile is None:
            raise NotFoundError("No active node configuration found")
        return profile

    def list_profiles(self) -> list[NodeProfile]:
        """All profiles, most recently created first."""
        with self._session() as session:
            return list(session.exec(
                select(NodeProfile).order_by(NodeProfile.created_at.desc(), NodeProfile.seq.desc())
            ).all())

    def activate(self, profile_id: str):
        """Make ``profile_id`` the only active profile.

        Clearing the old flag and setting the new one commit together, so no
        reader ever sees zero or two active rows.
        """
        with self._session() as session:
            target = session.get(NodeProfile, profile_id)
            if target is None:
                raise NotFoundError(f"Node configuration with id {profile_id} not found")

            active = session.exec(
                select(NodeProfile).where(NodeProfile.is_active == True)  # noqa: E712
            ).all()
            for profile in active:
                profile.is_active = False
                session.add(profile)
            # Clear before set; the single-active index rejects two active rows
            session.flush()

            target.is_active = True
            session.add(target)
            session.commit()

        logger.info(f"Activated node profile {profile_id}")

    def delete(self, profile_id: str):
        """Remove a profile. Deleting the active one leaves no profile active."""
        with self._session() as session:
            profile = session.get(NodeProfile, profile_id)
            if profile is None:
                raise NotFoundError(f"Node configuration with id {profile_id} not found")
            was_active = profile.is_active
            session.delete(profile)
            session.commit()

        if was_active:
            logger.warning(f"Deleted active node profile {profile_id}; no profile is active now")
        else:
            logger.info(f"Deleted node profile {profile_id}")


def seed_profile_from_settings(store: NodeProfileStore, settings: Settings) -> NodeProfile | None:
    """Create a profile from the OHLA_BTC_RPC_* variables when the store is empty."""
    if not settings.btc_rpc_url:
        return None
    if store.list_profiles():
        logger.info("Bootstrap node: store already has profiles, skipping")
        return None

    profile = store.create(NodeProfileCreate(
        name=settings.btc_node_name,
        rpc_url=settings.btc_rpc_url,
        rpc_user=settings.btc_rpc_user,
        rpc_password=settings.btc_rpc_pass,
        network=settings.btc_network,
    ))
    logger.info(f"Bootstrap node: created profile {profile.id} from environment")
    return profile
