"""Sequence allocator: one atomic upsert per allocation.

INSERT ... ON CONFLICT (namespace, year_suffix) DO UPDATE SET value = value + 1
RETURNING value. The row lock taken by the conflict update serializes
concurrent callers on the same key; different keys never contend. Each call
commits on its own so that a value, once returned, is never handed out again
even if the caller's later steps fail.
"""

import logging

from sqlalchemy.dialects.postgresql import Insert, insert

from campus.domain.value_objects import SequenceKey
from campus.infrastructure.persistence.models.sequence_counter import SequenceCounter
from campus.infrastructure.persistence.repositories.base import TransactionalStore
from campus.shared.utils.datetime import utc_now

logger = logging.getLogger(__name__)


def build_next_value_statement(key: SequenceKey) -> Insert:
    """Upsert returning the post-increment value (1 on first use)."""
    stmt = insert(SequenceCounter).values(
        namespace=key.counter_namespace, year_suffix=key.year_suffix, value=1
    )
    return stmt.on_conflict_do_update(
        index_elements=[SequenceCounter.namespace, SequenceCounter.year_suffix],
        set_={"value": SequenceCounter.value + 1, "updated_at": utc_now()},
    ).returning(SequenceCounter.value)


class SqlSequenceAllocator(TransactionalStore):
    """ISequenceAllocator over the sequence_counter table."""

    async def next(self, key: SequenceKey) -> int:
        async with self.transaction() as session:
            result = await session.execute(build_next_value_statement(key))
            value = result.scalar_one()
        logger.debug("Sequence %s -> %d", key, value)
        return int(value)
