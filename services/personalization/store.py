"""
Correction Store

Persistent, per-user table of learned corrections.

Every method takes the owning user_id explicitly; there is no implicit
"current user". Reads return StoredCorrection snapshots, never live ORM rows,
so callers cannot mutate counters behind the store's back.

Upserts are atomic per (user_id, original_token, corrected_token):
- SQLite / PostgreSQL: INSERT ... ON CONFLICT DO UPDATE SET count = count + 1
- other dialects: select, then insert or increment; a unique-key race on
  insert is retried once as an increment
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.dialects.postgresql import insert as postgresql_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config.constants import DEFAULT_MIN_COUNT, STATS_TOP_CORRECTIONS
from core.models import Correction
from services.personalization.models import StoredCorrection
from utils.exceptions import CorrectionNotFoundError, CorrectionStoreError
from utils.logging import get_logger

logger = get_logger(__name__)

_UPSERT_INSERTS = {
    "postgresql": postgresql_insert,
    "sqlite": sqlite_insert,
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CorrectionStore:
    """Service for reading and writing a user's learned corrections."""
    
    # =========================================================================
    # Writes
    # =========================================================================
    
    async def upsert(
        self,
        db: AsyncSession,
        user_id: str,
        original: str,
        corrected: str
    ) -> StoredCorrection:
        """
        Record one observation of (original -> corrected) for a user.
        
        Creates the correction with count=1 on first sight, otherwise
        increments count and refreshes last_seen_at. Disabled corrections
        keep counting.
        
        Raises:
            CorrectionStoreError: The database could not be written
        """
        try:
            dialect = db.get_bind().dialect.name
            insert = _UPSERT_INSERTS.get(dialect)
            if insert is not None:
                row = await self._upsert_on_conflict(db, insert, user_id, original, corrected)
            else:
                row = await self._upsert_select_first(db, user_id, original, corrected)
            
            stored = StoredCorrection.from_row(row)
            await db.commit()
        except CorrectionStoreError:
            await db.rollback()
            raise
        except SQLAlchemyError as e:
            await db.rollback()
            raise CorrectionStoreError(
                message=f"Failed to store correction: {e}",
                operation="upsert",
                details={"original": original, "corrected": corrected}
            ) from e
        
        logger.debug(f"Stored correction: '{original}' -> '{corrected}' (count: {stored.count})")
        return stored
    
    async def _upsert_on_conflict(
        self,
        db: AsyncSession,
        insert: Any,
        user_id: str,
        original: str,
        corrected: str
    ) -> Correction:
        now = _utcnow()
        stmt = insert(Correction).values(
            user_id=user_id,
            original_token=original,
            corrected_token=corrected,
            count=1,
            disabled=False,
            first_seen_at=now,
            last_seen_at=now,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[
                Correction.user_id,
                Correction.original_token,
                Correction.corrected_token,
            ],
            set_={
                "count": Correction.count + 1,
                "last_seen_at": stmt.excluded.last_seen_at,
            },
        ).returning(Correction)
        
        result = await db.scalars(stmt, execution_options={"populate_existing": True})
        return result.one()
    
    async def _upsert_select_first(
        self,
        db: AsyncSession,
        user_id: str,
        original: str,
        corrected: str
    ) -> Correction:
        existing = await self._find_pair(db, user_id, original, corrected)
        if existing is not None:
            return await self._increment(db, existing.id)
        
        now = _utcnow()
        row = Correction(
            user_id=user_id,
            original_token=original,
            corrected_token=corrected,
            count=1,
            disabled=False,
            first_seen_at=now,
            last_seen_at=now,
        )
        db.add(row)
        try:
            await db.flush()
            return row
        except IntegrityError:
            # Another request inserted the same pair first
            await db.rollback()
            logger.info(f"Correction insert raced, retrying as increment: '{original}' -> '{corrected}'")

        existing = await self._find_pair(db, user_id, original, corrected)
        if existing is None:
            raise CorrectionStoreError(
                message="Correction vanished after unique-key conflict",
                operation="upsert",
                details={"original": original, "corrected": corrected}
            )
        return await self._increment(db, existing.id)
    
    async def _find_pair(
        self,
        db: AsyncSession,
        user_id: str,
        original: str,
        corrected: str
    ) -> Optional[Correction]:
        result = await db.execute(
            select(Correction).filter(
                Correction.user_id == user_id,
                Correction.original_token == original,
                Correction.corrected_token == corrected,
            )
        )
        return result.scalars().first()
    
    async def _increment(self, db: AsyncSession, correction_id: int) -> Correction:
        await db.execute(
            update(Correction)
            .where(Correction.id == correction_id)
            .values(count=Correction.count + 1, last_seen_at=_utcnow())
        )
        result = await db.execute(
            select(Correction)
            .where(Correction.id == correction_id)
            .execution_options(populate_existing=True)
        )
        return result.scalars().one()
    
    async def set_disabled(
        self,
        db: AsyncSession,
        user_id: str,
        correction_id: int,
        disabled: bool
    ) -> StoredCorrection:
        """
        Disable or re-enable a correction. count is left untouched.
        
        Raises:
            CorrectionNotFoundError: No such correction for this user
            CorrectionStoreError: The database could not be written
        """
        try:
            result = await db.execute(
                select(Correction).filter(
                    Correction.id == correction_id,
                    Correction.user_id == user_id,
                )
            )
            row = result.scalars().first()
            if row is None:
                raise CorrectionNotFoundError(correction_id)
            
            row.disabled = disabled
            await db.commit()
            await db.refresh(row)
        except SQLAlchemyError as e:
            await db.rollback()
            raise CorrectionStoreError(
                message=f"Failed to update correction: {e}",
                operation="set_disabled",
                details={"correction_id": correction_id}
            ) from e
        
        logger.info(f"Correction {correction_id} {'disabled' if disabled else 'enabled'}")
        return StoredCorrection.from_row(row)
    
    async def disable(self, db: AsyncSession, user_id: str, correction_id: int) -> StoredCorrection:
        return await self.set_disabled(db, user_id, correction_id, True)
    
    async def enable(self, db: AsyncSession, user_id: str, correction_id: int) -> StoredCorrection:
        return await self.set_disabled(db, user_id, correction_id, False)
    
    # =========================================================================
    # Reads
    # =========================================================================
    
    async def list_eligible(
        self,
        db: AsyncSession,
        user_id: str,
        min_count: int = DEFAULT_MIN_COUNT
    ) -> List[StoredCorrection]:
        """
        Corrections that may be applied: enabled and seen at least min_count times.
        
        Ordered by count descending, then most recently seen first.
        """
        return await self.list_corrections(db, user_id, min_count=min_count, include_disabled=False)
    
    async def list_corrections(
        self,
        db: AsyncSession,
        user_id: str,
        min_count: int = 1,
        include_disabled: bool = True,
        limit: Optional[int] = None
    ) -> List[StoredCorrection]:
        """List a user's corrections, most frequent first."""
        query = select(Correction).filter(
            Correction.user_id == user_id,
            Correction.count >= min_count,
        )
        if not include_disabled:
            query = query.filter(Correction.disabled.is_(False))
        query = query.order_by(
            Correction.count.desc(),
            Correction.last_seen_at.desc(),
            Correction.id.desc(),
        ).execution_options(populate_existing=True)
        if limit is not None:
            query = query.limit(limit)
        
        try:
            result = await db.execute(query)
            rows = result.scalars().all()
        except SQLAlchemyError as e:
            await db.rollback()
            raise CorrectionStoreError(
                message=f"Failed to read corrections: {e}",
                operation="list"
            ) from e
        
        return [StoredCorrection.from_row(row) for row in rows]
    
    async def get_statistics(
        self,
        db: AsyncSession,
        user_id: str,
        min_count: int = DEFAULT_MIN_COUNT
    ) -> Dict[str, Any]:
        """Get learning statistics for one user."""
        try:
            totals = await db.execute(
                select(
                    func.count(Correction.id),
                    func.coalesce(func.sum(Correction.count), 0),
                ).filter(Correction.user_id == user_id)
            )
            total_corrections, total_observations = totals.one()
            
            disabled_corrections = await db.scalar(
                select(func.count(Correction.id)).filter(
                    Correction.user_id == user_id,
                    Correction.disabled.is_(True),
                )
            )
            eligible_corrections = await db.scalar(
                select(func.count(Correction.id)).filter(
                    Correction.user_id == user_id,
                    Correction.disabled.is_(False),
                    Correction.count >= min_count,
                )
            )
        except SQLAlchemyError as e:
            await db.rollback()
            raise CorrectionStoreError(
                message=f"Failed to read correction statistics: {e}",
                operation="statistics"
            ) from e
        
        most_common = await self.list_corrections(db, user_id, limit=STATS_TOP_CORRECTIONS)
        
        return {
            "total_corrections": total_corrections,
            "total_observations": int(total_observations),
            "eligible_corrections": eligible_corrections,
            "disabled_corrections": disabled_corrections,
            "min_count": min_count,
            "most_common": [
                {
                    "original_token": c.original_token,
                    "corrected_token": c.corrected_token,
                    "count": c.count,
                }
                for c in most_common
            ],
        }
