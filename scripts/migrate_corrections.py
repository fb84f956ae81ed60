"""
Database Migration: Transcripts and Corrections Tables

Run this script to create the tables used by transcript history and the
personalization engine.

Usage:
    python scripts/migrate_corrections.py
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import inspect

from core.database import Base, SessionLocal, engine
from core.models import Correction, Transcript
from services.personalization import CorrectionStore
from utils.logging import get_logger, setup_logging

logger = get_logger(__name__)

TABLES = [Transcript.__table__, Correction.__table__]


async def migrate():
    """Create the transcripts and corrections tables"""
    try:
        async with engine.begin() as conn:
            logger.info("Creating transcripts and corrections tables...")
            await conn.run_sync(Base.metadata.create_all, tables=TABLES)
            
            existing = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        
        missing = [table.name for table in TABLES if table.name not in existing]
        if missing:
            logger.error(f"✗ Tables not found after creation: {', '.join(missing)}")
            return False
        
        logger.info("✓ Migration verified")
        return True
        
    except Exception as e:
        logger.error(f"Migration failed: {e}")
        return False


async def rollback():
    """Drop the transcripts and corrections tables"""
    try:
        async with engine.begin() as conn:
            logger.info("Dropping transcripts and corrections tables...")
            await conn.run_sync(Base.metadata.drop_all, tables=TABLES)
            logger.info("✓ Tables dropped successfully")
            return True
            
    except Exception as e:
        logger.error(f"Rollback failed: {e}")
        return False


async def seed_sample_data(user_id: str = "demo-user"):
    """Record sample corrections twice each so they are applied immediately"""
    
    sample_data = [
        ("pub", "office"),
        ("let us", "let's"),
        ("New York", "NYC"),
        ("jason", "JSON"),
    ]
    
    store = CorrectionStore()
    try:
        async with SessionLocal() as db:
            logger.info(f"Seeding sample corrections for {user_id}...")
            for original, corrected in sample_data:
                await store.upsert(db, user_id, original, corrected)
                await store.upsert(db, user_id, original, corrected)
        
        logger.info(f"✓ Seeded {len(sample_data)} sample corrections")
        return True
        
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        return False


async def main():
    """Main migration script"""
    
    print("\n" + "="*60)
    print("Dictation API - Transcripts & Corrections Migration")
    print("="*60 + "\n")
    
    print("Options:")
    print("1. Migrate (create tables)")
    print("2. Rollback (drop tables)")
    print("3. Seed sample corrections")
    print("4. Exit")
    
    choice = input("\nEnter choice (1-4): ").strip()
    
    if choice == "1":
        success = await migrate()
        if success:
            print("\n✓ Migration completed successfully!")
            
            seed = input("\nSeed sample corrections? (y/n): ").strip().lower()
            if seed == 'y':
                await seed_sample_data()
        else:
            print("\n✗ Migration failed. Check logs for details.")
            
    elif choice == "2":
        confirm = input("\nAre you sure? This will delete all transcripts and corrections. (yes/no): ").strip().lower()
        if confirm == "yes":
            success = await rollback()
            if success:
                print("\n✓ Rollback completed successfully!")
            else:
                print("\n✗ Rollback failed. Check logs for details.")
        else:
            print("\nRollback cancelled.")
            
    elif choice == "3":
        user_id = input("\nUser id [demo-user]: ").strip() or "demo-user"
        success = await seed_sample_data(user_id)
        if success:
            print("\n✓ Sample corrections seeded successfully!")
        else:
            print("\n✗ Seeding failed. Check logs for details.")
            
    elif choice == "4":
        print("\nExiting...")
        
    else:
        print("\nInvalid choice.")
    
    print("\n" + "="*60 + "\n")
    await engine.dispose()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())
