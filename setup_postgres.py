"""Database initialization script.

Creates the ``repos`` table holding one row per successful repository add.
"""
import sys
import psycopg2
import logging
from devrepo.config import get_settings


logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def create_schema(conn) -> None:
    """Create database schema.

    Schema design considerations:
    - one row per ingestion; the same repository may appear several times,
      so fullname carries no unique constraint
    - derived metrics are stored as computed at add time, never recomputed
    - listing is always newest first, hence the index on createdat
    """
    cursor = conn.cursor()

    try:
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS repos (
                id SERIAL PRIMARY KEY,
                name VARCHAR(255) NOT NULL,
                owner VARCHAR(255) NOT NULL,
                fullname VARCHAR(511) NOT NULL,
                stars INTEGER NOT NULL DEFAULT 0,
                forks INTEGER NOT NULL DEFAULT 0,
                issues INTEGER NOT NULL DEFAULT 0,
                mainlanguage VARCHAR(255) NOT NULL DEFAULT 'Unknown',
                healthscore INTEGER NOT NULL,
                activitylevel VARCHAR(64) NOT NULL,
                trendingfactor INTEGER NOT NULL,
                createdat TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
            )
        """)

        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_repos_createdat
            ON repos(createdat DESC)
        """)

        conn.commit()
        logger.info("Database schema created successfully")

    except Exception as e:
        conn.rollback()
        logger.error(f"Error creating schema: {e}")
        raise
    finally:
        cursor.close()


def main():
    """Initialize the database."""
    try:
        settings = get_settings()
        logger.info("Connecting to database...")

        conn = psycopg2.connect(settings.connection_string)
        conn.autocommit = False

        create_schema(conn)

        conn.close()
        logger.info("Database initialization completed successfully")

    except Exception as e:
        logger.error(f"Failed to initialize database: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
