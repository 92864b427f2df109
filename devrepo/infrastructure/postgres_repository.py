"""PostgreSQL repository implementation for data persistence."""
import logging
from typing import List
import psycopg2
from devrepo.domain.errors import StoreError
from devrepo.domain.repository_interface import IRepositoryStorage
from devrepo.domain.models import RepositoryRecord


logger = logging.getLogger(__name__)


class PostgresRepositoryStorage(IRepositoryStorage):
    """PostgreSQL implementation of repository record storage.

    Records live in the ``repos`` table created by ``setup_postgres.py``.
    Every insert creates a new row; there is no uniqueness on ``fullname``.
    Driver errors are rolled back and re-raised as StoreError.
    """

    COLUMNS = (
        "id, name, owner, fullname, stars, forks, issues, mainlanguage, "
        "healthscore, activitylevel, trendingfactor, createdat"
    )

    def __init__(self, connection_string: str):
        """Initialize PostgreSQL connection.

        Args:
            connection_string: PostgreSQL connection string

        Raises:
            StoreError: When the database cannot be reached
        """
        self._connection_string = connection_string
        try:
            self._conn = psycopg2.connect(connection_string)
        except psycopg2.Error as e:
            logger.error(f"Error connecting to PostgreSQL: {e}")
            raise StoreError(e) from e
        self._conn.autocommit = False
        logger.info("Connected to PostgreSQL database")

    def insert_repository(self, record: RepositoryRecord) -> int:
        """Insert one record and return its generated id.

        Args:
            record: RepositoryRecord to persist

        Returns:
            Identifier assigned by the database
        """
        cursor = self._conn.cursor()

        try:
            cursor.execute(
                """
                INSERT INTO repos (
                    name, owner, fullname, stars, forks, issues, mainlanguage,
                    healthscore, activitylevel, trendingfactor, createdat
                )
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                RETURNING id
                """,
                (
                    record.name,
                    record.owner,
                    record.full_name,
                    record.stars,
                    record.forks,
                    record.issues,
                    record.main_language,
                    record.health_score,
                    record.activity_level,
                    record.trending_factor,
                    record.created_at
                )
            )
            repo_id = cursor.fetchone()[0]

            self._conn.commit()
            logger.info(f"Saved {record.full_name} with id {repo_id}")
            return repo_id

        except psycopg2.Error as e:
            self._conn.rollback()
            logger.error(f"Error saving repository: {e}")
            raise StoreError(e) from e
        finally:
            cursor.close()

    def list_repositories(self) -> List[RepositoryRecord]:
        """Get all records, newest first.

        Returns:
            List of RepositoryRecord entities (possibly empty)
        """
        cursor = self._conn.cursor()
        try:
            cursor.execute(f"SELECT {self.COLUMNS} FROM repos ORDER BY createdat DESC")
            records = [self._row_to_record(row) for row in cursor.fetchall()]
            # Close the read-only transaction psycopg2 opened implicitly
            self._conn.commit()
            return records
        except psycopg2.Error as e:
            self._conn.rollback()
            logger.error(f"Error listing repositories: {e}")
            raise StoreError(e) from e
        finally:
            cursor.close()

    def delete_repository(self, repo_id: int) -> None:
        """Delete a record by id. Deleting a missing id is not an error."""
        cursor = self._conn.cursor()
        try:
            cursor.execute("DELETE FROM repos WHERE id = %s", (repo_id,))
            self._conn.commit()
            logger.info(f"Deleted {cursor.rowcount} repository row(s) with id {repo_id}")
        except psycopg2.Error as e:
            self._conn.rollback()
            logger.error(f"Error deleting repository {repo_id}: {e}")
            raise StoreError(e) from e
        finally:
            cursor.close()

    @staticmethod
    def _row_to_record(row: tuple) -> RepositoryRecord:
        return RepositoryRecord(
            repo_id=row[0],
            name=row[1],
            owner=row[2],
            full_name=row[3],
            stars=row[4],
            forks=row[5],
            issues=row[6],
            main_language=row[7],
            health_score=row[8],
            activity_level=row[9],
            trending_factor=row[10],
            created_at=row[11]
        )

    def close(self) -> None:
        """Close the database connection."""
        if self._conn:
            self._conn.close()
            logger.info("Closed PostgreSQL connection")
