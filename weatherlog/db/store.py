from typing import List

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from weatherlog.core.exceptions import StoreReadError, StoreWriteError
from weatherlog.core.logging import get_logger
from weatherlog.db.session import Base, create_db_engine, create_session_factory
from weatherlog.models import WeatherObservation

logger = get_logger(__name__)


class WeatherStore:
    """
    Append-only log of weather observations.

    One instance is opened when the application starts and handed to the
    routes through ``app.state``; it owns the engine and disposes of it on close.
    """

    def __init__(self, database_url: str):
        self.database_url = database_url
        self.engine = create_db_engine(database_url)
        self.SessionLocal = create_session_factory(self.engine)

    def initialize(self) -> None:
        """Create the observation table if it does not exist yet.

        Errors propagate: the service must not start without its store.
        """
        Base.metadata.create_all(bind=self.engine)
        logger.info("Weather store ready", extra={"database_url": self.engine.url.render_as_string()})

    def insert(self, location: str, temperature: float, conditions: str) -> None:
        """Append an observation. Failures are logged and swallowed.

        Runs as a background task after the response went out, so there is
        nobody left to report an error to.
        """
        db = self.SessionLocal()
        try:
            db.add(
                WeatherObservation(
                    location=location,
                    temperature=temperature,
                    conditions=conditions,
                )
            )
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            error = StoreWriteError(f"{StoreWriteError.detail}: {e}")
            logger.error(error.message, exc_info=True, extra={"location": location})
        finally:
            db.close()

    def query_recent_by_location(self, location: str, limit: int = 10) -> List[WeatherObservation]:
        """Return up to ``limit`` observations for an exact location, newest first."""
        db = self.SessionLocal()
        try:
            return (
                db.query(WeatherObservation)
                .filter(WeatherObservation.location == location)
                .order_by(WeatherObservation.timestamp.desc(), WeatherObservation.id.desc())
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as e:
            logger.error("History query failed", extra={"location": location, "error": str(e)})
            raise StoreReadError(str(e)) from e
        finally:
            db.close()

    def ping(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def close(self) -> None:
        self.engine.dispose()
