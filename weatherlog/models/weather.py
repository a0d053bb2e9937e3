from sqlalchemy import Column, Integer, String, Float, DateTime
from sqlalchemy.sql import func

from weatherlog.db.session import Base


class WeatherObservation(Base):
    __tablename__ = "weather_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    location = Column(String, index=True)
    temperature = Column(Float)
    conditions = Column(String)
    timestamp = Column(DateTime, server_default=func.now())

    def __repr__(self) -> str:
        return f"<WeatherObservation id={self.id} location={self.location!r} temperature={self.temperature}>"
