# Import all models here so they are registered before Base.metadata.create_all()

from weatherlog.models.weather import WeatherObservation
