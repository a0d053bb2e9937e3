import uvicorn

from weatherlog.core.config import settings


def main():
    uvicorn.run("weatherlog.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
