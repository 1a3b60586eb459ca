# ABOUTME: Console entry point for the interactive weather application.
# ABOUTME: Loads settings, configures logging, and runs one session over stdin/stdout.

import logging

from weather_pages.config import Settings
from weather_pages.deps import WeatherDeps, create_http_client
from weather_pages.session import WeatherSession


def main() -> None:
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    with create_http_client(settings) as client:
        WeatherSession(WeatherDeps(http_client=client, settings=settings)).run()


if __name__ == "__main__":
    main()
