"""Server entry point shared by every deployment target."""

import logging

import uvicorn

from pin_authenticator.app_logging import configure_logging
from pin_authenticator.config import Settings, resolve_server_target


def main() -> None:
    """Run the API server for the configured deployment target."""
    configure_logging()
    settings = Settings()
    target = resolve_server_target(settings)
    logging.getLogger(__name__).info(
        "Starting pin authenticator (%s) on %s:%s",
        settings.deployment_target,
        target.host,
        target.port,
    )
    uvicorn.run("pin_authenticator.api.asgi:app", host=target.host, port=target.port)


if __name__ == "__main__":
    main()
