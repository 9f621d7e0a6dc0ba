"""ASGI entrypoint for the pin authenticator API."""

from pin_authenticator.api.app import create_app
from pin_authenticator.containers import build_container

app = create_app(build_container())
