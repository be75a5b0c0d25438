"""ASGI entrypoint for the admin console."""

from shop_admin.api.app import create_app
from shop_admin.containers import build_container

app = create_app(build_container())
