"""ASGI entrypoint for the food-mood API."""

from food_mood.api.app import create_app
from food_mood.config import Settings
from food_mood.containers import build_container

settings = Settings()
app = create_app(build_container(settings))
