import os
from functools import lru_cache
from pathlib import Path

from placeholder_image.app_shell.context import ServiceContext
from placeholder_image.components.intercept import InterceptService
from placeholder_image.rules.loader import load_rules
from placeholder_image.rules.models import Rules

RULES_PATH_ENV = "PLACEHOLDER_RULES_PATH"


# --- Settings ---
class Settings:
    def __init__(self) -> None:
        self.base_dir = Path(os.getcwd())
        self.rules_path = Path(os.environ.get(RULES_PATH_ENV, self.base_dir / "rules.yaml"))


@lru_cache
def get_settings() -> Settings:
    return Settings()


# --- Rules ---
@lru_cache
def get_rules() -> Rules:
    return load_rules(get_settings().rules_path)


# --- Services ---
@lru_cache
def get_context() -> ServiceContext:
    return ServiceContext.create(get_rules())


def get_intercept_service() -> InterceptService:
    return get_context().intercept_service
