import os
from pydantic import BaseModel, ConfigDict

DATABASE_URL_VAR = "DARK_CONFIG_DATABASE_URL"


class ConfigError(SystemExit):
    """A required setting is missing. Exits the process unless caught on purpose."""


class DatabaseSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    database: DatabaseSettings


class PusherSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    app_id: str
    key: str
    secret: str
    host: str


def require_str(name: str) -> str:
    # "" is a legitimate value; only absence is an error
    value = os.environ.get(name)
    if value is None:
        raise ConfigError(f"{name} must be set")
    return value


def pusher_app_id() -> str:
    return require_str("DARK_CONFIG_PUSHER_APP_ID")


def pusher_key() -> str:
    return require_str("DARK_CONFIG_PUSHER_KEY")


def pusher_secret() -> str:
    return require_str("DARK_CONFIG_PUSHER_SECRET")


def pusher_host() -> str:
    return require_str("DARK_CONFIG_PUSHER_HOST")


def pusher_settings() -> PusherSettings:
    return PusherSettings(
        app_id=pusher_app_id(),
        key=pusher_key(),
        secret=pusher_secret(),
        host=pusher_host(),
    )


def load() -> Settings:
    return Settings(database=DatabaseSettings(url=require_str(DATABASE_URL_VAR)))
