from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuration settings for the post notification service"""

    # Application settings
    service_name: str = "post-notifications"
    log_level: str = "INFO"
    environment: str = "dev"
    path_prefix: str = ''

    # Firebase settings
    firebase_secret: Optional[str] = None

    # Delivery hints
    notification_sound: str = "default"
    android_priority: str = "high"
    android_channel_id: str = "high_importance_channel"
    apns_badge: int = 1
    click_action: str = "FLUTTER_NOTIFICATION_CLICK"

    # Text rules
    post_title_preview_length: int = 50
    comment_preview_length: int = 100
    fallback_actor_name: str = "Someone"
    fallback_post_title: str = "your post"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


settings = Settings()


def get_prefix(api_version: str) -> str:
    """Root path for the API, e.g. 'notify' + '/api/v1' -> '/notify/api/v1'."""
    prefix = settings.path_prefix.strip('/')
    if not prefix:
        return api_version
    return f'/{prefix}{api_version}'
