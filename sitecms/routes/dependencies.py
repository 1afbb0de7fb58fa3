from fastapi import Request

from sitecms.config import settings
from sitecms.i18n.locale import get_valid_locale
from sitecms.i18n.locale_config import LocaleConfig


def get_locale_config(request: Request) -> LocaleConfig:
    """Locale configuration of the running app, built from settings on first use."""
    config = getattr(request.app.state, "locale_config", None)
    if config is None:
        config = LocaleConfig.from_settings(settings)
        request.app.state.locale_config = config
    return config


def get_request_locale(request: Request) -> str:
    """Locale detected by LanguageMiddleware, or the configured default."""
    return get_valid_locale(getattr(request.state, "locale", None), get_locale_config(request))
