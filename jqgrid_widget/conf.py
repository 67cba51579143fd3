"""
Settings for the jqgrid_widget app.

Override any of the defaults below with a ``JQGRID`` dict in your settings module::

    JQGRID = {
        "REQUEST_URL": "/books/grid/",
        "PRETTY_JSON": False,
    }
"""

from django.conf import settings

JQGRID_CDN = "https://cdnjs.cloudflare.com/ajax/libs/jqgrid/4.6.0/"

DEFAULTS = {
    "REQUEST_URL": "jqgrid",
    # None means "follow settings.DEBUG"
    "PRETTY_JSON": None,
    "NUMERIC_CHECK": True,
    "JQUERY_URL": "https://code.jquery.com/jquery-3.7.1.min.js",
    "JQUERY_UI_URL": "https://code.jquery.com/ui/1.13.2/jquery-ui.min.js",
    "JQUERY_UI_CSS_URL": "https://code.jquery.com/ui/1.13.2/themes/base/jquery-ui.css",
    "JQGRID_BASE_URL": JQGRID_CDN,
    "DEFAULT_LOCALE": "en",
    "LOCALES": [
        "ar", "bg", "bg1251", "cat", "cn", "cs", "da", "de", "dk", "el", "en", "es", "fa", "fi", "fr", "gl",
        "he", "hr", "hr1250", "hu", "id", "is", "it", "ja", "kr", "lt", "mne", "nl", "no", "pl", "pt",
        "pt-br", "ro", "ru", "sk", "sr", "sr-latin", "sv", "th", "tr", "tw", "ua", "vi",
    ],
    "DEFAULT_PAGE_SIZE": 20,
}


def get_setting(name):
    """Look up a single app setting, falling back to the defaults."""
    user_settings = getattr(settings, "JQGRID", None) or {}
    if name not in DEFAULTS:
        raise KeyError(f"Unknown jqgrid setting: {name}")
    value = user_settings.get(name, DEFAULTS[name])
    if name == "PRETTY_JSON" and value is None:
        return settings.DEBUG
    return value


def unknown_settings():
    user_settings = getattr(settings, "JQGRID", None) or {}
    return sorted(set(user_settings) - set(DEFAULTS))
