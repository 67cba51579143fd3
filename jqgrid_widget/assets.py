from django import forms
from django.utils import translation

from jqgrid_widget.conf import get_setting


# Django language codes whose jqGrid locale file has a different name
LOCALE_ALIASES = {
    "ca": "cat",
    "ko": "kr",
    "sr-latn": "sr-latin",
    "uk": "ua",
    "zh-cn": "cn",
    "zh-hans": "cn",
    "zh-hant": "tw",
    "zh-tw": "tw",
}


def locale_for_language(language=None):
    """Pick the jqGrid locale file suffix for a Django language code.

    Full codes with a locale of their own (``pt-br``) are used as they are, then
    LOCALE_ALIASES is consulted, then the primary subtag (``en-us`` -> ``en``).
    Unsupported languages fall back to DEFAULT_LOCALE.
    """
    language = (language or translation.get_language() or "").lower()
    locales = get_setting("LOCALES")
    primary = language.split("-")[0]
    for candidate in (language, LOCALE_ALIASES.get(language), primary, LOCALE_ALIASES.get(primary)):
        if candidate in locales:
            return candidate
    return get_setting("DEFAULT_LOCALE")


def grid_media(language=None):
    """Build the CSS and JS needed on any page that shows a grid."""
    base_url = get_setting("JQGRID_BASE_URL")
    locale = locale_for_language(language)
    return forms.Media(
        css={
            "all": [
                get_setting("JQUERY_UI_CSS_URL"),
                f"{base_url}css/ui.jqgrid.css",
            ]
        },
        js=[
            get_setting("JQUERY_URL"),
            get_setting("JQUERY_UI_URL"),
            f"{base_url}js/i18n/grid.locale-{locale}.js",
            f"{base_url}js/jquery.jqGrid.min.js",
        ],
    )
