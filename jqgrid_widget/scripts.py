"""
Per-request registry of grid scripts.

Widgets rendered during a request register their setup script here and
``{% jqgrid_scripts %}`` writes all of them out in one document-ready block,
usually at the bottom of the base template after the jQuery assets.
"""

from django.utils.html import format_html
from django.utils.safestring import mark_safe

REQUEST_ATTR = "_jqgrid_scripts"


def ready_wrap(script):
    return f"jQuery(function ($) {{\n{script}\n}});"


def register_script(request, script):
    scripts = getattr(request, REQUEST_ATTR, None)
    if scripts is None:
        scripts = []
        setattr(request, REQUEST_ATTR, scripts)
    scripts.append(script)


def get_scripts(request):
    return list(getattr(request, REQUEST_ATTR, None) or [])


def pop_scripts(request):
    scripts = get_scripts(request)
    if hasattr(request, REQUEST_ATTR):
        setattr(request, REQUEST_ATTR, [])
    return scripts


def script_tag(script):
    # script content is produced by jqgrid_widget.js.encode, which escapes "<" inside strings
    return format_html("<script>\n{}\n</script>", mark_safe(script))


def render_scripts(request):
    """Render every script registered on ``request`` and clear the registry."""
    scripts = pop_scripts(request)
    if not scripts:
        return ""
    return script_tag(ready_wrap("\n".join(scripts)))
