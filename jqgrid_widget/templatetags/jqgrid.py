"""
Template tags for rendering jqGrids.

Usage:
    {% load jqgrid %}
    {% jqgrid_media %}
    ...
    {% jqgrid_widget request_url=grid_url grid_settings=grid_settings pager_settings=pager_settings %}
    ...
    {% jqgrid_scripts %}
"""
from django import template

from jqgrid_widget.assets import grid_media
from jqgrid_widget.scripts import render_scripts
from jqgrid_widget.widget import JqGridWidget

register = template.Library()


@register.simple_tag(takes_context=True)
def jqgrid_widget(context, inline=False, **kwargs):
    """Render a grid placeholder and register its script with the current request.

    Keyword arguments are passed to JqGridWidget. Without a request in the
    context, or with ``inline=True``, the script is rendered in place.
    """
    request = context.get("request")
    widget = JqGridWidget(request=request, **kwargs)
    return widget.render(request, inline=inline)


@register.simple_tag(takes_context=True)
def jqgrid_scripts(context):
    request = context.get("request")
    if request is None:
        return ""
    return render_scripts(request)


@register.simple_tag
def jqgrid_media(language=None):
    return grid_media(language).render()
