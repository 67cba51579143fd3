"""
jqGrid widget.

Renders the table (and pager) placeholder for a jqGrid and builds the script
that turns it into a grid. Settings given by the caller are merged over
defaults computed from the widget options, so a typical grid only has to
describe its columns::

    widget = JqGridWidget(
        request_url=reverse("books:grid"),
        grid_settings={
            "colNames": ["Title", "Author", "Language"],
            "colModel": [
                {"name": "title", "index": "title", "editable": True},
                {"name": "author", "index": "author", "editable": True},
                {"name": "language", "index": "language", "editable": True},
            ],
            "rowNum": 15,
            "autowidth": True,
            "height": "auto",
        },
        pager_settings={
            "edit": {"reloadAfterSubmit": True, "modal": True},
            "add": {"reloadAfterSubmit": True, "modal": True},
            "del": True,
        },
        enable_filter_toolbar=True,
    )
    html = widget.render(request)

See http://www.trirand.com/jqgridwiki/doku.php for the grid options.
"""

import itertools
import logging
import re

from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from jqgrid_widget.assets import grid_media
from jqgrid_widget.conf import get_setting
from jqgrid_widget.exceptions import InvalidParamError
from jqgrid_widget.js import JsExpression, encode
from jqgrid_widget.scripts import ready_wrap, register_script, script_tag

logger = logging.getLogger(__name__)

REQUEST_METHOD_POST = "POST"
REQUEST_METHOD_GET = "GET"
REQUEST_METHODS = (REQUEST_METHOD_POST, REQUEST_METHOD_GET)

# navGrid button order, the options object and the per-button settings follow it
PAGER_BUTTONS = ("edit", "add", "del", "search", "view")
# buttons that submit to the server and get a default url
ACTION_BUTTONS = ("edit", "add", "del")

WIDGET_COUNTER_ATTR = "_jqgrid_widget_counter"
WIDGET_ID_RE = re.compile(r"[\w-]+", re.ASCII)

_widget_counter = itertools.count()


def next_widget_id(request=None):
    """Return the next automatic widget id (``w0``, ``w1``, ...).

    Counting is per request when one is given, so ids are stable between page loads.
    """
    if request is None:
        return f"w{next(_widget_counter)}"
    counter = getattr(request, WIDGET_COUNTER_ATTR, 0)
    setattr(request, WIDGET_COUNTER_ATTR, counter + 1)
    return f"w{counter}"


class JqGridWidget:
    REQUEST_METHOD_POST = REQUEST_METHOD_POST
    REQUEST_METHOD_GET = REQUEST_METHOD_GET

    def __init__(
        self,
        widget_id=None,
        request_url=None,
        request_method=REQUEST_METHOD_POST,
        enable_pager=True,
        enable_cell_edit=False,
        enable_column_chooser=False,
        enable_xml_export=False,
        enable_filter_toolbar=False,
        filter_toolbar_settings=None,
        grid_settings=None,
        pager_settings=None,
        request=None,
    ):
        if request_method not in REQUEST_METHODS:
            raise InvalidParamError(f"Invalid request method `{request_method}`, expected POST or GET")

        self.widget_id = str(widget_id) if widget_id is not None else next_widget_id(request)
        # the id ends up inside JS string literals and jQuery selectors
        if not WIDGET_ID_RE.fullmatch(self.widget_id):
            raise InvalidParamError(f"Invalid widget id `{self.widget_id}`, use letters, digits, _ and -")
        self.request_url = request_url if request_url is not None else get_setting("REQUEST_URL")
        self.request_method = request_method
        self.enable_pager = enable_pager
        self.enable_cell_edit = enable_cell_edit
        self.enable_column_chooser = enable_column_chooser
        self.enable_xml_export = enable_xml_export
        self.enable_filter_toolbar = enable_filter_toolbar
        self.filter_toolbar_settings = filter_toolbar_settings or {}
        self.grid_settings = grid_settings or {}
        self.pager_settings = pager_settings or {}

    @property
    def table_id(self):
        return f"jqGrid-{self.widget_id}"

    @property
    def pager_id(self):
        return f"jqGrid-pager-{self.widget_id}"

    @property
    def media(self):
        return grid_media()

    def action_url(self, action):
        separator = "&" if "?" in self.request_url else "?"
        return f"{self.request_url}{separator}action={action}"

    def prepare_grid_settings(self, user_settings):
        grid_settings = {
            "url": self.action_url("request"),
            "datatype": "json",
            "mtype": self.request_method,
        }
        if self.enable_pager:
            grid_settings["pager"] = f"#{self.pager_id}"
        if self.enable_cell_edit:
            grid_settings["cellEdit"] = True
            grid_settings["cellurl"] = self.action_url("edit")
        grid_settings.update(user_settings)
        return encode(grid_settings)

    def prepare_pager_settings(self, user_settings):
        pager_options = dict.fromkeys(PAGER_BUTTONS, False)
        for name, button_settings in user_settings.items():
            if button_settings is False or button_settings is None:
                continue
            if name not in PAGER_BUTTONS:
                raise InvalidParamError(f"Invalid param `{name}` in pager settings")
            if button_settings is True:
                button_settings = {}
            if not isinstance(button_settings, dict):
                raise InvalidParamError(f"Invalid value for `{name}` in pager settings, expected a bool or a dict")

            if name in ACTION_BUTTONS:
                pager_options[name] = {"url": self.action_url(name), **button_settings}
            else:
                pager_options[name] = button_settings

        enabled = {}
        settings_list = []
        for name, button_settings in pager_options.items():
            if button_settings is False:
                enabled[name] = False
                settings_list.append("{}")
            else:
                enabled[name] = True
                settings_list.append(encode(button_settings))

        return ",\n".join([encode(enabled)] + settings_list)

    def prepare_toolbar_settings(self, toolbar_settings):
        return encode(toolbar_settings)

    def column_chooser_button(self):
        return {
            "caption": "",
            "title": JsExpression("jQuery.jgrid.col.caption"),
            "buttonicon": "ui-icon-calculator",
            "onClickButton": JsExpression("function(){jQuery(this).jqGrid('columnChooser');}"),
        }

    def xml_export_button(self):
        export = f"function(){{jQuery.jgrid.XMLExport('{self.widget_id}', 'ExcelXML.xml');}}"
        return {
            "caption": "",
            "title": _("Export to Excel XML"),
            "buttonicon": "ui-icon-document",
            "onClickButton": JsExpression(export),
        }

    def build_script(self):
        script = f'jQuery("#{self.table_id}").jqGrid({self.prepare_grid_settings(self.grid_settings)})'
        if self.enable_pager:
            script += f"\n.navGrid('#{self.pager_id}', {self.prepare_pager_settings(self.pager_settings)})"
        if self.enable_filter_toolbar:
            script += f"\n.filterToolbar({self.prepare_toolbar_settings(self.filter_toolbar_settings)})"
        if self.enable_column_chooser:
            script += f"\n.navButtonAdd('#{self.pager_id}', {encode(self.column_chooser_button())})"
        if self.enable_xml_export:
            script += f"\n.navButtonAdd('#{self.pager_id}', {encode(self.xml_export_button())})"
        return script + ";"

    def render_html(self):
        html = format_html("<table id='{}'></table>\n", self.table_id)
        if self.enable_pager:
            html += format_html("<div id='{}'></div>\n", self.pager_id)
        return html

    def render(self, request=None, inline=False):
        """Return the grid placeholder.

        The grid script is registered on ``request`` for ``{% jqgrid_scripts %}`` to
        output; with ``inline`` set, or without a request, it is rendered right
        after the placeholder instead.
        """
        script = self.build_script()
        logger.debug("jqGrid %s script: %s", self.widget_id, script)
        html = self.render_html()
        if inline or request is None:
            return html + script_tag(ready_wrap(script))
        register_script(request, script)
        return html

    def __str__(self):
        return self.render(inline=True)

    def __html__(self):
        return str(self)
