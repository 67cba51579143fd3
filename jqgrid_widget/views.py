"""
Server side of a jqGrid.

The widget points the grid at ``<request_url>?action=request`` for data and at
``?action=edit|add|del`` for the form dialogs. Subclass JqGridActionView and
implement the hooks for the actions your grid uses::

    class BookGridView(JqGridActionView):
        def get_rows(self, params):
            return Book.objects.values("id", "title", "author", "language")

        def handle_edit(self, params):
            Book.objects.filter(pk=params["id"]).update(title=params.get("title"))
            return JsonResponse({"success": True})

Grids posting their requests need a CSRF token (or the view wrapped in csrf_exempt).
"""

import json
import logging
from operator import itemgetter

from django.core.exceptions import FieldError
from django.core.paginator import Paginator
from django.http import JsonResponse
from django.views import View

from jqgrid_widget.conf import get_setting
from jqgrid_widget.exceptions import InvalidParamError

logger = logging.getLogger(__name__)

ACTIONS = ("request", "edit", "add", "del")


def _to_int(value, default):
    try:
        value = int(value)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def jqgrid_params(query):
    """Read the parameters jqGrid sends with its requests from a QueryDict."""
    filters = query.get("filters")
    if filters:
        try:
            filters = json.loads(filters)
        except ValueError:
            raise InvalidParamError("Invalid JSON in `filters`")

    sord = query.get("sord", "asc").lower()
    if sord not in ("asc", "desc"):
        raise InvalidParamError(f"Invalid sort order `{sord}`")

    return {
        "page": _to_int(query.get("page"), 1),
        "rows": _to_int(query.get("rows"), get_setting("DEFAULT_PAGE_SIZE")),
        "sidx": query.get("sidx", ""),
        "sord": sord,
        "_search": query.get("_search") == "true",
        "filters": filters or None,
        "id": query.get("id"),
        "oper": query.get("oper"),
        # everything else, e.g. the edited cell values
        "data": {key: query.get(key) for key in query.keys()},
    }


class JqGridActionView(View):
    http_method_names = ["get", "post"]

    def get(self, request, *args, **kwargs):
        return self.handle_action(request.GET)

    def post(self, request, *args, **kwargs):
        return self.handle_action(request.POST)

    def handle_action(self, query):
        action = self.request.GET.get("action")
        if action not in ACTIONS:
            logger.warning("Unknown jqGrid action %r requested from %s", action, self.request.path)
            return JsonResponse({"error": f"Unknown action `{action}`"}, status=400)

        try:
            params = jqgrid_params(query)
            return getattr(self, f"handle_{action}")(params)
        except InvalidParamError as e:
            logger.warning("Invalid jqGrid %s request to %s: %s", action, self.request.path, e)
            return JsonResponse({"error": str(e)}, status=400)
        except NotImplementedError:
            return JsonResponse({"error": f"Action `{action}` is not supported"}, status=501)

    def get_rows(self, params):
        """Return the grid rows as a list of dicts or a ``values()`` queryset."""
        raise NotImplementedError

    def sort_rows(self, rows, sidx, sord):
        if not sidx:
            # pages of an unordered queryset are not stable
            if hasattr(rows, "order_by") and not rows.ordered:
                return rows.order_by("pk")
            return rows
        if hasattr(rows, "order_by"):
            try:
                return rows.order_by(f"-{sidx}" if sord == "desc" else sidx)
            except FieldError:
                raise InvalidParamError(f"Can not sort on `{sidx}`")

        # rows without a value sort last in either direction
        present = [row for row in rows if row.get(sidx) is not None]
        missing = [row for row in rows if row.get(sidx) is None]
        try:
            present.sort(key=itemgetter(sidx), reverse=sord == "desc")
        except TypeError:
            raise InvalidParamError(f"Can not sort on `{sidx}`")
        return present + missing

    def handle_request(self, params):
        rows = self.sort_rows(self.get_rows(params), params["sidx"], params["sord"])
        paginator = Paginator(rows, params["rows"])
        page = paginator.get_page(params["page"])
        return JsonResponse(
            {
                "page": page.number,
                "total": paginator.num_pages if paginator.count else 0,
                "records": paginator.count,
                "rows": list(page.object_list),
            }
        )

    def handle_edit(self, params):
        raise NotImplementedError

    def handle_add(self, params):
        raise NotImplementedError

    def handle_del(self, params):
        raise NotImplementedError
