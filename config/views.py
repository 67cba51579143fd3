from django.http import HttpResponse, JsonResponse
from django.urls import reverse
from django.utils.decorators import method_decorator
from django.views.decorators.csrf import csrf_exempt
from django.views.generic import TemplateView

from jqgrid_widget.views import JqGridActionView

BOOKS = [
    {"id": 1, "title": "Pride and Prejudice", "author": "Jane Austen", "language": "English"},
    {"id": 2, "title": "Les Misérables", "author": "Victor Hugo", "language": "French"},
    {"id": 3, "title": "Der Process", "author": "Franz Kafka", "language": "German"},
    {"id": 4, "title": "Don Quijote", "author": "Miguel de Cervantes", "language": "Spanish"},
    {"id": 5, "title": "Anna Karenina", "author": "Leo Tolstoy", "language": "Russian"},
]


def health_check(request):
    """Simple health check endpoint for load balancers"""
    return HttpResponse("OK", status=200)


class BooksPageView(TemplateView):
    template_name = "pages/books.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["grid_url"] = reverse("books_grid")
        context["grid_settings"] = {
            "colNames": ["Title", "Author", "Language"],
            "colModel": [
                {"name": "title", "index": "title", "editable": True},
                {"name": "author", "index": "author", "editable": True},
                {"name": "language", "index": "language", "editable": True},
            ],
            "rowNum": 15,
            "autowidth": True,
            "height": "auto",
        }
        context["pager_settings"] = {
            "edit": {"reloadAfterSubmit": True, "modal": True},
            "add": {"reloadAfterSubmit": True, "modal": True},
            "del": True,
        }
        return context


@method_decorator(csrf_exempt, name="dispatch")
class BooksGridView(JqGridActionView):
    """Grid over the demo books, edits are echoed back but not saved."""

    def get_rows(self, params):
        return BOOKS

    def handle_edit(self, params):
        book = next((book for book in BOOKS if str(book["id"]) == params["id"]), None)
        if book is None:
            return JsonResponse({"error": "Book not found"}, status=404)
        # demo data is not persisted, echo the edited row back
        changes = {key: value for key, value in params["data"].items() if key in book and key != "id"}
        return JsonResponse({**book, **changes})
