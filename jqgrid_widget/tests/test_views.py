import json
from unittest import mock

import pytest
from django.http import QueryDict
from django.test import Client
from django.urls import reverse

from jqgrid_widget.exceptions import InvalidParamError
from jqgrid_widget.views import JqGridActionView, jqgrid_params


class RowsView(JqGridActionView):
    rows = []

    def get_rows(self, params):
        return self.rows


def call_view(rf, query, rows=None, method="get", data=None):
    view = RowsView.as_view(rows=rows or [])
    url = f"/grid/?{query}"
    request = rf.post(url, data or {}) if method == "post" else rf.get(url)
    return view(request)


class TestJqGridParams:
    def test_defaults(self):
        params = jqgrid_params(QueryDict(""))
        assert params == {
            "page": 1,
            "rows": 20,
            "sidx": "",
            "sord": "asc",
            "_search": False,
            "filters": None,
            "id": None,
            "oper": None,
            "data": {},
        }

    def test_values(self):
        query = QueryDict(
            "page=2&rows=10&sidx=title&sord=DESC&_search=true&filters=%7B%22groupOp%22%3A%22AND%22%7D&id=3&oper=edit"
        )
        params = jqgrid_params(query)
        assert params["page"] == 2
        assert params["rows"] == 10
        assert params["sidx"] == "title"
        assert params["sord"] == "desc"
        assert params["_search"] is True
        assert params["filters"] == {"groupOp": "AND"}
        assert params["id"] == "3"
        assert params["oper"] == "edit"
        assert params["data"]["id"] == "3"

    @pytest.mark.parametrize("page,rows", [("abc", "x"), ("0", "0"), ("-1", "-5")])
    def test_invalid_numbers_fall_back(self, page, rows):
        params = jqgrid_params(QueryDict(f"page={page}&rows={rows}"))
        assert params["page"] == 1
        assert params["rows"] == 20

    def test_page_size_setting(self, settings):
        settings.JQGRID = {"DEFAULT_PAGE_SIZE": 50}
        assert jqgrid_params(QueryDict(""))["rows"] == 50

    def test_invalid_filters(self):
        with pytest.raises(InvalidParamError, match="Invalid JSON in `filters`"):
            jqgrid_params(QueryDict("filters=%7Bbad"))

    def test_invalid_sort_order(self):
        with pytest.raises(InvalidParamError, match="Invalid sort order `up`"):
            jqgrid_params(QueryDict("sord=up"))


class TestJqGridActionView:
    def test_request_action(self, rf):
        rows = [{"id": i, "name": f"row {i}"} for i in range(1, 6)]
        response = call_view(rf, "action=request&rows=2&page=2", rows=rows)
        assert response.status_code == 200
        assert json.loads(response.content) == {
            "page": 2,
            "total": 3,
            "records": 5,
            "rows": [{"id": 3, "name": "row 3"}, {"id": 4, "name": "row 4"}],
        }

    def test_post_request_action(self, rf):
        rows = [{"id": 1}, {"id": 2}]
        response = call_view(rf, "action=request", rows=rows, method="post", data={"rows": "1", "page": "2"})
        assert json.loads(response.content)["rows"] == [{"id": 2}]

    def test_page_out_of_range_returns_last_page(self, rf):
        rows = [{"id": i} for i in range(5)]
        response = call_view(rf, "action=request&rows=2&page=99", rows=rows)
        assert json.loads(response.content)["page"] == 3
        assert json.loads(response.content)["rows"] == [{"id": 4}]

    def test_empty_rows(self, rf):
        response = call_view(rf, "action=request")
        assert json.loads(response.content) == {"page": 1, "total": 0, "records": 0, "rows": []}

    def test_sorting_puts_missing_values_last(self, rf):
        rows = [{"a": 2}, {"a": None}, {"b": 1}, {"a": 1}]
        asc = json.loads(call_view(rf, "action=request&sidx=a&sord=asc", rows=rows).content)["rows"]
        desc = json.loads(call_view(rf, "action=request&sidx=a&sord=desc", rows=rows).content)["rows"]
        assert asc == [{"a": 1}, {"a": 2}, {"a": None}, {"b": 1}]
        assert desc == [{"a": 2}, {"a": 1}, {"a": None}, {"b": 1}]

    def test_unsortable_values(self, rf):
        response = call_view(rf, "action=request&sidx=a", rows=[{"a": 1}, {"a": "x"}])
        assert response.status_code == 400
        assert json.loads(response.content) == {"error": "Can not sort on `a`"}

    @pytest.mark.parametrize("query", ["action=print", ""])
    def test_unknown_action(self, rf, caplog, query):
        response = call_view(rf, query)
        assert response.status_code == 400
        assert "Unknown action" in json.loads(response.content)["error"]
        assert "Unknown jqGrid action" in caplog.text

    @pytest.mark.parametrize("action", ["edit", "add", "del"])
    def test_unimplemented_actions(self, rf, action):
        response = call_view(rf, f"action={action}", method="post", data={"id": "1"})
        assert response.status_code == 501
        assert json.loads(response.content) == {"error": f"Action `{action}` is not supported"}

    def test_get_rows_not_implemented(self, rf):
        response = JqGridActionView.as_view()(rf.get("/grid/?action=request"))
        assert response.status_code == 501

    def test_invalid_params(self, rf, caplog):
        response = call_view(rf, "action=request&sord=sideways")
        assert response.status_code == 400
        assert json.loads(response.content) == {"error": "Invalid sort order `sideways`"}
        assert "Invalid jqGrid request" in caplog.text

    def test_other_methods_not_allowed(self, rf):
        response = RowsView.as_view()(rf.put("/grid/?action=request"))
        assert response.status_code == 405

    def test_unordered_queryset_falls_back_to_pk(self):
        queryset = mock.Mock(ordered=False)
        rows = RowsView().sort_rows(queryset, "", "asc")
        queryset.order_by.assert_called_once_with("pk")
        assert rows is queryset.order_by.return_value

    def test_ordered_queryset_kept(self):
        queryset = mock.Mock(ordered=True)
        assert RowsView().sort_rows(queryset, "", "asc") is queryset
        queryset.order_by.assert_not_called()

    def test_queryset_sorted_on_column(self):
        queryset = mock.Mock(ordered=False)
        RowsView().sort_rows(queryset, "title", "desc")
        queryset.order_by.assert_called_once_with("-title")


class TestBooksDemo:
    def test_page(self, client: Client):
        response = client.get(reverse("books"))
        assert response.status_code == 200
        assert any(t.name == "pages/books.html" for t in response.templates)
        content = response.content.decode()
        assert "<table id='jqGrid-books'></table>" in content
        assert '"url":"/books/grid/?action=request"' in content
        assert ".navGrid('#jqGrid-pager-books'" in content
        assert '{"url":"/books/grid/?action=del"}' in content
        assert ".filterToolbar({})" in content
        assert "jquery.jqGrid.min.js" in content
        assert content.index("jquery.jqGrid.min.js") < content.index('jQuery("#jqGrid-books")')

    def test_grid_data(self, client: Client):
        url = reverse("books_grid")
        response = client.get(f"{url}?action=request&rows=2&page=1&sidx=title&sord=asc")
        data = response.json()
        assert data["records"] == 5
        assert data["total"] == 3
        assert [row["title"] for row in data["rows"]] == ["Anna Karenina", "Der Process"]

    def test_grid_data_descending(self, client: Client):
        url = reverse("books_grid")
        response = client.post(f"{url}?action=request", {"rows": "2", "sidx": "title", "sord": "desc"})
        assert [row["title"] for row in response.json()["rows"]] == ["Pride and Prejudice", "Les Misérables"]

    def test_edit(self, client: Client):
        url = reverse("books_grid")
        response = client.post(f"{url}?action=edit", {"id": "2", "title": "Les Mis", "oper": "edit"})
        assert response.status_code == 200
        assert response.json() == {"id": 2, "title": "Les Mis", "author": "Victor Hugo", "language": "French"}

    def test_edit_missing_book(self, client: Client):
        response = client.post(f"{reverse('books_grid')}?action=edit", {"id": "99", "oper": "edit"})
        assert response.status_code == 404

    def test_add_not_supported(self, client: Client):
        response = client.post(f"{reverse('books_grid')}?action=add", {"title": "New"})
        assert response.status_code == 501
