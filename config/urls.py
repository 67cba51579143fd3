from django.urls import path

from . import views

urlpatterns = [
    path("", views.BooksPageView.as_view(), name="books"),
    path("health/", views.health_check, name="health_check"),
    path("books/grid/", views.BooksGridView.as_view(), name="books_grid"),
]
