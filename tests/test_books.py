"""
Tests for Book Pages

Tests for /catalog/books and /catalog/book/... routes.
"""

import pytest
from fastapi import status
from sqlalchemy import Text

from catalog.models import Book
from tests.conftest import run


@pytest.fixture
def fantasy(store):
    return run(store.genres.insert({"name": "Fantasy"}))


def book_form(author_id, **overrides):
    """Valid book form data, with optional overrides."""
    data = {
        "title": "Death Wave",
        "summary": "Jordan Kell led the first human mission beyond the solar system.",
        "isbn": "9780765379504",
        "author": author_id,
    }
    data.update(overrides)
    return data


class TestListBooks:
    """Tests for GET /catalog/books."""

    def test_list_books_sorted_by_title(self, client, store, sample_book, sample_author):
        run(store.books.insert({**book_form(sample_author.id, title="A Book"), "genre": []}))

        response = client.get("/catalog/books")

        assert response.status_code == status.HTTP_200_OK
        assert response.context["title"] == "Book List"
        books = response.context["book_list"]
        assert [book.title for book in books] == ["A Book", "Apes and Angels"]
        # Author reference is resolved for display
        assert books[0].author.name == "Bova, "


class TestBookDetail:
    """Tests for GET /catalog/book/{id}."""

    def test_book_with_copies(self, client, sample_book, sample_bookinstance):
        response = client.get(f"/catalog/book/{sample_book.id}")

        assert response.status_code == status.HTTP_200_OK
        context = response.context
        assert context["title"] == "Book Detail"
        assert context["book"].author.family_name == "Bova"
        assert [genre.name for genre in context["book"].genre] == ["Science Fiction"]
        assert [copy.id for copy in context["book_instances"]] == [sample_bookinstance.id]

    def test_book_not_found(self, client):
        response = client.get("/catalog/book/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.context["message"] == "Book not found"


class TestCreateBook:
    """Tests for GET/POST /catalog/book/create."""

    def test_create_form_lists_choices(self, client, sample_author, sample_genre):
        response = client.get("/catalog/book/create")

        assert response.status_code == status.HTTP_200_OK
        assert [author.id for author in response.context["authors"]] == [sample_author.id]
        (choice,) = response.context["genres"]
        assert choice.id == sample_genre.id
        assert choice.checked is False

    def test_create_without_genre(self, client, store, sample_author):
        """No ticked checkbox stores an empty genre list."""
        response = client.post("/catalog/book/create", data=book_form(sample_author.id))

        assert response.status_code == status.HTTP_303_SEE_OTHER
        (book,) = run(store.books.find())
        assert response.headers["location"] == book.url
        assert book.genre == []
        assert book.author_id == sample_author.id

    def test_create_with_one_genre(self, client, store, sample_author, sample_genre):
        client.post(
            "/catalog/book/create",
            data=book_form(sample_author.id, genre=sample_genre.id),
        )

        (book,) = run(store.books.find())
        assert book.genre_ids == [sample_genre.id]

    def test_create_with_several_genres(self, client, store, sample_author, sample_genre, fantasy):
        client.post(
            "/catalog/book/create",
            data=book_form(sample_author.id, genre=[sample_genre.id, fantasy.id]),
        )

        (book,) = run(store.books.find())
        assert sorted(book.genre_ids) == sorted([sample_genre.id, fantasy.id])

    def test_create_invalid_rechecks_submitted_genres(
        self, client, store, sample_author, sample_genre, fantasy
    ):
        """On errors the form is redisplayed with the submitted genres ticked."""
        response = client.post(
            "/catalog/book/create",
            data=book_form(sample_author.id, title="", isbn="", genre=fantasy.id),
        )

        assert response.status_code == status.HTTP_200_OK
        messages = [error.msg for error in response.context["errors"]]
        assert messages == ["Title must not be empty.", "ISBN must not be empty"]
        checked = {choice.name: choice.checked for choice in response.context["genres"]}
        assert checked == {"Fantasy": True, "Science Fiction": False}
        assert response.context["selected_author"] == sample_author.id
        assert run(store.books.count()) == 0

    def test_create_with_long_title_and_isbn(self, client, store, sample_author):
        """Free-text fields have no length limit, in the form or in the store."""
        response = client.post(
            "/catalog/book/create",
            data=book_form(sample_author.id, title="T & " * 200, isbn="9" * 21),
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        (book,) = run(store.books.find())
        assert book.isbn == "9" * 21
        assert book.title == ("T &amp; " * 200).strip()
        for column in ("title", "summary", "isbn"):
            assert isinstance(Book.__table__.c[column].type, Text)

    def test_create_escapes_text(self, client, store, sample_author):
        client.post(
            "/catalog/book/create",
            data=book_form(sample_author.id, summary="Tom & Jerry <3"),
        )

        (book,) = run(store.books.find())
        assert book.summary == "Tom &amp; Jerry &lt;3"


class TestUpdateBook:
    """Tests for GET/POST /catalog/book/{id}/update."""

    def test_update_form_marks_current_genres(self, client, sample_book, sample_genre, fantasy):
        response = client.get(f"/catalog/book/{sample_book.id}/update")

        assert response.status_code == status.HTTP_200_OK
        assert response.context["title"] == "Update Book"
        assert response.context["selected_author"] == sample_book.author_id
        checked = {choice.id: choice.checked for choice in response.context["genres"]}
        assert checked == {sample_genre.id: True, fantasy.id: False}

    def test_update_form_not_found(self, client):
        response = client.get("/catalog/book/missing/update")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_update_replaces_genres(self, client, store, sample_book, sample_author, fantasy):
        response = client.post(
            f"/catalog/book/{sample_book.id}/update",
            data=book_form(sample_author.id, genre=fantasy.id),
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == sample_book.url
        book = run(store.books.find_by_id(sample_book.id))
        assert book.title == "Death Wave"
        assert book.genre_ids == [fantasy.id]

    def test_update_clears_genres(self, client, store, sample_book, sample_author):
        client.post(f"/catalog/book/{sample_book.id}/update", data=book_form(sample_author.id))

        book = run(store.books.find_by_id(sample_book.id))
        assert book.genre == []


class TestDeleteBook:
    """Tests for POST /catalog/book/{id}/delete."""

    def test_delete_book_with_copies_is_refused(self, client, store, sample_book, sample_bookinstance):
        response = client.post(f"/catalog/book/{sample_book.id}/delete")

        assert response.status_code == status.HTTP_200_OK
        assert response.template.name == "book_delete.html"
        assert [copy.id for copy in response.context["book_instances"]] == [sample_bookinstance.id]
        assert run(store.books.count()) == 1

    def test_delete_book_without_copies(self, client, store, sample_book, sample_genre):
        response = client.post(f"/catalog/book/{sample_book.id}/delete")

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/books"
        assert run(store.books.count()) == 0
        # The genre itself is untouched and now has no books
        assert run(store.books.find({"genre": sample_genre.id})) == []
        assert run(store.genres.count()) == 1

    def test_delete_book_twice(self, client, store, sample_book):
        """Deleting a book that is already gone still redirects to the list."""
        client.post(f"/catalog/book/{sample_book.id}/delete")
        response = client.post(f"/catalog/book/{sample_book.id}/delete")

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/books"
        assert run(store.books.count()) == 0
