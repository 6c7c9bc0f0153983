"""
Tests for Genre Pages

Tests for /catalog/genres and /catalog/genre/... routes.
"""

from fastapi import status

from tests.conftest import run


class TestListGenres:
    """Tests for GET /catalog/genres."""

    def test_list_genres_sorted_by_name(self, client, store):
        for name in ("Poetry", "Fantasy", "Science Fiction"):
            run(store.genres.insert({"name": name}))

        response = client.get("/catalog/genres")

        assert response.status_code == status.HTTP_200_OK
        assert response.context["title"] == "Genre List"
        names = [genre.name for genre in response.context["genre_list"]]
        assert names == ["Fantasy", "Poetry", "Science Fiction"]


class TestGenreDetail:
    """Tests for GET /catalog/genre/{id}."""

    def test_genre_with_books(self, client, sample_genre, sample_book):
        response = client.get(f"/catalog/genre/{sample_genre.id}")

        assert response.status_code == status.HTTP_200_OK
        assert response.context["title"] == "Genre Detail"
        assert response.context["genre"].name == "Science Fiction"
        assert [book.id for book in response.context["genre_books"]] == [sample_book.id]

    def test_genre_not_found(self, client):
        response = client.get("/catalog/genre/missing")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.context["message"] == "Genre not found"


class TestCreateGenre:
    """Tests for POST /catalog/genre/create."""

    def test_create_genre(self, client, store):
        response = client.post("/catalog/genre/create", data={"name": "  Fantasy  "})

        assert response.status_code == status.HTTP_303_SEE_OTHER
        (genre,) = run(store.genres.find())
        assert genre.name == "Fantasy"
        assert response.headers["location"] == genre.url

    def test_create_existing_name_reuses_genre(self, client, store, sample_genre):
        """Submitting a name that already exists redirects to that genre."""
        response = client.post("/catalog/genre/create", data={"name": "Science Fiction"})

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == sample_genre.url
        assert run(store.genres.count()) == 1

    def test_create_genre_empty_name(self, client, store):
        response = client.post("/catalog/genre/create", data={"name": "   "})

        assert response.status_code == status.HTTP_200_OK
        assert response.template.name == "genre_form.html"
        assert [error.msg for error in response.context["errors"]] == ["Genre name required"]
        assert run(store.genres.count()) == 0

    def test_create_genre_name_is_escaped(self, client, store):
        client.post("/catalog/genre/create", data={"name": "<b>Horror</b>"})

        (genre,) = run(store.genres.find())
        assert genre.name == "&lt;b&gt;Horror&lt;/b&gt;"


class TestUpdateGenre:
    """Tests for POST /catalog/genre/{id}/update."""

    def test_rename_genre(self, client, store, sample_genre):
        response = client.post(
            f"/catalog/genre/{sample_genre.id}/update", data={"name": "Sci-Fi"}
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert run(store.genres.find_by_id(sample_genre.id)).name == "Sci-Fi"

    def test_rename_to_existing_name_is_refused(self, client, store, sample_genre):
        other = run(store.genres.insert({"name": "Fantasy"}))

        response = client.post(f"/catalog/genre/{other.id}/update", data={"name": "Science Fiction"})

        assert response.status_code == status.HTTP_200_OK
        assert [error.msg for error in response.context["errors"]] == [
            "A genre with this name already exists."
        ]
        assert run(store.genres.find_by_id(other.id)).name == "Fantasy"

    def test_keep_own_name(self, client, sample_genre):
        response = client.post(
            f"/catalog/genre/{sample_genre.id}/update", data={"name": "Science Fiction"}
        )

        assert response.status_code == status.HTTP_303_SEE_OTHER


class TestDeleteGenre:
    """Tests for POST /catalog/genre/{id}/delete."""

    def test_delete_unused_genre(self, client, store, sample_genre):
        response = client.post(f"/catalog/genre/{sample_genre.id}/delete")

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/genres"
        assert run(store.genres.count()) == 0

    def test_delete_genre_listed_by_book_is_refused(self, client, store, sample_genre, sample_book):
        response = client.post(f"/catalog/genre/{sample_genre.id}/delete")

        assert response.status_code == status.HTTP_200_OK
        assert response.template.name == "genre_delete.html"
        assert [book.id for book in response.context["genre_books"]] == [sample_book.id]
        assert run(store.genres.count()) == 1

    def test_delete_missing_genre(self, client):
        response = client.post("/catalog/genre/missing/delete")

        assert response.status_code == status.HTTP_303_SEE_OTHER
        assert response.headers["location"] == "/catalog/genres"
