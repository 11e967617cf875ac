"""
End-to-end tests for the /api/books endpoints.

Each test runs against a freshly created in-memory schema, so ids start at 1.
"""

import pytest

pytestmark = pytest.mark.api


def create(client, **payload):
    response = client.post("/api/books", json=payload)
    assert response.status_code == 201, response.get_json()
    return response.get_json()


def assert_error_body(response, status, message):
    body = response.get_json()
    assert response.status_code == status
    assert body["success"] is False
    assert body["status"] == status
    assert body["message"] == message
    assert "timestamp" in body
    return body


# ---------------------------------------------------------------- create


def test_add_book_returns_created_book(client, gatsby_payload):
    response = client.post("/api/books", json=gatsby_payload)

    assert response.status_code == 201
    body = response.get_json()
    assert body["id"] == 1
    assert body["title"] == "The Great Gatsby"
    assert body["author"] == "F. Scott Fitzgerald"
    assert body["isbn"] == "9780743273565"
    assert body["available"] is True
    assert body["created_at"] == body["updated_at"]
    assert body["availability_status"] == "The book 'The Great Gatsby' is available."


def test_add_book_minimal_payload(client):
    body = create(client, title="Emma")

    assert body["author"] is None
    assert body["isbn"] is None
    assert body["available"] is True


def test_add_duplicate_title_returns_conflict(client, gatsby_payload):
    create(client, **gatsby_payload)

    response = client.post("/api/books", json={"title": "The Great Gatsby"})

    assert_error_body(
        response,
        409,
        "Book with title 'The Great Gatsby' already exists in the library.",
    )
    assert len(client.get("/api/books").get_json()) == 1


def test_add_duplicate_isbn_returns_conflict(client, gatsby_payload):
    create(client, **gatsby_payload)

    response = client.post(
        "/api/books", json={"title": "Gatsby Again", "isbn": "9780743273565"}
    )

    assert_error_body(
        response,
        409,
        "Book with ISBN '9780743273565' already exists in the library.",
    )


def test_books_without_isbn_never_conflict(client):
    create(client, title="Emma", isbn="")
    create(client, title="Persuasion")

    books = client.get("/api/books").get_json()
    assert [b["isbn"] for b in books] == [None, None]


@pytest.mark.parametrize(
    "payload,field,message",
    [
        ({"author": "Nobody"}, "title", "Book title is required"),
        ({"title": "   "}, "title", "Book title is required"),
        ({"title": "x" * 256}, "title", "Title must be between 1 and 255 characters"),
        (
            {"title": "Dune", "author": "a" * 256},
            "author",
            "Author name must be less than 255 characters",
        ),
        ({"title": "Dune", "isbn": "123"}, "isbn", "ISBN must be between 10 and 20 characters"),
        ({"title": "Dune", "available": "yes"}, "available", "Must be true or false"),
    ],
)
def test_add_book_validation_errors(client, payload, field, message):
    response = client.post("/api/books", json=payload)

    body = assert_error_body(response, 400, "Validation failed")
    assert body["errors"][field] == message
    assert client.get("/api/books").get_json() == []


def test_add_book_non_json_body(client):
    response = client.post("/api/books", data="not json", content_type="text/plain")

    body = assert_error_body(response, 400, "Validation failed")
    assert body["errors"] == {"body": "Request body must be a JSON object"}


# ------------------------------------------------------------------ read


def test_list_books_in_id_order(client):
    create(client, title="Emma")
    create(client, title="Dune")

    response = client.get("/api/books")

    assert response.status_code == 200
    assert [b["title"] for b in response.get_json()] == ["Emma", "Dune"]


def test_list_books_empty(client):
    response = client.get("/api/books")

    assert response.status_code == 200
    assert response.get_json() == []


def test_get_book_by_id(client, gatsby_payload):
    created = create(client, **gatsby_payload)

    response = client.get(f"/api/books/{created['id']}")

    assert response.status_code == 200
    assert response.get_json() == created


def test_get_missing_book(client):
    assert_error_body(client.get("/api/books/999"), 404, "Book not found with id: 999")


# ---------------------------------------------------------- availability


def test_availability_status_messages(client, gatsby_payload):
    create(client, **gatsby_payload)

    available = client.get("/api/books/The%20Great%20Gatsby/availability")
    assert available.status_code == 200
    assert available.get_json() == {
        "status": "The book 'The Great Gatsby' is available."
    }

    client.patch("/api/books/1/availability")
    checked_out = client.get("/api/books/The%20Great%20Gatsby/availability")
    assert checked_out.get_json() == {
        "status": "The book 'The Great Gatsby' is checked out."
    }


def test_availability_of_unknown_title_is_not_an_error(client):
    response = client.get("/api/books/Moby%20Dick/availability")

    assert response.status_code == 200
    assert response.get_json() == {
        "status": "The book 'Moby Dick' is not in the library's collection."
    }


def test_availability_of_title_with_slash(client):
    create(client, title="Either/Or")

    response = client.get("/api/books/Either/Or/availability")

    assert response.get_json() == {"status": "The book 'Either/Or' is available."}


def test_toggle_availability_round_trip(client, gatsby_payload):
    created = create(client, **gatsby_payload)

    first = client.patch("/api/books/1/availability")
    second = client.patch("/api/books/1/availability")

    assert first.status_code == 200
    assert first.get_json()["available"] is False
    assert second.get_json()["available"] is True
    assert created["updated_at"] < first.get_json()["updated_at"]
    assert first.get_json()["updated_at"] < second.get_json()["updated_at"]
    assert second.get_json()["created_at"] == created["created_at"]


def test_toggle_availability_missing_book(client):
    assert_error_body(
        client.patch("/api/books/3/availability"), 404, "Book not found with id: 3"
    )


# ---------------------------------------------------------------- update


def test_update_book_replaces_fields(client, gatsby_payload):
    created = create(client, **gatsby_payload)

    response = client.put(
        "/api/books/1",
        json={
            "title": "The Great Gatsby",
            "author": "Fitzgerald",
            "isbn": "9780743273565",
            "available": False,
        },
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["author"] == "Fitzgerald"
    assert body["available"] is False
    assert body["created_at"] == created["created_at"]
    assert body["updated_at"] > created["updated_at"]


def test_update_book_conflicts_with_other_book(client, gatsby_payload):
    create(client, **gatsby_payload)
    create(client, title="1984", isbn="9780451524935")

    title_clash = client.put("/api/books/2", json={"title": "The Great Gatsby"})
    isbn_clash = client.put(
        "/api/books/2", json={"title": "1984", "isbn": "9780743273565"}
    )

    assert title_clash.status_code == 409
    assert isbn_clash.status_code == 409
    assert client.get("/api/books/2").get_json()["isbn"] == "9780451524935"


def test_update_missing_book(client):
    response = client.put("/api/books/9", json={"title": "Dune"})

    assert_error_body(response, 404, "Book not found with id: 9")


def test_update_book_validation_error(client, gatsby_payload):
    create(client, **gatsby_payload)

    response = client.put("/api/books/1", json={"title": ""})

    body = assert_error_body(response, 400, "Validation failed")
    assert "title" in body["errors"]


# ----------------------------------------------------------- title patch


def test_patch_title_by_id(client, gatsby_payload):
    create(client, **gatsby_payload)

    response = client.patch(
        "/api/books/1/title", query_string={"new_title": "Gatsby"}
    )

    assert response.status_code == 200
    body = response.get_json()
    assert body["title"] == "Gatsby"
    assert body["isbn"] == "9780743273565"
    assert client.get("/api/books/1").get_json()["title"] == "Gatsby"


def test_patch_title_by_id_to_own_title_conflicts(client, gatsby_payload):
    create(client, **gatsby_payload)

    response = client.patch(
        "/api/books/1/title", query_string={"new_title": "The Great Gatsby"}
    )

    assert_error_body(
        response,
        409,
        "Book with title 'The Great Gatsby' already exists in the library.",
    )


def test_patch_title_by_id_missing_param(client, gatsby_payload):
    create(client, **gatsby_payload)

    response = client.patch("/api/books/1/title")

    body = assert_error_body(response, 400, "Validation failed")
    assert body["errors"] == {"new_title": "new_title must not be blank"}


def test_patch_title_by_id_missing_book(client):
    response = client.patch("/api/books/5/title", query_string={"new_title": "X"})

    assert_error_body(response, 404, "Book not found with id: 5")


def test_patch_title_by_old_title(client):
    create(client, title="1984", isbn="9780451524935")

    response = client.patch(
        "/api/books/title",
        query_string={"old_title": "1984", "new_title": "Nineteen Eighty-Four"},
    )

    assert response.status_code == 200
    assert response.get_json()["title"] == "Nineteen Eighty-Four"
    assert client.get("/api/books/1").get_json()["title"] == "Nineteen Eighty-Four"


def test_patch_title_by_old_title_unknown(client):
    response = client.patch(
        "/api/books/title",
        query_string={"old_title": "Moby Dick", "new_title": "Whale"},
    )

    assert_error_body(response, 404, "Book not found with title: Moby Dick")


def test_patch_title_by_old_title_blank(client):
    response = client.patch(
        "/api/books/title", query_string={"old_title": " ", "new_title": "Whale"}
    )

    body = assert_error_body(response, 400, "Validation failed")
    assert "old_title" in body["errors"]


# ---------------------------------------------------------------- delete


def test_delete_book_then_not_found(client, gatsby_payload):
    create(client, **gatsby_payload)

    response = client.delete("/api/books/1")

    assert response.status_code == 204
    assert response.data == b""
    assert client.get("/api/books/1").status_code == 404
    assert_error_body(client.delete("/api/books/1"), 404, "Book not found with id: 1")


def test_deleted_title_and_isbn_can_be_reused_with_new_id(client, gatsby_payload):
    create(client, **gatsby_payload)
    client.delete("/api/books/1")

    recreated = create(client, **gatsby_payload)

    assert recreated["id"] == 2


# ------------------------------------------------------------------ misc


def test_unknown_route_returns_json_error(client):
    response = client.get("/api/books/abc")

    body = response.get_json()
    assert response.status_code == 404
    assert body["success"] is False
    assert body["status"] == 404


def test_method_not_allowed_returns_json_error(client):
    response = client.post("/api/books/1")

    assert response.status_code == 405
    assert response.get_json()["status"] == 405


def test_librarian_session(client):
    """Add, check out, rename and remove books the way a librarian would."""
    gatsby = create(
        client,
        title="The Great Gatsby",
        author="F. Scott Fitzgerald",
        isbn="9780743273565",
    )
    create(client, title="1984", author="George Orwell", isbn="9780451524935")

    toggled = client.patch(f"/api/books/{gatsby['id']}/availability").get_json()
    assert toggled["available"] is False
    assert (
        client.get("/api/books/The%20Great%20Gatsby/availability").get_json()["status"]
        == "The book 'The Great Gatsby' is checked out."
    )

    renamed = client.patch(
        "/api/books/title",
        query_string={"old_title": "1984", "new_title": "Nineteen Eighty-Four"},
    ).get_json()
    assert renamed["isbn"] == "9780451524935"

    assert client.delete(f"/api/books/{gatsby['id']}").status_code == 204
    titles = [b["title"] for b in client.get("/api/books").get_json()]
    assert titles == ["Nineteen Eighty-Four"]
