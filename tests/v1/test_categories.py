# mypy: ignore-errors
# tests/v1/test_categories.py
"""Public category endpoint tests."""

from fastapi import status

from vouchboard.models import Category


def test_list_active_categories_in_order(client, db_session, category) -> None:
    db_session.add_all(
        [
            Category(name="Accounts", slug="accounts", order=0),
            Category(name="Archived", slug="archived", order=5, is_active=False),
        ]
    )
    db_session.commit()

    response = client.get("/api/categories")
    assert response.status_code == status.HTTP_200_OK
    assert [c["slug"] for c in response.json()] == ["accounts", "digital-goods"]


def test_get_category_by_slug(client, category) -> None:
    response = client.get(f"/api/categories/{category.slug}")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()
    assert data["id"] == category.id
    assert data["name"] == "Digital Goods"
    assert data["is_active"] is True


def test_inactive_category_is_hidden(client, db_session, category) -> None:
    category.is_active = False
    db_session.commit()
    response = client.get("/api/categories/digital-goods")
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_unknown_slug(client) -> None:
    response = client.get("/api/categories/missing")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json()["detail"] == "Category not found"
