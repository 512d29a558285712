# tests/routes/test_categories_routes.py
"""Tests for app/routes/categories.py endpoints."""

from collections.abc import Awaitable, Callable

import pytest
from httpx import AsyncClient

from app.main import app
from app.models import CategoryDB, PostDB


class TestListCategories:
    @pytest.mark.asyncio
    async def test_lists_with_post_counts(
        self,
        client: AsyncClient,
        create_category: Callable[..., Awaitable[CategoryDB]],
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        tech = await create_category("Tech")
        await create_category("Art")
        await create_post(category_id=tech.id)

        response = await client.get("/api/categories")

        assert response.status_code == 200
        data = response.json()["data"]
        assert [(c["name"], c["post_count"]) for c in data] == [("Art", 0), ("Tech", 1)]


class TestCreateCategory:
    """Tests for POST /api/categories."""

    @pytest.mark.asyncio
    async def test_admin_creates(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.post(
            "/api/categories",
            json={"name": "News", "slug": "news"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert isinstance(response.json()["data"]["id"], int)

    @pytest.mark.asyncio
    async def test_duplicate_name(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        await client.post("/api/categories", json={"name": "News"}, headers=admin_headers)

        response = await client.post("/api/categories", json={"name": "News"}, headers=admin_headers)

        assert response.status_code == 409
        assert response.json() == {"success": False, "error": "Category already exists"}

    @pytest.mark.asyncio
    async def test_name_required(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.post("/api/categories", json={}, headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["errors"] == {"name": "Category name is required"}

    @pytest.mark.asyncio
    async def test_slug_too_long(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.post(
            "/api/categories",
            json={"name": "News", "slug": "n" * 101},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["errors"] == {"slug": "Slug must be at most 100 characters"}

    @pytest.mark.asyncio
    async def test_requires_admin(self, client: AsyncClient, user_headers: dict[str, str]) -> None:
        assert (await client.post("/api/categories", json={"name": "X"})).status_code == 401

        response = await client.post("/api/categories", json={"name": "X"}, headers=user_headers)
        assert response.status_code == 403


class TestDeleteCategory:
    """Tests for DELETE /api/categories/{id}."""

    @pytest.mark.asyncio
    async def test_posts_become_uncategorised(
        self,
        client: AsyncClient,
        admin_headers: dict[str, str],
        create_category: Callable[..., Awaitable[CategoryDB]],
        create_post: Callable[..., Awaitable[PostDB]],
    ) -> None:
        category = await create_category("Doomed")
        post = await create_post(category_id=category.id)
        await client.get("/api/posts")

        response = await client.delete(f"/api/categories/{category.id}", headers=admin_headers)

        assert response.status_code == 200
        assert len(app.state.posts_cache) == 0

        read = await client.get(f"/api/posts/{post.id}", headers=admin_headers)
        assert read.json()["data"]["category_id"] is None
        assert read.json()["data"]["category_name"] is None

    @pytest.mark.asyncio
    async def test_absent(self, client: AsyncClient, admin_headers: dict[str, str]) -> None:
        response = await client.delete("/api/categories/9999", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["error"] == "Category not found"
