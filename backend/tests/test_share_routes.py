"""
StrayLink Backend — Share Link Route Tests
============================================

What:  HTTP behaviour of /share/article and /share/pet: status codes,
       headers, escaping and both id forms.
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.config import settings


@pytest.fixture(autouse=True)
def clean_site_settings(monkeypatch):
    monkeypatch.setattr(settings, "site_url", "")


def patch_article_lookup(article):
    return patch(
        "app.services.share_service.article_service.get_published_article",
        AsyncMock(return_value=article),
    )


def patch_pet_lookup(pet):
    return patch(
        "app.services.share_service.pet_service.get_pet",
        AsyncMock(return_value=pet),
    )


class TestArticleShareRoutes:

    @pytest.mark.asyncio
    async def test_path_form(self, test_client, make_article):
        article = make_article(og_title="Feeding <b>cats</b> & kittens")
        with patch_article_lookup(article) as lookup:
            response = await test_client.get("/share/article/feeding-street-cats")

        assert response.status_code == 200
        assert response.headers["content-type"] == "text/html; charset=utf-8"
        assert response.headers["cache-control"] == f"public, max-age={settings.share_cache_max_age}"
        body = response.text
        assert "Feeding &lt;b&gt;cats&lt;/b&gt; &amp; kittens" in body
        assert "<b>cats</b>" not in body
        assert 'content="https://test/knowledge/feeding-street-cats"' in body
        assert 'window.location.replace("https://test/knowledge/feeding-street-cats")' in body
        assert '<meta name="twitter:card" content="summary_large_image" />' in body
        assert lookup.await_args.args[1] == "feeding-street-cats"

    @pytest.mark.asyncio
    async def test_query_form(self, test_client, make_article):
        with patch_article_lookup(make_article()) as lookup:
            response = await test_client.get("/share/article", params={"id": "feeding-street-cats"})

        assert response.status_code == 200
        assert lookup.await_args.args[1] == "feeding-street-cats"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("url", ["/share/article", "/share/article?id=", "/share/article?id=%20"])
    async def test_missing_id(self, test_client, url):
        response = await test_client.get(url)
        assert response.status_code == 400
        assert response.text == "Missing article id"

    @pytest.mark.asyncio
    async def test_unknown_article_still_renders(self, test_client):
        with patch_article_lookup(None):
            response = await test_client.get("/share/article/unknown")

        assert response.status_code == 200
        assert settings.default_article_image.replace("&", "&amp;") in response.text

    @pytest.mark.asyncio
    async def test_forwarded_headers_build_canonical_url(self, test_client, make_article):
        headers = {"x-forwarded-host": "straylink.org", "x-forwarded-proto": "https"}
        with patch_article_lookup(make_article()):
            response = await test_client.get("/share/article/feeding-street-cats", headers=headers)

        assert '<link rel="canonical" href="https://straylink.org/knowledge/feeding-street-cats" />' in response.text


class TestPetShareRoutes:

    @pytest.mark.asyncio
    async def test_path_form(self, test_client, make_pet):
        pet = make_pet()
        with patch_pet_lookup(pet):
            response = await test_client.get(f"/share/pet/{pet.id}")

        assert response.status_code == 200
        assert "Help Mali find a home | StrayLink" in response.text
        assert f"https://test/adopt?pet={pet.id}" in response.text

    @pytest.mark.asyncio
    async def test_query_form(self, test_client, make_pet):
        pet = make_pet()
        with patch_pet_lookup(pet) as lookup:
            response = await test_client.get("/share/pet", params={"id": str(pet.id)})

        assert response.status_code == 200
        assert lookup.await_args.args[1] == str(pet.id)

    @pytest.mark.asyncio
    async def test_missing_id(self, test_client):
        response = await test_client.get("/share/pet")
        assert response.status_code == 400
        assert response.text == "Missing pet id"

    @pytest.mark.asyncio
    async def test_lookup_failure_renders_fallback(self, test_client, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection refused")
        response = await test_client.get("/share/pet/6f1c1a5e-8a55-4b43-9d39-3f0a3cb3a001")

        assert response.status_code == 200
        assert "Pets looking for a home" in response.text
