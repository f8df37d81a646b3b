"""
StrayLink Backend — Social-Preview Responder
==============================================

What:  Builds the metadata for share links of articles and pets.
Why:   Chat apps and social networks fetch a shared URL without running
       JavaScript. The single-page frontend has no per-page meta tags, so a
       link to /knowledge/... or /adopt?pet=... would preview as the bare
       site. Share links point here instead; the page we return carries the
       og:/twitter: tags and immediately redirects humans to the real page.
How:   Look the record up, pick title/description/image through a fallback
       chain, and return a SharePreview for the template.

Failure Policy:
    A crawler that gets an error page caches a broken preview. Unknown ids
    and database errors therefore both produce a normal 200 page with
    generic site content; only a missing id is rejected (by the route).
"""

import logging
from typing import Mapping

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.exceptions import DatabaseError
from app.models.article import Article
from app.models.pet import Pet
from app.schemas.share import SharePreview, ShareTheme
from app.services.article_service import article_service
from app.services.links import (
    encode_path_segment,
    ensure_absolute_url,
    pick_image,
    resolve_site_url,
    summarize,
)
from app.services.pet_service import pet_service

logger = logging.getLogger(__name__)

ARTICLE_THEME = ShareTheme(background="#f7f5ff", foreground="#2d2a44", accent="#6c5ce7")
PET_THEME = ShareTheme(background="#fff5ec", foreground="#2b1f18", accent="#f97316")

ARTICLE_REDIRECT_MESSAGE = "Taking you to the article..."
PET_REDIRECT_MESSAGE = "Taking you to the pet profile..."


class ShareService:
    """Turns article and pet records into SharePreview values."""

    async def article_preview(
        self, db: AsyncSession, identifier: str, headers: Mapping[str, str]
    ) -> SharePreview:
        identifier = identifier.strip()
        site_url = resolve_site_url(headers)

        article = None
        try:
            article = await article_service.get_published_article(db, identifier)
        except DatabaseError as e:
            logger.warning("Share preview falls back for article %s: %s", identifier, e.message)

        if article is None:
            return self._article_fallback(site_url, identifier)

        path_key = article.slug or str(article.id)
        title = (
            article.og_title
            or article.meta_title
            or article.title
            or self._article_fallback_title()
        )
        return SharePreview(
            title=title,
            description=(
                article.og_description
                or article.meta_description
                or self._article_fallback_description()
            ),
            image=(
                pick_image(article.og_image)
                or pick_image(article.image_url)
                or settings.default_article_image
            ),
            image_alt=article.image_alt or article.title or title,
            page_url=f"{site_url}/knowledge/{encode_path_segment(path_key)}",
            site_name=settings.site_name,
            redirect_message=ARTICLE_REDIRECT_MESSAGE,
            theme=ARTICLE_THEME,
        )

    async def pet_preview(
        self, db: AsyncSession, identifier: str, headers: Mapping[str, str]
    ) -> SharePreview:
        identifier = identifier.strip()
        site_url = resolve_site_url(headers)

        pet = None
        try:
            pet = await pet_service.get_pet(db, identifier)
        except DatabaseError as e:
            logger.warning("Share preview falls back for pet %s: %s", identifier, e.message)

        if pet is None:
            return self._pet_fallback(site_url, identifier)

        name = pet.name or "this pet"
        image = ensure_absolute_url(
            pick_image(pet.image_url), site_url, settings.default_pet_image
        )
        return SharePreview(
            title=f"Help {name} find a home | {settings.site_name}",
            description=self.describe_pet(pet),
            image=image,
            image_alt=f"Profile of {name}",
            page_url=f"{site_url}/adopt?pet={encode_path_segment(str(pet.id))}",
            site_name=settings.site_name,
            redirect_message=PET_REDIRECT_MESSAGE,
            theme=PET_THEME,
        )

    @staticmethod
    def describe_pet(pet: Pet) -> str:
        """
        Meta description for a pet.

        The story when there is one (summarized), otherwise a one-line fact
        sheet such as "Status: Looking for a home • Age: 2 years • Area:
        Chiang Mai · Mueang".
        """
        story = summarize(pet.story)
        if story:
            return story

        area = " · ".join(part for part in (pet.province, pet.district) if part)
        status = "Adopted" if pet.is_adopted else "Looking for a home"
        facts = [
            f"Status: {status}",
            f"Age: {pet.age}" if pet.age else None,
            f"Area: {area}" if area else None,
            f"Health: {pet.health_status}" if pet.health_status else None,
        ]
        return " • ".join(fact for fact in facts if fact)

    # ── Fallback content ──────────────────────────────────────────────────

    def _article_fallback_title(self) -> str:
        return f"{settings.site_name} - Knowledge"

    def _article_fallback_description(self) -> str:
        return (
            f"Explore articles from the {settings.site_name} community and help "
            "stray animals live better lives."
        )

    def _article_fallback(self, site_url: str, identifier: str) -> SharePreview:
        title = self._article_fallback_title()
        return SharePreview(
            title=title,
            description=self._article_fallback_description(),
            image=settings.default_article_image,
            image_alt=title,
            page_url=f"{site_url}/knowledge/{encode_path_segment(identifier)}",
            site_name=settings.site_name,
            redirect_message=ARTICLE_REDIRECT_MESSAGE,
            theme=ARTICLE_THEME,
            found=False,
        )

    def _pet_fallback(self, site_url: str, identifier: str) -> SharePreview:
        title = f"{settings.site_name} - Pets looking for a home"
        return SharePreview(
            title=title,
            description=(
                f"Share to help the animals of {settings.site_name} "
                "find a warm new family."
            ),
            image=settings.default_pet_image,
            image_alt=title,
            page_url=f"{site_url}/adopt?pet={encode_path_segment(identifier)}",
            site_name=settings.site_name,
            redirect_message=PET_REDIRECT_MESSAGE,
            theme=PET_THEME,
            found=False,
        )


# ── Singleton Instance ────────────────────────────────────────────────────
share_service = ShareService()
