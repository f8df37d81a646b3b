"""
StrayLink Backend — Share Preview Schemas
===========================================

What:  The values a social-preview page is rendered from.
Who:   Built by ShareService, rendered by routes/share.py through
       templates/share_preview.html.
"""

from pydantic import BaseModel, Field


class ShareTheme(BaseModel):
    """Colors of the short-lived redirect page."""
    background: str
    foreground: str
    accent: str


class SharePreview(BaseModel):
    """
    What:  Everything a link-preview crawler reads from the page.

    All fields are plain text; escaping happens in the template.
    """
    title: str
    description: str
    image: str = Field(description="Absolute image URL for og:image / twitter:image")
    image_alt: str
    page_url: str = Field(description="Canonical page the visitor is redirected to")
    site_name: str
    redirect_message: str
    theme: ShareTheme
    found: bool = Field(default=True, description="False when fallback content is used")

    def template_context(self, lang: str) -> dict:
        context = self.model_dump()
        context["lang"] = lang
        return context
