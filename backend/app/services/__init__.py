"""
StrayLink Backend — Services Layer
====================================

Service Inventory:
    - ArticleService / article_content: published articles and their body parser
    - PetService: pet lookup for share previews
    - ShareService: social-preview metadata (links.py holds its URL helpers)
    - ReportService / map_service: sighting reports as map markers
    - marker_popup / marker_registry: hover/pin popup lifecycle of map markers

Services receive the database session per call and hold no request state.
"""
