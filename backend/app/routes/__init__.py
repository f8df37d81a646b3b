"""
StrayLink Backend — Routes Package
====================================

Route Inventory:
    - share.py:     GET /share/article/{id}, /share/article?id=
                    GET /share/pet/{id},     /share/pet?id=
    - articles.py:  GET /api/articles/{slug_or_id}
    - reports.py:   GET /api/reports/map
    - health.py:    GET /health

Routes stay thin: read the request, call a service, shape the response.
"""
