# Routes package init
"""
TextShelf Backend - API Routes Package
========================================

Route Inventory:
    - resources.py: /api/resources, /api/resources/search,
                    /api/resource/random, /api/resource/{id}
    - health.py:    GET /health
    - pages.py:     GET /{anything else} → static index page

Routes stay thin: read the request, call the store, return the result.
Status codes for failures come from the exception handlers in main.py.
"""
