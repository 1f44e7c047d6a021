# Routes package init
"""
Blog API — API Routes Package
===============================

Route Inventory:
    - posts.py:   GET/POST /api/posts, GET/PUT/DELETE /api/posts/{id}
    - health.py:  GET / (liveness text), GET /health (store ping)

Routes stay thin: they pick the status code and delegate to services.
"""
