# Routes package init
"""
Pocket Writer Backend — API Routes Package
===========================================

Route Inventory (all under /api):
    - templates.py:    POST/GET /api/templates, GET /api/templates/{id}
    - articles.py:     POST/GET /api/articles,  GET /api/articles/{id}
    - health.py:       GET /api/ping, /api/health, /api/health/db
    - server_info.py:  GET /api/server-info, /api/server-info/detailed

Routes stay thin: parse the request, call a service, shape the response.
Business rules live in services/.
"""
