# Routes package init
"""
Storefront Backend — API Routes Package
=========================================

What:  HTTP route handlers that accept requests and return responses.

Route Inventory:
    - resources.py: /category, /product, /user  (CRUD, one router per resource)
    - health.py:    GET /health                  (service health check)

Routes stay thin: they read the request, call the resource service, and
choose the status code. Validation and SQL live in app/services.
"""
