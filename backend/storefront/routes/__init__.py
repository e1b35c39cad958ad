"""
Storefront Backend — API Routes Package
=========================================

What:  HTTP route handlers, grouped per API area.

Route Inventory:
    - admin/:    /admin/*  (auth, regions, store, currencies, users,
                            stock-locations, uploads, exports)
    - store/:    /store/*  (auth, customers, regions)
    - files.py:  GET /uploads/{key}
    - health.py: GET /health
    - deps.py:   authentication and pagination dependencies

Design Principle:
    Routes stay thin: parse the request, call a service, shape the response.
    Business rules live in services so they can be tested without HTTP.
"""
