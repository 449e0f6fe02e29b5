# Routes package init
"""
Product Catalog Backend — API Routes Package
==============================================

Route Inventory:
    - products.py:  GET/POST       /api/products
                    GET/PUT/DELETE /api/products/{id}
    - health.py:    GET /health, GET /

Routes stay thin: extract request data, call the validator and the store,
pick the status code. Business rules live in app/services.
"""
