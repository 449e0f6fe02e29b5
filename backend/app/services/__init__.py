# Services package init
"""
Product Catalog Backend — Services Layer
==========================================

Service Inventory:
    - validator.validate_product: ordered payload checks → ProductDraft
    - product_store.ProductStore: in-memory product collection (CRUD)

Services know nothing about HTTP; they return models or raise exceptions
from app.exceptions, and can be tested without a client.
"""
