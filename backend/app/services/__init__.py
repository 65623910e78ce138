# Services package init
"""
Storefront Backend — Services Layer
=====================================

What:  Business logic between routes (HTTP) and the database (persistence).

Service Inventory:
    - validation:       field rules, escaping, numeric-id and email checks
    - query_builder:    query-string → WHERE clause with bound parameters
    - resource_service: generic list/get/create/update/delete handler
    - resources:        Category, Product and User registrations
"""
