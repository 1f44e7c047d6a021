# Services package init
"""
Blog API — Services Package
=============================

Service Inventory:
    - post_repository.py:  PostRepository (MongoDB operations on `posts`)
    - post_service.py:     PostService (not-found and error-status mapping)
"""
