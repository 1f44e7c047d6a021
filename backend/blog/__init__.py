"""
Blog API — Application Package
================================

What: Marks the `blog` directory as a Python package.
Who:  Imported by uvicorn (`blog.main:app`), the `blog-api` console script and pytest.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP verbs, paths, status codes
    ├─────────────────────────────────────┤
    │      Services (Controller Logic)    │  ← not-found / error mapping
    ├─────────────────────────────────────┤
    │     Repository (Store Operations)   │  ← find / insert / update / delete
    ├─────────────────────────────────────┤
    │  Models & Schemas (Post documents)  │  ← entity defaults + API records
    ├─────────────────────────────────────┤
    │     Database (MongoDB connector)    │  ← one AsyncMongoClient per process
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
