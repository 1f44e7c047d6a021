"""
Blog API — Process Entrypoint
===============================

What:  `blog-api` console script: loads settings and serves the app with uvicorn.
How:   uvicorn runs the app lifespan, which connects the document store. If
       the store is unreachable, startup fails and uvicorn exits non-zero.

Usage:
    MONGODB_URI=mongodb://localhost:27017/blog blog-api
    # or
    uvicorn blog.main:app --port 4000
"""

import uvicorn

from blog.config import settings


def main() -> None:
    uvicorn.run(
        "blog.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
