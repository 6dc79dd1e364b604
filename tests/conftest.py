"""Shared fixtures for perch tests."""

import pytest

from perch.routing.route import Route
from perch.routing.router import Router


@pytest.fixture
def blog_router() -> Router:
    """A router with overlapping routes and router-level defaults."""
    router = Router(default_params={"controller": "pages", "page": "99"})
    router.add(
        "post",
        Route("/blog/:slug/~:page", defaults={"page": "1"}, constraints={"slug": r"[a-z-]+"}),
    )
    router.add("admin", Route("/admin/~:section", methods={"GET", "POST"}, schemes={"https"}))
    router.add("catchall", Route("/:anything"))
    router.add("home", Route("/"))
    return router
