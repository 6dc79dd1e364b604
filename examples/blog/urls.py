"""Blog URL table.

Inspect it from the command line::

    perch routes examples.blog.urls:router
    perch match examples.blog.urls:router GET /blog/hello-world/2
    perch assemble examples.blog.urls:router post slug=hello-world
"""

from perch import Route, Router

router = Router(default_params={"controller": "pages", "action": "index"})

# Archive first: "/blog/archive/2024" would otherwise match "post"
router.add(
    "archive",
    Route(
        "/blog/archive/:year/~:month",
        defaults={"controller": "blog", "action": "archive"},
        constraints={"year": r"\d{4}", "month": r"(?:\d{2})?"},
    ),
)
router.add(
    "post",
    Route(
        "/blog/:slug/~:page",
        defaults={"controller": "blog", "action": "show", "page": "1"},
        constraints={"slug": r"[a-z0-9-]+"},
        methods=["GET"],
    ),
)
router.add("feed", Route("/~blog/feed.xml", defaults={"controller": "blog", "action": "feed"}))
router.add("admin", Route("/admin/~:section", schemes=["https"], defaults={"controller": "admin"}))
router.add("home", Route("/"))
