"""Tests for perch.routing.router — ordered dispatch, defaults, and merge."""

import logging

import pytest

from perch.config import RouterConfig
from perch.errors import (
    IllegalState,
    NoRoutesConfigured,
    RouteNotFound,
    UnknownRoute,
)
from perch.http.request import Request
from perch.routing.route import Route
from perch.routing.router import Router


def _get(path: str, scheme: str = "http") -> Request:
    return Request("GET", path, scheme)


class TestRouterCollection:
    def test_add_and_get(self) -> None:
        route = Route("/")
        router = Router().add("home", route)
        assert router.get("home") is route
        assert router.has("home")
        assert "home" in router
        assert len(router) == 1

    def test_get_unknown(self) -> None:
        with pytest.raises(UnknownRoute, match="'nope'") as exc_info:
            Router().get("nope")
        assert exc_info.value.name == "nope"

    def test_unknown_route_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            Router().get("nope")

    def test_remove(self) -> None:
        router = Router().add("home", Route("/"))
        assert router.remove("home") is router
        assert not router.has("home")
        assert len(router) == 0

    def test_remove_unknown_is_noop(self) -> None:
        router = Router().add("home", Route("/"))
        router.remove("nope")
        assert len(router) == 1

    def test_iteration_in_insertion_order(self) -> None:
        a, b, c = Route("/a"), Route("/b"), Route("/c")
        router = Router().add("a", a).add("b", b).add("c", c)
        assert list(router) == [("a", a), ("b", b), ("c", c)]

    def test_overwrite_keeps_position(self) -> None:
        replacement = Route("/a2")
        router = Router().add("a", Route("/a")).add("b", Route("/b")).add("a", replacement)
        assert [name for name, _ in router] == ["a", "b"]
        assert router.get("a") is replacement

    def test_routes_view_read_only(self) -> None:
        router = Router().add("home", Route("/"))
        with pytest.raises(TypeError):
            router.routes["x"] = Route("/x")  # type: ignore[index]

    def test_add_rejects_non_route(self) -> None:
        with pytest.raises(TypeError, match="Expected a Route"):
            Router().add("home", "/")  # type: ignore[arg-type]

    def test_constructor_routes(self) -> None:
        router = Router({"a": Route("/a"), "b": Route("/b")})
        assert [name for name, _ in router] == ["a", "b"]


class TestRouterDefaults:
    def test_set_default_params_replaces(self) -> None:
        router = Router(default_params={"a": 1})
        router.set_default_params({"b": 2})
        assert router.default_params == {"b": 2}

    def test_set_default_param(self) -> None:
        router = Router().set_default_param("a", 1).set_default_param("b", 2)
        assert router.default_params == {"a": 1, "b": 2}

    def test_default_params_is_copy(self) -> None:
        router = Router(default_params={"a": 1})
        router.default_params["a"] = 2
        assert router.default_params == {"a": 1}


class TestRouterMatch:
    def test_no_routes(self) -> None:
        with pytest.raises(NoRoutesConfigured):
            Router().match(_get("/"))

    def test_not_found(self) -> None:
        router = Router().add("home", Route("/"))
        with pytest.raises(RouteNotFound) as exc_info:
            router.match(_get("/missing/page"))
        assert exc_info.value.status == 404
        assert "/missing/page" in exc_info.value.detail

    def test_returns_router(self, blog_router: Router) -> None:
        assert blog_router.match(_get("/")) is blog_router

    def test_route_match_before_match(self) -> None:
        with pytest.raises(IllegalState):
            _ = Router().route_match

    def test_route_match_after_miss(self) -> None:
        router = Router().add("home", Route("/"))
        with pytest.raises(RouteNotFound):
            router.match(_get("/x/y"))
        with pytest.raises(IllegalState):
            _ = router.route_match

    def test_matched_route_name(self, blog_router: Router) -> None:
        match = blog_router.match(_get("/blog/hello")).route_match
        assert match.matched_route_name == "post"
        assert match.get_param("slug") == "hello"

    def test_first_added_wins(self) -> None:
        router = Router().add("first", Route("/:a")).add("second", Route("/:b"))
        assert router.match(_get("/x")).route_match.matched_route_name == "first"

    def test_falls_through_to_later_route(self, blog_router: Router) -> None:
        match = blog_router.match(_get("/about")).route_match
        assert match.matched_route_name == "catchall"
        assert match.get_param("anything") == "about"

    def test_filters_fall_through(self, blog_router: Router) -> None:
        # "admin" requires https, so plain http lands on no route
        with pytest.raises(RouteNotFound):
            blog_router.match(_get("/admin/users"))
        match = blog_router.match(_get("/admin/users", "https")).route_match
        assert match.matched_route_name == "admin"

    def test_router_defaults_overlay(self, blog_router: Router) -> None:
        match = blog_router.match(_get("/")).route_match
        assert match.get_param("controller") == "pages"
        assert match.get_param("page") == "99"

    def test_route_values_win_over_router_defaults(self, blog_router: Router) -> None:
        match = blog_router.match(_get("/blog/hello")).route_match
        assert match.get_param("page") == "1"
        match = blog_router.match(_get("/blog/hello/3")).route_match
        assert match.get_param("page") == "3"

    def test_router_default_fills_none(self) -> None:
        router = Router(default_params={"a": "x"}).add("r", Route("/", defaults={"a": None}))
        assert router.match(_get("/")).route_match.get_param("a") == "x"

    def test_last_match_replaced(self, blog_router: Router) -> None:
        blog_router.match(_get("/"))
        blog_router.match(_get("/about"))
        assert blog_router.route_match.matched_route_name == "catchall"

    def test_match_does_not_mutate_routes(self, blog_router: Router) -> None:
        before = dict(blog_router.get("post").defaults)
        blog_router.match(_get("/blog/hello"))
        assert dict(blog_router.get("post").defaults) == before

    def test_logs_hit_and_miss(self, caplog: pytest.LogCaptureFixture) -> None:
        caplog.set_level(logging.DEBUG, logger="perch.routing")
        router = Router().add("home", Route("/"))
        router.match(_get("/"))
        with pytest.raises(RouteNotFound):
            router.match(_get("/nope/nope"))
        messages = [r.getMessage() for r in caplog.records if r.name == "perch.routing"]
        assert "Route 'home' matched GET /" in messages
        assert "No route matched GET /nope/nope" in messages


class TestRouterConfig:
    def test_routes_match_with_their_own_config(self) -> None:
        router = Router(config=RouterConfig(method_param="_m"))
        router.add("plain", Route("/a"))
        router.add("custom", Route("/b", config=RouterConfig(method_param="_m")))

        plain = router.match(_get("/a")).route_match
        assert plain.get_param("request_method") == "GET"
        assert "_m" not in plain

        custom = router.match(_get("/b")).route_match
        assert custom.get_param("_m") == "GET"

    def test_route_param_names_route_key(self) -> None:
        router = Router({"home": Route("/")}, config=RouterConfig(route_param="_route"))
        match = router.match(_get("/")).route_match
        assert match.to_dict(router.config.route_param)["_route"] == "home"


class TestRouterAssemble:
    def test_assemble_by_name(self, blog_router: Router) -> None:
        assert blog_router.assemble("post", {"slug": "hello"}) == "/blog/hello/1"

    def test_assemble_unknown(self, blog_router: Router) -> None:
        with pytest.raises(UnknownRoute):
            blog_router.assemble("nope")


class TestRouterMerge:
    def test_merge_routes_and_defaults(self) -> None:
        a, b, a2 = Route("/a"), Route("/b"), Route("/a2")
        left = Router({"a": a}, default_params={"x": 1})
        right = Router({"b": b, "a": a2}, default_params={"x": 2, "y": 3})

        assert left.merge(right) is left
        assert list(left) == [("a", a2), ("b", b)]
        assert left.default_params == {"x": 2, "y": 3}

    def test_merge_leaves_source_untouched(self) -> None:
        left = Router({"a": Route("/a")})
        right = Router({"b": Route("/b")}, default_params={"y": 3})
        left.merge(right)
        assert [name for name, _ in right] == ["b"]
        assert right.default_params == {"y": 3}

    def test_merged_routes_keep_precedence(self) -> None:
        left = Router({"specific": Route("/users/me")})
        left.merge(Router({"generic": Route("/users/:id")}))
        assert left.match(_get("/users/me")).route_match.matched_route_name == "specific"

    def test_export(self) -> None:
        route = Route("/")
        router = Router({"home": route}, default_params={"a": 1})
        routes, params = router.export()
        assert routes == {"home": route}
        assert params == {"a": 1}

    def test_export_is_snapshot(self) -> None:
        router = Router({"home": Route("/")})
        routes, params = router.export()
        routes.clear()
        params["x"] = 1
        assert len(router) == 1
        assert router.default_params == {}
