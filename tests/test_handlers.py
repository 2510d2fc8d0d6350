"""Tests for stooge.handlers — protocol and built-in handlers."""

import pytest

from stooge.errors import InvariantViolation
from stooge.handlers import (
    NULL_HANDLER,
    FunctionHandler,
    Handler,
    NullHandler,
    PassHandler,
    SetHeaderHandler,
    StaticHandler,
    as_handler,
    describe_handler,
    handler,
)
from stooge.http.request import Request
from stooge.http.response import Response


def _pair() -> tuple[Request, Response]:
    return Request("GET", request_uri="/", root_path=""), Response()


class TestProtocol:
    @pytest.mark.parametrize(
        "obj",
        [NullHandler(), PassHandler(), SetHeaderHandler("X", "y"), StaticHandler()],
    )
    def test_builtins_satisfy_protocol(self, obj: object) -> None:
        assert isinstance(obj, Handler)

    def test_plain_class_satisfies_protocol(self) -> None:
        class Custom:
            def handle(self, request: Request, response: Response) -> None:
                response.set_body("custom")

        assert isinstance(Custom(), Handler)


class TestNullHandler:
    def test_raises(self) -> None:
        with pytest.raises(InvariantViolation):
            NullHandler().handle(*_pair())

    def test_sentinel_instance(self) -> None:
        assert isinstance(NULL_HANDLER, NullHandler)


class TestPassHandler:
    def test_leaves_response_untouched(self) -> None:
        request, response = _pair()
        response.set_status(403).set_body("nope")

        PassHandler().handle(request, response)

        assert response.status == 403
        assert response.text == "nope"
        assert response.headers == {}


class TestSetHeaderHandler:
    def test_sets_exactly_one_header(self) -> None:
        request, response = _pair()
        SetHeaderHandler("X-Header", "v").handle(request, response)

        assert response.headers == {"X-Header": "v"}
        assert response.status == 200
        assert response.body == ""


class TestStaticHandler:
    def test_defaults(self) -> None:
        request, response = _pair()
        response.set_body("previous")
        StaticHandler().handle(request, response)

        assert response.status == 200
        assert response.body == ""

    def test_status_and_body(self) -> None:
        request, response = _pair()
        StaticHandler(404, "missing").handle(request, response)

        assert response.status == 404
        assert response.text == "missing"


class TestFunctionHandler:
    def test_decorator_wraps_function(self) -> None:
        @handler
        def greet(request: Request, response: Response) -> None:
            response.set_body("hi")

        assert isinstance(greet, FunctionHandler)
        request, response = _pair()
        greet.handle(request, response)
        assert response.text == "hi"

    def test_as_handler_passes_handlers_through(self) -> None:
        static = StaticHandler()
        assert as_handler(static) is static

    def test_as_handler_wraps_callables(self) -> None:
        def fn(request: Request, response: Response) -> None:
            response.set_status(204)

        wrapped = as_handler(fn)
        request, response = _pair()
        wrapped.handle(request, response)
        assert response.status == 204

    def test_as_handler_rejects_handler_class(self) -> None:
        with pytest.raises(TypeError, match=r"StaticHandler\(\)"):
            as_handler(StaticHandler)  # type: ignore[arg-type]

    def test_as_handler_rejects_other_objects(self) -> None:
        with pytest.raises(TypeError):
            as_handler("not a handler")  # type: ignore[arg-type]


class TestDescribeHandler:
    def test_function(self) -> None:
        def greet(request: Request, response: Response) -> None: ...

        assert describe_handler(FunctionHandler(greet)).endswith("greet")

    def test_dataclass(self) -> None:
        assert describe_handler(StaticHandler(404)) == "StaticHandler(status=404, body='')"

    def test_plain_class(self) -> None:
        assert describe_handler(PassHandler()) == "PassHandler"
