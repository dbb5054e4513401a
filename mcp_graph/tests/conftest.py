"""
Shared fixtures for the mcp_graph tests

FakeGraphClient stands in for GraphClient: it records every request and
replays queued responses (or raises queued exceptions).
"""

import json
from typing import Any, List, Tuple

import pytest

from mcp_graph.graph_types import (
    EndpointDescriptor,
    GraphResponse,
    ParameterDeclaration,
    ParamSchema,
    ParamType,
    RequestOptions,
    TextContentItem,
)


def json_response(document: Any) -> GraphResponse:
    return GraphResponse(content=[TextContentItem(text=json.dumps(document))])


def empty_response() -> GraphResponse:
    return GraphResponse(content=[])


class FakeGraphClient:
    """Records requests, replays queued responses"""

    def __init__(self, *responses):
        self.responses: List[Any] = list(responses)
        self.calls: List[Tuple[str, RequestOptions]] = []
        self.closed = False

    def queue(self, *responses) -> "FakeGraphClient":
        self.responses.extend(responses)
        return self

    async def graph_request(self, path: str, options: RequestOptions) -> GraphResponse:
        self.calls.append((path, options))
        if not self.responses:
            return json_response({"value": []})
        response = self.responses.pop(0)
        if isinstance(response, BaseException):
            raise response
        return response

    async def close(self):
        self.closed = True

    @property
    def last_path(self) -> str:
        return self.calls[-1][0]

    @property
    def last_options(self) -> RequestOptions:
        return self.calls[-1][1]


def make_endpoint(tool_name="list-things", method="get", path="/me/things", parameters=(), **kwargs):
    return EndpointDescriptor(
        tool_name=tool_name,
        method=method,
        path=path,
        parameters=tuple(parameters),
        **kwargs,
    )


def param(name, param_type, annotation=Any, required=False):
    return ParameterDeclaration(name, ParamType(param_type), ParamSchema(annotation, None, required))


@pytest.fixture
def fake_client():
    return FakeGraphClient()


@pytest.fixture
def tiny_catalog():
    """Read, write, media and work-only endpoints"""
    return (
        make_endpoint(
            "list-things",
            "get",
            "/me/things",
            [param("top", "Query", int), param("filter", "Query", str)],
            scopes=("Things.Read",),
        ),
        make_endpoint(
            "get-thing",
            "get",
            "/me/things/{thing-id}",
            [param("thing-id", "Path", str, required=True)],
            scopes=("Things.Read",),
        ),
        make_endpoint(
            "create-thing",
            "post",
            "/me/things",
            [param("body", "Body", dict, required=True)],
            scopes=("Things.ReadWrite",),
        ),
        make_endpoint(
            "download-thing",
            "get",
            "/me/things/{thing-id}/content",
            [param("thing-id", "Path", str, required=True)],
            scopes=("Things.Read",),
            media_content=True,
        ),
        make_endpoint(
            "list-org-things",
            "get",
            "/org/things",
            [],
            work_scopes=("Things.Read.All",),
        ),
    )


@pytest.fixture
def catalog_file(tmp_path):
    """Write a catalog YAML file and return its path"""

    def write(text: str):
        path = tmp_path / "endpoints.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return write
