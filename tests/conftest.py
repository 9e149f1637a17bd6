"""テスト用のフィクスチャ"""

import json

import httpx
import pytest
from notion_chirpy.config import Config
from notion_chirpy.notion_client import create_client


@pytest.fixture
def mock_config(tmp_path):
    return Config(
        notion_api_key="ntn_test_key_12345",
        notion_database_id="2a354f2bd9f080c6ad76f4c0caa22b65",
        posts_dir=tmp_path / "_posts",
        timezone="UTC",
        log_level="DEBUG",
    )


def title_prop(text: str | None) -> dict:
    runs = [] if text is None else [{"type": "text", "plain_text": text}]
    return {"id": "title", "type": "title", "title": runs}


def rich_text_prop(text: str | None) -> dict:
    runs = [] if text is None else [{"type": "text", "plain_text": text}]
    return {"id": "slug", "type": "rich_text", "rich_text": runs}


def date_prop(start: str | None) -> dict:
    return {
        "id": "date",
        "type": "date",
        "date": None if start is None else {"start": start, "end": None, "time_zone": None},
    }


def multi_select_prop(names: list[str]) -> dict:
    return {
        "id": "tags",
        "type": "multi_select",
        "multi_select": [{"id": str(i), "name": n, "color": "default"} for i, n in enumerate(names)],
    }


def select_prop(name: str | None) -> dict:
    return {
        "id": "cat",
        "type": "select",
        "select": None if name is None else {"id": "1", "name": name, "color": "blue"},
    }


def make_page(page_id: str = "page-1", **properties) -> dict:
    props = {"Published": {"id": "pub", "type": "checkbox", "checkbox": True}}
    props.update(properties)
    return {"object": "page", "id": page_id, "properties": props}


@pytest.fixture
def hello_world_page():
    return make_page(
        "hello-page",
        Title=title_prop("Hello World"),
        Date=date_prop("2024-03-01"),
        Tags=multi_select_prop(["ai", "notes"]),
        Category=select_prop("Tech"),
    )


def list_response(results: list[dict], next_cursor: str | None = None) -> dict:
    return {
        "object": "list",
        "results": results,
        "has_more": next_cursor is not None,
        "next_cursor": next_cursor,
    }



class FakeNotionAPI:
    """httpx.MockTransport で Notion API を模倣する

    (メソッド, パス) ごとに応答を登録する。複数登録した場合は順番に返し、
    最後の応答を繰り返す。未登録のエンドポイントは 404 を返す。
    """

    def __init__(self):
        self.routes: dict[tuple[str, str], list] = {}
        self.requests: list[httpx.Request] = []

    def add(self, method: str, path: str, *payloads) -> None:
        self.routes[(method, path)] = list(payloads)

    def bodies(self, method: str, path: str) -> list[dict]:
        return [
            json.loads(r.content)
            for r in self.requests
            if r.method == method and r.url.path == path
        ]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        payloads = self.routes.get((request.method, request.url.path))
        if not payloads:
            return httpx.Response(404, json={
                "object": "error",
                "status": 404,
                "code": "object_not_found",
                "message": f"Could not find {request.url.path}",
            })
        payload = payloads.pop(0) if len(payloads) > 1 else payloads[0]
        if isinstance(payload, httpx.Response):
            return payload
        return httpx.Response(200, json=payload)


@pytest.fixture
def notion_api():
    return FakeNotionAPI()


@pytest.fixture
def sdk_factory(notion_api):
    """FakeNotionAPI につながった本物の Notion SDK クライアントを作る"""

    def factory(config: Config):
        transport = httpx.MockTransport(notion_api.handler)
        return create_client(config, http_client=httpx.Client(transport=transport))

    return factory
