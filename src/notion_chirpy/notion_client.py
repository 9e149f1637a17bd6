"""Notion 連携 — 公開済みページの取得"""

from notion_client import Client as NotionSDKClient
from notion_client.errors import APIResponseError

from .config import Config
from .errors import ConfigError
from . import logger as log

# 公開フラグ（チェックボックス）で絞り込む
PUBLISHED_FILTER = {
    "property": "Published",
    "checkbox": {"equals": True},
}

PAGE_SIZE = 100

# DB を直接クエリする databases/{id}/query を提供する最後の API バージョン
LEGACY_NOTION_VERSION = "2022-06-28"


def create_client(config: Config, http_client=None) -> NotionSDKClient:
    """プロセス全体で共有する Notion SDK クライアントを生成

    http_client には任意の httpx.Client を渡せる（テスト用のトランスポートなど）。
    """
    options = {"auth": config.notion_api_key}
    if config.query_mode == "database":
        options["notion_version"] = LEGACY_NOTION_VERSION
    return NotionSDKClient(client=http_client, **options)


class PostSource:
    """記事 DB から公開済みページを取り出すクライアント

    query_mode が "data_source" の場合は DB のデフォルトデータソースを
    解決してからクエリし、"database" の場合は DB を直接クエリする。
    """

    def __init__(self, config: Config, client: NotionSDKClient):
        self.config = config
        self.client = client
        self.database_id = config.notion_database_id_formatted

    def check_access(self) -> bool:
        """データベースへのアクセス権限を確認"""
        try:
            db = self.client.databases.retrieve(database_id=self.database_id)
            db_title = ""
            for t in db.get("title", []):
                db_title += t.get("plain_text", "")
            log.success(f"Notion DB に接続: 「{db_title}」")
            return True
        except APIResponseError as e:
            if e.status == 404:
                log.error(
                    "Notion DB が見つかりません。\n"
                    "  → Database ID を確認してください\n"
                    "  → インテグレーションに DB へのアクセス権限を付与してください\n"
                    "    (DB → ... → コネクト → インテグレーションを追加)"
                )
            elif e.status == 401:
                log.error("Notion API キーが無効です")
            else:
                log.error(f"Notion API エラー: {e}")
            return False

    def resolve_data_source_id(self) -> str:
        """DB に紐づく最初のデータソース ID を返す"""
        db = self.client.databases.retrieve(database_id=self.database_id)
        data_sources = db.get("data_sources") or []
        if not data_sources:
            raise ConfigError(
                f"Notion DB {self.database_id} にデータソースがありません。\n"
                "  → NOTION_DATABASE_ID を確認するか NOTION_QUERY_MODE=database を指定してください"
            )
        return data_sources[0]["id"]

    def fetch_published_pages(self) -> list[dict]:
        """Published にチェックが入ったページを API の返却順で全件取得"""
        if self.config.query_mode == "database":
            query = self._query_database
            params: dict = {}
        else:
            data_source_id = self.resolve_data_source_id()
            log.step(f"データソースを解決: {data_source_id}")
            query = self.client.data_sources.query
            params = {"data_source_id": data_source_id}

        pages: list[dict] = []
        has_more = True
        start_cursor = None
        while has_more:
            kwargs = {**params, "filter": PUBLISHED_FILTER, "page_size": PAGE_SIZE}
            if start_cursor:
                kwargs["start_cursor"] = start_cursor

            response = query(**kwargs)
            pages.extend(response.get("results", []))

            start_cursor = response.get("next_cursor")
            has_more = bool(response.get("has_more", False) and start_cursor)

        return pages

    def _query_database(self, **body) -> dict:
        """DB を直接クエリ（SDK に専用メソッドが無いので汎用 request を使う）"""
        return self.client.request(
            path=f"databases/{self.database_id}/query",
            method="POST",
            body=body,
        )
