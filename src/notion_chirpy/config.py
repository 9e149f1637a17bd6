"""設定管理 — .env ファイルの読み込みとバリデーション"""

import os
from datetime import tzinfo
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, field_validator

QueryMode = Literal["data_source", "database"]


class Config(BaseModel):
    """アプリケーション設定"""

    notion_api_key: str
    notion_database_id: str
    posts_dir: Path = Path("_posts")
    query_mode: QueryMode = "data_source"
    math: bool = False
    timezone: str | None = None
    log_level: str = "INFO"

    @field_validator("notion_api_key")
    @classmethod
    def validate_notion_key(cls, v: str) -> str:
        if not v or v.startswith("ntn_your"):
            raise ValueError(
                "Notion API キーが設定されていません。\n"
                "  → .env ファイルに NOTION_API_KEY を設定してください\n"
                "  → 取得: https://www.notion.so/profile/integrations"
            )
        return v

    @field_validator("notion_database_id")
    @classmethod
    def validate_database_id(cls, v: str) -> str:
        if not v or v.startswith("your_"):
            raise ValueError(
                "Notion Database ID が設定されていません。\n"
                "  → .env ファイルに NOTION_DATABASE_ID を設定してください"
            )
        # ハイフンを除去（UUID形式の正規化）
        return v.replace("-", "")

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str | None) -> str | None:
        if not v:
            return None
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"不明なタイムゾーンです: {v}（例: Asia/Seoul）")
        return v

    @property
    def notion_database_id_formatted(self) -> str:
        """Notion API 用にハイフン付き UUID 形式に変換"""
        d = self.notion_database_id
        if len(d) == 32:
            return f"{d[:8]}-{d[8:12]}-{d[12:16]}-{d[16:20]}-{d[20:]}"
        return d

    @property
    def tz(self) -> tzinfo | None:
        """投稿日時に使うタイムゾーン。None ならシステムのローカル時刻"""
        return ZoneInfo(self.timezone) if self.timezone else None


def load_config(env_path: str | None = None) -> Config:
    """設定を .env から読み込んで返す

    相対パスの POSTS_DIR は .env のあるディレクトリ（ブログのルート）を基準にする。
    .env が見つからない場合はカレントディレクトリが基準。
    """
    env_file = env_path or find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)
    project_root = Path(env_file).resolve().parent if env_file else Path.cwd()

    return Config(
        notion_api_key=os.getenv("NOTION_API_KEY", ""),
        notion_database_id=os.getenv("NOTION_DATABASE_ID", ""),
        posts_dir=project_root / os.getenv("POSTS_DIR", "_posts"),
        query_mode=os.getenv("NOTION_QUERY_MODE", "data_source"),
        math=os.getenv("POST_MATH", "false").lower() == "true",
        timezone=os.getenv("POST_TIMEZONE") or None,
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
