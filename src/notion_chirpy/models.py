"""データモデル定義"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Optional, Union


class PropertyKind(str, Enum):
    """Notion プロパティの型タグ（扱うものだけ）"""

    TITLE = "title"
    RICH_TEXT = "rich_text"
    DATE = "date"
    MULTI_SELECT = "multi_select"
    SELECT = "select"
    UNSUPPORTED = "unsupported"


PropertyData = Union[str, list[str], None]


@dataclass(frozen=True)
class PropertyValue:
    """型タグ付きのプロパティ値"""

    kind: PropertyKind
    value: PropertyData = None


@dataclass
class Post:
    """Notion ページから組み立てたブログ記事"""

    page_id: str
    title: str
    slug: str
    date: datetime
    tags: list[str] = field(default_factory=list)
    category: str = "Blog"
    body: str = ""


@dataclass
class SyncReport:
    """同期処理の実行結果"""

    written: list[Path] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def count(self) -> int:
        return len(self.written)

    @property
    def elapsed(self) -> float:
        """処理時間（秒）。未完了なら現在までの経過時間"""
        end = self.finished_at or datetime.now()
        return (end - self.started_at).total_seconds()
