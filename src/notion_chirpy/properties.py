"""Notion ページプロパティの取り出しと Post への変換"""

import re
from datetime import datetime, tzinfo

from .models import Post, PropertyKind, PropertyValue
from . import logger as log

DEFAULT_CATEGORY = "Blog"

# 記事 DB のプロパティ名
TITLE_PROPERTY = "Title"
SLUG_PROPERTY = "Slug"
DATE_PROPERTY = "Date"
TAGS_PROPERTY = "Tags"
CATEGORY_PROPERTY = "Category"

_WHITESPACE = re.compile(r"\s+")


def _first_plain_text(runs: list[dict] | None) -> str:
    if not runs:
        return ""
    return runs[0].get("plain_text") or ""


def parse_property(prop: dict | None) -> PropertyValue:
    """Notion の生プロパティを型タグ付きの値に変換する

    想定外の形のデータは例外にせず None（または空文字）として扱う。
    """
    if not prop:
        return PropertyValue(PropertyKind.UNSUPPORTED)

    try:
        kind = PropertyKind(prop.get("type"))
    except ValueError:
        return PropertyValue(PropertyKind.UNSUPPORTED)

    if kind in (PropertyKind.TITLE, PropertyKind.RICH_TEXT):
        return PropertyValue(kind, _first_plain_text(prop.get(kind.value)))

    if kind == PropertyKind.DATE:
        date = prop.get("date") or {}
        return PropertyValue(kind, date.get("start"))

    if kind == PropertyKind.MULTI_SELECT:
        options = prop.get("multi_select") or []
        return PropertyValue(kind, [o.get("name", "") for o in options])

    if kind == PropertyKind.SELECT:
        option = prop.get("select") or {}
        return PropertyValue(kind, option.get("name"))

    return PropertyValue(PropertyKind.UNSUPPORTED)


def get_property(page: dict, name: str):
    """ページから指定プロパティの値を取り出す（無ければ None）"""
    prop = page.get("properties", {}).get(name)
    return parse_property(prop).value


def slugify(title: str) -> str:
    """タイトルを小文字化し、連続する空白をハイフン 1 つに置き換える"""
    return _WHITESPACE.sub("-", title.lower())


def now(tz: tzinfo | None = None) -> datetime:
    """タイムゾーン付きの現在時刻（tz 省略時はローカル）"""
    if tz is not None:
        return datetime.now(tz)
    return datetime.now().astimezone()


def parse_date(value: str | None, tz: tzinfo | None = None) -> datetime | None:
    """ISO 形式の日付・日時を tz（省略時はローカル）の aware datetime にする

    日付のみ・オフセットなしの値は tz の壁時計時刻として解釈する。
    """
    if not value:
        return None
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        log.warn(f"日付を解釈できません: {value!r}")
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=tz) if tz is not None else dt.astimezone()
    return dt.astimezone(tz)


def build_post(page: dict, tz: tzinfo | None = None, fallback_date: datetime | None = None) -> Post:
    """ページレコードから Post を組み立てる（本文は後で埋める）"""
    title = get_property(page, TITLE_PROPERTY) or ""
    slug = get_property(page, SLUG_PROPERTY) or slugify(title)
    date = parse_date(get_property(page, DATE_PROPERTY), tz)
    if date is None:
        date = fallback_date or now(tz)
    tags = get_property(page, TAGS_PROPERTY) or []
    category = get_property(page, CATEGORY_PROPERTY) or DEFAULT_CATEGORY

    return Post(
        page_id=page["id"],
        title=title,
        slug=slug,
        date=date,
        tags=list(tags),
        category=category,
    )
