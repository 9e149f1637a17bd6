"""同期パイプライン — 公開ページの取得から Markdown 書き出しまで"""

from datetime import datetime

from .config import Config
from .models import SyncReport
from .notion_client import PostSource
from .properties import build_post
from .renderer import PageRenderer
from .writer import write_post
from . import logger as log


def run_sync(config: Config, source: PostSource, renderer: PageRenderer) -> SyncReport:
    """公開ページをすべて取得して posts_dir に書き出す

    ページは API の返却順に 1 件ずつ処理する。途中で例外が起きた場合は
    そのまま送出し、書き出し済みのファイルは残す。
    """
    report = SyncReport()
    config.posts_dir.mkdir(parents=True, exist_ok=True)

    log.step("Notion から公開ページを取得中...")
    pages = source.fetch_published_pages()
    log.step(f"公開ページ {len(pages)} 件")

    for page in pages:
        post = build_post(page, tz=config.tz)
        post.body = renderer.render(post.page_id)
        report.written.append(write_post(post, config.posts_dir, math=config.math))

    report.finished_at = datetime.now()
    log.success(
        f"同期完了: {report.count} 件を {config.posts_dir} に書き出しました"
        f"（{report.elapsed:.1f} 秒）"
    )
    return report
