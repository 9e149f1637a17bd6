"""CLI エントリポイント — Click ベース"""

import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from . import __version__
from .config import Config, load_config
from .errors import ConfigError
from .notion_client import PostSource, create_client
from .renderer import PageRenderer
from .sync import run_sync
from . import logger as log

console = Console(stderr=True)

# -h でもヘルプを表示できるようにする
CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(version=__version__)
def cli():
    """Notion → Chirpy 同期ツール

    Notion データベースで Published にチェックが入ったページを取得し、
    Front matter 付きの Markdown として Chirpy の _posts に書き出します。

    \b
    ■ 必要な環境変数（.env 可）:
      NOTION_API_KEY       Notion インテグレーションのキー
      NOTION_DATABASE_ID   記事データベースの ID

    \b
    ■ 任意の環境変数:
      POSTS_DIR            出力先（デフォルト: _posts）
      NOTION_QUERY_MODE    data_source（デフォルト）/ database
      POST_MATH            true で Front matter に math: true を追加
      POST_TIMEZONE        日付のタイムゾーン（例: Asia/Seoul）
      LOG_LEVEL            ログレベル（デフォルト: INFO）

    \b
    ■ 使い方:
      notion-chirpy check   設定と Notion への接続を確認
      notion-chirpy sync    公開ページをすべて書き出す
    """
    pass


@cli.command(context_settings=CONTEXT_SETTINGS)
@click.option(
    "--posts-dir", "-o",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Markdown の出力先ディレクトリ（POSTS_DIR より優先）",
)
@click.option(
    "--math/--no-math",
    default=None,
    help="Front matter に math: true を出力するか（POST_MATH より優先）",
)
@click.option(
    "--query-mode",
    type=click.Choice(["data_source", "database"]),
    default=None,
    help="data_source: DB のデータソースを解決してクエリ、database: DB を直接クエリ",
)
def sync(posts_dir: Path | None, math: bool | None, query_mode: str | None):
    """公開ページを Markdown に変換して書き出す。

    \b
    既存の同名ファイルは上書きされます。
    エラーが発生した時点で中断し、終了コード 1 で終了します。
    """
    config = _load_config_or_exit()

    if posts_dir is not None:
        config.posts_dir = posts_dir
    if math is not None:
        config.math = math
    if query_mode is not None:
        config.query_mode = query_mode

    log.setup_logger(config.log_level)

    client = create_client(config)
    source = PostSource(config, client)
    renderer = PageRenderer(config)

    try:
        run_sync(config, source, renderer)
    except ConfigError as e:
        log.error(f"設定エラー: {e}")
        sys.exit(1)
    except Exception:
        log.exception("同期に失敗しました")
        sys.exit(1)


@cli.command(context_settings=CONTEXT_SETTINGS)
def check():
    """設定と接続の状態をチェックする。

    \b
      - .env ファイルの読み込み
      - Notion DB への接続
      - データソースの解決（data_source モードのみ）
      - 出力先ディレクトリ
    """
    console.print(Panel("[bold]接続テスト[/bold]", style="blue"))

    results = []

    # 1. .env 読み込み
    try:
        config = load_config()
        results.append(("設定ファイル (.env)", True, "読み込み成功"))
    except ValidationError as e:
        results.append(("設定ファイル (.env)", False, str(e)))
        _show_check_results(results)
        sys.exit(1)

    log.setup_logger(config.log_level)

    # 2. Notion API
    source = PostSource(config, create_client(config))
    notion_ok = source.check_access()
    results.append(("Notion API", notion_ok, "DB 接続成功" if notion_ok else "接続失敗"))

    # 3. データソース
    if notion_ok and config.query_mode == "data_source":
        try:
            data_source_id = source.resolve_data_source_id()
            results.append(("データソース", True, data_source_id))
        except ConfigError as e:
            results.append(("データソース", False, str(e)))

    # 4. 出力先
    posts_dir = config.posts_dir
    results.append((
        "出力先",
        True,
        f"{posts_dir.resolve()}" + ("" if posts_dir.exists() else "（sync 時に作成）"),
    ))

    _show_check_results(results)
    if not all(ok for _, ok, _ in results):
        sys.exit(1)


def _load_config_or_exit() -> Config:
    try:
        return load_config()
    except ValidationError as e:
        console.print(f"[red]設定エラー:[/red] {e}")
        console.print("[dim]→ .env に NOTION_API_KEY と NOTION_DATABASE_ID を設定してください[/dim]")
        sys.exit(1)


def _show_check_results(results: list[tuple[str, bool, str]]):
    """チェック結果をテーブルで表示"""
    table = Table(title="接続テスト結果", border_style="blue")
    table.add_column("項目", style="bold")
    table.add_column("状態")
    table.add_column("詳細")

    for name, ok, detail in results:
        status = "[green]✓[/green]" if ok else "[red]✗[/red]"
        table.add_row(name, status, detail)

    console.print()
    console.print(table)
    console.print()


def main():
    cli()


if __name__ == "__main__":
    main()
