"""ページ本文の Markdown 変換 — notion2md に委譲"""

from pathlib import Path

from notion2md.exporter.block import StringExporter

from .config import Config


class PageRenderer:
    """ページ ID から本文の Markdown 文字列を得る

    ブロックの解釈は notion2md に任せ、結果は不透明なテキストとして扱う。
    """

    def __init__(self, config: Config):
        self.token = config.notion_api_key
        # StringExporter はファイルを書かないが出力先の指定が必要
        self.output_path: Path = config.posts_dir

    def render(self, page_id: str) -> str:
        exporter = StringExporter(
            block_id=page_id,
            output_path=str(self.output_path),
            token=self.token,
        )
        return exporter.export()
