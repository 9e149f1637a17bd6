"""Chirpy 用の Markdown ファイル書き出し"""

from pathlib import Path

from .models import Post
from . import logger as log

FILE_DATE_FORMAT = "%Y-%m-%d"
FRONT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"


def post_filename(post: Post) -> str:
    """Chirpy のファイル名規則: YYYY-MM-DD-<slug>.md"""
    return f"{post.date.strftime(FILE_DATE_FORMAT)}-{post.slug}.md"


def escape_title(title: str) -> str:
    return title.replace('"', '\\"')


def build_front_matter(post: Post, math: bool = False) -> str:
    """Front matter を組み立てる（行の順番は Chirpy に合わせて固定）"""
    tags = ", ".join(f'"{tag}"' for tag in post.tags)
    lines = [
        "---",
        f'title: "{escape_title(post.title)}"',
        f"date: {post.date.strftime(FRONT_DATE_FORMAT)}",
        f"categories: [{post.category}]",
        f"tags: [{tags}]",
    ]
    if math:
        lines.append("math: true")
    lines += ["---", ""]
    return "\n".join(lines)


def render_post(post: Post, math: bool = False) -> str:
    return build_front_matter(post, math=math) + post.body


def write_post(post: Post, posts_dir: Path, math: bool = False) -> Path:
    """Post をファイルに書き出す（同名ファイルは上書き）"""
    file_name = post_filename(post)
    file_path = posts_dir / file_name
    file_path.write_text(render_post(post, math=math), encoding="utf-8")
    log.success(f"書き出し: {file_name}")
    return file_path
