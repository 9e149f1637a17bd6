"""アプリケーション固有の例外"""


class ConfigError(RuntimeError):
    """設定不備（環境変数の欠落、データソースが解決できない DB など）"""
