"""Notion → Chirpy 同期ツール"""

__version__ = "0.1.0"
