"""
どこで: `common` パッケージ。
何を: 環境変数ヘルパ・型付き設定・ロギング初期化などの軽量基盤。
なぜ: engine/api の双方から再利用する共通部分を最下層に置き、依存の向きを単純化するため。
"""

from .env import env_bool, env_float, env_int, env_str

__all__ = [
    "env_bool",
    "env_float",
    "env_int",
    "env_str",
]
