"""
どこで: `common.settings`
何を: プロジェクトの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を解消し、既定値/型の一貫性とテスト容易性を高めるため。

対応する環境変数:
- `PXS_USE_NUMBA`      : 0 で numpy バックエンドへ切替（既定 1）。
- `PXS_RENDER_THREADS` : 描画スレッド数（未設定なら CPU 数）。
- `PXS_FPS`            : 更新レート（未設定なら YAML/既定 60）。
- `PXS_LOG_LEVEL`      : ログレベル名（未設定なら INFO）。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_int, env_str


@dataclass
class _Settings:
    # Renderer
    USE_NUMBA: bool = True
    RENDER_THREADS: int | None = None

    # Runner
    FPS: int | None = None
    LOG_LEVEL: str = "INFO"


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int` を使用。
    - スレッド数/FPS は 1 未満を 1 に丸める。
    """
    _settings.USE_NUMBA = env_bool("PXS_USE_NUMBA", True)
    _settings.RENDER_THREADS = env_int("PXS_RENDER_THREADS", None, min_value=1)
    _settings.FPS = env_int("PXS_FPS", None, min_value=1)
    _settings.LOG_LEVEL = (env_str("PXS_LOG_LEVEL", "INFO") or "INFO").upper()


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
