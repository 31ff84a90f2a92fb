"""
どこで: `engine.io` サブパッケージ（ウィンドウ入力）。
何を: pyglet のイベントを Scene が解釈する入力イベント列へ変換する InputCollector を提供。
なぜ: 入力デバイス依存を隔離し、Scene/ランタイムからは値型のイベントだけを扱うため。
"""

from .input import InputCollector

__all__ = ["InputCollector"]
