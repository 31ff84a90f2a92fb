"""
内部ヘルパ群（API 非公開）。

どこで: `api.sketch_runner`
何を: `api.sketch` の補助（設定解決などの純粋関数）を分離し、`run` 本体を薄く保つための内部モジュール群。
"""

from __future__ import annotations

__all__: list[str] = []
