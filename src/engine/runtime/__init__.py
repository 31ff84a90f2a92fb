"""
どこで: `engine.runtime` サブパッケージ。
何を: 行帯ワーカプール（BandWorkerPool）と、入力→更新→描画を 1 tick にまとめる FrameDriver を提供。
なぜ: 単一書き手（更新）→描画→次 tick の順序を崩さずに、描画だけを並列化するため。
"""
