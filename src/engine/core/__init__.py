"""
どこで: `engine.core` サブパッケージ。
何を: 影テスト（geometry）・シーン状態（scene/config/events）・フレーム駆動（FrameClock/Tickable）・描画ウィンドウを提供。
なぜ: 計算と状態の基盤を最内層に置き、上位層（render/runtime/ui/api）から再利用するため。
"""
