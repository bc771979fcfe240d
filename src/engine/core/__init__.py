"""
どこで: `engine.core` サブパッケージ。
何を: シーン状態・フレーム駆動（Tickable/FrameClock/FrameLoop）・表示倍率計算・描画ウィンドウを提供。
なぜ: 計算と表示の基盤を構成し、上位層（Runtime/Render/UI/API）から再利用可能にするため。
"""
