"""
どこで: `engine.io` サブパッケージ（ポインタ入力）。
何を: クリック入力を SceneState の時間方向/速度の変更へ写像する。
なぜ: 入力デバイス依存を隔離し、ランタイム/ウィンドウから統一 API で参照できるようにするため。
"""
