"""
どこで: `engine.render` サブパッケージ。
何を: 2D ラスタ面（Surface/RasterSurface）と、サンプル列を点描/曲線で描く WaveRenderer を提供。
なぜ: サンプリング（core）と描画の責務を分離し、ウィンドウ無しでも画素出力を検証できるようにするため。
"""
