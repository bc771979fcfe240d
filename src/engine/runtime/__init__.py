"""
どこで: `engine.runtime` サブパッケージ。
何を: フレームコールバックを時間更新・再サンプリング・描画へ変換するドライバ（snapshot/continuous）。
なぜ: 表示モードごとの時間の進め方を、サンプリング/描画の共通処理から分離するため。
"""
