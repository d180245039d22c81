"""
どこで: `engine.io` サブパッケージ。
何を: 外部リソース（画像ファイル）の非同期読み込み。
なぜ: ファイル I/O をフレームループから切り離し、結果だけをメインスレッドへ届けるため。
"""
