"""
どこで: `engine.core` サブパッケージ。
何を: Geometry/GridMesh・シーングラフ・カメラ/操作・フレーム駆動・描画ウィンドウを提供。
なぜ: 計算と描画の基盤を構成し、上位層（スケッチ/レンダラ）から再利用可能にするため。
"""
