"""
どこで: `shapes` パッケージ。
何を: スケッチが使う線形状（同心円・十字・補助線・等値線）の生成関数群。
なぜ: 形状生成を描画やシーン構築から切り離し、numpy の配列演算だけで検証できるようにするため。
"""
