"""
どこで: `util.paths`。
何を: スクリーンショット保存先と同梱アセット（画像）のパス解決。
なぜ: 実行ディレクトリに依存せず、プロジェクトルート基準でファイルを扱うため。
"""

from __future__ import annotations

from pathlib import Path

from .utils import _find_project_root


def project_root() -> Path:
    return _find_project_root(Path(__file__).parent)


def ensure_screenshots_dir() -> Path:
    """スクリーンショット出力先 `data/screenshot/` を作成して返す。

    - 既存の場合もそのまま Path を返す。
    - 並行呼び出しに対して `exist_ok=True` で安全。
    """
    out = project_root() / "data" / "screenshot"
    out.mkdir(parents=True, exist_ok=True)
    return out


def resolve_asset_path(path: str | Path) -> Path:
    """画像などのアセットパスを解決する。

    絶対パスはそのまま、相対パスはプロジェクトルート基準で解決する（存在確認はしない）。
    """
    p = Path(path)
    if p.is_absolute():
        return p
    return project_root() / p
