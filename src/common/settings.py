"""
どこで: `common.settings`
何を: ギャラリーの環境変数を型付きで一元管理し、起動時に読み込む。
なぜ: `os.getenv` の散在を避け、既定値/型の一貫性とテスト容易性を高めるため。
"""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_bool, env_float, env_int


@dataclass
class _Settings:
    # Noise
    USE_NUMBA: bool = True
    NOISE_SEED: int = 0

    # Renderer
    RENDER_DEBUG: bool = False
    LINE_THICKNESS: float = 0.0015

    # Image loader
    IMAGE_LOADER_TIMEOUT: float = 10.0


_settings = _Settings()


def reload_from_env() -> None:
    """環境変数から設定を再読込。

    - bool は `env_bool`、int は `env_int`、float は `env_float` を使用。
    - 負値は下限丸めを適用。
    """
    _settings.USE_NUMBA = env_bool("NG_USE_NUMBA", True)
    _settings.NOISE_SEED = env_int("NG_NOISE_SEED", 0, min_value=0) or 0

    _settings.RENDER_DEBUG = env_bool("NG_RENDER_DEBUG", False)
    _settings.LINE_THICKNESS = env_float("NG_LINE_THICKNESS", 0.0015, min_value=0.0)

    _settings.IMAGE_LOADER_TIMEOUT = env_float("NG_IMAGE_LOADER_TIMEOUT", 10.0, min_value=0.0)


def get() -> _Settings:
    """現在の設定スナップショットを返す。"""
    return _settings


# 初期ロード
reload_from_env()


__all__ = ["get", "reload_from_env", "_Settings"]
