from __future__ import annotations

import io
import logging

import pytest

pytest.importorskip("numba")

from api.cli import build_parser, main, print_sketch_list  # noqa: E402
from api.sketch import (  # noqa: E402
    SketchSession,
    frame_tickables,
    prepare_sketch,
    run_sketch,
    setup_sketch,
)
from sketches.base import Sketch  # noqa: E402
from sketches.context import SketchContext  # noqa: E402
from sketches.registry import list_sketches  # noqa: E402


def test_prepare_sketch_uses_config_params() -> None:
    cfg = {"sketches": {"isolines": {"seed": 4, "levels": [100]}}}
    info, sk = prepare_sketch("isolines", cfg)
    assert info.name == "isolines"
    assert sk.param("seed") == 4
    assert sk.param("levels") == [100]
    assert sk.param("cols") == 90


def test_prepare_sketch_unknown_name_falls_back(caplog) -> None:  # noqa: ANN001
    caplog.set_level(logging.WARNING)
    cfg = {"gallery": {"default_sketch": "cross_grid"}}
    info, _ = prepare_sketch("no_such_sketch", cfg)
    assert info.name == "cross_grid"
    assert "unknown sketch 'no_such_sketch'" in caplog.text


class _Broken(Sketch):
    name = "broken"

    def setup(self, ctx) -> None:  # noqa: ANN001
        raise OSError("asset missing")


class _Lazy(Sketch):
    name = "lazy"

    def setup(self, ctx) -> None:  # noqa: ANN001
        pass


def test_setup_failure_is_logged_and_raised(fake_renderer, caplog) -> None:  # noqa: ANN001
    caplog.set_level(logging.ERROR, logger="api.sketch")
    with pytest.raises(OSError):
        setup_sketch(_Broken(), SketchContext(fake_renderer, 10, 10))
    assert "Failed to load sketch 'broken'" in caplog.text


def test_setup_without_scene_raises(fake_renderer) -> None:  # noqa: ANN001
    with pytest.raises(RuntimeError):
        setup_sketch(_Lazy(), SketchContext(fake_renderer, 10, 10))


def test_frame_tickables_order(fake_loader) -> None:  # noqa: ANN001
    sk = _Lazy()
    assert frame_tickables(fake_loader, sk) == [fake_loader, sk]
    sk.controls = object()
    assert frame_tickables(fake_loader, sk)[-1] is sk.controls


class TestSketchSession:
    @staticmethod
    def _start(renderer, loader, name: str, switched=None) -> SketchSession:  # noqa: ANN001
        session = SketchSession(
            renderer, loader, 800, 600, on_switch=switched.append if switched is not None else None
        )
        session.start(*prepare_sketch(name))
        return session

    @staticmethod
    def _break_setup(monkeypatch, name: str) -> None:  # noqa: ANN001
        def _fail(self, ctx) -> None:  # noqa: ANN001
            raise OSError("asset missing")

        monkeypatch.setattr(type(prepare_sketch(name)[1]), "setup", _fail)

    def test_switch_replaces_sketch_and_tears_down_previous(
        self, fake_renderer, fake_loader, monkeypatch  # noqa: ANN001
    ) -> None:
        switched: list = []
        session = self._start(fake_renderer, fake_loader, "cross_grid", switched)
        old = session.sketch
        torn: list[str] = []
        monkeypatch.setattr(old, "teardown", lambda: torn.append(old.name))

        assert session.switch_to("isolines")
        assert torn == ["cross_grid"]
        assert session.sketch is not old and session.sketch.name == "isolines"
        assert [i.name for i in switched] == ["cross_grid", "isolines"]

        ticks: list[float] = []
        monkeypatch.setattr(session.sketch, "tick", ticks.append)
        session.tick(0.5)
        assert ticks == [0.5]
        session.render()
        assert fake_renderer.rendered[-1] == (session.sketch.scene, session.sketch.camera)

    def test_failed_switch_keeps_running_sketch(
        self, fake_renderer, fake_loader, monkeypatch, caplog  # noqa: ANN001
    ) -> None:
        caplog.set_level(logging.WARNING, logger="api.sketch")
        session = self._start(fake_renderer, fake_loader, "cross_grid")
        old, old_ctx = session.sketch, session.ctx
        torn: list[str] = []
        monkeypatch.setattr(old, "teardown", lambda: torn.append(old.name))
        self._break_setup(monkeypatch, "isolines")

        assert not session.switch_to("isolines")
        assert session.sketch is old and session.ctx is old_ctx
        assert session.info.name == "cross_grid"
        assert torn == []
        assert "Failed to load sketch 'isolines'" in caplog.text
        session.render()
        assert fake_renderer.rendered[-1] == (old.scene, old.camera)

    def test_cycle_wraps_in_registration_order(self, fake_renderer, fake_loader) -> None:  # noqa: ANN001
        names = [i.name for i in list_sketches()]
        session = self._start(fake_renderer, fake_loader, names[-1])
        assert session.cycle(1)
        assert session.info.name == names[0]
        assert session.cycle(-1)
        assert session.info.name == names[-1]

    def test_cycle_moves_past_broken_sketch(
        self, fake_renderer, fake_loader, monkeypatch  # noqa: ANN001
    ) -> None:
        names = [i.name for i in list_sketches()]
        session = self._start(fake_renderer, fake_loader, names[0])
        self._break_setup(monkeypatch, names[1])
        assert not session.cycle(1)
        assert session.info.name == names[0]
        assert session.cycle(1)
        assert session.info.name == names[2]

    def test_resize_reaches_current_and_next_context(
        self, fake_renderer, fake_loader  # noqa: ANN001
    ) -> None:
        session = self._start(fake_renderer, fake_loader, "cross_grid")
        session.resize(1024, 512)
        assert (session.ctx.width, session.ctx.height) == (1024, 512)
        assert fake_renderer.sizes[-1] == (1024, 512)
        session.resize(0, 0)
        assert session.switch_to("isolines")
        assert (session.ctx.width, session.ctx.height) == (1024, 512)


def test_run_sketch_init_only_opens_no_window() -> None:
    assert run_sketch("cross_grid", init_only=True) is None


def test_cli_list_groups_sketches() -> None:
    buf = io.StringIO()
    print_sketch_list(buf)
    text = buf.getvalue()
    assert text.index("[3D]") < text.index("[2D]")
    assert "terrain_wave" in text
    assert "image_background" in text


def test_cli_list_returns_zero(capsys) -> None:  # noqa: ANN001
    assert main(["--list"]) == 0
    assert "cross_grid" in capsys.readouterr().out


def test_cli_init_only() -> None:
    assert main(["--sketch", "isolines", "--init-only"]) == 0


def test_cli_bad_size_returns_two() -> None:
    assert main(["--size", "0x10", "--init-only"]) == 2


def test_parser_defaults() -> None:
    args = build_parser().parse_args([])
    assert args.sketch is None and args.fps is None and not args.list
