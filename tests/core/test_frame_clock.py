from __future__ import annotations

from engine.core.frame_clock import FrameClock


class _Rec:
    def __init__(self, name: str, log: list[str]) -> None:
        self.name = name
        self.log = log

    def tick(self, dt: float) -> None:
        self.log.append(self.name)


def test_ticks_in_registration_order() -> None:
    log: list[str] = []
    clock = FrameClock([_Rec("loader", log), _Rec("sketch", log), _Rec("controls", log)])
    clock.tick(1 / 60)
    clock.tick()
    assert log == ["loader", "sketch", "controls"] * 2
    assert clock.frame_count == 2


def test_replacing_tickables_keeps_frame_count() -> None:
    log: list[str] = []
    clock = FrameClock([_Rec("old", log)])
    clock.tick(0.1)
    clock.set_tickables([_Rec("loader", log), _Rec("new", log)])
    clock.tick(0.1)
    assert log == ["old", "loader", "new"]
    assert clock.frame_count == 2
