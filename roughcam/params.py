"""Machining parameters for core roughing: start, linking, cutting and steering."""

from __future__ import annotations

from dataclasses import dataclass, field

from roughcam.geometry import P2

__all__ = ["MachineParams"]


@dataclass(frozen=True)
class MachineParams:
    """Settings that drive toolpath generation, with the usual defaults.

    Use :func:`dataclasses.replace` to derive a variant with some values changed.
    """

    # start point
    use_given_start_point: bool = False
    start_point: P2 = field(default_factory=lambda: P2(0.0, 0.0))
    start_direction: P2 = field(default_factory=lambda: P2(1.0, 0.0))
    minz: float = -10000000.0

    # linking
    leadoffdz: float = 0.1
    leadofflen: float = 1.1
    leadoffrad: float = 2.0
    retractzheight: float = 15.0 + 5.0
    leadoffsamplestep: float = 0.6

    # cutting
    toolcornerrad: float = 3.0
    toolflatrad: float = 0.0
    samplestep: float = 0.4
    stepdown: float = 5.0
    clearcuspheight: float = 1.67

    # weave resolution
    triangleweaveres: float = 0.51
    flatradweaveres: float = 0.71

    # steering: step-forward of the tool and changes of direction
    dchangright: float = 0.17
    dchangrightoncontour: float = 0.37
    dchangleft: float = -0.41
    dchangefreespace: float = -0.6
    sidecutdisplch: float = 0.0

    # post processing
    fcut: int = 1000
    fretract: int = 5000
    thintol: float = 0.0001

    def __post_init__(self) -> None:
        # these values are divided by or stepped with, so must be positive
        for name in (
            "leadofflen",
            "leadoffrad",
            "leadoffsamplestep",
            "samplestep",
            "stepdown",
            "triangleweaveres",
            "flatradweaveres",
        ):
            if getattr(self, name) <= 0.0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.toolcornerrad < 0.0 or self.toolflatrad < 0.0:
            raise ValueError("tool radii must not be negative")
        if self.start_direction.length_sq() == 0.0:
            raise ValueError("start direction must not be a zero vector")