"""Time-driven interpolation: easing curves, tweens, particles and spinners."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, TypeVar

RGB = tuple[int, int, int]
T = TypeVar("T", float, int, RGB)

TRANSITION_DURATION = 0.3
HIGHLIGHT_DURATION = 0.15
PULSE_DURATION = 0.2
ROTATION_SPEED = 360.0  # degrees per second

CONFETTI_COUNT = 50
CELEBRATION_DURATION = 3.0
GRAVITY = 9.8


class Easing(StrEnum):
    LINEAR = "linear"
    EASE_IN = "ease_in"
    EASE_OUT = "ease_out"
    EASE_IN_OUT = "ease_in_out"
    BOUNCE = "bounce"
    ELASTIC = "elastic"

    def apply(self, t: float) -> float:
        """Map normalized progress to eased progress; ``f(0) == 0`` and ``f(1) == 1``."""
        if t <= 0.0:
            return 0.0
        if t >= 1.0:
            return 1.0
        match self:
            case Easing.LINEAR:
                return t
            case Easing.EASE_IN:
                return t * t
            case Easing.EASE_OUT:
                return 1.0 - (1.0 - t) * (1.0 - t)
            case Easing.EASE_IN_OUT:
                if t < 0.5:
                    return 2.0 * t * t
                return 1.0 - 2.0 * (1.0 - t) * (1.0 - t)
            case Easing.BOUNCE:
                return _bounce(t)
            case Easing.ELASTIC:
                period = 0.3
                shift = period / 4.0
                return -(2.0 ** (10.0 * (t - 1.0))) * math.sin(
                    (t - 1.0 - shift) * (2.0 * math.pi) / period,
                )
        msg = f"unknown easing {self!r}"
        raise ValueError(msg)


def _bounce(t: float) -> float:
    if t < 1.0 / 2.75:
        return 7.5625 * t * t
    if t < 2.0 / 2.75:
        t -= 1.5 / 2.75
        return 7.5625 * t * t + 0.75
    if t < 2.5 / 2.75:
        t -= 2.25 / 2.75
        return 7.5625 * t * t + 0.9375
    t -= 2.625 / 2.75
    return 7.5625 * t * t + 0.984375


def interpolate(start: T, end: T, t: float) -> T:
    """Blend *start* toward *end*; ints and RGB channels are truncated."""
    if isinstance(start, tuple):
        return tuple(  # type: ignore[return-value]
            int(a + (b - a) * t) for a, b in zip(start, end, strict=True)
        )
    if isinstance(start, int):
        return int(start + (end - start) * t)  # type: ignore[return-value]
    return start + (end - start) * t  # type: ignore[return-value]


class AnimatedValue(Generic[T]):
    """A value tweened from its current position to a target.

    Re-targeting mid-flight starts from the current interpolated value, so
    there is never a visual jump. Once the duration has elapsed the value
    equals the target exactly.
    """

    def __init__(self, initial: T) -> None:
        self._start: T = initial
        self._target: T = initial
        self._current: T = initial
        self.duration = TRANSITION_DURATION
        self.elapsed = 0.0
        self.easing = Easing.EASE_IN_OUT
        self._animating = False

    @property
    def value(self) -> T:
        return self._current

    @property
    def target(self) -> T:
        return self._target

    @property
    def is_animating(self) -> bool:
        return self._animating

    def animate_to(self, target: T, duration: float, easing: Easing = Easing.EASE_IN_OUT) -> None:
        self._start = self._current
        self._target = target
        self.duration = duration
        self.easing = easing
        self.elapsed = 0.0
        self._animating = True
        if duration <= 0:
            self._settle()

    def set_immediate(self, value: T) -> None:
        self._start = self._target = self._current = value
        self.elapsed = 0.0
        self._animating = False

    def update(self, dt: float) -> None:
        if not self._animating:
            return
        self.elapsed += dt
        if self.elapsed >= self.duration:
            self._settle()
            return
        progress = self.easing.apply(self.elapsed / self.duration)
        self._current = interpolate(self._start, self._target, progress)

    def _settle(self) -> None:
        self._current = self._target
        self._animating = False


@dataclass
class Particle:
    x: float
    y: float
    velocity_x: float
    velocity_y: float
    color: str
    char: str
    life: float
    max_life: float

    def update(self, dt: float) -> None:
        self.x += self.velocity_x * dt
        self.y += self.velocity_y * dt
        self.velocity_y += GRAVITY * dt
        self.life -= dt

    @property
    def alive(self) -> bool:
        return self.life > 0.0

    @property
    def alpha(self) -> float:
        return min(max(self.life / self.max_life, 0.0), 1.0)


CONFETTI_COLORS = ("red", "green", "blue", "yellow", "magenta")
CONFETTI_CHARS = ("*", "+", "•", "◆")


def confetti(width: float, rng: random.Random) -> Particle:
    return Particle(
        x=rng.uniform(0.0, width),
        y=rng.uniform(-10.0, 0.0),
        velocity_x=rng.uniform(-2.0, 2.0),
        velocity_y=rng.uniform(1.0, 3.0),
        color=rng.choice(CONFETTI_COLORS),
        char=rng.choice(CONFETTI_CHARS),
        life=CELEBRATION_DURATION,
        max_life=CELEBRATION_DURATION,
    )


class CelebrationAnimation:
    """A one-shot confetti burst.

    It reports itself finished once its own duration has elapsed; removing
    it is up to the owner.
    """

    def __init__(
        self,
        width: float = 80.0,
        *,
        count: int = CONFETTI_COUNT,
        duration: float = CELEBRATION_DURATION,
        rng: random.Random | None = None,
    ) -> None:
        rng = rng or random.Random()
        self.particles = [confetti(width, rng) for _ in range(count)]
        self.duration = duration
        self.elapsed = 0.0

    def update(self, dt: float) -> None:
        self.elapsed += dt
        for particle in self.particles:
            particle.update(dt)

    @property
    def finished(self) -> bool:
        return self.elapsed >= self.duration

    def visible(self) -> list[Particle]:
        return [p for p in self.particles if p.alive]


@dataclass(frozen=True)
class Spinner:
    """A looping sequence of glyphs, stepped by elapsed time."""

    frames: tuple[str, ...]
    frame_duration: float

    def frame_at(self, elapsed: float) -> str:
        index = int(elapsed / self.frame_duration) % len(self.frames)
        return self.frames[index]

    @classmethod
    def dots(cls) -> Spinner:
        return cls(("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏"), 0.08)

    @classmethod
    def pulsing(cls) -> Spinner:
        return cls(("◐", "◓", "◑", "◒"), 0.15)


@dataclass
class AnimationClock:
    """Process-wide animation accumulators advanced once per frame.

    ``speed`` scales every delta, so a speed of 2.0 runs animations twice
    as fast.
    """

    speed: float = 1.0
    transition: AnimatedValue[float] = field(default_factory=lambda: AnimatedValue(0.0))
    menu_highlight: AnimatedValue[float] = field(default_factory=lambda: AnimatedValue(0.0))
    background_pulse: AnimatedValue[float] = field(default_factory=lambda: AnimatedValue(0.0))
    loading_rotation: float = 0.0
    particle_time: float = 0.0
    elapsed: float = 0.0

    def update(self, dt: float) -> float:
        """Advance by *dt* real seconds; returns the scaled delta."""
        scaled = dt * self.speed
        self.transition.update(scaled)
        self.menu_highlight.update(scaled)
        self.background_pulse.update(scaled)
        # Pulse out and back.
        if not self.background_pulse.is_animating and self.background_pulse.value > 0.0:
            self.background_pulse.animate_to(0.0, PULSE_DURATION, Easing.EASE_IN_OUT)
        self.loading_rotation = (self.loading_rotation + scaled * ROTATION_SPEED) % 360.0
        self.particle_time += scaled
        self.elapsed += scaled
        return scaled

    def trigger_transition(self) -> None:
        self.transition.set_immediate(0.0)
        self.transition.animate_to(1.0, TRANSITION_DURATION, Easing.EASE_IN_OUT)

    def animate_menu_highlight(self, index: int) -> None:
        """Glide the menu highlight band toward row *index*."""
        self.menu_highlight.animate_to(float(index), HIGHLIGHT_DURATION, Easing.EASE_OUT)

    def snap_menu_highlight(self, index: int) -> None:
        self.menu_highlight.set_immediate(float(index))

    def pulse_background(self) -> None:
        self.background_pulse.animate_to(1.0, PULSE_DURATION, Easing.EASE_IN_OUT)
