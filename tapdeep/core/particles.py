"""Tap burst particles: spawn, advance, and cull.

A burst layers two motion profiles from one trigger: slow dust that drifts
down under a gravity bias and fast sparks that fly out in every direction.
Particles never move on their own. Their on-screen state is a function of
the particle's parameters and the frame timestamp, so ``advance`` can be
called with any ``now`` and gives the same answer.

Rendered offsets are relative to the centre of the tap control, in a y-down
screen convention (positive ``dy`` is downward).
"""

from __future__ import annotations

import itertools
import logging
import math
import random
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

DUST = "dust"
SPARK = "spark"

GRAVITY_BIAS = 0.35
MAX_OPACITY = 0.9
MIN_RADIUS = 0.5
MIN_SCALE = 0.5


@dataclass(frozen=True)
class Particle:
    """Parameters of one particle, fixed at spawn time.

    Attributes:
        id: Sequential id, unique within one simulator.
        birth_time: Clock reading (seconds) when the burst was spawned.
        lifetime: Seconds the particle stays alive.
        angle: Direction of travel in radians.
        speed: Radial speed in pixels per second.
        start_radius: Radius in pixels at birth; shrinks to MIN_RADIUS.
        kind: DUST or SPARK.
    """

    id: int
    birth_time: float
    lifetime: float
    angle: float
    speed: float
    start_radius: float
    kind: str


@dataclass(frozen=True)
class RenderedParticle:
    """Draw state of a live particle for one frame."""

    id: int
    kind: str
    dx: float
    dy: float
    radius: float
    opacity: float


@dataclass(frozen=True)
class BurstProfile:
    kind: str
    count: int
    lifetime: Tuple[float, float]
    angle: Tuple[float, float]
    speed: Tuple[float, float]
    start_radius: Tuple[float, float]


DUST_PROFILE = BurstProfile(
    kind=DUST,
    count=16,
    lifetime=(0.6, 1.0),
    # sideways and downward, not a full circle
    angle=(0.9 * math.pi, 2.1 * math.pi),
    speed=(40.0, 110.0),
    start_radius=(3.0, 8.0),
)

SPARK_PROFILE = BurstProfile(
    kind=SPARK,
    count=10,
    lifetime=(0.25, 0.45),
    angle=(0.0, 2.0 * math.pi),
    speed=(120.0, 220.0),
    start_radius=(1.5, 3.0),
)

BURST_PROFILES: Tuple[BurstProfile, ...] = (DUST_PROFILE, SPARK_PROFILE)


def render(particle: Particle, now: float) -> RenderedParticle:
    """Compute where and how a particle is drawn at ``now``."""
    age = max(0.0, now - particle.birth_time)
    t = max(0.0, min(age / particle.lifetime, 1.0))
    distance = particle.speed * age
    dx = math.cos(particle.angle) * distance
    dy = math.sin(particle.angle) * distance
    if particle.kind != SPARK:
        dy += distance * GRAVITY_BIAS
    return RenderedParticle(
        id=particle.id,
        kind=particle.kind,
        dx=dx,
        dy=dy,
        radius=max(MIN_RADIUS, particle.start_radius * (1.0 - t)),
        opacity=(1.0 - t) * MAX_OPACITY,
    )


def is_expired(particle: Particle, now: float) -> bool:
    return now - particle.birth_time > particle.lifetime


def advance(
    now: float, live: Sequence[Particle]
) -> Tuple[List[Particle], List[RenderedParticle]]:
    """Drop expired particles and render the rest, all against one ``now``."""
    survivors = [p for p in live if not is_expired(p, now)]
    return survivors, [render(p, now) for p in survivors]


class ParticleSimulator:
    """Live particle set fed by tap bursts and drained frame by frame."""

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], float]] = None,
        profiles: Sequence[BurstProfile] = BURST_PROFILES,
    ) -> None:
        self._rng = rng if rng is not None else random.Random()
        self._clock = clock if clock is not None else time.monotonic
        self._profiles = tuple(profiles)
        self._ids = itertools.count(1)
        self._live: List[Particle] = []

    @property
    def live(self) -> List[Particle]:
        """Snapshot of the live particle set, oldest first."""
        return list(self._live)

    def __len__(self) -> int:
        return len(self._live)

    def spawn_burst(self, scale_factor: float = 1.0, now: Optional[float] = None) -> List[Particle]:
        """Append one burst (every profile) sharing a single birth time."""
        scale = max(MIN_SCALE, scale_factor)
        birth = self._clock() if now is None else now
        burst: List[Particle] = []
        for profile in self._profiles:
            for _ in range(profile.count):
                burst.append(self._spawn_one(profile, scale, birth))
        self._live.extend(burst)
        logger.debug("Spawned %d particles at scale %.2f", len(burst), scale)
        return burst

    def advance_and_cull(self, now: Optional[float] = None) -> List[RenderedParticle]:
        """Cull expired particles and return render state for the survivors."""
        frame_time = self._clock() if now is None else now
        self._live, rendered = advance(frame_time, self._live)
        return rendered

    def clear(self) -> None:
        self._live = []

    def _spawn_one(self, profile: BurstProfile, scale: float, birth: float) -> Particle:
        uniform = self._rng.uniform
        return Particle(
            id=next(self._ids),
            birth_time=birth,
            lifetime=uniform(*profile.lifetime),
            angle=uniform(*profile.angle),
            speed=uniform(*profile.speed) * scale,
            start_radius=uniform(*profile.start_radius) * scale,
            kind=profile.kind,
        )
