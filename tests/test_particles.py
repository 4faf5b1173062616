"""Tests for tapdeep.core.particles – burst spawning and frame advance."""

from __future__ import annotations

import math
import random

import pytest

from tapdeep.core.particles import (
    DUST,
    DUST_PROFILE,
    GRAVITY_BIAS,
    MAX_OPACITY,
    MIN_RADIUS,
    SPARK,
    SPARK_PROFILE,
    Particle,
    ParticleSimulator,
    advance,
    is_expired,
    render,
)


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def sim(clock: FakeClock) -> ParticleSimulator:
    return ParticleSimulator(rng=random.Random(1234), clock=clock)


def _particle(kind: str = DUST, **overrides) -> Particle:
    values = dict(id=1, birth_time=0.0, lifetime=1.0, angle=0.0, speed=100.0, start_radius=4.0, kind=kind)
    values.update(overrides)
    return Particle(**values)


# ---------------------------------------------------------------------------
# Profiles
# ---------------------------------------------------------------------------

class TestProfiles:
    def test_dust_constants(self):
        assert DUST_PROFILE.count == 16
        assert DUST_PROFILE.lifetime == (0.6, 1.0)
        assert DUST_PROFILE.angle == pytest.approx((0.9 * math.pi, 2.1 * math.pi))
        assert DUST_PROFILE.speed == (40.0, 110.0)
        assert DUST_PROFILE.start_radius == (3.0, 8.0)

    def test_spark_constants(self):
        assert SPARK_PROFILE.count == 10
        assert SPARK_PROFILE.lifetime == (0.25, 0.45)
        assert SPARK_PROFILE.angle == pytest.approx((0.0, 2.0 * math.pi))
        assert SPARK_PROFILE.speed == (120.0, 220.0)
        assert SPARK_PROFILE.start_radius == (1.5, 3.0)


# ---------------------------------------------------------------------------
# spawn_burst
# ---------------------------------------------------------------------------

class TestSpawnBurst:
    def test_counts_per_kind(self, sim: ParticleSimulator):
        burst = sim.spawn_burst(1.0)
        assert len(burst) == 26
        assert sum(1 for p in burst if p.kind == DUST) == 16
        assert sum(1 for p in burst if p.kind == SPARK) == 10
        assert len(sim) == 26

    def test_shared_birth_time_from_clock(self, sim: ParticleSimulator, clock: FakeClock):
        burst = sim.spawn_burst(1.0)
        assert {p.birth_time for p in burst} == {clock.now}

    def test_explicit_now(self, sim: ParticleSimulator):
        burst = sim.spawn_burst(1.0, now=5.0)
        assert all(p.birth_time == 5.0 for p in burst)

    def test_bursts_append(self, sim: ParticleSimulator):
        sim.spawn_burst(1.0)
        sim.spawn_burst(1.0)
        assert len(sim.live) == 52

    def test_unique_ids(self, sim: ParticleSimulator):
        sim.spawn_burst(1.0)
        sim.spawn_burst(1.0)
        ids = [p.id for p in sim.live]
        assert len(set(ids)) == len(ids)

    def test_parameters_within_ranges(self, sim: ParticleSimulator):
        for _ in range(20):
            sim.spawn_burst(1.0)
        for p in sim.live:
            profile = DUST_PROFILE if p.kind == DUST else SPARK_PROFILE
            assert profile.lifetime[0] <= p.lifetime <= profile.lifetime[1]
            assert profile.angle[0] <= p.angle <= profile.angle[1]
            assert profile.speed[0] <= p.speed <= profile.speed[1]
            assert profile.start_radius[0] <= p.start_radius <= profile.start_radius[1]

    def test_scale_multiplies_speed_and_radius(self, sim: ParticleSimulator):
        for p in sim.spawn_burst(2.0):
            profile = DUST_PROFILE if p.kind == DUST else SPARK_PROFILE
            assert profile.speed[0] * 2 <= p.speed <= profile.speed[1] * 2
            assert profile.start_radius[0] * 2 <= p.start_radius <= profile.start_radius[1] * 2
            assert profile.lifetime[0] <= p.lifetime <= profile.lifetime[1]

    def test_scale_floored_at_half(self, sim: ParticleSimulator):
        for p in sim.spawn_burst(0.1):
            profile = DUST_PROFILE if p.kind == DUST else SPARK_PROFILE
            assert p.speed >= profile.speed[0] * 0.5
            assert p.start_radius >= profile.start_radius[0] * 0.5

    def test_same_seed_same_burst(self, clock: FakeClock):
        a = ParticleSimulator(rng=random.Random(7), clock=clock).spawn_burst(1.3)
        b = ParticleSimulator(rng=random.Random(7), clock=clock).spawn_burst(1.3)
        assert a == b

    def test_different_seed_differs(self, clock: FakeClock):
        a = ParticleSimulator(rng=random.Random(7), clock=clock).spawn_burst(1.0)
        b = ParticleSimulator(rng=random.Random(8), clock=clock).spawn_burst(1.0)
        assert a != b


# ---------------------------------------------------------------------------
# render
# ---------------------------------------------------------------------------

class TestRender:
    def test_at_birth(self):
        r = render(_particle(), now=0.0)
        assert r.dx == 0.0 and r.dy == 0.0
        assert r.opacity == pytest.approx(MAX_OPACITY)
        assert r.radius == pytest.approx(4.0)

    def test_spark_moves_along_angle(self):
        r = render(_particle(SPARK, angle=math.pi / 2, speed=100.0), now=0.5)
        assert r.dx == pytest.approx(0.0, abs=1e-9)
        assert r.dy == pytest.approx(50.0)

    def test_dust_gets_gravity_bias(self):
        r = render(_particle(DUST, angle=0.0, speed=100.0), now=0.5)
        assert r.dx == pytest.approx(50.0)
        assert r.dy == pytest.approx(50.0 * GRAVITY_BIAS)

    def test_linear_fade_and_shrink(self):
        r = render(_particle(lifetime=1.0, start_radius=4.0), now=0.25)
        assert r.opacity == pytest.approx(0.75 * MAX_OPACITY)
        assert r.radius == pytest.approx(3.0)

    def test_radius_floor(self):
        r = render(_particle(lifetime=1.0, start_radius=1.0), now=0.99)
        assert r.radius == MIN_RADIUS

    def test_clock_before_birth_renders_at_origin(self):
        r = render(_particle(birth_time=10.0), now=9.0)
        assert (r.dx, r.dy) == (0.0, 0.0)
        assert r.opacity == pytest.approx(MAX_OPACITY)


# ---------------------------------------------------------------------------
# advance / advance_and_cull
# ---------------------------------------------------------------------------

class TestAdvance:
    def test_expiry_is_strict(self):
        p = _particle(lifetime=1.0)
        assert not is_expired(p, 1.0)
        assert is_expired(p, 1.0001)

    def test_pure_function_keeps_input(self):
        live = [_particle(id=1, lifetime=0.5), _particle(id=2, lifetime=2.0)]
        survivors, rendered = advance(1.0, live)
        assert [p.id for p in survivors] == [2]
        assert [r.id for r in rendered] == [2]
        assert len(live) == 2

    def test_culls_expired_only(self, sim: ParticleSimulator, clock: FakeClock):
        sim.spawn_burst(1.0)
        # every spark (<= 0.45 s) is gone, every dust (>= 0.6 s) remains
        rendered = sim.advance_and_cull(clock.now + 0.5)
        assert len(rendered) == 16
        assert {r.kind for r in rendered} == {DUST}
        assert len(sim) == 16

    def test_everything_gone_after_longest_lifetime(self, sim: ParticleSimulator, clock: FakeClock):
        sim.spawn_burst(1.0)
        assert sim.advance_and_cull(clock.now + 1.01) == []
        assert len(sim) == 0

    def test_survivors_visible(self, sim: ParticleSimulator, clock: FakeClock):
        for i in range(5):
            sim.spawn_burst(1.0, now=clock.now + i * 0.1)
        frame = clock.now + 0.55
        for r in sim.advance_and_cull(frame):
            assert 0.0 < r.opacity <= MAX_OPACITY
            assert r.radius >= MIN_RADIUS
        for p in sim.live:
            assert frame - p.birth_time <= p.lifetime

    def test_uses_clock_when_now_omitted(self, sim: ParticleSimulator, clock: FakeClock):
        sim.spawn_burst(1.0)
        clock.now += 2.0
        assert sim.advance_and_cull() == []

    def test_repeated_frames_same_now_are_stable(self, sim: ParticleSimulator, clock: FakeClock):
        sim.spawn_burst(1.0)
        first = sim.advance_and_cull(clock.now + 0.3)
        second = sim.advance_and_cull(clock.now + 0.3)
        assert first == second

    def test_clear(self, sim: ParticleSimulator):
        sim.spawn_burst(1.0)
        sim.clear()
        assert sim.live == []
