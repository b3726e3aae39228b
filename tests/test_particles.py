import random

from arcade_duel.particles import ParticleSystem


class TestParticleSystem:

    def test_spawn_count_and_ranges(self):
        ps = ParticleSystem(random.Random(3))
        ps.spawn(100, 200, (255, 255, 255), count=8)
        assert len(ps) == 8
        for p in ps.particles:
            assert -5 <= p.vx < 5
            assert -5 <= p.vy < 5
            assert 20 <= p.life < 30
            assert 2 <= p.size < 6
            assert (p.x, p.y) == (100, 200)

    def test_update_moves_and_ages(self):
        ps = ParticleSystem(random.Random(3))
        ps.spawn(0, 0, (255, 255, 255), count=1)
        p = ps.particles[0]
        vx, vy, life = p.vx, p.vy, p.life
        ps.update()
        assert p.x == vx and p.y == vy
        assert p.life == life - 1

    def test_expired_particles_are_removed(self):
        ps = ParticleSystem(random.Random(3))
        ps.spawn(0, 0, (255, 255, 255), count=5)
        for _ in range(30):
            ps.update()
        assert len(ps) == 0

    def test_snapshot_is_a_copy(self):
        ps = ParticleSystem(random.Random(3))
        ps.spawn(0, 0, (255, 255, 255), count=2)
        snap = ps.snapshot()
        snap[0].x = 500
        assert ps.particles[0].x == 0

    def test_clear(self):
        ps = ParticleSystem(random.Random(3))
        ps.spawn(0, 0, (255, 255, 255), count=2)
        ps.clear()
        assert len(ps) == 0
