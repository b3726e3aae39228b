import random
from dataclasses import dataclass


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: tuple[int, int, int]
    size: float


class ParticleSystem:
    """Hit sparks. Purely cosmetic; nothing in the simulation reads them."""

    def __init__(self, rng: random.Random | None = None):
        self.rng = rng or random.Random()
        self.particles: list[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def spawn(self, x: float, y: float, color: tuple[int, int, int], count: int = 5):
        r = self.rng
        for _ in range(count):
            self.particles.append(Particle(
                x=x,
                y=y,
                vx=(r.random() - 0.5) * 10,
                vy=(r.random() - 0.5) * 10,
                life=20 + r.random() * 10,
                color=color,
                size=r.random() * 4 + 2,
            ))

    def update(self):
        for p in self.particles:
            p.x += p.vx
            p.y += p.vy
            p.life -= 1
        self.particles = [p for p in self.particles if p.life > 0]

    def clear(self):
        self.particles.clear()

    def snapshot(self) -> list[Particle]:
        return [Particle(p.x, p.y, p.vx, p.vy, p.life, p.color, p.size) for p in self.particles]
