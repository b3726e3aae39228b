from dataclasses import dataclass


@dataclass
class Box:
    """Axis-aligned box in world space (body and attack geometry)."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def centerx(self) -> float:
        return self.x + self.width / 2

    @property
    def centery(self) -> float:
        return self.y + self.height / 2

    def copy(self) -> 'Box':
        return Box(self.x, self.y, self.width, self.height)


def boxes_overlap(a: Box, b: Box) -> bool:
    # Touching edges do not count.
    return (
        a.x < b.x + b.width
        and a.x + a.width > b.x
        and a.y < b.y + b.height
        and a.y + a.height > b.y
    )
