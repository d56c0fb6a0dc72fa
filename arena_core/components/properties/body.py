from dataclasses import dataclass


@dataclass(frozen=True)
class Body:
    """Collision circle centred on the entity's ``Position``.

    Attributes:
        radius: Circle radius in world units. Also used to clamp the entity
            inside the world bounds.
    """

    radius: float
