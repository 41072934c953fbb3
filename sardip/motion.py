"""Movement along a direction and views that mirror another entity's transform."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Mapping, MutableMapping

Vec3 = tuple[float, float, float]


@dataclass
class MovementDirection:
    direction: tuple[float, float] = (0.0, 0.0)


def apply_direction(
    translation: Vec3, direction: MovementDirection, speed: float, delta: float
) -> Vec3:
    """Move a translation along the direction for ``delta`` seconds at ``speed``."""
    x, y, z = translation
    dx, dy = direction.direction
    step = speed * delta
    return (x + dx * step, y + dy * step, z)


@dataclass(frozen=True)
class EntityView:
    """Marks an entity as the visible view of ``entity``."""

    entity: Hashable


@dataclass(frozen=True)
class HasView:
    view_entity: Hashable


def copy_transforms(
    transforms: MutableMapping[Hashable, Any], views: Mapping[Hashable, EntityView]
) -> list[Hashable]:
    """Give each view the transform of the entity it shows; return the updated views."""
    updated = []
    for view_entity, view in views.items():
        if view.entity in transforms and view_entity in transforms:
            transforms[view_entity] = transforms[view.entity]
            updated.append(view_entity)
    return updated


def add_has_view(new_views: Mapping[Hashable, EntityView]) -> dict[Hashable, HasView]:
    """For newly added views, the HasView marker to put on each shown entity."""
    return {view.entity: HasView(view_entity) for view_entity, view in new_views.items()}


def views_to_destroy(
    removed_entity: Hashable, views: Mapping[Hashable, EntityView]
) -> list[Hashable]:
    """The views showing an entity whose view marker was removed."""
    return [view_entity for view_entity, view in views.items() if view.entity == removed_entity]