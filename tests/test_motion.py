from sardip.motion import (
    EntityView,
    HasView,
    MovementDirection,
    add_has_view,
    apply_direction,
    copy_transforms,
    views_to_destroy,
)


def test_zero_speed_keeps_translation():
    start = (3.0, 4.0, 5.0)
    assert apply_direction(start, MovementDirection((1.0, 1.0)), 0.0, 1.0) == start


def test_default_direction_does_not_move():
    start = (1.0, 2.0, 3.0)
    assert apply_direction(start, MovementDirection(), 10.0, 1.0) == start


def test_movement_is_linear_in_time_and_keeps_z():
    direction = MovementDirection((1.0, -0.5))
    once = apply_direction((0.0, 0.0, 7.0), direction, 2.0, 1.0)
    twice = apply_direction((0.0, 0.0, 7.0), direction, 2.0, 2.0)
    assert twice == (once[0] * 2, once[1] * 2, 7.0)
    stepped = apply_direction(once, direction, 2.0, 1.0)
    assert stepped == twice


def test_copy_transforms_copies_target():
    transforms = {"pet": (1.0, 2.0, 0.0), "view": (0.0, 0.0, 0.0)}
    updated = copy_transforms(transforms, {"view": EntityView("pet")})
    assert updated == ["view"]
    assert transforms["view"] == transforms["pet"]


def test_copy_transforms_skips_missing_target():
    transforms = {"view": (9.0, 9.0, 9.0)}
    assert copy_transforms(transforms, {"view": EntityView("gone")}) == []
    assert transforms["view"] == (9.0, 9.0, 9.0)


def test_add_has_view_marks_targets():
    markers = add_has_view({"v1": EntityView("a"), "v2": EntityView("b")})
    assert markers == {"a": HasView("v1"), "b": HasView("v2")}


def test_views_to_destroy_selects_matching_views():
    views = {"v1": EntityView("a"), "v2": EntityView("b"), "v3": EntityView("a")}
    assert views_to_destroy("a", views) == ["v1", "v3"]
    assert views_to_destroy("c", views) == []