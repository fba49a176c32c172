"""
Spin resolution domain service.

Turns a randomized wheel rotation into a landing segment. All angles are in
degrees. The pointer is fixed at the top of the wheel and the wheel rotates
clockwise, so the segment under the pointer is found by undoing the rotation.
"""

import math
import random
from dataclasses import dataclass, field

# Fraction of a segment at either edge the wheel must not visually stop in
DEAD_ZONE = 0.15
# Where a spin that would stop in a dead zone is moved to instead
DEAD_ZONE_LOW_TARGET = 0.25
DEAD_ZONE_HIGH_TARGET = 0.75

# Extra full turns per spin: uniform float in [low, high) when unrigged,
# whole number in [low, high) when rigged
DEFAULT_FULL_TURNS: tuple[int, int] = (3, 6)
LONG_FULL_TURNS: tuple[int, int] = (5, 9)


@dataclass(frozen=True)
class RigDirective:
    """Steers a spin onto one of the favored segment indices."""

    active: bool = False
    favored_indices: frozenset[int] = field(default_factory=frozenset)


@dataclass(frozen=True)
class SpinResolution:
    target_rotation: float
    segment_index: int
    rigged: bool = False


def segment_angle(segment_count: int) -> float:
    if segment_count < 2:
        raise ValueError(f"A wheel needs at least 2 segments, got {segment_count}")
    return 360 / segment_count


def pointer_angle(rotation: float) -> float:
    """Angle on the unrotated wheel that sits under the pointer after `rotation`."""
    return (360 - rotation % 360) % 360


def _locate(rotation: float, segment_count: int) -> tuple[int, float]:
    angle = segment_angle(segment_count)
    pointer = pointer_angle(rotation)
    raw_index = math.floor(pointer / angle)
    position = (pointer - raw_index * angle) / angle
    # Float rounding can push position to exactly 1.0 on the far edge
    position = min(max(position, 0.0), math.nextafter(1.0, 0.0))
    return raw_index % segment_count, position


def landing_index(rotation: float, segment_count: int) -> int:
    """Index of the segment under the pointer for a given cumulative rotation."""
    index, _ = _locate(rotation, segment_count)
    return index


def position_in_segment(rotation: float, segment_count: int) -> float:
    """How far into its segment the pointer rests, in [0, 1)."""
    _, position = _locate(rotation, segment_count)
    return position


def rotation_for_index(index: int, segment_count: int) -> float:
    """
    Rotation (mod 360) that centers a segment under the pointer.

    Args:
        index: Segment to position at the top
        segment_count: Total number of segments

    Returns:
        Rotation in degrees, in [0, 360)
    """
    angle = segment_angle(segment_count)
    center = (index % segment_count) * angle + angle / 2
    return (360 - center) % 360


def apply_dead_zone_correction(rotation: float, segment_count: int) -> float:
    """
    Nudge a rotation away from segment boundaries.

    A rotation whose pointer falls within DEAD_ZONE of the segment start is
    moved to the 25% mark, and one within DEAD_ZONE of the segment end to the
    75% mark. The landing index never changes; only the exact resting angle
    does. Rotations outside the dead zones are returned unchanged.
    """
    index, position = _locate(rotation, segment_count)
    if position < DEAD_ZONE:
        target = DEAD_ZONE_LOW_TARGET
    elif position > 1 - DEAD_ZONE:
        target = DEAD_ZONE_HIGH_TARGET
    else:
        return rotation

    angle = segment_angle(segment_count)
    shift = (target - position) * angle
    # Moving the pointer forward means rotating the wheel backwards
    return rotation - shift


def _rigged_rotation(
    current_rotation: float,
    index: int,
    segment_count: int,
    full_turns: int,
) -> float:
    target_mod = rotation_for_index(index, segment_count)
    base = current_rotation - current_rotation % 360 + target_mod
    if base <= current_rotation:
        base += 360
    return base + full_turns * 360


def resolve_spin(
    current_rotation: float,
    segment_count: int,
    rig: RigDirective | None = None,
    rng: random.Random | None = None,
    full_turns: tuple[int, int] = DEFAULT_FULL_TURNS,
) -> SpinResolution:
    """
    Pick where the wheel stops for one spin.

    Args:
        current_rotation: Cumulative rotation of the wheel before this spin
        segment_count: Number of segments on the wheel (at least 2)
        rig: Optional directive forcing a favored segment
        rng: Source of randomness (module-level random if omitted)
        full_turns: Range of extra full turns added for visual effect

    Returns:
        SpinResolution with the final cumulative rotation and the landing index.
        The index is always landing_index(target_rotation, segment_count).

    Raises:
        ValueError: If segment_count is less than 2
    """
    segment_angle(segment_count)
    rng = rng or random
    low, high = full_turns

    if rig is not None and rig.active:
        favored = sorted(i for i in rig.favored_indices if 0 <= i < segment_count)
        index = rng.choice(favored) if favored else 0
        turns = rng.randrange(low, high)
        target = _rigged_rotation(current_rotation, index, segment_count, turns)
        return SpinResolution(target_rotation=target, segment_index=index, rigged=True)

    turns = rng.uniform(low, high)
    offset = rng.uniform(0, 360)
    candidate = current_rotation + turns * 360 + offset
    target = apply_dead_zone_correction(candidate, segment_count)
    return SpinResolution(
        target_rotation=target,
        segment_index=landing_index(target, segment_count),
    )
