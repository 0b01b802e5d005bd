"""Temporal axis resolution and direction assembly.

Each axis is driven by a (positive, negative) key pair. With one key held the
axis is fully deflected; with both held, the key pressed first keeps the sign
and the later one trims the value to tan(22.5 deg), which puts the resulting
direction halfway between the cardinal and the diagonal.
"""
import math

from core.state import Axis, DirectionVector, InvalidStateError, KeyState

TRIM_RATIO = math.tan(math.pi / 8)  # ~0.41421356237


def resolve(pos_held: bool, pos_time: float, neg_held: bool, neg_time: float) -> float:
    if pos_held and neg_held:
        # strict less-than: a tie goes to the negative key
        if pos_time < neg_time:
            return TRIM_RATIO
        return -TRIM_RATIO
    if pos_held:
        return 1.0
    if neg_held:
        return -1.0
    return 0.0


def resolve_axis(state: KeyState, axis: Axis) -> float:
    # one locked read per key; a concurrent release cannot split held from time
    pos_held, pos_time = state.read(axis.positive)
    neg_held, neg_time = state.read(axis.negative)
    return resolve(pos_held, pos_time or 0.0, neg_held, neg_time or 0.0)


def resolve_axes(state: KeyState) -> DirectionVector:
    """Raw per-axis values, before normalization."""
    if state is None:
        raise InvalidStateError("no key state to resolve")
    return DirectionVector(
        resolve_axis(state, Axis.X),
        resolve_axis(state, Axis.Y),
        resolve_axis(state, Axis.Z),
    )


def compute_direction(state: KeyState, normalize: bool = True) -> DirectionVector:
    """Direction for the current tick.

    Normalization scales the whole vector, so a full+trim pair keeps its
    component ratio rather than its absolute per-axis values. The zero vector
    is returned as-is. Call this once per tick with a snapshot, not per event.
    """
    raw = resolve_axes(state)
    if not normalize:
        return raw
    return raw.normalized()
