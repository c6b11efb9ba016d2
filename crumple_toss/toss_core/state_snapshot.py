"""
State Snapshot
==============

Packs the current frame into a read-only view for renderers. Notes in flight
go into fixed-size numpy arrays with a mask, so a renderer can draw them
without touching the live entities.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

import numpy as np

from crumple_toss.toss_core.config_loader import GameConfig, get_config
from crumple_toss.toss_core.launch import HeldNote
from crumple_toss.toss_core.projectile import Projectile
from crumple_toss.toss_core.target import TargetController


@dataclass
class FrameSnapshot:
    """
    Everything a renderer needs for one frame.

    All arrays are fixed-size with masking for variable note counts.
    """
    # Field
    field_width: float
    field_height: float

    # Bin box
    target_x: float
    target_y: float
    target_width: float
    target_height: float
    target_direction: int

    # Player marker (fixed)
    player_x: float
    player_y: float

    # Session
    score: int
    tallies: Dict[str, int]
    session_active: bool
    seconds_remaining: int

    # Note in hand, if charging
    held: Optional[HeldNote]

    # Notes in flight
    objects_count: int
    obj_uid: np.ndarray           # (MAX_OBJ,) int32
    obj_variant_id: np.ndarray    # (MAX_OBJ,) int16
    obj_x: np.ndarray             # (MAX_OBJ,) float32
    obj_y: np.ndarray             # (MAX_OBJ,) float32
    obj_vx: np.ndarray            # (MAX_OBJ,) float32
    obj_vy: np.ndarray            # (MAX_OBJ,) float32
    obj_angle: np.ndarray         # (MAX_OBJ,) float32
    obj_mask: np.ndarray          # (MAX_OBJ,) bool

    # Cosmetic shapes keyed by uid; renderers only read them
    outlines: Dict[int, np.ndarray] = field(default_factory=dict)
    wrinkles: Dict[int, np.ndarray] = field(default_factory=dict)

    @property
    def target_box(self) -> Tuple[float, float, float, float]:
        return (self.target_x, self.target_y, self.target_width, self.target_height)


def _frozen(array: np.ndarray) -> np.ndarray:
    array.setflags(write=False)
    return array


class SnapshotBuilder:
    """Builds FrameSnapshots from live game objects."""

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()

        self._config = config
        self._max_objects = config.snapshot.max_objects

    @property
    def max_objects(self) -> int:
        return self._max_objects

    def build(
        self,
        target: TargetController,
        projectiles: Iterable[Projectile],
        held: Optional[HeldNote],
        score: int,
        tallies: Dict[str, int],
        session_active: bool,
        seconds_remaining: int
    ) -> FrameSnapshot:
        """
        Build a snapshot of the current frame.

        Notes beyond ``max_objects`` are left out of the arrays (oldest first
        are kept).
        """
        n = self._max_objects
        obj_uid = np.full(n, -1, dtype=np.int32)
        obj_variant_id = np.full(n, -1, dtype=np.int16)
        obj_x = np.zeros(n, dtype=np.float32)
        obj_y = np.zeros(n, dtype=np.float32)
        obj_vx = np.zeros(n, dtype=np.float32)
        obj_vy = np.zeros(n, dtype=np.float32)
        obj_angle = np.zeros(n, dtype=np.float32)
        obj_mask = np.zeros(n, dtype=bool)
        outlines: Dict[int, np.ndarray] = {}
        wrinkles: Dict[int, np.ndarray] = {}

        count = 0
        for projectile in projectiles:
            if count >= n:
                break
            obj_uid[count] = projectile.uid
            obj_variant_id[count] = projectile.variant.id
            obj_x[count] = projectile.x
            obj_y[count] = projectile.y
            obj_vx[count] = projectile.velocity.x
            obj_vy[count] = projectile.velocity.y
            obj_angle[count] = projectile.rotation
            obj_mask[count] = True
            outlines[projectile.uid] = _frozen(projectile.outline.copy())
            wrinkles[projectile.uid] = _frozen(projectile.wrinkles.copy())
            count += 1

        return FrameSnapshot(
            field_width=float(self._config.field.width),
            field_height=float(self._config.field.height),
            target_x=target.x,
            target_y=target.y,
            target_width=target.width,
            target_height=target.height,
            target_direction=target.direction,
            player_x=self._config.player.x,
            player_y=self._config.player.y,
            score=score,
            tallies=dict(tallies),
            session_active=session_active,
            seconds_remaining=seconds_remaining,
            held=held,
            objects_count=count,
            obj_uid=_frozen(obj_uid),
            obj_variant_id=_frozen(obj_variant_id),
            obj_x=_frozen(obj_x),
            obj_y=_frozen(obj_y),
            obj_vx=_frozen(obj_vx),
            obj_vy=_frozen(obj_vy),
            obj_angle=_frozen(obj_angle),
            obj_mask=_frozen(obj_mask),
            outlines=outlines,
            wrinkles=wrinkles
        )
