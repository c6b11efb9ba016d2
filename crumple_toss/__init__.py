"""
Crumple Toss
============

Throw crumpled notes into a moving bin before the clock runs out.

- toss_core: game simulation (physics, throwing, scoring, countdown)
- game_config.yaml: locked tuning values

Green notes are easy (large hit area, 1 point), yellow are medium (2 points),
red are hard (small hit area, 3 points).
"""
