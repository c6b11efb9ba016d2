"""
Human Play Mode
================

Play Crumple Toss interactively: grab a note at the player marker, hold to
charge, aim with the mouse and release to throw it at the moving bin.

Controls:
    - Mouse down near the X: Pick up a note
    - Mouse up: Throw toward the cursor (hold longer = harder throw)
    - Space/Enter: Start a round
    - R: End the round / restart
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--fps FPS] [--mute]
"""

from __future__ import annotations

import argparse
import math
import sys
from typing import Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from crumple_toss.toss_core.config_loader import GameConfig, load_config
from crumple_toss.toss_core.events import GameListener
from crumple_toss.toss_core.game import CoreGame
from crumple_toss.toss_core.state_snapshot import FrameSnapshot
from crumple_toss.toss_core.variant_catalog import Variant

SAMPLE_RATE = 44100


def _tone_sweep(freqs: Tuple[float, ...], duration: float, volume: float, sawtooth: bool = False) -> np.ndarray:
    """Exponential pitch glide through ``freqs`` with a decaying envelope."""
    n = int(SAMPLE_RATE * duration)
    t = np.arange(n) / SAMPLE_RATE
    knots = np.linspace(0.0, duration, len(freqs))
    freq = np.exp(np.interp(t, knots, np.log(freqs)))
    phase = 2.0 * np.pi * np.cumsum(freq) / SAMPLE_RATE
    wave = 2.0 * (phase / (2.0 * np.pi) % 1.0) - 1.0 if sawtooth else np.sin(phase)
    envelope = volume * np.exp(np.log(0.01 / volume) * t / duration)
    return wave * envelope


def _fanfare(duration: float = 1.5) -> np.ndarray:
    """C major chord with staggered decay plus an octave harmonic."""
    n = int(SAMPLE_RATE * duration)
    t = np.arange(n) / SAMPLE_RATE
    freqs = (523.25, 659.25, 783.99, 1046.50)
    wave = np.zeros(n)
    for index, freq in enumerate(freqs):
        wave += np.sin(2 * np.pi * freq * t) * np.exp(-t * (2 + index * 0.5)) * (0.3 / len(freqs))
    wave += np.sin(2 * np.pi * 523.25 * 2 * t) * np.exp(-t * 3) * 0.1
    return wave


class SoundCues(GameListener):
    """
    Synthesized feedback sounds: cheer on a dunk, "buhhh" on a miss, and a
    fanfare when the round ends. Audio errors are reported and ignored.
    """

    def __init__(self) -> None:
        self._sounds: Dict[str, "pygame.mixer.Sound"] = {}
        try:
            pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
            self._sounds = {
                "cheer": self._make_sound(_tone_sweep((440.0, 523.25, 659.25), 0.3, 0.2)),
                "miss": self._make_sound(_tone_sweep((200.0, 150.0), 0.3, 0.15, sawtooth=True)),
                "end": self._make_sound(_fanfare()),
            }
        except pygame.error as e:
            print(f"Sound disabled: {e}")

    @staticmethod
    def _make_sound(wave: np.ndarray) -> "pygame.mixer.Sound":
        samples = np.clip(wave, -1.0, 1.0)
        samples = (samples * 32767).astype(np.int16)
        # Match the mixer's actual channel count
        _, _, channels = pygame.mixer.get_init()
        if channels > 1:
            samples = np.repeat(samples[:, None], channels, axis=1)
        return pygame.sndarray.make_sound(np.ascontiguousarray(samples))

    def _play(self, name: str) -> None:
        sound = self._sounds.get(name)
        if sound is not None:
            sound.play()

    def on_hit(self, variant: Variant) -> None:
        self._play("cheer")

    def on_miss(self) -> None:
        self._play("miss")

    def on_session_ended(self, final_score: int, final_tallies: Dict[str, int]) -> None:
        self._play("end")


class ConsoleLog(GameListener):
    """Prints round progress to stdout."""

    def on_session_started(self) -> None:
        print("\n=== Round Started ===")

    def on_charge_started(self, variant: Variant) -> None:
        print(f"  Holding {variant.tag.upper()} - {variant.label}")

    def on_hit(self, variant: Variant) -> None:
        print(f"  Dunk! {variant.tag} +{variant.points}")

    def on_session_ended(self, final_score: int, final_tallies: Dict[str, int]) -> None:
        print(f"\nROUND OVER - Score: {final_score}  {final_tallies}")


class TossRenderer:
    """Top-down office view: bin, player marker, notes, and HUD."""

    def __init__(self, config: GameConfig, game: CoreGame):
        self._config = config
        self._game = game
        self._panel_width = 220
        self._field_width = config.field.width
        self._field_height = config.field.height
        self._window_width = self._field_width + self._panel_width
        self._window_height = self._field_height

        self._floor = (236, 232, 224)
        self._panel = (255, 255, 255)
        self._accent = (102, 126, 234)
        self._text_dark = (51, 51, 51)
        self._text_light = (110, 110, 110)

        pygame.font.init()
        self._font_huge = pygame.font.Font(None, 56)
        self._font_large = pygame.font.Font(None, 40)
        self._font_medium = pygame.font.Font(None, 26)
        self._font_small = pygame.font.Font(None, 20)

    @property
    def window_size(self) -> Tuple[int, int]:
        return (self._window_width, self._window_height)

    def render(self, screen: pygame.Surface, snap: FrameSnapshot) -> None:
        """Render the complete scene."""
        screen.fill(self._floor, pygame.Rect(0, 0, self._field_width, self._field_height))
        self._draw_bin(screen, snap)
        self._draw_player(screen, snap)
        self._draw_held(screen, snap)
        self._draw_notes(screen, snap)
        self._draw_panel(screen, snap)

        if not snap.session_active:
            self._draw_idle_overlay(screen, snap)

    def _draw_bin(self, screen: pygame.Surface, snap: FrameSnapshot) -> None:
        x, y, w, h = (int(v) for v in snap.target_box)
        pygame.draw.rect(screen, (74, 74, 74), (x, y, w, h))
        pygame.draw.rect(screen, (42, 42, 42), (x - 3, y - 3, w + 6, 6))
        pygame.draw.rect(screen, (26, 26, 26), (x + 5, y + 5, w - 10, h - 10))
        label = self._font_small.render("BIN", True, (255, 255, 255))
        screen.blit(label, label.get_rect(center=(x + w // 2, y + h // 2)))

    def _draw_player(self, screen: pygame.Surface, snap: FrameSnapshot) -> None:
        px, py = int(snap.player_x), int(snap.player_y)
        size = 20
        pygame.draw.line(screen, self._text_dark, (px - size, py - size), (px + size, py + size), 4)
        pygame.draw.line(screen, self._text_dark, (px + size, py - size), (px - size, py + size), 4)
        pygame.draw.circle(screen, self._accent, (px, py), size + 5, 2)
        label = self._font_small.render("PLAYER", True, self._text_dark)
        screen.blit(label, label.get_rect(center=(px, py + size + 15)))

    def _draw_held(self, screen: pygame.Surface, snap: FrameSnapshot) -> None:
        held = snap.held
        if held is None:
            return
        radius = held.display_size / 2
        points = []
        for i in range(8):
            angle = i / 8 * 2 * math.pi
            r = radius * (0.75 + (i % 3) * 0.1)
            points.append((held.x + math.cos(angle) * r, held.y + math.sin(angle) * r))
        pygame.draw.polygon(screen, held.variant.rgb, points)
        pygame.draw.polygon(screen, self._text_dark, points, 2)
        if held.show_power_ring:
            pygame.draw.circle(screen, self._accent, (int(held.x), int(held.y)), int(radius + 8), 2)

    def _draw_notes(self, screen: pygame.Surface, snap: FrameSnapshot) -> None:
        width = self._config.projectile.width
        height = self._config.projectile.height
        for i in np.flatnonzero(snap.obj_mask):
            uid = int(snap.obj_uid[i])
            variant = self._game.catalog[int(snap.obj_variant_id[i])]
            cx = snap.obj_x[i] + width / 2
            cy = snap.obj_y[i] + height / 2
            angle = float(snap.obj_angle[i])
            cos_a, sin_a = math.cos(angle), math.sin(angle)

            def to_screen(ox: float, oy: float) -> Tuple[float, float]:
                return (cx + ox * cos_a - oy * sin_a, cy + ox * sin_a + oy * cos_a)

            outline = [to_screen(ox, oy) for ox, oy in snap.outlines[uid]]
            pygame.draw.polygon(screen, variant.rgb, outline)
            pygame.draw.polygon(screen, self._text_dark, outline, 2)
            for x1, y1, x2, y2 in snap.wrinkles[uid]:
                pygame.draw.line(screen, (120, 120, 120), to_screen(x1, y1), to_screen(x2, y2), 1)

    def _draw_panel(self, screen: pygame.Surface, snap: FrameSnapshot) -> None:
        x0 = self._field_width
        screen.fill(self._panel, pygame.Rect(x0, 0, self._panel_width, self._window_height))

        timer = self._font_large.render(f"Time: {snap.seconds_remaining}s", True, self._accent)
        screen.blit(timer, (x0 + 20, 20))

        label = self._font_medium.render("Total Score", True, self._text_light)
        screen.blit(label, (x0 + 20, 75))
        score = self._font_huge.render(str(snap.score), True, self._text_dark)
        screen.blit(score, (x0 + 20, 100))

        y = 160
        for variant in self._game.catalog:
            pygame.draw.rect(screen, variant.rgb, (x0 + 20, y, 18, 18))
            pygame.draw.rect(screen, self._text_dark, (x0 + 20, y, 18, 18), 1)
            text = f"{variant.tag.capitalize()}: {snap.tallies.get(variant.tag, 0)} pts"
            screen.blit(self._font_small.render(text, True, self._text_dark), (x0 + 46, y + 2))
            y += 28

        if snap.held is not None:
            held = snap.held
            text = f"{held.variant.difficulty.upper()} - {held.variant.label}"
            screen.blit(self._font_small.render(text, True, self._text_dark), (x0 + 20, y + 12))
            bar_w = int((self._panel_width - 40) * held.power / self._config.launch.max_power)
            pygame.draw.rect(screen, self._accent, (x0 + 20, y + 34, bar_w, 8))

        hints = ("Hold near X to pick up", "Aim and release to throw", "R: restart   ESC: quit")
        for i, hint in enumerate(hints):
            surf = self._font_small.render(hint, True, self._text_light)
            screen.blit(surf, (x0 + 20, self._window_height - 70 + i * 20))

    def _draw_idle_overlay(self, screen: pygame.Surface, snap: FrameSnapshot) -> None:
        overlay = pygame.Surface((self._field_width, self._field_height), pygame.SRCALPHA)
        overlay.fill((0, 0, 0, 110))
        screen.blit(overlay, (0, 0))

        result = self._game.session.last_result
        title = "GAME OVER" if result is not None else "CRUMPLE TOSS"
        lines = [(self._font_huge, title)]
        if result is not None:
            lines.append((self._font_large, f"Total Score: {result.score} points"))
            hits = self._game.hits_by_tag
            for variant in self._game.catalog:
                dunks = hits[variant.tag]
                plural = "s" if dunks != 1 else ""
                lines.append((
                    self._font_medium,
                    f"{variant.tag.capitalize()}: {result.tallies[variant.tag]} points "
                    f"({dunks} dunk{plural} x {variant.points})"
                ))
        lines.append((self._font_medium, "Press Space to start"))

        y = self._field_height // 2 - 30 * len(lines) // 2
        for font, text in lines:
            surf = font.render(text, True, (255, 255, 255))
            screen.blit(surf, surf.get_rect(center=(self._field_width // 2, y)))
            y += font.get_height() + 8


class HumanPlayer:
    """
    Human-playable game: pygame events in, one simulation frame per display
    frame, countdown fed from real elapsed time.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        target_fps: int = 60,
        mute: bool = False
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps

        self._game = CoreGame(config=config, seed=seed)
        self._game.add_listener(ConsoleLog())

        pygame.init()
        self._renderer = TossRenderer(config, self._game)
        self._screen = pygame.display.set_mode(self._renderer.window_size)
        pygame.display.set_caption("Crumple Toss")
        self._clock = pygame.time.Clock()

        if not mute:
            self._game.add_listener(SoundCues())

        self._running = True

    def run(self) -> int:
        """Run the game loop. Returns the last score."""
        print("=== Crumple Toss ===")
        print("Space to start, hold near the X and release to throw")
        print("R to restart, ESC to quit")

        while self._running:
            elapsed_ms = self._clock.tick(self._target_fps)
            self._handle_events()
            self._game.advance_clock(elapsed_ms / 1000.0)
            self._game.frame_tick(1.0)
            self._renderer.render(self._screen, self._game.snapshot())
            pygame.display.flip()

        pygame.quit()
        return self._game.score

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key in (pygame.K_SPACE, pygame.K_RETURN):
                    self._game.start_session()
                elif event.key == pygame.K_r:
                    self._game.force_end_session()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._game.grab(*event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._game.release(*event.pos)


def main():
    parser = argparse.ArgumentParser(description="Play Crumple Toss interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--mute", action="store_true", help="Disable sound cues")

    args = parser.parse_args()

    try:
        player = HumanPlayer(seed=args.seed, target_fps=args.fps, mute=args.mute)
        score = player.run()
        print(f"\nFinal Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
