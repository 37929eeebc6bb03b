import argparse
from dataclasses import dataclass
import math
import sys

import moderngl
import numpy as np
import pygame

from sierpinski import config
from sierpinski.builder import build_from_request
from sierpinski.models import CloudRequest, Mode, PointCloud
from sierpinski.renderer import PointCloudRenderer, orbit_from_position
from sierpinski.sampling import RandomSource, make_rng


@dataclass
class ViewerState:
    """Control panel values: point count and one visibility flag per cloud."""

    count: int = config.INITIAL_POINTS
    size: float = config.SIZE
    burn_in: int = config.BURN_IN_STEPS
    show_volume: bool = True
    show_attractor: bool = True

    def toggle(self, mode: Mode) -> bool:
        if mode is Mode.VOLUME_FILL:
            self.show_volume = not self.show_volume
            return self.show_volume
        self.show_attractor = not self.show_attractor
        return self.show_attractor

    def step_count(self, steps: int) -> bool:
        """Move the count by whole steps; True if it actually changed."""
        new_count = config.clamp_point_count(self.count + steps * config.POINT_STEP)
        changed = new_count != self.count
        self.count = new_count
        return changed

    def visibility(self) -> dict[Mode, bool]:
        return {Mode.VOLUME_FILL: self.show_volume, Mode.ATTRACTOR: self.show_attractor}

    def requests(self) -> list[CloudRequest]:
        return [
            CloudRequest(self.count, self.size, Mode.VOLUME_FILL, self.burn_in),
            CloudRequest(self.count, self.size, Mode.ATTRACTOR, self.burn_in),
        ]

    def status_lines(self, fps: float) -> list[str]:
        return [
            f"FPS: {fps:.1f}",
            f"Points: {self.count:,}",
            f"[T] Tetrahedron: {'on' if self.show_volume else 'off'}",
            f"[S] Sierpinski:  {'on' if self.show_attractor else 'off'}",
        ]


def regenerate(state: ViewerState, rng: RandomSource) -> list[PointCloud]:
    """Build both clouds from scratch for the current state."""
    return [build_from_request(request, rng=rng) for request in state.requests()]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Tetrahedron volume fill and Sierpinski attractor viewer")
    parser.add_argument("--size", type=float, default=config.SIZE, help="tetrahedron edge length")
    parser.add_argument(
        "--points",
        type=int,
        default=config.INITIAL_POINTS,
        help=f"points per cloud, {config.MIN_POINTS}..{config.MAX_POINTS}",
    )
    parser.add_argument("--burn-in", type=int, default=config.BURN_IN_STEPS, help="chaos game burn-in steps")
    parser.add_argument("--seed", type=int, default=None, help="random seed for reproducible clouds")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    state = ViewerState(
        count=config.clamp_point_count(args.points),
        size=args.size,
        burn_in=args.burn_in,
    )
    rng = make_rng(args.seed)

    # 1. Setup Data (Clouds)
    print("Generating clouds...")
    clouds = regenerate(state, rng)

    # 2. Initialize Pygame with OpenGL
    width, height = config.WINDOW_SIZE
    pygame.init()
    clock = pygame.time.Clock()
    pygame.display.set_mode((width, height), pygame.OPENGL | pygame.DOUBLEBUF)
    pygame.display.set_caption("Sierpinski Tetrahedron")
    ctx = moderngl.create_context()

    renderer = PointCloudRenderer(ctx, width, height)
    for cloud in clouds:
        renderer.set_cloud(cloud)

    # Camera
    camera_rot, distance = orbit_from_position(config.CAMERA_POSITION)
    mouse_dragging = False
    mouse_prev_pos = None

    print("\n" + "=" * 60)
    print("Camera:")
    print("  Arrow Keys / Drag - Orbit camera")
    print("  +/- / Wheel       - Zoom in/out")
    print("\nGeometry:")
    print("  T                 - Toggle tetrahedron volume fill")
    print("  S                 - Toggle Sierpinski tetrahedron")
    print(f"  ] / [             - More/fewer points (step {config.POINT_STEP:,})")
    print("=" * 60)
    print(f"\nPoints per cloud: {state.count:,}")
    print()

    running = True

    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    running = False

                elif event.key == pygame.K_t:
                    shown = state.toggle(Mode.VOLUME_FILL)
                    print(f"[Tetrahedron {'ON' if shown else 'OFF'}]")

                elif event.key == pygame.K_s:
                    shown = state.toggle(Mode.ATTRACTOR)
                    print(f"[Sierpinski {'ON' if shown else 'OFF'}]")

                elif event.key in (pygame.K_RIGHTBRACKET, pygame.K_LEFTBRACKET):
                    steps = 1 if event.key == pygame.K_RIGHTBRACKET else -1
                    if state.step_count(steps):
                        # Old clouds are dropped, new ones built from scratch
                        for cloud in regenerate(state, rng):
                            renderer.set_cloud(cloud)
                        print(f"Points: {state.count:,}")

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                mouse_dragging = True
                mouse_prev_pos = np.array(event.pos)

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                mouse_dragging = False
                mouse_prev_pos = None

            elif event.type == pygame.MOUSEMOTION:
                if mouse_dragging and mouse_prev_pos is not None:
                    current_pos = np.array(event.pos)
                    delta = current_pos - mouse_prev_pos
                    mouse_prev_pos = current_pos
                    camera_rot[1] -= delta[0] * 0.005
                    camera_rot[0] += delta[1] * 0.005

            elif event.type == pygame.MOUSEWHEEL:
                distance = max(10.0, distance * (0.9 if event.y > 0 else 1.1))

        # Continuous Input
        keys = pygame.key.get_pressed()
        if keys[pygame.K_LEFT]:
            camera_rot[1] -= 0.03
        if keys[pygame.K_RIGHT]:
            camera_rot[1] += 0.03
        if keys[pygame.K_UP]:
            camera_rot[0] -= 0.03
        if keys[pygame.K_DOWN]:
            camera_rot[0] += 0.03
        if keys[pygame.K_EQUALS] or keys[pygame.K_PLUS]:
            distance = max(10.0, distance - 3.0)
        if keys[pygame.K_MINUS]:
            distance = min(config.CAMERA_FAR / 2, distance + 3.0)

        # Keep the camera off the poles
        camera_rot[0] = min(math.pi / 2 - 0.01, max(-math.pi / 2 + 0.01, camera_rot[0]))

        renderer.draw(camera_rot, distance, state.visibility(), state.status_lines(clock.get_fps()))

        clock.tick(60)

    # Cleanup
    print("\n[Main] Shutting down...")
    renderer.release()
    pygame.quit()
    sys.exit()


if __name__ == "__main__":
    main()
