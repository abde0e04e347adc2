import argparse
import logging
import math
import random
from typing import List, Tuple

import pygame

from spatialhashqt import Item, SpatialHashQuadtree

logger = logging.getLogger(__name__)

RED = (255, 0, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)

# ------------------------------ Drawing ------------------------------ #


def _stroke_rect(surface, color, rect, width: int = 1):
    x, y, w, h = rect
    if w <= 0 or h <= 0:
        return
    pygame.draw.rect(surface, color, pygame.Rect(int(x), int(y), max(1, int(w)), max(1, int(h))), width)


def _fill_rect(surface, color, rect):
    _stroke_rect(surface, color, rect, 0)


def draw_index(surface, index: SpatialHashQuadtree, font, *, dark: bool = False):
    """Draw every cell, every quadrant and every stored rectangle."""
    fg = WHITE if dark else BLACK
    cs = index.cell_size
    for key, root in index.cells():
        for boundary in root.get_all_node_boundaries():
            _stroke_rect(surface, fg, boundary)
        for item in root:
            _fill_rect(surface, fg, item.bounds)

        # Cell key in the top left of the cell, where its origin is
        col, row = key
        label = font.render(f"{col},{row}", True, RED)
        surface.blit(label, (col * cs, row * cs + 2))
        _stroke_rect(surface, RED, index.cell_boundary(key))


def draw_stroked(surface, font, text: str, center: Tuple[float, float]):
    outline = font.render(text, True, BLACK)
    body = font.render(text, True, WHITE)
    rect = body.get_rect(center=(int(center[0]), int(center[1])))
    for dx in (-3, 0, 3):
        for dy in (-3, 0, 3):
            if dx or dy:
                surface.blit(outline, rect.move(dx, dy))
    surface.blit(body, rect)


# ------------------------------ Explorer ------------------------------ #


class Explorer:
    def __init__(self, screen, size: int, cell_size: float, count: int, max_w: int, max_h: int, dark: bool):
        self.screen = screen
        self.size = size
        self.cell_size = cell_size
        self.count = count
        self.max_w = max_w
        self.max_h = max_h
        self.dark = dark
        self.index: SpatialHashQuadtree[int] = SpatialHashQuadtree(cell_size)
        self.mouse = (0.0, 0.0)
        self.pinned = False
        self.found: List[Item[int]] = []
        self.small_font = pygame.font.SysFont("sans-serif", 16)
        self.big_font = pygame.font.SysFont("sans-serif", 30)

    def inside_canvas(self, pos) -> bool:
        x, y = pos
        return 0 < x < self.size and 0 < y < self.size

    def insert_random(self):
        rects = [
            (
                random.uniform(0, self.size),
                random.uniform(0, self.size),
                random.uniform(0, self.max_w),
                random.uniform(0, self.max_h),
            )
            for _ in range(self.count)
        ]
        res = self.index.insert_many(rects, objs=list(range(self.count)))
        logger.info("Inserted %d rects (%d new cells)", res.count, res.cells_created)

    def handle_event(self, event):
        if event.type == pygame.MOUSEMOTION:
            if self.inside_canvas(event.pos) and not self.pinned:
                self.mouse = event.pos
        elif event.type == pygame.MOUSEBUTTONUP:
            if self.inside_canvas(event.pos):
                self.pinned = not self.pinned
                logger.info("Pinned: %s", self.pinned)
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_SPACE, pygame.K_RETURN):
                self.insert_random()
            elif event.key == pygame.K_q:
                self.count = min(100, self.count + 1)
            elif event.key == pygame.K_a:
                self.count = max(1, self.count - 1)
            elif event.key == pygame.K_w:
                self.max_w = min(100, self.max_w + 1)
            elif event.key == pygame.K_s:
                self.max_w = max(1, self.max_w - 1)
            elif event.key == pygame.K_e:
                self.max_h = min(100, self.max_h + 1)
            elif event.key == pygame.K_d:
                self.max_h = max(1, self.max_h - 1)

    def query_cell(self) -> Tuple[float, float]:
        cs = self.cell_size
        return (math.floor(self.mouse[0] / cs) * cs, math.floor(self.mouse[1] / cs) * cs)

    def update(self):
        x, y = self.query_cell()
        self.found = self.index.query((x, y, self.cell_size, self.cell_size))

    def draw_panel(self):
        cs = self.cell_size
        mx, my = self.mouse
        col, row = math.floor(mx / cs), math.floor(my / cs)
        lines = [
            "SPACE insert random rects",
            f"Count ({self.count})  q/a",
            f"Width ({self.max_w})  w/s",
            f"Height ({self.max_h})  e/d",
            "",
            f"Mouse Position: {mx}, {my}",
            f"Pinned: {'true' if self.pinned else 'false'}",
            f"Cell: {col}, {row}",
            f"Cell Bounds: {col * cs}, {row * cs}",
            f"Items: {len(self.index)}",
            "",
        ]
        lines.extend(f"{it.data}: {tuple(round(v, 1) for v in it.bounds)}" for it in self.found)

        fg = WHITE if self.dark else BLACK
        x0 = self.size + 10
        for i, line in enumerate(lines):
            y = 10 + i * 18
            if y > self.size - 18:
                break
            self.screen.blit(self.small_font.render(line, True, fg), (x0, y))

    def draw(self):
        self.screen.fill(BLACK if self.dark else WHITE)
        draw_index(self.screen, self.index, self.small_font, dark=self.dark)

        cs = self.cell_size
        x, y = self.query_cell()
        _stroke_rect(self.screen, BLUE, (x, y, cs, cs))
        for it in self.found:
            _fill_rect(self.screen, BLUE, it.bounds)
        draw_stroked(self.screen, self.big_font, str(len(self.found)), (x + cs / 2, y + cs * 0.6))

        pygame.draw.line(self.screen, RED, (self.size, 0), (self.size, self.size))
        self.draw_panel()


# ------------------------------- main ------------------------------- #


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Spatial hash quadtree explorer")
    p.add_argument("--size", type=int, default=500, help="canvas size in pixels")
    p.add_argument("--cell-size", type=float, default=100.0)
    p.add_argument("--count", type=int, default=50, help="rects per insert (1-100)")
    p.add_argument("--max-width", type=int, default=10)
    p.add_argument("--max-height", type=int, default=10)
    p.add_argument("--dark", action="store_true", help="draw on a dark background")
    p.add_argument("--log-level", default="INFO")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pygame.init()
    screen = pygame.display.set_mode((args.size * 2, args.size))
    pygame.display.set_caption("Spatial Hash Quadtree")
    clock = pygame.time.Clock()
    explorer = Explorer(
        screen, args.size, args.cell_size, args.count, args.max_width, args.max_height, args.dark
    )

    running = True
    while running:
        clock.tick(60)
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            else:
                explorer.handle_event(event)

        explorer.update()
        explorer.draw()
        pygame.display.flip()

    pygame.quit()


if __name__ == "__main__":
    main()
