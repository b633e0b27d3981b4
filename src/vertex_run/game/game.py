# src/vertex_run/game/game.py
import sys, argparse, logging, math
import pygame
from pygame import K_SPACE, K_ESCAPE, K_RETURN, K_r, K_n
from .config import (
    WIDTH, HEIGHT, FPS, GROUND_Y, CEILING_Y,
    PORTAL_W, SEED_DEFAULT, STORE_PATH_DEFAULT,
    COLOR_BG, COLOR_BG_LAYERS, COLOR_FLOOR, COLOR_FLOOR_EDGE,
    COLOR_SPIKE, COLOR_SPIKE_EDGE, COLOR_PORTAL, COLOR_PARTICLE,
    COLOR_PLAYER, COLOR_PLAYER_EDGE, COLOR_FG, COLOR_DANGER,
)
from .collision import hazard_triangle, to_screen_x
from .run_state import RunState, RunPhase, Outcome, Snapshot
from .storage import JsonFileStore, RecordBook

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Vertex Run, playable build")
    p.add_argument("--seed", type=int, default=None,
                   help="Level seed. Omit for SEED_DEFAULT, use -1 for random each run.")
    p.add_argument("--save", type=str, default=STORE_PATH_DEFAULT,
                   help="JSON file holding deaths and record")
    p.add_argument("--scale", type=float, default=0.5,
                   help="Window scale relative to the 1920x1080 field")
    p.add_argument("--log-level", type=str, default="WARNING")
    return p.parse_args(argv)


# -------------------- Drawing --------------------

def draw_world(surf: pygame.Surface, snap: Snapshot):
    cam = snap.camera_x
    surf.fill(COLOR_BG)

    # Parallax bands
    for i, color in enumerate(COLOR_BG_LAYERS):
        off = (cam * (0.3 + i * 0.2)) % (WIDTH + 400)
        pygame.draw.rect(surf, color, pygame.Rect(int(-off), 0, WIDTH + 800, HEIGHT))

    pygame.draw.rect(surf, COLOR_FLOOR, pygame.Rect(0, CEILING_Y - 4, WIDTH, 8))
    pygame.draw.rect(surf, COLOR_FLOOR, pygame.Rect(0, GROUND_Y, WIDTH, HEIGHT - GROUND_Y))
    pygame.draw.rect(surf, COLOR_FLOOR_EDGE, pygame.Rect(0, CEILING_Y, WIDTH, 4))
    pygame.draw.rect(surf, COLOR_FLOOR_EDGE, pygame.Rect(0, GROUND_Y, WIDTH, 4))

    for o in snap.obstacles:
        tri = hazard_triangle(o, snap.grav_dir, cam)
        pygame.draw.polygon(surf, COLOR_SPIKE, tri)
        pygame.draw.polygon(surf, COLOR_SPIKE_EDGE, tri, width=2)

    if snap.goal is not None:
        gx = to_screen_x(snap.goal.x, cam)
        if -150 < gx < WIDTH + 50:
            top, bottom = CEILING_Y + 40, GROUND_Y - 40
            portal = pygame.Rect(int(gx), top, PORTAL_W, bottom - top)
            glow = pygame.Surface(portal.size, pygame.SRCALPHA)
            glow.fill((*COLOR_PORTAL, 64))
            surf.blit(glow, portal.topleft)
            pygame.draw.rect(surf, COLOR_PORTAL, portal, width=4)

    for part in snap.particles:
        a = part.fade
        color = tuple(int(bg + (c - bg) * a) for c, bg in zip(COLOR_PARTICLE, COLOR_BG))
        pygame.draw.circle(surf, color, (int(part.x - cam), int(part.y)), max(1, int(part.size)))

    draw_player(surf, snap)


def draw_player(surf: pygame.Surface, snap: Snapshot):
    p = snap.player
    body = pygame.Surface((int(p.w), int(p.h)), pygame.SRCALPHA)
    color = COLOR_DANGER if snap.outcome is Outcome.DEATH else COLOR_PLAYER
    pygame.draw.rect(body, color, body.get_rect(), border_radius=8)
    pygame.draw.rect(body, COLOR_PLAYER_EDGE, body.get_rect(), width=3, border_radius=8)
    # eyes + mouth
    pygame.draw.rect(body, COLOR_PLAYER_EDGE, pygame.Rect(20, 18, 14, 14))
    pygame.draw.rect(body, COLOR_PLAYER_EDGE, pygame.Rect(int(p.w) - 34, 18, 14, 14))
    pygame.draw.rect(body, COLOR_PLAYER_EDGE, pygame.Rect((int(p.w) - 28) // 2, int(p.h) - 24, 28, 10))

    angle = p.rotation + (math.pi if p.grav_dir < 0 else 0.0)
    rotated = pygame.transform.rotate(body, -math.degrees(angle))
    surf.blit(rotated, rotated.get_rect(center=p.rect.center))


def draw_hud(surf: pygame.Surface, snap: Snapshot, seed, font, big_font):
    txt = big_font.render(f"{snap.score}%", True, COLOR_FG)
    surf.blit(txt, (WIDTH - 24 - txt.get_width(), 24))
    hud = f"Seed: {seed}   Record: {snap.record}%   Deaths: {snap.deaths}"
    surf.blit(font.render(hud, True, COLOR_FG), (24, 24))
    surf.blit(font.render("SPACE/click jump | R restart | N new level | ESC quit",
                          True, (160, 150, 180)), (24, 60))

    if snap.phase is RunPhase.IDLE:
        _centered(surf, big_font, "VERTEX RUN", -40)
        _centered(surf, font, "ENTER to play", 30)
    elif snap.phase is RunPhase.ENDED:
        title = "Level complete!" if snap.outcome is Outcome.COMPLETE else "Game over"
        _centered(surf, big_font, title, -60)
        _centered(surf, font, f"Score: {snap.final_score}%   Record: {snap.record}%", 10)
        _centered(surf, font, f"Deaths: {snap.deaths}   R to retry", 50)


def _centered(surf, font, msg, dy):
    img = font.render(msg, True, COLOR_FG)
    surf.blit(img, (WIDTH // 2 - img.get_width() // 2, HEIGHT // 2 + dy))


# -------------------- Main loop --------------------

def run(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    # Resolve seed: None -> use SEED_DEFAULT; -1 -> random
    if args.seed is None:
        launch_seed = SEED_DEFAULT
    elif args.seed == -1:
        launch_seed = None
    else:
        launch_seed = args.seed

    pygame.init()
    pygame.display.set_caption("Vertex Run")
    win_size = (int(WIDTH * args.scale), int(HEIGHT * args.scale))
    window = pygame.display.set_mode(win_size)
    field = pygame.Surface((WIDTH, HEIGHT))
    clock = pygame.time.Clock()
    font = pygame.font.SysFont("jetbrainsmono", 32)
    big_font = pygame.font.SysFont("jetbrainsmono", 72, bold=True)

    state = RunState(records=RecordBook(JsonFileStore(args.save)))

    def begin(seed_arg):
        for ev in state.start(seed_arg):
            logger.debug("event: %s", ev.value)

    while True:
        clock.tick(FPS)

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                pygame.quit(); sys.exit()
            if event.type == pygame.KEYDOWN:
                if event.key == K_ESCAPE:
                    pygame.quit(); sys.exit()
                if event.key == K_SPACE:
                    state.jump()
                if event.key == K_RETURN and state.phase is RunPhase.IDLE:
                    begin(launch_seed)
                if event.key == K_r and state.phase is not RunPhase.IDLE:
                    # Same seed when one was given, otherwise a fresh level
                    begin(launch_seed)
                if event.key == K_n:
                    begin(None)
            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                state.jump()

        result = state.step()
        for ev in result.events:
            logger.debug("event: %s", ev.value)

        snap = state.snapshot()
        draw_world(field, snap)
        draw_hud(field, snap, state.seed, font, big_font)
        pygame.transform.smoothscale(field, win_size, window)
        pygame.display.flip()


if __name__ == "__main__":
    run()
