"""
pygame front end: draws the surfaced Step and pumps the stepper's
FrameScheduler from the render loop.

Keys: SPACE play/pause, RIGHT single step, R reset, N new array,
1-9 slower..faster, 0 burst speed, ESC quit.
"""

import logging

import pygame

from . import settings as cfg
from .catalog import get_algorithm
from .dataset import generate
from .errors import InvalidTransitionError
from .scheduling import FrameScheduler
from .session import SessionController
from .steps import HeapAux, RangeAux
from .stepper import Stepper, StepperState

logger = logging.getLogger(__name__)

# delay in ms per number key; 0 drops into burst mode
SPEED_KEYS = {
    pygame.K_1: 500, pygame.K_2: 300, pygame.K_3: 200, pygame.K_4: 120, pygame.K_5: 80,
    pygame.K_6: 40,  pygame.K_7: 20,  pygame.K_8: 10,  pygame.K_9: 5,   pygame.K_0: 0,
}

# ============================================================
# ======================= COLOR / DRAW =======================
# ============================================================


def value_to_color(value, max_value):
    r = value / max_value if max_value else 0.0
    if r < 0.25: return (0, int(255 * r * 4), 255)
    if r < 0.5:  return (0, 255, int(255 * (1 - (r - 0.25) * 4)))
    if r < 0.75: return (int(255 * (r - 0.5) * 4), 255, 0)
    return (255, int(255 * max(0.0, 1 - (r - 0.75) * 4)), 0)


def bar_color(i, step, top):
    if i in step.swapping:       return cfg.SWAP_COLOR
    if i in step.comparing:      return cfg.COMPARE_COLOR
    if i in step.sorted_indices: return cfg.SORTED_COLOR
    return value_to_color(step.sequence[i], top)


def draw_step(screen, step, label="", fonts=None, stats=None):
    w, h = screen.get_size()
    screen.fill(cfg.BACKGROUND_COLOR)
    n = len(step.sequence)
    base = h - 20
    span = h - 90
    if n:
        top = max(step.sequence) or 1
        bw = w / n
        aux = step.aux
        if isinstance(aux, RangeAux):
            pygame.draw.rect(screen, cfg.RANGE_COLOR,
                             (aux.start * bw, 70, (aux.end - aux.start + 1) * bw, base - 70))
        for i, v in enumerate(step.sequence):
            bh = max(1, v / top * span)
            pygame.draw.rect(screen, bar_color(i, step, top),
                             (i * bw, base - bh, max(1, bw - cfg.BAR_SPACING), bh))
        if isinstance(aux, RangeAux) and aux.pivot is not None:
            x = aux.pivot * bw + bw / 2
            pygame.draw.polygon(screen, cfg.PIVOT_COLOR, [(x, base + 4), (x - 5, base + 14), (x + 5, base + 14)])
        if isinstance(aux, HeapAux):
            x = aux.heap_size * bw
            pygame.draw.line(screen, cfg.PIVOT_COLOR, (x, 70), (x, base), 1)
    if fonts:
        if label:
            screen.blit(fonts['mid'].render(label, True, cfg.UI_TEXT), (12, 10))
        if step.description:
            screen.blit(fonts['small'].render(step.description, True, cfg.UI_SUBTEXT), (12, 36))
        if stats is not None:
            txt = f"Comparisons: {stats.comparisons}   Swaps: {stats.swaps}   Time: {stats.elapsed:.1f}s"
            info = fonts['mono_sm'].render(txt, True, cfg.UI_SUBTEXT)
            screen.blit(info, (w - info.get_width() - 12, 14))


def build_fonts():
    def tf(names, sz):
        for n in names:
            try:
                return pygame.font.SysFont(n, sz)
            except (OSError, pygame.error):
                pass
        return pygame.font.SysFont(None, sz)
    mono = ["Consolas", "Courier New", "Lucida Console"]
    sans = ["Segoe UI", "Tahoma", "Arial"]
    return dict(mid=tf(sans, 17), small=tf(sans, 13), mono_sm=tf(mono, 12))

# ============================================================
# ========================= MAIN LOOP ========================
# ============================================================


def handle_key(stepper, key, new_values):
    """Apply one key press. Returns False when the window should close."""
    if key == pygame.K_ESCAPE:
        return False
    try:
        if key == pygame.K_SPACE:
            if stepper.state is StepperState.RUNNING:
                stepper.pause()
            elif stepper.state is not StepperState.FINISHED:
                stepper.play()
        elif key == pygame.K_RIGHT:
            stepper.step()
        elif key == pygame.K_r:
            stepper.reset()
        elif key == pygame.K_n:
            stepper.reset(new_values())
        elif key in SPEED_KEYS:
            stepper.set_delay(SPEED_KEYS[key])
    except InvalidTransitionError as e:
        logger.info("Ignored key: %s", e)
    return True


def run_visualizer(algorithm="bubble", size=None, delay_ms=None, settings=None):
    settings = settings or cfg.Settings()
    info = get_algorithm(algorithm)
    size = size or settings.array_size

    def new_values():
        return generate(size, settings.value_range)

    pygame.init()
    screen = pygame.display.set_mode((cfg.WINDOW_WIDTH, cfg.WINDOW_HEIGHT))
    pygame.display.set_caption(f"SuperSorter - {info.name}")
    fonts = build_fonts()

    controller = SessionController(info, new_values())
    scheduler = FrameScheduler()
    stepper = Stepper(controller, scheduler,
                      delay_ms=settings.delay_ms if delay_ms is None else delay_ms,
                      burst_threshold_ms=settings.burst_threshold_ms,
                      frame_budget_ms=settings.frame_budget_ms)
    shown = {"step": controller.current, "stats": controller.stats()}
    stepper.subscribe(lambda step, stats: shown.update(step=step, stats=stats))

    clock = pygame.time.Clock()
    running = True
    while running:
        clock.tick(settings.fps)
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT:
                running = False
            elif ev.type == pygame.KEYDOWN:
                running = handle_key(stepper, ev.key, new_values) and running
        scheduler.pump()
        label = info.name + ("  [SORTED]" if stepper.state is StepperState.FINISHED else "")
        stats = controller.stats() if controller.session else shown["stats"]
        draw_step(screen, shown["step"], label, fonts, stats)
        pygame.display.flip()
    stepper.reset()
    pygame.quit()
