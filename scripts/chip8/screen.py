import os
os.environ["PYGAME_HIDE_SUPPORT_PROMPT"] = "no welcome message"   # this env var disable pygame's welcome message when imported
import pygame

from .display import SCREEN_WIDTH, SCREEN_HEIGHT

SCALE = 15
BLUE = pygame.Color(80,69,155,255)
LIGHT_BLUE = pygame.Color(136,126,203,255)


# ******************** I/O SECTION
class Screen:
    """pygame surface showing the CHIP-8 display buffer, every CHIP-8 pixel is a scale x scale square"""
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT, s=SCALE, bg_color=BLUE, fg_color=LIGHT_BLUE, surface=None):
        self.w, self.h, self.scale = w, h, s
        self.background = bg_color
        self.foreground = fg_color
        self.surface = surface if surface is not None else pygame.display.set_mode(
            (w * self.scale, h * self.scale),
        )
        self.surface.fill(self.background)

    def read_pixel(self, x, y):
        """
        return 1 if pixel is ON, return 0 if pixel is OFF
        the emulator never reads the surface back, it exists to inspect what has been painted
        """
        p = self.surface.get_at((x * self.scale, y * self.scale))
        return 0 if p == self.background else 1

    def write_pixel(self, x, y, color):
        """
        set a pixel on the screen, being it a foreground pixel or a background one
        the change won't be immediatly visible because it'll require a call to the static method refresh
        """
        pygame.draw.rect(
            self.surface,
            self.background if color==0 else self.foreground,
            (x * self.scale, y * self.scale, self.scale, self.scale)
        )

    def render(self, display):
        """paint the display buffer on the surface, only if it changed since the last render"""
        if not display.dirty:
            return False
        self.surface.fill(self.background)
        for y, row in enumerate(display.snapshot()):
            for x, pixel in enumerate(row):
                if pixel:
                    self.write_pixel(x, y, 1)
        display.dirty = False
        return True

    @staticmethod
    def refresh():
        pygame.display.flip()
