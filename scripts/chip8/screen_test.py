import unittest
from chip8.display import Display
from chip8.screen import Screen, BLUE, LIGHT_BLUE
import pygame


class TestScreen(unittest.TestCase):
    def setUp(self):
        # an off-screen surface, no window needed
        self.screen = Screen(s=2, surface=pygame.Surface((64 * 2, 32 * 2)))

    def test_render_paints_lit_pixels(self):
        d = Display()
        d.draw_sprite(62, 0, [0xC0])
        self.assertTrue(self.screen.render(d))
        self.assertEqual(self.screen.read_pixel(62, 0), 1)
        self.assertEqual(self.screen.read_pixel(63, 0), 1)
        self.assertEqual(self.screen.read_pixel(0, 0), 0)
        self.assertFalse(d.dirty)

    def test_render_skips_clean_buffer(self):
        d = Display()
        d.dirty = False
        self.assertFalse(self.screen.render(d))

    def test_colors(self):
        self.screen.write_pixel(1, 1, 1)
        self.assertEqual(self.screen.surface.get_at((2, 2)), LIGHT_BLUE)
        self.screen.write_pixel(1, 1, 0)
        self.assertEqual(self.screen.surface.get_at((2, 2)), BLUE)


if __name__ == "__main__":
    unittest.main()
