SCREEN_HEIGHT = 32
SCREEN_WIDTH = 64


# ******************** DISPLAY SECTION
class Display:
    """
    the monochrome frame buffer: one int per pixel, 1 if ON and 0 if OFF
    it's only changed by the CLS and DRW instructions, the render sink just reads it
    """
    def __init__(self, w=SCREEN_WIDTH, h=SCREEN_HEIGHT):
        self.w, self.h = w, h
        self.buffer = [0] * h * w
        self.dirty = False      # set whenever the buffer changes, cleared by the renderer

    def __getitem__(self, xy):
        """pixel at display[x, y], coordinates wrap; for inspection, the interpreter only draws"""
        x, y = xy
        return self.buffer[(y % self.h) * self.w + (x % self.w)]

    def __str__(self):
        return "\n".join("".join("#" if p else "." for p in row) for row in self.snapshot())

    def clear(self):
        self.buffer = [0] * self.h * self.w
        self.dirty = True

    def snapshot(self):
        """read-only copy of the buffer, one tuple per row"""
        return tuple(tuple(self.buffer[y*self.w:(y+1)*self.w]) for y in range(self.h))

    def lit(self):
        """number of pixels currently ON, for inspection and debugging"""
        return sum(self.buffer)

    def draw_sprite(self, x, y, sprite):
        """
        XOR the sprite bytes onto the buffer with the top-left corner at (x, y)
        each byte is a row, most significant bit first, and every pixel wraps
        around the screen edges on its own
        return True if any pixel that was ON has been turned OFF
        """
        collision = False
        for i, sprite_byte in enumerate(sprite):
            y_coordinate = (y + i) % self.h
            for j in range(8):
                bit = (sprite_byte >> (7 - j)) & 0x1
                if not bit:
                    continue
                x_coordinate = (x + j) % self.w
                pos = y_coordinate * self.w + x_coordinate
                # the only case when a pixel gets erased is when it was ON and is turned ON again
                if self.buffer[pos] == 1:
                    collision = True
                self.buffer[pos] ^= 1
        self.dirty = True
        return collision
